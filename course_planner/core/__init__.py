# Core module - project layout and the planning service
