# Processing module - duration parsing, matching, slide inventory, plan assembly
from .duration import parse_duration_to_seconds, format_seconds
from .similarity import edit_distance, title_distance
from .matcher import CandidatePool, MatchEngine, MatchResult, flatten_curriculum, MATCH_TOLERANCE_SECONDS
from .slides import SlideAllocation, SlideInventory, SlideRequirements, SlideValidator, SlotAllocator
from .plan_builder import MasterPlanBuilder, save_master_plan, load_master_plan

__all__ = [
    'parse_duration_to_seconds',
    'format_seconds',
    'edit_distance',
    'title_distance',
    'CandidatePool',
    'MatchEngine',
    'MatchResult',
    'flatten_curriculum',
    'MATCH_TOLERANCE_SECONDS',
    'SlideAllocation',
    'SlideInventory',
    'SlideRequirements',
    'SlideValidator',
    'SlotAllocator',
    'MasterPlanBuilder',
    'save_master_plan',
    'load_master_plan',
]
