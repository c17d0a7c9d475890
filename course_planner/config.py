"""Configuration loader for the Course Planner.

Loads configuration from:
1. Default values (hardcoded)
2. config.yaml file (if exists)
3. .env file and environment variables (highest priority)

Environment variables use the pattern: CPL_SECTION__KEY
Examples:
    CPL_PROBE__FFPROBE_PATH=/usr/local/bin/ffprobe
    CPL_PROBE__MAX_WORKERS=8
    CPL_LOGGING__LEVEL=DEBUG
"""

import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

from .logging_config import get_logger
from .exceptions import ConfigurationError

logger = get_logger('config')

ENV_PREFIX = "CPL_"


@dataclass
class ProbeConfig:
    """Duration probe configuration."""
    ffprobe_path: str = "ffprobe"
    timeout_seconds: float = 60.0
    max_workers: Optional[int] = None  # None or 0: one worker per file


@dataclass
class VideoConfig:
    """Local video discovery configuration."""
    extensions: list[str] = field(default_factory=lambda: [
        "mp4", "mov", "avi", "mkv", "flv", "wmv", "mpg", "mpeg", "m4v",
    ])


@dataclass
class LayoutConfig:
    """Names of the per-course project directories."""
    raw_videos_dir: str = "_01_RAW_VIDEOS"
    slides_dir: str = "_02_SLIDES"
    project_data_dir: str = "_03_PROJECT_DATA"
    premiere_projects_dir: str = "_04_PREMIERE_PROJECTS"


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    file: Optional[str] = None
    max_bytes: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5
    json_format: bool = False


@dataclass
class Config:
    """Main configuration container."""
    probe: ProbeConfig = field(default_factory=ProbeConfig)
    videos: VideoConfig = field(default_factory=VideoConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Searched in this order when no explicit path is given
CONFIG_FILE_NAMES = ("config.yaml", "config.yml")
PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _merge(base: dict, overrides: dict) -> dict:
    """Merge ``overrides`` into ``base`` in place, section by section."""
    for key, value in overrides.items():
        if isinstance(base.get(key), dict) and isinstance(value, dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def _coerce(key: str, original, value: str):
    """Convert an environment string to the type of the default value."""
    try:
        if isinstance(original, bool):
            return value.lower() in ('true', '1', 'yes')
        if isinstance(original, int):
            return int(value)
        if isinstance(original, float):
            return float(value)
        if isinstance(original, list):
            return [item.strip() for item in value.split(',') if item.strip()]
    except ValueError:
        raise ConfigurationError(
            f"Invalid value for {key}: '{value}'", config_key=key
        ) from None
    if original is None and value.strip().isdigit():
        return int(value)
    return value


def _env_overrides(config_dict: dict) -> dict:
    """Overlay CPL_SECTION__KEY variables onto the config dictionary."""
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue

        *sections, leaf = name[len(ENV_PREFIX):].lower().split("__")
        if not sections:
            continue

        target = config_dict
        for section in sections:
            target = target.setdefault(section, {})
            if not isinstance(target, dict):
                raise ConfigurationError(f"{name} does not name a config section", config_key=name)
        target[leaf] = _coerce(name, target.get(leaf), raw)
        logger.debug(f"Environment override {name} -> {'.'.join(sections + [leaf])}")

    return config_dict


def _section(cls, config_dict: dict, name: str):
    """Build one config section, ignoring unknown keys."""
    values = config_dict.get(name) or {}
    if not isinstance(values, dict):
        raise ConfigurationError(f"Config section '{name}' must be a mapping", config_key=name)
    return cls(**{k: v for k, v in values.items() if k in cls.__dataclass_fields__})


def _find_config_file() -> Optional[Path]:
    """First config file in the working directory, then beside the package."""
    for directory in (Path.cwd(), PROJECT_ROOT):
        for file_name in CONFIG_FILE_NAMES:
            candidate = directory / file_name
            if candidate.is_file():
                return candidate
    return None


def _read_yaml(path: Path) -> dict:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse config file '{path}': {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file '{path}' must contain a mapping")
    return data


def load_config(config_path: Optional[str] = None) -> Config:
    """Build a Config from defaults, an optional YAML file and the environment.

    Args:
        config_path: Explicit YAML file. When omitted, config.yaml or
            config.yml is looked up in the working directory and the
            project root.

    Raises:
        ConfigurationError: Malformed YAML or an override of the wrong type
    """
    load_dotenv()

    config_dict = asdict(Config())

    path = Path(config_path) if config_path else _find_config_file()
    if path is not None and path.exists():
        _merge(config_dict, _read_yaml(path))
        logger.debug(f"Read configuration file {path}")

    _env_overrides(config_dict)

    return Config(
        probe=_section(ProbeConfig, config_dict, 'probe'),
        videos=_section(VideoConfig, config_dict, 'videos'),
        layout=_section(LayoutConfig, config_dict, 'layout'),
        logging=_section(LoggingConfig, config_dict, 'logging'),
    )


_config: Optional[Config] = None


def get_config() -> Config:
    """Process-wide Config, loaded on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(config_path: Optional[str] = None) -> Config:
    """Discard the cached Config and load it again."""
    global _config
    _config = load_config(config_path)
    return _config
