"""Configuration loading for fragexport (.fragexport.yml)."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

import yaml

from fragments.errors import ConfigError
from scanner.discovery import DEFAULT_EXCLUDE_DIRS, DEFAULT_EXTENSIONS

CONFIG_FILENAME = ".fragexport.yml"

PARSE_ERROR_MODES = ("fail", "skip")
DUPLICATE_MODES = ("warn", "error")


@dataclass
class ExportSettings:
    """Settings for a fragment export run."""

    extensions: Set[str] = field(default_factory=lambda: set(DEFAULT_EXTENSIONS))
    exclude_dirs: Set[str] = field(default_factory=lambda: set(DEFAULT_EXCLUDE_DIRS))
    max_depth: Optional[int] = None
    on_parse_error: str = "fail"
    duplicates: str = "warn"

    @property
    def skip_invalid(self) -> bool:
        return self.on_parse_error == "skip"


def load_settings(root: Path, config_path: Optional[Path] = None) -> ExportSettings:
    """
    Load settings from a config file.

    Args:
        root: Scan root; ``.fragexport.yml`` is looked up there when
            ``config_path`` is not given.
        config_path: Explicit config file. It must exist.

    Returns:
        ExportSettings, with defaults for anything the file does not set.

    Raises:
        ConfigError: If the file is missing (explicit path only) or malformed.
    """
    if config_path is None:
        config_file = root / CONFIG_FILENAME
        if not config_file.is_file():
            return ExportSettings()
    else:
        config_file = config_path.expanduser()
        if not config_file.is_file():
            raise ConfigError(f"Config file not found: {config_file}")

    data = _read_config(config_file)
    return settings_from_dict(data, source=config_file.name)


def settings_from_dict(data: Dict[str, Any], source: str = CONFIG_FILENAME) -> ExportSettings:
    """Build settings from an already-loaded mapping. Unknown keys are ignored."""
    settings = ExportSettings()

    extensions = _as_str_list(data.get("extensions"), "extensions", source)
    if extensions:
        settings.extensions = {normalize_extension(ext) for ext in extensions}

    exclude_dirs = _as_str_list(data.get("exclude_dirs"), "exclude_dirs", source)
    settings.exclude_dirs = set(DEFAULT_EXCLUDE_DIRS) | set(exclude_dirs)

    max_depth = data.get("max_depth")
    if max_depth is not None:
        if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0:
            raise ConfigError(f"{source}: 'max_depth' must be a non-negative integer")
        settings.max_depth = max_depth

    settings.on_parse_error = _as_choice(
        data.get("on_parse_error"), "on_parse_error", PARSE_ERROR_MODES, "fail", source
    )
    settings.duplicates = _as_choice(
        data.get("duplicates"), "duplicates", DUPLICATE_MODES, "warn", source
    )
    return settings


def normalize_extension(ext: str) -> str:
    """Lowercase an extension and make sure it starts with a dot."""
    ext = ext.strip().lower()
    if not ext.startswith("."):
        ext = "." + ext
    return ext


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}

    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _as_str_list(value: Any, key: str, source: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    raise ConfigError(f"{source}: '{key}' must be a string or a list of strings")


def _as_choice(value: Any, key: str, choices: tuple, default: str, source: str) -> str:
    if value is None:
        return default
    if value not in choices:
        raise ConfigError(f"{source}: '{key}' must be one of {', '.join(choices)}")
    return value
