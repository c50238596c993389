"""
lister.config

YAML configuration for the ``file_list`` task.

Layout::

    logging:
      level: INFO
      use_rich: auto
      log_dir: logs          # relative paths anchor under output_dir
      file_prefix: file_list
    tasks:
      file_list:
        roots: [/srv/media]
        extensions: [jpg, png]
        depth: 0
        output_dir: ./reports
        base_name: file_list
        batch_size: 500
        skip_unreadable: no
        full_path: no

A file without a ``tasks`` section is read as a bare ``file_list`` body.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

import yaml

from common.base.file_io import read_yaml
from common.base.logging import normalize_level

from .errors import ConfigError
from .matcher import build_matcher

ConfigDict = Dict[str, Any]

TASK_NAME = "file_list"
DEFAULT_CONFIG_FILENAME = "config.yaml"
LOGGING_SECTION_KEY = "logging"
TASKS_SECTION_KEY = "tasks"

TASK_SCHEMA: Dict[str, Iterable[str]] = {
    "required": ["roots"],
    "optional": [
        "extensions",
        "depth",
        "output_dir",
        "base_name",
        "batch_size",
        "skip_unreadable",
        "full_path",
    ],
}

FIELD_ALIASES = {
    "root": "roots",
    "ext": "extensions",
    "output": "output_dir",
}

SINGLE_PATH_FIELDS = {"output_dir"}
MULTI_PATH_FIELDS = {"roots"}
BOOLEAN_FIELDS = {"skip_unreadable", "full_path"}
NON_NEGATIVE_INT_FIELDS = {"depth", "batch_size"}
LOGGING_ALLOWED_KEYS = {"level", "use_rich", "log_dir", "file_prefix"}

YES_VALUES = {"1", "true", "yes", "y", "on"}
NO_VALUES = {"0", "false", "no", "n", "off"}


def default_config_candidates(explicit: str | Path | None = None) -> List[Path]:
    candidates = []
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.append(Path.cwd() / "configs" / DEFAULT_CONFIG_FILENAME)
    return candidates


def load_config(path: str | Path) -> Mapping[str, Any]:
    cfg_path = Path(path).expanduser()
    if not cfg_path.exists():
        raise ConfigError(f"Configuration file not found: {cfg_path}")

    try:
        data = read_yaml(cfg_path)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {cfg_path}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ConfigError(f"Configuration root must be a mapping in {cfg_path}")
    return data


def load_task_config(config_path: str | Path) -> ConfigDict:
    """
    Load and validate the ``file_list`` task from ``config_path``.

    Returns a dict with normalized values plus ``__logging__`` (merged
    logging settings) and ``__config_path__``.

    Raises:
        ConfigError: On a missing file, unknown or missing keys, or values
            of the wrong type.
    """
    resolved_path = Path(config_path).expanduser()
    root_config = load_config(resolved_path)
    task_config = _apply_aliases(_extract_task_config(root_config, resolved_path))

    required = set(TASK_SCHEMA["required"])
    allowed_keys = required | set(TASK_SCHEMA["optional"])

    missing = [key for key in sorted(required) if not task_config.get(key)]
    if missing:
        raise ConfigError(
            f"Configuration '{resolved_path}' missing required fields for task '{TASK_NAME}': {', '.join(missing)}"
        )

    unexpected = sorted(key for key in task_config if key not in allowed_keys)
    if unexpected:
        raise ConfigError(
            f"Configuration '{resolved_path}' contains unsupported keys for task '{TASK_NAME}': {', '.join(unexpected)}"
        )

    normalized: ConfigDict = {}
    for key, value in task_config.items():
        if key in SINGLE_PATH_FIELDS:
            normalized[key] = _normalize_single_path(value, key, resolved_path)
        elif key in MULTI_PATH_FIELDS:
            normalized[key] = _normalize_multi_path(value, key, resolved_path)
        elif key in BOOLEAN_FIELDS:
            normalized[key] = _coerce_yes_no(value, key, resolved_path)
        elif key in NON_NEGATIVE_INT_FIELDS:
            normalized[key] = None if value is None or value == "" else _coerce_int(value, key, resolved_path)
        elif key == "extensions":
            normalized[key] = _normalize_extensions(value, resolved_path)
        else:
            normalized[key] = value

    normalized["__config_path__"] = str(resolved_path)
    logging_cfg = _extract_logging_settings(root_config, resolved_path)
    normalized["__logging__"] = _apply_logging_defaults(logging_cfg, normalized.get("output_dir"))
    return normalized


def _extract_task_config(root: Mapping[str, Any], config_path: Path) -> ConfigDict:
    if TASKS_SECTION_KEY not in root:
        return {key: value for key, value in root.items() if key != LOGGING_SECTION_KEY}

    tasks_section = root.get(TASKS_SECTION_KEY) or {}
    if not isinstance(tasks_section, Mapping):
        raise ConfigError(f"'{TASKS_SECTION_KEY}' section must be a mapping in {config_path}")
    if TASK_NAME not in tasks_section:
        raise ConfigError(
            f"Configuration '{config_path}' missing task '{TASK_NAME}' under '{TASKS_SECTION_KEY}' section"
        )
    payload = tasks_section[TASK_NAME]
    if not isinstance(payload, Mapping):
        raise ConfigError(f"Task '{TASK_NAME}' entry must be a mapping in {config_path}")
    return dict(payload)


def _apply_aliases(config: Mapping[str, Any]) -> ConfigDict:
    return {FIELD_ALIASES.get(key, key): value for key, value in config.items()}


def _normalize_single_path(value: Any, field: str, config_path: Path) -> str:
    if value is None or value == "":
        raise ConfigError(f"Configuration '{config_path}' field '{field}' must be a path")
    return str(Path(str(value)).expanduser())


def _normalize_multi_path(value: Any, field: str, config_path: Path) -> List[str]:
    values = list(value) if isinstance(value, (list, tuple)) else [value]
    if not values or any(item is None or item == "" for item in values):
        raise ConfigError(f"Configuration '{config_path}' field '{field}' must list at least one path")
    return [str(Path(str(item)).expanduser()) for item in values]


def _coerce_int(value: Any, field: str, config_path: Path) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"Configuration '{config_path}' field '{field}' must be an integer.")
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Configuration '{config_path}' field '{field}' must be an integer.") from exc
    if number < 0:
        raise ConfigError(f"Configuration '{config_path}' field '{field}' must not be negative.")
    return number


def _coerce_yes_no(value: Any, field: str, config_path: Path) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    text = str(value).strip().lower()
    if text in YES_VALUES:
        return True
    if text in NO_VALUES:
        return False
    raise ConfigError(f"Configuration '{config_path}' field '{field}' must be yes/no (got {value!r}).")


def _normalize_extensions(value: Any, config_path: Path) -> List[str]:
    if isinstance(value, str):
        items: List[Any] = [token.strip() for token in value.split(",") if token.strip()]
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        raise ConfigError(
            f"Configuration '{config_path}' field 'extensions' must be a list or comma-separated string."
        )
    # YAML reads an extension such as ``264`` as an int; keep it as text.
    items = [str(item) if isinstance(item, int) and not isinstance(item, bool) else item for item in items]
    return list(build_matcher(items).extensions)


def _normalize_use_rich(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in YES_VALUES:
            return True
        if lowered in NO_VALUES:
            return False
    return None


def _extract_logging_settings(root: Mapping[str, Any], config_path: Path) -> Dict[str, Any]:
    section = root.get(LOGGING_SECTION_KEY) or {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"'{LOGGING_SECTION_KEY}' section must be a mapping in {config_path}")
    invalid = sorted(key for key in section if key not in LOGGING_ALLOWED_KEYS)
    if invalid:
        raise ConfigError(
            f"'{LOGGING_SECTION_KEY}' section contains unsupported keys in {config_path}: {', '.join(invalid)}"
        )
    return dict(section)


def _apply_logging_defaults(logging_cfg: Mapping[str, Any], output_dir: Optional[str]) -> Dict[str, Any]:
    cfg: Dict[str, Any] = {
        "level": normalize_level(logging_cfg.get("level")),
        "use_rich": _normalize_use_rich(logging_cfg.get("use_rich")),
        "log_dir": None,
        "file_prefix": logging_cfg.get("file_prefix") or TASK_NAME,
    }
    log_dir_value = logging_cfg.get("log_dir")
    if log_dir_value:
        path = Path(str(log_dir_value)).expanduser()
        if not path.is_absolute() and output_dir:
            path = Path(output_dir) / path
        cfg["log_dir"] = str(path.resolve())
    return cfg
