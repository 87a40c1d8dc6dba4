"""Configuration loading for kado-ai (settings file and .kado.yml)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml
from dotenv import dotenv_values

from .errors import ConfigError

SETTINGS_FILENAME = ".kdconfig"
PROJECT_FILENAME = ".kado.yml"

API_KEY_SETTING = "AI_API_KEY"
MODEL_SETTING = "AI_MODEL"
BACKEND_SETTING = "AI_CLIENT"
_REQUIRED_SETTINGS = (API_KEY_SETTING, MODEL_SETTING, BACKEND_SETTING)

DEFAULT_TERRAFORM_EXTENSIONS: Tuple[str, ...] = (".tf", ".rego")
DEFAULT_ANSIBLE_EXTENSIONS: Tuple[str, ...] = (".yml", ".yaml", ".rego")
DEFAULT_PLAN_FILE = "plan.json"


@dataclass(frozen=True)
class AIBackendConfig:
    """Credentials and model selection for one AI backend."""

    api_key: str = field(repr=False)
    model: str
    backend: str

    def __post_init__(self) -> None:
        missing = [
            name
            for name, value in (
                ("api_key", self.api_key),
                ("model", self.model),
                ("backend", self.backend),
            )
            if not value
        ]
        if missing:
            raise ConfigError(f"AI backend settings are incomplete: missing {', '.join(missing)}")


@dataclass(frozen=True)
class PatternConfig:
    """Extra redaction pattern declared in .kado.yml."""

    name: str
    pattern: str
    replacement: str = "[REDACTED]"


@dataclass
class ScanConfig:
    """Directory scan settings."""

    terraform_extensions: Tuple[str, ...] = DEFAULT_TERRAFORM_EXTENSIONS
    ansible_extensions: Tuple[str, ...] = DEFAULT_ANSIBLE_EXTENSIONS
    exclude_dirs: Tuple[str, ...] = ()
    plan_file: str = DEFAULT_PLAN_FILE


@dataclass
class ProjectConfig:
    """Represents the per-project settings defined in .kado.yml."""

    root: Path
    scan: ScanConfig = field(default_factory=ScanConfig)
    extra_patterns: List[PatternConfig] = field(default_factory=list)


def default_settings_path() -> Path:
    """Return the conventional settings location in the user's home directory."""
    return Path.home() / SETTINGS_FILENAME


def load_settings(path: Path) -> Dict[str, str]:
    """Read a KEY=VALUE settings file, ignoring blank and comment lines."""
    settings_path = Path(path).expanduser()
    if not settings_path.is_file():
        raise ConfigError(f"Settings file not found: {settings_path}")
    try:
        values = dotenv_values(settings_path, interpolate=False, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read settings file {settings_path}: {exc}") from exc
    return {key: value.strip() for key, value in values.items() if value is not None}


def load_backend_config(path: Path) -> AIBackendConfig:
    """Load the AI backend credentials from a settings file."""
    settings = load_settings(path)
    missing = [key for key in _REQUIRED_SETTINGS if not settings.get(key)]
    if missing:
        raise ConfigError(
            f"{', '.join(_REQUIRED_SETTINGS)} must be set in config (missing: {', '.join(missing)})"
        )
    return AIBackendConfig(
        api_key=settings[API_KEY_SETTING],
        model=settings[MODEL_SETTING],
        backend=settings[BACKEND_SETTING],
    )


def load_project_config(iac_path: Path) -> ProjectConfig:
    """Load .kado.yml from the IaC root, falling back to defaults when absent."""
    root = Path(iac_path).expanduser()
    config_file = root / PROJECT_FILENAME
    if not config_file.is_file():
        return ProjectConfig(root=root)

    data = _read_project_file(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{PROJECT_FILENAME} must contain a mapping at the root")

    scan_data = _as_dict(data.get("scan"))
    scan = ScanConfig()
    if scan_data:
        terraform = _as_str_tuple(scan_data.get("terraform_extensions"))
        ansible = _as_str_tuple(scan_data.get("ansible_extensions"))
        plan_file = _as_str(scan_data.get("plan_file"))
        scan = ScanConfig(
            terraform_extensions=terraform or DEFAULT_TERRAFORM_EXTENSIONS,
            ansible_extensions=ansible or DEFAULT_ANSIBLE_EXTENSIONS,
            exclude_dirs=_as_str_tuple(scan_data.get("exclude_dirs")),
            plan_file=plan_file or DEFAULT_PLAN_FILE,
        )

    redaction_data = _as_dict(data.get("redaction"))
    extra_patterns = _parse_patterns(redaction_data.get("extra_patterns"))

    return ProjectConfig(root=root, scan=scan, extra_patterns=extra_patterns)


def _read_project_file(path: Path) -> Any:
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
    return loaded or {}


def _parse_patterns(value: Any) -> List[PatternConfig]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError("redaction.extra_patterns must be a list")

    patterns: List[PatternConfig] = []
    for index, entry in enumerate(value):
        if not isinstance(entry, dict):
            raise ConfigError(f"redaction.extra_patterns[{index}] must be a mapping")
        pattern = _as_str(entry.get("pattern"))
        if not pattern:
            raise ConfigError(f"redaction.extra_patterns[{index}] is missing 'pattern'")
        try:
            re.compile(pattern)
        except re.error as exc:
            raise ConfigError(
                f"redaction.extra_patterns[{index}] is not a valid regular expression: {exc}"
            ) from exc
        patterns.append(
            PatternConfig(
                name=_as_str(entry.get("name")) or f"extra_{index}",
                pattern=pattern,
                replacement=_as_str(entry.get("replacement")) or "[REDACTED]",
            )
        )
    return patterns


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_str_tuple(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, Sequence):
        return tuple(str(item) for item in value if isinstance(item, (str, int, float)))
    return ()


__all__ = [
    "AIBackendConfig",
    "ConfigError",
    "PatternConfig",
    "ProjectConfig",
    "ScanConfig",
    "default_settings_path",
    "load_backend_config",
    "load_project_config",
    "load_settings",
]
