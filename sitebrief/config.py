"""Configuration loading for sitebrief (.sitebrief.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .constants import CONFIG_FILENAME, DEFAULT_ARTIFACTS, DEFAULT_GRAPH_FILENAME, DEFAULT_OUTPUT_DIR
from .errors import ConfigError
from .renderers.narrative import NarrativeOptions


@dataclass
class SiteBriefConfig:
    """Represents the settings defined in .sitebrief.yml."""

    root: Path
    graph_path: Path
    output_dir: Path
    root_id: Optional[str] = None
    narrative: NarrativeOptions = field(default_factory=NarrativeOptions)
    artifacts: List[str] = field(default_factory=lambda: list(DEFAULT_ARTIFACTS))
    templates_dir: Optional[Path] = None


def default_config(root: Path) -> SiteBriefConfig:
    root = root.resolve()
    return SiteBriefConfig(
        root=root,
        graph_path=root / DEFAULT_GRAPH_FILENAME,
        output_dir=root / DEFAULT_OUTPUT_DIR,
    )


def load_config(config_path: Path) -> SiteBriefConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return default_config(root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = default_config(root)

    graph = _as_str(data.get("graph"))
    if graph:
        config.graph_path = root / graph
    output_dir = _as_str(data.get("output_dir"))
    if output_dir:
        config.output_dir = root / output_dir
    config.root_id = _as_str(data.get("root"))

    narrative_data = _as_dict(data.get("narrative"))
    if narrative_data:
        defaults = NarrativeOptions()
        config.narrative = NarrativeOptions(
            include_auth=_with_default(_as_bool(narrative_data.get("include_auth")), defaults.include_auth),
            include_components=_with_default(
                _as_bool(narrative_data.get("include_components")), defaults.include_components
            ),
            include_flows=_with_default(_as_bool(narrative_data.get("include_flows")), defaults.include_flows),
        )

    if "artifacts" in data:
        artifacts = _as_str_list(data.get("artifacts"))
        unknown = [name for name in artifacts if name not in DEFAULT_ARTIFACTS]
        if unknown:
            raise ConfigError(f"Unknown artifacts in {CONFIG_FILENAME}: {', '.join(unknown)}")
        config.artifacts = artifacts

    templates_dir = _as_str(data.get("templates_dir"))
    if templates_dir:
        config.templates_dir = root / templates_dir

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.suffix not in {".yml", ".yaml"}:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _with_default(value: Optional[bool], default: bool) -> bool:
    return default if value is None else value


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["SiteBriefConfig", "default_config", "load_config"]
