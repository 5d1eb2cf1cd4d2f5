"""Configuration loading for gopkgdoc (.gopkgdoc.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

CONFIG_FILENAME = ".gopkgdoc.yml"
DEFAULT_TAB_WIDTH = 4


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


def default_src_root(environ: Mapping[str, str] | None = None) -> Path:
    """Return the Go source root: ``$GOPATH/src`` or ``~/go/src``."""
    env = os.environ if environ is None else environ
    gopath = env.get("GOPATH", "").split(os.pathsep)[0]
    if gopath:
        return Path(gopath).expanduser() / "src"
    return Path.home() / "go" / "src"


@dataclass
class RenderConfig:
    """Layout settings for rendered declarations."""

    tab_width: int = DEFAULT_TAB_WIDTH
    include_bodies: bool = True


@dataclass
class FilterConfig:
    """Declaration visibility settings."""

    exported_only: bool = False


@dataclass
class GoDocConfig:
    """Represents the settings defined in .gopkgdoc.yml."""

    src_root: Path = field(default_factory=default_src_root)
    render: RenderConfig = field(default_factory=RenderConfig)
    filter: FilterConfig = field(default_factory=FilterConfig)


def load_config(config_path: Path) -> GoDocConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return GoDocConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = GoDocConfig()

    src_root = _as_str(data.get("src_root"))
    if src_root:
        path = Path(src_root).expanduser()
        config.src_root = path if path.is_absolute() else (root / path)

    render_data = _as_dict(data.get("render"))
    if render_data:
        tab_width = _as_int(render_data.get("tab_width"))
        if tab_width is not None:
            if tab_width < 1:
                raise ConfigError("render.tab_width must be a positive integer")
            config.render.tab_width = tab_width
        include_bodies = _as_bool(render_data.get("include_bodies"))
        if include_bodies is not None:
            config.render.include_bodies = include_bodies

    filter_data = _as_dict(data.get("filter"))
    if filter_data:
        exported_only = _as_bool(filter_data.get("exported_only"))
        if exported_only is not None:
            config.filter.exported_only = exported_only

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


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


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "FilterConfig",
    "GoDocConfig",
    "RenderConfig",
    "default_src_root",
    "load_config",
]
