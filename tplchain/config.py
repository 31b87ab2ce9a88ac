"""
Engine configuration loader.

Reads the optional tplchain.yaml at the project root. A missing file
yields the defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .engine import TemplateEngine
from .errors import ConfigError
from .resolver import DEFAULT_MAX_DEPTH
from .sources import DEFAULT_EXTENSIONS, FileSystemSourceProvider

_yaml = YAML(typ="safe")

CONFIG_FILE = "tplchain.yaml"
DEFAULT_TEMPLATE_DIR = "templates"

_KNOWN_KEYS = {"template_path", "template_ext", "max_depth", "time_budget"}


def config_path(root: Path) -> Path:
    """Path to the configuration file tplchain.yaml."""
    return (root / CONFIG_FILE).resolve()


def _str_list(raw: Any, key: str) -> List[str]:
    if isinstance(raw, str):
        return [raw]
    if isinstance(raw, list) and raw and all(isinstance(x, str) for x in raw):
        return list(raw)
    raise ConfigError(f"{key}: expected a string or a non-empty list of strings")


@dataclass
class EngineConfig:
    template_path: List[str] = field(default_factory=lambda: [DEFAULT_TEMPLATE_DIR])
    template_ext: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    max_depth: int = DEFAULT_MAX_DEPTH
    time_budget: Optional[float] = None

    @classmethod
    def from_dict(cls, raw: dict) -> EngineConfig:
        unknown = set(raw) - _KNOWN_KEYS
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")

        cfg = cls()
        if "template_path" in raw:
            cfg.template_path = _str_list(raw["template_path"], "template_path")
        if "template_ext" in raw:
            cfg.template_ext = _str_list(raw["template_ext"], "template_ext")
        if "max_depth" in raw:
            depth = raw["max_depth"]
            if isinstance(depth, bool) or not isinstance(depth, int) or depth < 1:
                raise ConfigError("max_depth: expected a positive integer")
            cfg.max_depth = depth
        if raw.get("time_budget") is not None:
            budget = raw["time_budget"]
            if isinstance(budget, bool) or not isinstance(budget, (int, float)) or budget <= 0:
                raise ConfigError("time_budget: expected a positive number of seconds")
            cfg.time_budget = float(budget)
        return cfg

    def search_dirs(self, root: Path) -> List[Path]:
        """Template directories resolved against the project root."""
        return [(root / p).resolve() for p in self.template_path]

    def build_engine(self, root: Path) -> TemplateEngine:
        provider = FileSystemSourceProvider(self.search_dirs(root), self.template_ext)
        return TemplateEngine(provider, max_depth=self.max_depth, time_budget=self.time_budget)


def _read_yaml_map(path: Path) -> dict:
    """Reads a YAML file and returns a mapping."""
    if not path.is_file():
        return {}
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"Failed to parse {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


def load_config(root: Path) -> EngineConfig:
    """
    Load engine configuration.

    Args:
        root: Project root path

    Returns:
        EngineConfig (defaults when tplchain.yaml is absent)
    """
    return EngineConfig.from_dict(_read_yaml_map(config_path(root)))


def load_context_file(path: Path) -> dict:
    """
    Load a render context from a YAML (or JSON) file.

    Raises:
        ValueError: If the file does not exist
        ConfigError: If the file is not a mapping
    """
    if not path.is_file():
        raise ValueError(f"Context file not found: {path}")
    return _read_yaml_map(path)


__all__ = ["CONFIG_FILE", "EngineConfig", "config_path", "load_config", "load_context_file"]
