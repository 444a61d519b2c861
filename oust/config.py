from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from oust.core import DEFAULT_MAX_PLY, DEFAULT_SIDE
from oust.search import HeuristicWeights, SearchConfig

DEPTH_ENV_VAR = "OUST_SEARCH_DEPTH"


@dataclass
class MatchConfig:
    side: int = DEFAULT_SIDE
    max_ply: int = DEFAULT_MAX_PLY
    episodes: int = 2
    opponent: str = "random"  # "random" or "alphabeta"
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.opponent not in ("random", "alphabeta"):
            raise ValueError(f"unknown opponent {self.opponent!r}")
        if self.episodes < 1:
            raise ValueError("episodes must be at least 1")


@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    heuristic: HeuristicWeights = field(default_factory=HeuristicWeights)
    match: MatchConfig = field(default_factory=MatchConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @staticmethod
    def from_dict(raw: Mapping[str, Any]) -> "Config":
        raw = dict(raw)
        sections = {
            "search": SearchConfig,
            "heuristic": HeuristicWeights,
            "match": MatchConfig,
        }
        kwargs: Dict[str, Any] = {}
        for name, section_cls in sections.items():
            values = raw.pop(name, None) or {}
            kwargs[name] = section_cls(**_checked(section_cls, values, name))
        kwargs.update(_checked(Config, raw, "config"))
        return Config(**kwargs)


def load_config(path: Optional[Union[str, Path]] = None) -> Config:
    """Load a YAML config; a missing file yields the defaults.

    ``OUST_SEARCH_DEPTH`` overrides ``search.depth`` when set.
    """
    raw: Dict[str, Any] = {}
    if path is not None:
        cfg_path = Path(path)
        if cfg_path.exists():
            raw = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}

    override_depth = os.environ.get(DEPTH_ENV_VAR)
    if override_depth:
        raw.setdefault("search", {})
        raw["search"] = {**(raw["search"] or {}), "depth": int(override_depth)}

    return Config.from_dict(raw)


def _checked(cls, values: Mapping[str, Any], section: str) -> Dict[str, Any]:
    known = {f.name for f in fields(cls)}
    unknown = set(values) - known
    if unknown:
        raise ValueError(f"unknown keys in {section}: {', '.join(sorted(unknown))}")
    return dict(values)
