# cornerclash/config.py
from dataclasses import dataclass, field
from typing import Dict, Optional
import os
import tomllib

# Defaults (points per piece)
PIECE_VALUES = {
    "TRIANGLE": 100,
    "SQUARE": 300,
    "HEXAGON": 900,
    "OCTAGON": 2700,
}

@dataclass
class SearchConfig:
    depth: int = 3
    randomize: bool = True  # shuffle move order to vary play among equal moves
    alpha_beta: bool = True
    seed: Optional[int] = None  # None means an unseeded RNG

@dataclass
class EvalConfig:
    piece_values: Dict[str, int] = field(default_factory=lambda: PIECE_VALUES.copy())
    mobility_weight: int = 10
    merge_weight: int = 50

@dataclass
class UIConfig:
    engine_name: str = "CornerClash"
    engine_author: str = "CornerClash developers"
    human_color: str = "red"
    api_port: int = 8000

@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("search", "eval", "ui"):
            if section in raw:
                target = getattr(cfg, section)
                for k, v in raw[section].items():
                    if hasattr(target, k):
                        setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = raw["log_level"]
        return cfg

# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("CORNERCLASH_CONFIG_TOML", "config.toml"))
# allow env override of depth for quick debugging
override_depth = os.environ.get("CORNERCLASH_SEARCH_DEPTH")
if override_depth:
    try:
        CONFIG.search.depth = int(override_depth)
    except ValueError:
        print(f"Ignoring invalid CORNERCLASH_SEARCH_DEPTH: {override_depth!r}")
