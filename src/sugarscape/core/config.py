"""
Run parameters for a sugarscape world.

Defaults follow Epstein & Axtell (1996) as used in the Agents.jl example zoo:
a 50x50 wrapping grid with two sugar peaks and 250 agents.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Dict, Optional, Tuple
import json

from sugarscape.core.errors import InvalidConfiguration


Cell = Tuple[int, int]
Range = Tuple[int, int]

_RANGE_FIELDS = ("wealth_range", "metabolic_rate_range", "vision_range", "max_age_range")


def _int_pair(value, what: str) -> Tuple[int, int]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise InvalidConfiguration(f"Invalid {what}: {value!r}, expected a pair of integers")
    try:
        return int(value[0]), int(value[1])
    except (TypeError, ValueError) as exc:
        raise InvalidConfiguration(f"Invalid {what}: {value!r}, expected a pair of integers") from exc


@dataclass(frozen=True)
class SugarscapeConfig:
    width: int = 50
    height: int = 50
    # 0-based cells; Epstein & Axtell place the peaks at (10, 40) and (40, 10) counting from 1
    peaks: Tuple[Cell, ...] = ((9, 39), (39, 9))
    growth_rate: int = 1
    population: int = 250
    wealth_range: Range = (5, 25)
    metabolic_rate_range: Range = (1, 4)
    vision_range: Range = (1, 6)
    max_age_range: Range = (60, 100)
    max_sugar: int = 4
    decay_divisor: int = 6
    periodic: bool = True
    seed: Optional[int] = 42

    def __post_init__(self) -> None:
        # Normalise sequences so configs built from JSON lists compare equal and hash.
        if not isinstance(self.peaks, (list, tuple)):
            raise InvalidConfiguration(f"Invalid peaks: {self.peaks!r}")
        peaks = tuple(_int_pair(peak, "peak") for peak in self.peaks)
        object.__setattr__(self, "peaks", peaks)
        for name in _RANGE_FIELDS:
            object.__setattr__(self, name, _int_pair(getattr(self, name), f"range for {name}"))

    @property
    def dims(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def num_cells(self) -> int:
        return self.width * self.height

    def validate(self) -> "SugarscapeConfig":
        if self.width <= 0 or self.height <= 0:
            raise InvalidConfiguration(f"Grid dimensions must be positive, got {self.width}x{self.height}")
        if not self.peaks:
            raise InvalidConfiguration("At least one sugar peak is required")
        for peak in self.peaks:
            x, y = peak
            if not (0 <= x < self.width and 0 <= y < self.height):
                raise InvalidConfiguration(f"Peak {peak} lies outside the {self.width}x{self.height} grid")
        for name in _RANGE_FIELDS:
            lo, hi = getattr(self, name)
            if lo > hi:
                raise InvalidConfiguration(f"Invalid range for {name}: lower bound {lo} exceeds upper bound {hi}")
        for name in ("metabolic_rate_range", "vision_range", "max_age_range"):
            lo, _ = getattr(self, name)
            if lo <= 0:
                raise InvalidConfiguration(f"Invalid range for {name}: values must be positive, got lower bound {lo}")
        if self.growth_rate < 0:
            raise InvalidConfiguration(f"growth_rate must be >= 0, got {self.growth_rate}")
        if self.max_sugar < 0:
            raise InvalidConfiguration(f"max_sugar must be >= 0, got {self.max_sugar}")
        if self.decay_divisor < 1:
            raise InvalidConfiguration(f"decay_divisor must be >= 1, got {self.decay_divisor}")
        if self.population <= 0:
            raise InvalidConfiguration(f"population must be positive, got {self.population}")
        if self.population > self.num_cells:
            raise InvalidConfiguration(
                f"population {self.population} exceeds the {self.num_cells} cells of the grid"
            )
        return self

    def with_overrides(self, **overrides) -> "SugarscapeConfig":
        unknown = set(overrides) - {f.name for f in fields(self)}
        if unknown:
            raise InvalidConfiguration(f"Unknown SugarscapeConfig field(s): {', '.join(sorted(unknown))}")
        return replace(self, **overrides).validate()

    def to_dict(self) -> Dict[str, object]:
        data = asdict(self)
        data["peaks"] = [list(p) for p in self.peaks]
        for name in _RANGE_FIELDS:
            data[name] = list(data[name])
        return data


def load_config(path: str | Path) -> SugarscapeConfig:
    with open(Path(path), "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise InvalidConfiguration(f"Config file {path} must hold a JSON object")
    known = {f.name for f in fields(SugarscapeConfig)}
    unknown = set(data) - known
    if unknown:
        raise InvalidConfiguration(f"Unknown SugarscapeConfig field(s) in {path}: {', '.join(sorted(unknown))}")
    return SugarscapeConfig(**data).validate()


def build_config(
    overrides: Optional[Dict[str, object]] = None, path: Optional[str | Path] = None
) -> SugarscapeConfig:
    cfg = load_config(path) if path is not None else SugarscapeConfig()
    if overrides:
        cfg = cfg.with_overrides(**overrides)
    return cfg.validate()
