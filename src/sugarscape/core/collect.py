"""
Per-step data collection and summary statistics for offline analysis.
"""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Tuple
import csv

import numpy as np

from sugarscape.core.agents import AgentSnapshot


AGENT_ATTRIBUTES = ("position", "vision", "metabolic_rate", "age", "max_age", "wealth")


def gini(values: Iterable[float]) -> float:
    """Gini coefficient of a wealth distribution (0 = equal, towards 1 = concentrated)."""
    arr = np.sort(np.asarray(list(values), dtype=np.float64))
    n = arr.size
    if n == 0:
        return 0.0
    # Shift so that transiently negative wealth does not break the formula.
    if arr[0] < 0:
        arr = arr - arr[0]
    total = arr.sum()
    if total == 0:
        return 0.0
    ranks = np.arange(1, n + 1)
    return float((2.0 * (ranks * arr).sum()) / (n * total) - (n + 1) / n)


def wealth_histogram(model, bins: int | Sequence[float] = 10) -> Tuple[np.ndarray, np.ndarray]:
    wealth = [agent.wealth for agent in model.agents()]
    return np.histogram(np.asarray(wealth, dtype=np.int64), bins=bins)


def compute_stats(model) -> Dict[str, float]:
    agents = model.agents()
    stats: Dict[str, float] = {"tick": model.tick, "population": len(agents)}
    if agents:
        wealth = np.array([a.wealth for a in agents], dtype=np.float64)
        stats["mean_wealth"] = float(wealth.mean())
        stats["max_wealth"] = float(wealth.max())
        stats["gini"] = gini(wealth)
        stats["mean_age"] = float(np.mean([a.age for a in agents]))
        stats["mean_vision"] = float(np.mean([a.vision for a in agents]))
        stats["mean_metabolic_rate"] = float(np.mean([a.metabolic_rate for a in agents]))
    else:
        for key in ("mean_wealth", "max_wealth", "gini", "mean_age", "mean_vision", "mean_metabolic_rate"):
            stats[key] = 0.0
    stats["sugar_mean"] = model.field.mean()
    return stats


class DataCollector:
    """
    Records chosen agent attributes after each step, one row per live agent,
    tagged with the tick and the agent id.
    """

    def __init__(self, attributes: Sequence[str] = ("wealth",)):
        unknown = [name for name in attributes if name not in AGENT_ATTRIBUTES]
        if unknown:
            raise ValueError(f"Unknown agent attribute(s): {unknown}; choose from {AGENT_ATTRIBUTES}")
        self.attributes = tuple(attributes)
        self.rows: List[Dict[str, object]] = []

    def __len__(self) -> int:
        return len(self.rows)

    def collect(self, model) -> None:
        self.record(model.tick, model.agents())

    def record(self, step: int, agents: Iterable[AgentSnapshot]) -> None:
        for agent in agents:
            row: Dict[str, object] = {"step": step, "agent_id": agent.agent_id}
            for name in self.attributes:
                row[name] = getattr(agent, name)
            self.rows.append(row)

    def column(self, name: str) -> List[object]:
        return [row[name] for row in self.rows]

    def at_step(self, step: int, attribute: str = "wealth") -> List[object]:
        return [row[attribute] for row in self.rows if row["step"] == step]

    def steps(self) -> List[int]:
        return sorted({row["step"] for row in self.rows})

    def to_columns(self) -> Dict[str, List[object]]:
        names = ("step", "agent_id") + self.attributes
        return {name: self.column(name) for name in names}

    def save_csv(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        names = ("step", "agent_id") + self.attributes
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=names)
            writer.writeheader()
            for row in self.rows:
                writer.writerow(row)
        return path
