"""
Command-line driver: build a world, step it, log progress, optionally dump
per-agent wealth and the summary history.

Run:
  python -m sugarscape.core.run --steps 100 --wealth-csv wealth.csv
"""
from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence
import argparse
import json
import logging

from sugarscape.core.collect import DataCollector, compute_stats
from sugarscape.core.config import SugarscapeConfig, build_config
from sugarscape.core.engine import SugarscapeModel
from sugarscape.core.errors import InvalidConfiguration


logger = logging.getLogger(__name__)

# Edit these for quick runs without CLI arguments.
RUN_SETTINGS = {
    "steps": 50,
    "log_every": 10,
    "seed": None,  # None keeps the seed from --config or the SugarscapeConfig default
    "wealth_csv": None,  # e.g., "/tmp/sugarscape_wealth.csv"
    "history_json": None,
    "log_level": "INFO",
}

HISTORY_KEYS = ("tick", "population", "mean_wealth", "gini", "sugar_mean", "births", "deaths")


def run_simulation(
    steps: int = 50,
    log_every: int = 10,
    seed: Optional[int] = None,
    config: Optional[SugarscapeConfig] = None,
    collect_history: bool = False,
    collect_attributes: Sequence[str] = (),
) -> Dict[str, object]:
    cfg = config or SugarscapeConfig()
    if seed is not None and seed != cfg.seed:
        cfg = cfg.with_overrides(seed=seed)
    model = SugarscapeModel(cfg)
    collector = DataCollector(collect_attributes) if collect_attributes else None
    history: Dict[str, List[float]] = {key: [] for key in HISTORY_KEYS}

    if collector is not None:
        collector.collect(model)

    for step_idx in range(steps):
        events = model.step()
        if collector is not None:
            collector.collect(model)
        stats = None
        if collect_history:
            stats = compute_stats(model)
            for key in HISTORY_KEYS:
                if key in events:
                    history[key].append(events[key])
                else:
                    history[key].append(stats[key])
        if log_every > 0 and (step_idx % log_every == 0 or step_idx == steps - 1):
            stats = stats or compute_stats(model)
            logger.info(
                "t=%04d pop=%3d mean_wealth=%6.2f gini=%4.2f sugar=%4.2f births=%2d deaths=%2d",
                model.tick,
                stats["population"],
                stats["mean_wealth"],
                stats["gini"],
                stats["sugar_mean"],
                events["births"],
                events["deaths"],
            )
            if events["skipped_births"]:
                logger.warning("t=%04d %d replacement(s) skipped: grid full", model.tick, events["skipped_births"])

    return {"model": model, "history": history if collect_history else {}, "collector": collector}


def save_history(history: Dict[str, List[float]], path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(history, f, indent=2)
    return path


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Run an Epstein-Axtell sugarscape simulation.")
    ap.add_argument("--steps", type=int, default=RUN_SETTINGS["steps"])
    ap.add_argument("--seed", type=int, default=RUN_SETTINGS["seed"])
    ap.add_argument("--config", type=str, default=None, help="JSON file with SugarscapeConfig fields")
    ap.add_argument("--population", type=int, default=None)
    ap.add_argument("--log-every", type=int, default=RUN_SETTINGS["log_every"])
    ap.add_argument("--wealth-csv", type=str, default=RUN_SETTINGS["wealth_csv"])
    ap.add_argument("--history-json", type=str, default=RUN_SETTINGS["history_json"])
    ap.add_argument("--log-level", type=str, default=RUN_SETTINGS["log_level"])
    return ap


def main(argv: Optional[Sequence[str]] = None) -> None:
    ap = _build_parser()
    args = ap.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    overrides: Dict[str, object] = {}
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.population is not None:
        overrides["population"] = args.population
    try:
        cfg = build_config(overrides, path=args.config)
    except InvalidConfiguration as exc:
        ap.error(str(exc))

    result = run_simulation(
        steps=args.steps,
        log_every=args.log_every,
        config=cfg,
        collect_history=bool(args.history_json),
        collect_attributes=("wealth",) if args.wealth_csv else (),
    )
    if args.wealth_csv:
        out = result["collector"].save_csv(args.wealth_csv)
        logger.info("Saved wealth records to %s", out)
    if args.history_json:
        out = save_history(result["history"], args.history_json)
        logger.info("Saved history to %s", out)


if __name__ == "__main__":
    main()
