"""
Death and replacement: a starved or old agent leaves the grid and a newborn
with fresh attributes takes its place somewhere random, so the population stays fixed.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import logging

import numpy as np

from sugarscape.core.agents import Agent, AgentRegistry
from sugarscape.core.config import SugarscapeConfig
from sugarscape.core.errors import CapacityExhausted


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReplacementOutcome:
    died: bool
    newborn: Optional[Agent] = None
    skipped: bool = False


def should_die(agent: Agent) -> bool:
    return agent.wealth <= 0 or agent.age >= agent.max_age


def apply_replacement(
    agent: Agent, registry: AgentRegistry, config: SugarscapeConfig, rng: np.random.Generator
) -> ReplacementOutcome:
    if not should_die(agent):
        return ReplacementOutcome(died=False)
    cause = "starvation" if agent.wealth <= 0 else "old age"
    registry.remove(agent)
    try:
        newborn = registry.spawn(config, rng)
    except CapacityExhausted as exc:
        logger.warning("agent %d died of %s; replacement skipped: %s", agent.agent_id, cause, exc)
        return ReplacementOutcome(died=True, skipped=True)
    logger.debug(
        "agent %d died of %s at age %d; agent %d born at %s",
        agent.agent_id,
        cause,
        agent.age,
        newborn.agent_id,
        newborn.position,
    )
    return ReplacementOutcome(died=True, newborn=newborn)
