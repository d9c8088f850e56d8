"""Rank tiers for correctly solved rounds."""

from enum import Enum
from typing import Optional

from .rules import DEFAULT_RULES, GameRules


class RankTier(str, Enum):
    AMAZING = 'Amazing'
    ELITE = 'Elite'
    SOLID = 'Solid'


def rank_for(score: int, correct: bool, rules: GameRules = DEFAULT_RULES) -> Optional[RankTier]:
    """Rank a finished round. Only correctly solved rounds earn a tier."""
    if not correct:
        return None
    if score >= rules.amazing_threshold:
        return RankTier.AMAZING
    if score >= rules.elite_threshold:
        return RankTier.ELITE
    if score >= rules.solid_threshold:
        return RankTier.SOLID
    return None
