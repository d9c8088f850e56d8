"""Initials hint shown once a round is going badly."""

from typing import Optional

from .board import RoundSession
from .rules import DEFAULT_RULES, GameRules


def initials(name: str) -> str:
    return '.'.join(token[0].upper() for token in (name or '').split())


def hint_for(session: RoundSession, rules: GameRules = DEFAULT_RULES) -> Optional[str]:
    """Initials of the hidden name once the score has dropped below the hint threshold.

    Derived from the score alone. Scores never increase within a round, so a
    hint that has appeared stays visible.
    """
    if session.score >= rules.hint_threshold:
        return None
    return initials(session.player.name) or None
