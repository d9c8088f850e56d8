"""Tunable game constants.

Penalties and thresholds differ between deployments, so the core reads them
from a single immutable ``GameRules`` value instead of module literals.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Tuple


SPORTS: Tuple[str, ...] = ('baseball', 'basketball', 'football')

PHOTO_TILE = 'photo'

# Optional tiles above the grid. Only rounds that supply the value get them,
# and they stay out of the share grid and the tile statistics.
HINT_TILE_KEYS: Tuple[str, ...] = ('initials', 'nicknames')

# Canonical tile order. Grid layout, share text and statistics tie-breaks
# all follow this sequence.
TILE_KEYS: Tuple[str, ...] = (
    'bio',
    'playerInformation',
    'draftInformation',
    'yearsActive',
    'teamsPlayedOn',
    'jerseyNumbers',
    'careerStats',
    'personalAchievements',
    PHOTO_TILE,
)

# Config key -> GameRules attribute
_CONFIG_KEYS = {
    'INITIAL_SCORE': 'initial_score',
    'INCORRECT_GUESS_PENALTY': 'incorrect_guess_penalty',
    'REGULAR_TILE_PENALTY': 'regular_tile_penalty',
    'PHOTO_TILE_PENALTY': 'photo_tile_penalty',
    'HINT_TILE_PENALTY': 'hint_tile_penalty',
    'CLOSE_GUESS_DISTANCE': 'close_guess_distance',
    'HINT_THRESHOLD': 'hint_threshold',
    'RANK_AMAZING': 'amazing_threshold',
    'RANK_ELITE': 'elite_threshold',
    'RANK_SOLID': 'solid_threshold',
}


@dataclass(frozen=True)
class GameRules:
    initial_score: int = 100
    incorrect_guess_penalty: int = 2
    regular_tile_penalty: int = 3
    photo_tile_penalty: int = 6
    hint_tile_penalty: int = 6
    close_guess_distance: int = 4
    hint_threshold: int = 70
    amazing_threshold: int = 95
    elite_threshold: int = 90
    solid_threshold: int = 80

    def __post_init__(self):
        tile_penalties = (self.regular_tile_penalty, self.photo_tile_penalty, self.hint_tile_penalty)
        if self.incorrect_guess_penalty >= min(tile_penalties):
            raise ValueError(
                f"INCORRECT_GUESS_PENALTY ({self.incorrect_guess_penalty}) must be smaller than every tile penalty"
            )
        if self.photo_tile_penalty <= self.regular_tile_penalty:
            raise ValueError("PHOTO_TILE_PENALTY must be larger than REGULAR_TILE_PENALTY")
        if not (self.amazing_threshold > self.elite_threshold > self.solid_threshold):
            raise ValueError("Rank thresholds must satisfy RANK_AMAZING > RANK_ELITE > RANK_SOLID")

    def tile_penalty(self, key: str) -> int:
        if key == PHOTO_TILE:
            return self.photo_tile_penalty
        if key in HINT_TILE_KEYS:
            return self.hint_tile_penalty
        return self.regular_tile_penalty

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> 'GameRules':
        """Build rules from a Flask config mapping, falling back to defaults for missing keys."""
        values = {}
        for config_key, attr in _CONFIG_KEYS.items():
            raw = config.get(config_key)
            if raw is None:
                continue
            try:
                values[attr] = int(raw)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"Invalid {config_key} value: {raw!r}. Must be an integer.") from exc
        return cls(**values)


DEFAULT_RULES = GameRules()
