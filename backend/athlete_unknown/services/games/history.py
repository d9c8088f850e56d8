"""Per-user round history: one entry per play date, kept in date order."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple


def parse_play_date(value) -> date:
    """Parse a ``YYYY-MM-DD`` play date (an ISO datetime prefix is accepted)."""
    if isinstance(value, date):
        return value
    text = str(value or '').strip().split('T')[0]
    return date.fromisoformat(text)


@dataclass(frozen=True)
class RoundHistoryEntry:
    play_date: str
    score: int
    is_correct: bool
    flipped_tiles: Tuple[str, ...] = ()
    incorrect_guesses: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'playDate': self.play_date,
            'score': self.score,
            'isCorrect': self.is_correct,
            'tilesFlipped': list(self.flipped_tiles),
            'incorrectGuesses': self.incorrect_guesses,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], play_date: Optional[str] = None) -> 'RoundHistoryEntry':
        """Build an entry from its wire form. Raises ``ValueError`` on malformed input."""
        raw_date = play_date if play_date is not None else data.get('playDate')
        tiles = data.get('tilesFlipped')
        if tiles is None:
            tiles = data.get('flippedTiles') or []
        if not isinstance(tiles, (list, tuple)):
            raise ValueError('tilesFlipped must be a list of tile names')
        try:
            score = int(data['score'])
            incorrect = int(data.get('incorrectGuesses') or 0)
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError('score and incorrectGuesses must be integers') from exc
        return cls(
            play_date=parse_play_date(raw_date).isoformat(),
            score=score,
            is_correct=bool(data.get('isCorrect')),
            flipped_tiles=tuple(str(t) for t in tiles),
            incorrect_guesses=incorrect,
        )


def find_entry(history: Sequence[RoundHistoryEntry], play_date: str) -> Optional[RoundHistoryEntry]:
    for entry in history:
        if entry.play_date == play_date:
            return entry
    return None


def upsert_history(history: Sequence[RoundHistoryEntry], entry: RoundHistoryEntry) -> List[RoundHistoryEntry]:
    """Insert ``entry`` or replace the one sharing its play date; result is sorted by date."""
    updated = [e for e in history if e.play_date != entry.play_date]
    updated.append(entry)
    updated.sort(key=lambda e: e.play_date)
    return updated


def history_from_json(items) -> List[RoundHistoryEntry]:
    return [RoundHistoryEntry.from_dict(item) for item in items or []]


def next_streak(streak: int, last_day_played: Optional[str], play_date: str) -> Tuple[int, str]:
    """Daily streak after playing ``play_date``.

    Consecutive days extend the streak, replaying the same day keeps it, a gap
    restarts it at one. Archive rounds older than the last day played leave
    both values untouched.
    """
    if not last_day_played:
        return 1, play_date
    last = parse_play_date(last_day_played)
    played = parse_play_date(play_date)
    if played == last:
        return max(streak, 1), last_day_played
    if played < last:
        return streak, last_day_played
    if played - last == timedelta(days=1):
        return streak + 1, play_date
    return 1, play_date
