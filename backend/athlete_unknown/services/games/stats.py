"""Running statistics folded from completed rounds.

``aggregate`` is a pure fold step. Counters and score/flip sums are kept as
integers and the averages are derived from them, so folding the same set of
rounds in any order (or recomputing from the full history) yields identical
stats.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence

from .history import RoundHistoryEntry
from .rules import TILE_KEYS


TileTracker = Dict[str, int]


def empty_tracker() -> TileTracker:
    return {key: 0 for key in TILE_KEYS}


def most_common_tile(tracker: Mapping[str, int]) -> Optional[str]:
    """Key with the highest count; ties go to the earliest key in tile order."""
    best, best_count = None, 0
    for key in TILE_KEYS:
        count = tracker.get(key, 0)
        if count > best_count:
            best, best_count = key, count
    return best


def least_common_tile(tracker: Mapping[str, int]) -> Optional[str]:
    """Key with the lowest nonzero count; ties go to the earliest key in tile order."""
    best, best_count = None, None
    for key in TILE_KEYS:
        count = tracker.get(key, 0)
        if count > 0 and (best_count is None or count < best_count):
            best, best_count = key, count
    return best


def _ratio(numerator: int, denominator: int) -> float:
    return numerator / denominator if denominator else 0.0


@dataclass(frozen=True)
class Stats:
    total_plays: int = 0
    correct_count: int = 0
    highest_score: int = 0
    correct_score_total: int = 0
    tile_flip_total: int = 0
    first_tile_flipped_tracker: TileTracker = field(default_factory=empty_tracker)
    last_tile_flipped_tracker: TileTracker = field(default_factory=empty_tracker)
    most_tile_flipped_tracker: TileTracker = field(default_factory=empty_tracker)

    @property
    def percentage_correct(self) -> float:
        return _ratio(self.correct_count, self.total_plays)

    @property
    def average_correct_score(self) -> float:
        return _ratio(self.correct_score_total, self.correct_count)

    @property
    def average_number_of_tile_flips(self) -> float:
        return _ratio(self.tile_flip_total, self.total_plays)

    @property
    def most_common_first_tile_flipped(self) -> Optional[str]:
        return most_common_tile(self.first_tile_flipped_tracker)

    @property
    def most_common_last_tile_flipped(self) -> Optional[str]:
        return most_common_tile(self.last_tile_flipped_tracker)

    @property
    def most_common_tile_flipped(self) -> Optional[str]:
        return most_common_tile(self.most_tile_flipped_tracker)

    @property
    def least_common_tile_flipped(self) -> Optional[str]:
        return least_common_tile(self.most_tile_flipped_tracker)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalPlays': self.total_plays,
            'correctCount': self.correct_count,
            'percentageCorrect': self.percentage_correct,
            'highestScore': self.highest_score,
            'averageCorrectScore': self.average_correct_score,
            'averageNumberOfTileFlips': self.average_number_of_tile_flips,
            'correctScoreTotal': self.correct_score_total,
            'tileFlipTotal': self.tile_flip_total,
            'mostCommonFirstTileFlipped': self.most_common_first_tile_flipped or '',
            'mostCommonLastTileFlipped': self.most_common_last_tile_flipped or '',
            'mostCommonTileFlipped': self.most_common_tile_flipped or '',
            'leastCommonTileFlipped': self.least_common_tile_flipped or '',
            'firstTileFlippedTracker': dict(self.first_tile_flipped_tracker),
            'lastTileFlippedTracker': dict(self.last_tile_flipped_tracker),
            'mostTileFlippedTracker': dict(self.most_tile_flipped_tracker),
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> 'Stats':
        """Rebuild stats from a stored blob.

        Blobs written before the integer sums were stored only carry the
        averages; the sums are reconstructed from them.
        """
        if not data:
            return cls()
        total = int(data.get('totalPlays') or 0)
        if data.get('correctCount') is not None:
            correct = int(data['correctCount'])
        else:
            percentage = float(data.get('percentageCorrect') or 0)
            # Older blobs store a 0-100 percentage
            if percentage > 1:
                percentage /= 100
            correct = round(percentage * total)
        if data.get('correctScoreTotal') is not None:
            score_total = int(data['correctScoreTotal'])
        else:
            score_total = round(float(data.get('averageCorrectScore') or 0) * correct)
        if data.get('tileFlipTotal') is not None:
            flip_total = int(data['tileFlipTotal'])
        else:
            flip_total = round(float(data.get('averageNumberOfTileFlips') or 0) * total)
        return cls(
            total_plays=total,
            correct_count=correct,
            highest_score=int(data.get('highestScore') or 0),
            correct_score_total=score_total,
            tile_flip_total=flip_total,
            first_tile_flipped_tracker=_load_tracker(data, 'firstTileFlippedTracker', 'firstFlippedTracker'),
            last_tile_flipped_tracker=_load_tracker(data, 'lastTileFlippedTracker', 'lastFlippedTracker'),
            most_tile_flipped_tracker=_load_tracker(data, 'mostTileFlippedTracker', 'mostFlippedTracker'),
        )


def _load_tracker(data: Mapping[str, Any], *names: str) -> TileTracker:
    tracker = empty_tracker()
    for name in names:
        stored = data.get(name)
        if stored:
            for key in TILE_KEYS:
                tracker[key] = int(stored.get(key) or 0)
            break
    return tracker


def _bump(tracker: Mapping[str, int], keys: Iterable[str]) -> TileTracker:
    updated = dict(tracker)
    for key in keys:
        if key in updated:
            updated[key] += 1
    return updated


def aggregate(prior: Optional[Stats], entry: RoundHistoryEntry,
              flipped_tiles: Optional[Sequence[str]] = None) -> Stats:
    """Fold one completed round into ``prior`` (``None`` means no rounds yet)."""
    stats = prior if prior is not None else Stats()
    tiles = list(entry.flipped_tiles if flipped_tiles is None else flipped_tiles)

    first = [tiles[0]] if tiles else []
    last = [tiles[-1]] if tiles else []
    return replace(
        stats,
        total_plays=stats.total_plays + 1,
        correct_count=stats.correct_count + (1 if entry.is_correct else 0),
        highest_score=max(stats.highest_score, entry.score),
        correct_score_total=stats.correct_score_total + (entry.score if entry.is_correct else 0),
        tile_flip_total=stats.tile_flip_total + len(tiles),
        first_tile_flipped_tracker=_bump(stats.first_tile_flipped_tracker, first),
        last_tile_flipped_tracker=_bump(stats.last_tile_flipped_tracker, last),
        most_tile_flipped_tracker=_bump(stats.most_tile_flipped_tracker, tiles),
    )


def recompute(history: Iterable[RoundHistoryEntry], baseline: Optional[Stats] = None) -> Stats:
    """Stats derived over every recorded round.

    ``baseline`` holds plays imported without a per-round history; the
    recorded rounds are folded on top of it.
    """
    stats = baseline if baseline is not None else Stats()
    for entry in history:
        stats = aggregate(stats, entry)
    return stats
