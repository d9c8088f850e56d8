"""Fuzzy name matching for guesses."""

import re
from enum import Enum

from .rules import DEFAULT_RULES


class MatchKind(str, Enum):
    EXACT = 'exact'
    CLOSE = 'close'
    WRONG = 'wrong'


_IGNORED = re.compile(r"[\s'.\-]")


def normalize(text) -> str:
    """Lower-case and drop whitespace, apostrophes, hyphens and periods."""
    if not text:
        return ''
    return _IGNORED.sub('', str(text).lower())


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum number of single-character edits turning ``a`` into ``b``."""
    dp = [[0] * (len(b) + 1) for _ in range(len(a) + 1)]
    for i in range(len(a) + 1):
        dp[i][0] = i
    for j in range(len(b) + 1):
        dp[0][j] = j
    for i in range(1, len(a) + 1):
        for j in range(1, len(b) + 1):
            if a[i - 1] == b[j - 1]:
                dp[i][j] = dp[i - 1][j - 1]
            else:
                dp[i][j] = 1 + min(dp[i - 1][j - 1], dp[i - 1][j], dp[i][j - 1])
    return dp[len(a)][len(b)]


def classify(guess, target, max_distance: int = DEFAULT_RULES.close_guess_distance) -> MatchKind:
    """Classify ``guess`` against ``target``.

    Exact when the normalized strings are equal, close when they are within
    ``max_distance`` edits, wrong otherwise. An empty guess only matches an
    empty target.
    """
    normalized_guess = normalize(guess)
    normalized_target = normalize(target)
    if normalized_guess == normalized_target:
        return MatchKind.EXACT
    if not normalized_guess or not normalized_target:
        return MatchKind.WRONG
    distance = levenshtein_distance(normalized_guess, normalized_target)
    if 0 < distance <= max_distance:
        return MatchKind.CLOSE
    return MatchKind.WRONG
