"""Tile board state machine for a single round.

A ``RoundSession`` is an immutable value. ``flip_tile``, ``submit_guess`` and
``give_up`` return a new session, or the very same object when the event is
a no-op (terminal session, already flipped or unknown tile, repeated miss).
Rendering and animation are left to callers reacting to the returned state.
"""

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from .matching import MatchKind, classify, normalize
from .rules import DEFAULT_RULES, GameRules, HINT_TILE_KEYS, TILE_KEYS


# Wire name -> PlayerFact attribute
_FACT_FIELDS = {
    'bio': 'bio',
    'playerInformation': 'player_information',
    'draftInformation': 'draft_information',
    'yearsActive': 'years_active',
    'teamsPlayedOn': 'teams_played_on',
    'jerseyNumbers': 'jersey_numbers',
    'careerStats': 'career_stats',
    'personalAchievements': 'personal_achievements',
    'photo': 'photo',
}
_HINT_FIELDS = {key: key for key in HINT_TILE_KEYS}


def _optional_text(value) -> Optional[str]:
    if isinstance(value, (list, tuple)):
        value = ', '.join(str(v) for v in value if v)
    return str(value) if value else None


@dataclass(frozen=True)
class PlayerFact:
    sport: str
    name: str
    bio: str = ''
    player_information: str = ''
    draft_information: str = ''
    years_active: str = ''
    teams_played_on: str = ''
    jersey_numbers: str = ''
    career_stats: str = ''
    personal_achievements: str = ''
    photo: str = ''
    initials: Optional[str] = None
    nicknames: Optional[str] = None
    sports_reference_url: str = ''

    def content(self, key: str) -> str:
        attr = _FACT_FIELDS.get(key) or _HINT_FIELDS.get(key)
        value = getattr(self, attr) if attr else ''
        return value.strip() if isinstance(value, str) else ''

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'PlayerFact':
        kwargs = {attr: str(data.get(key) or '') for key, attr in _FACT_FIELDS.items()}
        return cls(
            sport=str(data.get('sport') or ''),
            name=str(data.get('name') or ''),
            initials=_optional_text(data.get('initials')),
            nicknames=_optional_text(data.get('nicknames')),
            sports_reference_url=str(data.get('sportsReferenceURL') or ''),
            **kwargs,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'sport': self.sport,
            'name': self.name,
            'sportsReferenceURL': self.sports_reference_url,
        }
        for key, attr in _FACT_FIELDS.items():
            data[key] = getattr(self, attr)
        if self.initials:
            data['initials'] = self.initials
        if self.nicknames:
            data['nicknames'] = self.nicknames
        return data


@dataclass(frozen=True)
class TileState:
    key: str
    penalty: int
    flipped: bool = False


class Signal(str, Enum):
    """Feedback surfaced by the most recent event."""
    CORRECT = 'correct'
    CLOSE = 'close'
    REVEAL = 'reveal'
    WRONG = 'wrong'
    GAVE_UP = 'gave_up'


@dataclass(frozen=True)
class RoundSession:
    player: PlayerFact
    tiles: Tuple[TileState, ...]
    score: int
    wrong_guess_count: int = 0
    flip_count: int = 0
    terminal: bool = False
    correct: bool = False
    gave_up: bool = False
    flip_order: Tuple[str, ...] = ()
    first_close_guess: Optional[str] = None
    signal: Optional[Signal] = None
    revealed_name: Optional[str] = None
    guesses: Tuple[str, ...] = ()
    last_guess: Optional[str] = None

    @property
    def first_flipped(self) -> Optional[str]:
        return self.flip_order[0] if self.flip_order else None

    @property
    def last_flipped(self) -> Optional[str]:
        return self.flip_order[-1] if self.flip_order else None

    @property
    def grid_flip_order(self) -> Tuple[str, ...]:
        """Flips of the fact grid only, without hint tiles."""
        return tuple(key for key in self.flip_order if key in TILE_KEYS)

    def tile(self, key: str) -> Optional[TileState]:
        for tile in self.tiles:
            if tile.key == key:
                return tile
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'player': self.player.to_dict(),
            'tiles': [{'key': t.key, 'penalty': t.penalty, 'flipped': t.flipped} for t in self.tiles],
            'score': self.score,
            'wrongGuessCount': self.wrong_guess_count,
            'flipCount': self.flip_count,
            'terminal': self.terminal,
            'correct': self.correct,
            'gaveUp': self.gave_up,
            'flipOrder': list(self.flip_order),
            'firstCloseGuess': self.first_close_guess,
            'signal': self.signal.value if self.signal else None,
            'revealedName': self.revealed_name,
            'guesses': list(self.guesses),
            'lastGuess': self.last_guess,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'RoundSession':
        signal = data.get('signal')
        return cls(
            player=PlayerFact.from_dict(data.get('player') or {}),
            tiles=tuple(
                TileState(key=t['key'], penalty=int(t['penalty']), flipped=bool(t.get('flipped')))
                for t in data.get('tiles') or []
            ),
            score=int(data.get('score', DEFAULT_RULES.initial_score)),
            wrong_guess_count=int(data.get('wrongGuessCount', 0)),
            flip_count=int(data.get('flipCount', 0)),
            terminal=bool(data.get('terminal')),
            correct=bool(data.get('correct')),
            gave_up=bool(data.get('gaveUp')),
            flip_order=tuple(data.get('flipOrder') or ()),
            first_close_guess=data.get('firstCloseGuess'),
            signal=Signal(signal) if signal else None,
            revealed_name=data.get('revealedName'),
            guesses=tuple(data.get('guesses') or ()),
            last_guess=data.get('lastGuess'),
        )


def new_session(player: PlayerFact, rules: GameRules = DEFAULT_RULES) -> RoundSession:
    """Start a round. Fact fields without content get no tile.

    Hint tiles come first, followed by the grid in canonical order.
    """
    tiles = tuple(
        TileState(key=key, penalty=rules.tile_penalty(key))
        for key in HINT_TILE_KEYS + TILE_KEYS
        if player.content(key)
    )
    return RoundSession(player=player, tiles=tiles, score=rules.initial_score)


def _deduct(score: int, penalty: int) -> int:
    return max(0, score - penalty)


def flip_tile(session: RoundSession, key: str) -> RoundSession:
    if session.terminal:
        return session
    tile = session.tile(key)
    if tile is None or tile.flipped:
        return session
    tiles = tuple(replace(t, flipped=True) if t.key == key else t for t in session.tiles)
    return replace(
        session,
        tiles=tiles,
        score=_deduct(session.score, tile.penalty),
        flip_count=session.flip_count + 1,
        flip_order=session.flip_order + (key,),
        signal=None,
        revealed_name=None,
    )


def submit_guess(session: RoundSession, text, rules: GameRules = DEFAULT_RULES) -> RoundSession:
    if session.terminal:
        return session
    guess = '' if text is None else str(text)
    kind = classify(guess, session.player.name, rules.close_guess_distance)
    normalized = normalize(guess)
    # Resubmitting the previous miss is ignored
    if kind is not MatchKind.EXACT and session.last_guess and normalized == session.last_guess:
        return session
    guesses = session.guesses + (guess.strip(),)

    if kind is MatchKind.EXACT:
        return replace(
            session,
            terminal=True,
            correct=True,
            signal=Signal.CORRECT,
            revealed_name=None,
            guesses=guesses,
        )

    penalized = replace(
        session,
        score=_deduct(session.score, rules.incorrect_guess_penalty),
        wrong_guess_count=session.wrong_guess_count + 1,
        guesses=guesses,
        revealed_name=None,
        last_guess=normalized,
    )
    if kind is MatchKind.WRONG:
        return replace(penalized, signal=Signal.WRONG)

    if session.first_close_guess is None:
        return replace(penalized, signal=Signal.CLOSE, first_close_guess=normalized)
    if normalized != session.first_close_guess:
        return replace(penalized, signal=Signal.REVEAL, revealed_name=session.player.name)
    return replace(penalized, signal=Signal.CLOSE)


def give_up(session: RoundSession) -> RoundSession:
    if session.terminal:
        return session
    return replace(session, terminal=True, gave_up=True, correct=False, signal=Signal.GAVE_UP, revealed_name=None)


_ROUND_NUMBER = re.compile(r'(\d+)$')
_GRID_COLUMNS = 3


def round_number(round_id) -> int:
    match = _ROUND_NUMBER.search(str(round_id or ''))
    return int(match.group(1)) if match else 1


def share_text(session: RoundSession, round_id=None) -> str:
    """Spoiler-free summary: a 3x3 grid of flipped/unflipped tiles plus the score."""
    lines = [f"Athlete Unknown {session.player.sport} #{round_number(round_id)}"]
    row = ''
    for i, key in enumerate(TILE_KEYS, start=1):
        tile = session.tile(key)
        row += '\U0001f7e8' if tile is not None and tile.flipped else '\U0001f7e6'
        if i % _GRID_COLUMNS == 0:
            lines.append(row)
            row = ''
    if row:
        lines.append(row)
    lines.append(f"Score: {session.score}")
    return '\n'.join(lines)

