from datetime import date

from athlete_unknown.services.games.history import parse_play_date
from athlete_unknown.services.games.rules import SPORTS


def today() -> str:
    return date.today().isoformat()


def parse_round_key(sport, play_date):
    """Validate a ``(sport, playDate)`` pair from a request.

    Returns ``(sport, play_date, error)``; ``error`` is a message for a 400
    response, or None. A missing date means today.
    """
    if sport not in SPORTS:
        return None, None, f"sport must be one of: {', '.join(SPORTS)}"
    if not play_date:
        return sport, today(), None
    try:
        return sport, parse_play_date(play_date).isoformat(), None
    except ValueError:
        return None, None, 'playDate must be formatted YYYY-MM-DD'
