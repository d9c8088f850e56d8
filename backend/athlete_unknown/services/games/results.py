"""Persistence of finished rounds, per-user stats and guest stats imports."""

import json
from typing import List, Optional, Tuple

from flask import current_app

from athlete_unknown import db, socketio
from athlete_unknown.models import RoundResult, SportStats, User
from athlete_unknown.socketio_events import user_room
from .history import (
    RoundHistoryEntry,
    find_entry,
    history_from_json,
    next_streak,
    parse_play_date,
    upsert_history,
)
from .stats import Stats, aggregate, recompute


def get_sport_stats(user: User, sport: str, create: bool = False) -> Optional[SportStats]:
    row = SportStats.query.filter_by(user_id=user.id, sport=sport).first()
    if row is None and create:
        row = SportStats(user_id=user.id, sport=sport, stats=json.dumps(Stats().to_dict()), history='[]')
        db.session.add(row)
    return row


def load_history(row: Optional[SportStats]) -> List[RoundHistoryEntry]:
    return history_from_json(row.history_data) if row is not None else []


def load_baseline(row: Optional[SportStats]) -> Optional[Stats]:
    data = row.baseline_data if row is not None else None
    return Stats.from_dict(data) if data else None


def record_result(user: User, sport: str, entry: RoundHistoryEntry) -> Tuple[Stats, bool]:
    """Persist a finished round for ``(user, sport, entry.play_date)``.

    A retried submission for an already recorded date replaces the stored
    entry and recomputes the stats from the full history on top of any
    imported baseline, so a round is never counted twice. Changes already
    pending in the database session commit together with the result. Returns
    the new stats and whether an entry was replaced.
    """
    row = get_sport_stats(user, sport, create=True)
    history = load_history(row)
    replaced = find_entry(history, entry.play_date) is not None
    history = upsert_history(history, entry)
    if replaced:
        stats = recompute(history, load_baseline(row))
    else:
        stats = aggregate(Stats.from_dict(row.stats_data), entry)
        user.current_daily_streak, user.last_day_played = next_streak(
            user.current_daily_streak or 0, user.last_day_played, entry.play_date
        )
        db.session.add(user)

    row.history = json.dumps([e.to_dict() for e in history])
    row.stats = json.dumps(stats.to_dict())
    db.session.add(row)
    _upsert_round_result(user, sport, entry)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    current_app.logger.info(
        f"[result-recorded] user={user.id} sport={sport} date={entry.play_date} "
        f"score={entry.score} correct={entry.is_correct} replaced={replaced}"
    )
    socketio.emit(
        'stats_update',
        {'sport': sport, 'playDate': entry.play_date},
        to=user_room(user.external_id),
        namespace='/ws',
    )
    return stats, replaced


def _upsert_round_result(user: User, sport: str, entry: RoundHistoryEntry) -> None:
    result = RoundResult.query.filter_by(user_id=user.id, sport=sport, play_date=entry.play_date).first()
    if result is None:
        result = RoundResult(user_id=user.id, sport=sport, play_date=entry.play_date)
    result.score = entry.score
    result.is_correct = entry.is_correct
    result.tiles_flipped = json.dumps(list(entry.flipped_tiles))
    result.incorrect_guesses = entry.incorrect_guesses
    db.session.add(result)


def round_stats(sport: str, play_date: str) -> Stats:
    """Stats for one daily round across every player who finished it."""
    results = RoundResult.query.filter_by(sport=sport, play_date=play_date).order_by(RoundResult.id).all()
    return recompute(RoundHistoryEntry.from_dict(r.to_dict()) for r in results)


def has_recorded_stats(user: User) -> bool:
    for row in SportStats.query.filter_by(user_id=user.id).all():
        if row.history_data or Stats.from_dict(row.stats_data).total_plays > 0:
            return True
    return False


def migrate_guest_stats(user: User, blob: dict) -> bool:
    """Import stats gathered while playing as a guest.

    Returns False when the user already has recorded stats. Sports with a
    history are recomputed from it; otherwise the given stats are kept as the
    baseline later results build on.
    """
    if has_recorded_stats(user):
        current_app.logger.info(f"[stats-migrate] user={user.id} rejected: already migrated")
        return False

    parsed = []
    for item in blob.get('sports') or []:
        history = []
        for raw in item.get('history') or []:
            history = upsert_history(history, RoundHistoryEntry.from_dict(raw))
        stats = recompute(history) if history else Stats.from_dict(item.get('stats'))
        if stats.total_plays > 0:
            parsed.append((item.get('sport'), history, stats))
    last_day = parse_play_date(blob['lastDayPlayed']).isoformat() if blob.get('lastDayPlayed') else None

    for sport, history, stats in parsed:
        row = get_sport_stats(user, sport, create=True)
        row.history = json.dumps([e.to_dict() for e in history])
        row.stats = json.dumps(stats.to_dict())
        row.baseline = None if history else row.stats
        db.session.add(row)
        for entry in history:
            _upsert_round_result(user, sport, entry)

    if last_day:
        user.last_day_played = last_day
        user.current_daily_streak = int(blob.get('currentDailyStreak') or 1)
        db.session.add(user)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    current_app.logger.info(f"[stats-migrate] user={user.id} sports={','.join(sport for sport, _, _ in parsed) or '-'}")
    return True
