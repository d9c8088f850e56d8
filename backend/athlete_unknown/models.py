from athlete_unknown import db
from flask_login import UserMixin
from datetime import datetime, timezone
import json


def _utcnow():
    return datetime.now(timezone.utc)


def _load_json(raw, default):
    try:
        return json.loads(raw) if raw else default
    except ValueError:
        return default


class User(UserMixin, db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    # Subject id issued by the upstream identity provider
    external_id = db.Column(db.String(128), unique=True, nullable=False, index=True)
    username = db.Column(db.String(128), nullable=False)
    created = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False)
    current_daily_streak = db.Column(db.Integer, default=0, nullable=False)
    last_day_played = db.Column(db.String(10), nullable=True)
    sport_stats = db.relationship('SportStats', back_populates='user', lazy='dynamic')

    def to_dict(self):
        return {
            'userId': self.external_id,
            'userName': self.username,
            'userCreated': self.created.isoformat() if self.created else '',
            'currentDailyStreak': self.current_daily_streak or 0,
            'lastDayPlayed': self.last_day_played or '',
        }


class Round(db.Model):
    __tablename__ = 'round'
    __table_args__ = (db.UniqueConstraint('sport', 'play_date', name='uq_round_sport_play_date'),)
    id = db.Column(db.Integer, primary_key=True)
    round_id = db.Column(db.String(64), unique=True, nullable=False, index=True)
    sport = db.Column(db.String(32), nullable=False, index=True)
    play_date = db.Column(db.String(10), nullable=False, index=True)
    theme = db.Column(db.String(128), nullable=True)
    player = db.Column(db.Text, nullable=False)  # JSON-encoded PlayerFact
    created = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False)
    last_updated = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    @property
    def player_data(self):
        return _load_json(self.player, {})

    def to_dict(self):
        return {
            'roundId': self.round_id,
            'sport': self.sport,
            'playDate': self.play_date,
            'created': self.created.isoformat() if self.created else None,
            'lastUpdated': self.last_updated.isoformat() if self.last_updated else None,
            'theme': self.theme,
            'player': self.player_data,
        }


class SportStats(db.Model):
    __tablename__ = 'sport_stats'
    __table_args__ = (db.UniqueConstraint('user_id', 'sport', name='uq_sport_stats_user_sport'),)
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    sport = db.Column(db.String(32), nullable=False)
    stats = db.Column(db.Text, nullable=True)  # JSON-encoded Stats
    history = db.Column(db.Text, nullable=True)  # JSON-encoded list of round history entries
    baseline = db.Column(db.Text, nullable=True)  # JSON-encoded Stats imported without a history
    user = db.relationship('User', back_populates='sport_stats')

    @property
    def stats_data(self):
        return _load_json(self.stats, {})

    @property
    def history_data(self):
        return _load_json(self.history, [])

    @property
    def baseline_data(self):
        return _load_json(self.baseline, None)

    def to_dict(self):
        return {
            'sport': self.sport,
            'stats': self.stats_data,
            'history': self.history_data,
        }


class RoundResult(db.Model):
    __tablename__ = 'round_result'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'sport', 'play_date', name='uq_round_result_user_sport_date'),
    )
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    sport = db.Column(db.String(32), nullable=False)
    play_date = db.Column(db.String(10), nullable=False)
    score = db.Column(db.Integer, nullable=False)
    is_correct = db.Column(db.Boolean, default=False, nullable=False)
    tiles_flipped = db.Column(db.Text, nullable=True)  # JSON-encoded list of tile keys
    incorrect_guesses = db.Column(db.Integer, default=0, nullable=False)

    def to_dict(self):
        return {
            'playDate': self.play_date,
            'score': self.score,
            'isCorrect': self.is_correct,
            'tilesFlipped': _load_json(self.tiles_flipped, []),
            'incorrectGuesses': self.incorrect_guesses,
        }


class PlaySession(db.Model):
    __tablename__ = 'play_session'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'sport', 'play_date', name='uq_play_session_user_sport_date'),
    )
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    sport = db.Column(db.String(32), nullable=False)
    play_date = db.Column(db.String(10), nullable=False)
    round_id = db.Column(db.String(64), nullable=True)
    state = db.Column(db.Text, nullable=False)  # JSON-encoded RoundSession

    @property
    def state_data(self):
        return _load_json(self.state, {})
