from flask import Blueprint, jsonify, request, current_app
from flask_login import login_required, current_user
from athlete_unknown import db
from athlete_unknown.models import Round, PlaySession
from athlete_unknown.api.params import parse_round_key, today
from athlete_unknown.services.games.board import (
    PlayerFact,
    RoundSession,
    flip_tile,
    give_up,
    new_session,
    share_text,
    submit_guess,
)
from athlete_unknown.services.games.hints import hint_for
from athlete_unknown.services.games.history import RoundHistoryEntry
from athlete_unknown.services.games.results import record_result
from athlete_unknown.services.games.rules import SPORTS
from athlete_unknown.services.games.scoring import rank_for
import json


rounds = Blueprint('rounds', __name__)


def _rules():
    return current_app.extensions['game_rules']


def _round_not_found(sport, play_date):
    return jsonify({'error': f'No {sport} round for {play_date}'}), 404


def _session_view(rnd: Round, session: RoundSession) -> dict:
    rules = _rules()
    rank = rank_for(session.score, session.correct, rules) if session.terminal else None
    view = {
        'roundId': rnd.round_id,
        'sport': rnd.sport,
        'playDate': rnd.play_date,
        'score': session.score,
        'hint': hint_for(session, rules),
        'tiles': [
            {
                'key': t.key,
                'penalty': t.penalty,
                'flipped': t.flipped,
                'content': session.player.content(t.key) if t.flipped else None,
            }
            for t in session.tiles
        ],
        'flipCount': session.flip_count,
        'wrongGuessCount': session.wrong_guess_count,
        'signal': session.signal.value if session.signal else None,
        'revealedName': session.revealed_name,
        'terminal': session.terminal,
        'correct': session.correct,
        'gaveUp': session.gave_up,
        'rank': rank.value if rank else None,
    }
    if session.terminal:
        view['name'] = session.player.name
        view['shareText'] = share_text(session, rnd.round_id)
    return view


def _load_session(rnd: Round):
    row = PlaySession.query.filter_by(user_id=current_user.id, sport=rnd.sport, play_date=rnd.play_date).first()
    if row is not None:
        return row, RoundSession.from_dict(row.state_data)
    session = new_session(PlayerFact.from_dict(rnd.player_data), _rules())
    row = PlaySession(
        user_id=current_user.id,
        sport=rnd.sport,
        play_date=rnd.play_date,
        round_id=rnd.round_id,
        state=json.dumps(session.to_dict()),
    )
    db.session.add(row)
    db.session.commit()
    current_app.logger.info(f"[session-created] user={current_user.id} sport={rnd.sport} date={rnd.play_date}")
    return row, session


def _apply(transition):
    data = request.get_json(silent=True) or {}
    sport, play_date, error = parse_round_key(data.get('sport'), data.get('playDate'))
    if error:
        return jsonify({'error': error}), 400
    rnd = Round.query.filter_by(sport=sport, play_date=play_date).first()
    if rnd is None:
        return _round_not_found(sport, play_date)

    row, session = _load_session(rnd)
    updated = transition(session, data)
    if updated is session:
        return jsonify(_session_view(rnd, session))

    row.state = json.dumps(updated.to_dict())
    db.session.add(row)
    if not (updated.terminal and not session.terminal):
        db.session.commit()
        return jsonify(_session_view(rnd, updated))

    # The finishing state and its result commit together, so a failed write
    # leaves the round open for a retry.
    entry = RoundHistoryEntry(
        play_date=play_date,
        score=updated.score,
        is_correct=updated.correct,
        flipped_tiles=updated.grid_flip_order,
        incorrect_guesses=updated.wrong_guess_count,
    )
    user_id = current_user.id
    try:
        record_result(current_user._get_current_object(), sport, entry)
    except Exception:
        db.session.rollback()
        current_app.logger.warning(
            f"[round-finished] user={user_id} sport={sport} date={play_date} not recorded, rolled back"
        )
        raise
    current_app.logger.info(
        f"[round-finished] user={user_id} sport={sport} date={play_date} "
        f"score={updated.score} correct={updated.correct} gave_up={updated.gave_up}"
    )
    return jsonify(_session_view(rnd, updated))


@rounds.route('/round', methods=['GET'])
def get_round():
    sport, play_date, error = parse_round_key(request.args.get('sport'), request.args.get('playDate'))
    if error:
        return jsonify({'error': error}), 400
    rnd = Round.query.filter_by(sport=sport, play_date=play_date).first()
    if rnd is None:
        return _round_not_found(sport, play_date)
    return jsonify(rnd.to_dict())


@rounds.route('/rounds', methods=['GET'])
def list_rounds():
    sport = request.args.get('sport')
    if sport not in SPORTS:
        return jsonify({'error': f"sport must be one of: {', '.join(SPORTS)}"}), 400
    found = Round.query.filter(Round.sport == sport, Round.play_date <= today()).order_by(Round.play_date.desc()).all()
    return jsonify([r.to_dict() for r in found])


@rounds.route('/rounds/upcoming', methods=['GET'])
def list_upcoming_rounds():
    sport = request.args.get('sport')
    if sport not in SPORTS:
        return jsonify({'error': f"sport must be one of: {', '.join(SPORTS)}"}), 400
    found = Round.query.filter(Round.sport == sport, Round.play_date > today()).order_by(Round.play_date).all()
    return jsonify([r.to_dict() for r in found])


@rounds.route('/session', methods=['GET'])
@login_required
def get_session():
    sport, play_date, error = parse_round_key(request.args.get('sport'), request.args.get('playDate'))
    if error:
        return jsonify({'error': error}), 400
    rnd = Round.query.filter_by(sport=sport, play_date=play_date).first()
    if rnd is None:
        return _round_not_found(sport, play_date)
    _, session = _load_session(rnd)
    return jsonify(_session_view(rnd, session))


@rounds.route('/session/flip', methods=['POST'])
@login_required
def flip():
    return _apply(lambda session, data: flip_tile(session, str(data.get('tile') or '')))


@rounds.route('/session/guess', methods=['POST'])
@login_required
def guess():
    return _apply(lambda session, data: submit_guess(session, data.get('guess'), _rules()))


@rounds.route('/session/give-up', methods=['POST'])
@login_required
def surrender():
    return _apply(lambda session, data: give_up(session))
