from flask import Blueprint, jsonify, request, current_app
from flask_login import login_required, current_user
from athlete_unknown import db
from athlete_unknown.models import SportStats
from athlete_unknown.api.params import parse_round_key
from athlete_unknown.services.games.history import RoundHistoryEntry
from athlete_unknown.services.games.results import migrate_guest_stats, record_result, round_stats
from athlete_unknown.services.games.rules import SPORTS


stats = Blueprint('stats', __name__)


@stats.route('/results', methods=['POST'])
@login_required
def submit_results():
    sport, play_date, error = parse_round_key(request.args.get('sport'), request.args.get('playDate'))
    if error:
        return jsonify({'error': error}), 400
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'A JSON result body is required'}), 400
    try:
        entry = RoundHistoryEntry.from_dict(data, play_date=play_date)
    except ValueError as exc:
        return jsonify({'error': str(exc)}), 400

    _, replaced = record_result(current_user._get_current_object(), sport, entry)
    message = 'Result replaced' if replaced else 'Result recorded'
    return jsonify({'success': True, 'message': message, 'result': entry.to_dict()}), 200 if replaced else 201


@stats.route('/stats/user', methods=['GET'])
@login_required
def get_user_stats():
    payload = current_user.to_dict()
    rows = {row.sport: row for row in SportStats.query.filter_by(user_id=current_user.id).all()}
    payload['sports'] = [rows[sport].to_dict() for sport in SPORTS if sport in rows]
    return jsonify(payload)


@stats.route('/stats/round', methods=['GET'])
def get_round_stats():
    sport, play_date, error = parse_round_key(request.args.get('sport'), request.args.get('playDate'))
    if error:
        return jsonify({'error': error}), 400
    payload = round_stats(sport, play_date).to_dict()
    payload['playDate'] = play_date
    payload['sport'] = sport
    return jsonify(payload)


@stats.route('/stats/migrate', methods=['POST'])
@login_required
def migrate_stats():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'A JSON stats body is required'}), 400
    sports = data.get('sports') or []
    if not isinstance(sports, list) or any(not isinstance(s, dict) or s.get('sport') not in SPORTS for s in sports):
        return jsonify({'error': f"each sports entry needs a sport in: {', '.join(SPORTS)}"}), 400
    try:
        migrated = migrate_guest_stats(current_user._get_current_object(), data)
    except (ValueError, TypeError, AttributeError) as exc:
        db.session.rollback()
        current_app.logger.warning(f"[stats-migrate] user={current_user.id} invalid payload: {exc}")
        return jsonify({'error': f'Invalid stats payload: {exc}'}), 400
    if not migrated:
        return jsonify({'error': 'USER_ALREADY_MIGRATED'}), 409
    return jsonify({'success': True, 'message': 'Stats migrated'}), 201
