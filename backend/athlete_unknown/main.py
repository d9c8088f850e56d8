from flask import Blueprint, jsonify
from flask_login import login_required, current_user

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Athlete Unknown game server!'})

@main.route('/v1/me')
@login_required
def whoami():
    return jsonify(current_user.to_dict())
