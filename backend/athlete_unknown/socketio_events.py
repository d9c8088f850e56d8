from flask_socketio import join_room, leave_room, emit
from athlete_unknown import socketio


def user_room(user_id) -> str:
    return f"user:{user_id}"


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_user(data):
    # Each open tab joins its user's room to hear about stats changes made elsewhere
    user_id = (data or {}).get('user_id')
    if user_id is None or str(user_id) == '':
        emit('error', {'message': 'user_id is required'})
        return
    room = user_room(user_id)
    join_room(room)
    emit('joined', {'room': room})


def handle_leave_user(data):
    user_id = (data or {}).get('user_id')
    if user_id is None or str(user_id) == '':
        emit('error', {'message': 'user_id is required'})
        return
    room = user_room(user_id)
    leave_room(room)
    emit('left', {'room': room})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    namespaces = ['/ws', '/'] if testing else ['/ws']
    for namespace in namespaces:
        socketio.on_event('connect', handle_connect, namespace=namespace)
        socketio.on_event('join_user', handle_join_user, namespace=namespace)
        socketio.on_event('leave_user', handle_leave_user, namespace=namespace)
        socketio.on_event('ping', handle_ping, namespace=namespace)
