from flask import Blueprint, request, jsonify, g
from flask_jwt_extended import jwt_required
from attendance_app.extensions import db
from attendance_app.curriculum import get_curriculum
from attendance_app.timetables import replace_student_timetable, refresh_enrollment, get_student_timetable
from attendance_app.routes.auth import token_response
from utils.serialization import request_json
from utils.audit import log_event
from utils.decorators import current_user_required

profile_bp = Blueprint('profile', __name__)


@profile_bp.route('/profile', methods=['PUT'])
@jwt_required()
@current_user_required
def update_profile():
    user = g.current_user
    data = request_json()
    previous_room = (user.level, user.room)

    for key, attr in (('fullName', 'full_name'), ('level', 'level'), ('room', 'room')):
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            setattr(user, attr, value.strip())

    timetable = data.get('timetable')
    if isinstance(timetable, list):
        count = replace_student_timetable(user, timetable, get_curriculum(), commit=False)
        log_event("TIMETABLE_SAVED", user_id=user.id, ip=request.remote_addr, description=f"{count} slots")
    elif (user.level, user.room) != previous_room:
        refresh_enrollment(user, get_curriculum(), commit=False)

    db.session.commit()

    log_event("PROFILE_UPDATED", user_id=user.id, ip=request.remote_addr)
    return token_response(user, "Profile updated")


@profile_bp.route('/timetable', methods=['GET'])
@jwt_required()
@current_user_required
def my_timetable():
    return jsonify(get_student_timetable(g.current_user.id)), 200
