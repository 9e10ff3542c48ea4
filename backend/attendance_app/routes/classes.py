from flask import Blueprint, request, jsonify, g
from flask_jwt_extended import jwt_required
from attendance_app.timetables import get_class_timetable, replace_class_timetable
from utils.serialization import request_json
from utils.audit import log_event
from utils.decorators import role_required

classes_bp = Blueprint('classes', __name__)
public_classes_bp = Blueprint('public_classes', __name__)


def _class_timetable():
    level = (request.args.get('level') or '').strip()
    room = (request.args.get('room') or '').strip()
    if not level or not room:
        return jsonify({"error": "level and room are required, e.g. ม.6, 6/2"}), 400

    return jsonify(get_class_timetable(level, room)), 200


# Readable without a token: the registration screen prefills from it.
@classes_bp.route('/timetable', methods=['GET'])
def class_timetable():
    return _class_timetable()


@public_classes_bp.route('/timetable', methods=['GET'])
def public_class_timetable():
    return _class_timetable()


@classes_bp.route('/timetable', methods=['PUT'])
@jwt_required()
@role_required('teacher')
def save_class_timetable():
    data = request_json()
    level = data.get('level').strip() if isinstance(data.get('level'), str) else ''
    room = data.get('room').strip() if isinstance(data.get('room'), str) else ''
    timetable = data.get('timetable')

    if not level or not room or not isinstance(timetable, list):
        return jsonify({"error": "level, room and timetable (array) are required"}), 400

    count = replace_class_timetable(level, room, timetable)

    log_event("CLASS_TIMETABLE_SAVED", user_id=g.current_user.id, ip=request.remote_addr,
              description=f"{level} {room}: {count} slots")
    return jsonify({"message": "Class timetable saved", "count": count}), 200
