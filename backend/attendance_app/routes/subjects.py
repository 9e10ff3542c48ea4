from flask import Blueprint, request, jsonify, current_app
from attendance_app.curriculum import get_curriculum

subjects_bp = Blueprint('subjects', __name__)


@subjects_bp.route('', methods=['GET'])
def list_subjects():
    level = (request.args.get('level') or '').strip()
    room = (request.args.get('room') or '').strip() or None

    if not level:
        return jsonify({"error": "level is required, e.g. ม.6"}), 400

    try:
        subjects = get_curriculum().subjects_for(level, room)
    except Exception:
        current_app.logger.exception("Curriculum lookup failed for %s %s", level, room)
        subjects = []

    return jsonify(subjects), 200
