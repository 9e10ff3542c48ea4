from flask import Blueprint, jsonify, g
from flask_jwt_extended import jwt_required
from attendance_app.summary import compute_summary
from utils.decorators import current_user_required

summary_bp = Blueprint('summary', __name__)


@summary_bp.route('', methods=['GET'])
@jwt_required()
@current_user_required
def get_summary():
    return jsonify(compute_summary(g.current_user.id)), 200
