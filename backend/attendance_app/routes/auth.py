from flask import Blueprint, request, jsonify, current_app, make_response, g
from flask_jwt_extended import create_access_token, jwt_required, get_jwt_identity, get_jwt
from sqlalchemy.exc import IntegrityError
from attendance_app.models import User, TokenBlocklist, RoleEnum
from attendance_app.extensions import db, limiter
from attendance_app.curriculum import get_curriculum
from attendance_app.timetables import replace_student_timetable
from utils.serialization import request_json
from utils.audit import log_event
from utils.decorators import current_user_required
from datetime import datetime, timezone

auth_bp = Blueprint('auth', __name__)


def _text(data, key):
    value = data.get(key)
    return value.strip() if isinstance(value, str) else ""


def _password(data):
    value = data.get('password')
    return value if isinstance(value, str) else ""


def issue_token(user):
    return create_access_token(
        identity=str(user.id),
        additional_claims={
            "username": user.username,
            "level": user.level,
            "room": user.room,
            "role": user.role.value,
        }
    )


def token_response(user, message, status=200):
    """JSON {token, user} for API clients, plus the access cookie for browsers."""
    token = issue_token(user)
    response = make_response(jsonify({
        "message": message,
        "token": token,
        "user": user.to_dict(),
    }), status)

    expires = current_app.config["JWT_ACCESS_TOKEN_EXPIRES"]
    response.set_cookie(
        "access_token_cookie",
        token,
        max_age=int(expires.total_seconds()),
        httponly=True,
        secure=current_app.config["JWT_COOKIE_SECURE"],
        samesite=current_app.config["JWT_COOKIE_SAMESITE"],
        path="/"
    )
    return response


@auth_bp.route('/register', methods=['POST'])
@limiter.limit("10 per minute", override_defaults=False)
def register():
    data = request_json()
    username = _text(data, 'username')
    password = _password(data)
    full_name = _text(data, 'fullName')
    level = _text(data, 'level')
    room = _text(data, 'room')

    if not username or not password or not full_name or not level or not room:
        return jsonify({"error": "Username, password, full name, level and room are required"}), 400

    if User.query.filter_by(username=username).first():
        return jsonify({"error": "Username already exists"}), 409

    user = User(username=username, full_name=full_name, level=level, room=room, role=RoleEnum.student)
    user.set_password(password)
    db.session.add(user)
    try:
        db.session.flush()
    except IntegrityError:
        db.session.rollback()
        return jsonify({"error": "Username already exists"}), 409

    replace_student_timetable(user, data.get('timetable'), get_curriculum(), commit=False)
    db.session.commit()

    log_event("REGISTER", user_id=user.id, ip=request.remote_addr, description=f"{username} registered")
    return token_response(user, "User created", 201)


@auth_bp.route('/login', methods=['POST'])
@limiter.limit("10 per minute", override_defaults=False)
def login():
    data = request_json()
    username = _text(data, 'username')
    password = _password(data)
    ip = request.remote_addr

    if not username or not password:
        return jsonify({"error": "Username and password are required"}), 400

    user = User.query.filter_by(username=username).first()

    if user and user.check_password(password):
        log_event("LOGIN_SUCCESS", user_id=user.id, ip=ip, description=f"{username} logged in")
        return token_response(user, "Login successful")

    log_event("LOGIN_FAILED", ip=ip, description=f"Failed login attempt for {username}", level="WARNING")
    return jsonify({"error": "Invalid username or password"}), 401


@auth_bp.route('/me', methods=['GET'])
@jwt_required()
@current_user_required
def get_current_user():
    return jsonify({"user": g.current_user.to_dict()}), 200


@auth_bp.route("/logout", methods=["POST"])
@jwt_required()
def logout():
    claims = get_jwt()
    user_id = get_jwt_identity()
    expires = datetime.fromtimestamp(claims["exp"], tz=timezone.utc).replace(tzinfo=None)

    db.session.add(TokenBlocklist(jti=claims["jti"], token_type=claims.get("type", "access"),
                                  user_id=int(user_id), expires_at=expires))
    db.session.commit()

    response = make_response(jsonify({"message": "Successfully logged out"}))
    response.delete_cookie("access_token_cookie", path="/")

    log_event("LOGOUT", user_id=user_id, ip=request.remote_addr)
    return response
