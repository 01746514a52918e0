import logging
from flask import Blueprint, request, jsonify, make_response, current_app

from classes.validators import LoginPayload, parse_body
from models.users import User
from utils.errors import Unauthorized
from utils.tokens import get_jwt_token, decode_jwt

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth_bp', __name__)


def _set_token_cookie(response, token, max_age):
    response.set_cookie(
        "access_token", token,
        httponly=True,
        secure=current_app.config["SESSION_COOKIE_SECURE"],
        samesite=current_app.config["SESSION_COOKIE_SAMESITE"],
        path="/",
        max_age=max_age
    )


# Login
@auth_bp.route('/login', methods=['POST'])
def login():
    data = parse_body(LoginPayload, request.get_json(silent=True))

    user = User.query.filter_by(email=data.email.lower()).first()
    if not user or not user.check_password(data.password):
        logger.info("Failed login attempt for %s", data.email)
        raise Unauthorized("Invalid credentials")

    token = get_jwt_token({
        "user_id": user.id,
        "email": user.email,
        "role": user.role,
    })

    response = make_response(jsonify({
        "success": True,
        "data": {
            "id": user.id,
            "role": user.role,
            "email": user.email,
            "full_name": user.full_name
        }
    }))
    _set_token_cookie(response, token, int(current_app.config["JWT_EXPIRATION"].total_seconds()))
    return response


# Logout
@auth_bp.route('/logout', methods=['POST'])
def logout():
    response = make_response(jsonify({"success": True, "data": {"message": "Logout successful"}}))
    _set_token_cookie(response, "", 0)
    return response


# Auth Check
@auth_bp.route('/check-auth', methods=['GET'])
def check_auth():
    token = request.cookies.get("access_token")
    if not token:
        raise Unauthorized("Not authenticated")

    decoded_token = decode_jwt(token)
    if not decoded_token:
        raise Unauthorized("Invalid or expired token")

    return jsonify({
        "success": True,
        "data": {
            "id": decoded_token.get("user_id"),
            "role": decoded_token.get("role"),
            "email": decoded_token.get("email"),
        }
    }), 200
