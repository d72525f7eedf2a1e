from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required, login_user, logout_user

from turftrack.extensions import limiter
from turftrack.services import AuthService
from turftrack.services.validators import json_object

api_auth_bp = Blueprint("api_auth", __name__)


@api_auth_bp.post("/register")
@limiter.limit("10 per minute")
def api_register():
    payload = json_object(request.get_json(silent=True))
    user = AuthService.register_user(
        email=payload.get("email", ""),
        password=payload.get("password", ""),
        first_name=payload.get("first_name"),
        last_name=payload.get("last_name"),
    )
    login_user(user)
    return jsonify(user.to_dict()), 201


@api_auth_bp.post("/login")
@limiter.limit("20 per minute")
def api_login():
    payload = json_object(request.get_json(silent=True))
    user = AuthService.authenticate_user(payload.get("email", ""), payload.get("password", ""))
    login_user(user)
    return jsonify(user.to_dict())


@api_auth_bp.post("/logout")
@login_required
def api_logout():
    logout_user()
    return jsonify({"ok": True})


@api_auth_bp.get("/me")
@login_required
def api_me():
    return jsonify(current_user.to_dict())
