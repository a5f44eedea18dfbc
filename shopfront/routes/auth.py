"""帳號註冊與登入路由。"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from flask import Blueprint, current_app, jsonify, request, session

from ..common.errors import UserAlreadyExistsError
from ..common.schemas import LoginIn, SignupIn
from ..common.services.logging import log_event
from ..common.utils.dto import to_public_user
from ..common.utils.validators import validate_payload

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "shopfront_user_id"

auth_bp = Blueprint("shopfront_auth", __name__, url_prefix="/api/auth")


def _components() -> Dict[str, Any]:
    return current_app.extensions["shopfront_components"]


def current_user():
    """回傳目前登入的帳號；未登入或帳號已不存在時回傳 None。"""

    user_id = session.get(SESSION_USER_KEY)
    if not user_id:
        return None
    return _components()["user_repo"].get_user(user_id)


def _unauthenticated(message: Optional[str] = None):
    return jsonify({"error": message or "Authentication required"}), 401


@auth_bp.post("/signup")
def signup():
    outcome = validate_payload(SignupIn, request.get_json(silent=True))
    if not outcome.ok:
        return jsonify({"error": "Invalid signup data", "issues": outcome.errors}), 400

    data = outcome.value
    try:
        user = _components()["user_repo"].create_user(data.name, data.email, data.password)
    except UserAlreadyExistsError:
        return jsonify({"error": "User with this email already exists"}), 409
    except OSError:
        logger.exception("Signup error")
        return jsonify({"error": "Internal server error"}), 500

    log_event("info", "user.created", user_id=user.id)
    return jsonify({"data": to_public_user(user)}), 201


@auth_bp.post("/login")
def login():
    outcome = validate_payload(LoginIn, request.get_json(silent=True))
    if not outcome.ok:
        return jsonify({"error": "Invalid login data", "issues": outcome.errors}), 400

    user = _components()["user_repo"].verify_user_credentials(
        outcome.value.email, outcome.value.password
    )
    if user is None:
        log_event("warning", "auth.login_failed")
        return _unauthenticated("Invalid email or password")

    session[SESSION_USER_KEY] = user.id
    return jsonify({"data": to_public_user(user)})


@auth_bp.post("/logout")
def logout():
    session.pop(SESSION_USER_KEY, None)
    return jsonify({"success": True})


@auth_bp.get("/me")
def me():
    user = current_user()
    if user is None:
        return _unauthenticated()
    return jsonify({"data": to_public_user(user)})
