"""
Authentication blueprint:
- POST /auth/signup
- POST /auth/login
- POST /auth/refresh
- POST /auth/logout
- GET  /auth/me

The views only parse the body and shape the response; the rules live in
auth.service.AuthService (argon2 credentials, HS256 access tokens, rotating
opaque refresh tokens stored as hashes).
"""
from __future__ import annotations

from flask import Blueprint, request, jsonify, g, current_app

from auth.decorators import jwt_required
from models.schemas.user import LoginSchema, RefreshTokenSchema, SignupSchema, UserOutSchema

bp = Blueprint("auth", __name__)

signup_schema = SignupSchema()
login_schema = LoginSchema()
refresh_token_schema = RefreshTokenSchema()
user_out_schema = UserOutSchema()


def _service():
    return current_app.extensions["auth_service"]


def _token_pair_json(pair):
    return {
        "accessToken": pair.access_token,
        "refreshToken": pair.refresh_token,
        "expiresIn": pair.expires_in,
    }


@bp.post("/signup")
def signup():
    """
    Register a new user.
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          required: [email, password]
          properties:
            email: { type: string }
            password: { type: string }
            name: { type: string }
    responses:
      201:
        description: Created
      400:
        description: Validation error
      409:
        description: Email already registered
    """
    data = signup_schema.load(request.get_json(silent=True) or {})
    user = _service().signup(data.get("email"), data.get("password"), data.get("name"))
    return jsonify(user_out_schema.dump(user)), 201


@bp.post("/login")
def login():
    """
    Login: returns accessToken, refreshToken and expiresIn
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             email: { type: string }
             password: { type: string }
    responses:
      200:
        description: OK (returns tokens)
      400:
        description: Validation error
      401:
        description: Invalid credentials
    """
    data = login_schema.load(request.get_json(silent=True) or {})
    pair = _service().login(data.get("email"), data.get("password"))
    return jsonify(_token_pair_json(pair)), 200


@bp.post("/refresh")
def refresh():
    """
    Exchange a refresh token for a new token pair (the old one is revoked)
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             refreshToken: { type: string }
    responses:
      200:
        description: OK (returns rotated tokens)
      400:
        description: Missing or malformed refresh token
      401:
        description: Invalid, revoked or expired refresh token
    """
    data = refresh_token_schema.load(request.get_json(silent=True) or {})
    pair = _service().refresh(data.get("refresh_token"))
    return jsonify(_token_pair_json(pair)), 200


@bp.post("/logout")
def logout():
    """
    Logout: revokes the given refresh token (idempotent)
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             refreshToken: { type: string }
    responses:
      204:
        description: ""
      400:
        description: Missing or malformed refresh token
    """
    data = refresh_token_schema.load(request.get_json(silent=True) or {})
    _service().logout(data.get("refresh_token"))
    return ("", 204)


@bp.get("/me")
@jwt_required()
def me():
    """
    Current user info
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: OK
      401:
        description: Unauthorized
    """
    return jsonify(user_out_schema.dump(g.current_user)), 200
