from flask import Blueprint, request, current_app, g
from flask_login import LoginManager, current_user
from werkzeug.security import generate_password_hash, check_password_hash
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired
from functools import wraps
from sqlalchemy.exc import IntegrityError
from repositories.user_repository import UserRepository
from api_responses import success_response, handle_api_errors
from routes import json_body
from exceptions import AuthenticationException, AuthorizationException, ConflictException, ValidationException
from extensions import limiter
from constants import ROLES, ROLE_STAFF, ROLE_ADMIN, MIN_PIN_LENGTH, SESSION_SALT
import logging

# Retrieve main logger
logger = logging.getLogger("main")

INVALID_CREDENTIALS = "Invalid credentials"

auth_blueprint = Blueprint("auth", __name__, url_prefix="/api/auth")

login_manager = LoginManager()


def hash_pin(pin):
    return generate_password_hash(pin, method="pbkdf2:sha256")


def verify_pin(user, pin):
    return check_password_hash(user.pin_hash, pin)


def _serializer():
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"], salt=SESSION_SALT)


def issue_session_token(user):
    """Signed, timestamped bearer credential for a user."""
    return _serializer().dumps({"user_id": user.id, "name": user.name, "role": user.role})


def verify_session_token(token):
    """
    Single session check shared by the REST path and the realtime handshake.
    Returns the User, or None for a missing, tampered, expired or orphaned token.
    """
    if not token or not isinstance(token, str):
        return None
    try:
        payload = _serializer().loads(token, max_age=current_app.config["SESSION_EXPIRY_SECONDS"])
    except SignatureExpired:
        logger.info("Rejected expired session token")
        return None
    except BadSignature:
        logger.warning("Rejected session token with bad signature")
        return None

    user_id = payload.get("user_id") if isinstance(payload, dict) else None
    if not isinstance(user_id, int):
        return None
    return UserRepository.get_by_id(user_id)


def bearer_token(req):
    auth_header = req.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None
    return auth_header.split(" ", 1)[1].strip() or None


@login_manager.request_loader
def load_user_from_request(req):
    token = bearer_token(req)
    if token is None:
        return None
    user = verify_session_token(token)
    if user is None:
        g.auth_error = "Invalid or expired token"
    return user


def access_required(access="staff"):
    """Reject the request before it reaches domain logic unless the bearer
    credential is valid (and, for 'admin', belongs to an admin)."""

    def _access_required(f):
        @wraps(f)
        def decorated_view(*args, **kwargs):
            if not current_user.is_authenticated:
                raise AuthenticationException(g.get("auth_error", "Authentication required"))
            if not current_user.has_access(access):
                raise AuthorizationException("Admin access required")
            return f(*args, **kwargs)

        return decorated_view

    return _access_required


def authenticate(name, pin):
    """Return the user for a name/PIN pair; unknown user and wrong PIN are indistinguishable."""
    user = UserRepository.find_by_name(name.strip())
    if user is None or not verify_pin(user, pin):
        logger.warning(f"Incorrect login for user {name}")
        raise AuthenticationException(INVALID_CREDENTIALS)
    UserRepository.touch_last_login(user.id)
    logger.info(f"Successful login for user {user.name}")
    return user


def create_user(name, pin, role=ROLE_STAFF):
    name = (name or "").strip() if isinstance(name, str) else ""
    if not name or not pin or not isinstance(pin, str):
        raise ValidationException("Name and PIN are required")
    if len(pin) < MIN_PIN_LENGTH:
        raise ValidationException(f"PIN must be at least {MIN_PIN_LENGTH} characters")
    if role not in ROLES:
        raise ValidationException(f"Role must be one of: {', '.join(ROLES)}")
    if UserRepository.find_by_name(name):
        raise ConflictException("User already exists")

    try:
        user = UserRepository.create(name=name, pin_hash=hash_pin(pin), role=role)
    except IntegrityError:
        # Lost a race against a concurrent create with the same name
        raise ConflictException("User already exists")
    logger.info(f"Created {role} user {name}")
    return user


def set_user_pin(name, pin):
    """Replace a user's PIN, creating an admin with that name if none exists."""
    if not isinstance(pin, str) or len(pin) < MIN_PIN_LENGTH:
        raise ValidationException(f"PIN must be at least {MIN_PIN_LENGTH} characters")
    user = UserRepository.find_by_name(name.strip())
    if user is None:
        logger.warning(f"User '{name}' not found. Creating new admin user.")
        return create_user(name, pin, ROLE_ADMIN)
    UserRepository.update_pin(user.id, hash_pin(pin))
    logger.info(f"PIN updated for user {user.name}")
    return user


@auth_blueprint.post("/login")
@limiter.limit("20 per minute")
@handle_api_errors("Login failed")
def login():
    data = json_body()
    name = data.get("name")
    pin = data.get("pin")

    if not isinstance(name, str) or not isinstance(pin, str) or not name.strip() or not pin:
        raise ValidationException("Name and PIN are required")

    user = authenticate(name, pin)
    return success_response(data={"token": issue_session_token(user), "user": user.summary()})


@auth_blueprint.get("/verify")
@access_required()
def verify():
    return success_response(data={"valid": True, "user": current_user.summary()})


@auth_blueprint.post("/users")
@access_required(ROLE_ADMIN)
@handle_api_errors("Failed to create user")
def create_user_api():
    data = json_body()
    user = create_user(data.get("name"), data.get("pin"), data.get("role") or ROLE_STAFF)
    return success_response(data={"id": user.id, "user": user.summary()}, status_code=201)


@auth_blueprint.get("/users")
@access_required(ROLE_ADMIN)
@handle_api_errors("Failed to list users")
def list_users_api():
    return success_response(data=[u.to_dict() for u in UserRepository.get_all()])
