import logging
from datetime import datetime, timedelta, timezone
from functools import wraps

import bcrypt
import jwt
from flask import current_app, request

from .errors import Forbidden, Unauthorized
from .models import User, db

logger = logging.getLogger(__name__)


def hash_password(password):
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def check_password(password, hashed):
    return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))


# Generate JWT
def generate_token(user_id):
    now = datetime.now(timezone.utc)
    payload = {
        "user_id": user_id,
        "exp": now + timedelta(hours=current_app.config["JWT_EXPIRATION_HOURS"]),
        "iat": now,
    }
    return jwt.encode(payload, current_app.config["JWT_SECRET_KEY"], algorithm="HS256")


# JWT middleware
def token_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        token = request.headers.get("Authorization", "")
        if not token.startswith("Bearer "):
            logger.error("Token missing in request")
            raise Unauthorized("No token provided. Authorization header must be in format: Bearer <token>")
        token = token[7:]
        try:
            payload = jwt.decode(token, current_app.config["JWT_SECRET_KEY"], algorithms=["HS256"])
        except jwt.ExpiredSignatureError:
            logger.error("Token expired")
            raise Unauthorized("Token expired")
        except jwt.InvalidTokenError:
            logger.error("Invalid token")
            raise Unauthorized("Invalid or expired token")
        user_id = payload.get("user_id")
        user = db.session.get(User, user_id) if user_id else None
        if not user:
            logger.error("User not found for token")
            raise Unauthorized("Invalid token")
        return f(user, *args, **kwargs)
    return decorated


def ensure_owner(user_id, owner_id, message="You do not have permission to access this resource"):
    if user_id != owner_id:
        logger.error(f"Unauthorized access by user {user_id} to resource owned by {owner_id}")
        raise Forbidden(message)
