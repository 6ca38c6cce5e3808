import logging
import re
from datetime import datetime

from flask import Blueprint, request
from sqlalchemy.exc import SQLAlchemyError

from .auth import check_password, generate_token, hash_password, token_required
from .errors import respond
from .models import User, db

logger = logging.getLogger(__name__)

bp = Blueprint("auth", __name__, url_prefix="/auth")

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6


# Register endpoint
@bp.route("/register", methods=["POST"])
def register():
    data = request.get_json(silent=True) or {}
    name = data.get("name")
    email = data.get("email")
    password = data.get("password")
    if not name or not email or not password:
        return respond("Name, email, and password are required", status=400)
    if not isinstance(email, str) or not EMAIL_PATTERN.match(email):
        return respond("Invalid email format", status=400)
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        return respond(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long", status=400)
    if User.query.filter_by(email=email).first():
        return respond("User with this email already exists", status=400)
    try:
        new_user = User(name=name, email=email, password=hash_password(password))
        db.session.add(new_user)
        db.session.commit()
    except SQLAlchemyError as e:
        logger.error(f"Database error registering user: {str(e)}")
        db.session.rollback()
        return respond("Error registering user", status=500)
    logger.info(f"User registered: {email}")
    return respond(
        "User registered successfully",
        {"token": generate_token(new_user.id), "user": new_user.to_dict()},
        status=201,
    )


# Login endpoint
@bp.route("/login", methods=["POST"])
def login():
    data = request.get_json(silent=True) or {}
    email = data.get("email")
    password = data.get("password")
    if not email or not password:
        return respond("Email and password are required", status=400)
    user = User.query.filter_by(email=email).first()
    if not user or not isinstance(password, str) or not check_password(password, user.password):
        logger.debug(f"Failed login for {email}")
        return respond("Invalid email or password", status=401)
    return respond("Login successful", {"token": generate_token(user.id), "user": user.to_dict()})


@bp.route("/change-password", methods=["PUT"])
@token_required
def change_password(user):
    data = request.get_json(silent=True) or {}
    current_password = data.get("currentPassword")
    new_password = data.get("newPassword")
    if not current_password or not new_password:
        return respond("Current password and new password are required", status=400)
    if not isinstance(new_password, str) or len(new_password) < MIN_PASSWORD_LENGTH:
        return respond(f"New password must be at least {MIN_PASSWORD_LENGTH} characters long", status=400)
    if not isinstance(current_password, str) or not check_password(current_password, user.password):
        return respond("Current password is incorrect", status=401)
    try:
        user.password = hash_password(new_password)
        user.updated_at = datetime.utcnow()
        db.session.commit()
    except SQLAlchemyError as e:
        logger.error(f"Database error changing password: {str(e)}")
        db.session.rollback()
        return respond("Error changing password", status=500)
    logger.info(f"Password changed for user {user.id}")
    return respond("Password changed successfully")


@bp.route("/account", methods=["DELETE"])
@token_required
def delete_account(user):
    try:
        logger.info(f"Deleting account {user.id}")
        db.session.delete(user)
        db.session.commit()
    except SQLAlchemyError as e:
        logger.error(f"Error deleting account {user.id}: {str(e)}")
        db.session.rollback()
        return respond("Error deleting account", status=500)
    return respond("Account deleted successfully")
