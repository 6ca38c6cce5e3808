import logging

from flask import Blueprint, request
from sqlalchemy.exc import SQLAlchemyError

from .auth import ensure_owner, token_required
from .dates import normalize_frequency
from .errors import ApiError, NotFound, ValidationError, respond
from .models import Routine, db
from .store import Store

logger = logging.getLogger(__name__)

bp = Blueprint("routines", __name__, url_prefix="/routines")


def require_id(value, message="Invalid identifier"):
    if not isinstance(value, str) or not value:
        raise ValidationError(message)
    return value


def require_name(value, message="Name must be a non-empty string"):
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(message)
    return value


def get_owned_routine(user, routine_id, action="access"):
    require_id(routine_id, "Routine ID must be a non-empty string")
    try:
        routine = db.session.get(Routine, routine_id)
    except SQLAlchemyError as e:
        logger.error(f"Database error loading routine {routine_id}: {str(e)}")
        db.session.rollback()
        raise ApiError("Error loading routine", 500)
    if routine is None:
        raise NotFound("Routine not found")
    ensure_owner(user.id, routine.user_id, f"You do not have permission to {action} this routine")
    return routine


@bp.route("", methods=["GET"])
@token_required
def list_routines(user):
    try:
        routines = Store(db.session).get_routines_by_user(user.id)
    except SQLAlchemyError as e:
        logger.error(f"Database error fetching routines: {str(e)}")
        db.session.rollback()
        return respond("Error retrieving routines", status=500)
    logger.debug(f"Fetched {len(routines)} routines for user {user.id}")
    if not routines:
        return respond("No routines found", [])
    return respond("Routines retrieved successfully", [routine.to_dict() for routine in routines])


@bp.route("", methods=["POST"])
@token_required
def create_routine(user):
    data = request.get_json(silent=True) or {}
    logger.debug(f"Create routine payload: {data}")
    name = data.get("name")
    if not name or "frequency" not in data:
        return respond("Name and frequency (array) are required", status=400)
    require_name(name)
    frequency = normalize_frequency(data["frequency"])
    try:
        routine = Routine(user_id=user.id, name=name, frequency=frequency, active=True)
        db.session.add(routine)
        db.session.commit()
    except SQLAlchemyError as e:
        logger.error(f"Database error creating routine: {str(e)}")
        db.session.rollback()
        return respond("Error creating routine", status=500)
    logger.info(f"Routine created: {name} for user {user.id}")
    return respond("Routine created successfully", routine.to_dict(), status=201)


@bp.route("/<routine_id>", methods=["PUT"])
@token_required
def update_routine(user, routine_id):
    routine = get_owned_routine(user, routine_id, "update")
    data = request.get_json(silent=True) or {}
    logger.debug(f"Update routine {routine_id} payload: {data}")
    name = require_name(data["name"]) if "name" in data else None
    frequency = normalize_frequency(data["frequency"]) if "frequency" in data else None
    active = data.get("active")
    if active is not None and not isinstance(active, bool):
        raise ValidationError("Active must be true or false")
    try:
        if name is not None:
            routine.name = name
        if frequency is not None:
            routine.frequency = frequency
        if active is not None:
            routine.active = active
        db.session.commit()
    except SQLAlchemyError as e:
        logger.error(f"Database error updating routine: {str(e)}")
        db.session.rollback()
        return respond("Error updating routine", status=500)
    logger.info(f"Routine {routine_id} updated for user {user.id}")
    return respond("Routine updated successfully", routine.to_dict())


@bp.route("/<routine_id>", methods=["DELETE"])
@token_required
def delete_routine(user, routine_id):
    routine = get_owned_routine(user, routine_id, "delete")
    try:
        logger.info(f"Deleting routine {routine_id} for user {user.id}")
        db.session.delete(routine)
        db.session.commit()
    except SQLAlchemyError as e:
        logger.error(f"Error deleting routine {routine_id}: {str(e)}")
        db.session.rollback()
        return respond("Error deleting routine", status=500)
    return respond("Routine and associated tasks deleted successfully")
