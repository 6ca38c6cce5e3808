import logging

from flask import Blueprint, request
from sqlalchemy.exc import SQLAlchemyError

from .auth import token_required
from .dates import is_valid_date_string, today
from .errors import InvalidDate, NotFound, ValidationError, respond
from .models import Task, db
from .routines import get_owned_routine
from .stats import daily_stats, weekly_stats
from .store import Store

logger = logging.getLogger(__name__)

bp = Blueprint("stats", __name__, url_prefix="/stats")


def _requested_date(value):
    date = value or today()
    if not is_valid_date_string(date):
        raise InvalidDate()
    return date


@bp.route("/completion", methods=["POST"])
@token_required
def mark_task_completed(user):
    data = request.get_json(silent=True) or {}
    task_id = data.get("taskId")
    routine_id = data.get("routineId")
    if not isinstance(task_id, str) or not isinstance(routine_id, str) or not task_id or not routine_id:
        return respond("Task ID and routine ID are required", status=400)
    date = _requested_date(data.get("date"))
    try:
        task = db.session.get(Task, task_id)
        if task is None:
            raise NotFound("Task not found")
        get_owned_routine(user, routine_id, "complete tasks in")
        if task.routine_id != routine_id:
            raise ValidationError("Task does not belong to this routine")
        Store(db.session).set_completion(date, user.id, task_id)
    except SQLAlchemyError as e:
        logger.error(f"Database error marking task {task_id} completed: {str(e)}")
        db.session.rollback()
        return respond("Error marking task as completed", status=500)
    return respond(
        "Task marked as completed",
        {"taskId": task_id, "routineId": routine_id, "date": date, "completed": True},
    )


@bp.route("/completion/<task_id>", methods=["DELETE"])
@token_required
def unmark_task_completed(user, task_id):
    date = _requested_date(request.args.get("date"))
    try:
        task = db.session.get(Task, task_id)
        if task is None:
            raise NotFound("Task not found")
        get_owned_routine(user, task.routine_id, "update tasks in")
        Store(db.session).unset_completion(date, user.id, task_id)
    except SQLAlchemyError as e:
        logger.error(f"Database error unmarking task {task_id}: {str(e)}")
        db.session.rollback()
        return respond("Error unmarking task", status=500)
    return respond(
        "Task unmarked",
        {"taskId": task_id, "routineId": task.routine_id, "date": date, "completed": False},
    )


@bp.route("/daily", methods=["GET"])
@token_required
def get_daily_stats(user):
    date = _requested_date(request.args.get("date"))
    try:
        stats = daily_stats(Store(db.session), user.id, date)
    except SQLAlchemyError as e:
        logger.error(f"Database error fetching daily stats: {str(e)}")
        return respond("Error retrieving daily stats", status=500)
    return respond("Daily stats retrieved successfully", stats)


@bp.route("/weekly", methods=["GET"])
@token_required
def get_weekly_stats(user):
    try:
        stats = weekly_stats(Store(db.session), user.id)
    except SQLAlchemyError as e:
        logger.error(f"Database error fetching weekly stats: {str(e)}")
        return respond("Error retrieving weekly stats", status=500)
    message = "Weekly stats retrieved successfully" if stats["routineStreaks"] else "No routines found"
    return respond(message, stats)
