import logging

from flask import Blueprint, request
from sqlalchemy.exc import SQLAlchemyError

from .auth import token_required
from .errors import ApiError, NotFound, ValidationError, respond
from .models import Task, db
from .routines import get_owned_routine, require_id, require_name
from .store import Store

logger = logging.getLogger(__name__)

bp = Blueprint("tasks", __name__, url_prefix="/tasks")


def get_owned_task(user, task_id, action="access"):
    require_id(task_id, "Task ID must be a non-empty string")
    try:
        task = db.session.get(Task, task_id)
    except SQLAlchemyError as e:
        logger.error(f"Database error loading task {task_id}: {str(e)}")
        db.session.rollback()
        raise ApiError("Error loading task", 500)
    if task is None:
        raise NotFound("Task not found")
    get_owned_routine(user, task.routine_id, action)
    return task


def _parse_order(value):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("Order must be an integer")
    return value


@bp.route("", methods=["GET"])
@token_required
def list_tasks(user):
    routine_id = request.args.get("routineId")
    if not routine_id:
        return respond("Routine ID is required", status=400)
    get_owned_routine(user, routine_id, "view tasks for")
    try:
        tasks = Store(db.session).get_tasks_by_routine(routine_id)
    except SQLAlchemyError as e:
        logger.error(f"Database error fetching tasks: {str(e)}")
        db.session.rollback()
        return respond("Error retrieving tasks", status=500)
    logger.debug(f"Fetched {len(tasks)} tasks for routine {routine_id}")
    if not tasks:
        return respond("No tasks found", [])
    return respond("Tasks retrieved successfully", [task.to_dict() for task in tasks])


@bp.route("", methods=["POST"])
@token_required
def create_task(user):
    data = request.get_json(silent=True) or {}
    routine_id = data.get("routineId")
    name = data.get("name")
    if not routine_id or not name:
        return respond("Routine ID and task name are required", status=400)
    require_name(name)
    get_owned_routine(user, routine_id, "add tasks to")
    order = _parse_order(data["order"]) if data.get("order") is not None else 0
    try:
        task = Task(routine_id=routine_id, name=name, order=order)
        db.session.add(task)
        db.session.commit()
    except SQLAlchemyError as e:
        logger.error(f"Database error creating task: {str(e)}")
        db.session.rollback()
        return respond("Error creating task", status=500)
    logger.info(f"Task created: {name} in routine {routine_id}")
    return respond("Task created successfully", task.to_dict(), status=201)


@bp.route("/<task_id>", methods=["PUT"])
@token_required
def update_task(user, task_id):
    task = get_owned_task(user, task_id, "update")
    data = request.get_json(silent=True) or {}
    name = require_name(data["name"]) if "name" in data else None
    order = _parse_order(data["order"]) if data.get("order") is not None else None
    try:
        if name is not None:
            task.name = name
        if order is not None:
            task.order = order
        db.session.commit()
    except SQLAlchemyError as e:
        logger.error(f"Database error updating task: {str(e)}")
        db.session.rollback()
        return respond("Error updating task", status=500)
    logger.info(f"Task {task_id} updated for user {user.id}")
    return respond("Task updated successfully", task.to_dict())


@bp.route("/<task_id>", methods=["DELETE"])
@token_required
def delete_task(user, task_id):
    task = get_owned_task(user, task_id, "delete")
    try:
        db.session.delete(task)
        db.session.commit()
    except SQLAlchemyError as e:
        logger.error(f"Error deleting task {task_id}: {str(e)}")
        db.session.rollback()
        return respond("Error deleting task", status=500)
    logger.info(f"Task {task_id} deleted by user {user.id}")
    return respond("Task deleted successfully")
