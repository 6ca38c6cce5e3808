import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from .models import Completion, Routine, Task

logger = logging.getLogger(__name__)


class Store:
    """Read/write access to routines, tasks and completion records."""

    def __init__(self, session):
        self.session = session

    def get_routines_by_user(self, user_id):
        return (
            self.session.query(Routine).filter_by(user_id=user_id)
            .order_by(Routine.created_at, Routine.id)
            .all()
        )

    def get_tasks_by_routine(self, routine_id):
        return (
            self.session.query(Task).filter_by(routine_id=routine_id)
            .order_by(Task.order, Task.created_at, Task.id)
            .all()
        )

    def get_completions(self, date, user_id):
        rows = self.session.query(Completion).filter_by(date=date, user_id=user_id).all()
        return {row.task_id: True for row in rows}

    def get_all_completions(self, user_id=None):
        query = self.session.query(Completion)
        if user_id is not None:
            query = query.filter_by(user_id=user_id)
        completions = {}
        for row in query.all():
            completions.setdefault(row.date, {}).setdefault(row.user_id, {})[row.task_id] = True
        return completions

    def set_completion(self, date, user_id, task_id):
        try:
            exists = self.session.query(Completion).filter_by(date=date, user_id=user_id, task_id=task_id).first()
            if exists:
                return
            self.session.add(Completion(date=date, user_id=user_id, task_id=task_id))
            self.session.commit()
        except IntegrityError:
            # Written concurrently by another request; the row is there either way
            self.session.rollback()
        except SQLAlchemyError as e:
            logger.error(f"Database error setting completion {date}/{user_id}/{task_id}: {str(e)}")
            self.session.rollback()
            raise
        logger.info(f"Task {task_id} completed on {date} by user {user_id}")

    def unset_completion(self, date, user_id, task_id):
        try:
            removed = self.session.query(Completion).filter_by(date=date, user_id=user_id, task_id=task_id).delete()
            self.session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Database error clearing completion {date}/{user_id}/{task_id}: {str(e)}")
            self.session.rollback()
            raise
        if removed:
            logger.info(f"Task {task_id} unmarked on {date} by user {user_id}")
        return bool(removed)
