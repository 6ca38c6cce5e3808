import uuid
from datetime import datetime

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def _new_id():
    return uuid.uuid4().hex


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.String(32), primary_key=True, default=_new_id)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password = db.Column(db.String(120), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime)
    routines = db.relationship("Routine", backref="user", lazy=True, cascade="all, delete-orphan")
    completions = db.relationship("Completion", backref="user", lazy=True, cascade="all, delete-orphan")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "createdAt": self.created_at.isoformat(),
        }


class Routine(db.Model):
    __tablename__ = "routines"

    id = db.Column(db.String(32), primary_key=True, default=_new_id)
    user_id = db.Column(db.String(32), db.ForeignKey("users.id"), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    frequency = db.Column(db.JSON, nullable=False)  # e.g. ["mon", "wed", "fri"]
    active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    tasks = db.relationship("Task", backref="routine", lazy=True, cascade="all, delete-orphan")

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "frequency": list(self.frequency),
            "active": self.active,
            "createdAt": self.created_at.isoformat(),
        }


class Task(db.Model):
    __tablename__ = "tasks"

    id = db.Column(db.String(32), primary_key=True, default=_new_id)
    routine_id = db.Column(db.String(32), db.ForeignKey("routines.id"), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    order = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "routineId": self.routine_id,
            "name": self.name,
            "order": self.order,
        }


class Completion(db.Model):
    """A task marked done by a user on a date. Absence means not completed."""

    __tablename__ = "completions"
    __table_args__ = (db.UniqueConstraint("date", "user_id", "task_id", name="uq_completion"),)

    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.String(10), nullable=False, index=True)  # YYYY-MM-DD
    user_id = db.Column(db.String(32), db.ForeignKey("users.id"), nullable=False, index=True)
    # No foreign key: completions outlive deleted tasks and are skipped when stale
    task_id = db.Column(db.String(32), nullable=False)
