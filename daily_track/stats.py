"""Daily and weekly statistics assembled from routines, tasks and completions.

Nothing here is cached: each call reads from the store and recomputes.
"""

import logging

from .aggregation import completion_history, completion_percentage
from .dates import as_date, current_week_dates, is_valid_date_string
from .errors import InvalidDate
from .streak import current_streak

logger = logging.getLogger(__name__)


def _routines_with_tasks(store, user_id):
    return [(routine, store.get_tasks_by_routine(routine.id)) for routine in store.get_routines_by_user(user_id)]


def _day_summary(date, tasks, completions, with_tasks=False):
    details = [
        {
            "id": task.id,
            "name": task.name,
            "routineId": task.routine_id,
            "completed": completions.get(task.id) is True,
        }
        for task in tasks
    ]
    total = len(details)
    completed = sum(1 for detail in details if detail["completed"])
    summary = {
        "date": date,
        "totalTasks": total,
        "completedTasks": completed,
        "completionPercentage": completion_percentage(completed, total),
    }
    if with_tasks:
        summary["tasks"] = details
    return summary


def daily_stats(store, user_id, date):
    if not is_valid_date_string(date):
        raise InvalidDate()
    tasks = [task for _, routine_tasks in _routines_with_tasks(store, user_id) for task in routine_tasks]
    completions = store.get_completions(date, user_id) or {}
    stats = _day_summary(date, tasks, completions, with_tasks=True)
    logger.debug(f"Daily stats for user {user_id} on {date}: {stats['completedTasks']}/{stats['totalTasks']}")
    return stats


def weekly_stats(store, user_id, today=None):
    # Read the clock once so the week and every streak share one reference date
    today = as_date(today)
    week_dates = current_week_dates(today)
    routines = _routines_with_tasks(store, user_id)
    if not routines:
        return {"weekDates": week_dates, "dailyStats": [], "routineStreaks": []}

    tasks = [task for _, routine_tasks in routines for task in routine_tasks]
    daily = [
        _day_summary(date, tasks, store.get_completions(date, user_id) or {})
        for date in week_dates
    ]

    all_completions = store.get_all_completions(user_id)
    streaks = []
    for routine, routine_tasks in routines:
        history = completion_history({task.id for task in routine_tasks}, all_completions, user_id)
        streaks.append({
            "routineId": routine.id,
            "routineName": routine.name,
            "frequency": list(routine.frequency),
            "currentStreak": current_streak(routine.frequency, history, today=today) if routine_tasks else 0,
        })

    logger.debug(f"Weekly stats for user {user_id}: {len(streaks)} routines, week of {week_dates[0]}")
    return {"weekDates": week_dates, "dailyStats": daily, "routineStreaks": streaks}
