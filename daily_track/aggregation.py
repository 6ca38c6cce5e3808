"""Folding raw completion records into per-routine facts."""


def completed_task_ids(routine_task_ids, completions_for_date):
    completions_for_date = completions_for_date or {}
    return {task_id for task_id in routine_task_ids if completions_for_date.get(task_id) is True}


def is_routine_fully_completed(routine_task_ids, completions_for_date):
    # A routine without tasks is never complete
    routine_task_ids = set(routine_task_ids)
    if not routine_task_ids:
        return False
    return completed_task_ids(routine_task_ids, completions_for_date) == routine_task_ids


def completion_percentage(completed, total):
    """Whole-number percentage, rounding halves up. Zero when there is nothing to do."""
    if total <= 0:
        return 0
    return (200 * completed + total) // (2 * total)


def completion_history(routine_task_ids, all_completions, user_id):
    """Map every recorded date on which ``user_id`` finished the whole routine to True."""
    history = {}
    for date_string, by_user in (all_completions or {}).items():
        user_completions = (by_user or {}).get(user_id)
        if user_completions and is_routine_fully_completed(routine_task_ids, user_completions):
            history[date_string] = True
    return history
