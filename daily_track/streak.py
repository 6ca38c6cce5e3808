from datetime import timedelta

from .dates import as_date, format_date, weekday_of

STREAK_LOOKBACK_DAYS = 365


def current_streak(frequency, completion_history, today=None, lookback=STREAK_LOOKBACK_DAYS):
    """Count consecutive scheduled days completed, walking back from ``today``.

    Days outside ``frequency`` are skipped. The first scheduled day without a
    completion ends the walk, and that includes today itself: a routine due
    today and not yet done reports 0.
    """
    scheduled = set(frequency or ())
    if not scheduled:
        return 0
    history = completion_history or {}
    cursor = as_date(today)
    streak = 0
    for _ in range(lookback):
        date_string = format_date(cursor)
        if weekday_of(cursor) in scheduled:
            if not history.get(date_string):
                break
            streak += 1
        cursor -= timedelta(days=1)
    return streak
