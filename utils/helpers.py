import random
from datetime import datetime, timezone

import bleach


def utcnow():
    """Naive UTC timestamp, the form every DateTime column is stored in."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def format_datetime(datetime_obj):
    """Format datetime to an ISO string."""
    if not datetime_obj:
        return None
    return datetime_obj.isoformat()


def seconds_between(start, end):
    if not start or not end:
        return 0
    return max(0, int((end - start).total_seconds()))


def clean_text(value):
    """Strip every HTML tag from free text typed by students or reviewers."""
    if value is None:
        return None
    return bleach.clean(str(value), tags=[], strip=True)


def ordered_for_attempt(questions, attempt_id, shuffle=False):
    """
    Questions in the order a given attempt sees them. Shuffling is seeded by
    the attempt id so reloading the attempt keeps the same order.
    """
    questions = list(questions)
    if shuffle:
        random.Random(attempt_id).shuffle(questions)
    return questions


def parse_int(value, default=None):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default
