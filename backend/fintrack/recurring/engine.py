"""Occurrence rules for recurring transactions.

Everything here is pure calendar arithmetic on ``datetime.date`` values. The
functions accept any object exposing the recurrence attributes (the ORM row or
a ``RecurrenceDefinition``) and never raise for malformed definitions: an
unknown frequency or a missing day field is simply never due.
"""

from __future__ import annotations

from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from fintrack.recurring.models import Frequency

# Forward scan limit for next_occurrence. A year and a day past the first
# candidate covers every anniversary except Feb 29 in a non-leap run.
OCCURRENCE_SCAN_DAYS = 366


def weekday_index(on: date) -> int:
    """Day of week with Sunday as 0 and Saturday as 6."""
    return on.isoweekday() % 7


def last_day_of_month(on: date) -> int:
    return (on + relativedelta(day=31)).day


def is_due(definition, on: date) -> bool:
    start = definition.start_date
    if on < start:
        return False

    frequency = definition.frequency
    if frequency == Frequency.DAILY:
        return True

    if frequency == Frequency.WEEKLY:
        if definition.day_of_week is None:
            return False
        return weekday_index(on) == definition.day_of_week

    if frequency == Frequency.MONTHLY:
        if definition.day_of_month is None:
            return False
        target_day = min(definition.day_of_month, last_day_of_month(on))
        return on.day == target_day

    if frequency == Frequency.YEARLY:
        # Exact anniversary; a Feb 29 start only fires in leap years.
        return on.month == start.month and on.day == start.day

    return False


def next_occurrence(definition, after: date) -> date | None:
    """Return the first due date on or after ``after``, or None.

    None means the definition has ended, or nothing matched within
    ``OCCURRENCE_SCAN_DAYS`` of the first candidate date.
    """
    end = definition.end_date
    if end is not None and end < after:
        return None

    candidate = max(after, definition.start_date)
    for _ in range(OCCURRENCE_SCAN_DAYS + 1):
        if end is not None and candidate > end:
            return None
        if is_due(definition, candidate):
            return candidate
        candidate += timedelta(days=1)
    return None
