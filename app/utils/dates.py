"""Calendar helpers for billing periods."""

from datetime import datetime

from dateutil.relativedelta import relativedelta


def add_one_month(value: datetime) -> datetime:
    """
    Advance a datetime by one calendar month.

    Keeps the day of month when the target month has it and clamps to the
    last day otherwise (Jan 31 -> Feb 28/29). Time of day and tzinfo are kept.
    """
    return value + relativedelta(months=1)
