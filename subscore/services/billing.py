"""Next payment date calculation."""

import calendar
from datetime import date

from subscore.constants import BILLING_CYCLE_YEARLY


def _on_day(year: int, month: int, day: int) -> date:
    """date(year, month, day) with day clamped to the month's last day."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last_day))


def calculate_next_payment_date(
    payment_day: int, billing_cycle: str, today: date | None = None
) -> date:
    """
    Compute the next payment date for a subscription.

    If the payment day has already passed this month the payment falls in
    next month; otherwise it falls this month. Yearly subscriptions are then
    pushed out one year. Days past the end of the target month (e.g. 31 in
    April, Feb 29 in a non-leap year) clamp to the month's last day.

    Args:
        payment_day: Day of month the bill is due (1-31).
        billing_cycle: "monthly" or "yearly".
        today: Reference date; defaults to the current date.

    Returns:
        The next payment date.
    """
    if not 1 <= payment_day <= 31:
        raise ValueError(f"payment_day must be between 1 and 31, got {payment_day}")

    today = today or date.today()

    if payment_day < today.day:
        year, month = (today.year + 1, 1) if today.month == 12 else (today.year, today.month + 1)
    else:
        year, month = today.year, today.month

    if billing_cycle == BILLING_CYCLE_YEARLY:
        year += 1

    return _on_day(year, month, payment_day)
