from datetime import UTC, date, datetime, time, timedelta

from testdesk.core.errors import UnprocessableError


def _day_start(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=UTC)


def date_window(
    date_filter: str,
    start_date: date | None = None,
    end_date: date | None = None,
    *,
    now: datetime | None = None,
) -> tuple[datetime | None, datetime | None]:
    """Translate a named date filter into a ``[lower, upper)`` UTC window.

    ``All`` leaves both ends open. ``DateRange`` needs both dates and covers
    them inclusively.
    """
    now = now or datetime.now(UTC)
    today = now.date()

    if date_filter == 'All':
        return None, None
    if date_filter == 'Today':
        return _day_start(today), _day_start(today + timedelta(days=1))
    if date_filter == 'Yesterday':
        return _day_start(today - timedelta(days=1)), _day_start(today)
    if date_filter == 'MonthTillDate':
        return _day_start(today.replace(day=1)), None
    if date_filter == 'DateRange':
        if not start_date or not end_date:
            raise UnprocessableError('start_date and end_date are required for a date range.')
        if end_date < start_date:
            raise UnprocessableError('end_date must not be before start_date.')
        return _day_start(start_date), _day_start(end_date + timedelta(days=1))
    raise UnprocessableError(f'Unknown date filter: {date_filter}')
