from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timezone

from .errors import ValidationError

END_OF_DAY = time(23, 59, 59, 999000)


@dataclass(frozen=True)
class TodoDraft:
    title: str
    deadline: datetime


def end_of_day_utc(day: date) -> datetime:
    return datetime.combine(day, END_OF_DAY, tzinfo=timezone.utc)


def _parse_day(value: date | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip())


def validate_todo_form(
    title: str | None,
    deadline: date | str | None,
    today: date | None = None,
) -> TodoDraft:
    """Check form input and normalize the deadline to end-of-day UTC.

    Raises ValidationError listing every failing field.
    """
    today = today or date.today()
    errors: dict[str, str] = {}

    clean_title = (title or "").strip()
    if not clean_title:
        errors["title"] = "Title is required"

    day: date | None = None
    if deadline is None or (isinstance(deadline, str) and not deadline.strip()):
        errors["deadline"] = "Deadline is required"
    else:
        try:
            day = _parse_day(deadline)
        except ValueError:
            errors["deadline"] = "Deadline must be a date (YYYY-MM-DD)"
        else:
            if day < today:
                errors["deadline"] = "Deadline cannot be earlier than today"

    if errors:
        raise ValidationError(errors)
    return TodoDraft(title=clean_title, deadline=end_of_day_utc(day))
