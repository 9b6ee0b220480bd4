"""Six-field cron expressions with second resolution."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

__all__ = ["CronField", "CronSchedule", "matches", "parse_cron_expression"]

_MONTH_NAMES = ("JAN", "FEB", "MAR", "APR", "MAY", "JUN", "JUL", "AUG", "SEP", "OCT", "NOV", "DEC")
_DAY_NAMES = ("SUN", "MON", "TUE", "WED", "THU", "FRI", "SAT")


@dataclass(slots=True, frozen=True)
class _FieldSpec:
    """Valid range and accepted names of one cron field."""

    name: str
    min_value: int
    max_value: int
    names: tuple[str, ...] = ()
    names_start: int = 0
    alias_max: int | None = None


# Day-of-week uses 0 = Sunday; an explicit 7 is accepted as an alias and folded to 0,
# but "*" and "a/n" stop at 6.
_FIELD_SPECS = (
    _FieldSpec("second", 0, 59),
    _FieldSpec("minute", 0, 59),
    _FieldSpec("hour", 0, 23),
    _FieldSpec("day-of-month", 1, 31),
    _FieldSpec("month", 1, 12, _MONTH_NAMES, names_start=1),
    _FieldSpec("day-of-week", 0, 6, _DAY_NAMES, alias_max=7),
)


@dataclass(slots=True, frozen=True)
class CronField:
    """One parsed cron field, expanded to the set of values it allows."""

    values: frozenset[int]

    def __contains__(self, value: int) -> bool:
        return value in self.values


@dataclass(slots=True, frozen=True)
class CronSchedule:
    """Parsed six-field cron expression.

    Attributes:
        expression: Source text, kept for logging.
        second, minute, hour, day_of_month, month, day_of_week: Expanded fields.
    """

    expression: str
    second: CronField
    minute: CronField
    hour: CronField
    day_of_month: CronField
    month: CronField
    day_of_week: CronField

    def __str__(self) -> str:
        return self.expression


def matches(schedule: CronSchedule, instant: datetime) -> bool:
    """Tell whether an instant satisfies a schedule.

    All six fields must match. Day-of-month and day-of-week are combined
    with AND, unlike classic cron which ORs them when both are restricted.
    The instant is taken as-is; callers pass UTC datetimes.

    Args:
        schedule: Parsed schedule.
        instant: Point in time, evaluated at second resolution.

    Returns:
        True if the instant is due.
    """
    # datetime.weekday() is Monday = 0; cron fields use Sunday = 0.
    day_of_week = (instant.weekday() + 1) % 7
    return (
        instant.second in schedule.second
        and instant.minute in schedule.minute
        and instant.hour in schedule.hour
        and instant.day in schedule.day_of_month
        and instant.month in schedule.month
        and day_of_week in schedule.day_of_week
    )


def parse_cron_expression(expression: str) -> CronSchedule:
    """Parse and validate a six-field cron expression.

    Fields, in order: second, minute, hour, day-of-month, month, day-of-week.
    Each field accepts ``*``, a value, a range ``a-b``, a step ``*/n``,
    ``a-b/n`` or ``a/n``, and comma-separated lists of those. Month and
    day-of-week also accept three-letter English names.

    Args:
        expression: Cron expression text.

    Returns:
        Parsed schedule.

    Raises:
        ValueError: If the expression is malformed or out of range.
    """
    parts = expression.split()
    if len(parts) != len(_FIELD_SPECS):
        raise ValueError(
            f"Cron expression must have {len(_FIELD_SPECS)} fields "
            f"(got {len(parts)}): {expression!r}"
        )

    fields = [_parse_field(part, spec) for part, spec in zip(parts, _FIELD_SPECS)]
    return CronSchedule(" ".join(parts), *fields)


def _parse_field(token: str, spec: _FieldSpec) -> CronField:
    values: set[int] = set()
    for item in token.split(","):
        values.update(_expand_item(item, spec))

    if spec.name == "day-of-week" and 7 in values:
        values.discard(7)
        values.add(0)
    return CronField(frozenset(values))


def _expand_item(item: str, spec: _FieldSpec) -> range:
    if not item:
        raise ValueError(f"Empty {spec.name} value")

    base, sep, step_raw = item.partition("/")
    step = 1
    if sep:
        try:
            step = int(step_raw)
        except ValueError as e:
            raise ValueError(f"Invalid {spec.name} step: {item!r}") from e
        if step <= 0:
            raise ValueError(f"{spec.name} step must be positive: {item!r}")

    if base == "*":
        start, end = spec.min_value, spec.max_value
    elif "-" in base:
        start_raw, _, end_raw = base.partition("-")
        start = _parse_value(start_raw, spec)
        end = _parse_value(end_raw, spec)
        if start > end:
            raise ValueError(f"{spec.name} range start greater than end: {item!r}")
    else:
        start = _parse_value(base, spec)
        # "a/n" runs from a to the end of the field
        end = max(spec.max_value, start) if sep else start

    return range(start, end + 1, step)


def _parse_value(raw: str, spec: _FieldSpec) -> int:
    upper = raw.strip().upper()
    if upper in spec.names:
        return spec.names.index(upper) + spec.names_start

    try:
        value = int(upper)
    except ValueError as e:
        raise ValueError(f"Invalid {spec.name} value: {raw!r}") from e

    max_value = spec.alias_max if spec.alias_max is not None else spec.max_value
    if not spec.min_value <= value <= max_value:
        raise ValueError(
            f"{spec.name} value {value} out of range {spec.min_value}-{max_value}"
        )
    return value
