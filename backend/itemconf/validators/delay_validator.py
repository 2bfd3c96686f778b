"""Delay validator — polling interval specifications.

Format:
    <update interval>[;<custom interval>]...

    update interval   time unit ("30", "30s", "5m", "1h", "1d", "1w") or user macro ("{$DELAY}")
    flexible          <delay>/<period>, e.g. "50s/1-5,09:00-18:00"
    scheduling        md/wd/h/m/s filters in that order, e.g. "wd1-5h9m30", "h/2"

An update interval of 0 is only valid when some custom interval still polls.
"""

import re
from typing import Any, Optional

from itemconf.constants import DELAY_MAX
from itemconf.rules import FieldType, SimpleRule
from itemconf.validators.base import BaseFieldValidator
from itemconf.validators.models import ErrorCode, ValidationError

TIME_UNIT_RE = re.compile(r"^(\d+)([smhdw]?)$")
USER_MACRO_RE = re.compile(r"^\{\$[A-Z0-9_.]+(?::.*)?\}$")
PERIOD_RE = re.compile(r"^([1-7])(?:-([1-7]))?,(\d{1,2}):(\d{2})-(\d{1,2}):(\d{2})$")
SCHEDULING_RE = re.compile(
    r"^(?:md(?P<md>[\d,/-]+))?(?:wd(?P<wd>[\d,/-]+))?"
    r"(?:h(?P<h>[\d,/-]+))?(?:m(?P<m>[\d,/-]+))?(?:s(?P<s>[\d,/-]+))?$"
)
FILTER_RE = re.compile(r"^(?:(\d+)(?:-(\d+))?)?(?:/(\d+))?$")

TIME_SUFFIXES = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400, "w": 604800}

# Inclusive bounds per scheduling filter
SCHEDULING_LIMITS = {
    "md": (1, 31),
    "wd": (1, 7),
    "h": (0, 23),
    "m": (0, 59),
    "s": (0, 59),
}


def parse_time_unit(text: str) -> Optional[int]:
    """Convert a time unit to seconds, or None if it is not one."""
    match = TIME_UNIT_RE.match(text)
    if match is None:
        return None
    return int(match.group(1)) * TIME_SUFFIXES[match.group(2)]


def is_user_macro(text: str) -> bool:
    return USER_MACRO_RE.match(text) is not None


def is_valid_period(text: str) -> bool:
    """Check a flexible interval period "d[-d],hh:mm-hh:mm"."""
    match = PERIOD_RE.match(text)
    if match is None:
        return False

    day_from, day_to, h1, m1, h2, m2 = match.groups()
    if day_to is not None and int(day_to) < int(day_from):
        return False

    start = _minute_of_day(int(h1), int(m1))
    end = _minute_of_day(int(h2), int(m2))
    return start is not None and end is not None and start < end


def _minute_of_day(hours: int, minutes: int) -> Optional[int]:
    if minutes > 59 or hours > 24 or (hours == 24 and minutes != 0):
        return None
    return hours * 60 + minutes


def is_valid_scheduling(text: str) -> bool:
    """Check a scheduling interval such as "md1-15wd1h9m0,30"."""
    match = SCHEDULING_RE.match(text)
    if match is None or not any(match.groupdict().values()):
        return False

    for name, spec in match.groupdict().items():
        if spec is None:
            continue
        low, high = SCHEDULING_LIMITS[name]
        if not all(_is_valid_filter(part, low, high) for part in spec.split(",")):
            return False

    return True


def _is_valid_filter(part: str, low: int, high: int) -> bool:
    match = FILTER_RE.match(part)
    if not part or match is None:
        return False

    start, end, step = match.groups()
    if start is None and step is None:
        return False

    start = low if start is None else int(start)
    end = start if end is None else int(end)
    if not low <= start <= end <= high:
        return False

    if step is not None:
        step = int(step)
        # Without an explicit range the step spans the whole filter range
        span = (high - low) if match.group(1) is None else (end - start)
        if step < 1 or step > max(span, 1):
            return False

    return True


class DelayValidator(BaseFieldValidator):
    """Validates polling interval specifications."""

    @property
    def field_type(self) -> FieldType:
        return FieldType.ITEM_DELAY

    def validate(self, field: str, path: str, value: Any, rule: SimpleRule) -> list[ValidationError]:
        if not isinstance(value, str):
            return [self._error(ErrorCode.FIELD_INVALID_TYPE, field, path, "a character string is expected")]

        if rule.length is not None and len(value) > rule.length:
            return [self._error(ErrorCode.FIELD_TOO_LONG, field, path, "value is too long")]

        update_interval, *custom_intervals = value.split(";")

        if is_user_macro(update_interval):
            seconds = None
        else:
            seconds = parse_time_unit(update_interval)
            if seconds is None:
                return [self._error(ErrorCode.FIELD_INVALID_DELAY, field, path, "a time unit is expected")]
            if seconds > DELAY_MAX:
                return [self._error(
                    ErrorCode.FIELD_INVALID_DELAY, field, path, f"value must be one of 0-{DELAY_MAX}",
                )]

        polls = seconds != 0
        for interval in custom_intervals:
            flexible_delay = self._flexible_delay(interval)

            if flexible_delay is False:
                if not is_valid_scheduling(interval):
                    return [self._error(
                        ErrorCode.FIELD_INVALID_DELAY, field, path, f'invalid custom interval "{interval}"',
                    )]
                polls = True
                continue

            if flexible_delay is not None and flexible_delay > DELAY_MAX:
                return [self._error(
                    ErrorCode.FIELD_INVALID_DELAY, field, path,
                    f'invalid custom interval "{interval}": value must be one of 0-{DELAY_MAX}',
                )]

            polls = polls or flexible_delay != 0

        if not polls:
            return [self._error(
                ErrorCode.FIELD_INVALID_DELAY, field, path, "must have at least one interval greater than 0",
            )]

        return []

    @staticmethod
    def _flexible_delay(interval: str):
        """Parse a flexible interval.

        Returns:
            False if `interval` is not a valid flexible interval,
            None if its delay is a user macro, else the delay in seconds
        """
        delay, sep, period = interval.partition("/")
        if not sep:
            return False

        if not (is_user_macro(period) or is_valid_period(period)):
            return False

        if is_user_macro(delay):
            return None

        seconds = parse_time_unit(delay)
        return False if seconds is None else seconds
