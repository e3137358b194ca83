"""
Human-readable formatting for distances, times and angles.
"""

import math

from .constants import (
    DAYS_PER_YEAR,
    KILOMETER_THRESHOLD_M,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
    SECONDS_PER_YEAR,
    WHOLE_METER_THRESHOLD_M,
)

UNICODE_MINUS = "−"


def _up_to(value, places=2):
    """Format with at most `places` fractional digits, trailing zeros dropped."""
    s = format(value, f".{places}f")
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    if s == "-0":
        s = "0"
    return s


def format_distance(meters):
    """
    Format a distance in metres.

    Beyond 1,000 km the value is shown in kilometres with up to two
    decimals; above 100 km in whole metres; otherwise in metres with up to
    two decimals.

    Args:
        meters: Distance in metres

    Returns:
        str: e.g. "1500 m", "250000 m", "2500 km"
    """
    if abs(meters / KILOMETER_THRESHOLD_M) > 1:
        return _up_to(meters / 1000.0) + " km"
    if abs(meters) > WHOLE_METER_THRESHOLD_M:
        return format(meters, ".0f") + " m"
    return _up_to(meters) + " m"


def format_absolute_time(ut):
    """
    Format a UT as "Year Y Day D H:MM:SS".

    Years and days count from 1 and a year is always 365 days.
    """
    secs = int(math.floor(math.fmod(ut, 60)))
    mins = int(math.floor(math.fmod(ut / SECONDS_PER_MINUTE, 60)))
    hour = int(math.floor(math.fmod(ut / SECONDS_PER_HOUR, 24)))
    day = int(math.floor(math.fmod(ut / SECONDS_PER_DAY, DAYS_PER_YEAR))) + 1
    year = int(math.floor(ut / SECONDS_PER_YEAR)) + 1

    return f"Year {year} Day {day} {hour}:{mins:02d}:{secs:02d}"


def format_duration(seconds):
    """
    Format a duration, largest unit first, always ending in seconds.

    A unit is shown only once the duration exceeds one of it. Components
    are magnitudes; day and year counts start at 1.

    Args:
        seconds: Signed duration in seconds

    Returns:
        str: e.g. "1 h 1 m 5 s"
    """
    t = seconds
    text = f"{int(math.floor(abs(math.fmod(t, 60))))} s"
    if abs(t / SECONDS_PER_MINUTE) > 1.0:
        mins = int(math.floor(abs(math.fmod(t / SECONDS_PER_MINUTE, 60))))
        text = f"{mins} m {text}"
    if abs(t / SECONDS_PER_HOUR) > 1.0:
        hours = int(math.floor(abs(math.fmod(t / SECONDS_PER_HOUR, 24))))
        text = f"{hours} h {text}"
    if abs(t / SECONDS_PER_DAY) > 1.0:
        days = int(math.floor(abs(math.fmod(t / SECONDS_PER_DAY, DAYS_PER_YEAR))))
        text = f"{days + 1} d {text}"
    if abs(t / SECONDS_PER_YEAR) > 1.0:
        years = int(math.floor(abs(t / SECONDS_PER_YEAR)))
        text = f"{years + 1} y {text}"
    return text


def format_number(value, format_spec='.1f'):
    """
    Format a number with a proper Unicode minus sign for figure labels.

    Args:
        value: Numeric value to format
        format_spec: Format specification (e.g., '.1f', '.2f')

    Returns:
        str: Formatted string
    """
    if isinstance(value, (int, float)):
        if value < 0:
            return UNICODE_MINUS + format(abs(value), format_spec)
        return format(value, format_spec)
    return str(value)


def format_angle(degrees, format_spec='.1f'):
    return format_number(degrees, format_spec) + "°"
