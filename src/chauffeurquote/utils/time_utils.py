from datetime import datetime, time, timedelta
from typing import Union

MINUTES_PER_DAY = 24 * 60

ClockTime = Union[time, datetime, int]


class TimeUtils:
    @staticmethod
    def parse_time(time_str: str) -> int:
        """Parse HH:MM string to minutes since midnight. Handles '24:00' as special case."""
        if time_str == "24:00":
            return MINUTES_PER_DAY
        parsed = datetime.strptime(time_str, "%H:%M").time()
        return parsed.hour * 60 + parsed.minute

    @staticmethod
    def minute_of_day(t: ClockTime) -> int:
        if isinstance(t, int):
            return t % MINUTES_PER_DAY
        return t.hour * 60 + t.minute

    @staticmethod
    def is_night(t: ClockTime, night_start: str, night_end: str) -> bool:
        """
        Check whether a clock time falls inside the night window [start, end).
        An end at or before the start means the window wraps past midnight (e.g. 20:00-06:00).
        """
        current = TimeUtils.minute_of_day(t)
        start = TimeUtils.parse_time(night_start)
        end = TimeUtils.parse_time(night_end)
        if end <= start:
            return current >= start or current < end
        return start <= current < end

    @staticmethod
    def night_window_minutes(night_start: str, night_end: str) -> int:
        """Length of one night window in minutes (a full day when start == end)."""
        start = TimeUtils.parse_time(night_start)
        end = TimeUtils.parse_time(night_end)
        if end <= start:
            end += MINUTES_PER_DAY
        return end - start

    @staticmethod
    def _overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> int:
        return max(0, min(a_end, b_end) - max(a_start, b_start))

    @staticmethod
    def night_minutes_in_interval(start_instant: datetime, duration_minutes: int,
                                  night_start: str, night_end: str,
                                  enabled: bool = True) -> int:
        """
        Count the whole minutes of [start_instant, start_instant + duration) inside the night window.

        The interval is taken at minute resolution (seconds of start_instant are ignored),
        so the result equals a minute-by-minute scan. Whole elapsed days contribute one
        full window each; the remaining partial day is intersected with the windows of
        the previous, current and next calendar day.
        """
        if not enabled or duration_minutes <= 0:
            return 0

        full_days, remainder = divmod(int(duration_minutes), MINUTES_PER_DAY)
        night = full_days * TimeUtils.night_window_minutes(night_start, night_end)
        if remainder == 0:
            return night

        start = TimeUtils.parse_time(night_start)
        end = TimeUtils.parse_time(night_end)
        if end <= start:
            end += MINUTES_PER_DAY

        begin = TimeUtils.minute_of_day(start_instant)
        finish = begin + remainder
        for day in (-1, 0, 1):
            offset = day * MINUTES_PER_DAY
            night += TimeUtils._overlap(begin, finish, start + offset, end + offset)
        return night

    @staticmethod
    def add_minutes(instant: datetime, minutes: float) -> datetime:
        return instant + timedelta(minutes=minutes)

    @staticmethod
    def is_sunday(date: datetime) -> bool:
        """Only calendar Sundays count; no public holiday calendar is consulted."""
        return date.weekday() == 6 # 0=Mon, 6=Sun
