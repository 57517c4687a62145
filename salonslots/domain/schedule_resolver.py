"""
Resolves a professional's stored working hours into concrete instants for a date.
"""

import logging
import re
from datetime import time
from typing import Optional, Union

import pendulum
from pendulum import Date, DateTime

from .models import LunchBreak, Professional, ScheduleWindow
from .results import NoSchedule, ScheduleIssue

logger = logging.getLogger(__name__)

# H:MM or HH:MM, optionally followed by :SS as returned by SQL time columns
_TIME_OF_DAY = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)(?::[0-5]\d)?$")


def parse_time_of_day(value: Optional[str]) -> Optional[time]:
    """
    Parse a 24-hour ``HH:MM`` string.

    Returns None for missing or malformed values instead of raising.
    """
    if value is None:
        return None
    match = _TIME_OF_DAY.match(value.strip())
    if not match:
        return None
    return time(hour=int(match.group(1)), minute=int(match.group(2)))


class ScheduleResolver:
    """
    Turns ``WorkingHours`` plus a target date into a ``ScheduleWindow``.

    All instants are anchored at the target date's midnight in ``timezone``.
    """

    def __init__(self, timezone: str = "America/Sao_Paulo"):
        self.timezone = timezone

    def resolve(
        self,
        professional: Professional,
        target_date: Date,
    ) -> Union[ScheduleWindow, NoSchedule]:
        if professional.is_absent(target_date):
            return NoSchedule(ScheduleIssue.ABSENT)

        if professional.time_off_on(target_date) is not None:
            return NoSchedule(ScheduleIssue.ON_LEAVE)

        hours = professional.hours_for(target_date)

        if not hours.has_schedule():
            return NoSchedule(ScheduleIssue.NOT_CONFIGURED)

        work_start = parse_time_of_day(hours.start)
        work_end = parse_time_of_day(hours.end)
        if work_start is None or work_end is None:
            logger.warning(
                "Professional %s has malformed working hours %r-%r",
                professional.id, hours.start, hours.end,
            )
            return NoSchedule(ScheduleIssue.INVALID_TIME)

        lunch: Optional[LunchBreak] = None
        if hours.has_lunch():
            lunch_start = parse_time_of_day(hours.lunch_start)
            lunch_end = parse_time_of_day(hours.lunch_end)
            if lunch_start is None or lunch_end is None:
                logger.warning(
                    "Professional %s has malformed lunch break %r-%r",
                    professional.id, hours.lunch_start, hours.lunch_end,
                )
                return NoSchedule(ScheduleIssue.INVALID_TIME)
            if lunch_start >= lunch_end:
                logger.info(
                    "Professional %s has a lunch break that does not end after it starts (%r-%r)",
                    professional.id, hours.lunch_start, hours.lunch_end,
                )
            lunch = LunchBreak(
                start=self._anchor(target_date, lunch_start),
                end=self._anchor(target_date, lunch_end),
            )

        return ScheduleWindow(
            work_start=self._anchor(target_date, work_start),
            work_end=self._anchor(target_date, work_end),
            lunch=lunch,
        )

    def _anchor(self, target_date: Date, time_of_day: time) -> DateTime:
        return pendulum.datetime(
            target_date.year,
            target_date.month,
            target_date.day,
            time_of_day.hour,
            time_of_day.minute,
            tz=self.timezone,
        )
