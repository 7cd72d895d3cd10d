"""
Date helpers for check-ins.
All boundaries use local server time, days start at midnight.
"""
from datetime import datetime, timedelta, date
from typing import Optional

from habitflow.constants import WEEKDAYS


class DateService:
    """Service for date-related operations"""

    @staticmethod
    def get_day_range(target_date: date) -> tuple[datetime, datetime]:
        """
        Get the [start, end) datetime range of a calendar day.

        Args:
            target_date: The day

        Returns:
            Tuple of (midnight of target_date, midnight of the next day)
        """
        day_start = datetime.combine(target_date, datetime.min.time())
        day_end = day_start + timedelta(days=1)
        return day_start, day_end

    @staticmethod
    def get_today_start() -> datetime:
        """Midnight of the current local day"""
        day_start, _ = DateService.get_day_range(datetime.now().date())
        return day_start

    @staticmethod
    def get_weekday(target_date: Optional[date] = None) -> str:
        """
        Weekday abbreviation ("Mon".."Sun") used as a weekly status key.

        Args:
            target_date: Day to look up (defaults to today)
        """
        if target_date is None:
            target_date = datetime.now().date()
        return WEEKDAYS[target_date.weekday()]

    @staticmethod
    def is_valid_weekday(day) -> bool:
        return isinstance(day, str) and day in WEEKDAYS
