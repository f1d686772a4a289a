"""Parsing of the YYYY-MM-DD date argument."""

import re


# ASCII digits only, no whitespace or underscores
SEGMENT_PATTERN = re.compile(r'\+?[0-9]+')


class DateParseError(ValueError):
    """Exception raised when a date string is not three integer segments."""
    pass


class CalendarDate:
    """
    A structural calendar date.

    Month and day ranges are not validated, so ``2024-02-30`` is a valid
    CalendarDate. The radio API simply returns nothing useful for it.
    """

    def __init__(self, year: int, month: int, day: int):
        self._year = year
        self._month = month
        self._day = day

    @property
    def year(self) -> int:
        return self._year

    @property
    def month(self) -> int:
        return self._month

    @property
    def day(self) -> int:
        return self._day

    def __eq__(self, other) -> bool:
        if not isinstance(other, CalendarDate):
            return NotImplemented
        return (self.year, self.month, self.day) == (other.year, other.month, other.day)

    def __hash__(self) -> int:
        return hash((self.year, self.month, self.day))

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def __repr__(self) -> str:
        return f"CalendarDate(year={self.year}, month={self.month}, day={self.day})"


def parse_date(text: str) -> CalendarDate:
    """
    Parse a ``YYYY-MM-DD`` string.

    Args:
        text: Date string from the command line

    Returns:
        Parsed CalendarDate

    Raises:
        DateParseError: If the string does not split into exactly three
            integer segments
    """
    parts = text.split('-')
    if len(parts) != 3 or not all(SEGMENT_PATTERN.fullmatch(part) for part in parts):
        raise DateParseError(f"Invalid date format: {text!r} (expected YYYY-MM-DD)")

    year, month, day = (int(part) for part in parts)
    return CalendarDate(year, month, day)
