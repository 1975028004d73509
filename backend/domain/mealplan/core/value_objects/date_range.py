"""DateRange value object."""

from dataclasses import dataclass
from datetime import date
from typing import Iterable


@dataclass(frozen=True)
class DateRange:
    """Closed range of calendar dates bounding a meal plan.

    Invariants:
    - start <= end
    - both bounds are plain dates (no time component)

    Examples:
        >>> r = DateRange(date(2024, 2, 1), date(2024, 2, 7))
        >>> r.contains(date(2024, 2, 3))
        True
    """

    start: date
    end: date

    def __post_init__(self) -> None:
        """Validate range bounds."""
        if not isinstance(self.start, date) or not isinstance(self.end, date):
            raise ValueError("Date range bounds must be dates")

        if self.start > self.end:
            raise ValueError(
                f"Date range start {self.start.isoformat()} is after "
                f"end {self.end.isoformat()}"
            )

    @staticmethod
    def covering(dates: Iterable[date]) -> "DateRange":
        """Smallest range containing every given date.

        Raises:
            ValueError: If no dates are given
        """
        ordered = sorted(dates)
        if not ordered:
            raise ValueError("Cannot derive a date range from no dates")
        return DateRange(start=ordered[0], end=ordered[-1])

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def extended_to(self, day: date) -> "DateRange":
        """Return a range widened just enough to contain ``day``."""
        return DateRange(start=min(self.start, day), end=max(self.end, day))
