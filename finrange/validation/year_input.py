"""
Year Input Validation

The year range inputs are free text. Before an explicit year range
reaches the resolver, the picker:

1. Sanitizes each input while typing (digits only, at most 4 of them)
2. Checks both years fall inside the plausible window
   [min_year, current year + max_years_ahead]

The resolver itself accepts any pair of years; the window is enforced
here, at the caller.

IMPORTANT: Validation reports issues, it never raises and never clamps
a year into the window.
"""

import re
from typing import Optional

from finrange.clock import Clock, SystemClock
from finrange.config import PickerSettings, get_settings
from finrange.models.range import ValidationIssue, YearInputResult


_NON_DIGITS = re.compile(r"\D")
_MAX_YEAR_DIGITS = 4


class YearInputValidator:
    """Validates the "year from" / "year to" inputs of a picker."""

    def __init__(
        self,
        clock: Optional[Clock] = None,
        settings: Optional[PickerSettings] = None,
    ):
        """
        Args:
            clock: Supplies the current year. Defaults to SystemClock.
            settings: Picker settings. Defaults to the cached app settings.
        """
        self._clock = clock or SystemClock()
        self._settings = settings or get_settings().picker

    @staticmethod
    def sanitize(raw: Optional[str]) -> str:
        """Keep digits only, truncated to four characters."""
        if raw is None:
            return ""
        return _NON_DIGITS.sub("", str(raw))[:_MAX_YEAR_DIGITS]

    @property
    def min_year(self) -> int:
        return self._settings.min_year

    @property
    def max_year(self) -> int:
        return self._clock.today().year + self._settings.max_years_ahead

    def _check_year(
        self,
        field: str,
        text: str,
    ) -> tuple[Optional[int], list[ValidationIssue]]:
        if not text:
            return None, [ValidationIssue(
                field=field,
                issue_type="missing",
                message="Year is required",
                severity="error",
                suggested_fix="Enter a four digit year",
            )]

        year = int(text)
        if year < self.min_year or year > self.max_year:
            return year, [ValidationIssue(
                field=field,
                issue_type="out_of_range",
                message=(
                    f"Year {year} is outside the allowed range "
                    f"{self.min_year}-{self.max_year}"
                ),
                severity="error",
                suggested_fix=f"Enter a year between {self.min_year} and {self.max_year}",
            )]

        return year, []

    def validate(
        self,
        raw_from: Optional[str],
        raw_to: Optional[str],
    ) -> YearInputResult:
        """
        Validate both year inputs.

        Returns a YearInputResult. When valid, year_from <= year_to
        regardless of the order the years were typed in.
        """
        year_from, issues = self._check_year("year_from", self.sanitize(raw_from))
        year_to, to_issues = self._check_year("year_to", self.sanitize(raw_to))
        issues.extend(to_issues)

        if issues:
            return YearInputResult(year_from=year_from, year_to=year_to, issues=issues)

        return YearInputResult(
            year_from=min(year_from, year_to),
            year_to=max(year_from, year_to),
        )
