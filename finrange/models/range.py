"""
Core Data Models for finrange

These models define the values that flow between the date range picker,
the resolver and the report/query layer.
They are designed to:
1. Be immutable once built
2. Reject inconsistent date pairs at construction time
3. Serialize to the `from` / `to` keys the report API expects
"""

from datetime import MAXYEAR, MINYEAR, date
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class RangeSelector(str, Enum):
    """
    Quick range buttons offered by the date range picker.

    Values are the exact tokens the frontend sends.
    """
    TODAY = "today"
    YESTERDAY = "yesterday"
    LAST_7 = "last7"
    LAST_30 = "last30"
    THIS_MONTH = "thisMonth"
    LAST_MONTH = "lastMonth"
    LAST_3_MONTHS = "last3Months"
    THIS_YEAR = "thisYear"
    LAST_YEAR = "lastYear"
    LAST_2_YEARS = "last2Years"


# Token used when the explicit year inputs are submitted
YEAR_RANGE_TOKEN = "yearRange"


# =============================================================================
# SELECTOR AND INTERVAL MODELS
# =============================================================================

class ExplicitYearRange(BaseModel):
    """
    A span of whole calendar years typed into the year inputs.

    The two years may arrive in either order; `start_year` / `end_year`
    give the normalized bounds.
    """
    model_config = ConfigDict(frozen=True)

    year_from: int = Field(
        ...,
        ge=MINYEAR,
        le=MAXYEAR,
        description="First year as entered"
    )
    year_to: int = Field(
        ...,
        ge=MINYEAR,
        le=MAXYEAR,
        description="Second year as entered"
    )

    @property
    def start_year(self) -> int:
        return min(self.year_from, self.year_to)

    @property
    def end_year(self) -> int:
        return max(self.year_from, self.year_to)


class DateInterval(BaseModel):
    """
    Inclusive calendar-date interval.

    CRITICAL: `date_from <= date_to` always holds. Building an inverted
    interval raises a validation error.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date_from: date = Field(
        ...,
        alias="from",
        description="First day included"
    )
    date_to: date = Field(
        ...,
        alias="to",
        description="Last day included"
    )

    @model_validator(mode='after')
    def validate_order(self) -> 'DateInterval':
        if self.date_to < self.date_from:
            raise ValueError("Interval end cannot be before start")
        return self

    @property
    def days(self) -> int:
        """Number of calendar days covered, both ends included."""
        return (self.date_to - self.date_from).days + 1

    def contains(self, day: date) -> bool:
        return self.date_from <= day <= self.date_to

    def to_query_params(self) -> dict[str, str]:
        """ISO `from` / `to` strings, as sent to the report endpoints."""
        return {
            "from": self.date_from.isoformat(),
            "to": self.date_to.isoformat(),
        }


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'out_of_range')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class YearInputResult(BaseModel):
    """
    Outcome of validating the two year inputs.

    On success `year_from <= year_to`, whatever order they were typed in.
    """

    year_from: Optional[int] = None
    year_to: Optional[int] = None
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def is_valid(self) -> bool:
        return (
            not self.has_errors
            and self.year_from is not None
            and self.year_to is not None
        )

    def to_year_range(self) -> ExplicitYearRange:
        if not self.is_valid:
            raise ValueError("Year input is not valid")
        return ExplicitYearRange(year_from=self.year_from, year_to=self.year_to)
