"""Validation package."""

from finrange.validation.year_input import YearInputValidator

__all__ = ["YearInputValidator"]
