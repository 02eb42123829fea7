"""
Date helpers for age calculations.
"""

from datetime import date
from typing import Optional


def years_before(reference: date, years: int) -> date:
    """
    Return the same calendar day ``years`` years before ``reference``.

    February 29th maps to February 28th in non-leap years.
    """
    try:
        return reference.replace(year=reference.year - years)
    except ValueError:
        return reference.replace(year=reference.year - years, day=28)


def calculate_age(date_of_birth: date, today: Optional[date] = None) -> int:
    """
    Compute age in whole years.

    Args:
        date_of_birth: Birth date
        today: Reference date, defaults to the current date

    Returns:
        int: Completed years since birth
    """
    today = today or date.today()
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age
