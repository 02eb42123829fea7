"""Small helpers shared by schemas and services."""

from .dates import calculate_age, years_before

__all__ = ["calculate_age", "years_before"]
