"""
Domain models and value objects.

Contains calendar value objects like QuarterPeriod.
"""

from src.core.domain.quarter_period import QuarterPeriod

__all__ = [
    "QuarterPeriod",
]
