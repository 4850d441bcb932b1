"""
QuarterPeriod — Модель календарного квартала

Immutable Pydantic модель, описывающая один календарный квартал:
год, номер квартала (1..4) и точные границы [start, end].

end всегда ровно на MIN_TICK (1 микросекунда) раньше начала следующего
квартала. Границы сохраняют tzinfo исходного значения (или UTC для
tz-aware вычислений).
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# QUARTER PERIOD MODEL
# =============================================================================


class QuarterPeriod(BaseModel):
    """
    Календарный квартал с точными границами.

    Immutable модель (frozen=True): все вычисления создают новый экземпляр.
    """

    year: int = Field(..., ge=1, le=9999, description="Календарный год квартала")
    quarter: int = Field(..., ge=1, le=4, description="Номер квартала (1..4)")
    start: datetime = Field(..., description="Первый момент квартала (включительно)")
    end: datetime = Field(..., description="Последний представимый момент квартала (включительно)")

    model_config = {"frozen": True}  # Immutable

    @field_validator("end")
    @classmethod
    def validate_end_after_start(cls, v: datetime, info) -> datetime:
        """Проверка, что end строго позже start и оба значения одного рода (naive/aware)."""
        if "start" in info.data:
            start = info.data["start"]
            if (start.tzinfo is None) != (v.tzinfo is None):
                raise ValueError("start and end must both be naive or both be timezone-aware")
            if v <= start:
                raise ValueError(f"end {v.isoformat()} must be after start {start.isoformat()}")
        return v

    @property
    def label(self) -> str:
        """Короткая метка квартала, например '2024-Q1'."""
        return f"{self.year:04d}-Q{self.quarter}"

    def contains(self, value: datetime) -> bool:
        """
        Проверка принадлежности момента кварталу.

        Args:
            value: Момент времени (naive/aware — как у границ периода)

        Returns:
            True если start <= value <= end
        """
        return self.start <= value <= self.end
