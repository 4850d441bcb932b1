"""
TZ Quarters — DST-safe Quarter Boundaries in a Named Zone

Границы кварталов по локальному календарю зоны, результат — UTC instant.

Алгоритм (никогда не прибавляет фиксированные длительности к UTC):
1. instant нормализуется к UTC и переводится в локальные wall-clock поля зоны
2. Квартальная арифметика выполняется над naive полями (year/month/day/time)
3. Полученные поля интерпретируются в зоне по её правилам → UTC instant

Конец квартала = UTC начало следующего квартала - MIN_TICK. Это
последний представимый момент квартала, даже если локальное
23:59:59.999999 попадает в DST overlap или gap.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат всегда aware datetime в UTC
2. end_of_tz_quarter(U, Z) + MIN_TICK == start_of_next_tz_quarter(U, Z)
3. Зона None / неизвестная → InvalidTimeZoneError (никогда не UTC по умолчанию)
"""

from dataclasses import dataclass
from datetime import datetime, tzinfo

from src.core.domain.quarter_period import QuarterPeriod
from src.core.periods.quarters import (
    MIN_TICK,
    QuarterRangeOverflow,
    end_of_quarter,
    quarter_of,
    shift_quarters,
)
from src.core.periods.zones import (
    DEFAULT_AMBIGUITY_POLICY,
    AmbiguityPolicy,
    ZoneResolver,
    default_resolver,
    from_zone_local,
    to_zone_local,
)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class TzQuarterConfig:
    """Конфигурация tz-aware квартального календаря.

    Политика применяется к локальной полуночи начала квартала, если она
    попадает в DST overlap или gap.
    """

    ambiguity: AmbiguityPolicy = DEFAULT_AMBIGUITY_POLICY


# =============================================================================
# TZ QUARTER CALENDAR
# =============================================================================


class TzQuarterCalendar:
    """Квартальные границы по локальному календарю зоны.

    Зоны разрешаются через ZoneResolver (по умолчанию — процессный,
    только для чтения). Экземпляр не имеет изменяемого состояния и
    безопасен для параллельного использования.
    """

    def __init__(
        self,
        config: TzQuarterConfig | None = None,
        resolver: ZoneResolver | None = None,
    ):
        """Инициализация календаря.

        Args:
            config: конфигурация (опционально, используется default)
            resolver: ZoneResolver (опционально, используется процессный)
        """
        self.config = config or TzQuarterConfig()
        self.resolver = resolver or default_resolver()

    # -------------------------------------------------------------------------
    # Starts
    # -------------------------------------------------------------------------

    def start_of_quarter(self, instant: datetime, zone: str | tzinfo | None) -> datetime:
        """UTC начало локального квартала зоны, содержащего instant."""
        return self._start(instant, zone, 0)

    def start_of_next_quarter(self, instant: datetime, zone: str | tzinfo | None) -> datetime:
        """UTC начало локального квартала, следующего за кварталом instant."""
        return self._start(instant, zone, 1)

    def start_of_previous_quarter(
        self, instant: datetime, zone: str | tzinfo | None
    ) -> datetime:
        """UTC начало локального квартала, предшествующего кварталу instant."""
        return self._start(instant, zone, -1)

    # -------------------------------------------------------------------------
    # Ends
    # -------------------------------------------------------------------------

    def end_of_quarter(self, instant: datetime, zone: str | tzinfo | None) -> datetime:
        """UTC последний момент локального квартала зоны, содержащего instant."""
        return self._end(instant, zone, 0)

    def end_of_next_quarter(self, instant: datetime, zone: str | tzinfo | None) -> datetime:
        """UTC последний момент следующего локального квартала."""
        return self._end(instant, zone, 1)

    def end_of_previous_quarter(
        self, instant: datetime, zone: str | tzinfo | None
    ) -> datetime:
        """UTC последний момент предыдущего локального квартала."""
        return self._end(instant, zone, -1)

    def quarter_period(self, instant: datetime, zone: str | tzinfo | None) -> QuarterPeriod:
        """
        Локальный квартал зоны, содержащий instant.

        Returns:
            QuarterPeriod: year/quarter по локальному календарю зоны,
            start/end — UTC instants
        """
        tz = self.resolver.resolve(zone)
        local = to_zone_local(instant, tz, resolver=self.resolver)
        return QuarterPeriod(
            year=local.year,
            quarter=quarter_of(local),
            start=self._start(instant, tz, 0),
            end=self._end(instant, tz, 0),
        )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _start(self, instant: datetime, zone: str | tzinfo | None, quarters: int) -> datetime:
        tz = self.resolver.resolve(zone)
        local = to_zone_local(instant, tz, resolver=self.resolver)
        boundary = shift_quarters(local, quarters)
        return from_zone_local(boundary, tz, self.config.ambiguity, resolver=self.resolver)

    def _end(self, instant: datetime, zone: str | tzinfo | None, quarters: int) -> datetime:
        tz = self.resolver.resolve(zone)
        local = to_zone_local(instant, tz, resolver=self.resolver)

        try:
            next_start = shift_quarters(local, quarters + 1)
        except QuarterRangeOverflow:
            # Q4 9999 года: следующего квартала нет, конец берётся по
            # локальным полям (последнее вхождение при overlap)
            local_end = end_of_quarter(shift_quarters(local, quarters))
            return from_zone_local(
                local_end, tz, AmbiguityPolicy.LATER, resolver=self.resolver
            )

        boundary = from_zone_local(next_start, tz, self.config.ambiguity, resolver=self.resolver)
        try:
            return boundary - MIN_TICK
        except OverflowError as e:
            raise QuarterRangeOverflow(
                f"End of quarter before {boundary.isoformat()} is out of range"
            ) from e


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

# Глобальный календарь с конфигурацией по умолчанию
_DEFAULT_CALENDAR = TzQuarterCalendar()


def start_of_tz_quarter(instant: datetime, zone: str | tzinfo | None) -> datetime:
    """
    UTC начало квартала зоны zone, содержащего instant.

    Args:
        instant: Aware datetime (offset нормализуется к UTC)
        zone: IANA key или tzinfo

    Returns:
        Aware datetime в UTC

    Raises:
        InvalidTimeZoneError: Если зона None или не разрешается
        QuarterRangeOverflow: Если результат вне диапазона datetime
    """
    return _DEFAULT_CALENDAR.start_of_quarter(instant, zone)


def start_of_next_tz_quarter(instant: datetime, zone: str | tzinfo | None) -> datetime:
    """UTC начало следующего квартала зоны."""
    return _DEFAULT_CALENDAR.start_of_next_quarter(instant, zone)


def start_of_previous_tz_quarter(instant: datetime, zone: str | tzinfo | None) -> datetime:
    """UTC начало предыдущего квартала зоны."""
    return _DEFAULT_CALENDAR.start_of_previous_quarter(instant, zone)


def end_of_tz_quarter(instant: datetime, zone: str | tzinfo | None) -> datetime:
    """
    UTC последний момент квартала зоны zone, содержащего instant.

    Равен start_of_next_tz_quarter(instant, zone) - MIN_TICK.
    """
    return _DEFAULT_CALENDAR.end_of_quarter(instant, zone)


def end_of_next_tz_quarter(instant: datetime, zone: str | tzinfo | None) -> datetime:
    """UTC последний момент следующего квартала зоны."""
    return _DEFAULT_CALENDAR.end_of_next_quarter(instant, zone)


def end_of_previous_tz_quarter(instant: datetime, zone: str | tzinfo | None) -> datetime:
    """UTC последний момент предыдущего квартала зоны."""
    return _DEFAULT_CALENDAR.end_of_previous_quarter(instant, zone)


def tz_quarter_period(instant: datetime, zone: str | tzinfo | None) -> QuarterPeriod:
    """QuarterPeriod зоны zone (границы в UTC), содержащий instant."""
    return _DEFAULT_CALENDAR.quarter_period(instant, zone)
