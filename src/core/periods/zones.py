"""
Zones — Time Zone Resolution & Wall-Clock Conversion

Коллаборатор для tz-aware вычислений кварталов:
- Разрешение идентификатора зоны (IANA key или tzinfo) в набор правил
- Конверсия UTC instant → локальные wall-clock поля зоны
- Конверсия локальных wall-clock полей → UTC instant с явной политикой
  для неоднозначных (fall-back) и несуществующих (spring-forward) моментов

Wall-clock поля представлены naive datetime. Instants — aware datetime.

ПОЛИТИКА НЕОДНОЗНАЧНОСТИ (AmbiguityPolicy):
- Неоднозначный момент (overlap): EARLIER → первое вхождение,
  LATER → второе вхождение, RAISE → AmbiguousLocalTimeError
- Несуществующий момент (gap): EARLIER и LATER сдвигают wall-clock
  вперёд на длину gap, RAISE → NonexistentLocalTimeError

База правил зон (zoneinfo) доступна только на чтение и безопасна
для конкурентного использования.
"""

import zoneinfo
from datetime import datetime, timezone, tzinfo
from enum import Enum
from typing import Final

from src.core.periods.quarters import QuarterRangeOverflow


# =============================================================================
# CONSTANTS
# =============================================================================

UTC: Final[tzinfo] = timezone.utc


class AmbiguityPolicy(str, Enum):
    """Политика разрешения неоднозначных и несуществующих локальных моментов"""

    EARLIER = "earlier"
    LATER = "later"
    RAISE = "raise"


DEFAULT_AMBIGUITY_POLICY: Final[AmbiguityPolicy] = AmbiguityPolicy.EARLIER


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvalidTimeZoneError(ValueError):
    """Идентификатор зоны равен None, пуст или не найден в базе правил."""

    pass


class AmbiguousLocalTimeError(ValueError):
    """Локальный момент встречается в зоне дважды (AmbiguityPolicy.RAISE)."""

    pass


class NonexistentLocalTimeError(ValueError):
    """Локальный момент пропущен переходом на летнее время (AmbiguityPolicy.RAISE)."""

    pass


# =============================================================================
# ZONE RESOLVER
# =============================================================================


class ZoneResolver:
    """
    Разрешение идентификаторов зон в tzinfo.

    Использует zoneinfo.ZoneInfo, который кэширует immutable наборы правил
    по ключу. Уже готовые tzinfo объекты возвращаются как есть.
    """

    def resolve(self, zone: str | tzinfo | None) -> tzinfo:
        """
        Разрешение зоны.

        Args:
            zone: IANA key (например, 'America/New_York') или tzinfo

        Returns:
            tzinfo с правилами зоны

        Raises:
            InvalidTimeZoneError: Если zone равен None, пуст или не найден
        """
        if zone is None:
            raise InvalidTimeZoneError("Time zone must not be None")

        if isinstance(zone, tzinfo):
            return zone

        if not isinstance(zone, str) or not zone.strip():
            raise InvalidTimeZoneError(
                f"Time zone must be a non-empty IANA key or tzinfo, got {zone!r}"
            )

        try:
            return zoneinfo.ZoneInfo(zone)
        except (zoneinfo.ZoneInfoNotFoundError, ValueError, OSError) as e:
            raise InvalidTimeZoneError(f"Unknown time zone: {zone!r}") from e


# Глобальный экземпляр, создаётся один раз при импорте
_DEFAULT_RESOLVER = ZoneResolver()


def default_resolver() -> ZoneResolver:
    """Процессный ZoneResolver по умолчанию."""
    return _DEFAULT_RESOLVER


# =============================================================================
# WALL-CLOCK CONVERSION
# =============================================================================


def to_zone_local(
    instant: datetime,
    zone: str | tzinfo | None,
    resolver: ZoneResolver | None = None,
) -> datetime:
    """
    Конверсия instant → локальные wall-clock поля зоны.

    Offset instant нормализуется к UTC, затем момент переводится в зону.

    Args:
        instant: Aware datetime (любой offset)
        zone: Зона для локального представления
        resolver: ZoneResolver (по умолчанию — процессный)

    Returns:
        Naive datetime с локальными полями зоны. fold=1 означает второе
        вхождение неоднозначного момента.

    Raises:
        InvalidTimeZoneError: Если зона не разрешается
        ValueError: Если instant naive
        QuarterRangeOverflow: Если локальный момент вне диапазона datetime
    """
    tz = (resolver or _DEFAULT_RESOLVER).resolve(zone)

    if instant.tzinfo is None or instant.utcoffset() is None:
        raise ValueError(f"instant must be timezone-aware, got naive {instant.isoformat()}")

    try:
        return instant.astimezone(UTC).astimezone(tz).replace(tzinfo=None)
    except OverflowError as e:
        raise QuarterRangeOverflow(
            f"{instant.isoformat()} cannot be represented in zone {tz}"
        ) from e


def from_zone_local(
    local: datetime,
    zone: str | tzinfo | None,
    policy: AmbiguityPolicy = DEFAULT_AMBIGUITY_POLICY,
    resolver: ZoneResolver | None = None,
) -> datetime:
    """
    Конверсия локальных wall-clock полей зоны → UTC instant.

    Правила зоны определяют offset, действующий в этот локальный момент.
    Неоднозначные и несуществующие моменты разрешаются по policy.

    Args:
        local: Naive datetime с локальными полями
        zone: Зона, в которой интерпретируются поля
        policy: Политика неоднозначности (default: EARLIER)
        resolver: ZoneResolver (по умолчанию — процессный)

    Returns:
        Aware datetime в UTC

    Raises:
        InvalidTimeZoneError: Если зона не разрешается
        ValueError: Если local уже aware
        AmbiguousLocalTimeError: Неоднозначный момент при policy=RAISE
        NonexistentLocalTimeError: Несуществующий момент при policy=RAISE
        QuarterRangeOverflow: Если UTC момент вне диапазона datetime
    """
    tz = (resolver or _DEFAULT_RESOLVER).resolve(zone)

    if local.tzinfo is not None:
        raise ValueError(f"local wall-clock value must be naive, got {local.isoformat()}")

    first = local.replace(tzinfo=tz, fold=0)
    second = local.replace(tzinfo=tz, fold=1)

    try:
        first_utc = first.astimezone(UTC)
        second_utc = second.astimezone(UTC)
        # Несуществующие моменты не переживают round-trip через UTC
        round_trip = first_utc.astimezone(tz).replace(tzinfo=None)
    except OverflowError as e:
        raise QuarterRangeOverflow(
            f"{local.isoformat()} in zone {tz} cannot be represented in UTC"
        ) from e

    if first_utc == second_utc:
        return first_utc

    if round_trip != local:
        if policy is AmbiguityPolicy.RAISE:
            raise NonexistentLocalTimeError(
                f"{local.isoformat()} does not exist in zone {tz}"
            )
        # fold=0 в gap использует offset до перехода → сдвиг вперёд на длину gap
        return first_utc

    if policy is AmbiguityPolicy.RAISE:
        raise AmbiguousLocalTimeError(f"{local.isoformat()} is ambiguous in zone {tz}")
    if policy is AmbiguityPolicy.LATER:
        return max(first_utc, second_utc)
    return min(first_utc, second_utc)
