"""
Quarters — Calendar Quarter Boundaries

Модуль вычисляет границы календарных кварталов для datetime с UTC offset:
- Начало / конец квартала, содержащего значение
- Начало / конец следующего и предыдущего квартала
- Календарный сдвиг на N месяцев (day clamp к длине месяца)
- QuarterPeriod и последовательности кварталов

Квартал начинается 1 января, 1 апреля, 1 июля и 1 октября в 00:00:00
по wall-clock полям значения. Все вычисления выполняются над полями
year/month/day/time; tzinfo значения сохраняется без изменений.
Naive datetime трактуется как локальные wall-clock поля.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. start_of_quarter(T) <= T <= end_of_quarter(T)
2. end_of_quarter(T) + MIN_TICK == start_of_next_quarter(T)
3. start_of_quarter идемпотентна
4. Выход за datetime.min..datetime.max → QuarterRangeOverflow (никогда не wrap)
"""

import calendar
from datetime import datetime, timedelta
from typing import Final, Iterator

from dateutil.relativedelta import relativedelta

from src.core.domain.quarter_period import QuarterPeriod


# =============================================================================
# CONSTANTS
# =============================================================================

MONTHS_PER_QUARTER: Final[int] = 3
QUARTERS_PER_YEAR: Final[int] = 4

# Первые месяцы кварталов Q1..Q4
QUARTER_START_MONTHS: Final[tuple[int, ...]] = (1, 4, 7, 10)

# Минимальный представимый шаг datetime.
# Конец периода = начало следующего периода - MIN_TICK.
MIN_TICK: Final[timedelta] = timedelta(microseconds=1)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class QuarterRangeOverflow(OverflowError):
    """
    Результат выходит за диапазон datetime (year 1..9999).

    Например, start_of_next_quarter для значения в Q4 9999 года.
    """

    pass


# =============================================================================
# QUARTER ARITHMETIC
# =============================================================================


def quarter_index(month: int) -> int:
    """
    Индекс квартала (0..3) для месяца 1..12.

    Raises:
        ValueError: Если month вне диапазона 1..12

    Examples:
        >>> quarter_index(1)
        0
        >>> quarter_index(12)
        3
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    return (month - 1) // MONTHS_PER_QUARTER


def quarter_of(value: datetime) -> int:
    """Номер квартала (1..4), содержащего value."""
    return quarter_index(value.month) + 1


def add_months(value: datetime, months: int) -> datetime:
    """
    Календарный сдвиг на months месяцев.

    День ограничивается длиной целевого месяца (31 янв + 1 месяц = 29 фев
    в високосный год). Время суток и tzinfo не меняются.

    Args:
        value: Исходное значение
        months: Количество месяцев (может быть отрицательным)

    Returns:
        Новое значение datetime

    Raises:
        QuarterRangeOverflow: Если результат вне диапазона datetime
    """
    try:
        return value + relativedelta(months=months)
    except (ValueError, OverflowError) as e:
        raise QuarterRangeOverflow(
            f"Shifting {value.isoformat()} by {months} months leaves the datetime range"
        ) from e


def shift_quarters(value: datetime, quarters: int) -> datetime:
    """Начало квартала, отстоящего на quarters кварталов от квартала value."""
    return add_months(start_of_quarter(value), quarters * MONTHS_PER_QUARTER)


# =============================================================================
# QUARTER BOUNDARIES
# =============================================================================


def start_of_quarter(value: datetime) -> datetime:
    """
    Первый момент (00:00:00.000000) квартала, содержащего value.

    Args:
        value: Значение с UTC offset (или naive wall-clock поля)

    Returns:
        datetime с тем же tzinfo

    Examples:
        >>> start_of_quarter(datetime(2024, 2, 15, 10, 0))
        datetime.datetime(2024, 1, 1, 0, 0)
    """
    month = QUARTER_START_MONTHS[quarter_index(value.month)]
    return value.replace(
        month=month, day=1, hour=0, minute=0, second=0, microsecond=0, fold=0
    )


def end_of_quarter(value: datetime) -> datetime:
    """
    Последний представимый момент квартала, содержащего value.

    Вычисляется от последнего календарного дня квартала (23:59:59.999999),
    что ровно на MIN_TICK раньше начала следующего квартала. Для Q4 9999
    года результат равен datetime.max (без переполнения).

    Args:
        value: Значение с UTC offset (или naive wall-clock поля)

    Returns:
        datetime с тем же tzinfo
    """
    end_month = QUARTER_START_MONTHS[quarter_index(value.month)] + MONTHS_PER_QUARTER - 1
    last_day = calendar.monthrange(value.year, end_month)[1]
    return value.replace(
        month=end_month,
        day=last_day,
        hour=23,
        minute=59,
        second=59,
        microsecond=999999,
        fold=0,
    )


def start_of_next_quarter(value: datetime) -> datetime:
    """
    Начало следующего квартала: start_of_quarter(value) + 3 месяца.

    Raises:
        QuarterRangeOverflow: Для значений в Q4 9999 года
    """
    return shift_quarters(value, 1)


def start_of_previous_quarter(value: datetime) -> datetime:
    """
    Начало предыдущего квартала: start_of_quarter(value) - 3 месяца.

    Raises:
        QuarterRangeOverflow: Для значений в Q1 1 года
    """
    return shift_quarters(value, -1)


def end_of_next_quarter(value: datetime) -> datetime:
    """
    Конец квартала, следующего за кварталом value.

    Считается от начала следующего квартала, а не сдвигом end_of_quarter
    на 3 месяца: 30 сентября + 3 месяца дало бы 30 декабря вместо 31.
    """
    return end_of_quarter(start_of_next_quarter(value))


def end_of_previous_quarter(value: datetime) -> datetime:
    """Конец квартала, предшествующего кварталу value."""
    return end_of_quarter(start_of_previous_quarter(value))


# =============================================================================
# QUARTER PERIODS
# =============================================================================


def quarter_period(value: datetime) -> QuarterPeriod:
    """
    QuarterPeriod, содержащий value.

    Returns:
        QuarterPeriod с границами в tzinfo значения
    """
    return QuarterPeriod(
        year=value.year,
        quarter=quarter_of(value),
        start=start_of_quarter(value),
        end=end_of_quarter(value),
    )


def iter_quarters(start: datetime, stop: datetime) -> Iterator[QuarterPeriod]:
    """
    Последовательные кварталы, покрывающие полуинтервал [start, stop).

    Первый период — квартал, содержащий start. Итерация прекращается на
    квартале, который содержит момент stop - MIN_TICK.

    Args:
        start: Начало интервала
        stop: Конец интервала (не включительно)

    Yields:
        QuarterPeriod в хронологическом порядке

    Raises:
        ValueError: Если stop < start
    """
    if stop < start:
        raise ValueError(
            f"stop {stop.isoformat()} must not be before start {start.isoformat()}"
        )
    if stop == start:
        return

    current = start_of_quarter(start)
    while current < stop:
        period = quarter_period(current)
        yield period
        # Следующий квартал начинается после stop, дальше не сдвигаемся
        # (иначе Q4 9999 года вызвал бы QuarterRangeOverflow)
        if period.end >= stop:
            return
        current = start_of_next_quarter(current)
