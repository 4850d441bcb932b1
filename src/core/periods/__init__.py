"""
Core period modules

Календарные кварталы: границы для datetime с UTC offset и DST-safe
границы по локальному календарю именованной зоны.
"""

# Quarters (offset-preserving wall-clock arithmetic)
from src.core.periods.quarters import (
    # Constants
    MIN_TICK,
    MONTHS_PER_QUARTER,
    QUARTER_START_MONTHS,
    QUARTERS_PER_YEAR,
    # Exceptions
    QuarterRangeOverflow,
    # Arithmetic
    add_months,
    quarter_index,
    quarter_of,
    shift_quarters,
    # Boundaries
    end_of_next_quarter,
    end_of_previous_quarter,
    end_of_quarter,
    start_of_next_quarter,
    start_of_previous_quarter,
    start_of_quarter,
    # Periods
    iter_quarters,
    quarter_period,
)

# Zones (time zone collaborator)
from src.core.periods.zones import (
    DEFAULT_AMBIGUITY_POLICY,
    UTC,
    AmbiguityPolicy,
    AmbiguousLocalTimeError,
    InvalidTimeZoneError,
    NonexistentLocalTimeError,
    ZoneResolver,
    default_resolver,
    from_zone_local,
    to_zone_local,
)

# TZ Quarters (zone-local boundaries as UTC instants)
from src.core.periods.tz_quarters import (
    TzQuarterCalendar,
    TzQuarterConfig,
    end_of_next_tz_quarter,
    end_of_previous_tz_quarter,
    end_of_tz_quarter,
    start_of_next_tz_quarter,
    start_of_previous_tz_quarter,
    start_of_tz_quarter,
    tz_quarter_period,
)

__all__ = [
    # Quarters — Constants
    "MIN_TICK",
    "MONTHS_PER_QUARTER",
    "QUARTER_START_MONTHS",
    "QUARTERS_PER_YEAR",
    # Quarters — Exceptions
    "QuarterRangeOverflow",
    # Quarters — Arithmetic
    "add_months",
    "quarter_index",
    "quarter_of",
    "shift_quarters",
    # Quarters — Boundaries
    "end_of_next_quarter",
    "end_of_previous_quarter",
    "end_of_quarter",
    "start_of_next_quarter",
    "start_of_previous_quarter",
    "start_of_quarter",
    # Quarters — Periods
    "iter_quarters",
    "quarter_period",
    # Zones — Constants
    "DEFAULT_AMBIGUITY_POLICY",
    "UTC",
    # Zones — Types
    "AmbiguityPolicy",
    "ZoneResolver",
    # Zones — Exceptions
    "AmbiguousLocalTimeError",
    "InvalidTimeZoneError",
    "NonexistentLocalTimeError",
    # Zones — Functions
    "default_resolver",
    "from_zone_local",
    "to_zone_local",
    # TZ Quarters — Types
    "TzQuarterCalendar",
    "TzQuarterConfig",
    # TZ Quarters — Functions
    "end_of_next_tz_quarter",
    "end_of_previous_tz_quarter",
    "end_of_tz_quarter",
    "start_of_next_tz_quarter",
    "start_of_previous_tz_quarter",
    "start_of_tz_quarter",
    "tz_quarter_period",
]
