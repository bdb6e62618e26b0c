"""contributions - Statutory contribution schedules and calculations.

Scope:
- Rate schedules per effective year (social insurance, health insurance,
  housing fund), loaded from config/rate_schedules/{year}.yaml
- Employee-share calculation per scheme, plus employer-share breakdowns

Constraints:
- Pure calculation - no employee or period data (that's in payroll/)
- Schedules are immutable once loaded; a new year is a new file
- Bracket-table mode is the social-insurance system of record; formula mode
  is kept as a named legacy alternative and is never mixed in silently

Usage:
    from payportal.sdk.contributions import ContributionCalculator, load_rate_schedules

    calc = ContributionCalculator(load_rate_schedules(2025))
    calc.social_insurance(12000)  # Decimal('600.00')
"""

from .schemas import (
    ContributionBracket,
    BracketTableSchedule,
    SocialInsuranceFormula,
    HealthInsuranceSchedule,
    HousingFundSchedule,
    RateSchedules,
)

from .schedules import (
    load_rate_schedules,
    parse_rate_schedules,
    find_schedule_file,
    list_schedule_years,
    clear_schedule_cache,
    UnconfiguredScheduleError,
    DEFAULT_SCHEDULE_YEAR,
)

from .calculator import (
    ContributionCalculator,
    ContributionSummary,
    SocialInsuranceBreakdown,
    SharedContribution,
    SocialInsuranceMode,
    BRACKET_TABLE,
    FORMULA,
    SOCIAL_INSURANCE_MODES,
    bracket_table_cents,
    formula_cents,
    health_insurance_cents,
    housing_fund_cents,
    find_bracket,
)

__all__ = [
    # Schemas
    "ContributionBracket",
    "BracketTableSchedule",
    "SocialInsuranceFormula",
    "HealthInsuranceSchedule",
    "HousingFundSchedule",
    "RateSchedules",
    # Loading
    "load_rate_schedules",
    "parse_rate_schedules",
    "find_schedule_file",
    "list_schedule_years",
    "clear_schedule_cache",
    "UnconfiguredScheduleError",
    "DEFAULT_SCHEDULE_YEAR",
    # Calculation
    "ContributionCalculator",
    "ContributionSummary",
    "SocialInsuranceBreakdown",
    "SharedContribution",
    "SocialInsuranceMode",
    "BRACKET_TABLE",
    "FORMULA",
    "SOCIAL_INSURANCE_MODES",
    "bracket_table_cents",
    "formula_cents",
    "health_insurance_cents",
    "housing_fund_cents",
    "find_bracket",
]
