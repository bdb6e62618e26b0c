"""Pay Portal SDK - statutory contributions and pay-period computation."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    unset_setting,
    get_schedules_dir,
    KNOWN_SETTINGS,
)

from .money import (
    InvalidInputError,
    to_decimal,
    to_cents,
    from_cents,
)

from .contributions import (
    ContributionCalculator,
    ContributionSummary,
    SocialInsuranceBreakdown,
    SharedContribution,
    RateSchedules,
    load_rate_schedules,
    list_schedule_years,
    clear_schedule_cache,
    UnconfiguredScheduleError,
    DEFAULT_SCHEDULE_YEAR,
    BRACKET_TABLE,
    FORMULA,
    SOCIAL_INSURANCE_MODES,
)

from .payroll import (
    PayPeriodInput,
    PayPeriodResult,
    PayslipRecord,
    PremiumRates,
    compute,
    compute_pay_period,
    night_diff_hours,
    PayrollService,
    PayrollAccessDenied,
)

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "unset_setting",
    "get_schedules_dir",
    "KNOWN_SETTINGS",
    # Money
    "InvalidInputError",
    "to_decimal",
    "to_cents",
    "from_cents",
    # Contributions
    "ContributionCalculator",
    "ContributionSummary",
    "SocialInsuranceBreakdown",
    "SharedContribution",
    "RateSchedules",
    "load_rate_schedules",
    "list_schedule_years",
    "clear_schedule_cache",
    "UnconfiguredScheduleError",
    "DEFAULT_SCHEDULE_YEAR",
    "BRACKET_TABLE",
    "FORMULA",
    "SOCIAL_INSURANCE_MODES",
    # Payroll
    "PayPeriodInput",
    "PayPeriodResult",
    "PayslipRecord",
    "PremiumRates",
    "compute",
    "compute_pay_period",
    "night_diff_hours",
    "PayrollService",
    "PayrollAccessDenied",
]
