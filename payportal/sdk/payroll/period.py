"""Pay-period computation.

Turns hours worked and an hourly rate into gross pay, subtracts statutory
contributions and manual deductions, and floors net pay at zero.

Policy:
    Contributions are computed from basic pay (regular hours only). Overtime,
    night differential, holiday premiums and allowances raise gross pay but
    never the contribution base.
"""

import logging
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

from pydantic import ValidationError

from ..contributions import ContributionCalculator, RateSchedules, load_rate_schedules
from ..contributions.calculator import BRACKET_TABLE, SocialInsuranceMode
from ..money import InvalidInputError, Number, from_cents, multiply_to_cents
from .schemas import PayPeriodInput, PayPeriodResult

logger = logging.getLogger(__name__)

# Night differential window: hours starting at 22:00 through 05:00
NIGHT_START_HOUR = 22
NIGHT_END_HOUR = 6

_NON_NEGATIVE_FIELDS = (
    "hourly_rate",
    "regular_hours",
    "overtime_hours",
    "overtime_multiplier",
    "manual_deductions",
    "night_diff_hours",
    "regular_holiday_hours",
    "regular_holiday_ot_hours",
    "special_holiday_hours",
    "special_holiday_ot_hours",
    "allowance",
)


def validate_input(period: PayPeriodInput) -> None:
    """Reject negative amounts instead of clamping them.

    Raises:
        InvalidInputError: Listing every negative field
    """
    negative = [
        f"{name}={getattr(period, name)}"
        for name in _NON_NEGATIVE_FIELDS
        if getattr(period, name) < 0
    ]
    for name, multiplier in period.premium_rates:
        if multiplier < 0:
            negative.append(f"premium_rates.{name}={multiplier}")

    if negative:
        raise InvalidInputError(f"Negative values not allowed: {', '.join(negative)}")


def compute(
    period: PayPeriodInput,
    calculator: Optional[ContributionCalculator] = None,
) -> PayPeriodResult:
    """Compute one pay period.

    Args:
        period: Hours, rate and deductions
        calculator: Contribution calculator bound to a rate schedule. Defaults
                    to the configured year in bracket-table mode.

    Returns:
        A new PayPeriodResult; nothing is cached between calls

    Raises:
        InvalidInputError: If any hours, rate or deduction is negative
    """
    validate_input(period)
    if calculator is None:
        calculator = ContributionCalculator(load_rate_schedules())

    rate = period.hourly_rate
    premiums = period.premium_rates

    # Earnings, each product rounded to cents once
    basic = multiply_to_cents(rate, period.regular_hours)
    overtime = multiply_to_cents(rate, period.overtime_multiplier, period.overtime_hours)
    night_diff = multiply_to_cents(rate, premiums.night_diff, period.night_diff_hours)
    holiday = (
        multiply_to_cents(rate, premiums.regular_holiday, period.regular_holiday_hours)
        + multiply_to_cents(rate, premiums.regular_holiday_ot, period.regular_holiday_ot_hours)
        + multiply_to_cents(rate, premiums.special_holiday, period.special_holiday_hours)
        + multiply_to_cents(rate, premiums.special_holiday_ot, period.special_holiday_ot_hours)
    )
    allowance = multiply_to_cents(period.allowance)
    gross = basic + overtime + night_diff + holiday + allowance

    # Statutory contributions on basic pay only
    social = calculator.social_insurance_cents(basic)
    health = calculator.health_insurance_cents(basic)
    housing = calculator.housing_fund_cents(basic)
    withholding_tax = 0
    manual = multiply_to_cents(period.manual_deductions)

    total_deductions = social + health + housing + withholding_tax + manual
    net = max(0, gross - total_deductions)

    logger.debug(
        f"pay period: basic={basic} overtime={overtime} gross={gross} "
        f"deductions={total_deductions} net={net} (cents)"
    )
    if gross < total_deductions:
        logger.debug(f"net pay floored at zero: deductions exceed gross by {total_deductions - gross} cents")

    return PayPeriodResult(
        basic_pay=from_cents(basic),
        overtime_pay=from_cents(overtime),
        night_diff_pay=from_cents(night_diff),
        holiday_pay=from_cents(holiday),
        allowance=from_cents(allowance),
        gross_pay=from_cents(gross),
        social_insurance=from_cents(social),
        health_insurance=from_cents(health),
        housing_fund=from_cents(housing),
        withholding_tax=from_cents(withholding_tax),
        manual_deductions=from_cents(manual),
        total_deductions=from_cents(total_deductions),
        net_pay=from_cents(net),
        schedule_year=calculator.schedules.year,
        social_insurance_mode=calculator.social_insurance_mode,
    )


def build_input(
    hourly_rate: Number,
    regular_hours: Number,
    overtime_hours: Number = 0,
    overtime_multiplier: Number = Decimal("1.25"),
    manual_deductions: Number = 0,
    **supplemental,
) -> PayPeriodInput:
    """Build a PayPeriodInput, reporting unreadable values as InvalidInputError."""
    try:
        return PayPeriodInput(
            hourly_rate=hourly_rate,
            regular_hours=regular_hours,
            overtime_hours=overtime_hours,
            overtime_multiplier=overtime_multiplier,
            manual_deductions=manual_deductions,
            **supplemental,
        )
    except ValidationError as e:
        raise InvalidInputError(f"Invalid pay-period input:\n{e}") from e


def compute_pay_period(
    hourly_rate: Number,
    regular_hours: Number,
    overtime_hours: Number = 0,
    overtime_multiplier: Number = Decimal("1.25"),
    manual_deductions: Number = 0,
    schedules: Optional[RateSchedules] = None,
    social_insurance_mode: SocialInsuranceMode = BRACKET_TABLE,
    **supplemental,
) -> PayPeriodResult:
    """Compute a pay period from plain values.

    Example:
        result = compute_pay_period(58.75, 80, 5)
        result.gross_pay  # Decimal('5067.19')
        result.net_pay    # Decimal('4473.19')

    Args:
        hourly_rate: Pay per regular hour
        regular_hours: Regular hours worked
        overtime_hours: Overtime hours worked
        overtime_multiplier: Overtime pay multiplier (default 1.25)
        manual_deductions: Ad-hoc deductions for the period
        schedules: Rate schedules (default: configured year)
        social_insurance_mode: 'bracket_table' (default) or 'formula'
        **supplemental: night_diff_hours, regular_holiday_hours,
            regular_holiday_ot_hours, special_holiday_hours,
            special_holiday_ot_hours, allowance, premium_rates

    Raises:
        InvalidInputError: Negative or unreadable inputs
        UnconfiguredScheduleError: No schedule for the configured year
    """
    period = build_input(
        hourly_rate,
        regular_hours,
        overtime_hours,
        overtime_multiplier,
        manual_deductions,
        **supplemental,
    )
    if schedules is None:
        schedules = load_rate_schedules()
    return compute(period, ContributionCalculator(schedules, social_insurance_mode))


def night_diff_hours(time_in: datetime, time_out: datetime) -> int:
    """Count whole clock hours worked inside the night window (22:00-06:00).

    Counting starts at the first full hour at or after time_in and includes
    every hour that begins before time_out.

    Example:
        night_diff_hours(datetime(2025, 3, 1, 20, 30), datetime(2025, 3, 2, 2, 0))  # -> 4
    """
    if time_out <= time_in:
        return 0

    current = time_in.replace(minute=0, second=0, microsecond=0)
    if current < time_in:
        current += timedelta(hours=1)

    hours = 0
    while current < time_out:
        if current.hour >= NIGHT_START_HOUR or current.hour < NIGHT_END_HOUR:
            hours += 1
        current += timedelta(hours=1)
    return hours
