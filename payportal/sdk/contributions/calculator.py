"""Statutory contribution calculations.

Converts a salary figure into the employee share of each scheme:

- Social insurance: bracket lookup (system of record) or the legacy formula
- Health insurance: clamp basic pay to [floor, ceiling], apply rate, employee half
- Housing fund: tiered rate on basic pay capped at max_base

Every function here is total: negative or enormous salaries clamp to the
nearest defined boundary and never raise. The *_cents functions take and
return integer cents; ContributionCalculator wraps them for Decimal callers.
"""

import logging
from bisect import bisect_right
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..money import Number, from_cents, multiply_to_cents, to_cents, to_decimal
from .schemas import (
    BracketTableSchedule,
    ContributionBracket,
    HealthInsuranceSchedule,
    HousingFundSchedule,
    RateSchedules,
    SocialInsuranceFormula,
)
from .schedules import UnconfiguredScheduleError

logger = logging.getLogger(__name__)

SocialInsuranceMode = Literal["bracket_table", "formula"]
BRACKET_TABLE: SocialInsuranceMode = "bracket_table"
FORMULA: SocialInsuranceMode = "formula"
SOCIAL_INSURANCE_MODES = (BRACKET_TABLE, FORMULA)

# Far above every bracket top, ceiling and cap; salaries beyond it clamp here
SALARY_LIMIT = Decimal("1E+15")


# =============================================================================
# CENTS-LEVEL FUNCTIONS
# =============================================================================

def salary_to_cents(salary: Number, field: str = "salary") -> int:
    """Convert a salary to cents, saturating at +/- SALARY_LIMIT."""
    value = to_decimal(salary, field)
    return to_cents(max(min(value, SALARY_LIMIT), -SALARY_LIMIT), field)


def bracket_for_cents(salary_cents: int, table: BracketTableSchedule) -> ContributionBracket:
    """The bracket containing salary_cents.

    Salaries below zero use the first bracket; salaries above the table top
    use the last bracket.
    """
    index = bisect_right(table.brackets, max(0, salary_cents), key=lambda b: b.lower_cents) - 1
    return table.brackets[max(0, index)]


def bracket_table_cents(salary_cents: int, table: BracketTableSchedule) -> int:
    """Employee share for the bracket containing salary_cents."""
    return bracket_for_cents(salary_cents, table).contribution_cents


def find_bracket(salary: Number, table: BracketTableSchedule) -> ContributionBracket:
    """Return the ContributionBracket that applies to salary."""
    return bracket_for_cents(salary_to_cents(salary), table)


def formula_cents(salary_cents: int, formula: SocialInsuranceFormula) -> tuple:
    """Legacy social-insurance formula.

    Returns:
        Tuple of (regular_cents, supplemental_cents)
    """
    min_salary = to_cents(formula.min_salary)
    max_salary = to_cents(formula.max_salary)
    base = to_cents(formula.base_contribution)
    max_regular = to_cents(formula.max_contribution)
    max_supplemental = to_cents(formula.max_supplemental)

    if salary_cents < min_salary:
        return (base, 0)
    if salary_cents > max_salary:
        return (max_regular, max_supplemental)

    step = to_cents(formula.step_size)
    increment = to_cents(formula.step_increment)

    regular = min(base + ((salary_cents - min_salary) // step) * increment, max_regular)

    threshold = to_cents(formula.supplemental_threshold)
    supplemental = 0
    if salary_cents > threshold:
        supplemental = min(((salary_cents - threshold) // step) * increment, max_supplemental)

    return (regular, supplemental)


def health_insurance_base_cents(basic_cents: int, schedule: HealthInsuranceSchedule) -> int:
    """Basic pay clamped to the premium floor and ceiling."""
    floor = to_cents(schedule.salary_floor)
    ceiling = to_cents(schedule.salary_ceiling)
    return min(max(basic_cents, floor), ceiling)


def health_insurance_cents(basic_cents: int, schedule: HealthInsuranceSchedule) -> int:
    """Employee half of the premium on clamped basic pay."""
    base = Decimal(health_insurance_base_cents(basic_cents, schedule))
    return multiply_to_cents(base / 100, schedule.rate, schedule.employee_share)


def housing_fund_rate(basic_cents: int, schedule: HousingFundSchedule) -> Decimal:
    if basic_cents <= to_cents(schedule.low_rate_threshold):
        return schedule.low_rate
    return schedule.high_rate


def housing_fund_cents(basic_cents: int, schedule: HousingFundSchedule) -> int:
    """Tiered rate on basic pay capped at max_base."""
    basic_cents = max(0, basic_cents)
    rate = housing_fund_rate(basic_cents, schedule)
    base = min(basic_cents, to_cents(schedule.max_base))
    return multiply_to_cents(Decimal(base) / 100, rate)


# =============================================================================
# BREAKDOWNS
# =============================================================================

class SocialInsuranceBreakdown(BaseModel):
    """Social-insurance result with the mode that produced it."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: SocialInsuranceMode
    contribution: Decimal = Field(..., description="Regular employee share")
    supplemental: Decimal = Field(
        default=Decimal("0.00"),
        description="Provident-fund share (formula mode only), not part of contribution",
    )
    salary_credit: Optional[Decimal] = Field(
        default=None, description="Monthly salary credit of the bracket (bracket-table mode only)"
    )

    @property
    def combined(self) -> Decimal:
        return self.contribution + self.supplemental


class SharedContribution(BaseModel):
    """Employee and employer shares of a contribution."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    base: Decimal = Field(..., description="Salary base after clamping/capping")
    rate: Decimal
    employee_share: Decimal
    employer_share: Decimal

    @property
    def total(self) -> Decimal:
        return self.employee_share + self.employer_share


class ContributionSummary(BaseModel):
    """Employee share of every scheme for one salary figure."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    social_insurance: Decimal
    health_insurance: Decimal
    housing_fund: Decimal

    @property
    def total(self) -> Decimal:
        return self.social_insurance + self.health_insurance + self.housing_fund


# =============================================================================
# CALCULATOR
# =============================================================================

class ContributionCalculator:
    """Statutory contributions for one set of rate schedules.

    The calculator holds no state beyond the (immutable) schedules it was
    built with, so one instance can be shared across threads.

    Usage:
        calc = ContributionCalculator(load_rate_schedules(2025))
        calc.social_insurance(4700)   # Decimal('250.00')
        calc.health_insurance(4700)   # Decimal('250.00')
        calc.housing_fund(4700)       # Decimal('94.00')
    """

    def __init__(self, schedules: RateSchedules, social_insurance_mode: SocialInsuranceMode = BRACKET_TABLE):
        if social_insurance_mode not in SOCIAL_INSURANCE_MODES:
            raise ValueError(
                f"Unknown social-insurance mode '{social_insurance_mode}'. "
                f"Expected one of: {', '.join(SOCIAL_INSURANCE_MODES)}"
            )
        if social_insurance_mode == FORMULA and schedules.social_insurance_formula is None:
            raise UnconfiguredScheduleError(
                f"Rate schedule {schedules.year} has no social_insurance_formula section"
            )
        self.schedules = schedules
        self.social_insurance_mode = social_insurance_mode

    def __repr__(self) -> str:
        return (
            f"ContributionCalculator(year={self.schedules.year}, "
            f"social_insurance_mode={self.social_insurance_mode!r})"
        )

    # --- cents API (used by pay-period computation) ---

    def social_insurance_cents(self, salary_cents: int) -> int:
        if self.social_insurance_mode == FORMULA:
            regular, _ = formula_cents(salary_cents, self.schedules.social_insurance_formula)
            return regular
        return bracket_table_cents(salary_cents, self.schedules.social_insurance)

    def health_insurance_cents(self, basic_cents: int) -> int:
        return health_insurance_cents(basic_cents, self.schedules.health_insurance)

    def housing_fund_cents(self, basic_cents: int) -> int:
        return housing_fund_cents(basic_cents, self.schedules.housing_fund)

    # --- Decimal API ---

    def social_insurance(self, gross_salary: Number) -> Decimal:
        """Employee social-insurance share for a salary."""
        salary_cents = salary_to_cents(gross_salary, "gross_salary")
        result = self.social_insurance_cents(salary_cents)
        logger.debug(f"social_insurance({self.social_insurance_mode}): {salary_cents} -> {result}")
        return from_cents(result)

    def health_insurance(self, basic_pay: Number) -> Decimal:
        """Employee health-insurance share for basic pay."""
        return from_cents(self.health_insurance_cents(salary_to_cents(basic_pay, "basic_pay")))

    def housing_fund(self, basic_pay: Number) -> Decimal:
        """Employee housing-fund share for basic pay."""
        return from_cents(self.housing_fund_cents(salary_to_cents(basic_pay, "basic_pay")))

    def contributions(self, basic_pay: Number) -> ContributionSummary:
        """All three employee shares computed from the same basic pay."""
        basic_cents = salary_to_cents(basic_pay, "basic_pay")
        return ContributionSummary(
            social_insurance=from_cents(self.social_insurance_cents(basic_cents)),
            health_insurance=from_cents(self.health_insurance_cents(basic_cents)),
            housing_fund=from_cents(self.housing_fund_cents(basic_cents)),
        )

    # --- breakdowns ---

    def social_insurance_breakdown(self, gross_salary: Number) -> SocialInsuranceBreakdown:
        """Social insurance with salary credit (table) or supplemental share (formula)."""
        salary_cents = salary_to_cents(gross_salary, "gross_salary")

        if self.social_insurance_mode == FORMULA:
            regular, supplemental = formula_cents(salary_cents, self.schedules.social_insurance_formula)
            return SocialInsuranceBreakdown(
                mode=FORMULA,
                contribution=from_cents(regular),
                supplemental=from_cents(supplemental),
            )

        bracket = bracket_for_cents(salary_cents, self.schedules.social_insurance)
        return SocialInsuranceBreakdown(
            mode=BRACKET_TABLE,
            contribution=from_cents(bracket.contribution_cents),
            salary_credit=bracket.salary_credit,
        )

    def health_insurance_breakdown(self, basic_pay: Number) -> SharedContribution:
        """Premium split between employee (employee_share) and employer (the rest)."""
        schedule = self.schedules.health_insurance
        basic_cents = salary_to_cents(basic_pay, "basic_pay")
        base_cents = health_insurance_base_cents(basic_cents, schedule)
        premium = multiply_to_cents(Decimal(base_cents) / 100, schedule.rate)
        employee = self.health_insurance_cents(basic_cents)
        return SharedContribution(
            base=from_cents(base_cents),
            rate=schedule.rate,
            employee_share=from_cents(employee),
            employer_share=from_cents(premium - employee),
        )

    def housing_fund_breakdown(self, basic_pay: Number) -> SharedContribution:
        """Employee share plus the employer's fixed-rate share on the same capped base."""
        schedule = self.schedules.housing_fund
        basic_cents = max(0, salary_to_cents(basic_pay, "basic_pay"))
        base_cents = min(basic_cents, to_cents(schedule.max_base))
        return SharedContribution(
            base=from_cents(base_cents),
            rate=housing_fund_rate(basic_cents, schedule),
            employee_share=from_cents(self.housing_fund_cents(basic_cents)),
            employer_share=from_cents(
                multiply_to_cents(Decimal(base_cents) / 100, schedule.employer_rate)
            ),
        )
