"""Pydantic schemas for statutory rate schedules.

These schemas validate the config/rate_schedules/{year}.yaml files and
provide typed, immutable access to bracket tables and scheme parameters.
"""

from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..money import float_to_decimal, from_cents, to_cents


class _Frozen(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("*", mode="before")
    @classmethod
    def floats_as_decimal(cls, v: Any) -> Any:
        return float_to_decimal(v)


class ContributionBracket(_Frozen):
    """Single salary bracket with a flat employee-share contribution."""

    lower: Decimal = Field(..., ge=0, description="Lowest salary in bracket (inclusive)")
    upper: Optional[Decimal] = Field(
        default=None, description="Highest salary in bracket (inclusive), None if open-ended"
    )
    contribution: Decimal = Field(..., ge=0, description="Employee-share contribution")
    salary_credit: Optional[Decimal] = Field(
        default=None, ge=0, description="Monthly salary credit the bracket maps to"
    )

    @property
    def lower_cents(self) -> int:
        return to_cents(self.lower)

    @property
    def upper_cents(self) -> Optional[int]:
        return None if self.upper is None else to_cents(self.upper)

    @property
    def contribution_cents(self) -> int:
        return to_cents(self.contribution)


class BracketTableSchedule(_Frozen):
    """Social insurance as a discrete lookup table (system of record)."""

    brackets: List[ContributionBracket] = Field(..., min_length=1)

    @model_validator(mode="after")
    def brackets_contiguous(self) -> "BracketTableSchedule":
        """Brackets must start at zero, ascend, and leave no gap or overlap."""
        brackets = self.brackets
        if brackets[0].lower_cents != 0:
            raise ValueError(f"first bracket must start at 0, got {brackets[0].lower}")

        for prev, cur in zip(brackets, brackets[1:]):
            if prev.upper_cents is None:
                raise ValueError(f"only the last bracket may be open-ended (lower={prev.lower})")
            if prev.upper_cents < prev.lower_cents:
                raise ValueError(f"bracket upper {prev.upper} is below its lower {prev.lower}")
            if cur.lower_cents != prev.upper_cents + 1:
                raise ValueError(
                    f"brackets not contiguous: {prev.upper} is followed by {cur.lower}"
                )
            if cur.contribution_cents < prev.contribution_cents:
                raise ValueError(
                    f"contribution decreases at {cur.lower}: "
                    f"{prev.contribution} -> {cur.contribution}"
                )
        return self

    @property
    def top_salary(self) -> Decimal:
        """Documented top of the table; salaries above it clamp to the last bracket."""
        last = self.brackets[-1]
        return last.upper if last.upper is not None else last.lower


class SocialInsuranceFormula(_Frozen):
    """Social insurance as a piecewise-linear formula (legacy mode).

    Regular share rises by step_increment per step_size of salary above
    min_salary, capped at max_contribution. A supplemental share starts once
    salary exceeds supplemental_threshold, capped at max_supplemental.
    """

    min_salary: Decimal = Field(..., ge=0)
    max_salary: Decimal = Field(..., gt=0)
    base_contribution: Decimal = Field(..., ge=0)
    max_contribution: Decimal = Field(..., ge=0)
    step_size: Decimal = Field(..., gt=0)
    step_increment: Decimal = Field(..., ge=0)
    supplemental_threshold: Decimal = Field(..., ge=0)
    max_supplemental: Decimal = Field(..., ge=0)

    @model_validator(mode="after")
    def thresholds_ordered(self) -> "SocialInsuranceFormula":
        if self.max_salary <= self.min_salary:
            raise ValueError("max_salary must be above min_salary")
        if self.max_contribution < self.base_contribution:
            raise ValueError("max_contribution must be at least base_contribution")
        return self


class HealthInsuranceSchedule(_Frozen):
    """Flat percentage of basic pay, between a salary floor and ceiling."""

    rate: Decimal = Field(..., ge=0, le=1, description="Total premium rate")
    employee_share: Decimal = Field(..., ge=0, le=1, description="Employee fraction of premium")
    salary_floor: Decimal = Field(..., ge=0)
    salary_ceiling: Decimal = Field(..., gt=0)

    @model_validator(mode="after")
    def floor_below_ceiling(self) -> "HealthInsuranceSchedule":
        if self.salary_ceiling < self.salary_floor:
            raise ValueError("salary_ceiling must not be below salary_floor")
        return self


class HousingFundSchedule(_Frozen):
    """Tiered percentage of basic pay applied to a capped base."""

    low_rate: Decimal = Field(..., ge=0, le=1)
    high_rate: Decimal = Field(..., ge=0, le=1)
    low_rate_threshold: Decimal = Field(..., ge=0, description="Basic pay at or below uses low_rate")
    max_base: Decimal = Field(..., gt=0, description="Basic pay is capped here before the rate")
    employer_rate: Decimal = Field(default=Decimal("0.02"), ge=0, le=1)

    @model_validator(mode="after")
    def rates_ordered(self) -> "HousingFundSchedule":
        if self.high_rate < self.low_rate:
            raise ValueError("high_rate must not be below low_rate")
        return self

    @property
    def max_contribution(self) -> Decimal:
        return from_cents(to_cents(self.max_base * self.high_rate))


class RateSchedules(_Frozen):
    """All contribution schedules for one effective year."""

    year: int = Field(..., ge=1900, le=2999)
    currency: str = Field(default="PHP")
    social_insurance: BracketTableSchedule
    social_insurance_formula: Optional[SocialInsuranceFormula] = None
    health_insurance: HealthInsuranceSchedule
    housing_fund: HousingFundSchedule
