"""Pay-period input, result and payslip schemas.

All models are frozen: a result is produced fresh for each computation and
never updated in place.
"""

from decimal import Decimal
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..money import float_to_decimal, to_cents


class PremiumRates(BaseModel):
    """Pay multipliers applied to the hourly rate for premium hours."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    night_diff: Decimal = Field(default=Decimal("1.10"), description="Night differential (22:00-06:00)")
    regular_holiday: Decimal = Field(default=Decimal("2.0"))
    regular_holiday_ot: Decimal = Field(default=Decimal("2.5"))
    special_holiday: Decimal = Field(default=Decimal("1.30"))
    special_holiday_ot: Decimal = Field(default=Decimal("1.63"))

    @field_validator("*", mode="before")
    @classmethod
    def floats_as_decimal(cls, v: Any) -> Any:
        return float_to_decimal(v)


class PayPeriodInput(BaseModel):
    """Hours, rate and deductions for one pay period.

    Sign checks are not done here; compute() rejects negative values with
    InvalidInputError so callers get one error type for bad data entry.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    hourly_rate: Decimal = Field(..., description="Pay per regular hour")
    regular_hours: Decimal = Field(..., description="Regular hours worked")
    overtime_hours: Decimal = Field(default=Decimal("0"), description="Overtime hours worked")
    overtime_multiplier: Decimal = Field(default=Decimal("1.25"), description="Overtime pay multiplier")
    manual_deductions: Decimal = Field(default=Decimal("0"), description="Ad-hoc deductions")

    # Supplemental earnings - add to gross pay, never to the contribution base
    night_diff_hours: Decimal = Field(default=Decimal("0"))
    regular_holiday_hours: Decimal = Field(default=Decimal("0"))
    regular_holiday_ot_hours: Decimal = Field(default=Decimal("0"))
    special_holiday_hours: Decimal = Field(default=Decimal("0"))
    special_holiday_ot_hours: Decimal = Field(default=Decimal("0"))
    allowance: Decimal = Field(default=Decimal("0"), description="Flat allowance for the period")
    premium_rates: PremiumRates = Field(default_factory=PremiumRates)

    @field_validator(
        "hourly_rate", "regular_hours", "overtime_hours", "overtime_multiplier",
        "manual_deductions", "night_diff_hours", "regular_holiday_hours",
        "regular_holiday_ot_hours", "special_holiday_hours", "special_holiday_ot_hours",
        "allowance",
        mode="before",
    )
    @classmethod
    def floats_as_decimal(cls, v: Any) -> Any:
        return float_to_decimal(v)

    @field_validator(
        "hourly_rate", "regular_hours", "overtime_hours", "overtime_multiplier",
        "manual_deductions", "night_diff_hours", "regular_holiday_hours",
        "regular_holiday_ot_hours", "special_holiday_hours", "special_holiday_ot_hours",
        "allowance",
    )
    @classmethod
    def finite(cls, v: Decimal) -> Decimal:
        if not v.is_finite():
            raise ValueError(f"must be a finite number, got {v}")
        return v


class PayPeriodResult(BaseModel):
    """Earnings, contributions and net pay for one pay period.

    Every monetary field is a Decimal with exactly two decimal places.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    # Earnings
    basic_pay: Decimal = Field(..., description="Regular hours x hourly rate")
    overtime_pay: Decimal = Field(..., description="Overtime hours x rate x multiplier")
    night_diff_pay: Decimal = Field(default=Decimal("0.00"))
    holiday_pay: Decimal = Field(default=Decimal("0.00"))
    allowance: Decimal = Field(default=Decimal("0.00"))
    gross_pay: Decimal

    # Deductions (contributions computed from basic_pay)
    social_insurance: Decimal
    health_insurance: Decimal
    housing_fund: Decimal
    withholding_tax: Decimal = Field(
        default=Decimal("0.00"), description="Always zero until withholding is configured"
    )
    manual_deductions: Decimal = Field(default=Decimal("0.00"))
    total_deductions: Decimal

    net_pay: Decimal = Field(..., ge=0, description="max(0, gross - deductions)")

    # Provenance
    schedule_year: int
    social_insurance_mode: str

    @property
    def statutory_deductions(self) -> Decimal:
        return self.social_insurance + self.health_insurance + self.housing_fund


PAYSLIP_MIN_YEAR = 1900
PAYSLIP_MAX_YEAR = 2999


class PayslipRecord(BaseModel):
    """Payslip payload for storage, with every amount in integer minor units."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    employee_id: str = Field(..., min_length=1)
    year: int = Field(..., ge=PAYSLIP_MIN_YEAR, le=PAYSLIP_MAX_YEAR)
    month: int = Field(..., ge=1, le=12)
    basic_salary: int = Field(..., ge=0)
    allowances: Dict[str, int] = Field(default_factory=dict)
    deductions: Dict[str, int] = Field(default_factory=dict)
    gross_pay: int = Field(..., ge=0)
    net_pay: int = Field(..., ge=0)

    @classmethod
    def from_result(cls, employee_id: str, year: int, month: int, result: PayPeriodResult) -> "PayslipRecord":
        """Convert a PayPeriodResult to payslip minor-unit amounts."""
        return cls(
            employee_id=employee_id,
            year=year,
            month=month,
            basic_salary=to_cents(result.basic_pay),
            allowances={
                "overtime": to_cents(result.overtime_pay),
                "night_diff": to_cents(result.night_diff_pay),
                "holiday": to_cents(result.holiday_pay),
                "allowance": to_cents(result.allowance),
            },
            deductions={
                "tax": to_cents(result.withholding_tax),
                "social_insurance": to_cents(result.social_insurance),
                "health_insurance": to_cents(result.health_insurance),
                "housing_fund": to_cents(result.housing_fund),
                "others": to_cents(result.manual_deductions),
            },
            gross_pay=to_cents(result.gross_pay),
            net_pay=to_cents(result.net_pay),
        )

    @property
    def total_deductions(self) -> int:
        return sum(self.deductions.values())
