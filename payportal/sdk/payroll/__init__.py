"""payroll - Pay-period computation and payslip generation.

Scope:
- Gross pay from regular, overtime and premium hours (period.py)
- Net pay after statutory contributions and manual deductions (period.py)
- Employee/period orchestration and payslip payloads (service.py)

Constraints:
- Uses contributions/ for every statutory amount; no rate logic here
- Contributions are based on basic pay only
- Results are immutable and computed fresh for every call

Usage:
    from payportal.sdk.payroll import compute_pay_period

    result = compute_pay_period(hourly_rate=58.75, regular_hours=80, overtime_hours=5)
    result.net_pay  # Decimal('4473.19')
"""

from .schemas import PayPeriodInput, PayPeriodResult, PayslipRecord, PremiumRates

from .period import (
    compute,
    compute_pay_period,
    build_input,
    validate_input,
    night_diff_hours,
)

from .service import PayrollService, PayrollAccessDenied

__all__ = [
    # Schemas
    "PayPeriodInput",
    "PayPeriodResult",
    "PayslipRecord",
    "PremiumRates",
    # Computation
    "compute",
    "compute_pay_period",
    "build_input",
    "validate_input",
    "night_diff_hours",
    # Service
    "PayrollService",
    "PayrollAccessDenied",
]
