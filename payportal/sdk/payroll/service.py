"""Payroll service - pay-period computation for an employee and period.

The service binds a rate schedule and social-insurance mode once, then runs
pay-period computations for the report and salary-estimator layers.

Authorization is not decided here. Callers may inject an `authorize`
callable (actor -> bool) supplied by the portal's role layer; when given,
every request is checked before any computation runs.
"""

import logging
from typing import Any, Callable, Optional

from ..contributions import ContributionCalculator, RateSchedules, load_rate_schedules
from ..contributions.calculator import BRACKET_TABLE, SocialInsuranceMode
from ..money import InvalidInputError
from .period import compute
from .schemas import PAYSLIP_MAX_YEAR, PAYSLIP_MIN_YEAR, PayPeriodInput, PayPeriodResult, PayslipRecord

logger = logging.getLogger(__name__)

Authorizer = Callable[[Any], bool]


class PayrollAccessDenied(Exception):
    """Raised when the authorization collaborator refuses an actor."""
    pass


class PayrollService:
    """Computes pay periods against one set of rate schedules.

    Usage:
        service = PayrollService(authorize=lambda actor: actor.can_edit_payroll)
        slip = service.generate_payslip(actor, "emp-001", 2025, 3, period_input)
    """

    def __init__(
        self,
        schedules: Optional[RateSchedules] = None,
        social_insurance_mode: SocialInsuranceMode = BRACKET_TABLE,
        authorize: Optional[Authorizer] = None,
    ):
        if schedules is None:
            schedules = load_rate_schedules()
        self.calculator = ContributionCalculator(schedules, social_insurance_mode)
        self.authorize = authorize
        logger.debug(f"payroll service ready: {self.calculator!r}")

    @property
    def schedules(self) -> RateSchedules:
        return self.calculator.schedules

    def _check_access(self, actor: Any) -> None:
        if self.authorize is None:
            return
        if not self.authorize(actor):
            logger.warning(f"payroll access denied for {actor!r}")
            raise PayrollAccessDenied(f"{actor!r} is not allowed to compute payroll")

    def compute(self, period: PayPeriodInput, actor: Any = None) -> PayPeriodResult:
        """Compute a pay period (checks access first when an authorizer is set)."""
        self._check_access(actor)
        return compute(period, self.calculator)

    def generate_payslip(
        self,
        actor: Any,
        employee_id: str,
        year: int,
        month: int,
        period: PayPeriodInput,
    ) -> PayslipRecord:
        """Compute a pay period and return it as a payslip payload in minor units.

        Raises:
            PayrollAccessDenied: If the authorizer refuses the actor
            InvalidInputError: Negative inputs, an empty employee_id, or an
                               out-of-range month/year
        """
        self._check_access(actor)
        if not employee_id or not str(employee_id).strip():
            raise InvalidInputError("employee_id must not be empty")
        if not PAYSLIP_MIN_YEAR <= year <= PAYSLIP_MAX_YEAR:
            raise InvalidInputError(f"year must be {PAYSLIP_MIN_YEAR}-{PAYSLIP_MAX_YEAR}, got {year}")
        if not 1 <= month <= 12:
            raise InvalidInputError(f"month must be 1-12, got {month}")

        result = compute(period, self.calculator)
        logger.info(
            f"payslip {employee_id} {year}-{month:02d}: "
            f"gross={result.gross_pay} net={result.net_pay}"
        )
        return PayslipRecord.from_result(employee_id, year, month, result)
