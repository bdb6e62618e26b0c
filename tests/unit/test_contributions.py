"""Tests for statutory contribution calculations.

Covers both social-insurance modes, their agreement at the flat-region
boundaries, the percentage schemes, and monotonicity across the whole
salary range (property-based, via hypothesis).
"""

from decimal import ROUND_HALF_UP, Decimal

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from payportal.sdk.contributions import (
    ContributionCalculator,
    load_rate_schedules,
)
from payportal.sdk.contributions.schedules import PACKAGED_SCHEDULES_DIR


# Module-level calculators: schedules are immutable and loaded straight
# from the packaged directory, so no per-test config isolation is needed.
RATES_2025 = load_rate_schedules(2025, schedules_dir=PACKAGED_SCHEDULES_DIR)
TABLE = ContributionCalculator(RATES_2025, "bracket_table")
FORMULA = ContributionCalculator(RATES_2025, "formula")

salaries = st.decimals(
    min_value=Decimal("-1000"), max_value=Decimal("250000"),
    places=2, allow_nan=False, allow_infinity=False,
)

# Well past the 28-digit default Decimal context
extreme_salaries = st.decimals(
    min_value=Decimal("-1E+40"), max_value=Decimal("1E+40"),
    places=2, allow_nan=False, allow_infinity=False,
)


# === SOCIAL INSURANCE: BRACKET TABLE ===


class TestBracketTable:
    """Bracket-table mode (system of record)."""

    @pytest.mark.parametrize("salary,expected", [
        (0, "250.00"),
        ("5249.99", "250.00"),
        (5250, "275.00"),
        ("5749.99", "275.00"),
        (5750, "300.00"),
        (12000, "600.00"),
        ("19749.99", "975.00"),
        (19750, "1000.00"),
        ("34749.99", "1000.00"),
    ])
    def test_bracket_values(self, salary, expected):
        assert TABLE.social_insurance(salary) == Decimal(expected)

    @pytest.mark.parametrize("salary", ["34750", "50000", "1000000000"])
    def test_clamps_above_table_top(self, salary):
        assert TABLE.social_insurance(salary) == Decimal("1000.00")

    @pytest.mark.parametrize("salary", [-1, "-0.01", -1000000])
    def test_negative_salary_clamps_to_first_bracket(self, salary):
        assert TABLE.social_insurance(salary) == Decimal("250.00")

    def test_breakdown_reports_salary_credit(self):
        breakdown = TABLE.social_insurance_breakdown(12000)
        assert breakdown.mode == "bracket_table"
        assert breakdown.contribution == Decimal("600.00")
        assert breakdown.salary_credit == Decimal("12000")
        assert breakdown.supplemental == Decimal("0.00")

    @given(salary=st.decimals(min_value=Decimal("0"), max_value=Decimal("5249.99"), places=2))
    def test_below_minimum_is_base(self, salary):
        assert TABLE.social_insurance(salary) == Decimal("250.00")

    @given(salary=st.decimals(min_value=Decimal("34750"), max_value=Decimal("1E+40"), places=2))
    def test_above_maximum_is_cap(self, salary):
        assert TABLE.social_insurance(salary) == Decimal("1000.00")


# === SOCIAL INSURANCE: FORMULA ===


class TestFormula:
    """Formula mode (legacy alternative)."""

    @pytest.mark.parametrize("salary,regular,supplemental", [
        (0, "250.00", "0.00"),
        ("5249.99", "250.00", "0.00"),
        (5250, "250.00", "0.00"),
        (5750, "275.00", "0.00"),
        (12000, "575.00", "0.00"),
        (20250, "1000.00", "0.00"),       # supplemental starts strictly above 20250
        (20750, "1000.00", "25.00"),
        (25000, "1000.00", "225.00"),
        ("34749.99", "1000.00", "700.00"),
        (34750, "1000.00", "750.00"),     # above max: both caps
    ])
    def test_formula_values(self, salary, regular, supplemental):
        breakdown = FORMULA.social_insurance_breakdown(salary)
        assert breakdown.mode == "formula"
        assert breakdown.contribution == Decimal(regular)
        assert breakdown.supplemental == Decimal(supplemental)
        assert FORMULA.social_insurance(salary) == Decimal(regular)

    def test_combined_above_maximum(self):
        assert FORMULA.social_insurance_breakdown(40000).combined == Decimal("1750.00")

    @given(salary=st.decimals(min_value=Decimal("34750"), max_value=Decimal("1E+40"), places=2))
    def test_above_maximum_is_cap(self, salary):
        assert FORMULA.social_insurance(salary) == Decimal("1000.00")


class TestModeEquivalence:
    """Both modes agree at the edges of the flat regions."""

    @pytest.mark.parametrize("salary,expected", [
        ("5249.99", "250.00"),
        ("34749.99", "1000.00"),
        ("34750", "1000.00"),
        ("1000000", "1000.00"),
    ])
    def test_boundary_equivalence(self, salary, expected):
        assert TABLE.social_insurance(salary) == FORMULA.social_insurance(salary) == Decimal(expected)

    def test_formula_minimum_threshold(self):
        """At exactly 5250 the table row pays 275 and the formula still pays 250; the gap is intended."""
        assert FORMULA.social_insurance(5250) == Decimal("250.00")
        assert TABLE.social_insurance(5250) == Decimal("275.00")

    @given(salary=st.decimals(min_value=Decimal("-1000"), max_value=Decimal("5249.99"), places=2))
    def test_agree_below_minimum(self, salary):
        assert TABLE.social_insurance(salary) == FORMULA.social_insurance(salary) == Decimal("250.00")

    def test_modes_never_mixed(self):
        """Formula supplemental share is reported separately, never added in."""
        assert FORMULA.contributions(30000).social_insurance == Decimal("1000.00")
        assert FORMULA.social_insurance_breakdown(30000).supplemental > 0

    def test_unknown_mode_rejected(self):
        with pytest.raises(ValueError, match="Unknown social-insurance mode"):
            ContributionCalculator(RATES_2025, "smooth")


# === HEALTH INSURANCE ===


class TestHealthInsurance:
    """5% of clamped basic pay, employee half."""

    @pytest.mark.parametrize("basic,expected", [
        (0, "250.00"),
        (4700, "250.00"),
        (10000, "250.00"),
        ("10000.01", "250.00"),
        (12000, "300.00"),
        (50000, "1250.00"),
        (100000, "2500.00"),
        (500000, "2500.00"),
        (-50, "250.00"),
    ])
    def test_values(self, basic, expected):
        assert TABLE.health_insurance(basic) == Decimal(expected)

    def test_breakdown_splits_evenly(self):
        breakdown = TABLE.health_insurance_breakdown(50000)
        assert breakdown.base == Decimal("50000.00")
        assert breakdown.employee_share == breakdown.employer_share == Decimal("1250.00")
        assert breakdown.total == Decimal("2500.00")

    def test_breakdown_base_is_clamped(self):
        assert TABLE.health_insurance_breakdown(3000).base == Decimal("10000.00")
        assert TABLE.health_insurance_breakdown(300000).base == Decimal("100000.00")

    @given(basic=st.decimals(min_value=Decimal("-1000"), max_value=Decimal("10000"), places=2))
    def test_constant_at_floor(self, basic):
        assert TABLE.health_insurance(basic) == Decimal("250.00")

    @given(basic=st.decimals(min_value=Decimal("100000"), max_value=Decimal("1E+40"), places=2))
    def test_constant_at_ceiling(self, basic):
        assert TABLE.health_insurance(basic) == Decimal("2500.00")

    @given(
        a=st.decimals(min_value=Decimal("10000"), max_value=Decimal("99999"), places=2),
        delta=st.decimals(min_value=Decimal("1"), max_value=Decimal("90000"), places=2),
    )
    def test_strictly_increasing_between(self, a, delta):
        b = a + delta
        assume(b <= 100000)
        assert TABLE.health_insurance(a) < TABLE.health_insurance(b)

    @given(basic=salaries)
    def test_always_in_range(self, basic):
        assert Decimal("250.00") <= TABLE.health_insurance(basic) <= Decimal("2500.00")


# === HOUSING FUND ===


class TestHousingFund:
    """1% up to 1500, else 2%, on basic pay capped at 10000."""

    @pytest.mark.parametrize("basic,expected", [
        (0, "0.00"),
        (1000, "10.00"),
        (1500, "15.00"),
        ("1500.01", "30.00"),
        (4700, "94.00"),
        (10000, "200.00"),
        (50000, "200.00"),
        (-100, "0.00"),
    ])
    def test_values(self, basic, expected):
        assert TABLE.housing_fund(basic) == Decimal(expected)

    def test_breakdown_includes_employer_share(self):
        breakdown = TABLE.housing_fund_breakdown(50000)
        assert breakdown.base == Decimal("10000.00")
        assert breakdown.rate == Decimal("0.02")
        assert breakdown.employee_share == Decimal("200.00")
        assert breakdown.employer_share == Decimal("200.00")

    def test_breakdown_low_rate(self):
        breakdown = TABLE.housing_fund_breakdown(1200)
        assert breakdown.rate == Decimal("0.01")
        assert breakdown.employee_share == Decimal("12.00")
        assert breakdown.employer_share == Decimal("24.00")

    @given(basic=st.decimals(min_value=Decimal("0"), max_value=Decimal("1500"), places=2))
    def test_low_rate_exact(self, basic):
        expected = (basic * Decimal("0.01")).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        assert TABLE.housing_fund(basic) == expected

    @given(basic=salaries)
    def test_never_above_cap(self, basic):
        assert Decimal("0.00") <= TABLE.housing_fund(basic) <= Decimal("200.00")


# === MONOTONICITY ===


class TestMonotonic:
    """Every scheme is non-decreasing in its input."""

    @given(a=salaries, b=salaries)
    def test_social_insurance_table(self, a, b):
        low, high = sorted((a, b))
        assert TABLE.social_insurance(low) <= TABLE.social_insurance(high)

    @given(a=salaries, b=salaries)
    def test_social_insurance_formula(self, a, b):
        low, high = sorted((a, b))
        assert FORMULA.social_insurance(low) <= FORMULA.social_insurance(high)
        assert (
            FORMULA.social_insurance_breakdown(low).combined
            <= FORMULA.social_insurance_breakdown(high).combined
        )

    @given(a=salaries, b=salaries)
    def test_health_insurance(self, a, b):
        low, high = sorted((a, b))
        assert TABLE.health_insurance(low) <= TABLE.health_insurance(high)

    @given(a=salaries, b=salaries)
    def test_housing_fund(self, a, b):
        low, high = sorted((a, b))
        assert TABLE.housing_fund(low) <= TABLE.housing_fund(high)


class TestContributionSummary:
    """All schemes from one basic-pay figure."""

    def test_summary_totals(self):
        summary = TABLE.contributions(4700)
        assert summary.social_insurance == Decimal("250.00")
        assert summary.health_insurance == Decimal("250.00")
        assert summary.housing_fund == Decimal("94.00")
        assert summary.total == Decimal("594.00")

    def test_extreme_salary_clamps_everything(self):
        summary = TABLE.contributions(500000)
        assert summary.total == Decimal("3700.00")


class TestEnormousSalaries:
    """Amounts beyond the default Decimal precision still clamp."""

    @pytest.mark.parametrize("salary", [1e27, "1e30", Decimal("1E+40"), "9" * 60])
    def test_each_scheme_clamps(self, salary):
        assert TABLE.social_insurance(salary) == Decimal("1000.00")
        assert FORMULA.social_insurance(salary) == Decimal("1000.00")
        assert TABLE.health_insurance(salary) == Decimal("2500.00")
        assert TABLE.housing_fund(salary) == Decimal("200.00")

    def test_breakdowns(self):
        assert TABLE.social_insurance_breakdown("1e30").salary_credit == Decimal("20000")
        assert FORMULA.social_insurance_breakdown("1e30").combined == Decimal("1750.00")
        assert TABLE.health_insurance_breakdown("1e30").base == Decimal("100000.00")
        assert TABLE.housing_fund_breakdown("1e30").employer_share == Decimal("200.00")

    def test_enormous_negative_salary(self):
        assert TABLE.contributions("-1e30").total == Decimal("500.00")

    @given(a=extreme_salaries, b=extreme_salaries)
    def test_monotonic(self, a, b):
        low, high = sorted((a, b))
        for calc in (TABLE, FORMULA):
            assert calc.social_insurance(low) <= calc.social_insurance(high)
            assert calc.health_insurance(low) <= calc.health_insurance(high)
            assert calc.housing_fund(low) <= calc.housing_fund(high)
