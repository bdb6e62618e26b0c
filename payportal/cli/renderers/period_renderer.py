"""Rich renderers for pay-period and contribution results.

Transforms SDK results into formatted Rich tables.
"""

from decimal import Decimal

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from payportal.sdk import PayPeriodResult, RateSchedules


def _money(amount: Decimal) -> str:
    return f"{amount:,.2f}"


def render_pay_period(console: Console, result: PayPeriodResult) -> None:
    """Render a pay-period result as earnings / deductions tables.

    Args:
        console: Rich Console instance
        result: SDK output from compute_pay_period()
    """
    earnings = Table(title="Earnings", box=box.SIMPLE, show_footer=True)
    earnings.add_column("Item", footer="Gross pay")
    earnings.add_column("Amount", justify="right", footer=_money(result.gross_pay))

    earnings.add_row("Basic pay", _money(result.basic_pay))
    earnings.add_row("Overtime", _money(result.overtime_pay))
    # Premium lines only when present
    if result.night_diff_pay:
        earnings.add_row("Night differential", _money(result.night_diff_pay))
    if result.holiday_pay:
        earnings.add_row("Holiday pay", _money(result.holiday_pay))
    if result.allowance:
        earnings.add_row("Allowance", _money(result.allowance))

    deductions = Table(title="Deductions", box=box.SIMPLE, show_footer=True)
    deductions.add_column("Item", footer="Total deductions")
    deductions.add_column("Amount", justify="right", footer=_money(result.total_deductions))

    deductions.add_row("Social insurance", _money(result.social_insurance))
    deductions.add_row("Health insurance", _money(result.health_insurance))
    deductions.add_row("Housing fund", _money(result.housing_fund))
    deductions.add_row("[dim]Withholding tax[/dim]", f"[dim]{_money(result.withholding_tax)}[/dim]")
    if result.manual_deductions:
        deductions.add_row("Other deductions", _money(result.manual_deductions))

    console.print(earnings)
    console.print(deductions)
    console.print(Panel(
        f"[bold green]{_money(result.net_pay)}[/bold green]",
        title="Net pay",
        subtitle=f"{result.schedule_year} schedule, social insurance: {result.social_insurance_mode}",
        border_style="green",
    ))


def render_contributions(console: Console, salary: Decimal, data: dict) -> None:
    """Render the per-scheme contribution breakdown for one salary."""
    table = Table(title=f"Contributions on {_money(salary)}", box=box.SIMPLE)
    table.add_column("Scheme")
    table.add_column("Base", justify="right")
    table.add_column("Employee", justify="right")
    table.add_column("Employer", justify="right")

    social = data["social_insurance"]
    social_base = _money(social["salary_credit"]) if social.get("salary_credit") is not None else "-"
    table.add_row("Social insurance", social_base, _money(social["contribution"]), "-")
    if social.get("supplemental"):
        table.add_row("  supplemental", "-", _money(social["supplemental"]), "-")

    for key, label in (("health_insurance", "Health insurance"), ("housing_fund", "Housing fund")):
        row = data[key]
        table.add_row(label, _money(row["base"]), _money(row["employee_share"]), _money(row["employer_share"]))

    console.print(table)
    console.print(f"[bold]Employee total:[/bold] {_money(data['employee_total'])}")


def render_schedule(console: Console, schedules: RateSchedules) -> None:
    """Render a year's rate schedules."""
    table = Table(title=f"Social insurance brackets ({schedules.year})", box=box.SIMPLE)
    table.add_column("From", justify="right")
    table.add_column("To", justify="right")
    table.add_column("Salary credit", justify="right")
    table.add_column("Contribution", justify="right")

    last = len(schedules.social_insurance.brackets) - 1
    for i, b in enumerate(schedules.social_insurance.brackets):
        upper = "and above" if i == last else _money(b.upper)
        credit = _money(b.salary_credit) if b.salary_credit is not None else "-"
        table.add_row(_money(b.lower), upper, credit, _money(b.contribution))
    console.print(table)

    health = schedules.health_insurance
    housing = schedules.housing_fund
    console.print(Panel(
        f"Health insurance: {health.rate:%} of basic pay, employee share {health.employee_share:%}, "
        f"base clamped to {_money(health.salary_floor)} - {_money(health.salary_ceiling)}\n"
        f"Housing fund: {housing.low_rate:%} up to {_money(housing.low_rate_threshold)}, "
        f"else {housing.high_rate:%}, base capped at {_money(housing.max_base)}",
        title="Percentage schemes",
        border_style="dim",
    ))
