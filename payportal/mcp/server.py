"""Pay Portal MCP Server - FastMCP implementation for payroll computation tools."""

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from payportal.sdk import (
    ContributionCalculator,
    InvalidInputError,
    UnconfiguredScheduleError,
    compute_pay_period as sdk_compute_pay_period,
    get_setting,
    list_schedule_years,
    load_rate_schedules,
)

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("pay-portal")


def _mode(mode: str | None) -> str:
    return mode or get_setting("social_insurance_mode", "bracket_table")


# --- Tools ---

@mcp.tool()
async def compute_pay_period(
    hourly_rate: str = Field(description="Pay per regular hour (e.g., '58.75')"),
    regular_hours: str = Field(description="Regular hours worked in the period"),
    overtime_hours: str = Field(default="0", description="Overtime hours worked"),
    overtime_multiplier: str = Field(default="1.25", description="Overtime pay multiplier"),
    manual_deductions: str = Field(default="0", description="Ad-hoc deductions for the period"),
    year: int | None = Field(default=None, description="Rate-schedule year (default: configured)"),
    mode: str | None = Field(default=None, description="Social-insurance mode ('bracket_table' or 'formula')"),
) -> dict[str, Any]:
    """Compute gross pay, statutory contributions and net pay for one pay period. Amounts are returned as 2-decimal strings."""
    try:
        result = sdk_compute_pay_period(
            hourly_rate,
            regular_hours,
            overtime_hours,
            overtime_multiplier,
            manual_deductions,
            schedules=load_rate_schedules(year),
            social_insurance_mode=_mode(mode),
        )
        return {"result": result.model_dump(mode="json")}
    except (InvalidInputError, UnconfiguredScheduleError, ValueError) as e:
        logger.debug(f"compute_pay_period failed: {e}")
        return {"error": str(e), "result": None}


@mcp.tool()
async def compute_contributions(
    salary: str = Field(description="Monthly basic pay (e.g., '12000')"),
    year: int | None = Field(default=None, description="Rate-schedule year (default: configured)"),
    mode: str | None = Field(default=None, description="Social-insurance mode ('bracket_table' or 'formula')"),
) -> dict[str, Any]:
    """Employee share of social insurance, health insurance and housing fund for a salary."""
    try:
        calc = ContributionCalculator(load_rate_schedules(year), _mode(mode))
        summary = calc.contributions(salary)
        return {
            "year": calc.schedules.year,
            "mode": calc.social_insurance_mode,
            "contributions": summary.model_dump(mode="json"),
            "total": str(summary.total),
        }
    except (InvalidInputError, UnconfiguredScheduleError, ValueError) as e:
        logger.debug(f"compute_contributions({salary!r}) failed: {e}")
        return {"error": str(e), "contributions": None}


# --- Resources ---

@mcp.resource("payportal://schedules/years")
async def list_years_resource() -> str:
    """List years with a configured rate schedule."""
    return json.dumps({"years": list_schedule_years()}, indent=2)


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
