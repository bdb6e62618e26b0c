"""Pay Portal - statutory payroll deductions and pay-period computation."""

__version__ = "0.1.0"
