"""Backend diagnostics"""

from .table_check import (
    GROUP_DESCRIPTIONS,
    check_required_tables,
    check_table_exists,
    missing_table_report,
)

__all__ = [
    "GROUP_DESCRIPTIONS",
    "check_required_tables",
    "check_table_exists",
    "missing_table_report",
]
