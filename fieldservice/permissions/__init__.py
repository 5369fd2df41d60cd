"""Permission gate: capability matrix and permission-filtered projections."""

from .filters import (
    filter_client_data,
    filter_data,
    filter_invoice_data,
    filter_job_data,
    filter_report_data,
    gate,
)
from .matrix import PERMISSION_CATEGORIES, PERMISSION_NAMES, PermissionSet

__all__ = [
    "PERMISSION_CATEGORIES",
    "PERMISSION_NAMES",
    "PermissionSet",
    "filter_client_data",
    "filter_data",
    "filter_invoice_data",
    "filter_job_data",
    "filter_report_data",
    "gate",
]
