"""Permission-gated projections of records before they are returned to a client."""

from typing import Any, Iterable, Optional

from .matrix import PermissionSet

CLIENT_SENSITIVE_FIELDS = ("address", "phone", "financialInfo", "creditLimit", "paymentTerms")
CLIENT_DETAIL_FIELDS = ("notes", "history", "preferences")
# hourlyRate times duration gives laborCost, so the rate is stripped with it
JOB_FINANCIAL_FIELDS = ("price", "cost", "profit", "materialsCost", "laborCost", "hourlyRate")
JOB_DETAIL_FIELDS = ("description", "notes", "photos", "attachments")
INVOICE_AMOUNT_FIELDS = ("amount", "tax", "total", "paidAmount", "balance")
INVOICE_PAYMENT_FIELDS = ("payments", "paymentHistory", "dueDate")
REPORT_FINANCIAL_FIELDS = ("revenue", "costs", "profit", "budget", "financialMetrics")
REPORT_PERFORMANCE_FIELDS = ("efficiency", "productivity", "performanceScores", "benchmarks")


def gate(
    permissions: PermissionSet,
    content: Any,
    permission: Optional[str] = None,
    any_of: Iterable[str] = (),
    require_all: bool = False,
    fallback: Any = None,
) -> Any:
    """
    Return ``content`` when access is granted, else ``fallback``.

    With ``any_of`` the list is checked (all of them when ``require_all``),
    otherwise the single ``permission``.
    """
    names = list(any_of)
    if names:
        allowed = (
            permissions.has_all_permissions(names)
            if require_all
            else permissions.has_any_permission(names)
        )
    else:
        allowed = permission is not None and permissions.has_permission(permission)
    return content if allowed else fallback


def _strip(record: Optional[dict], *groups: tuple[bool, tuple[str, ...]]) -> Optional[dict]:
    if record is None:
        return None
    filtered = dict(record)
    for allowed, fields in groups:
        if not allowed:
            for field in fields:
                filtered.pop(field, None)
    return filtered


def filter_client_data(permissions: PermissionSet, client: Optional[dict]) -> Optional[dict]:
    return _strip(
        client,
        (permissions.canViewClientSensitiveData, CLIENT_SENSITIVE_FIELDS),
        (permissions.canViewClientDetails, CLIENT_DETAIL_FIELDS),
    )


def filter_job_data(permissions: PermissionSet, job: Optional[dict]) -> Optional[dict]:
    return _strip(
        job,
        (permissions.canViewJobFinancials, JOB_FINANCIAL_FIELDS),
        (permissions.canViewJobDetails, JOB_DETAIL_FIELDS),
    )


def filter_invoice_data(permissions: PermissionSet, invoice: Optional[dict]) -> Optional[dict]:
    return _strip(
        invoice,
        (permissions.canViewInvoiceAmounts, INVOICE_AMOUNT_FIELDS),
        (permissions.canViewPaymentHistory, INVOICE_PAYMENT_FIELDS),
    )


def filter_report_data(permissions: PermissionSet, report: Optional[dict]) -> Optional[dict]:
    return _strip(
        report,
        (permissions.canViewFinancialReports, REPORT_FINANCIAL_FIELDS),
        (permissions.canViewPerformanceMetrics, REPORT_PERFORMANCE_FIELDS),
    )


FILTERS = {
    "client": filter_client_data,
    "job": filter_job_data,
    "invoice": filter_invoice_data,
    "report": filter_report_data,
}


def filter_data(permissions: PermissionSet, data: Optional[dict], data_type: str) -> Optional[dict]:
    """Dispatch on record type; unknown types pass through unchanged."""
    if data is None:
        return None
    handler = FILTERS.get(data_type)
    if handler is None:
        return data
    return handler(permissions, data)
