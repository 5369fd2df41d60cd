"""
Capability matrix for collaborators.

Every permission is a named boolean field, so an unknown key is a
validation error rather than a silent ``False``. Management capabilities
default to denied; field-visibility flags default to visible.
"""

from typing import Iterable

from pydantic import BaseModel, ConfigDict


class PermissionSet(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # Client management
    canViewClients: bool = False
    canEditClients: bool = False
    canCreateClients: bool = False
    canDeleteClients: bool = False
    canViewClientDetails: bool = False
    canViewClientSensitiveData: bool = False  # Address, phone, financial info

    # Client field visibility
    canViewClientName: bool = True
    canViewClientAddress: bool = True
    canViewClientPhone: bool = True
    canViewClientEmail: bool = True
    canViewClientType: bool = True
    canViewClientNotes: bool = True
    canViewClientGeoLocation: bool = True
    canViewClientSectors: bool = True
    canViewClientCreatedAt: bool = True

    # Job management
    canViewJobs: bool = False
    canEditJobs: bool = False
    canCreateJobs: bool = False
    canDeleteJobs: bool = False
    canViewJobDetails: bool = False
    canViewJobFinancials: bool = False  # Pricing, costs
    canUpdateJobStatus: bool = False
    canAddJobNotes: bool = False
    canUploadJobPhotos: bool = False

    # Job field visibility
    canViewJobTitle: bool = True
    canViewJobDescription: bool = True
    canViewJobStartDate: bool = True
    canViewJobEndDate: bool = True
    canViewJobStatus: bool = True
    canViewJobRate: bool = True
    canViewJobClient: bool = True
    canViewJobActualDuration: bool = True
    canViewJobAssignedTo: bool = True
    canViewJobPhotos: bool = True
    canViewJobMaterialsCost: bool = True
    canViewJobCost: bool = True
    canViewJobLocation: bool = True
    canViewJobDuration: bool = True
    canViewJobCompletedDate: bool = True
    canViewJobPriority: bool = True
    canViewJobMaterials: bool = True

    # Registration field visibility
    canViewRegistrationDate: bool = True
    canViewRegistrationTime: bool = True
    canViewRegistrationActivity: bool = True
    canViewRegistrationDuration: bool = True
    canViewRegistrationPhotos: bool = True
    canViewRegistrationLocation: bool = True
    canViewRegistrationJob: bool = True
    canViewRegistrationNotes: bool = True
    canViewRegistrationMaterials: bool = True
    canViewRegistrationSignature: bool = True

    # Reports & analytics
    canViewReports: bool = False
    canCreateReports: bool = False
    canExportReports: bool = False
    canViewFinancialReports: bool = False
    canViewPerformanceMetrics: bool = False

    # Invoicing
    canViewInvoices: bool = False
    canEditInvoices: bool = False
    canCreateInvoices: bool = False
    canDeleteInvoices: bool = False
    canViewInvoiceAmounts: bool = False
    canViewPaymentHistory: bool = False

    # Time & activity tracking
    canTrackTime: bool = False
    canViewTimeEntries: bool = False
    canEditTimeEntries: bool = False
    canViewActivityLogs: bool = False

    # Materials & inventory
    canViewMaterials: bool = False
    canEditMaterials: bool = False
    canViewInventory: bool = False
    canUpdateInventory: bool = False

    # Communication
    canSendNotifications: bool = False
    canViewMessages: bool = False
    canSendMessages: bool = False
    canViewSystemAlerts: bool = False

    # Settings
    canViewSettings: bool = False
    canEditSettings: bool = False
    canCreateSettings: bool = False
    canDeleteSettings: bool = False

    # Job types
    canViewJobTypes: bool = False
    canEditJobTypes: bool = False
    canCreateJobTypes: bool = False
    canDeleteJobTypes: bool = False

    # Activities
    canViewActivities: bool = False
    canEditActivities: bool = False
    canCreateActivities: bool = False
    canDeleteActivities: bool = False

    # Roles
    canViewRoles: bool = False
    canEditRoles: bool = False
    canCreateRoles: bool = False
    canDeleteRoles: bool = False

    # Collaborators
    canViewCollaborators: bool = False
    canEditCollaborators: bool = False
    canCreateCollaborators: bool = False
    canDeleteCollaborators: bool = False

    # Company
    canViewCompany: bool = False
    canEditCompany: bool = False
    canCreateCompany: bool = False
    canDeleteCompany: bool = False

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "PermissionSet":
        """Defaults plus every granted permission name; unknown names are rejected."""
        return cls(**{name: True for name in names})

    @classmethod
    def full(cls) -> "PermissionSet":
        return cls(**{name: True for name in cls.model_fields})

    def has_permission(self, permission: str) -> bool:
        if permission not in type(self).model_fields:
            raise KeyError(f"Unknown permission '{permission}'")
        return getattr(self, permission) is True

    def has_any_permission(self, permissions: Iterable[str]) -> bool:
        return any(self.has_permission(p) for p in permissions)

    def has_all_permissions(self, permissions: Iterable[str]) -> bool:
        return all(self.has_permission(p) for p in permissions)

    def has_category_permission(self, category: str) -> bool:
        """True when at least one permission of the category is granted"""
        return self.has_any_permission(PERMISSION_CATEGORIES[category])

    def granted(self) -> list[str]:
        return [name for name in type(self).model_fields if getattr(self, name)]


PERMISSION_NAMES = tuple(PermissionSet.model_fields)

PERMISSION_CATEGORIES = {
    "CLIENTS": (
        "canViewClients",
        "canEditClients",
        "canCreateClients",
        "canDeleteClients",
        "canViewClientDetails",
        "canViewClientSensitiveData",
    ),
    "JOBS": (
        "canViewJobs",
        "canEditJobs",
        "canCreateJobs",
        "canDeleteJobs",
        "canViewJobDetails",
        "canViewJobFinancials",
        "canUpdateJobStatus",
        "canAddJobNotes",
        "canUploadJobPhotos",
    ),
    "REPORTS": (
        "canViewReports",
        "canCreateReports",
        "canExportReports",
        "canViewFinancialReports",
        "canViewPerformanceMetrics",
    ),
    "INVOICES": (
        "canViewInvoices",
        "canEditInvoices",
        "canCreateInvoices",
        "canDeleteInvoices",
        "canViewInvoiceAmounts",
        "canViewPaymentHistory",
    ),
    "TIME_TRACKING": (
        "canTrackTime",
        "canViewTimeEntries",
        "canEditTimeEntries",
        "canViewActivityLogs",
    ),
    "MATERIALS": (
        "canViewMaterials",
        "canEditMaterials",
        "canViewInventory",
        "canUpdateInventory",
    ),
    "COMMUNICATION": (
        "canSendNotifications",
        "canViewMessages",
        "canSendMessages",
        "canViewSystemAlerts",
    ),
    "SETTINGS": ("canViewSettings", "canEditSettings", "canCreateSettings", "canDeleteSettings"),
    "JOB_TYPES": ("canViewJobTypes", "canEditJobTypes", "canCreateJobTypes", "canDeleteJobTypes"),
    "ACTIVITIES": (
        "canViewActivities",
        "canEditActivities",
        "canCreateActivities",
        "canDeleteActivities",
    ),
    "ROLES": ("canViewRoles", "canEditRoles", "canCreateRoles", "canDeleteRoles"),
    "COLLABORATORS": (
        "canViewCollaborators",
        "canEditCollaborators",
        "canCreateCollaborators",
        "canDeleteCollaborators",
    ),
    "COMPANY": ("canViewCompany", "canEditCompany", "canCreateCompany", "canDeleteCompany"),
}
