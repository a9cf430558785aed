# Models package
from .state import AuditState, AuditStatus
from .schemas import (
    LineItem, DuplicateExternalId, RecentWindowStats, BatchOverlap,
    Verdict, AuditReport, PurchaseOrder, Bill,
    PurchaseOrderSummary, POBillAnalysis, UserRole
)
