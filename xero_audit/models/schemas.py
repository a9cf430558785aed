"""
Pydantic schemas for line items, Xero payloads and diagnostic reports
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict
from datetime import datetime, date
from enum import Enum


class LineItem(BaseModel):
    """One persisted line item, as read back from the datastore"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    invoice_id: str
    external_line_item_id: Optional[str] = None
    created_at: datetime


class DuplicateExternalId(BaseModel):
    external_line_item_id: str
    occurrences: int


class RecentWindowStats(BaseModel):
    window_size: int
    line_item_count: int
    unique_invoice_count: int
    oldest: Optional[datetime] = None
    newest: Optional[datetime] = None


class BatchOverlap(BaseModel):
    batch_size: int
    first_batch_line_items: int
    first_batch_invoice_count: int
    second_batch_line_items: int
    second_batch_invoice_count: int
    overlapping_invoice_ids: List[str] = []
    count: int = 0


class Verdict(str, Enum):
    CLEAN = "clean"
    DUPLICATES_FOUND = "duplicates-found"


class AuditReport(BaseModel):
    account_id: str
    total_line_items: int
    unique_invoice_count: int
    unique_external_id_count: int
    duplicate_external_ids: List[DuplicateExternalId] = []
    duplicate_count: int = 0
    recent_window: RecentWindowStats
    batch_overlap: BatchOverlap
    verdict: Verdict


class XeroConnection(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    tenant_id: str
    access_token: str


class XeroContact(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    contact_id: Optional[str] = Field(None, alias="ContactID")
    name: Optional[str] = Field(None, alias="Name")


class PurchaseOrder(BaseModel):
    """Purchase order as returned by the Xero PurchaseOrders endpoint"""
    model_config = ConfigDict(populate_by_name=True)

    purchase_order_id: str = Field(alias="PurchaseOrderID")
    purchase_order_number: Optional[str] = Field(None, alias="PurchaseOrderNumber")
    status: str = Field(alias="Status")
    total: Optional[float] = Field(None, alias="Total")
    contact: Optional[XeroContact] = Field(None, alias="Contact")
    reference: Optional[str] = Field(None, alias="Reference")
    po_date: Optional[str] = Field(None, alias="Date")
    date_string: Optional[str] = Field(None, alias="DateString")
    updated_date_utc: Optional[str] = Field(None, alias="UpdatedDateUTC")


class Bill(BaseModel):
    """An ACCPAY invoice stored locally"""
    model_config = ConfigDict(from_attributes=True)

    xero_invoice_id: str
    reference: Optional[str] = None
    contact_name: Optional[str] = None
    total: float = 0.0
    status: Optional[str] = None
    invoice_date: Optional[date] = None


class PurchaseOrderSummary(BaseModel):
    total_count: int
    by_status: Dict[str, int]
    total_amount: float
    orders: List[PurchaseOrder] = []


class POBillMatch(BaseModel):
    purchase_order_number: str
    bill: Bill


class POBillAnalysis(BaseModel):
    purchase_order_count: int
    bill_count: int
    by_status: Dict[str, int]
    billed_po_count: int
    matched_bill_count: int
    match_rate: float
    sample_matches: List[POBillMatch] = []


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"
