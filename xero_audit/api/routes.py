"""
FastAPI Routes for the audit diagnostics
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from xero_audit.config import Settings
from xero_audit.audit.purchase_orders import (
    summarize_purchase_orders, analyze_po_bill_relationship
)
from xero_audit.database import AuditRepository
from xero_audit.exceptions import (
    DataAccessError, NoActiveConnectionError,
    XeroAPIError, XeroAuthError, XeroRateLimitError
)
from xero_audit.graph.workflow import LineItemAuditGraph
from xero_audit.models.schemas import AuditReport, PurchaseOrderSummary, POBillAnalysis
from xero_audit.models.state import AuditStatus
from xero_audit.xero import XeroClient
from .dependencies import get_settings, get_repository, get_xero_client, require_admin

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(require_admin)])


def _data_access_http_error(error: DataAccessError) -> HTTPException:
    if isinstance(error, NoActiveConnectionError):
        return HTTPException(status_code=404, detail=str(error))
    return HTTPException(status_code=503, detail=f"Datastore unavailable: {error}")


def _xero_http_error(error: XeroAPIError) -> HTTPException:
    if isinstance(error, XeroRateLimitError):
        return HTTPException(
            status_code=429,
            detail=error.message,
            headers={"Retry-After": str(error.retry_after)}
        )
    if isinstance(error, XeroAuthError):
        return HTTPException(
            status_code=502,
            detail="Xero rejected the access token - reconnect from the integrations page"
        )
    return HTTPException(status_code=502, detail=str(error))


@router.get("/audit/line-items", response_model=AuditReport)
async def audit_line_items(
    account_id: Optional[str] = None,
    window_size: Optional[int] = Query(None, ge=1),
    batch_size: Optional[int] = Query(None, ge=1),
    settings: Settings = Depends(get_settings),
    repository: AuditRepository = Depends(get_repository)
):
    """
    Audit persisted line items for duplicates and batch overlap

    Defaults to the account of the active Xero connection.
    """
    try:
        graph = LineItemAuditGraph(repository, settings.window_size, settings.batch_size)
        result = await graph.run_audit(account_id, window_size, batch_size)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    if result["status"] == AuditStatus.FAILED.value:
        raise _data_access_http_error(result["error"])

    return result["report"]


@router.get("/xero/purchase-orders/summary", response_model=PurchaseOrderSummary)
async def purchase_order_summary(
    limit: int = Query(10, ge=0),
    repository: AuditRepository = Depends(get_repository),
    xero: XeroClient = Depends(get_xero_client)
):
    """
    Summarise the active tenant's Xero purchase orders by status
    """
    try:
        connection = repository.get_active_connection()
        purchase_orders = await xero.fetch_purchase_orders(connection)
    except DataAccessError as e:
        raise _data_access_http_error(e)
    except XeroAPIError as e:
        raise _xero_http_error(e)

    return summarize_purchase_orders(purchase_orders, limit=limit)


@router.get("/xero/purchase-orders/bill-relationship", response_model=POBillAnalysis)
async def po_bill_relationship(
    sample_size: int = Query(5, ge=0),
    repository: AuditRepository = Depends(get_repository),
    xero: XeroClient = Depends(get_xero_client)
):
    """
    Infer which stored bills were raised from Xero purchase orders
    """
    try:
        connection = repository.get_active_connection()
        purchase_orders = await xero.fetch_purchase_orders(connection)
        bills = repository.fetch_bills(connection.user_id)
    except DataAccessError as e:
        raise _data_access_http_error(e)
    except XeroAPIError as e:
        raise _xero_http_error(e)

    return analyze_po_bill_relationship(purchase_orders, bills, sample_size=sample_size)
