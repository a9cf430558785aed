"""
Purchase order diagnostics

Xero does not link bills to the purchase orders they were raised from, so
the relationship is inferred from PO status and bill references.
"""
import logging
from collections import Counter
from typing import List, Dict

from xero_audit.models.schemas import (
    PurchaseOrder, Bill, PurchaseOrderSummary, POBillMatch, POBillAnalysis
)

logger = logging.getLogger(__name__)


def count_by_status(purchase_orders: List[PurchaseOrder]) -> Dict[str, int]:
    return dict(Counter(po.status for po in purchase_orders))


def summarize_purchase_orders(
    purchase_orders: List[PurchaseOrder],
    limit: int = 10
) -> PurchaseOrderSummary:
    total_amount = sum(po.total or 0 for po in purchase_orders)

    return PurchaseOrderSummary(
        total_count=len(purchase_orders),
        by_status=count_by_status(purchase_orders),
        total_amount=round(total_amount, 2),
        orders=purchase_orders[:limit]
    )


def match_bills_to_purchase_orders(
    purchase_orders: List[PurchaseOrder],
    bills: List[Bill]
) -> List[POBillMatch]:
    """Bills whose reference contains a PO number. The first matching PO wins."""
    po_numbers = list(dict.fromkeys(
        po.purchase_order_number for po in purchase_orders if po.purchase_order_number
    ))

    matches = []
    for bill in bills:
        if not bill.reference:
            continue
        found = next((number for number in po_numbers if number in bill.reference), None)
        if found:
            matches.append(POBillMatch(purchase_order_number=found, bill=bill))
    return matches


def analyze_po_bill_relationship(
    purchase_orders: List[PurchaseOrder],
    bills: List[Bill],
    sample_size: int = 5
) -> POBillAnalysis:
    by_status = count_by_status(purchase_orders)
    matches = match_bills_to_purchase_orders(purchase_orders, bills)

    match_rate = round(len(matches) / len(bills) * 100, 2) if bills else 0.0

    logger.info(
        f"{len(matches)} of {len(bills)} bills reference one of "
        f"{len(purchase_orders)} purchase orders ({match_rate}%)"
    )

    return POBillAnalysis(
        purchase_order_count=len(purchase_orders),
        bill_count=len(bills),
        by_status=by_status,
        billed_po_count=by_status.get("BILLED", 0),
        matched_bill_count=len(matches),
        match_rate=match_rate,
        sample_matches=matches[:sample_size]
    )
