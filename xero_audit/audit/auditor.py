"""
Line item ingestion audit

Checks one account's persisted line items for duplicate Xero line item IDs
and compares the two most recent sync batches for invoices that were
processed twice.
"""
import logging
from collections import Counter
from typing import Iterable, List, Set

from xero_audit.config import DEFAULT_WINDOW_SIZE, DEFAULT_BATCH_SIZE
from xero_audit.models.schemas import (
    LineItem, AuditReport, DuplicateExternalId,
    RecentWindowStats, BatchOverlap, Verdict
)

logger = logging.getLogger(__name__)


def validate_window(window_size: int, batch_size: int):
    if window_size < 1 or batch_size < 1:
        raise ValueError("window_size and batch_size must be positive")
    if batch_size * 2 > window_size:
        raise ValueError(
            f"window_size ({window_size}) must hold two batches of {batch_size}"
        )


def find_duplicate_external_ids(items: Iterable[LineItem]) -> List[DuplicateExternalId]:
    """
    External IDs seen more than once, in order of first occurrence.
    Items without an external ID are ignored.
    """
    counts = Counter(
        item.external_line_item_id for item in items if item.external_line_item_id
    )
    # Counter preserves insertion order, i.e. first occurrence
    return [
        DuplicateExternalId(external_line_item_id=ext_id, occurrences=n)
        for ext_id, n in counts.items()
        if n > 1
    ]


def _invoice_ids(items: Iterable[LineItem]) -> Set[str]:
    return {item.invoice_id for item in items}


def compare_batches(window: List[LineItem], batch_size: int) -> BatchOverlap:
    """Split the window into two contiguous batches and intersect their invoices"""
    first = window[:batch_size]
    second = window[batch_size:batch_size * 2]

    first_invoices = _invoice_ids(first)
    second_invoices = _invoice_ids(second)
    overlap = sorted(first_invoices & second_invoices)

    return BatchOverlap(
        batch_size=batch_size,
        first_batch_line_items=len(first),
        first_batch_invoice_count=len(first_invoices),
        second_batch_line_items=len(second),
        second_batch_invoice_count=len(second_invoices),
        overlapping_invoice_ids=overlap,
        count=len(overlap)
    )


def audit_line_items(
    items: Iterable[LineItem],
    account_id: str,
    window_size: int = DEFAULT_WINDOW_SIZE,
    batch_size: int = DEFAULT_BATCH_SIZE
) -> AuditReport:
    """
    Build the audit report for one account's line items.

    The recent window is chosen by created_at (newest first), so the order
    the items arrive in does not matter. Ties keep their input order.

    Raises:
        ValueError: if the window cannot hold two batches of batch_size
    """
    validate_window(window_size, batch_size)

    ordered = sorted(items, key=lambda item: item.created_at, reverse=True)

    duplicates = find_duplicate_external_ids(ordered)
    duplicate_count = sum(d.occurrences - 1 for d in duplicates)
    external_ids = {item.external_line_item_id for item in ordered if item.external_line_item_id}

    window = ordered[:window_size]
    recent_window = RecentWindowStats(
        window_size=window_size,
        line_item_count=len(window),
        unique_invoice_count=len(_invoice_ids(window)),
        oldest=window[-1].created_at if window else None,
        newest=window[0].created_at if window else None
    )

    batch_overlap = compare_batches(window, batch_size)

    verdict = Verdict.DUPLICATES_FOUND if duplicates else Verdict.CLEAN

    logger.info(
        f"Audited {len(ordered)} line items for {account_id}: "
        f"{duplicate_count} duplicates, {batch_overlap.count} overlapping invoices"
    )

    return AuditReport(
        account_id=account_id,
        total_line_items=len(ordered),
        unique_invoice_count=len(_invoice_ids(ordered)),
        unique_external_id_count=len(external_ids),
        duplicate_external_ids=duplicates,
        duplicate_count=duplicate_count,
        recent_window=recent_window,
        batch_overlap=batch_overlap,
        verdict=verdict
    )
