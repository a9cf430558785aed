"""
AUDIT Node - Duplicate scan and batch comparison
"""
import logging
from datetime import datetime
from typing import Dict, Any
from xero_audit.models.state import AuditState
from xero_audit.audit.auditor import audit_line_items

logger = logging.getLogger(__name__)


async def audit_node(state: AuditState) -> Dict[str, Any]:
    """
    AUDIT Stage: pure aggregation over the loaded snapshot, no writes
    """
    logger.info("=" * 50)
    logger.info("STAGE: AUDIT - Checking for duplicates and batch overlap")
    logger.info("=" * 50)

    report = audit_line_items(
        state.get("line_items", []),
        account_id=state["account_id"],
        window_size=state["window_size"],
        batch_size=state["batch_size"]
    )

    if report.duplicate_count:
        logger.warning(f"{report.duplicate_count} duplicate line items found")
    if report.batch_overlap.count:
        logger.warning(
            f"{report.batch_overlap.count} invoices appear in both recent batches"
        )

    return {
        "current_stage": "AUDIT",
        "report": report,
        "updated_at": datetime.utcnow().isoformat()
    }
