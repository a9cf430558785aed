"""
LOAD_LINE_ITEMS Node - Fetch every persisted line item for the account
"""
import logging
from datetime import datetime
from typing import Dict, Any
from xero_audit.models.state import AuditState
from xero_audit.database.repository import AuditRepository

logger = logging.getLogger(__name__)


def make_load_line_items_node(repository: AuditRepository):

    async def load_line_items_node(state: AuditState) -> Dict[str, Any]:
        """
        LOAD_LINE_ITEMS Stage: single unbounded read, newest first.
        A DataAccessError here aborts the run.
        """
        logger.info("=" * 50)
        logger.info("STAGE: LOAD_LINE_ITEMS - Reading line items")
        logger.info("=" * 50)

        account_id = state["account_id"]
        line_items = repository.fetch_line_items(account_id)
        logger.info(f"Loaded {len(line_items)} line items for {account_id}")

        return {
            "current_stage": "LOAD_LINE_ITEMS",
            "line_items": line_items,
            "updated_at": datetime.utcnow().isoformat()
        }

    return load_line_items_node
