"""
RESOLVE_ACCOUNT Node - Pick the account whose line items are audited
"""
import logging
from datetime import datetime
from typing import Dict, Any
from xero_audit.models.state import AuditState
from xero_audit.database.repository import AuditRepository

logger = logging.getLogger(__name__)


def make_resolve_account_node(repository: AuditRepository):

    async def resolve_account_node(state: AuditState) -> Dict[str, Any]:
        """
        RESOLVE_ACCOUNT Stage: use the requested account, or fall back to
        the account of the active Xero connection
        """
        logger.info("=" * 50)
        logger.info("STAGE: RESOLVE_ACCOUNT - Selecting account to audit")
        logger.info("=" * 50)

        account_id = state.get("requested_account_id")
        if account_id:
            logger.info(f"Using requested account: {account_id}")
        else:
            account_id = repository.get_active_account_id()
            logger.info(f"Using active Xero connection account: {account_id}")

        return {
            "current_stage": "RESOLVE_ACCOUNT",
            "account_id": account_id,
            "updated_at": datetime.utcnow().isoformat()
        }

    return resolve_account_node
