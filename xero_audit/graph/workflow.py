"""
LangGraph Line Item Audit Workflow
"""
import logging
import uuid
from datetime import datetime
from typing import Dict, Any, Optional, Tuple
from langgraph.graph import StateGraph, END

from xero_audit.config import DEFAULT_WINDOW_SIZE, DEFAULT_BATCH_SIZE
from xero_audit.exceptions import DataAccessError
from xero_audit.audit.auditor import validate_window
from xero_audit.database.repository import AuditRepository
from xero_audit.models.state import AuditState, AuditStatus
from xero_audit.nodes import (
    make_resolve_account_node,
    make_load_line_items_node,
    audit_node,
    report_node
)

logger = logging.getLogger(__name__)


def create_audit_graph(repository: AuditRepository) -> StateGraph:
    """
    Create the LangGraph workflow for a line item audit run

    Flow:
    RESOLVE_ACCOUNT -> LOAD_LINE_ITEMS -> AUDIT -> REPORT
    """
    workflow = StateGraph(AuditState)

    workflow.add_node("resolve_account", make_resolve_account_node(repository))
    workflow.add_node("load_line_items", make_load_line_items_node(repository))
    workflow.add_node("audit", audit_node)
    workflow.add_node("report", report_node)

    workflow.set_entry_point("resolve_account")

    workflow.add_edge("resolve_account", "load_line_items")
    workflow.add_edge("load_line_items", "audit")
    workflow.add_edge("audit", "report")
    workflow.add_edge("report", END)

    return workflow


class LineItemAuditGraph:
    """
    Runs audits against one repository. Each run reads a fresh snapshot.
    """

    def __init__(
        self,
        repository: AuditRepository,
        window_size: int = DEFAULT_WINDOW_SIZE,
        batch_size: int = DEFAULT_BATCH_SIZE
    ):
        self.repository = repository
        self.window_size = window_size
        self.batch_size = batch_size
        self.graph = create_audit_graph(repository)
        self.compiled = self.graph.compile()

    def resolve_window(
        self,
        window_size: Optional[int] = None,
        batch_size: Optional[int] = None
    ) -> Tuple[int, int]:
        """
        Effective (window_size, batch_size) for a run. A window override on
        its own is split into two halves. Only the effective pair is checked.
        """
        if window_size is None:
            window_size = self.window_size
            if batch_size is None:
                batch_size = self.batch_size
        elif batch_size is None:
            batch_size = window_size // 2

        validate_window(window_size, batch_size)
        return window_size, batch_size

    async def run_audit(
        self,
        account_id: Optional[str] = None,
        window_size: Optional[int] = None,
        batch_size: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Run one audit. Without account_id the active Xero connection's
        account is audited.

        Returns a dict with status COMPLETED and the report, or status FAILED
        and the error when the datastore read fails.

        Raises:
            ValueError: for a window that cannot hold two batches
        """
        window_size, batch_size = self.resolve_window(window_size, batch_size)

        run_id = f"AUDIT-{uuid.uuid4().hex[:8].upper()}"
        initial_state: AuditState = {
            "run_id": run_id,
            "status": AuditStatus.RUNNING.value,
            "current_stage": "RESOLVE_ACCOUNT",
            "started_at": datetime.utcnow().isoformat(),
            "updated_at": datetime.utcnow().isoformat(),
            "requested_account_id": account_id,
            "window_size": window_size,
            "batch_size": batch_size
        }

        logger.info(f"Starting audit run {run_id} (window={window_size}, batch={batch_size})")

        try:
            final_state = await self.compiled.ainvoke(initial_state)
        except DataAccessError as e:
            logger.error(f"Audit run {run_id} failed: {e}")
            return {
                "run_id": run_id,
                "status": AuditStatus.FAILED.value,
                "error": e,
                "message": str(e)
            }

        report = final_state.get("report")
        return {
            "run_id": run_id,
            "status": final_state.get("status", AuditStatus.COMPLETED.value),
            "account_id": final_state.get("account_id"),
            "report": report,
            "report_lines": final_state.get("report_lines", []),
            "message": f"Audit verdict: {report.verdict.value}"
        }
