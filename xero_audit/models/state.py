"""
LangGraph State Definition for the Line Item Audit Workflow
"""
from typing import TypedDict, Optional, List
from enum import Enum

from .schemas import LineItem, AuditReport


class AuditStatus(str, Enum):
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class AuditState(TypedDict, total=False):
    """State object passed through the audit graph nodes"""

    # Run metadata
    run_id: str
    status: str
    current_stage: str
    started_at: str
    updated_at: str

    # Inputs
    requested_account_id: Optional[str]
    window_size: int
    batch_size: int

    # RESOLVE_ACCOUNT outputs
    account_id: str

    # LOAD_LINE_ITEMS outputs
    line_items: List[LineItem]

    # AUDIT outputs
    report: AuditReport

    # REPORT outputs
    report_lines: List[str]

