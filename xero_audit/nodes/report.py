"""
REPORT Node - Render the audit report to the log stream
"""
import logging
from datetime import datetime
from typing import Dict, Any
from xero_audit.models.state import AuditState, AuditStatus
from xero_audit.audit.report import render_audit_report

logger = logging.getLogger(__name__)


async def report_node(state: AuditState) -> Dict[str, Any]:
    logger.info("=" * 50)
    logger.info("STAGE: REPORT - Rendering audit report")
    logger.info("=" * 50)

    lines = render_audit_report(state["report"])
    for line in lines:
        logger.info(line)

    return {
        "current_stage": "REPORT",
        "status": AuditStatus.COMPLETED.value,
        "report_lines": lines,
        "updated_at": datetime.utcnow().isoformat()
    }
