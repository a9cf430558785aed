"""
Verify line item ingestion: duplicates and overlap between sync batches

Usage:
  python verify_line_items.py [--account-id ID] [--window-size 400] [--batch-size 200]
"""
import argparse
import asyncio
import sys
from dotenv import load_dotenv
load_dotenv()

from xero_audit.config import load_settings, configure_logging
from xero_audit.database import Database, AuditRepository
from xero_audit.graph.workflow import LineItemAuditGraph
from xero_audit.models.state import AuditStatus


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Audit persisted Xero line items")
    parser.add_argument("--account-id", help="Account to audit (default: active Xero connection)")
    parser.add_argument("--window-size", type=int, help="Most recent line items to inspect")
    parser.add_argument("--batch-size", type=int, help="Line items per sync batch")
    parser.add_argument("--database-url", help="Override DATABASE_URL")
    return parser.parse_args(argv)


async def verify(args) -> int:
    settings = load_settings()
    configure_logging("WARNING")

    db = Database(args.database_url or settings.database_url)
    graph = LineItemAuditGraph(AuditRepository(db), settings.window_size, settings.batch_size)

    try:
        result = await graph.run_audit(args.account_id, args.window_size, args.batch_size)
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2
    finally:
        db.dispose()

    if result["status"] == AuditStatus.FAILED.value:
        print(f"❌ Audit failed: {result['message']}", file=sys.stderr)
        return 1

    print()
    for line in result["report_lines"]:
        print(line)
    print()
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(verify(parse_args())))
