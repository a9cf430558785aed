"""
Check Xero purchase orders and how they relate to stored bills

Usage:
  python check_purchase_orders.py [--limit 10] [--analyze-bills]
"""
import argparse
import asyncio
import sys
from dotenv import load_dotenv
load_dotenv()

from xero_audit.config import load_settings, configure_logging
from xero_audit.audit import (
    summarize_purchase_orders, analyze_po_bill_relationship,
    render_purchase_order_summary, render_po_bill_analysis
)
from xero_audit.database import Database, AuditRepository
from xero_audit.exceptions import (
    DataAccessError, NoActiveConnectionError, XeroAuthError, XeroRateLimitError, XeroAPIError
)
from xero_audit.xero import XeroClient


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Inspect Xero purchase orders")
    parser.add_argument("--limit", type=int, default=10, help="Purchase orders to list")
    parser.add_argument("--analyze-bills", action="store_true",
                        help="Match stored bills to purchase orders by reference")
    parser.add_argument("--sample-size", type=int, default=5, help="Matched bills to show")
    parser.add_argument("--database-url", help="Override DATABASE_URL")
    return parser.parse_args(argv)


async def check(args) -> int:
    settings = load_settings()
    configure_logging("WARNING")

    db = Database(args.database_url or settings.database_url)
    xero = XeroClient(settings.xero_api_base_url, settings.xero_timeout_seconds)
    try:
        return await run_checks(args, AuditRepository(db), xero)
    finally:
        db.dispose()


async def run_checks(args, repository: AuditRepository, xero: XeroClient) -> int:
    try:
        connection = repository.get_active_connection()
        print(f"✅ Found connection for tenant: {connection.tenant_id}")
        purchase_orders = await xero.fetch_purchase_orders(connection)

        if args.analyze_bills:
            bills = repository.fetch_bills(connection.user_id)
            lines = render_po_bill_analysis(
                analyze_po_bill_relationship(purchase_orders, bills, args.sample_size)
            )
        else:
            lines = render_purchase_order_summary(
                summarize_purchase_orders(purchase_orders, args.limit)
            )
    except NoActiveConnectionError:
        print("❌ No Xero connection found!", file=sys.stderr)
        print("   Please connect to Xero first from the /integrations page.", file=sys.stderr)
        return 1
    except DataAccessError as e:
        print(f"❌ Database error: {e}", file=sys.stderr)
        return 1
    except XeroAuthError:
        print("🔑 AUTHENTICATION ERROR - your access token may have expired.", file=sys.stderr)
        return 1
    except XeroRateLimitError as e:
        print(f"❌ RATE LIMITED - retry after {e.retry_after} seconds", file=sys.stderr)
        return 1
    except XeroAPIError as e:
        print(f"❌ ERROR: {e}", file=sys.stderr)
        return 1

    print()
    for line in lines:
        print(line)
    print()
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(check(parse_args())))
