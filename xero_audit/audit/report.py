"""
Console rendering for the diagnostic reports
"""
from typing import List

from xero_audit.models.schemas import (
    AuditReport, Verdict, PurchaseOrderSummary, POBillAnalysis
)


def _ts(value) -> str:
    return value.isoformat() if value else "N/A"


def render_audit_report(report: AuditReport) -> List[str]:
    window = report.recent_window
    overlap = report.batch_overlap

    lines = [
        "🔍 DETAILED BATCH VERIFICATION",
        "=" * 31,
        f"Account: {report.account_id}",
        "",
        "📊 TOTAL DATABASE STATE:",
        f"   Total line items: {report.total_line_items}",
        f"   Unique invoices with line items: {report.unique_invoice_count}",
        f"   Unique Xero line item IDs: {report.unique_external_id_count}",
        f"   Duplicate line items: {report.duplicate_count}",
    ]
    for dup in report.duplicate_external_ids:
        lines.append(f"   ⚠️  Duplicate: {dup.external_line_item_id} (x{dup.occurrences})")
    lines.append("")

    if report.total_line_items > 0:
        lines.extend([
            f"📅 MOST RECENT LINE ITEMS (last {window.window_size}):",
            f"   Line items: {window.line_item_count}",
            f"   Unique invoices: {window.unique_invoice_count}",
            f"   Date range: {_ts(window.oldest)} to {_ts(window.newest)}",
            "",
            "🔄 BATCH COMPARISON:",
            f"   First {overlap.batch_size} items: {overlap.first_batch_invoice_count} unique invoices",
            f"   Next {overlap.batch_size} items: {overlap.second_batch_invoice_count} unique invoices",
            f"   Overlapping invoices: {overlap.count}",
        ])
        if overlap.count > 0:
            lines.append("   ⚠️  WARNING: Some invoices appear in both batches!")
            lines.append("   This could mean invoices were reprocessed.")
        else:
            lines.append("   ✅ No overlap - batches processed different invoices!")
        lines.append("")

    lines.append("✅ FINAL VERDICT:")
    if report.verdict == Verdict.CLEAN:
        lines.append("   ✅ NO DUPLICATES - Each line item exists exactly once")
    else:
        lines.append(f"   ⚠️  {report.duplicate_count} DUPLICATE LINE ITEMS FOUND")
    lines.append(f"   Database has {report.unique_invoice_count} invoices with line items")
    lines.append(f"   Total {report.total_line_items} line items stored")
    return lines


def render_purchase_order_summary(summary: PurchaseOrderSummary) -> List[str]:
    lines = [
        "📊 PURCHASE ORDER SUMMARY",
        "=" * 25,
        f"Total Purchase Orders: {summary.total_count}",
    ]
    if summary.total_count == 0:
        lines.append("   No purchase orders found in Xero.")
        return lines

    lines.append("By Status:")
    for status, count in summary.by_status.items():
        lines.append(f"   {status}: {count}")
    lines.append(f"Total Amount: ${summary.total_amount:,.2f}")
    lines.append("")

    lines.append(f"📋 FIRST {len(summary.orders)} PURCHASE ORDERS:")
    for index, po in enumerate(summary.orders, start=1):
        lines.append(f"{index}. PO #{po.purchase_order_number or 'N/A'}")
        lines.append(f"   ID: {po.purchase_order_id}")
        lines.append(f"   Contact: {po.contact.name if po.contact and po.contact.name else 'N/A'}")
        lines.append(f"   Status: {po.status}")
        lines.append(f"   Total: ${po.total or 0:,.2f}")
        lines.append(f"   Date: {po.po_date or po.date_string or 'N/A'}")
        if po.reference:
            lines.append(f"   Reference: {po.reference}")
        lines.append(f"   Updated: {po.updated_date_utc or 'N/A'}")

    remaining = summary.total_count - len(summary.orders)
    if remaining > 0:
        lines.append(f"... and {remaining} more purchase orders")
    return lines


def render_po_bill_analysis(analysis: POBillAnalysis) -> List[str]:
    lines = [
        "🔬 PO-BILL RELATIONSHIP",
        "=" * 23,
        f"Purchase orders: {analysis.purchase_order_count}",
        f"Bills in database: {analysis.bill_count}",
        "",
        "📊 Purchase Order Status Breakdown:",
    ]
    for status, count in analysis.by_status.items():
        lines.append(f"   {status}: {count}")
    lines.append("")
    lines.append(f"   Bills with PO references: {analysis.matched_bill_count} out of {analysis.bill_count}")
    lines.append(f"   Match rate: {analysis.match_rate:.2f}%")

    if analysis.sample_matches:
        lines.append("")
        lines.append(f"📋 SAMPLE MATCHED BILLS (First {len(analysis.sample_matches)}):")
        for index, match in enumerate(analysis.sample_matches, start=1):
            lines.append(f"{index}. Bill Reference: {match.bill.reference}")
            lines.append(f"   PO Number: {match.purchase_order_number}")
            lines.append(f"   Contact: {match.bill.contact_name or 'N/A'}")
            lines.append(f"   Amount: ${match.bill.total:,.2f}")
            lines.append(f"   Status: {match.bill.status or 'N/A'}")

    lines.append("")
    if analysis.billed_po_count:
        lines.append(f"✓ {analysis.billed_po_count} POs have status BILLED (converted to bills)")
    if analysis.matched_bill_count:
        lines.append(f"✓ {analysis.matched_bill_count} bills carry a PO number in their reference")
    else:
        lines.append("✗ No bills reference a PO number - POs and bills may not be linked")
    return lines
