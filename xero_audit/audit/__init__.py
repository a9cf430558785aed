from .auditor import audit_line_items, validate_window, find_duplicate_external_ids, compare_batches
from .purchase_orders import summarize_purchase_orders, analyze_po_bill_relationship
from .report import render_audit_report, render_purchase_order_summary, render_po_bill_analysis
