"""
Tests for the line item audit (pure aggregation, no datastore)
"""
import random
import sys
import os
from datetime import datetime, timedelta
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from xero_audit.audit.auditor import audit_line_items, find_duplicate_external_ids
from xero_audit.audit.report import render_audit_report
from xero_audit.models.schemas import LineItem, Verdict

NOW = datetime(2024, 6, 1, 12, 0, 0)


def make_items(invoice_ids, external_ids=None, start=0):
    """Line items newest first, one second apart"""
    external_ids = external_ids or [None] * len(invoice_ids)
    return [
        LineItem(
            id=f"LI-{start + i}",
            invoice_id=invoice_id,
            external_line_item_id=external_id,
            created_at=NOW - timedelta(seconds=start + i)
        )
        for i, (invoice_id, external_id) in enumerate(zip(invoice_ids, external_ids))
    ]


# ============================================================================
# COUNTS AND DUPLICATES
# ============================================================================

def test_empty_input_is_clean():
    report = audit_line_items([], account_id="acct-1")

    assert report.total_line_items == 0
    assert report.unique_invoice_count == 0
    assert report.unique_external_id_count == 0
    assert report.duplicate_external_ids == []
    assert report.duplicate_count == 0
    assert report.recent_window.line_item_count == 0
    assert report.recent_window.oldest is None
    assert report.recent_window.newest is None
    assert report.batch_overlap.count == 0
    assert report.verdict == Verdict.CLEAN


def test_ten_distinct_invoices():
    items = make_items([f"INV-{i}" for i in range(10)], [f"X-{i}" for i in range(10)])
    report = audit_line_items(items, account_id="acct-1")

    assert report.total_line_items == 10
    assert report.unique_invoice_count == 10
    assert report.unique_external_id_count == 10
    assert report.verdict == Verdict.CLEAN


def test_single_id_repeated_three_times():
    external_ids = ["X-1", "X-DUP", "X-2", "X-DUP", "X-3", "X-DUP"]
    items = make_items([f"INV-{i}" for i in range(6)], external_ids)
    report = audit_line_items(items, account_id="acct-1")

    assert len(report.duplicate_external_ids) == 1
    assert report.duplicate_external_ids[0].external_line_item_id == "X-DUP"
    assert report.duplicate_external_ids[0].occurrences == 3
    assert report.duplicate_count == 2
    assert report.verdict == Verdict.DUPLICATES_FOUND


def test_unique_plus_duplicate_occurrences_equals_non_null_ids():
    rng = random.Random(7)
    external_ids = [rng.choice(["A", "B", "C", "D", None, ""]) for _ in range(300)]
    items = make_items([f"INV-{i % 40}" for i in range(300)], external_ids)
    report = audit_line_items(items, account_id="acct-1")

    non_null = sum(1 for e in external_ids if e)
    assert report.unique_external_id_count + report.duplicate_count == non_null


def test_null_and_empty_external_ids_are_ignored():
    external_ids = [None, "", None, "", "X-1"]
    items = make_items(["INV-1"] * 5, external_ids)
    report = audit_line_items(items, account_id="acct-1")

    listed = [d.external_line_item_id for d in report.duplicate_external_ids]
    assert None not in listed and "" not in listed
    assert report.unique_external_id_count == 1
    assert report.verdict == Verdict.CLEAN


def test_duplicates_listed_in_first_occurrence_order():
    items = make_items(["I"] * 5, ["B", "A", "B", "A", "C"])
    duplicates = find_duplicate_external_ids(items)

    assert [d.external_line_item_id for d in duplicates] == ["B", "A"]


# ============================================================================
# RECENT WINDOW AND BATCH OVERLAP
# ============================================================================

def test_disjoint_batches_have_no_overlap():
    first = [f"A-{i // 2}" for i in range(200)]
    second = [f"B-{i // 2}" for i in range(200)]
    report = audit_line_items(make_items(first + second), account_id="acct-1")

    overlap = report.batch_overlap
    assert report.recent_window.line_item_count == 400
    assert overlap.first_batch_invoice_count == 100
    assert overlap.second_batch_invoice_count == 100
    assert overlap.count == 0
    assert overlap.overlapping_invoice_ids == []


def test_fully_overlapping_batches():
    first = [f"INV-{i % 10}" for i in range(200)]
    second = [f"INV-{i % 20}" for i in range(200)]
    report = audit_line_items(make_items(first + second), account_id="acct-1")

    overlap = report.batch_overlap
    assert overlap.count == 10
    assert overlap.count == min(overlap.first_batch_invoice_count, overlap.second_batch_invoice_count)
    assert overlap.overlapping_invoice_ids == sorted(f"INV-{i}" for i in range(10))


def test_window_only_covers_most_recent_items():
    recent = [f"R-{i}" for i in range(400)]
    older = ["OLD"] * 100
    report = audit_line_items(make_items(recent + older), account_id="acct-1")

    assert report.total_line_items == 500
    assert report.recent_window.line_item_count == 400
    assert report.recent_window.unique_invoice_count == 400
    assert report.recent_window.newest == NOW
    assert report.recent_window.oldest == NOW - timedelta(seconds=399)


def test_fewer_items_than_window():
    report = audit_line_items(make_items([f"INV-{i}" for i in range(250)]), account_id="acct-1")

    assert report.recent_window.line_item_count == 250
    assert report.batch_overlap.first_batch_line_items == 200
    assert report.batch_overlap.second_batch_line_items == 50


def test_empty_second_batch_means_zero_overlap():
    report = audit_line_items(make_items(["INV-1"] * 150), account_id="acct-1")

    assert report.batch_overlap.second_batch_line_items == 0
    assert report.batch_overlap.count == 0


def test_custom_window_and_batch_size():
    invoices = ["A", "B", "A", "C", "D", "D"]
    report = audit_line_items(make_items(invoices), account_id="acct-1", window_size=4, batch_size=2)

    assert report.recent_window.window_size == 4
    assert report.recent_window.line_item_count == 4
    # batches: [A, B] and [A, C]
    assert report.batch_overlap.overlapping_invoice_ids == ["A"]


@pytest.mark.parametrize("window_size,batch_size", [(0, 1), (10, 0), (10, 6)])
def test_invalid_window_rejected(window_size, batch_size):
    with pytest.raises(ValueError):
        audit_line_items([], account_id="acct-1", window_size=window_size, batch_size=batch_size)


# ============================================================================
# ORDER INDEPENDENCE
# ============================================================================

def test_reordering_does_not_change_aggregates():
    rng = random.Random(42)
    invoices = [f"INV-{rng.randint(0, 60)}" for _ in range(450)]
    external_ids = [rng.choice([None, f"X-{rng.randint(0, 400)}"]) for _ in range(450)]
    items = make_items(invoices, external_ids)

    shuffled = list(items)
    rng.shuffle(shuffled)

    expected = audit_line_items(items, account_id="acct-1")
    actual = audit_line_items(shuffled, account_id="acct-1")

    assert actual.unique_external_id_count == expected.unique_external_id_count
    assert actual.unique_invoice_count == expected.unique_invoice_count
    assert actual.duplicate_count == expected.duplicate_count
    assert (
        {d.external_line_item_id: d.occurrences for d in actual.duplicate_external_ids}
        == {d.external_line_item_id: d.occurrences for d in expected.duplicate_external_ids}
    )
    assert actual.recent_window == expected.recent_window
    assert actual.batch_overlap == expected.batch_overlap


def test_window_chosen_by_timestamp_not_input_order():
    items = make_items(["NEW-1", "NEW-2", "OLD-1", "OLD-2"])
    report = audit_line_items(list(reversed(items)), account_id="acct-1", window_size=2, batch_size=1)

    assert report.recent_window.newest == NOW
    assert report.recent_window.oldest == NOW - timedelta(seconds=1)
    assert report.batch_overlap.first_batch_invoice_count == 1
    assert report.recent_window.unique_invoice_count == 2


def test_malformed_timestamp_fails_fast():
    with pytest.raises(ValueError):
        LineItem(id="LI-1", invoice_id="INV-1", created_at="not-a-timestamp")


# ============================================================================
# RENDERING
# ============================================================================

def test_render_report_clean():
    items = make_items([f"INV-{i}" for i in range(3)], ["X-1", "X-2", "X-3"])
    lines = render_audit_report(audit_line_items(items, account_id="acct-1"))

    assert "   Total line items: 3" in lines
    assert "   ✅ NO DUPLICATES - Each line item exists exactly once" in lines
    assert "   ✅ No overlap - batches processed different invoices!" in lines


def test_render_report_with_duplicates():
    items = make_items(["INV-1", "INV-1"], ["X-1", "X-1"])
    lines = render_audit_report(audit_line_items(items, account_id="acct-1", window_size=2, batch_size=1))

    assert "   ⚠️  Duplicate: X-1 (x2)" in lines
    assert "   ⚠️  1 DUPLICATE LINE ITEMS FOUND" in lines
    assert "   ⚠️  WARNING: Some invoices appear in both batches!" in lines


def test_render_empty_report_skips_window_section():
    lines = render_audit_report(audit_line_items([], account_id="acct-1"))

    assert not any("BATCH COMPARISON" in line for line in lines)
    assert "   Total 0 line items stored" in lines
