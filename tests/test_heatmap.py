import json
from datetime import date

from outreach_app.analytics.metrics.heatmap import (
    build_heatmap_grid,
    compute_date_range,
    get_dominant_status,
    heatmap_to_frame,
)
from outreach_app.core.dates import day_of_week
from outreach_app.core.mappers import map_ticket
from outreach_app.core.status import StatusBucket


def _ticket(tid, date_value, status="Assigned", pending=None):
    tt = {"status": status}
    if pending:
        tt["computedPendingReason"] = pending
    return map_ticket(
        {
            "id": tid,
            "title": f"Ticket {tid}",
            "customFields": {"date": [{"id": "date", "value": date_value}]},
            "extensions": {"tt": tt},
        }
    )


def _find_cell(grid, iso):
    for row_idx, row in enumerate(grid.cells):
        for col_idx, cell in enumerate(row):
            if cell is not None and cell.date == iso:
                return row_idx, col_idx, cell
    return None


def test_single_ticket_range_is_aligned_full_year():
    rng = compute_date_range([_ticket("1", "2024-03-13")], tz="UTC")
    assert rng.start == date(2023, 12, 31)
    assert rng.end == date(2025, 1, 4)
    assert day_of_week(rng.start) == 0
    assert day_of_week(rng.end) == 6


def test_single_ticket_lands_on_wednesday():
    grid = build_heatmap_grid([_ticket("1", "2024-03-13")], tz="UTC")
    assert grid.week_count == 53
    row, col, cell = _find_cell(grid, "2024-03-13")
    assert row == 3
    assert col == 10
    assert cell.dominant_status == StatusBucket.ASSIGNED
    assert [t.title for t in cell.tickets] == ["Ticket 1"]


def test_range_uses_earliest_year():
    tickets = [_ticket("a", "2025-06-01"), _ticket("b", "2023-11-05"), _ticket("c", "")]
    rng = compute_date_range(tickets, tz="UTC")
    assert rng.start <= date(2023, 1, 1) <= rng.end
    assert rng.start <= date(2023, 12, 31) <= rng.end
    assert (date(2023, 1, 1) - rng.start).days <= 6
    assert (rng.end - date(2023, 12, 31)).days <= 6


def test_range_when_year_starts_on_sunday():
    rng = compute_date_range([_ticket("1", "2023-05-05")], tz="UTC")
    assert rng.start == date(2023, 1, 1)
    assert rng.end == date(2024, 1, 6)


def test_no_dated_tickets_returns_none():
    assert compute_date_range([_ticket("1", ""), _ticket("2", "garbage")], tz="UTC") is None
    assert build_heatmap_grid([_ticket("1", "")], tz="UTC") is None
    assert build_heatmap_grid([], tz="UTC") is None


def test_grid_shape():
    grid = build_heatmap_grid([_ticket("1", "2024-07-04")], tz="UTC")
    assert len(grid.cells) == 7
    assert all(len(row) == grid.week_count for row in grid.cells)


def test_dominant_status_priority():
    assert get_dominant_status([]) is None
    assert get_dominant_status([StatusBucket.ASSIGNED]) == StatusBucket.ASSIGNED
    assert get_dominant_status([StatusBucket.ASSIGNED, StatusBucket.ACCEPTED]) == StatusBucket.ACCEPTED
    assert (
        get_dominant_status([StatusBucket.RESOLVED, StatusBucket.ACCEPTED, StatusBucket.ASSIGNED])
        == StatusBucket.RESOLVED
    )


def test_cell_collects_tickets_in_input_order():
    tickets = [
        _ticket("a", "2024-05-01", "Assigned"),
        _ticket("b", "2024-05-01", "Resolved"),
        _ticket("c", "2024-05-01", "Pending", pending="Accepted"),
    ]
    grid = build_heatmap_grid(tickets, tz="UTC")
    _, _, cell = _find_cell(grid, "2024-05-01")
    assert [t.title for t in cell.tickets] == ["Ticket a", "Ticket b", "Ticket c"]
    assert [t.status for t in cell.tickets] == [
        StatusBucket.ASSIGNED,
        StatusBucket.RESOLVED,
        StatusBucket.ACCEPTED,
    ]
    assert cell.dominant_status == StatusBucket.RESOLVED


def test_unclassified_and_dateless_tickets_are_absent():
    tickets = [
        _ticket("dated", "2024-02-02"),
        _ticket("closed", "2024-02-03", status="Closed"),
        _ticket("bad-date", "32/13/2024"),
    ]
    grid = build_heatmap_grid(tickets, tz="UTC")
    placed = [t.title for row in grid.cells for cell in row if cell for t in cell.tickets]
    assert placed == ["Ticket dated"]
    _, _, empty = _find_cell(grid, "2024-02-03")
    assert empty.tickets == [] and empty.dominant_status is None


def test_later_year_tickets_outside_grid_are_dropped():
    grid = build_heatmap_grid([_ticket("a", "2024-01-02"), _ticket("b", "2026-01-02")], tz="UTC")
    assert _find_cell(grid, "2026-01-02") is None


def test_month_labels_full_year():
    grid = build_heatmap_grid([_ticket("1", "2024-01-15")], tz="UTC")
    labels = [m.label for m in grid.month_labels]
    assert labels == ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
    assert grid.month_labels[0].week_index == 0
    indexes = [m.week_index for m in grid.month_labels]
    assert indexes == sorted(indexes)
    assert all(0 <= i < grid.week_count for i in indexes)


def test_timezone_shifts_cell():
    ticket = _ticket("1", "2024-06-10T03:00:00Z")
    utc_grid = build_heatmap_grid([ticket], tz="UTC")
    ny_grid = build_heatmap_grid([ticket], tz="America/New_York")
    assert _find_cell(utc_grid, "2024-06-10")[2].tickets
    assert _find_cell(ny_grid, "2024-06-09")[2].tickets


def test_grid_json_round_trip():
    grid = build_heatmap_grid([_ticket("1", "2024-03-13")], tz="UTC")
    payload = json.dumps(grid.to_dict(), sort_keys=True)
    data = json.loads(payload)
    assert data["weekCount"] == 53
    assert data["cells"][3][10] == {
        "date": "2024-03-13",
        "tickets": [{"title": "Ticket 1", "status": "assigned"}],
        "dominantStatus": "assigned",
    }
    assert json.dumps(data, sort_keys=True) == payload


def test_heatmap_frame():
    grid = build_heatmap_grid([_ticket("1", "2024-03-13")], tz="UTC")
    frame = heatmap_to_frame(grid)
    assert len(frame) == 7 * grid.week_count
    hit = frame[frame["date"] == "2024-03-13"].iloc[0]
    assert hit["count"] == 1 and hit["dominant_status"] == "assigned"
    assert heatmap_to_frame(None).empty
