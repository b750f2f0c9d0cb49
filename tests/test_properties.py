"""Randomized invariant checks over generated ticket and meetup collections."""

import random
from datetime import date, datetime, timedelta

import pytest
import pytz

from outreach_app.analytics.aggregations.community_goals import compute_community_goals_data
from outreach_app.analytics.aggregations.labels import compute_statistics
from outreach_app.analytics.metrics.heatmap import build_heatmap_grid, compute_date_range
from outreach_app.analytics.segments.filters import filter_by_date_range, filter_by_tab
from outreach_app.core.dates import day_of_week, iso_date, to_utc_aligned_week
from outreach_app.core.mappers import map_meetup_group, map_ticket
from outreach_app.core.status import StatusBucket, classify, get_ticket_heatmap_status, group_by_status

SEEDS = list(range(8))

STATUSES = ["Assigned", "Under Consideration", "In Progress", "Resolved", "Pending", "Closed", "", None]
PENDING = ["Accepted", "In Progress", "Waiting", None]
LABELS = [
    "CFP_Submitted: Yes",
    "CFP_Accepted: Yes",
    "Segment: Students",
    "Program: re:Invent re:Cap",
    "DEU: Berlin",
    "DEU: Zürich",
    "DEU: aachen",
    "Other",
]
ORGANIZERS = ["Ana", "Ben", "", None]

# Important labels in collation order: case and accents ignored.
IMPORTANT_LABEL_ORDER = [
    "CFP_Accepted: Yes",
    "CFP_Submitted: Yes",
    "DEU: aachen",
    "DEU: Berlin",
    "DEU: Zürich",
    "Program: re:Invent re:Cap",
    "Segment: Students",
]


def _random_date(rng):
    day = date(2023, 1, 1) + timedelta(days=rng.randrange(0, 730))
    return rng.choice([iso_date(day), f"{iso_date(day)}T{rng.randrange(24):02d}:30:00Z", "", "garbage"])


def _random_ticket(rng, idx):
    tt = {}
    status = rng.choice(STATUSES)
    if status is not None:
        tt["status"] = status
    pending = rng.choice(PENDING)
    if pending is not None:
        tt["computedPendingReason"] = pending
    custom = {"date": [{"id": "date", "value": _random_date(rng)}], "string": [], "number": []}
    organizer = rng.choice(ORGANIZERS)
    if organizer is not None:
        custom["string"].append({"id": "activity_organizer", "value": organizer})
    if rng.random() < 0.7:
        custom["number"].append({"id": "actual_audience_size_reached", "value": rng.randrange(0, 200)})
    return map_ticket(
        {
            "id": str(idx),
            "title": f"Ticket {idx}",
            "labels": rng.sample(LABELS, rng.randrange(0, 4)),
            "customFields": custom,
            "extensions": {"tt": tt},
        }
    )


def _random_tickets(seed, count=40):
    rng = random.Random(seed)
    return [_random_ticket(rng, i) for i in range(count)]


@pytest.mark.parametrize("seed", SEEDS)
def test_status_groups_partition_classified_tickets(seed):
    tickets = _random_tickets(seed)
    groups = group_by_status(tickets)
    seen = [t.id for bucket in StatusBucket for t in groups.bucket(bucket)]
    assert len(seen) == len(set(seen))
    assert set(seen) == {t.id for t in tickets if classify(t) is not None}
    for bucket in StatusBucket:
        assert all(classify(t) == bucket for t in groups.bucket(bucket))


@pytest.mark.parametrize("seed", SEEDS)
def test_classifier_flavours_agree(seed):
    for ticket in _random_tickets(seed):
        assert classify(ticket) == get_ticket_heatmap_status(ticket)


@pytest.mark.parametrize("seed", SEEDS)
def test_date_filter_identity_and_inverted(seed):
    tickets = _random_tickets(seed)
    assert filter_by_date_range(tickets, None, None, tz="UTC") == tickets
    assert filter_by_date_range(tickets, "2024-06-02", "2024-06-01", tz="UTC") == []
    for tab in ("all", "statistics"):
        assert filter_by_tab(tickets, tab) == tickets


@pytest.mark.parametrize("seed", SEEDS)
def test_week_alignment(seed):
    rng = random.Random(seed)
    for _ in range(50):
        day = date(2000, 1, 1) + timedelta(days=rng.randrange(0, 20000))
        start = to_utc_aligned_week(day, align="start")
        end = to_utc_aligned_week(day, align="end")
        assert day_of_week(start) == 0
        assert day_of_week(end) == 6
        assert start <= day <= end
        assert (end - start).days == 6


@pytest.mark.parametrize("seed", SEEDS)
def test_heatmap_grid_shape_and_placement(seed):
    tickets = _random_tickets(seed)
    rng_ = compute_date_range(tickets, tz="UTC")
    grid = build_heatmap_grid(tickets, tz="UTC")
    if rng_ is None:
        assert grid is None
        return
    assert day_of_week(rng_.start) == 0 and day_of_week(rng_.end) == 6
    assert len(grid.cells) == 7
    assert all(len(row) == grid.week_count for row in grid.cells)
    placements = {}
    for row in grid.cells:
        for cell in row:
            for entry in cell.tickets:
                placements.setdefault(entry.title, []).append(cell.date)
    assert all(len(dates) == 1 for dates in placements.values())
    for row in grid.cells:
        for cell in row:
            statuses = [entry.status for entry in cell.tickets]
            if statuses:
                assert cell.dominant_status == max(statuses, key=lambda s: ["assigned", "accepted", "resolved"].index(s.value))
            else:
                assert cell.dominant_status is None


@pytest.mark.parametrize("seed", SEEDS)
def test_statistics_invariants(seed):
    stats = compute_statistics(_random_tickets(seed))
    labels = [s.label for s in stats.label_stats]
    assert labels == [name for name in IMPORTANT_LABEL_ORDER if name in labels]
    assert [r.label for r in stats.organizer_cross] == labels
    for row in stats.organizer_cross:
        assert row.total == sum(row.counts.values())
    assert stats.organizer_names == sorted(stats.organizer_names)
    for stat in stats.label_stats:
        assert stat.ticket_count >= 1 and stat.total_attendees >= 0


@pytest.mark.parametrize("seed", SEEDS)
def test_monthly_counts_sum_to_event_count(seed):
    rng = random.Random(seed)
    groups = []
    for g in range(5):
        nodes = [
            {
                "id": f"{g}-{i}",
                "title": f"Event {i}",
                "dateTime": rng.choice(
                    [
                        f"{rng.choice([2023, 2024, 2025])}-{rng.randrange(1, 13):02d}-15T18:00:00Z",
                        "not a date",
                    ]
                ),
                "rsvps": {"totalCount": rng.randrange(0, 50)},
            }
            for i in range(rng.randrange(0, 15))
        ]
        groups.append(map_meetup_group({"id": str(g), "pastEvents": {"edges": [{"node": n} for n in nodes]}}))
    now = datetime(2024, 7, 1, tzinfo=pytz.UTC)
    summaries = compute_community_goals_data(groups, 2024, now=now, tz="UTC")
    assert [s.id for s in summaries] == [g.id for g in groups]
    for summary in summaries:
        assert sum(summary.monthly_counts) == summary.event_count
        assert 0 <= summary.past_event_count <= summary.event_count
        assert summary.goal_met == (summary.past_event_count >= 7)
