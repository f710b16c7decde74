from __future__ import annotations

from datetime import date, datetime


def test_overview_counts_and_feed(container, ids):
    container.attendance_service.check_in(ids.member, now=datetime(2024, 6, 3, 9, 0))
    container.attendance_service.check_in(ids.admin, ids.other, now=datetime(2024, 6, 3, 9, 5))
    container.attendance_service.check_in(ids.member, now=datetime(2024, 6, 2, 9, 0))

    leave = container.leave_service.submit(
        ids.member,
        leave_type="sick",
        start_date=date(2024, 6, 4),
        end_date=date(2024, 6, 4),
        reason="Flu",
        now=datetime(2024, 6, 3, 10, 0),
    )
    container.leave_service.submit(
        ids.other,
        leave_type="personal",
        start_date=date(2024, 6, 10),
        end_date=date(2024, 6, 11),
        reason="Errands",
        now=datetime(2024, 6, 3, 11, 0),
    )
    container.leave_service.approve(ids.admin, leave.request_id, now=datetime(2024, 6, 3, 12, 0))

    overview = container.dashboard_service.overview(today=date(2024, 6, 3))

    assert overview.total_employees == 3
    assert overview.pending_leaves == 1
    assert overview.today_attendance == 2
    assert overview.recent_activity[0].description == "Approved a sick leave request"
    assert overview.recent_activity[0].actor_name == "Alice Admin"


def test_feed_is_capped_at_ten(container, ids):
    for day in range(1, 13):
        container.attendance_service.check_in(ids.member, now=datetime(2024, 6, day, 9, 0))

    overview = container.dashboard_service.overview(today=date(2024, 6, 12))

    assert len(overview.recent_activity) == 10
    assert overview.recent_activity[0].created_at == datetime(2024, 6, 12, 9, 0)
