from __future__ import annotations

from datetime import datetime

import pytest

from src.attendance_bot.attendance_bot.core.exceptions import AuthorizationError
from src.attendance_bot.attendance_bot.reports.service import TRUNCATION_MARKER, ReportService


def test_export_preview_lists_rows(container, add_staff):
    add_staff("ADM", "Boss", is_admin=True)
    add_staff("U1", "Alice")
    admin = container.staff_repo.get_by_user_id("ADM")
    alice = container.staff_repo.get_by_user_id("U1")
    container.attendance_service.clock(alice, now=datetime(2025, 7, 1, 9, 0))
    container.leave_service.request_leave(alice, text="2025-07-02", leave_type="sick")

    text = container.report_service.export_preview(admin)

    assert "Alice 2025-07-01: 09:00 ~ -" in text
    assert "Alice 2025-07-02: - ~ - (leave sick: PENDING)" in text
    assert TRUNCATION_MARKER not in text


def test_export_preview_is_capped(container, add_staff):
    add_staff("ADM", "Boss", is_admin=True)
    admin = container.staff_repo.get_by_user_id("ADM")
    for day in range(1, 31):
        container.attendance_repo.create(
            user_id="ADM", display_name="Boss", work_date=datetime(2025, 6, day).date(), off_site_note="x" * 50
        )
    service = ReportService(container.attendance_repo, limit=200)

    text = service.export_preview(admin)

    assert text.endswith(TRUNCATION_MARKER)
    assert text.startswith("Attendance report preview:\n")
    assert len(text) == 200


def test_export_requires_admin(container, add_staff):
    add_staff("U1", "Alice")
    with pytest.raises(AuthorizationError):
        container.report_service.export_preview(container.staff_repo.get_by_user_id("U1"))
