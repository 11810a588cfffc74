from __future__ import annotations

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..core.constants import DEFAULT_REPORT_PREVIEW_LIMIT
from ..core.exceptions import AuthorizationError
from ..staff.model import StaffRecord

REPORT_HEADER = "Attendance report preview:\n"
TRUNCATION_MARKER = "\n(truncated: report too long)"


def _clock(value) -> str:
    return value.strftime("%H:%M") if value else "-"


def format_row(r: AttendanceRecord) -> str:
    line = f"{r.display_name} {r.work_date.isoformat()}: {_clock(r.clock_in)} ~ {_clock(r.clock_out)}"
    if r.on_leave:
        status = r.leave_status.value if r.leave_status else ""
        line += f" (leave {r.leave_type}: {status})"
    if r.off_site_note:
        line += f" [off-site: {r.off_site_note}]"
    return line


class ReportService:
    def __init__(self, attendance: AttendanceRepository, *, limit: int = DEFAULT_REPORT_PREVIEW_LIMIT):
        self._attendance = attendance
        self._limit = int(limit)

    def export_preview(self, acting: StaffRecord) -> str:
        """Plain-text preview of every attendance row, capped at ``limit`` characters."""
        if not acting.is_admin:
            raise AuthorizationError("Only admins can export reports")

        body = "\n".join(format_row(r) for r in self._attendance.list_all())
        text = REPORT_HEADER + body
        if len(text) <= self._limit:
            return text
        # Header and marker count toward the cap.
        room = max(self._limit - len(REPORT_HEADER) - len(TRUNCATION_MARKER), 0)
        return REPORT_HEADER + body[:room] + TRUNCATION_MARKER
