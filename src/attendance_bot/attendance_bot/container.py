from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Optional

from .approvals.service import ApprovalService
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .bonus.repository import BonusRepository
from .bonus.service import BonusService
from .common.keyed_lock import KeyedLock
from .core.settings import WorkRules
from .database.connection import DBConfig, DatabaseConnection
from .holidays.repository import HolidayRepository
from .holidays.service import CalendarService
from .holidays.source import DEFAULT_HOLIDAY_SOURCE_URL, HolidaySource, HttpHolidaySource
from .intents.classifier import GeminiIntentClassifier, IntentClassifier
from .leave.service import LeaveService
from .messaging.line_client import LineMessagingClient, Messenger
from .payroll.service import PayrollService
from .reports.service import ReportService
from .router.service import IntentRouter
from .staff.repository import StaffRepository
from .staff.service import RegistrationService
from .store.mysql_tabular_store import MySQLTabularStore
from .store.tabular import TabularStore


@dataclass(frozen=True)
class Container:
    rules: WorkRules
    store: TabularStore
    locks: KeyedLock
    messenger: Messenger
    channel_secret: Optional[str]
    clock: Callable[[], datetime]

    staff_repo: StaffRepository
    attendance_repo: AttendanceRepository
    bonus_repo: BonusRepository
    holiday_repo: HolidayRepository

    calendar_service: CalendarService
    registration_service: RegistrationService
    attendance_service: AttendanceService
    leave_service: LeaveService
    approval_service: ApprovalService
    bonus_service: BonusService
    payroll_service: PayrollService
    report_service: ReportService
    router: IntentRouter


def build_container(
    *,
    settings: Any,
    store: Optional[TabularStore] = None,
    classifier: Optional[IntentClassifier] = None,
    holiday_source: Optional[HolidaySource] = None,
    messenger: Optional[Messenger] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> Container:
    rules = WorkRules.from_settings(settings)

    if store is None:
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))
        store = MySQLTabularStore(conn)
    if classifier is None:
        classifier = GeminiIntentClassifier(
            getattr(settings, "GEMINI_API_KEY", None),
            model=getattr(settings, "GEMINI_MODEL", "gemini-1.5-pro"),
        )
    if holiday_source is None:
        holiday_source = HttpHolidaySource(getattr(settings, "HOLIDAY_SOURCE_URL", DEFAULT_HOLIDAY_SOURCE_URL))
    if messenger is None:
        messenger = LineMessagingClient(getattr(settings, "LINE_CHANNEL_ACCESS_TOKEN", None))

    locks = KeyedLock()

    staff_repo = StaffRepository(store)
    attendance_repo = AttendanceRepository(store)
    bonus_repo = BonusRepository(store)
    holiday_repo = HolidayRepository(store)

    calendar_service = CalendarService(
        holiday_repo,
        holiday_source,
        locks,
        refresh_interval=timedelta(hours=rules.holiday_refresh_hours),
    )
    registration_service = RegistrationService(staff_repo, locks)
    attendance_service = AttendanceService(attendance_repo, calendar_service, locks)
    leave_service = LeaveService(
        attendance_repo,
        staff_repo,
        calendar_service,
        locks,
        max_range_days=rules.max_leave_range_days,
    )
    approval_service = ApprovalService(attendance_repo, staff_repo, locks)
    bonus_service = BonusService(bonus_repo, staff_repo, locks)
    payroll_service = PayrollService(attendance_repo, bonus_repo, rules)
    report_service = ReportService(attendance_repo, limit=rules.report_preview_limit)

    router = IntentRouter(
        staff=staff_repo,
        registration=registration_service,
        attendance=attendance_service,
        leave=leave_service,
        approvals=approval_service,
        bonuses=bonus_service,
        payroll=payroll_service,
        reports=report_service,
        calendar=calendar_service,
        classifier=classifier,
        clock=clock or rules.now,
    )

    return Container(
        rules=rules,
        store=store,
        locks=locks,
        messenger=messenger,
        channel_secret=getattr(settings, "LINE_CHANNEL_SECRET", None),
        clock=clock or rules.now,
        staff_repo=staff_repo,
        attendance_repo=attendance_repo,
        bonus_repo=bonus_repo,
        holiday_repo=holiday_repo,
        calendar_service=calendar_service,
        registration_service=registration_service,
        attendance_service=attendance_service,
        leave_service=leave_service,
        approval_service=approval_service,
        bonus_service=bonus_service,
        payroll_service=payroll_service,
        report_service=report_service,
        router=router,
    )
