from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from ..approvals.service import ApprovalService, match_action, parse_approval_command
from ..attendance.service import AttendanceService
from ..bonus.service import BonusService, is_bonus_command, parse_bonus_command
from ..common.notifications import Push
from ..core.enums import ClockAction
from ..core.exceptions import AuthorizationError, DomainError
from ..holidays.service import CalendarService, is_disaster_command, parse_disaster_command
from ..intents.classifier import IntentClassifier
from ..intents.model import (
    AddBonusIntent,
    ClarificationIntent,
    ClockIntent,
    Intent,
    LeaveRequestIntent,
    OffSiteIntent,
    OtherIntent,
    SalaryQueryIntent,
)
from ..leave.service import LeaveService
from ..payroll.service import PayrollService, format_payslip
from ..reports.service import ReportService
from ..staff.model import StaffRecord
from ..staff.repository import StaffRepository
from ..staff.service import RegistrationService
from . import messages

logger = logging.getLogger(__name__)

REGISTER_RE = re.compile(r"^register\b\s*(?P<name>.*)$", re.IGNORECASE | re.DOTALL)
HELP_RE = re.compile(r"^(hi|hello|help|\?)$", re.IGNORECASE)
LEAVE_HISTORY_RE = re.compile(r"^(my leave|leave history|leave records)$", re.IGNORECASE)
EXPORT_RE = re.compile(r"^export\b", re.IGNORECASE)
SALARY_RE = re.compile(r"\b(salary|payslip|wages?)\b", re.IGNORECASE)


@dataclass(frozen=True)
class InboundEvent:
    user_id: str
    text: str
    reply_token: Optional[str] = None


@dataclass(frozen=True)
class RouterResult:
    reply: Optional[str] = None
    pushes: list[Push] = field(default_factory=list)

    @classmethod
    def silent(cls) -> "RouterResult":
        return cls()


class IntentRouter:
    """Resolves the acting user and dispatches one message to exactly one workflow.

    Literal commands (fixed syntax) are checked before the classifier is asked.
    """

    def __init__(
        self,
        *,
        staff: StaffRepository,
        registration: RegistrationService,
        attendance: AttendanceService,
        leave: LeaveService,
        approvals: ApprovalService,
        bonuses: BonusService,
        payroll: PayrollService,
        reports: ReportService,
        calendar: CalendarService,
        classifier: IntentClassifier,
        clock: Callable[[], datetime],
    ):
        self._staff = staff
        self._registration = registration
        self._attendance = attendance
        self._leave = leave
        self._approvals = approvals
        self._bonuses = bonuses
        self._payroll = payroll
        self._reports = reports
        self._calendar = calendar
        self._classifier = classifier
        self._clock = clock

    def handle(self, event: InboundEvent) -> RouterResult:
        text = (event.text or "").strip()
        if not text:
            return RouterResult.silent()

        try:
            m = REGISTER_RE.match(text)
            if m:
                return self._register(event.user_id, m.group("name"))
            if HELP_RE.match(text):
                return RouterResult(reply=messages.HELP_TEXT)

            staff = self._staff.get_by_user_id(event.user_id)
            if staff is None:
                return RouterResult(reply=messages.REGISTER_FIRST)

            literal = self._literal_command(staff, text)
            if literal is not None:
                return literal
            return self._dispatch_intent(staff, text, self._classify(text))
        except AuthorizationError:
            return RouterResult.silent()
        except DomainError as e:
            return RouterResult(reply=str(e))

    def _classify(self, text: str) -> Intent:
        try:
            return self._classifier.classify(text)
        except Exception:
            logger.exception("Classifier raised; treating message as no actionable intent")
            return OtherIntent(raw_text=text)

    # Literal commands
    def _register(self, user_id: str, name: str) -> RouterResult:
        result = self._registration.register(user_id=user_id, display_name=name)
        if not result.created:
            return RouterResult(reply=messages.ALREADY_REGISTERED)
        return RouterResult(reply=messages.REGISTERED, pushes=list(result.notifications))

    def _literal_command(self, staff: StaffRecord, text: str) -> Optional[RouterResult]:
        if staff.is_admin:
            if match_action(text):
                return self._decide(staff, text)
            if is_bonus_command(text):
                return self._add_bonus(staff, text)
            if is_disaster_command(text):
                return self._add_disaster_day(text)
            if EXPORT_RE.match(text):
                return RouterResult(reply=self._reports.export_preview(staff))

        if LEAVE_HISTORY_RE.match(text):
            return self._leave_history(staff)
        return None

    def _decide(self, staff: StaffRecord, text: str) -> RouterResult:
        outcome = self._approvals.decide(staff, parse_approval_command(text))
        reply = f"Recorded: {outcome.display_name} {outcome.day.isoformat()} -> {outcome.status.value}."
        return RouterResult(reply=reply, pushes=[outcome.notification])

    def _add_bonus(self, staff: StaffRecord, text: str) -> RouterResult:
        bonus = self._bonuses.add_bonus(staff, parse_bonus_command(text))
        return RouterResult(reply=f"Bonus recorded: {bonus.display_name} {bonus.year_month} {bonus.amount}.")

    def _add_disaster_day(self, text: str) -> RouterResult:
        day, note = parse_disaster_command(text)
        if not self._calendar.add_disaster_day(day, note):
            return RouterResult(reply=f"{day.isoformat()} is already a disaster-leave day.")
        return RouterResult(reply=f"Disaster-leave day recorded: {day.isoformat()} ({note}).")

    def _leave_history(self, staff: StaffRecord) -> RouterResult:
        entries = self._leave.list_leave(staff.user_id)
        if not entries:
            return RouterResult(reply=messages.NO_LEAVE_RECORDS)
        lines = [
            f"{e.work_date.isoformat()}: {e.leave_type or '-'}, status: {e.status.value if e.status else '-'}"
            for e in entries
        ]
        return RouterResult(reply="Your leave records:\n" + "\n".join(lines))

    def _salary(self, staff: StaffRecord, text: str) -> RouterResult:
        payslip = self._payroll.payslip_for_text(staff, text=text, today=self._clock().date())
        return RouterResult(reply=format_payslip(payslip))

    # Classified intents
    def _dispatch_intent(self, staff: StaffRecord, text: str, intent: Intent) -> RouterResult:
        if isinstance(intent, ClarificationIntent):
            return RouterResult(reply=intent.question)
        if isinstance(intent, ClockIntent):
            return self._clock_action(staff)
        if isinstance(intent, OffSiteIntent):
            note = self._attendance.off_site_visit(staff, note=intent.description or text, now=self._clock())
            return RouterResult(reply=f"Off-site visit recorded: {note}")
        if isinstance(intent, LeaveRequestIntent):
            return self._request_leave(staff, text, intent)
        if isinstance(intent, SalaryQueryIntent):
            return self._salary(staff, text)
        if isinstance(intent, AddBonusIntent):
            if not staff.is_admin:
                return RouterResult.silent()
            return self._add_bonus(staff, text)
        if isinstance(intent, OtherIntent):
            # Salary keyword only applies once no workflow intent was recognised.
            if SALARY_RE.search(text):
                return self._salary(staff, text)
            return RouterResult.silent()
        raise TypeError(f"Unhandled intent: {intent!r}")

    def _clock_action(self, staff: StaffRecord) -> RouterResult:
        result = self._attendance.clock(staff, now=self._clock())
        stamp = result.at.strftime("%Y-%m-%d %H:%M:%S")
        if result.action == ClockAction.CLOCK_IN:
            return RouterResult(reply=f"Clock-in recorded, have a good day: {stamp}")
        return RouterResult(reply=f"Clock-out recorded, see you tomorrow: {stamp}")

    def _request_leave(self, staff: StaffRecord, text: str, intent: LeaveRequestIntent) -> RouterResult:
        submission = self._leave.request_leave(
            staff,
            text=text,
            dates=intent.dates,
            leave_type=intent.leave_type,
            reason=intent.description,
        )
        dates = ", ".join(d.isoformat() for d in submission.registered)
        reply = f"Leave registered for {dates}; pending approval."
        if submission.skipped:
            skipped = ", ".join(d.isoformat() for d in submission.skipped)
            reply += f"\nSkipped non-working days: {skipped}"
        return RouterResult(reply=reply, pushes=list(submission.notifications))
