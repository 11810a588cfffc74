from __future__ import annotations

from dataclasses import dataclass, field

from ..common.keyed_lock import KeyedLock
from ..common.notifications import Push
from ..common.validators import require_non_empty
from .model import StaffRecord
from .repository import StaffRepository


@dataclass(frozen=True)
class RegistrationResult:
    staff: StaffRecord
    created: bool
    notifications: list[Push] = field(default_factory=list)


class RegistrationService:
    """Use case: self-registration of a messaging user as staff."""

    def __init__(self, staff: StaffRepository, locks: KeyedLock):
        self._staff = staff
        self._locks = locks

    def register(self, *, user_id: str, display_name: str) -> RegistrationResult:
        name = require_non_empty(display_name, "Name")
        if any(ch.isspace() for ch in name):
            # Admin commands split on whitespace, so names must be one token.
            name = "".join(name.split())

        with self._locks.hold(("staff", user_id)):
            existing = self._staff.get_by_user_id(user_id)
            if existing:
                return RegistrationResult(staff=existing, created=False)
            created = self._staff.create(user_id=user_id, display_name=name)

        notifications = [
            Push(
                user_id=admin.user_id,
                text=f"[New staff] {created.display_name} registered. "
                "Please set their employee type and salary.",
            )
            for admin in self._staff.list_admins()
            if admin.user_id != user_id
        ]
        return RegistrationResult(staff=created, created=True, notifications=notifications)
