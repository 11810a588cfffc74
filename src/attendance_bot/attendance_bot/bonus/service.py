from __future__ import annotations

from ..common.keyed_lock import KeyedLock
from ..common.validators import require_int, require_year_month
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..staff.model import StaffRecord
from ..staff.repository import StaffRepository
from .model import BonusCommand, BonusRecord
from .repository import BonusRepository

COMMAND = "AddBonus"
USAGE = "Usage: AddBonus <name> <YYYY-MM> <amount> <note>"


def is_bonus_command(text: str) -> bool:
    parts = (text or "").split()
    return bool(parts) and parts[0] == COMMAND


def parse_bonus_command(text: str) -> BonusCommand:
    parts = (text or "").split()
    if len(parts) < 5 or parts[0] != COMMAND:
        raise ValidationError(USAGE)
    return BonusCommand(
        display_name=parts[1],
        year_month=require_year_month(parts[2]),
        amount=require_int(parts[3], "Amount"),
        note=" ".join(parts[4:]),
    )


class BonusService:
    def __init__(self, bonuses: BonusRepository, staff: StaffRepository, locks: KeyedLock):
        self._bonuses = bonuses
        self._staff = staff
        self._locks = locks

    def add_bonus(self, acting: StaffRecord, command: BonusCommand) -> BonusRecord:
        if not acting.is_admin:
            raise AuthorizationError("Only admins can add bonuses")

        matches = self._staff.find_by_display_name(command.display_name)
        if not matches:
            raise NotFoundError(f"No staff member named {command.display_name}.")
        if len(matches) > 1:
            raise ValidationError(f"More than one staff member is named {command.display_name}.")
        target = matches[0]

        with self._locks.hold((target.user_id, command.year_month)):
            if self._bonuses.get_for_user_and_month(target.user_id, command.year_month):
                raise ConflictError(f"A bonus for {command.year_month} is already recorded; duplicates are not allowed.")
            row_key = self._bonuses.create(
                user_id=target.user_id,
                display_name=target.display_name,
                title=target.title,
                year_month=command.year_month,
                amount=command.amount,
                note=command.note,
            )

        return BonusRecord(
            row_key=row_key,
            user_id=target.user_id,
            display_name=target.display_name,
            year_month=command.year_month,
            amount=command.amount,
            note=command.note,
        )
