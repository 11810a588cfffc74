from __future__ import annotations

import threading
import time

import pytest

from src.attendance_bot.attendance_bot.bonus.service import parse_bonus_command
from src.attendance_bot.attendance_bot.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.attendance_bot.attendance_bot.store import schema


@pytest.fixture
def admin(container, add_staff):
    add_staff("ADM", "Boss", is_admin=True)
    add_staff("U1", "Alice", title="Designer")
    return container.staff_repo.get_by_user_id("ADM")


def test_parse_bonus_command():
    cmd = parse_bonus_command("AddBonus Alice 2025-06 5000 project delivery")
    assert (cmd.display_name, cmd.year_month, cmd.amount, cmd.note) == ("Alice", "2025-06", 5000, "project delivery")

    for bad in ("AddBonus Alice 2025-06 5000", "AddBonus Alice 2025-6 5000 x", "AddBonus Alice 2025-06 lots x"):
        with pytest.raises(ValidationError):
            parse_bonus_command(bad)


def test_add_bonus_writes_one_row(container, admin, store):
    record = container.bonus_service.add_bonus(admin, parse_bonus_command("AddBonus Alice 2025-06 5000 delivery"))

    assert record.user_id == "U1"
    rows = store.rows(schema.BONUS)
    assert len(rows) == 1
    assert rows[0]["title"] == "Designer"
    assert rows[0]["amount"] == "5000"


def test_second_bonus_same_month_is_rejected(container, admin, store):
    svc = container.bonus_service
    svc.add_bonus(admin, parse_bonus_command("AddBonus Alice 2025-06 5000 delivery"))

    with pytest.raises(ConflictError):
        svc.add_bonus(admin, parse_bonus_command("AddBonus Alice 2025-06 100 again"))

    svc.add_bonus(admin, parse_bonus_command("AddBonus Alice 2025-07 100 next month"))
    assert len(store.rows(schema.BONUS)) == 2


def test_unknown_name_is_not_found(container, admin):
    with pytest.raises(NotFoundError):
        container.bonus_service.add_bonus(admin, parse_bonus_command("AddBonus Carol 2025-06 5000 x"))


def test_non_admin_cannot_add_bonus(container, admin):
    alice = container.staff_repo.get_by_user_id("U1")
    with pytest.raises(AuthorizationError):
        container.bonus_service.add_bonus(alice, parse_bonus_command("AddBonus Alice 2025-06 5000 x"))


def test_concurrent_bonus_for_same_month_writes_one_row(container, admin, store, monkeypatch):
    original_get_all = store.get_all

    def slow_get_all(table):
        snapshot = original_get_all(table)
        time.sleep(0.05)
        return snapshot

    monkeypatch.setattr(store, "get_all", slow_get_all)
    start = threading.Barrier(3)
    recorded, conflicts = [], []

    def add(note):
        start.wait()
        try:
            command = parse_bonus_command(f"AddBonus Alice 2025-06 5000 {note}")
            recorded.append(container.bonus_service.add_bonus(admin, command))
        except ConflictError as exc:
            conflicts.append(exc)

    threads = [threading.Thread(target=add, args=(n,)) for n in ("a", "b", "c")]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(recorded) == 1
    assert len(conflicts) == 2
    assert len(store.rows(schema.BONUS)) == 1
