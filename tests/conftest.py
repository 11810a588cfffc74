from __future__ import annotations

import threading
from datetime import datetime
from types import SimpleNamespace
from typing import Mapping, Optional

import pytest

from src.attendance_bot.attendance_bot.container import build_container
from src.attendance_bot.attendance_bot.intents.model import OtherIntent
from src.attendance_bot.attendance_bot.store import schema
from src.attendance_bot.attendance_bot.store.tabular import TableRow, TableSnapshot


class InMemoryTabularStore:
    """Same contract as the MySQL store: unknown tables/columns raise KeyError."""

    def __init__(self):
        self._guard = threading.Lock()
        self._next_key = 1
        self._rows: dict[str, list[dict]] = {t: [] for t in schema.TABLES}

    def get_all(self, table: str) -> TableSnapshot:
        header = schema.columns_for(table)
        return TableSnapshot(
            header=header,
            rows=[TableRow(key=r["_key"], values={c: r.get(c) for c in header}) for r in self._rows[table]],
        )

    def append(self, table: str, values: Mapping[str, Optional[str]]) -> int:
        columns = schema.columns_for(table)
        unknown = set(values) - set(columns)
        if unknown:
            raise KeyError(f"Unknown columns {sorted(unknown)!r} for table {table!r}")
        with self._guard:
            key = self._next_key
            self._next_key += 1
            self._rows[table].append({"_key": key, **values})
        return key

    def update_cell(self, table: str, row_key: int, column: str, value: Optional[str]) -> bool:
        if column not in schema.columns_for(table):
            raise KeyError(f"Unknown column {column!r} for table {table!r}")
        for row in self._rows[table]:
            if row["_key"] == row_key:
                row[column] = value
                return True
        return False

    def rows(self, table: str) -> list[dict]:
        return [dict(r) for r in self._rows[table]]


class FakeClassifier:
    def __init__(self):
        self.intents: dict[str, object] = {}
        self.default = None
        self.calls: list[str] = []
        self.error: Optional[Exception] = None

    def classify(self, text: str):
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        if text in self.intents:
            return self.intents[text]
        return self.default or OtherIntent(raw_text=text)


class FakeHolidaySource:
    def __init__(self):
        self.years: dict[int, list[dict]] = {}
        self.calls: list[int] = []
        self.fail = False

    def fetch_year(self, year: int) -> list[dict]:
        self.calls.append(year)
        if self.fail:
            raise RuntimeError("holiday source down")
        return list(self.years.get(year, []))


class FakeMessenger:
    def __init__(self):
        self.replies: list[tuple[str, str]] = []
        self.pushes: list[tuple[str, str]] = []

    def reply(self, reply_token: str, text: str) -> None:
        self.replies.append((reply_token, text))

    def push(self, user_id: str, text: str) -> None:
        self.pushes.append((user_id, text))


class FixedClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def _add_staff(store, user_id: str, display_name: str, **fields) -> int:
    values = {"user_id": user_id, "display_name": display_name}
    for key, value in fields.items():
        if key == "is_admin":
            value = schema.encode_bool(bool(value))
        values[key] = None if value is None else str(value)
    return store.append(schema.STAFF, values)


@pytest.fixture
def store():
    return InMemoryTabularStore()


@pytest.fixture
def add_staff(store):
    def _add(user_id: str, display_name: str, **fields) -> int:
        return _add_staff(store, user_id, display_name, **fields)

    return _add


@pytest.fixture
def classifier():
    return FakeClassifier()


@pytest.fixture
def holiday_source():
    return FakeHolidaySource()


@pytest.fixture
def messenger():
    return FakeMessenger()


@pytest.fixture
def clock():
    # Tuesday
    return FixedClock(datetime(2025, 7, 1, 9, 0, 0))


@pytest.fixture
def settings():
    return SimpleNamespace(
        LINE_CHANNEL_SECRET="test-channel-secret",
        TIMEZONE="Asia/Taipei",
    )


@pytest.fixture
def container(settings, store, classifier, holiday_source, messenger, clock):
    return build_container(
        settings=settings,
        store=store,
        classifier=classifier,
        holiday_source=holiday_source,
        messenger=messenger,
        clock=clock,
    )
