from __future__ import annotations

from typing import Optional, Sequence

from ..store import schema
from ..store.tabular import TableRow, TabularStore
from .model import BonusRecord


def _parse_amount(value: Optional[str]) -> int:
    v = (value or "").replace(",", "").strip()
    try:
        return int(v)
    except ValueError:
        return 0


class BonusRepository:
    def __init__(self, store: TabularStore):
        self._store = store

    @staticmethod
    def _to_record(row: TableRow) -> BonusRecord:
        return BonusRecord(
            row_key=row.key,
            user_id=(row.get("user_id") or "").strip(),
            display_name=row.get("display_name") or "",
            year_month=(row.get("year_month") or "").strip(),
            amount=_parse_amount(row.get("amount")),
            note=row.get("note") or "",
        )

    def list_all(self) -> Sequence[BonusRecord]:
        return [self._to_record(r) for r in self._store.get_all(schema.BONUS).rows]

    def get_for_user_and_month(self, user_id: str, year_month: str) -> Optional[BonusRecord]:
        for b in self.list_all():
            if b.user_id == user_id and b.year_month == year_month:
                return b
        return None

    def create(
        self,
        *,
        user_id: str,
        display_name: str,
        title: str,
        year_month: str,
        amount: int,
        note: str,
    ) -> int:
        return self._store.append(
            schema.BONUS,
            {
                "user_id": user_id,
                "display_name": display_name,
                "title": title,
                "year_month": year_month,
                "amount": str(int(amount)),
                "note": note,
            },
        )
