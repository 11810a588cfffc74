from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Protocol, Sequence


@dataclass(frozen=True)
class TableRow:
    """One stored row: its stable key plus the cell values by column name."""

    key: int
    values: Mapping[str, Optional[str]]

    def get(self, column: str) -> Optional[str]:
        value = self.values.get(column)
        if value is None:
            return None
        return str(value)


@dataclass(frozen=True)
class TableSnapshot:
    header: Sequence[str]
    rows: Sequence[TableRow]


class TabularStore(Protocol):
    """Row-oriented store addressed by table and column name.

    Note (DIP): repositories depend on this interface, not on the physical
    layout (MySQL tables, a spreadsheet, memory).
    """

    def get_all(self, table: str) -> TableSnapshot:
        raise NotImplementedError

    def append(self, table: str, values: Mapping[str, Optional[str]]) -> int:
        raise NotImplementedError

    def update_cell(self, table: str, row_key: int, column: str, value: Optional[str]) -> bool:
        raise NotImplementedError
