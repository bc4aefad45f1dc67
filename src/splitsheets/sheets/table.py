from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from splitsheets.models import CellUpdate


class Table(Protocol):
    def get_values(self) -> list[list[object]]: ...

    def update_cells(self, updates: Sequence[CellUpdate]) -> None: ...


class InMemoryTable:
    """Row-major table with 1-based addressing, header in row 1."""

    def __init__(self, rows: Iterable[Sequence[object]] = ()) -> None:
        self.rows: list[list[object]] = [list(row) for row in rows]

    def get_values(self) -> list[list[object]]:
        return [list(row) for row in self.rows]

    def update_cells(self, updates: Sequence[CellUpdate]) -> None:
        for update in updates:
            self.set(update.row, update.col, update.value)

    def get(self, row: int, col: int) -> object:
        if row - 1 < len(self.rows) and col - 1 < len(self.rows[row - 1]):
            return self.rows[row - 1][col - 1]
        return None

    def set(self, row: int, col: int, value: object) -> None:
        while len(self.rows) < row:
            self.rows.append([])
        values = self.rows[row - 1]
        while len(values) < col:
            values.append("")
        values[col - 1] = value
