from decimal import Decimal

import pytest
from structlog.testing import capture_logs

from splitsheets.models import CellUpdate, SplitMethod
from splitsheets.services.rows import NoParticipantsError
from splitsheets.services.sheet import apply_split_defaults, handle_edit, recalculate, resolve_remainder
from splitsheets.sheets.table import InMemoryTable


HEADER = ["Description", "Who Paid", "Amount", "How to split", "Alice", "Bob"]


class RecordingTable(InMemoryTable):
    def __init__(self, rows) -> None:
        super().__init__(rows)
        self.writes: list[list[CellUpdate]] = []

    def update_cells(self, updates) -> None:
        self.writes.append(list(updates))
        super().update_cells(updates)


def test_recalculate_writes_breakdown_and_summary():
    table = InMemoryTable([HEADER, ["Rent", "Alice", 2000, "Equally", True, True]])

    result = recalculate(table)

    assert table.get(1, 7) == "Breakdown"
    assert table.get(2, 7) == "Bob Pays: $1,000.00"
    assert table.rows[2] == ["Due: 1st", "Summary", "$2,000.00", "", "", "", "Bob owes $1,000.00"]
    assert result.summary_row == 3


def test_recalculate_is_idempotent():
    table = InMemoryTable(
        [
            HEADER + ["Breakdown"],
            ["Rent", "Alice", 2000, "Equally", True, True],
            ["Groceries", "Bob", 150, "Variably", 0.4, 0.6],
        ]
    )

    recalculate(table, due_label="Due: 15th")
    first = table.get_values()
    recalculate(table, due_label="Due: 15th")

    assert table.get_values() == first
    assert first[3] == ["Due: 15th", "Summary", "$2,150.00", "", "", "", "Bob owes $940.00"]


def test_recalculate_overwrites_stale_summary_in_place():
    table = InMemoryTable(
        [
            HEADER + ["Breakdown"],
            ["Rent", "Alice", 2000, "Equally", True, True],
            ["Due: 1st", "Summary", "$9.99", True, True, True, "old"],
        ]
    )

    recalculate(table)

    assert table.rows[2] == ["Due: 1st", "Summary", "$2,000.00", "", "", "", "Bob owes $1,000.00"]


def test_recalculate_without_valid_rows_writes_summary_below_header():
    table = InMemoryTable([HEADER + ["Breakdown"]])

    recalculate(table)

    assert table.rows[1] == ["Due: 1st", "Summary", "$0.00", "", "", "", ""]


def test_recalculate_without_participants_writes_nothing():
    table = RecordingTable([["Description", "Who Paid", "Amount", "How to split"], ["Rent", "Alice", 100]])

    with pytest.raises(NoParticipantsError):
        recalculate(table)

    assert table.writes == []


def test_dinner_fixed_remainder_then_recompute():
    table = InMemoryTable(
        [
            HEADER + ["Breakdown"],
            ["Dinner", "Alice", 75, "Fixed", 25, ""],
        ]
    )

    result = handle_edit(table, row=2, col=5, value=25)

    assert table.get(2, 6) == Decimal("50")
    assert table.get(2, 7) == "Bob Pays: $50.00"
    assert result is not None
    assert result.summary_text == "Bob owes $50.00"


def test_dinner_paid_by_bob():
    table = InMemoryTable(
        [
            HEADER + ["Breakdown"],
            ["Dinner", "Bob", 75, "Fixed", 25, ""],
        ]
    )

    handle_edit(table, row=2, col=5, value=25)

    assert table.get(2, 7) == "Alice Pays: $25.00"


def test_resolve_remainder_writes_fraction_for_percentages():
    table = InMemoryTable(
        [
            HEADER + ["Breakdown"],
            ["Groceries", "Alice", 150, "Variably", "60%", 0.5],
        ]
    )

    fill = resolve_remainder(table, row=2, col=5, value="60%")

    assert fill is not None
    assert table.get(2, 6) == Decimal("0.4")


def test_resolve_remainder_skips_equal_rows():
    table = RecordingTable([HEADER, ["Rent", "Alice", 2000, "Equally", True, False]])

    assert resolve_remainder(table, row=2, col=5, value=True) is None
    assert table.writes == []


@pytest.mark.parametrize(
    "method, expected",
    [
        (SplitMethod.PERCENTAGE, Decimal("0.5")),
        (SplitMethod.FIXED, ""),
        (SplitMethod.EQUAL, True),
    ],
)
def test_apply_split_defaults(method, expected):
    table = InMemoryTable([HEADER + ["Breakdown"], ["Rent", "Alice", 2000, method.value, "x", "y"]])

    apply_split_defaults(table, 2, method)

    assert table.get(2, 5) == expected
    assert table.get(2, 6) == expected


def test_handle_edit_split_method_does_not_recalculate():
    table = RecordingTable([HEADER + ["Breakdown"], ["Rent", "Alice", 2000, "Fixed", "", ""]])

    result = handle_edit(table, row=2, col=4, value="Fixed")

    assert result is None
    assert len(table.writes) == 1
    assert table.get(3, 2) is None


def test_handle_edit_amount_recalculates():
    table = InMemoryTable([HEADER + ["Breakdown"], ["Rent", "Alice", 1500, "Equally", True, True]])

    result = handle_edit(table, row=2, col=3, value=1500)

    assert result is not None
    assert table.get(2, 7) == "Bob Pays: $750.00"
    assert table.get(3, 3) == "$1,500.00"


def test_recalculate_logs_write_back():
    table = InMemoryTable([HEADER + ["Breakdown"], ["Rent", "Alice", 2000, "Equally", True, True]])

    with capture_logs() as logs:
        recalculate(table)

    events = [entry["event"] for entry in logs]
    assert events == ["sheet.write_back", "ledger.recalculated"]
    assert logs[0]["cells"] == 8
