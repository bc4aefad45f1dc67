import pytest

from splitsheets import app
from splitsheets.config import Settings
from splitsheets.sheets.gsheets import SheetsConnectionError
from splitsheets.sheets.table import InMemoryTable


def _settings() -> Settings:
    return Settings(
        _env_file=None,
        GOOGLE_CREDENTIALS_PATH="/tmp/service-account.json",
        SPREADSHEET_ID="sheet-123",
    )


@pytest.fixture
def run_main(monkeypatch):
    def run(table=None, error=None):
        def fake_open(settings):
            if error is not None:
                raise error
            return table

        monkeypatch.setattr(app, "get_settings", _settings)
        monkeypatch.setattr(app, "configure_logging", lambda level: None)
        monkeypatch.setattr(app, "open_worksheet", fake_open)
        return app.main()

    return run


def test_main_prints_total_and_summary(run_main, capsys):
    table = InMemoryTable(
        [
            ["Description", "Who Paid", "Amount", "How to split", "Alice", "Bob"],
            ["Rent", "Alice", 2000, "Equally", True, True],
        ]
    )

    assert run_main(table) == 0

    out = capsys.readouterr().out
    assert "$2,000.00 total. Bob owes $1,000.00" in out.splitlines()
    assert table.get(3, 2) == "Summary"


def test_main_without_participants_reports_error(run_main, capsys):
    table = InMemoryTable([["Description", "Who Paid", "Amount", "How to split"], ["Rent", "Alice", 100]])

    assert run_main(table) == 1

    err = capsys.readouterr().err
    assert "No participant names found in the header row (column 5 onwards)" in err
    assert table.rows[1] == ["Rent", "Alice", 100]


def test_main_connection_error_reports_error(run_main, capsys):
    assert run_main(error=SheetsConnectionError("Spreadsheet not found: sheet-123")) == 1

    err = capsys.readouterr().err
    assert "Spreadsheet not found: sheet-123" in err
