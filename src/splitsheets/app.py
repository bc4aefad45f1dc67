from __future__ import annotations

import sys

from splitsheets.config import get_settings
from splitsheets.logging import configure_logging, get_logger
from splitsheets.services.rows import NoParticipantsError
from splitsheets.services.sheet import recalculate
from splitsheets.sheets.gsheets import SheetsConnectionError, open_worksheet


def main() -> int:
    settings = get_settings()
    configure_logging(settings.log_level)
    log = get_logger(__name__)

    try:
        table = open_worksheet(settings)
    except SheetsConnectionError as exc:
        log.error("sheets.connect_failed", error=str(exc))
        print(str(exc), file=sys.stderr)
        return 1

    log.info("recalculate.start")
    try:
        result = recalculate(table, due_label=settings.due_label)
    except NoParticipantsError as exc:
        log.error("ledger.no_participants", error=str(exc))
        print(str(exc), file=sys.stderr)
        return 1

    print(f"{result.total_text} total. {result.summary_text or 'Everyone is settled up.'}")
    log.info("recalculate.stop")
    return 0


if __name__ == "__main__":
    sys.exit(main())
