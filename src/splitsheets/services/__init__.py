from splitsheets.services.ledger import Ledger, recalculate_snapshot
from splitsheets.services.rows import NoParticipantsError, build_snapshot
from splitsheets.services.sheet import handle_edit, recalculate

__all__ = [
    "Ledger",
    "NoParticipantsError",
    "build_snapshot",
    "handle_edit",
    "recalculate",
    "recalculate_snapshot",
]
