"""Split Sheets: shared-expense ledger recalculation."""
