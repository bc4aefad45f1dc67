from splitsheets.sheets.table import InMemoryTable, Table

__all__ = ["InMemoryTable", "Table"]
