"""Workbook access handles.

Header initialization talks to spreadsheets only through these protocols, so
the Google Sheets client and the in-memory fake are interchangeable.
Coordinates are 1-indexed, matching spreadsheet row and column numbers.
"""

from collections.abc import Sequence
from typing import Protocol

from .config import SheetNotFoundError, WorkbookNotFoundError


class Sheet(Protocol):
    title: str

    def write_header(self, row: int, column: int, values: Sequence[str]) -> None: ...


class Workbook(Protocol):
    workbook_id: str

    def sheet(self, name: str) -> Sheet: ...


class WorkbookGateway(Protocol):
    def open(self, workbook_id: str) -> Workbook: ...


class InMemorySheet:
    """Sheet backed by dictionaries of cell values and bold flags."""

    def __init__(self, title: str):
        self.title = title
        self.values: dict[tuple[int, int], str] = {}
        self.bold: set[tuple[int, int]] = set()

    def write_row(self, row: int, column: int, values: Sequence[str]) -> None:
        for offset, value in enumerate(values):
            self.values[(row, column + offset)] = value

    def set_bold(self, row: int, column: int, width: int) -> None:
        self.bold.update((row, column + offset) for offset in range(width))

    def write_header(self, row: int, column: int, values: Sequence[str]) -> None:
        """Write values and bold them as one step."""
        self.write_row(row, column, values)
        self.set_bold(row, column, len(values))

    def cell(self, row: int, column: int) -> str | None:
        return self.values.get((row, column))

    def row_values(self, row: int) -> list[str | None]:
        """Return row values up to the last filled column."""
        columns = [c for r, c in self.values if r == row]
        if not columns:
            return []
        return [self.cell(row, c) for c in range(1, max(columns) + 1)]

    def snapshot(self) -> tuple[dict[tuple[int, int], str], frozenset]:
        return dict(self.values), frozenset(self.bold)


class InMemoryWorkbook:
    def __init__(self, workbook_id: str, sheet_names: Sequence[str] = ()):
        self.workbook_id = workbook_id
        self.sheets = {name: InMemorySheet(name) for name in sheet_names}

    def sheet(self, name: str) -> InMemorySheet:
        try:
            return self.sheets[name]
        except KeyError:
            raise SheetNotFoundError(name) from None


class InMemoryWorkbooks:
    """Gateway over a fixed set of in-memory workbooks."""

    def __init__(self, workbooks: Sequence[InMemoryWorkbook] = ()):
        self.workbooks = {wb.workbook_id: wb for wb in workbooks}

    def add(self, workbook_id: str, *sheet_names: str) -> InMemoryWorkbook:
        workbook = InMemoryWorkbook(workbook_id, sheet_names)
        self.workbooks[workbook_id] = workbook
        return workbook

    def open(self, workbook_id: str) -> InMemoryWorkbook:
        try:
            return self.workbooks[workbook_id]
        except KeyError:
            raise WorkbookNotFoundError(workbook_id) from None
