"""Header row initialization for the quotations sheet."""

import logging

from .config import HEADERS, SHEET_NAME
from .workbook import WorkbookGateway

logger = logging.getLogger(__name__)

HEADER_ROW = 1
FIRST_COLUMN = 1


def apply_headers(
    workbook_id: str, workbooks: WorkbookGateway, sheet_name: str = SHEET_NAME
) -> None:
    """Write the fixed header labels to row 1 of the sheet and bold them.

    Safe to call repeatedly: the same constants are always overwritten in
    place, whatever the row currently holds. Raises ``WorkbookNotFoundError``
    or ``SheetNotFoundError`` before anything is written.
    """
    sheet = workbooks.open(workbook_id).sheet(sheet_name)

    logger.debug(
        f"Writing {len(HEADERS)} header cells to {sheet_name!r} "
        f"row {HEADER_ROW}, columns {FIRST_COLUMN}-{FIRST_COLUMN + len(HEADERS) - 1}"
    )
    sheet.write_header(HEADER_ROW, FIRST_COLUMN, HEADERS)
    logger.info(f"Applied headers to {sheet_name!r} in workbook {workbook_id}")
