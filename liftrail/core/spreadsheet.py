"""
Spreadsheet input reader for Input Reconciliation.
"""

import logging
from pathlib import Path
from typing import Any, BinaryIO, List, Optional, Union

import pandas as pd

logger = logging.getLogger(__name__)

EXCEL_EXTENSIONS = {".xlsx", ".xls"}
CSV_EXTENSIONS = {".csv"}


def read_input_rows(
    source: Union[str, Path, BinaryIO],
    filename: Optional[str] = None,
) -> List[List[Any]]:
    """Read the first sheet of a workbook (or a CSV file) as raw rows.

    No header row is assumed. Empty cells are returned as None.

    Args:
        source: File path or binary file-like object (e.g. an upload)
        filename: Name used to detect the format when source is a buffer

    Returns:
        List of rows, each a list of cell values

    Raises:
        ValueError: If the file extension is not supported
    """
    name = filename or (str(source) if isinstance(source, (str, Path)) else "")
    suffix = Path(name).suffix.lower()

    if suffix in EXCEL_EXTENSIONS:
        df = pd.read_excel(source, sheet_name=0, header=None)
    elif suffix in CSV_EXTENSIONS:
        df = pd.read_csv(source, header=None)
    else:
        raise ValueError(
            f"Unsupported input file '{name}'. Expected one of: "
            f"{', '.join(sorted(EXCEL_EXTENSIONS | CSV_EXTENSIONS))}"
        )

    df = df.astype(object).where(pd.notna(df), None)
    rows = df.values.tolist()
    logger.debug(f"Read {len(rows)} rows from {name}")
    return rows
