"""
Spreadsheet import for bulk roster setup (CSV or Excel workbooks).

Expected columns (header case and spacing are ignored):
    name | handicap | charity
or, with split names:
    first_name | last_name | handicap | charity
"""

from __future__ import annotations

import re
import zipfile
from pathlib import Path
from typing import IO, List, Union

import pandas as pd

from .errors import ImportFormatError
from .models import RawPlayerRow

REQUIRED_NAME_COLUMNS = "name (or first_name and last_name)"
EXCEL_SUFFIXES = (".xlsx", ".xls")


def normalize_header(header: object) -> str:
    return re.sub(r"\s+", "_", str(header or "").strip().lower())


def _cell(value: object) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    text = str(value).strip()
    # Spreadsheet exports often write whole numbers as 12.0
    if re.fullmatch(r"\d+\.0+", text):
        text = text.split(".", 1)[0]
    return text


def rows_from_frame(df: pd.DataFrame) -> List[RawPlayerRow]:
    df = df.rename(columns=normalize_header)
    has_name = "name" in df.columns
    has_split = "first_name" in df.columns and "last_name" in df.columns
    if not has_name and not has_split:
        raise ImportFormatError([REQUIRED_NAME_COLUMNS])

    records = []
    for _, row in df.iterrows():
        values = {col: _cell(row.get(col, "")) for col in df.columns}
        if not any(values.values()):
            continue
        if has_name:
            name = values["name"]
        else:
            name = " ".join(part for part in (values["first_name"], values["last_name"]) if part)
        records.append(
            RawPlayerRow(
                name=name,
                handicap=values.get("handicap", ""),
                charity=values.get("charity", ""),
            )
        )
    return records


def read_players_csv(source: Union[str, Path, IO[str]]) -> List[RawPlayerRow]:
    """Read a CSV roster into unvalidated rows; blank lines are skipped."""
    try:
        df = pd.read_csv(source, dtype=str, keep_default_na=False, skip_blank_lines=True)
    except pd.errors.EmptyDataError as exc:
        raise ImportFormatError([REQUIRED_NAME_COLUMNS]) from exc
    return rows_from_frame(df)


def read_players_excel(source: Union[str, Path, IO[bytes]]) -> List[RawPlayerRow]:
    """Read the first sheet of an .xlsx/.xls workbook into unvalidated rows."""
    try:
        df = pd.read_excel(source, sheet_name=0, dtype=str, keep_default_na=False)
    except (ValueError, zipfile.BadZipFile) as exc:
        raise ImportFormatError([REQUIRED_NAME_COLUMNS]) from exc
    return rows_from_frame(df)


def read_players_file(path: Union[str, Path]) -> List[RawPlayerRow]:
    """Pick the reader from the file suffix: Excel workbooks or CSV."""
    if Path(path).suffix.lower() in EXCEL_SUFFIXES:
        return read_players_excel(path)
    return read_players_csv(path)
