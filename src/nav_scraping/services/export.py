from __future__ import annotations

import io
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

import pandas as pd
from openpyxl.utils import get_column_letter

from ..extractors.contracts import FUND_RECORD_SCHEMA
from ..models import FundRecord

SHEET_NAME = "NAV Data"
EXCEL_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def export_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"nav_data_{today:%Y%m%d}.xlsx"


def _cell_value(value):
    if isinstance(value, Decimal):
        return float(value)
    return value


def records_to_dataframe(records: Iterable[FundRecord]) -> pd.DataFrame:
    columns = FUND_RECORD_SCHEMA.columns
    rows = [
        {column.label: _cell_value(getattr(record, column.name)) for column in columns}
        for record in records
    ]
    return pd.DataFrame(rows, columns=[column.label for column in columns])


def _fit_columns(worksheet) -> None:
    for index, column in enumerate(worksheet.iter_cols(), start=1):
        width = max((len(str(cell.value)) for cell in column if cell.value is not None), default=0)
        worksheet.column_dimensions[get_column_letter(index)].width = width + 2


def export_to_excel(records: Iterable[FundRecord]) -> bytes:
    df = records_to_dataframe(records)
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=SHEET_NAME, index=False)
        _fit_columns(writer.sheets[SHEET_NAME])
    return buffer.getvalue()
