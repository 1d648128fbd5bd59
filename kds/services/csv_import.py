"""
Menu CSV parsing

Columns are matched from a few common header spellings; rows without a
name are skipped and unparsable or negative prices become 0.
"""
import io
import math
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd
from pandas.errors import EmptyDataError, ParserError

from kds.exceptions import CsvImportError

CODE_COLUMNS = ("code", "Code")
NAME_COLUMNS = ("name", "Name", "item", "Item")
PRICE_COLUMNS = ("price", "Price")
CATEGORY_COLUMNS = ("category", "Category")


def _clean(value: Any) -> str:
    # Short rows leave NaN in the missing cells
    return value.strip() if isinstance(value, str) else ""


def _first(row: Dict[str, str], columns: Iterable[str]) -> Optional[str]:
    for column in columns:
        value = row.get(column)
        if value:
            return value
    return None


def _parse_price(value: Optional[str]) -> float:
    try:
        price = float(value) if value else 0.0
    except ValueError:
        return 0.0
    if not math.isfinite(price) or price < 0:
        return 0.0
    return price


def read_menu_frame(content: bytes, encoding: str = "utf-8-sig") -> pd.DataFrame:
    """Load the upload as an all-text frame with stripped header names"""
    df = pd.read_csv(
        io.BytesIO(content),
        encoding=encoding,
        dtype=str,
        keep_default_na=False,
        skipinitialspace=True
    )
    df.columns = [str(c).strip() for c in df.columns]
    return df


def parse_menu_csv(content: bytes, encoding: str = "utf-8-sig") -> List[Dict]:
    """
    Parse a menu CSV with a header row

    Returns:
        Rows as dicts with code, name, price, category

    Raises:
        CsvImportError: If the file cannot be decoded or is not valid CSV
    """
    try:
        df = read_menu_frame(content, encoding)
    except EmptyDataError:
        return []
    except (UnicodeDecodeError, ParserError) as e:
        raise CsvImportError(str(e)) from e

    rows = []
    for record in df.to_dict(orient="records"):
        row = {column: _clean(value) for column, value in record.items()}
        name = _first(row, NAME_COLUMNS)
        if not name:
            continue
        rows.append({
            "code": _first(row, CODE_COLUMNS) or "",
            "name": name,
            "price": _parse_price(_first(row, PRICE_COLUMNS)),
            "category": _first(row, CATEGORY_COLUMNS) or "",
        })
    return rows
