"""DataFrame-based statement generation and result loading."""

import pandas as pd
from typing import Any, Dict, List, Optional
from .column import Column, SqlType
from .insert import InsertBuilder
from .mappings import dtype_map


def _native(value: Any) -> Any:
    """Convert numpy scalars and arrays to Python values and NaN/NaT to None."""
    if pd.api.types.is_list_like(value):
        return value.tolist() if hasattr(value, 'tolist') else value
    if value is None or pd.isna(value):
        return None
    return value.item() if hasattr(value, 'item') else value


def df_columns(df: pd.DataFrame, types: Optional[Dict[str, SqlType]] = None) -> List[Column]:
    """Columns for a DataFrame, typed from explicit types or its dtypes."""
    types = types or {}
    return [
        Column(str(c), types.get(c, dtype_map.get(str(t), SqlType.OTHER)))
        for c, t in df.dtypes.items()
    ]


def df_inserts(df: pd.DataFrame, table: str, types: Optional[Dict[str, SqlType]] = None) -> List[InsertBuilder]:
    """One InsertBuilder per DataFrame row."""
    if not isinstance(df, pd.DataFrame):
        raise TypeError('Input must be a pandas DataFrame')
    if df.empty:
        return []
    cols = df_columns(df, types)
    out = []
    for row in df.itertuples(index=False, name=None):
        builder = InsertBuilder().table(table)
        for col, value in zip(cols, row):
            builder.value(col, _native(value))
        out.append(builder)
    return out


def fetch_df(builder, connection) -> pd.DataFrame:
    """Run a SelectBuilder's fetch_many and load the results into a DataFrame."""
    rows = builder.fetch_many(connection)
    if rows and hasattr(rows[0], 'as_dict'):
        raise TypeError('fetch_df needs a mapped builder, not raw cursor results')
    if rows and not isinstance(rows[0], dict):
        rows = [vars(r) for r in rows]
    return pd.DataFrame(rows)
