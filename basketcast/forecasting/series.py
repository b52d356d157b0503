from __future__ import annotations
import calendar
import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional
import narwhals as nw


@dataclass(frozen=True)
class DailySalesPoint:
    day: int
    sales: float


def month_days(today: Optional[date] = None) -> int:
    """Number of days in the calendar month of ``today`` (defaults to now)."""
    today = today or date.today()
    return calendar.monthrange(today.year, today.month)[1]


def _read(record: Any, name: str, position: int) -> Any:
    if isinstance(record, Mapping): return record.get(name)
    if isinstance(record, (tuple, list)): return record[position] if len(record) > position else None
    return getattr(record, name, None)


def _frame_rows(source: Any, day_col: str, sales_col: str) -> Optional[List[Dict[str, Any]]]:
    if isinstance(source, (list, tuple, Mapping)): return None
    try: df = nw.from_native(source)
    except TypeError: return None
    if isinstance(df, nw.LazyFrame): df = df.collect()
    if day_col not in df.columns or sales_col not in df.columns:
        raise ValueError(f"Missing columns: expected '{day_col}' and '{sales_col}', got {list(df.columns)}")
    cols = df.select(nw.col(day_col), nw.col(sales_col)).to_dict(as_series=False)
    return [{day_col: d, sales_col: s} for d, s in zip(cols[day_col], cols[sales_col])]


def _coerce_day(value: Any) -> Optional[int]:
    if value is None or (isinstance(value, float) and math.isnan(value)): return None
    day = int(value)
    if day != float(value): raise ValueError(f"day must be an integer, got {value!r}")
    if day < 1: raise ValueError(f"day must be >= 1, got {day}")
    return day


def _coerce_sales(value: Any) -> float:
    if value is None: return 0.0
    sales = float(value)
    if math.isnan(sales): return 0.0
    if sales < 0: raise ValueError(f"sales must be non-negative, got {sales}")
    return sales


def to_daily_points(source: Any, day_col: str = "day", sales_col: str = "sales") -> List[DailySalesPoint]:
    """
    Normalize a daily sales series.

    Accepts ``DailySalesPoint`` objects, mappings, ``(day, sales)`` tuples or a
    pandas / polars frame. Rows without a day are dropped, missing sales count
    as 0 and repeated days are summed. The result is sorted by day.
    """
    if source is None: return []
    rows: Iterable[Any] = _frame_rows(source, day_col, sales_col)
    if rows is None: rows = source
    totals: Dict[int, float] = {}
    for record in rows:
        day = _coerce_day(_read(record, day_col, 0))
        if day is None: continue
        totals[day] = totals.get(day, 0.0) + _coerce_sales(_read(record, sales_col, 1))
    return [DailySalesPoint(day, totals[day]) for day in sorted(totals)]
