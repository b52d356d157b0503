from __future__ import annotations
import pyarrow as pa
from typing import Any, Dict, List, Sequence, Tuple
from basketcast.core.ingestion import product_label

SCHEMA = pa.schema([("x", pa.string()), ("y", pa.string()), ("value", pa.float64()), ("label", pa.string())])

def create_affinity_matrix(products: Sequence[Any], rules: pa.Table) -> pa.Table:
    """
    Pairwise confidence grid for a heatmap.

    One cell per ordered ``(x, y)`` product pair. The diagonal is 100; every
    other cell carries the confidence of the rule ``x -> y`` or 0 when no such
    rule was mined. ``products`` may be names or mappings with a
    ``full_name`` / ``name`` / ``description`` field.
    """
    names: List[str] = [product_label(p) for p in products]
    lookup: Dict[Tuple[str, str], float] = {
        (r["antecedent"], r["consequent"]): r["confidence"] for r in rules.to_pylist()
    }
    cells = []
    for i, x in enumerate(names):
        for j, y in enumerate(names):
            value = 100.0 if i == j else float(lookup.get((x, y), 0.0))
            cells.append({"x": x, "y": y, "value": value, "label": f"{value:g}%"})
    return pa.Table.from_pylist(cells, schema=SCHEMA)
