from __future__ import annotations

from pathlib import Path

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from sepd_core.protocol import ALPHABET

from .codec import Record
from .index import sort_and_count

SCHEMA = pa.schema(
    [
        ("key", pa.string()),
        ("display_name", pa.string()),
        ("letter", pa.string()),
    ]
)


def records_frame(records: list[Record]) -> pd.DataFrame:
    """Records in on-disk (alphabetical) order, one row each."""
    ordered, _ = sort_and_count(records)
    rows = []
    for rec in ordered:
        first = rec.display_name[:1].upper()
        rows.append(
            {
                "key": rec.key,
                "display_name": rec.display_name,
                "letter": first if len(first) == 1 and first in ALPHABET else None,
            }
        )
    return pd.DataFrame(rows, columns=[f.name for f in SCHEMA], dtype=object)


def write_parquet(records: list[Record], path: Path) -> int:
    df = records_frame(records)
    table = pa.Table.from_pandas(df, schema=SCHEMA, preserve_index=False)
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    pq.write_table(table, path)
    return len(df)
