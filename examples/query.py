"""Query an exported commentary list - players under one index letter."""
from __future__ import annotations

import sys
from pathlib import Path

import duckdb


def main() -> None:
    if len(sys.argv) < 3:
        print("Usage: python query.py <players.parquet> <letter>")
        print("Example: python query.py players.parquet M")
        sys.exit(1)

    parquet = Path(sys.argv[1])
    letter = sys.argv[2].upper()

    con = duckdb.connect(":memory:")
    con.execute(f"CREATE VIEW players AS SELECT * FROM '{parquet}'")

    df = con.execute(
        "SELECT key, display_name FROM players WHERE letter = ? ORDER BY display_name",
        [letter],
    ).fetchdf()

    print(f"--- Players under '{letter}' ---\n")
    if df.empty:
        print("No players found.")
    else:
        for _, row in df.iterrows():
            print(f"{row['key']}  {row['display_name']}")

    total = con.execute("SELECT count(*) FROM players").fetchone()[0]
    print(f"\n{len(df)} of {total} players")


if __name__ == "__main__":
    main()
