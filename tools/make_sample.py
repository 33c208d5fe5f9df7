"""Write a small demo commentary file for manual testing and the CLI tests."""
import argparse
import random
from pathlib import Path

from sepd_core.protocol import LAYOUTS, MAGIC_SEPD
from sepd_edit.codec import CommentaryFile, FileMetadata

PLAYERS = [
    "Mohamed Salah",
    "Lionel Messi",
    "Kylian Mbappe",
    "Erling Haaland",
    "Kevin De Bruyne",
    "Virgil van Dijk",
    "Son Heung-min",
    "Álvaro Morata",
    "Robert Lewandowski",
    "Bukayo Saka",
]


def build_sample(layout_name: str, count: int, seed: int) -> CommentaryFile:
    rng = random.Random(seed)
    layout = LAYOUTS[layout_name]

    # Opaque header bytes: magic, then whatever the game writes. Bytes 24-36 stay zero.
    first = MAGIC_SEPD + bytes(rng.randrange(256) for _ in range(12))
    second = bytes(rng.randrange(256) for _ in range(4)) + bytes(12)
    doc = CommentaryFile(FileMetadata(first, second), layout)

    ids = rng.sample(range(1, 999999), count)
    for i, cid in enumerate(ids):
        doc.create(cid, PLAYERS[i] if i < len(PLAYERS) else f"Player {cid}")
    return doc


def main() -> None:
    ap = argparse.ArgumentParser(description=__doc__)
    ap.add_argument("out", type=Path)
    ap.add_argument("--layout", choices=sorted(LAYOUTS), default="pes2021")
    ap.add_argument("--count", type=int, default=len(PLAYERS))
    ap.add_argument("--seed", type=int, default=2021)
    args = ap.parse_args()

    doc = build_sample(args.layout, args.count, args.seed)
    args.out.parent.mkdir(parents=True, exist_ok=True)
    data = doc.to_bytes()
    args.out.write_bytes(data)
    print(f"Wrote {len(doc)} records ({len(data)} bytes) to {args.out}")


if __name__ == "__main__":
    main()
