import sys
from pathlib import Path

def main():
    if len(sys.argv) != 2:
        print("Usage: corrupt_one_byte.py <file>")
        raise SystemExit(2)

    p = Path(sys.argv[1])
    b = bytearray(p.read_bytes())
    if len(b) < 144:
        print("File too small to corrupt safely.")
        raise SystemExit(2)

    # Flip a byte in the reserved-zero header range (24-36).
    # The verifier and decoder both reject a non-zero byte here.
    idx = 24 + 4
    b[idx] ^= 0x01
    p.write_bytes(bytes(b))
    print(f"Corrupted 1 byte at offset {idx} in {p}")

if __name__ == "__main__":
    main()
