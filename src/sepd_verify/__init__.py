"""SEPD Verify - fail-closed checks for commentary list files."""
from .logic import verify_bytes, verify_file

__all__ = ["verify_bytes", "verify_file"]
