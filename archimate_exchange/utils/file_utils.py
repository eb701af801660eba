"""File utilities."""
from __future__ import annotations

from pathlib import Path


def ensure_dir(path: str) -> Path:
    """Ensure directory exists and return Path."""
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p


def read_text_file(path: str | Path) -> str:
    """Read a document as UTF-8.

    - Missing files raise FileNotFoundError.
    - A leading byte-order mark is dropped so XML declarations stay first.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Missing file: {path}")
    text = p.read_text(encoding="utf-8")
    return text.lstrip("\ufeff")


def write_text_file(path: str | Path, content: str) -> Path:
    """Write UTF-8 text, creating parent directories."""
    p = Path(path)
    if p.parent and str(p.parent) not in ("", "."):
        ensure_dir(str(p.parent))
    p.write_text(content, encoding="utf-8")
    return p
