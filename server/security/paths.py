"""Path segment validation for lookups under the documentation root."""

import re
from pathlib import Path
from typing import Optional

# Folder, page, version and language slugs: letters, digits, '_', '-', '.'
SEGMENT_RE = re.compile(r"^[A-Za-z0-9_.\-]+$")


def is_safe_segment(segment: Optional[str]) -> bool:
    """True when ``segment`` can be used as a single path component."""
    if not segment or segment in {".", ".."}:
        return False
    return bool(SEGMENT_RE.match(segment))


def is_within(root: Path, candidate: Path) -> bool:
    """True when ``candidate`` resolves to a location inside ``root``."""
    try:
        candidate.resolve().relative_to(root.resolve())
    except ValueError:
        return False
    return True
