"""Terminal size lookup."""

import shutil
from typing import Tuple

FALLBACK_SIZE = (80, 24)


def get_terminal_size() -> Tuple[int, int]:
    """Return (width, height) of the controlling terminal, in cells."""
    size = shutil.get_terminal_size(fallback=FALLBACK_SIZE)
    return size.columns, size.lines
