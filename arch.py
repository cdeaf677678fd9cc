"""Host CPU architecture detection."""

from __future__ import annotations

import platform
from typing import Optional

from constants import ARCH_LABELS

__all__ = ["detect_arch"]


def detect_arch(machine: Optional[str] = None) -> str:
    """Return the package architecture label for a CPU identifier.

    Falls back to ``platform.machine()`` when no identifier is given.
    Unknown identifiers map to an empty string, which matches no package.
    """
    raw = platform.machine() if machine is None else machine
    key = raw.strip().lower()
    for aliases, label in ARCH_LABELS.items():
        if key in aliases:
            return label
    return ""
