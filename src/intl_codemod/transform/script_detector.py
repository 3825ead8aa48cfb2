"""Detection of text written in the target script."""

from __future__ import annotations

import re
from collections.abc import Iterable

# CJK Unified Ideographs
DEFAULT_SCRIPT_RANGES: tuple[tuple[int, int], ...] = ((0x4E00, 0x9FA5),)


class ScriptDetector:
    """Predicate telling whether a text fragment contains target-script characters."""

    def __init__(self, ranges: Iterable[tuple[int, int]] = DEFAULT_SCRIPT_RANGES) -> None:
        self.ranges: tuple[tuple[int, int], ...] = tuple(ranges)
        char_class = "".join(
            f"\\U{start:08x}-\\U{end:08x}" for start, end in self.ranges
        )
        self._pattern: re.Pattern[str] = re.compile(f"[{char_class}]")

    def __call__(self, text: str | None) -> bool:
        """Return True if ``text`` holds at least one codepoint in the configured ranges."""
        if not text:
            return False
        return self._pattern.search(text) is not None


def contains_chinese(text: str | None) -> bool:
    """Check ``text`` against the default CJK range."""
    return _DEFAULT_DETECTOR(text)


_DEFAULT_DETECTOR = ScriptDetector()
