from typing import Dict, Optional


class IndentTable:
    """Line number -> indentation prefix. Last write wins; unknown lines have no prefix."""

    def __init__(self):
        self._prefixes: Dict[int, str] = {}

    def clear(self):
        self._prefixes.clear()

    def set(self, line: Optional[int], prefix: str):
        if line is None or line < 1:
            return
        self._prefixes[line] = prefix

    def set_range(self, first: Optional[int], last: Optional[int], prefix: str):
        """Stamps every line in [first, last]; an empty or unknown range is a no-op."""
        if first is None or last is None:
            return
        for line in range(max(first, 1), last + 1):
            self._prefixes[line] = prefix

    def get(self, line: Optional[int]) -> str:
        if line is None:
            return ""
        return self._prefixes.get(line, "")

    def __contains__(self, line) -> bool:
        return line in self._prefixes

    def __len__(self) -> int:
        return len(self._prefixes)
