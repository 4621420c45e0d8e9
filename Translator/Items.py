"""
Output items and the line-preserving reassembler.

Every converter produces ``Item(line, text, priority)``; the reassembler merges
them back onto the physical lines of the Java source so that the Nadeshiko
output stays aligned with its origin.
"""
from collections import defaultdict
from typing import Dict, Iterable, List, NamedTuple, Optional

# ---------------- priority tiers ----------------

TRAILING_CLOSE = 3        # "ここまで。" placed one line past a switch / try
COMMENT = 5
PACKAGE = 5
IF_HEADER = 5
IMPORT = 10
METHOD_HEADER = 10
ANNOTATION = 15
CLASS_HEADER = 20
CONSTRUCTOR_HEADER = 20
ENTRY_POINT_HEADER = 20
CLASS_CLOSE = 21
STATEMENT = 30
RETURN = 35
BLOCK_CLOSE = 50
END_OF_CONSTRUCT = 999    # must sort after anything else on its line


class Item(NamedTuple):
    line: Optional[int]
    text: str
    priority: int = STATEMENT

    @property
    def has_line(self) -> bool:
        return self.line is not None and self.line >= 1


def group_by_line(items: Iterable[Item]) -> Dict[int, List[Item]]:
    buckets: Dict[int, List[Item]] = defaultdict(list)
    for item in items:
        if item.has_line:
            buckets[item.line].append(item)
    for line in buckets:
        # sorted() is stable: equal priorities keep insertion order
        buckets[line] = sorted(buckets[line], key=lambda it: it.priority)
    return buckets


def reassemble(items: Iterable[Item], source_lines: List[str]) -> List[str]:
    buckets = group_by_line(items)
    out: List[str] = []
    for number, original in enumerate(source_lines, start=1):
        bucket = buckets.pop(number, None)
        if bucket:
            out.extend(item.text for item in bucket)
        elif not original.strip():
            out.append("")
    # markers that land past the last physical line
    for number in sorted(buckets):
        out.extend(item.text for item in buckets[number])
    return out
