"""Lists of attribute names used to select what gets exported."""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple


@dataclass(frozen=True)
class AttrList:
    """A sorted set of attribute names; an empty list admits every name."""

    names: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "names", tuple(sorted(self.names)))

    def exists(self, name: str) -> bool:
        """Tell whether ``name`` is selected by this list."""
        if not self.names:
            return True
        i = bisect_left(self.names, name)
        return i < len(self.names) and self.names[i] == name

    def __len__(self) -> int:
        return len(self.names)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)


def parse_attr_list(path: Optional[str]) -> AttrList:
    """Read one attribute name per line; a missing path gives an empty list."""
    if path is None:
        return AttrList()
    with open(path, encoding="utf-8") as fh:
        names = [line.rstrip("\n") for line in fh]
    return AttrList(tuple(name for name in names if name))