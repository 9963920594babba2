"""Ordered attribute tree: the generic document value.

A value is either a ``str`` leaf or an ``AttrTree``: an ordered list of
``(key, value)`` pairs in which keys may repeat. Key conventions:

  "@name"   XML attribute
  "$text"   element text
  "name"    child element

Entry order is the serialization order. Nothing here sorts.
"""

from __future__ import annotations

from typing import Iterator, Union

TEXT_KEY = "$text"

Value = Union[str, "AttrTree"]


class AttrTree:
    """Ordered association list with duplicate keys and positional insert."""

    __slots__ = ("_entries",)

    def __init__(self, entries: list[tuple[str, Value]] | None = None):
        self._entries: list[tuple[str, Value]] = list(entries or [])

    # ─── Lookup ───

    def get(self, key: str, default: Value | None = None) -> Value | None:
        """Return the value of the first entry named ``key``."""
        for k, v in self._entries:
            if k == key:
                return v
        return default

    def get_all(self, key: str) -> list[Value]:
        return [v for k, v in self._entries if k == key]

    def index(self, key: str, occurrence: int = 0) -> int | None:
        """Position of the ``occurrence``-th entry named ``key`` (0-based)."""
        seen = 0
        for i, (k, _) in enumerate(self._entries):
            if k == key:
                if seen == occurrence:
                    return i
                seen += 1
        return None

    def count(self, key: str) -> int:
        return sum(1 for k, _ in self._entries if k == key)

    def keys(self) -> list[str]:
        return [k for k, _ in self._entries]

    def items(self) -> list[tuple[str, Value]]:
        return list(self._entries)

    def attributes(self) -> list[tuple[str, str]]:
        """Attribute entries with the ``@`` stripped, in order."""
        return [(k[1:], v) for k, v in self._entries if k.startswith("@")]

    def children(self) -> list[tuple[str, Value]]:
        """Child element entries (everything except attributes and text)."""
        return [
            (k, v)
            for k, v in self._entries
            if not k.startswith("@") and k != TEXT_KEY
        ]

    # ─── Mutation ───

    def insert(self, key: str, value: Value) -> None:
        """Append an entry."""
        self._entries.append((key, value))

    def insert_at(self, index: int, key: str, value: Value) -> None:
        self._entries.insert(index, (key, value))

    def remove(self, key: str) -> Value | None:
        """Remove the first entry named ``key`` and return its value."""
        i = self.index(key)
        if i is None:
            return None
        return self._entries.pop(i)[1]

    def rename(self, old: str, new: str, occurrence: int = 0) -> bool:
        """Rename one entry in place. Returns False if it does not exist."""
        i = self.index(old, occurrence)
        if i is None:
            return False
        self._entries[i] = (new, self._entries[i][1])
        return True

    def rename_keys(self, mapping) -> None:
        """Rename every key through ``mapping(key) -> key``, keeping positions."""
        self._entries = [(mapping(k), v) for k, v in self._entries]

    def duplicate_key(self, existing_key: str, new_key: str) -> bool:
        """Copy the first ``existing_key`` entry to ``new_key`` right after it.

        The original entry stays where it is. Returns False when
        ``existing_key`` is absent.
        """
        i = self.index(existing_key)
        if i is None:
            return False
        value = self._entries[i][1]
        copy = value.copy() if isinstance(value, AttrTree) else value
        self._entries.insert(i + 1, (new_key, copy))
        return True

    def move_after(self, key: str, anchor: str) -> bool:
        """Move the first ``key`` entry to immediately follow ``anchor``.

        When ``anchor`` is absent the entry goes to the end.
        """
        i = self.index(key)
        if i is None:
            return False
        entry = self._entries.pop(i)
        j = self.index(anchor)
        if j is None:
            self._entries.append(entry)
        else:
            self._entries.insert(j + 1, entry)
        return True

    # ─── Protocol ───

    def copy(self) -> "AttrTree":
        return AttrTree(
            [(k, v.copy() if isinstance(v, AttrTree) else v) for k, v in self._entries]
        )

    def __contains__(self, key: object) -> bool:
        return any(k == key for k, _ in self._entries)

    def __iter__(self) -> Iterator[tuple[str, Value]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttrTree):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"AttrTree({self._entries!r})"
