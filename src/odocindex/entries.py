from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NotRequired, TypedDict


class EntryKind(str, Enum):
    CLASS = "class"
    METHOD = "method"
    FIELD = "field"

    @property
    def prefix(self) -> str:
        return {"class": "c", "method": "m", "field": "f"}[self.value]


class MemberPayload(TypedDict):
    c: str
    o: NotRequired[bool]


# mapping by name, or [name, payload] pairs when names repeat
MemberCollection = dict[str, MemberPayload] | list[list]


class GlobalIndexPayload(TypedDict, total=False):
    classes: list[str]
    methods: MemberCollection
    fields: MemberCollection


@dataclass(frozen=True)
class EntryKey:
    """Identity of one display node: kind plus (name, owner class)."""

    kind: EntryKind
    name: str
    owner: str

    @property
    def dom_id(self) -> str:
        if self.kind == EntryKind.CLASS:
            return f"c-{self.name}"
        return f"{self.kind.prefix}-{self.name}-c-{self.owner}"


def class_key(name: str) -> EntryKey:
    return EntryKey(EntryKind.CLASS, name, name)


def method_key(name: str, owner_class: str) -> EntryKey:
    return EntryKey(EntryKind.METHOD, name, owner_class)


def field_key(name: str, owner_class: str) -> EntryKey:
    return EntryKey(EntryKind.FIELD, name, owner_class)


@dataclass(frozen=True)
class MemberEntry:
    name: str
    owner_class: str
    declared_here: bool = True

    @property
    def inherited(self) -> bool:
        return not self.declared_here

    def as_tuple(self) -> tuple[str, str, bool]:
        return (self.name, self.owner_class, self.declared_here)


@dataclass(frozen=True)
class IndexEntry:
    """Flattened view of any indexed item, as walked by the engine."""

    kind: EntryKind
    name: str
    owner_class: str
    declared_here: bool = True

    @property
    def key(self) -> EntryKey:
        return EntryKey(self.kind, self.name, self.owner_class)


def contains(name: str, query: str) -> bool:
    return query in name


__all__ = [
    "EntryKind",
    "EntryKey",
    "GlobalIndexPayload",
    "IndexEntry",
    "MemberCollection",
    "MemberEntry",
    "MemberPayload",
    "class_key",
    "contains",
    "field_key",
    "method_key",
]
