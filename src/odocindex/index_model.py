from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Mapping

from .entries import EntryKind, GlobalIndexPayload, IndexEntry, MemberCollection, MemberEntry
from .logger import logger


@dataclass(frozen=True)
class IndexModel:
    """
    Immutable view of the documentation index: classes in generator order and
    the methods/fields attributed to them.

    ``methods`` and ``fields`` are kept as ordered tuples rather than mappings so
    that one member name can be attributed to several classes.
    """

    classes: tuple[str, ...] = ()
    methods: tuple[MemberEntry, ...] = ()
    fields: tuple[MemberEntry, ...] = ()

    @classmethod
    def build(
        cls,
        classes: Iterable[str],
        methods: Iterable[MemberEntry | tuple[str, str, bool]] = (),
        fields: Iterable[MemberEntry | tuple[str, str, bool]] = (),
    ) -> "IndexModel":
        return cls(
            classes=tuple(classes),
            methods=tuple(_coerce_member(m) for m in methods),
            fields=tuple(_coerce_member(f) for f in fields),
        )

    @classmethod
    def from_global_index(cls, payload: GlobalIndexPayload) -> "IndexModel":
        """Build from an already-decoded ``globalIndex`` mapping.

        Member collections may be a plain mapping (one entry per name) or a
        sequence of ``(name, {"c": ..., "o": ...})`` pairs when names repeat.
        """
        return cls(
            classes=tuple(payload.get("classes") or ()),
            methods=tuple(_members_from_payload(payload.get("methods"))),
            fields=tuple(_members_from_payload(payload.get("fields"))),
        )

    def list_classes(self) -> list[str]:
        return list(self.classes)

    def list_methods(self) -> list[tuple[str, str, bool]]:
        return [m.as_tuple() for m in self.methods]

    def list_fields(self) -> list[tuple[str, str, bool]]:
        return [f.as_tuple() for f in self.fields]

    def iter_entries(self) -> Iterator[IndexEntry]:
        """Every entry in display order: classes, then methods, then fields."""
        for name in self.classes:
            yield IndexEntry(EntryKind.CLASS, name, name)
        for m in self.methods:
            yield IndexEntry(EntryKind.METHOD, m.name, m.owner_class, m.declared_here)
        for f in self.fields:
            yield IndexEntry(EntryKind.FIELD, f.name, f.owner_class, f.declared_here)

    def __len__(self) -> int:
        return len(self.classes) + len(self.methods) + len(self.fields)

    def to_payload(self) -> GlobalIndexPayload:
        return {
            "classes": list(self.classes),
            "methods": [[m.name, {"c": m.owner_class, "o": m.declared_here}] for m in self.methods],
            "fields": [[f.name, {"c": f.owner_class, "o": f.declared_here}] for f in self.fields],
        }


@dataclass
class ValidationReport:
    problems: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.problems


def validate_model(model: IndexModel) -> ValidationReport:
    """Check the generator-owned invariants; never raises."""
    report = ValidationReport()
    known = set(model.classes)
    for name, count in Counter(model.classes).items():
        if count > 1:
            report.problems.append(f"class {name!r} listed {count} times")
    for kind, members in ((EntryKind.METHOD, model.methods), (EntryKind.FIELD, model.fields)):
        seen: Counter = Counter()
        for member in members:
            if member.owner_class not in known:
                report.problems.append(
                    f"{kind.value} {member.name!r} owned by unknown class {member.owner_class!r}"
                )
            seen[(member.name, member.owner_class)] += 1
        for (name, owner), count in seen.items():
            if count > 1:
                report.problems.append(
                    f"{kind.value} {name!r} of {owner!r} appears {count} times"
                )
    for problem in report.problems:
        logger.warning("Index invariant violated: %s", problem)
    return report


def _coerce_member(item: MemberEntry | tuple[str, str, bool]) -> MemberEntry:
    if isinstance(item, MemberEntry):
        return item
    name, owner, declared = item
    return MemberEntry(name, owner, bool(declared))


def _members_from_payload(raw: MemberCollection | None) -> Iterator[MemberEntry]:
    if not raw:
        return
    pairs = raw.items() if isinstance(raw, Mapping) else raw
    for name, data in pairs:
        yield MemberEntry(name, data["c"], data.get("o", True))


__all__ = ["IndexModel", "ValidationReport", "validate_model"]
