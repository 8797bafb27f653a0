"""Data models for reflectkit navigation state and introspection handles."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Optional


class MemberKind(Enum):
    """Classification of class members."""

    FIELD = auto()
    PROPERTY = auto()
    METHOD = auto()
    CLASSMETHOD = auto()
    STATICMETHOD = auto()
    CONSTRUCTOR = auto()
    EVENT = auto()


class AccessLevel(Enum):
    """Visibility of a member."""

    PUBLIC = auto()
    PROTECTED = auto()
    PRIVATE = auto()
    INTERNAL = auto()
    PROTECTED_INTERNAL = auto()
    PRIVATE_PROTECTED = auto()


class CollectionKind(Enum):
    """Which collection the navigator is currently showing."""

    MODULES = auto()
    TYPES = auto()
    MEMBERS = auto()
    EMPTY = auto()


class ErrorKind(Enum):
    """Reason an instruction failed."""

    NOT_FOUND = auto()
    MISSING_CONTEXT = auto()
    MALFORMED_COMMAND = auto()


@dataclass(frozen=True)
class ModuleHandle:
    """A loaded module."""

    name: str
    file_path: Optional[str] = None
    is_package: bool = False
    obj: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class TypeHandle:
    """A class declared by exactly one module."""

    name: str
    qualified_name: str
    module: str
    bases: tuple[str, ...] = ()
    is_abstract: bool = False
    obj: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class MemberHandle:
    """A member declared on exactly one type."""

    name: str
    kind: MemberKind
    owner: str
    module: str
    access: AccessLevel = AccessLevel.PUBLIC
    is_static: bool = False
    declared_in: Optional[str] = None
    signature: Optional[str] = None
    getter_access: Optional[AccessLevel] = None
    setter_access: Optional[AccessLevel] = None
    value_repr: Optional[str] = None


Item = ModuleHandle | TypeHandle | MemberHandle


@dataclass(frozen=True)
class NavigatorState:
    """
    Snapshot of the three-level hierarchy.

    ``active`` is derived from the collections by :func:`derive_active` and
    must be recomputed whenever one of them changes; use :meth:`evolve`.
    """

    modules: tuple[ModuleHandle, ...] = ()
    types: tuple[TypeHandle, ...] = ()
    members: tuple[MemberHandle, ...] = ()
    selected_module: Optional[ModuleHandle] = None
    selected_type: Optional[TypeHandle] = None
    active: CollectionKind = CollectionKind.EMPTY

    def evolve(self, **changes: Any) -> NavigatorState:
        """Return a copy with ``changes`` applied and ``active`` recomputed."""
        values = {
            "modules": self.modules,
            "types": self.types,
            "members": self.members,
            "selected_module": self.selected_module,
            "selected_type": self.selected_type,
        }
        values.update(changes)
        values["active"] = derive_active(values["modules"], values["types"], values["members"])
        return NavigatorState(**values)

    def collection(self) -> tuple[Item, ...]:
        if self.active is CollectionKind.MEMBERS:
            return self.members
        if self.active is CollectionKind.TYPES:
            return self.types
        if self.active is CollectionKind.MODULES:
            return self.modules
        return ()


def derive_active(
    modules: tuple[ModuleHandle, ...],
    types: tuple[TypeHandle, ...],
    members: tuple[MemberHandle, ...],
) -> CollectionKind:
    """Members win over types, types win over modules."""
    if members:
        return CollectionKind.MEMBERS
    if types:
        return CollectionKind.TYPES
    if modules:
        return CollectionKind.MODULES
    return CollectionKind.EMPTY


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of a navigator operation."""

    success: bool
    diagnostic: Optional[str] = None
    error: Optional[ErrorKind] = None

    @classmethod
    def ok(cls, diagnostic: Optional[str] = None) -> ExecutionResult:
        return cls(success=True, diagnostic=diagnostic)

    @classmethod
    def fail(cls, error: ErrorKind, diagnostic: str) -> ExecutionResult:
        return cls(success=False, diagnostic=diagnostic, error=error)


@dataclass(frozen=True)
class DrillUpResult:
    """Result of widening to the parent collection.

    ``restore_index`` is the position of the previously selected item in the
    re-expanded collection, or ``None`` if it is not present.
    """

    result: ExecutionResult
    kind: CollectionKind
    restore_index: Optional[int] = None
