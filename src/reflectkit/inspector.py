"""Introspection provider over the running interpreter."""

from __future__ import annotations

import importlib
import inspect
import logging
import sys
import types as pytypes
from typing import Any, Iterable, Optional, Protocol

from .models import AccessLevel, MemberHandle, MemberKind, ModuleHandle, TypeHandle

logger = logging.getLogger(__name__)

# Attributes every class carries; never worth listing
_BOILERPLATE = frozenset(
    {
        "__dict__",
        "__doc__",
        "__module__",
        "__qualname__",
        "__weakref__",
        "__annotations__",
        "__annotate__",
        "__annotate_func__",
        "__annotations_cache__",
        "__firstlineno__",
        "__static_attributes__",
        "__slots__",
        "__abstractmethods__",
        "_abc_impl",
    }
)

_CONSTRUCTORS = ("__init__", "__new__")

# Display order of member kinds within a type
_KIND_ORDER = {
    MemberKind.CONSTRUCTOR: 0,
    MemberKind.FIELD: 1,
    MemberKind.PROPERTY: 2,
    MemberKind.EVENT: 3,
    MemberKind.CLASSMETHOD: 4,
    MemberKind.STATICMETHOD: 5,
    MemberKind.METHOD: 6,
}


class IntrospectionProvider(Protocol):
    """Source of modules, types and members for a navigator."""

    def list_modules(self) -> list[ModuleHandle]: ...

    def list_types(self, module: ModuleHandle) -> list[TypeHandle]: ...

    def list_members(self, type_: TypeHandle) -> list[MemberHandle]: ...


def access_level(name: str, owner: Optional[str] = None) -> AccessLevel:
    """
    Map a Python attribute name to an access level by naming convention.

    ``owner`` is the defining class name, used to recognise mangled
    ``_Owner__name`` attributes as private.
    """
    if name.startswith("__") and name.endswith("__"):
        return AccessLevel.PUBLIC
    if name.startswith("__"):
        return AccessLevel.PRIVATE
    if owner and name.startswith(f"_{owner.lstrip('_')}__"):
        return AccessLevel.PRIVATE
    if name.startswith("_"):
        return AccessLevel.PROTECTED
    return AccessLevel.PUBLIC


def is_synthetic(cls: type) -> bool:
    """True for closure-local and nested classes."""
    qualname = getattr(cls, "__qualname__", cls.__name__)
    return "<" in qualname or "." in qualname


def extract_signature(obj: Any) -> Optional[str]:
    """
    Extract a signature string from a callable.

    Built-ins often have no retrievable signature; those return None.
    """
    try:
        return str(inspect.signature(obj))
    except (ValueError, TypeError):
        return None


def _safe_repr(obj: Any, max_len: int = 80) -> str:
    """Get a safe string representation of an object."""
    try:
        r = repr(obj)
        if len(r) > max_len:
            r = r[: max_len - 3] + "..."
        return r
    except Exception:
        return f"<{type(obj).__name__}>"


def _is_private_module(name: str) -> bool:
    return any(part.startswith("_") for part in name.split("."))


def preload_modules(names: Iterable[str]) -> list[str]:
    """Import ``names`` so they show up in the module list; return failures."""
    failed = []
    for name in names:
        try:
            importlib.import_module(name)
        except ImportError as e:
            logger.warning("Could not import %s: %s", name, e)
            failed.append(name)
    return failed


class RuntimeIntrospector:
    """
    Introspects modules currently present in ``sys.modules``.

    Private names (leading underscore) are hidden unless ``include_private``
    is set; members inherited from base classes are hidden unless
    ``include_inherited`` is set.
    """

    def __init__(self, include_private: bool = False, include_inherited: bool = False) -> None:
        self.include_private = include_private
        self.include_inherited = include_inherited

    def list_modules(self) -> list[ModuleHandle]:
        handles: dict[str, ModuleHandle] = {}
        # sys.modules can change size while imports run
        for name, module in list(sys.modules.items()):
            if not isinstance(module, pytypes.ModuleType):
                continue
            if not self.include_private and _is_private_module(name):
                continue
            handles[name] = ModuleHandle(
                name=name,
                file_path=getattr(module, "__file__", None),
                is_package=hasattr(module, "__path__"),
                obj=module,
            )
        logger.debug("Discovered %d modules", len(handles))
        return [handles[name] for name in sorted(handles)]

    def list_types(self, module: ModuleHandle) -> list[TypeHandle]:
        namespace = getattr(module.obj, "__dict__", {})
        found: dict[str, TypeHandle] = {}

        for name, obj in list(namespace.items()):
            if not inspect.isclass(obj):
                continue
            # Imported from elsewhere
            if getattr(obj, "__module__", None) != module.name:
                continue
            if is_synthetic(obj):
                continue
            if not self.include_private and obj.__name__.startswith("_"):
                continue

            qualified_name = f"{module.name}.{obj.__qualname__}"
            if qualified_name in found:
                continue
            found[qualified_name] = TypeHandle(
                name=obj.__name__,
                qualified_name=qualified_name,
                module=module.name,
                bases=tuple(b.__name__ for b in obj.__bases__ if b is not object),
                is_abstract=inspect.isabstract(obj),
                obj=obj,
            )

        return [found[name] for name in sorted(found)]

    def list_members(self, type_: TypeHandle) -> list[MemberHandle]:
        cls = type_.obj
        members: list[MemberHandle] = []
        seen: set[str] = set()

        try:
            attrs = inspect.classify_class_attrs(cls)
        except (AttributeError, TypeError) as e:
            logger.debug("Cannot classify attributes of %s: %s", type_.qualified_name, e)
            attrs = []

        for attr in attrs:
            if attr.name in _BOILERPLATE:
                continue
            is_inherited = attr.defining_class is not cls
            if is_inherited and not self.include_inherited:
                continue
            is_constructor = attr.name in _CONSTRUCTORS
            if is_constructor and attr.defining_class is object:
                continue
            if not self.include_private and attr.name.startswith("_") and not is_constructor:
                continue

            member = self._create_member(cls, type_, attr)
            if member is not None:
                members.append(member)
                seen.add(attr.name)

        for name in self._annotated_fields(cls):
            if name in seen or name in _BOILERPLATE:
                continue
            if not self.include_private and name.startswith("_"):
                continue
            members.append(
                MemberHandle(
                    name=name,
                    kind=MemberKind.FIELD,
                    owner=type_.qualified_name,
                    module=type_.module,
                    access=access_level(name, cls.__name__),
                    is_static=False,
                    declared_in=type_.qualified_name,
                )
            )

        return sorted(members, key=lambda m: (_KIND_ORDER[m.kind], m.name))

    def _create_member(
        self,
        cls: type,
        type_: TypeHandle,
        attr: inspect.Attribute,
    ) -> Optional[MemberHandle]:
        """Build a MemberHandle from an ``inspect.Attribute``."""
        name = attr.name
        access = access_level(name, attr.defining_class.__name__)
        declared_in = f"{attr.defining_class.__module__}.{attr.defining_class.__qualname__}"
        common = {
            "name": name,
            "owner": type_.qualified_name,
            "module": type_.module,
            "access": access,
            "declared_in": declared_in,
        }

        if name in _CONSTRUCTORS:
            return MemberHandle(
                kind=MemberKind.CONSTRUCTOR,
                is_static=name == "__new__",
                signature=extract_signature(cls),
                **common,
            )

        if attr.kind == "property" or inspect.isgetsetdescriptor(attr.object):
            fset = getattr(attr.object, "fset", None)
            settable = fset is not None or inspect.isgetsetdescriptor(attr.object)
            return MemberHandle(
                kind=MemberKind.PROPERTY,
                getter_access=access,
                setter_access=access if settable else None,
                **common,
            )

        if attr.kind in ("method", "class method", "static method"):
            kind = {
                "method": MemberKind.METHOD,
                "class method": MemberKind.CLASSMETHOD,
                "static method": MemberKind.STATICMETHOD,
            }[attr.kind]
            try:
                bound = getattr(cls, name)
            except AttributeError as e:
                logger.debug("Skipping %s.%s: %s", type_.qualified_name, name, e)
                return None
            return MemberHandle(
                kind=kind,
                is_static=kind is not MemberKind.METHOD,
                signature=extract_signature(bound),
                **common,
            )

        if attr.kind == "data":
            # __slots__ entries are per-instance storage
            if inspect.ismemberdescriptor(attr.object):
                return MemberHandle(kind=MemberKind.FIELD, is_static=False, **common)
            return MemberHandle(
                kind=MemberKind.FIELD,
                is_static=True,
                value_repr=_safe_repr(attr.object),
                **common,
            )

        logger.debug("Unclassified attribute %s.%s (%s)", type_.qualified_name, name, attr.kind)
        return None

    @staticmethod
    def _annotated_fields(cls: type) -> list[str]:
        """Names annotated on the class body itself."""
        try:
            return list(inspect.get_annotations(cls))
        except Exception as e:
            logger.debug("Cannot read annotations of %r: %s", cls, e)
            return []
