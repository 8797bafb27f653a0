"""
The navigation state machine.

The navigator owns a :class:`NavigatorState` and moves it between three
levels: all modules, the types of a selected module, and the members of a
selected type. Every operation replaces the state wholesale and reports an
:class:`ExecutionResult`; nothing here raises for bad user input.
"""

from __future__ import annotations

import logging
from typing import Optional

from .command import Command
from .config import ReflectConfig
from .inspector import IntrospectionProvider, RuntimeIntrospector
from .models import (
    CollectionKind,
    DrillUpResult,
    ErrorKind,
    ExecutionResult,
    Item,
    ModuleHandle,
    NavigatorState,
    TypeHandle,
)

logger = logging.getLogger(__name__)

MODULE_FLAG = "-a"
TYPE_FLAG = "-t"

HELP_TEXT = """\
modules | assemblies              list loaded modules
types [-a <module>]               list types of the selected module
members [-a <module>] [-t <type>] list members of the selected type
list modules|assemblies|types|members
                                  same as the commands above, no flags
select -a <module> | -t <type>    select without listing
up                                go back one level
help                              show this message"""


class Navigator:
    """Drill-down browser over modules, types and members."""

    def __init__(
        self,
        provider: Optional[IntrospectionProvider] = None,
        config: Optional[ReflectConfig] = None,
    ) -> None:
        self.config = config or ReflectConfig()
        self.provider = provider or RuntimeIntrospector(
            include_private=self.config.include_private,
            include_inherited=self.config.include_inherited,
        )
        self.state = NavigatorState()
        # Modules are fetched from the provider once and reused afterwards
        self._module_cache: Optional[tuple[ModuleHandle, ...]] = None

        # Verbs that read positional arguments
        self._positional = {"list"}

        self._handlers = {
            "modules": self._cmd_modules,
            "assemblies": self._cmd_modules,
            "types": self._cmd_types,
            "members": self._cmd_members,
            "list": self._cmd_list,
            "select": self._cmd_select,
            "up": self._cmd_up,
            "help": self._cmd_help,
        }

    # ------------------------------------------------------------------
    # Renderer contract

    def active_collection_kind(self) -> CollectionKind:
        return self.state.active

    def count(self) -> int:
        return len(self.state.collection())

    def item_at(self, index: int) -> Item:
        """Return the item at ``index`` in the active collection.

        Raises:
            IndexError: If ``index`` is out of range
        """
        return self.state.collection()[index]

    def items(self) -> tuple[Item, ...]:
        return self.state.collection()

    def selected_module(self) -> Optional[ModuleHandle]:
        return self.state.selected_module

    def selected_type(self) -> Optional[TypeHandle]:
        return self.state.selected_type

    def badges(self) -> list[tuple[CollectionKind, str]]:
        """
        Selection badges, outermost first.

        Each badge carries the level it collapses: passing it to
        :meth:`drill_up` re-expands the collection the selection was made
        from. The module badge is ``TYPES`` (back to modules), the type badge
        is ``MEMBERS`` (back to types).
        """
        badges = []
        if self.state.selected_module is not None:
            badges.append((CollectionKind.TYPES, self.state.selected_module.name))
            if self.state.selected_type is not None:
                badges.append((CollectionKind.MEMBERS, self.state.selected_type.qualified_name))
        return badges

    def execute_typed(self, raw_line: str) -> ExecutionResult:
        return self.execute(Command.parse(raw_line))

    def select_module_by_name(self, name: str) -> ExecutionResult:
        return self.select_module(name)

    def select_type_by_name(self, name: str) -> ExecutionResult:
        return self.select_type(name)

    # ------------------------------------------------------------------
    # Instructions

    def execute(self, command: Command) -> ExecutionResult:
        """Run one parsed instruction against the current state."""
        if command.is_empty:
            return ExecutionResult.ok()

        handler = self._handlers.get(command.primary)
        if handler is None:
            result = ExecutionResult.fail(
                ErrorKind.MALFORMED_COMMAND,
                f"Unknown command '{command.primary}'. Type 'help' for a list of commands.",
            )
        else:
            result = handler(command)
            if result.success and command.arguments and command.primary not in self._positional:
                result = _with_ignored(result, command.arguments)

        logger.debug(
            "Executed %r %r -> success=%s active=%s",
            command.primary,
            command.parameters,
            result.success,
            self.state.active.name,
        )
        if not result.success:
            logger.debug("Command failed: %s", result.diagnostic)
        return result

    def _cmd_modules(self, command: Command) -> ExecutionResult:
        return self.refresh_modules()

    def _cmd_types(self, command: Command) -> ExecutionResult:
        before = self.state
        module_name = command.get(MODULE_FLAG)
        if module_name is not None:
            result = self.select_module(module_name)
            if not result.success:
                self.state = before
                return result
        return self.refresh_types()

    def _cmd_members(self, command: Command) -> ExecutionResult:
        before = self.state
        module_name = command.get(MODULE_FLAG)
        if module_name is not None:
            result = self.select_module(module_name)
            if not result.success:
                self.state = before
                return result

        type_name = command.get(TYPE_FLAG)
        if type_name is not None:
            result = self.select_type(type_name)
            if not result.success:
                return result
        return self.refresh_members()

    def _cmd_list(self, command: Command) -> ExecutionResult:
        target = command.arguments[0] if command.arguments else None
        if target in ("modules", "assemblies"):
            result = self.refresh_modules()
        elif target == "types":
            result = self.refresh_types()
        elif target == "members":
            result = self.refresh_members()
        else:
            return ExecutionResult.fail(
                ErrorKind.MALFORMED_COMMAND,
                "list requires one of: modules, assemblies, types, members",
            )
        if result.success and len(command.arguments) > 1:
            result = _with_ignored(result, command.arguments[1:])
        return result

    def _cmd_select(self, command: Command) -> ExecutionResult:
        module_name = command.get(MODULE_FLAG)
        type_name = command.get(TYPE_FLAG)
        if module_name is None and type_name is None:
            return ExecutionResult.fail(
                ErrorKind.MALFORMED_COMMAND,
                "select requires -a <module> or -t <type>",
            )

        before = self.state
        if module_name is not None:
            result = self.select_module(module_name)
            if not result.success:
                self.state = before
                return result
        if type_name is not None:
            return self.select_type(type_name)
        return ExecutionResult.ok()

    def _cmd_up(self, command: Command) -> ExecutionResult:
        return self.drill_up(self.state.active).result

    def _cmd_help(self, command: Command) -> ExecutionResult:
        return ExecutionResult.ok(HELP_TEXT)

    # ------------------------------------------------------------------
    # State transitions

    def refresh_modules(self) -> ExecutionResult:
        """Show all modules, clearing every level below."""
        if self._module_cache is None:
            self._module_cache = tuple(self.provider.list_modules())
            logger.debug("Cached %d modules", len(self._module_cache))

        self.state = self.state.evolve(
            modules=self._module_cache,
            types=(),
            members=(),
            selected_module=None,
            selected_type=None,
        )
        return ExecutionResult.ok()

    def select_module(self, name: str) -> ExecutionResult:
        """Select the module called ``name`` and list its types.

        Any selected type is cleared, including when ``name`` is already the
        selected module, so repeating the call yields the same state.
        """
        if not self.state.modules:
            self.refresh_modules()

        module = next((m for m in self.state.modules if m.name == name), None)
        if module is None:
            # The old type selection cannot outlive its module
            self.state = self.state.evolve(
                selected_module=None,
                selected_type=None,
                types=(),
                members=(),
            )
            return ExecutionResult.fail(
                ErrorKind.NOT_FOUND,
                f"Module '{name}' not found",
            )

        types = tuple(self.provider.list_types(module))
        self.state = self.state.evolve(
            selected_module=module,
            selected_type=None,
            types=types,
            members=(),
        )
        return ExecutionResult.ok()

    def refresh_types(self) -> ExecutionResult:
        """Show the types of the selected module."""
        module = self.state.selected_module
        if module is None:
            self.state = self.state.evolve(types=(), members=(), selected_type=None)
            return ExecutionResult.fail(
                ErrorKind.MISSING_CONTEXT,
                "No module is currently selected. Select a module to explore its types.",
            )

        types = tuple(self.provider.list_types(module))
        selected_type = self.state.selected_type
        if selected_type is not None and selected_type not in types:
            selected_type = None
        self.state = self.state.evolve(types=types, members=(), selected_type=selected_type)
        return ExecutionResult.ok()

    def select_type(self, name: str) -> ExecutionResult:
        """Select the type with fully-qualified ``name`` and list its members."""
        if self.state.selected_module is None:
            self.refresh_types()
            return ExecutionResult.fail(
                ErrorKind.MISSING_CONTEXT,
                f"Cannot select type '{name}': no module is currently selected.",
            )

        self.refresh_types()
        type_ = next((t for t in self.state.types if t.qualified_name == name), None)
        if type_ is None:
            self.state = self.state.evolve(selected_type=None, members=())
            return ExecutionResult.fail(
                ErrorKind.NOT_FOUND,
                f"Type '{name}' not found in '{self.state.selected_module.name}'",
            )

        members = tuple(self.provider.list_members(type_))
        self.state = self.state.evolve(selected_type=type_, members=members)
        return ExecutionResult.ok()

    def refresh_members(self) -> ExecutionResult:
        """Show the members of the selected type."""
        type_ = self.state.selected_type
        if type_ is None:
            self.state = self.state.evolve(members=())
            return ExecutionResult.fail(
                ErrorKind.MISSING_CONTEXT,
                "No type is currently selected. Select a type to explore its members.",
            )

        members = tuple(self.provider.list_members(type_))
        self.state = self.state.evolve(members=members)
        return ExecutionResult.ok()

    def drill_up(self, from_level: CollectionKind) -> DrillUpResult:
        """
        Widen to the collection above ``from_level``.

        From members this shows the selected module's types again; from types
        it shows the module list. ``restore_index`` points at the previously
        selected item so a renderer can scroll back to it.
        """
        if from_level is CollectionKind.MEMBERS:
            previous = self.state.selected_type
            result = self.refresh_types()
            return DrillUpResult(
                result=result,
                kind=self.state.active,
                restore_index=_index_of(self.state.types, previous),
            )

        if from_level is CollectionKind.TYPES:
            previous = self.state.selected_module
            result = self.refresh_modules()
            return DrillUpResult(
                result=result,
                kind=self.state.active,
                restore_index=_index_of(self.state.modules, previous),
            )

        return DrillUpResult(
            result=ExecutionResult.fail(
                ErrorKind.MISSING_CONTEXT,
                "Already at the top level",
            ),
            kind=self.state.active,
        )


def _index_of(collection: tuple, item: object) -> Optional[int]:
    if item is None:
        return None
    try:
        return collection.index(item)
    except ValueError:
        return None


def _with_ignored(result: ExecutionResult, tokens: tuple[str, ...]) -> ExecutionResult:
    note = f"Ignored unexpected arguments: {' '.join(tokens)}"
    diagnostic = f"{result.diagnostic}\n{note}" if result.diagnostic else note
    return ExecutionResult.ok(diagnostic)
