"""Rich-based terminal renderer for the navigator."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..models import (
    AccessLevel,
    CollectionKind,
    ExecutionResult,
    MemberHandle,
    MemberKind,
    ModuleHandle,
    TypeHandle,
)
from ..navigator import Navigator

# Selection badge colors, keyed by the level each badge collapses
BADGE_COLORS: dict[CollectionKind, str] = {
    CollectionKind.TYPES: "white on dodger_blue3",
    CollectionKind.MEMBERS: "white on medium_purple3",
}

ACCESS_COLORS: dict[AccessLevel, str] = {
    AccessLevel.PUBLIC: "white on blue3",
    AccessLevel.INTERNAL: "white on slate_blue3",
    AccessLevel.PROTECTED_INTERNAL: "white on slate_blue3",
    AccessLevel.PROTECTED: "white on purple4",
    AccessLevel.PRIVATE_PROTECTED: "white on dark_violet",
    AccessLevel.PRIVATE: "white on dark_violet",
}

STATIC_COLOR = "white on dark_orange3"
ABSTRACT_COLOR = "white on orange4"

COLORS: dict[MemberKind, str] = {
    MemberKind.CONSTRUCTOR: "yellow",
    MemberKind.FIELD: "cyan",
    MemberKind.PROPERTY: "magenta",
    MemberKind.EVENT: "red",
    MemberKind.METHOD: "green",
    MemberKind.CLASSMETHOD: "green italic",
    MemberKind.STATICMETHOD: "green dim",
}

ICONS: dict[MemberKind, str] = {
    MemberKind.CONSTRUCTOR: "new",
    MemberKind.FIELD: "fld",
    MemberKind.PROPERTY: "pro",
    MemberKind.EVENT: "evt",
    MemberKind.METHOD: "def",
    MemberKind.CLASSMETHOD: "cls",
    MemberKind.STATICMETHOD: "sta",
}


def _badge(text: str, style: str) -> Text:
    return Text(f" {text} ", style=style)


def _row_style(index: int, highlight: Optional[int]) -> Optional[str]:
    return "reverse" if index == highlight else None


class RichRenderer:
    """Renders the navigator's active collection and selection badges."""

    def __init__(self, no_color: bool = False, console: Optional[Console] = None) -> None:
        self.console = console or Console(no_color=no_color, highlight=False)
        self.error_console = Console(stderr=True, no_color=no_color, highlight=False)

    def render(self, navigator: Navigator, highlight: Optional[int] = None) -> None:
        """Print the badges and the active collection."""
        badges = navigator.badges()
        if badges:
            line = Text()
            for kind, name in badges:
                line.append_text(_badge(name, BADGE_COLORS[kind]))
                line.append(" ")
            self.console.print(line)

        kind = navigator.active_collection_kind()
        if kind is CollectionKind.EMPTY:
            self.console.print("[dim]Nothing to show. Type 'modules' to begin.[/dim]")
            return

        if kind is CollectionKind.MODULES:
            table = self._modules_table(navigator.items(), highlight)
        elif kind is CollectionKind.TYPES:
            table = self._types_table(navigator.items(), highlight)
        else:
            table = self._members_table(navigator.items(), highlight)

        self.console.print(table)

    def print_result(self, result: ExecutionResult) -> None:
        """Print a diagnostic, if any."""
        if not result.diagnostic:
            return
        if result.success:
            self.console.print(Panel(Text(result.diagnostic), border_style="dim"))
        else:
            self.error_console.print(Text(f"Error: {result.diagnostic}", style="red"))

    def _modules_table(self, modules: tuple[ModuleHandle, ...], highlight: Optional[int]) -> Table:
        table = Table(title=f"Modules ({len(modules)})", show_header=True, header_style="bold")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Module", style="blue")
        table.add_column("Kind", style="dim")
        table.add_column("File", style="dim", overflow="fold")

        for i, module in enumerate(modules):
            table.add_row(
                str(i),
                Text(module.name),
                "pkg" if module.is_package else "mod",
                Text(module.file_path or "built-in"),
                style=_row_style(i, highlight),
            )
        return table

    def _types_table(self, types: tuple[TypeHandle, ...], highlight: Optional[int]) -> Table:
        table = Table(title=f"Types ({len(types)})", show_header=True, header_style="bold")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Type", style="yellow")
        table.add_column("Bases", style="dim")
        table.add_column("")

        for i, type_ in enumerate(types):
            tags = _badge("abstract", ABSTRACT_COLOR) if type_.is_abstract else Text()
            table.add_row(
                str(i),
                Text(type_.qualified_name),
                Text(", ".join(type_.bases)),
                tags,
                style=_row_style(i, highlight),
            )
        return table

    def _members_table(self, members: tuple[MemberHandle, ...], highlight: Optional[int]) -> Table:
        table = Table(title=f"Members ({len(members)})", show_header=True, header_style="bold")
        table.add_column("#", style="dim", justify="right")
        table.add_column("", style="dim")
        table.add_column("Name")
        table.add_column("Detail", style="dim", overflow="fold")
        table.add_column("")

        for i, member in enumerate(members):
            color = COLORS.get(member.kind, "white")
            table.add_row(
                str(i),
                ICONS.get(member.kind, ""),
                Text(member.name, style=color),
                Text(self._member_detail(member)),
                self._member_badges(member),
                style=_row_style(i, highlight),
            )
        return table

    @staticmethod
    def _member_detail(member: MemberHandle) -> str:
        if member.signature:
            return member.signature
        if member.value_repr:
            return f"= {member.value_repr}"
        if member.kind is MemberKind.PROPERTY:
            return "get; set" if member.setter_access is not None else "get"
        return ""

    @staticmethod
    def _member_badges(member: MemberHandle) -> Text:
        text = Text()
        access = member.access.name.lower().replace("_", " ")
        text.append_text(_badge(access, ACCESS_COLORS[member.access]))
        if member.is_static:
            text.append(" ")
            text.append_text(_badge("static", STATIC_COLOR))
        if member.declared_in and member.declared_in != member.owner:
            text.append(f" from {member.declared_in}", style="dim")
        return text
