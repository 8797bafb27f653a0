"""Shared fixtures: an in-memory introspection provider."""

import pytest

from reflectkit.models import AccessLevel, MemberHandle, MemberKind, ModuleHandle, TypeHandle
from reflectkit.navigator import Navigator


class FakeProvider:
    """Serves a fixed module/type/member tree and counts fetches."""

    def __init__(self, tree):
        self.tree = tree
        self.module_calls = 0

    def list_modules(self):
        self.module_calls += 1
        return [ModuleHandle(name=name) for name in sorted(self.tree)]

    def list_types(self, module):
        return [
            TypeHandle(name=qualified.split(".")[-1], qualified_name=qualified, module=module.name)
            for qualified in sorted(self.tree[module.name])
        ]

    def list_members(self, type_):
        names = self.tree[type_.module][type_.qualified_name]
        return [
            MemberHandle(
                name=name,
                kind=MemberKind.METHOD,
                owner=type_.qualified_name,
                module=type_.module,
                access=AccessLevel.PUBLIC,
            )
            for name in names
        ]


@pytest.fixture
def tree():
    return {
        "Alpha": {"Alpha.A": ["run"]},
        "Beta": {
            "Beta.X": ["start", "stop", "reset"],
            "Beta.Y": ["value"],
        },
    }


@pytest.fixture
def provider(tree):
    return FakeProvider(tree)


@pytest.fixture
def navigator(provider):
    return Navigator(provider=provider)
