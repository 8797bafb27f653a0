"""reflectkit - Interactive drill-down browser over loaded modules, types and members."""

__version__ = "0.1.0"

from .command import Command, parse_command
from .config import ReflectConfig
from .inspector import IntrospectionProvider, RuntimeIntrospector
from .models import (
    AccessLevel,
    CollectionKind,
    DrillUpResult,
    ErrorKind,
    ExecutionResult,
    MemberHandle,
    MemberKind,
    ModuleHandle,
    NavigatorState,
    TypeHandle,
)
from .navigator import Navigator

__all__ = [
    "__version__",
    "Command",
    "parse_command",
    "ReflectConfig",
    "IntrospectionProvider",
    "RuntimeIntrospector",
    "Navigator",
    "AccessLevel",
    "CollectionKind",
    "DrillUpResult",
    "ErrorKind",
    "ExecutionResult",
    "MemberHandle",
    "MemberKind",
    "ModuleHandle",
    "NavigatorState",
    "TypeHandle",
]
