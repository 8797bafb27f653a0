"""Tests for command parsing."""

from reflectkit.command import Command, parse_command


class TestCommandParse:
    """Tests for Command.parse."""

    def test_primary_with_flag(self):
        """A flag consumes the next token as its value."""
        command = Command.parse("select -a Core")
        assert command.primary == "select"
        assert command.parameters == {"-a": "Core"}

    def test_empty_line(self):
        """An empty line has no primary and no parameters."""
        command = Command.parse("")
        assert command.primary is None
        assert command.parameters == {}
        assert command.is_empty

    def test_blank_and_none(self):
        """Whitespace-only and None input degrade to an empty command."""
        assert Command.parse("   \t ").is_empty
        assert Command.parse(None).is_empty

    def test_trailing_flag_dropped(self):
        """A trailing flag with no value is dropped silently."""
        command = Command.parse("list -a")
        assert command.primary == "list"
        assert command.parameters == {}

    def test_multiple_flags(self):
        """Flags are collected left to right."""
        command = Command.parse("members -a Beta -t Beta.X")
        assert command.primary == "members"
        assert command.parameters == {"-a": "Beta", "-t": "Beta.X"}

    def test_repeated_whitespace(self):
        """Runs of whitespace separate tokens like a single space."""
        command = Command.parse("  types    -a   Beta  ")
        assert command.primary == "types"
        assert command.parameters == {"-a": "Beta"}

    def test_later_flag_wins(self):
        """A repeated flag keeps the last value."""
        command = Command.parse("types -a One -a Two")
        assert command.get("-a") == "Two"

    def test_flag_value_may_look_like_flag(self):
        """The token after a flag is its value even if it starts with a dash."""
        command = Command.parse("types -a -t Beta")
        assert command.parameters == {"-a": "-t"}
        assert command.arguments == ("Beta",)

    def test_stray_tokens_kept_as_arguments(self):
        """Tokens that are not flag values are kept separately."""
        command = Command.parse("modules extra words")
        assert command.primary == "modules"
        assert command.parameters == {}
        assert command.arguments == ("extra", "words")

    def test_parse_command_helper(self):
        """parse_command is equivalent to Command.parse."""
        assert parse_command("types -a Beta") == Command.parse("types -a Beta")

    def test_hashable(self):
        """Parsed commands can be used as set members and dict keys."""
        first = Command.parse("types -a X")
        second = Command.parse("types   -a X")
        assert hash(first) == hash(second)
        assert len({first, second}) == 1
        assert first.flags == (("-a", "X"),)
