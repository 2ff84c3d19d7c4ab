"""
Unit tests for the command registry.
"""

from core.commands import Command, Module, command_name, commands, find_command, listed_commands


class TestModule:
    """Tests for registering commands."""

    def test_direct_call_returns_command(self, isolated_commands):
        def handler(message, match):
            return None

        command = Module("hello", handler)

        assert isinstance(command, Command)
        assert command.function is handler
        assert commands == [command]

    def test_defaults(self, isolated_commands):
        command = Module("hello", lambda m, a: None)

        assert command.public is False
        assert command.is_group is False
        assert command.dont_add_command_list is False

    def test_decorator_returns_function(self, isolated_commands):
        @Module("greet", public=True, is_group=True)
        async def greet(message, match):
            return "hi"

        assert callable(greet)
        assert len(commands) == 1
        assert commands[0].function is greet
        assert commands[0].public is True
        assert commands[0].is_group is True


class TestPattern:
    """Tests for the generated regex."""

    def test_matches_command_and_arguments(self, isolated_commands):
        command = Module("say", lambda m, a: None)

        match = command.pattern.match("say hello\nworld")
        assert match.group(1) == "say"
        assert match.group(2) == "hello\nworld"

    def test_arguments_optional(self, isolated_commands):
        command = Module("say", lambda m, a: None)

        match = command.pattern.match("  SAY")
        assert match is not None
        assert match.group(2) is None

    def test_requires_whole_word(self, isolated_commands):
        command = Module("say", lambda m, a: None)

        assert command.pattern.match("sayhello") is None

    def test_alternation(self, isolated_commands):
        command = Module("menu|help", lambda m, a: None)

        assert command.pattern.match("help me").group(1) == "help"


class TestLookup:
    """Tests for find_command and listed_commands."""

    def test_first_registered_wins(self, isolated_commands):
        first = Module("a.*", lambda m, a: "first")
        Module("abc", lambda m, a: "second")

        command, match = find_command("abc")
        assert command is first
        assert match.group(1) == "abc"

    def test_no_match(self, isolated_commands):
        Module("abc", lambda m, a: None)

        assert find_command("xyz") is None

    def test_listed_excludes_hidden(self, isolated_commands):
        shown = Module("shown", lambda m, a: None)
        Module("hidden", lambda m, a: None, dont_add_command_list=True)

        assert listed_commands() == [shown]

    def test_command_name(self, isolated_commands):
        command = Module("ping|p", lambda m, a: None)

        assert command_name(command) == "ping|p"
