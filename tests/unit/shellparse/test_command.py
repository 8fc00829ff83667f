from __future__ import annotations

import logging

import pytest
from deskexec.shellparse import Command, parse, parse_variable


class FakeLibrary:
    def __init__(self, installed: set[int]) -> None:
        self.installed = installed
        self.lookups: list[int] = []

    def is_app_installed(self, app_id: int) -> bool:
        self.lookups.append(app_id)
        return app_id in self.installed

    def refresh(self) -> None:
        pass


class TestParseVariable:
    @pytest.mark.parametrize(
        "token, expected",
        [
            ("A=1", ("A", "1")),
            ("A=", ("A", "")),
            ("=1", ("", "1")),
            ("A=b=c", ("A", "b=c")),
            ("plain", None),
            ("", None),
        ],
    )
    def test_split(self, token: str, expected: tuple[str, str] | None) -> None:
        assert parse_variable(token) == expected


class TestFlattenEnv:
    def test_wine_prefix(self) -> None:
        command = Command("env", ["WINEPREFIX=/x", "wine", "target.lnk"])
        command.flatten_env()
        assert command == Command("wine", ["target.lnk"], [("WINEPREFIX", "/x")])

    def test_appends_after_existing_variables(self) -> None:
        command = Command("env", ["A=1", "B=2", "bin", "x"], [("PRE", "0")])
        command.flatten_env()
        assert command.command == "bin"
        assert command.args == ["x"]
        assert command.variables == [("PRE", "0"), ("A", "1"), ("B", "2")]

    def test_flags_before_binary_are_dropped(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        command = Command("env", ["A=1", "B=2", "--flag", "bin", "arg1", "arg2"])
        with caplog.at_level(logging.DEBUG, logger="deskexec.shellparse.command"):
            command.flatten_env()
        assert command == Command("bin", ["arg1", "arg2"], [("A", "1"), ("B", "2")])
        assert "--flag" in caplog.text

    def test_dash_i(self) -> None:
        command = parse("env -i A=1 bin x")
        assert command is not None
        command.flatten_env()
        assert command == Command("bin", ["x"], [("A", "1")])

    def test_args_after_binary_untouched(self) -> None:
        command = Command("env", ["bin", "A=1", "-v"])
        command.flatten_env()
        assert command == Command("bin", ["A=1", "-v"])

    @pytest.mark.parametrize(
        "args",
        [[], ["A=1", "B=2"], ["-i"], ["-i", "A=1", "--unset=B"]],
    )
    def test_no_binary_is_noop(self, args: list[str]) -> None:
        command = Command("env", list(args))
        command.flatten_env()
        assert command == Command("env", list(args))

    @pytest.mark.parametrize(
        "command",
        [
            Command("bin", ["A=1", "x"]),
            Command("/usr/bin/env", ["A=1", "x"]),
            Command("wine", ["env", "A=1", "x"], [("V", "1")]),
        ],
    )
    def test_not_env_is_noop(self, command: Command) -> None:
        before = Command(command.command, list(command.args), list(command.variables))
        command.flatten_env()
        command.flatten_env()
        assert command == before

    def test_is_env(self) -> None:
        assert Command("env").is_env()
        assert not Command("envy").is_env()


class TestSerialization:
    def test_str_without_args(self) -> None:
        assert str(Command("cmd")) == "cmd"

    def test_str_with_args(self) -> None:
        assert str(Command("cmd", ["a", "b"])) == "cmd a b"

    def test_str_with_variables(self) -> None:
        command = Command("bin", ["x"], [("A", "1"), ("B", "two words")])
        assert str(command) == "A=1 B=two words bin x"

    def test_str_does_not_requote(self) -> None:
        command = parse('cmd "with space"')
        assert command is not None
        assert str(command) == "cmd with space"

    def test_to_tokens(self) -> None:
        command = Command("bin", ["x", "y"], [("A", "1"), ("B", "2")])
        assert command.to_tokens() == ["A=1", "B=2", "bin", "x", "y"]
        assert list(command) == command.to_tokens()

    def test_environment_and_argv(self) -> None:
        command = Command("bin", ["x"], [("A", "1"), ("A", "2"), ("B", "3")])
        assert command.environment() == {"A": "2", "B": "3"}
        assert command.argv() == ["bin", "x"]


class TestSteam:
    def test_not_steam(self) -> None:
        command = parse("notsteam steam://rungameid/221380")
        assert command is not None
        assert command.find_steam_appid() == 221380
        assert not command.is_steam_app()

    def test_steam(self) -> None:
        command = parse("steam steam://rungameid/221380")
        assert command is not None
        assert command.is_steam_app()
        assert command.find_steam_appid() == 221380

    @pytest.mark.parametrize(
        "exec_line",
        [
            "steam steam://rungameid/221380/asd",
            "steam steam://rungameid/",
            "steam steam://rungameid/aaabbb",
            "steam 221380",
            "steam",
            "steam steam://rungameid/18446744073709551616",
            "steam steam://rungameid/-440",
            "steam steam://rungameid/+",
            "steam steam://rungameid/\uff14\uff14\uff10",
        ],
    )
    def test_invalid_appid(self, exec_line: str) -> None:
        command = parse(exec_line)
        assert command is not None
        assert command.find_steam_appid() is None
        assert not command.is_steam_app()

    @pytest.mark.parametrize(
        "appid, expected",
        [("+440", 440), ("0", 0), ("18446744073709551615", 2**64 - 1)],
    )
    def test_appid_bounds(self, appid: str, expected: int) -> None:
        command = Command("steam", [f"steam://rungameid/{appid}"])
        assert command.find_steam_appid() == expected

    def test_separator_characters_are_not_trimmed(self) -> None:
        command = Command("steam", ["\x1fsteam://rungameid/440"])
        assert command.find_steam_appid() is None

    def test_unicode_whitespace_is_trimmed(self) -> None:
        command = Command("steam", ["\xa0steam://rungameid/440\u3000"])
        assert command.find_steam_appid() == 440

    def test_first_matching_arg_wins(self) -> None:
        command = Command(
            "steam", ["-silent", "steam://rungameid/x", "steam://rungameid/10"]
        )
        assert command.find_steam_appid() is None

    def test_surrounding_whitespace_is_ignored(self) -> None:
        command = parse('steam " steam://rungameid/440 "')
        assert command is not None
        assert command.find_steam_appid() == 440

    def test_installed_lookup(self) -> None:
        library = FakeLibrary({221380})
        assert Command("steam", ["steam://rungameid/221380"]).is_steam_app_installed(
            library
        )
        assert not Command("steam", ["steam://rungameid/10"]).is_steam_app_installed(
            library
        )
        assert library.lookups == [221380, 10]

    def test_non_steam_app_skips_lookup(self) -> None:
        library = FakeLibrary({221380})
        command = Command("notsteam", ["steam://rungameid/221380"])
        assert not command.is_steam_app_installed(library)
        assert library.lookups == []
