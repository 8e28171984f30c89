import io
import os

import pytest

from minishell.builtins import (
    EXPORT_ERROR,
    NON_NUMERIC_ARG,
    TOO_MANY_ARGS,
    ShellExit,
    echo,
    env_builtin,
    exit_builtin,
    export,
    is_builtin,
    parse_exit_code,
    pwd,
    run_builtin,
    unset,
)
from minishell.environment import Environment


@pytest.fixture
def env():
    return Environment.from_strings(["HOME=/home/user", "SHELL=/bin/sh"])


def test_echo_joins_with_spaces_and_newline():
    out = io.StringIO()
    assert echo(["hello", "world"], out) == 0
    assert out.getvalue() == "hello world\n"


@pytest.mark.parametrize("flag", ["-n", "-nnnn"])
def test_echo_n_flag_drops_newline(flag):
    out = io.StringIO()
    echo([flag, "-n", "hi"], out)
    assert out.getvalue() == "hi"


@pytest.mark.parametrize("arg", ["-", "-nx", "n"])
def test_echo_non_flags_are_printed(arg):
    out = io.StringIO()
    echo([arg], out)
    assert out.getvalue() == arg + "\n"


def test_echo_no_args_prints_newline():
    out = io.StringIO()
    echo([], out)
    assert out.getvalue() == "\n"


def test_export_sets_variables(env):
    out = io.StringIO()
    assert export(env, ["A=1", "B=x=y"], out) == 0
    assert env.get("A") == "1"
    assert env.get("B") == "x=y"
    assert out.getvalue() == ""


def test_export_replaces_existing(env):
    export(env, ["HOME=/tmp"], io.StringIO())
    assert env.get("HOME") == "/tmp"
    assert list(env) == ["HOME", "SHELL"]


def test_export_without_args_lists(env):
    out = io.StringIO()
    export(env, [], out)
    assert out.getvalue() == env.format_export()
    assert out.getvalue().startswith("declare -x HOME = /home/user\n")


@pytest.mark.parametrize("arg", ["1A=x", "=x", "A-B=x"])
def test_export_invalid_name(env, arg):
    out = io.StringIO()
    assert export(env, [arg, "C=3"], out) == 2
    assert out.getvalue() == EXPORT_ERROR
    assert "C" not in env


def test_export_stops_at_argument_without_equal(env):
    assert export(env, ["A=1", "PLAIN", "B=2"], io.StringIO()) == 0
    assert env.get("A") == "1"
    assert "B" not in env


def test_unset_removes(env):
    assert unset(env, ["HOME", "MISSING"]) == 0
    assert env.to_strings() == ["SHELL=/bin/sh"]


def test_pwd_prints_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = io.StringIO()
    assert pwd(out) == 0
    assert out.getvalue() == os.getcwd() + "\n"


def test_env_builtin_prints_format(env):
    out = io.StringIO()
    env_builtin(env, out)
    assert out.getvalue() == env.format_env()


@pytest.mark.parametrize("text,code", [("42", 42), ("", 0), ("-", 0), ("0", 0)])
def test_parse_exit_code_values(text, code):
    assert parse_exit_code(text) == code


def test_parse_exit_code_wraps_to_byte():
    assert parse_exit_code("-1") == 255
    assert parse_exit_code("256") == 0


@pytest.mark.parametrize("text", ["abc", "+5", "1a", "--1"])
def test_parse_exit_code_rejects(text):
    with pytest.raises(ValueError):
        parse_exit_code(text)


def test_exit_without_args():
    out, err = io.StringIO(), io.StringIO()
    with pytest.raises(ShellExit) as info:
        exit_builtin([], out, err)
    assert info.value.code == 0
    assert out.getvalue() == "exit\n"


def test_exit_with_code():
    out = io.StringIO()
    with pytest.raises(ShellExit) as info:
        exit_builtin(["7"], out, io.StringIO())
    assert info.value.code == 7


def test_exit_too_many_args():
    out, err = io.StringIO(), io.StringIO()
    assert exit_builtin(["1", "2"], out, err) == 0
    assert err.getvalue() == TOO_MANY_ARGS
    assert out.getvalue() == ""


def test_exit_non_numeric():
    err = io.StringIO()
    assert exit_builtin(["abc"], io.StringIO(), err) == 0
    assert err.getvalue() == NON_NUMERIC_ARG


@pytest.mark.parametrize(
    "name,expected",
    [("echo", True), ("export", True), ("exit", True), ("ls", False), ("", False)],
)
def test_is_builtin(name, expected):
    assert is_builtin(name) is expected


def test_run_builtin_dispatches(env):
    out = io.StringIO()
    assert run_builtin("echo", ["a"], env, out, io.StringIO()) == 0
    assert out.getvalue() == "a\n"
    assert run_builtin("export", ["9=x"], env, io.StringIO(), io.StringIO()) == 2
    run_builtin("unset", ["HOME"], env, io.StringIO(), io.StringIO())
    assert "HOME" not in env


def test_run_builtin_rejects_unknown(env):
    with pytest.raises(ValueError):
        run_builtin("ls", [], env, io.StringIO(), io.StringIO())