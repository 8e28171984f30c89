import pytest

from minishell.environment import Environment


@pytest.fixture
def env():
    return Environment.from_strings(["HOME=/home/user", "PATH=/bin:/usr/bin", "SHELL=/bin/sh"])


def test_from_strings_reads_names_and_values(env):
    assert env.get("HOME") == "/home/user"
    assert env.get("PATH") == "/bin:/usr/bin"
    assert len(env) == 3


def test_value_keeps_later_equal_signs():
    env = Environment.from_strings(["OPTS=a=b=c"])
    assert env.get("OPTS") == "a=b=c"


def test_entry_without_equal_sign_has_empty_value():
    env = Environment.from_strings(["LONELY"])
    assert "LONELY" in env
    assert env.get("LONELY") == ""


def test_missing_variable_is_none(env):
    assert env.get("NOPE") is None
    assert "NOPE" not in env


def test_to_strings_round_trip(env):
    strings = env.to_strings()
    assert strings == ["HOME=/home/user", "PATH=/bin:/usr/bin", "SHELL=/bin/sh"]
    assert Environment.from_strings(strings).to_strings() == strings


def test_set_existing_keeps_position(env):
    env.set("PATH", "/opt")
    assert list(env) == ["HOME", "PATH", "SHELL"]
    assert env.get("PATH") == "/opt"


def test_set_new_appends(env):
    env.set("EDITOR", "vi")
    assert list(env)[-1] == "EDITOR"
    assert env.to_strings()[-1] == "EDITOR=vi"


def test_unset_removes_variable(env):
    env.unset("HOME")
    assert env.get("HOME") is None
    assert list(env) == ["PATH", "SHELL"]


def test_unset_missing_is_noop(env):
    env.unset("NOPE")
    assert len(env) == 3


def test_format_env_matches_source_layout():
    env = Environment.from_strings(["A=1", "B=two"])
    assert env.format_env() == "\033[0;34mA \033[0m= 1\n\033[0;34mB \033[0m= two\n"


def test_format_export_matches_source_layout():
    env = Environment.from_strings(["A=1", "B=two"])
    assert env.format_export() == "declare -x A = 1\ndeclare -x B = two\n"


def test_empty_environment_formats_to_nothing():
    env = Environment.from_strings([])
    assert env.format_env() == ""
    assert env.format_export() == ""
    assert env.to_strings() == []