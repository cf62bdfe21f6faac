"""
Unit tests for env tokens and env files.
"""
import pytest

from runconf.errors import InvalidEnvError
from runconf.PARSERS.env_file_parser import EnvFileParser


def test_parse_from_string():
    content = """
# This is a comment
KEY1=VALUE1
KEY2=
PASSTHROUGH
UNSET
"""
    parser = EnvFileParser(environ={"PASSTHROUGH": "yes"})
    assert parser.parse_from_string(content) == ["KEY1=VALUE1", "KEY2=", "PASSTHROUGH=yes"]


def test_parse_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("A=1\nB=${A}\n")
    assert EnvFileParser(environ={}).parse(str(env_file)) == ["A=1", "B=${A}"]


def test_resolve_tokens():
    parser = EnvFileParser(environ={"HOME": "/home/app"})
    assert parser.resolve_tokens(["A=1=2", "HOME", "NOPE"]) == ["A=1=2", "HOME=/home/app"]


def test_empty_name():
    with pytest.raises(InvalidEnvError):
        EnvFileParser(environ={}).resolve_tokens(["=x"])
