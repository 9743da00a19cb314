from __future__ import annotations

import pytest

from devterm.core.commands.extractor import extract, parse_flag
from devterm.core.commands.tokenizer import tokenize
from devterm.core.common.exceptions import InvalidFlagError
from devterm.core.domain.tokens import Token


def run(text: str):
    remaining, mention, flags = extract(tokenize(text))
    return [t.value for t in remaining], mention, flags


def test_extract_multi_word_mention_and_flag() -> None:
    remaining, mention, flags = run("add todo fix bug @My Side Project --priority=high")

    assert remaining == ["add", "todo", "fix", "bug"]
    assert mention == "My Side Project"
    assert flags == {"priority": "high"}


def test_extract_flags_anywhere_in_the_command() -> None:
    remaining, mention, flags = run("add --priority=low todo fix --status=blocked")

    assert remaining == ["add", "todo", "fix"]
    assert mention is None
    assert flags == {"priority": "low", "status": "blocked"}


def test_flag_without_value_is_boolean() -> None:
    _, _, flags = run("export --verbose")

    assert flags == {"verbose": True}


def test_repeated_flag_keeps_last_value() -> None:
    _, _, flags = run("add todo x --priority=low --priority=high")

    assert flags == {"priority": "high"}


def test_flag_value_may_contain_escaped_equals_and_spaces() -> None:
    _, _, flags = run(r'add note --content="a \= b = c"')

    assert flags == {"content": "a = b = c"}


def test_flag_splits_on_first_unescaped_equals() -> None:
    key, value = parse_flag(Token("--expr=x=y"))

    assert key == "expr"
    assert value == "x=y"


@pytest.mark.parametrize("token", ["--bad-key=1", "--=value", "--", "--sp ace"])
def test_invalid_flag_key_raises(token: str) -> None:
    with pytest.raises(InvalidFlagError):
        parse_flag(Token(token))


def test_empty_mention_is_none() -> None:
    remaining, mention, _ = run("view todos @")

    assert remaining == ["view", "todos"]
    assert mention is None


def test_second_mention_after_flag_stays_positional() -> None:
    remaining, mention, flags = run("search @Alpha --all @Beta")

    assert mention == "Alpha"
    assert flags == {"all": True}
    assert remaining == ["search", "@Beta"]


def test_quoted_flag_like_text_is_positional() -> None:
    remaining, _, flags = run('add note "--not-a-flag"')

    assert remaining == ["add", "note", "--not-a-flag"]
    assert flags == {}
