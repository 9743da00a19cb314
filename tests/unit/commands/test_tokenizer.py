from __future__ import annotations

import pytest

from devterm.core.commands.tokenizer import split_batch, tokenize
from devterm.core.common.exceptions import UnterminatedQuoteError


def values(text: str) -> list[str]:
    return [token.value for token in tokenize(text)]


def test_tokenize_splits_on_whitespace() -> None:
    assert values("add   todo  fix") == ["add", "todo", "fix"]


def test_tokenize_groups_quoted_text() -> None:
    tokens = tokenize('add todo "fix the bug" \'and test\'')

    assert [t.value for t in tokens] == ["add", "todo", "fix the bug", "and test"]
    assert tokens[2].was_quoted is True
    assert tokens[2].starts_quoted is True
    assert tokens[0].was_quoted is False


def test_tokenize_keeps_batch_separator_inside_quotes() -> None:
    assert values('add todo "fix && test"') == ["add", "todo", "fix && test"]


def test_tokenize_newline_escape_inside_flag_value() -> None:
    tokens = tokenize(r'--content="Line 1\nLine 2"')

    assert len(tokens) == 1
    assert tokens[0].value == "--content=Line 1\nLine 2"
    assert tokens[0].is_flag is True


def test_tokenize_escaped_quotes_do_not_toggle_quote_mode() -> None:
    assert values(r'"say \"hi\"" done') == ['say "hi"', "done"]
    assert values(r"it\'s") == ["it's"]


def test_tokenize_escaped_backslash() -> None:
    assert values(r"a\\b") == ["a\\b"]


def test_tokenize_keeps_unknown_escape_literally() -> None:
    assert values(r"C:\temp") == [r"C:\temp"]


def test_tokenize_trailing_backslash_is_literal() -> None:
    assert values("end\\") == ["end\\"]


def test_tokenize_other_quote_kind_is_literal_inside_quotes() -> None:
    assert values("\"it's fine\"") == ["it's fine"]
    assert values("'say \"x\"'") == ['say "x"']


def test_tokenize_empty_quotes_produce_empty_token() -> None:
    tokens = tokenize('note "" end')

    assert [t.value for t in tokens] == ["note", "", "end"]
    assert tokens[1].was_quoted is True


def test_tokenize_adjacent_quoted_and_bare_text_form_one_token() -> None:
    tokens = tokenize('abc"def ghi"')

    assert [t.value for t in tokens] == ["abcdef ghi"]
    assert tokens[0].was_quoted is True
    assert tokens[0].starts_quoted is False


def test_quoted_leading_characters_are_not_mentions_or_flags() -> None:
    mention, flag = tokenize('"@Alpha" "--priority=high"')

    assert mention.is_mention is False
    assert flag.is_flag is False


def test_tokenize_unterminated_quote_raises_with_position() -> None:
    with pytest.raises(UnterminatedQuoteError) as exc_info:
        tokenize('add "oops')

    assert exc_info.value.quote_char == '"'
    assert exc_info.value.position == 4


@pytest.mark.parametrize(
    "text",
    ['plain words', '"quoted words"', "'single' and \"double\"", r'"escaped \" quote"'],
)
def test_tokenize_balanced_input_leaves_no_unescaped_quotes(text: str) -> None:
    for token in tokenize(text):
        assert token.value.count('"') == text.count(r"\"")


def test_split_batch_splits_outside_quotes() -> None:
    assert split_batch('/add todo "fix bug" && /add note "notes"') == [
        '/add todo "fix bug"',
        '/add note "notes"',
    ]


def test_split_batch_keeps_quoted_separator() -> None:
    assert split_batch('/add todo "fix && test"') == ['/add todo "fix && test"']


def test_split_batch_ignores_escaped_quote() -> None:
    assert split_batch(r'/add note "a \" && b" && /view notes') == [
        r'/add note "a \" && b"',
        "/view notes",
    ]


def test_split_batch_drops_empty_segments() -> None:
    assert split_batch("/help &&  && /view todos &&") == ["/help", "/view todos"]
    assert split_batch("   ") == []
