import pytest

from calculation.errors import ErrorKind
from calculation.tokenizer import Token, TokenizerError, TokenType, tokenize


def test_tokenize() -> None:
    assert tokenize(" (1.5+ 20)*3 ") == [
        Token(TokenType.BRACKET_OPEN, "(", 1),
        Token(TokenType.NUMBER, "1.5", 2),
        Token(TokenType.PLUS, "+", 5),
        Token(TokenType.NUMBER, "20", 7),
        Token(TokenType.BRACKET_CLOSE, ")", 9),
        Token(TokenType.STAR, "*", 10),
        Token(TokenType.NUMBER, "3", 11),
    ]


def test_number_token_value() -> None:
    (token,) = tokenize(".25")
    assert token.type is TokenType.NUMBER
    assert token.value == 0.25


@pytest.mark.parametrize(
    "code, expected_kind, expected_idx",
    [
        pytest.param("", ErrorKind.EMPTY_INPUT, 0),
        pytest.param(" \t\n", ErrorKind.EMPTY_INPUT, 3),
        pytest.param("1 + a", ErrorKind.UNEXPECTED_TOKEN, 4),
        pytest.param("1 + ²", ErrorKind.UNEXPECTED_TOKEN, 4),
        pytest.param("\u00a01", ErrorKind.UNEXPECTED_TOKEN, 0),
        pytest.param("1 + 2..5", ErrorKind.MULTIPLE_DECIMAL_POINTS, 6),
        pytest.param("1 + .", ErrorKind.INVALID_NUMBER, 4),
    ],
)
def test_tokenizer_errors(code: str, expected_kind: ErrorKind, expected_idx: int) -> None:
    with pytest.raises(TokenizerError) as exc_info:
        tokenize(code)
    assert exc_info.value.kind is expected_kind
    assert exc_info.value.error_char_idx == expected_idx


def test_tokenizer_error_points_at_character() -> None:
    with pytest.raises(TokenizerError) as exc_info:
        tokenize("2 $ 3")
    assert str(exc_info.value).splitlines() == [
        "[Tokenizer error] UNEXPECTED_TOKEN: Unexpected character: '$'",
        "2 $ 3",
        "  ^",
    ]
