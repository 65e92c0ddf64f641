import enum
import math
import string
from dataclasses import dataclass

from calculation.errors import CalculationError, ErrorKind
from calculation.utils import PrintableEnum


@dataclass
class TokenizerError(CalculationError):
    code: str
    error_char_idx: int

    def __str__(self) -> str:
        print_start_idx = max(0, self.error_char_idx - 10)
        print_ellipsis_pre = print_start_idx > 0
        print_end_idx = min(len(self.code), self.error_char_idx + 10)
        print_ellipsis_post = print_end_idx < len(self.code)
        return "\n".join(
            [
                f"[Tokenizer error] {self.kind}: {self.errmsg}",
                (
                    ("..." if print_ellipsis_pre else "")
                    + f"{self.code[print_start_idx:print_end_idx]}"
                    + ("..." if print_ellipsis_post else "")
                ),
                " " * (self.error_char_idx - print_start_idx + (3 if print_ellipsis_pre else 0)) + "^",
            ]
        )


class TokenType(PrintableEnum):
    NUMBER = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    STAR = enum.auto()
    SLASH = enum.auto()
    BRACKET_OPEN = enum.auto()
    BRACKET_CLOSE = enum.auto()


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    position: int

    @property
    def value(self) -> float:
        return float(self.lexeme)

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"


# ASCII only, str.isdigit() and str.isspace() also accept "\u00b2" and "\u00a0"
DIGITS = frozenset(string.digits)
WHITESPACE = frozenset(string.whitespace)
DECIMAL_POINT = "."


def _is_valid_in_number(s: str) -> bool:
    return s in DIGITS or s == DECIMAL_POINT


SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "(": TokenType.BRACKET_OPEN,
    ")": TokenType.BRACKET_CLOSE,
}


def tokenize(code: str) -> list[Token]:
    if all(c in WHITESPACE for c in code):
        raise TokenizerError(ErrorKind.EMPTY_INPUT, "Empty input", code=code, error_char_idx=len(code))

    i = 0
    tokens: list[Token] = []
    while i < len(code):
        if _is_valid_in_number(code[i]):
            number_end_idx = _consume_number(code, i)
            tokens.append(Token(type=TokenType.NUMBER, lexeme=code[i:number_end_idx], position=i))
            i = number_end_idx - 1  # to account for += 1 later
        elif code[i] in SINGLE_CHAR_TOKENS:
            tokens.append(Token(type=SINGLE_CHAR_TOKENS[code[i]], lexeme=code[i], position=i))
        elif code[i] in WHITESPACE:
            pass
        else:
            raise TokenizerError(
                ErrorKind.UNEXPECTED_TOKEN, f"Unexpected character: {code[i]!r}", code=code, error_char_idx=i
            )
        i += 1

    return tokens


def _consume_number(code: str, start_idx: int) -> int:
    """Returns the index right after the number literal starting at start_idx"""
    decimal_point_idx = None
    end_idx = start_idx
    while end_idx < len(code) and _is_valid_in_number(code[end_idx]):
        if code[end_idx] == DECIMAL_POINT:
            if decimal_point_idx is not None:
                raise TokenizerError(
                    ErrorKind.MULTIPLE_DECIMAL_POINTS,
                    f"Second decimal point in number literal, first one at position {decimal_point_idx}",
                    code=code,
                    error_char_idx=end_idx,
                )
            decimal_point_idx = end_idx
        end_idx += 1

    literal = code[start_idx:end_idx]
    if literal == DECIMAL_POINT:
        raise TokenizerError(
            ErrorKind.INVALID_NUMBER, "Decimal point without digits", code=code, error_char_idx=start_idx
        )
    if not math.isfinite(float(literal)):
        raise TokenizerError(
            ErrorKind.INVALID_NUMBER, f"Number is too large: {literal[:10]}...", code=code, error_char_idx=start_idx
        )
    return end_idx
