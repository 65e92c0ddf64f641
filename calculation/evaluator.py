import enum
import math
import operator
from dataclasses import dataclass, field
from typing import Callable, Optional

from calculation.errors import CalculationError, ErrorKind
from calculation.tokenizer import Token, TokenType, tokenize
from calculation.utils import PrintableEnum


@dataclass
class EvaluatorError(CalculationError):
    tokens: list[Token]
    error_token_idx: int

    def __str__(self) -> str:
        source = _render_tokens(self.tokens)
        if self.error_token_idx < len(self.tokens):
            caret_idx = self.tokens[self.error_token_idx].position - self.tokens[0].position
        else:
            caret_idx = len(source)
        return "\n".join([f"[Evaluator error] {self.kind}: {self.errmsg}", source, " " * caret_idx + "^"])


def _render_tokens(tokens: list[Token]) -> str:
    """Lays lexemes out at their source positions, so that carets line up with the input"""
    if not tokens:
        return ""
    offset = tokens[0].position
    chars: list[str] = []
    for token in tokens:
        chars.extend(" " * (token.position - offset - len(chars)))
        chars.extend(token.lexeme)
    return "".join(chars)


class Associativity(PrintableEnum):
    LEFT = enum.auto()
    RIGHT = enum.auto()


@dataclass(frozen=True)
class OperatorInfo:
    symbol: str
    precedence: int
    associativity: Associativity
    apply: Callable[[float, float], float]


OPERATORS: dict[TokenType, OperatorInfo] = {
    TokenType.PLUS: OperatorInfo("+", precedence=1, associativity=Associativity.LEFT, apply=operator.add),
    TokenType.MINUS: OperatorInfo("-", precedence=1, associativity=Associativity.LEFT, apply=operator.sub),
    TokenType.STAR: OperatorInfo("*", precedence=2, associativity=Associativity.LEFT, apply=operator.mul),
    TokenType.SLASH: OperatorInfo("/", precedence=2, associativity=Associativity.LEFT, apply=operator.truediv),
}


def should_pop(stacked: OperatorInfo, incoming: OperatorInfo) -> bool:
    if stacked.precedence != incoming.precedence:
        return stacked.precedence > incoming.precedence
    return incoming.associativity is Associativity.LEFT


@dataclass
class EvaluationState:
    """Operand and operator stacks of a single evaluation call

    The operator stack holds indices into ``tokens``, pointing at pending
    operators and unclosed brackets.
    """

    tokens: list[Token]
    operands: list[float] = field(default_factory=list)
    operators: list[int] = field(default_factory=list)

    def error(self, kind: ErrorKind, errmsg: str, token_idx: int) -> EvaluatorError:
        return EvaluatorError(kind, errmsg, tokens=self.tokens, error_token_idx=token_idx)

    def top_operator(self) -> Optional[OperatorInfo]:
        if not self.operators:
            return None
        return OPERATORS.get(self.tokens[self.operators[-1]].type)

    def apply_operator(self, token_idx: int) -> None:
        info = OPERATORS[self.tokens[token_idx].type]
        if len(self.operands) < 2:
            raise self.error(
                ErrorKind.NOT_ENOUGH_VALUES,
                f"Operator {info.symbol!r} needs 2 operands, {len(self.operands)} available",
                token_idx,
            )
        right = self.operands.pop()
        left = self.operands.pop()
        if self.tokens[token_idx].type is TokenType.SLASH and right == 0:
            raise self.error(ErrorKind.DIVISION_BY_ZERO, "Division by zero", token_idx)
        result = info.apply(left, right)
        if not math.isfinite(result):
            raise self.error(ErrorKind.INVALID_NUMBER, f"Result of {info.symbol!r} is out of range", token_idx)
        self.operands.append(result)

    def apply_until_bracket(self) -> bool:
        """Applies stacked operators down to the nearest open bracket; returns whether one was found"""
        while self.operators:
            token_idx = self.operators.pop()
            if self.tokens[token_idx].type is TokenType.BRACKET_OPEN:
                return True
            self.apply_operator(token_idx)
        return False


def evaluate(tokens: list[Token]) -> float:
    if not tokens:
        raise EvaluatorError(ErrorKind.EMPTY_INPUT, "No tokens to evaluate", tokens=tokens, error_token_idx=0)
    if not any(t.type is TokenType.NUMBER for t in tokens):
        raise EvaluatorError(
            ErrorKind.INVALID_EXPRESSION, "Expression contains no numbers", tokens=tokens, error_token_idx=0
        )

    state = EvaluationState(tokens)
    expect_operand = True
    for i, token in enumerate(tokens):
        if token.type is TokenType.NUMBER:
            if not expect_operand:
                raise state.error(ErrorKind.INVALID_EXPRESSION, "Operator expected, found number", i)
            try:
                state.operands.append(token.value)
            except ValueError:
                raise state.error(ErrorKind.INVALID_NUMBER, f"Invalid number literal {token.lexeme!r}", i) from None
            expect_operand = False
        elif token.type in OPERATORS:
            if expect_operand:
                raise state.error(ErrorKind.INVALID_OPERATOR, f"Operand expected, found {token.lexeme!r}", i)
            incoming = OPERATORS[token.type]
            while (stacked := state.top_operator()) is not None and should_pop(stacked, incoming):
                state.apply_operator(state.operators.pop())
            state.operators.append(i)
            expect_operand = True
        elif token.type is TokenType.BRACKET_OPEN:
            if not expect_operand:
                raise state.error(ErrorKind.INVALID_EXPRESSION, "Operator expected, found bracket", i)
            state.operators.append(i)
        elif token.type is TokenType.BRACKET_CLOSE:
            if expect_operand:
                if i == 0:
                    raise state.error(ErrorKind.MISMATCHED_PARENTHESES, "Closing bracket without opening one", i)
                elif tokens[i - 1].type is TokenType.BRACKET_OPEN:
                    raise state.error(ErrorKind.INVALID_EXPRESSION, "Empty parenthesis", i)
                else:
                    raise state.error(ErrorKind.OPERATOR_AT_END, "Operator before closing bracket", i - 1)
            if not state.apply_until_bracket():
                raise state.error(ErrorKind.MISMATCHED_PARENTHESES, "Closing bracket without opening one", i)
        else:
            raise state.error(ErrorKind.UNEXPECTED_TOKEN, f"Unexpected token {token}", i)

    if expect_operand:
        if tokens[-1].type in OPERATORS:
            raise state.error(ErrorKind.OPERATOR_AT_END, "Expression ends with an operator", len(tokens) - 1)
        raise state.error(ErrorKind.MISMATCHED_PARENTHESES, "Unclosed bracket", len(tokens) - 1)

    while state.operators:
        token_idx = state.operators.pop()
        if tokens[token_idx].type is TokenType.BRACKET_OPEN:
            raise state.error(ErrorKind.MISMATCHED_PARENTHESES, "Unclosed bracket", token_idx)
        state.apply_operator(token_idx)

    if len(state.operands) != 1:
        raise state.error(
            ErrorKind.INVALID_EXPRESSION, f"{len(state.operands)} values left after evaluation", len(tokens)
        )
    return state.operands[0]


def calc(expression: str) -> float:
    return evaluate(tokenize(expression))
