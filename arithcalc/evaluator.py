import logging
from dataclasses import dataclass
from typing import Optional

from arithcalc.errors import CalculatorError, ErrorKind
from arithcalc.runtime import BinaryOperator, UnaryOperator, eval_binary_operation, eval_unary_operation
from arithcalc.tokenizer import TokenStream, TokenType
from arithcalc.variables import VariableStore

logger = logging.getLogger(__name__)


@dataclass
class ParserError(CalculatorError):
    stage = "Parser"


ADDITIVE_OPERATORS = {
    "+": BinaryOperator.ADD,
    "-": BinaryOperator.SUB,
}

MULTIPLICATIVE_OPERATORS = {
    "*": BinaryOperator.MUL,
    "/": BinaryOperator.DIV,
    "%": BinaryOperator.MOD,
}

UNARY_OPERATORS = {
    "+": UnaryOperator.POS,
    "-": UnaryOperator.NEG,
}


class Evaluator:
    """Recursive-descent evaluator, parsing and computing in a single pass.

    Precedence levels, loosest first: assignment, ``+ -``, ``* / %``, ``^``,
    unary ``+ -``, parentheses, atoms. Every level returns with
    ``stream.current`` set to the first token it did not consume.

    The unary level sits above power, so a sign applies to its atom before
    ``^`` is seen: ``-2^2`` is ``(-2)^2``.

    Variables live as long as the evaluator; everything else is created anew
    for each ``evaluate`` call. Assignments are committed as soon as their
    right-hand side is known, so a fault later in the same expression does
    not undo them.
    """

    def __init__(self, allow_variables: bool = True) -> None:
        self.allow_variables = allow_variables
        self.variables: Optional[VariableStore] = VariableStore() if allow_variables else None

    def evaluate(self, code: str) -> float:
        if not code:
            raise ParserError(ErrorKind.EMPTY_INPUT, "No expression to evaluate")

        stream = TokenStream(code, allow_variables=self.allow_variables)
        stream.advance()
        if stream.current.type is TokenType.NONE:
            raise ParserError(ErrorKind.EMPTY_INPUT, "Empty expression", code=code, error_char_idx=0)

        try:
            result = self._assignment(stream)
        except RecursionError:
            raise ParserError(
                ErrorKind.UNEXPECTED_TOKEN,
                "Expression is nested too deeply",
                code=code,
                error_char_idx=stream.current.position,
            ) from None
        if stream.current.type is not TokenType.NONE:
            raise ParserError(
                ErrorKind.UNEXPECTED_TOKEN,
                f"Unexpected token {stream.current.lexeme!r} after the end of expression",
                code=code,
                error_char_idx=stream.current.position,
            )
        logger.debug("%r evaluated to %r", code, result)
        return result

    def _assignment(self, stream: TokenStream) -> float:
        if stream.current.type is TokenType.VARIABLE:
            target = stream.current
            stream.advance()
            if stream.current.is_delimiter("="):
                stream.advance()
                value = self._assignment(stream)
                self.variables.set(target.lexeme, value)  # type: ignore
                logger.debug("assigned %s = %r", target.lexeme, value)
                return value
            stream.putback()
        return self._add_subtract(stream)

    def _add_subtract(self, stream: TokenStream) -> float:
        result = self._multiply_divide(stream)
        while stream.current.is_delimiter(*ADDITIVE_OPERATORS):
            operator = ADDITIVE_OPERATORS[stream.current.lexeme]
            stream.advance()
            result = eval_binary_operation(operator, result, self._multiply_divide(stream))
        return result

    def _multiply_divide(self, stream: TokenStream) -> float:
        result = self._power(stream)
        while stream.current.is_delimiter(*MULTIPLICATIVE_OPERATORS):
            operator_token = stream.current
            stream.advance()
            result = eval_binary_operation(
                MULTIPLICATIVE_OPERATORS[operator_token.lexeme],
                result,
                self._power(stream),
                code=stream.code,
                error_char_idx=operator_token.position,
            )
        return result

    def _power(self, stream: TokenStream) -> float:
        base = self._unary(stream)
        if stream.current.is_delimiter("^"):
            stream.advance()
            # right-associative: 2^3^2 == 2^(3^2)
            return eval_binary_operation(BinaryOperator.POW, base, self._power(stream))
        return base

    def _unary(self, stream: TokenStream) -> float:
        operator = None
        if stream.current.is_delimiter(*UNARY_OPERATORS):
            operator = UNARY_OPERATORS[stream.current.lexeme]
            stream.advance()
        result = self._parentheses(stream)
        if operator is not None:
            result = eval_unary_operation(operator, result)
        return result

    def _parentheses(self, stream: TokenStream) -> float:
        if not stream.current.is_delimiter("("):
            return self._atom(stream)
        opening = stream.current
        stream.advance()
        result = self._assignment(stream)
        if not stream.current.is_delimiter(")"):
            raise ParserError(
                ErrorKind.UNMATCHED_PARENTHESIS,
                f"Expected closing parenthesis for the one opened at position {opening.position}",
                code=stream.code,
                error_char_idx=stream.current.position,
            )
        stream.advance()
        return result

    def _atom(self, stream: TokenStream) -> float:
        token = stream.current
        if token.type is TokenType.NUMBER:
            try:
                result = float(token.lexeme)
            except ValueError:
                raise ParserError(
                    ErrorKind.INVALID_NUMERIC_LITERAL,
                    f"Invalid numeric format: {token.lexeme!r}",
                    code=stream.code,
                    error_char_idx=token.position,
                ) from None
        elif token.type is TokenType.VARIABLE:
            result = self.variables.get(token.lexeme)  # type: ignore
        elif token.type is TokenType.NONE:
            raise ParserError(
                ErrorKind.UNEXPECTED_TOKEN,
                "Unexpected end of expression",
                code=stream.code,
                error_char_idx=token.position,
            )
        else:
            raise ParserError(
                ErrorKind.UNEXPECTED_TOKEN,
                f"Unexpected token {token.lexeme!r}",
                code=stream.code,
                error_char_idx=token.position,
            )
        stream.advance()
        return result


def construct_evaluator(allow_variables: bool = True) -> Evaluator:
    return Evaluator(allow_variables=allow_variables)


def evaluate(evaluator: Evaluator, code: str) -> float:
    return evaluator.evaluate(code)
