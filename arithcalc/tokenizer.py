import enum
import string
from dataclasses import dataclass
from typing import Optional

from arithcalc.errors import CalculatorError, ErrorKind
from arithcalc.utils import PrintableEnum


@dataclass
class TokenizerError(CalculatorError):
    stage = "Tokenizer"


class TokenType(PrintableEnum):
    NONE = enum.auto()
    DELIMITER = enum.auto()
    VARIABLE = enum.auto()
    NUMBER = enum.auto()


@dataclass
class Token:
    type: TokenType
    lexeme: str
    position: int

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"

    def is_delimiter(self, *lexemes: str) -> bool:
        return self.type is TokenType.DELIMITER and self.lexeme in lexemes


DELIMITERS = frozenset("+-*/%^=()")


def _is_valid_in_number(s: str) -> bool:
    return s in string.digits or s == "."


def _is_letter(s: str) -> bool:
    return s in string.ascii_letters


class TokenStream:
    """Scans ``code`` one token at a time.

    ``current`` always holds the next unconsumed token. ``putback`` undoes the
    last ``advance`` exactly, using the token and position saved before it.
    """

    def __init__(self, code: str, allow_variables: bool = True) -> None:
        self.code = code
        self.allow_variables = allow_variables
        self.pos = 0
        self.current = Token(type=TokenType.NONE, lexeme="", position=0)
        self._saved: Optional[tuple[Token, int]] = None

    def advance(self) -> Token:
        self._saved = (self.current, self.pos)
        self.current = self._scan()
        return self.current

    def putback(self) -> None:
        if self._saved is None:
            raise RuntimeError("Only one token can be put back")
        self.current, self.pos = self._saved
        self._saved = None

    def _scan(self) -> Token:
        code = self.code
        i = self.pos
        while i < len(code) and code[i].isspace():
            i += 1
        self.pos = i

        if i >= len(code):
            return Token(type=TokenType.NONE, lexeme="", position=i)

        char = code[i]
        if char in DELIMITERS:
            self.pos = i + 1
            return Token(type=TokenType.DELIMITER, lexeme=char, position=i)
        elif _is_letter(char) and self.allow_variables:
            if i + 1 < len(code) and _is_letter(code[i + 1]):
                raise TokenizerError(
                    ErrorKind.INVALID_VARIABLE_NAME,
                    "Bad variable name, only single letters A-Z are allowed",
                    code=code,
                    error_char_idx=i + 1,
                )
            self.pos = i + 1
            return Token(type=TokenType.VARIABLE, lexeme=char.upper(), position=i)
        elif _is_valid_in_number(char):
            number_end_idx = i + 1
            while number_end_idx < len(code) and _is_valid_in_number(code[number_end_idx]):
                number_end_idx += 1
            self.pos = number_end_idx
            return Token(type=TokenType.NUMBER, lexeme=code[i:number_end_idx], position=i)
        else:
            raise TokenizerError(
                ErrorKind.UNEXPECTED_TOKEN,
                f"Unexpected character: {char!r}",
                code=code,
                error_char_idx=i,
            )


def tokenize(code: str, allow_variables: bool = True) -> list[Token]:
    stream = TokenStream(code, allow_variables=allow_variables)
    tokens = [stream.advance()]
    while tokens[-1].type is not TokenType.NONE:
        tokens.append(stream.advance())
    return tokens
