"""
Exception hierarchy for the lolmark compiler

Every stage raises a subclass of LolcodeError on the first violation it
finds; nothing is recovered. The CLI catches LolcodeError, prints it and
exits without writing output.
"""

from typing import Optional, Type, TypeVar

from ..models.tokens import Token

E = TypeVar("E", bound="LolcodeError")


class LolcodeError(Exception):
    """
    Base class for all compilation errors

    Attributes:
        message: Human-readable description of the violation
        lexeme: Offending lexeme, or None at end of input
        line: 1-based source line, 0 if unknown
        column: 1-based source column, 0 if unknown
    """

    label = "Compilation error"

    def __init__(
        self,
        message: str,
        lexeme: Optional[str] = None,
        line: int = 0,
        column: int = 0,
    ) -> None:
        self.message = message
        self.lexeme = lexeme
        self.line = line
        self.column = column
        super().__init__(self.diagnostic())

    @classmethod
    def at(cls: Type[E], message: str, token: Optional[Token]) -> E:
        """Build an error located at a token (None means end of input)"""
        if token is None:
            return cls(message)
        return cls(message, lexeme=token.text, line=token.line, column=token.column)

    def diagnostic(self) -> str:
        where = f" (line {self.line}, column {self.column})" if self.line else ""
        return f"{self.label}: {self.message}{where}"


class LexicalError(LolcodeError):
    """A '#' lexeme outside the keyword vocabulary, or a misplaced '#'"""

    label = "Lexical error"


class LolSyntaxError(LolcodeError):
    """The token sequence does not derive from the grammar"""

    label = "Syntax error"


class StaticSemanticError(LolcodeError):
    """A variable is used but has no binding in scope"""

    label = "Static semantic error"
