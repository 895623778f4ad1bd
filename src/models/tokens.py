"""
Token and result data models

Type-safe structures passed between the lexer, the syntax analyzer, the
generator and the pipeline driver.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .keywords import MARKER, Keyword, Kind, keyword_lookup, kind_lookup


@dataclass(frozen=True)
class Token:
    """
    A single lexeme with its source position

    Tokens are created once by the lexer and never mutated. Two subkinds
    exist: keywords (text starts with the marker character) and literals
    (everything else).

    Attributes:
        text: Lexeme exactly as written in the source (e.g. "#Gimmeh", "Hello")
        line: 1-based source line of the first character
        column: 1-based source column of the first character

    Example:
        >>> Token("#hai", 1, 1).keyword
        <Keyword.HAI: '#HAI'>
        >>> Token("Hello", 1, 6).is_literal
        True
    """
    text: str
    line: int = 0
    column: int = 0

    @property
    def keyword(self) -> Optional[Keyword]:
        return keyword_lookup(self.text)

    @property
    def kind(self) -> Optional[Kind]:
        """Kind name this literal spells, if any (HEAD, BOLD, ...)"""
        if self.is_literal:
            return kind_lookup(self.text)
        return None

    @property
    def is_literal(self) -> bool:
        return not self.text.startswith(MARKER)

    def is_(self, keyword: Keyword) -> bool:
        """Check if this token is the given keyword (case-insensitive)"""
        return self.keyword is keyword

    def word_is(self, word: str) -> bool:
        """Check if this token is the literal word given (case-insensitive)"""
        return self.is_literal and self.text.upper() == word.upper()

    def where(self) -> str:
        return f"line {self.line}, column {self.column}"

    def __str__(self) -> str:
        return self.text


TokenStream = Tuple[Token, ...]


@dataclass
class VariableBinding:
    """
    A (name, value) pair recorded by a #I HAZ ... #IT IZ ... definition

    Attributes:
        name: Variable name as written
        value: Bound literal value
    """
    name: str
    value: str

    def matches(self, name: str) -> bool:
        return self.name.upper() == name.upper()


@dataclass
class ParseResult:
    """
    Outcome of a successful syntax analysis

    No tree is built; acceptance plus a side table of names is all the
    syntax analyzer reports.

    Attributes:
        token_count: Number of tokens in the accepted program
        defined_variables: Names seen in variable definitions, first
                           occurrence order, without duplicates
    """
    token_count: int
    defined_variables: List[str] = field(default_factory=list)


@dataclass
class CompileResult:
    """
    Outcome of the tokenize, parse, generate pipeline

    Attributes:
        html: Generated HTML document
        token_count: Number of tokens lexed from the source
        defined_variables: Names defined anywhere in the document
    """
    html: str
    token_count: int
    defined_variables: List[str] = field(default_factory=list)
