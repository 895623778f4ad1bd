"""
Lexical analyzer for lolmark source

Turns raw characters into an ordered, immutable token sequence.

Scanning is character by character: non-whitespace characters accumulate
into a pending lexeme, and whitespace (or end of input) finalizes it. Every
finalized lexeme is validated before it is kept:

- a lexeme starting with '#' must be in the keyword vocabulary
  (#HAI, #KTHXBYE, #OBTW, #TLDR, #MAEK, #OIC, #GIMMEH, #MKAY and the
  compound heads #I, #IT, #LEMME), compared case-insensitively;
- a lexeme carrying '#' anywhere after its first character is rejected;
- anything else is a literal and always accepted.

The first invalid lexeme raises LexicalError. There is no partial result.

Example:
    >>> tokens = Lexer("#HAI hello #KTHXBYE").tokenize()
    >>> [t.text for t in tokens]
    ['#HAI', 'hello', '#KTHXBYE']
"""

from typing import List

from ..models.keywords import MARKER, keyword_lookup
from ..models.tokens import Token, TokenStream
from .errors import LexicalError
from .log import LOG


class Lexer:
    """
    Character-level scanner producing lolmark tokens

    Attributes:
        source: Source text being scanned
        position: Index of the next character to read
        line: Current line number (1-based)
        column: Current column number (1-based)
        lexeme: Characters of the token under construction
        tokens: Finalized tokens, in source order
    """

    def __init__(self, source: str):
        self.source = source
        self.position = 0
        self.line = 1
        self.column = 1
        self.lexeme: List[str] = []
        self.lexeme_line = 1
        self.lexeme_column = 1
        self.tokens: List[Token] = []

    def tokenize(self) -> TokenStream:
        """
        Scan the whole source into tokens

        Returns:
            Tuple of Tokens in source order; empty for blank input

        Raises:
            LexicalError: On the first unrecognized '#' lexeme
        """
        while self.position < len(self.source):
            c = self.char_get()
            if c.isspace():
                self.lexeme_finalize()
            else:
                self.char_add(c)
        self.lexeme_finalize()

        LOG(f"Lexed {len(self.tokens)} tokens", level=3)
        return tuple(self.tokens)

    def char_get(self) -> str:
        """Read the next character and advance line/column bookkeeping"""
        c = self.source[self.position]
        self.position += 1
        if c == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return c

    def char_add(self, c: str) -> None:
        """Append a character to the pending lexeme, remembering where it began"""
        if not self.lexeme:
            # column was already advanced past c
            self.lexeme_line = self.line
            self.lexeme_column = self.column - 1
        self.lexeme.append(c)

    def lexeme_finalize(self) -> None:
        """Validate and store the pending lexeme, if any"""
        if not self.lexeme:
            return
        token = Token(''.join(self.lexeme), self.lexeme_line, self.lexeme_column)
        self.lexeme = []
        self.lexeme_validate(token)
        self.tokens.append(token)

    def lexeme_validate(self, token: Token) -> None:
        """
        Reject misused marker characters

        Raises:
            LexicalError: If the lexeme starts with '#' but is not a keyword,
                          or carries '#' past its first character
        """
        text = token.text
        if MARKER in text[1:]:
            raise LexicalError.at(f"'{MARKER}' is misused in token '{text}'", token)
        if text.startswith(MARKER) and keyword_lookup(text) is None:
            raise LexicalError.at(f"'{text}' is not a recognized annotation", token)


def tokenize(source: str) -> TokenStream:
    """Convenience wrapper: Lexer(source).tokenize()"""
    return Lexer(source).tokenize()
