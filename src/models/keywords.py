"""
Keyword vocabulary and construct models

Defines the closed set of marker keywords recognised by the lexer, the kind
names that follow block/inline openers, and the construct kinds tracked on
the generator's open-construct stack.
"""

from enum import Enum
from typing import Dict, Optional


MARKER = "#"


class Keyword(Enum):
    """
    Closed vocabulary of `#`-prefixed lexemes

    Each member's value is the canonical (upper case) lexeme. Matching is
    case-insensitive, see keyword_lookup().
    """
    HAI = "#HAI"
    KTHXBYE = "#KTHXBYE"
    OBTW = "#OBTW"
    TLDR = "#TLDR"
    MAEK = "#MAEK"
    OIC = "#OIC"
    GIMMEH = "#GIMMEH"
    MKAY = "#MKAY"
    I = "#I"
    IT = "#IT"
    LEMME = "#LEMME"


_BY_LEXEME: Dict[str, Keyword] = {kw.value: kw for kw in Keyword}

# Second words of the compound phrases, keyed by their head
COMPOUND_TAILS: Dict[Keyword, str] = {
    Keyword.I: "HAZ",
    Keyword.IT: "IZ",
    Keyword.LEMME: "SEE",
}


def keyword_lookup(lexeme: str) -> Optional[Keyword]:
    """
    Map a raw lexeme to its Keyword, ignoring case

    Args:
        lexeme: Raw token text (e.g. "#hai", "#Mkay")

    Returns:
        Matching Keyword, or None if the lexeme is not in the vocabulary

    Example:
        >>> keyword_lookup("#Hai")
        <Keyword.HAI: '#HAI'>
        >>> keyword_lookup("#NOPE") is None
        True
    """
    return _BY_LEXEME.get(lexeme.upper())


class Kind(Enum):
    """Kind names that follow #MAEK or #GIMMEH"""
    HEAD = "HEAD"
    PARAGRAF = "PARAGRAF"
    LIST = "LIST"
    TITLE = "TITLE"
    BOLD = "BOLD"
    ITALICS = "ITALICS"
    ITEM = "ITEM"
    NEWLINE = "NEWLINE"
    SOUNDZ = "SOUNDZ"
    VIDZ = "VIDZ"


def kind_lookup(lexeme: Optional[str]) -> Optional[Kind]:
    """Map a literal word to its Kind, ignoring case"""
    if lexeme is None:
        return None
    try:
        return Kind(lexeme.upper())
    except ValueError:
        return None


class Construct(Enum):
    """
    Entries of the generator's open-construct stack

    Block constructs close on #OIC, inline constructs on #MKAY. The value
    is the (opening, closing) HTML tag pair.
    """
    HEAD = ("<head>\n", "</head>\n")
    PARAGRAF = ("<p>", "</p>\n")
    LIST = ("<ul>", "</ul>\n")
    TITLE = ("<title>", "</title>\n")
    BOLD = ("<b>", "</b>\n")
    ITALICS = ("<i>", "</i>\n")
    ITEM = ("<li>", "</li>\n")

    @property
    def openTag(self) -> str:
        return self.value[0]

    @property
    def closeTag(self) -> str:
        return self.value[1]

    @property
    def is_block(self) -> bool:
        return self in BLOCK_CONSTRUCTS.values()

    @property
    def is_inline(self) -> bool:
        return self in INLINE_CONSTRUCTS.values()


BLOCK_CONSTRUCTS: Dict[Kind, Construct] = {
    Kind.HEAD: Construct.HEAD,
    Kind.PARAGRAF: Construct.PARAGRAF,
    Kind.LIST: Construct.LIST,
}

INLINE_CONSTRUCTS: Dict[Kind, Construct] = {
    Kind.TITLE: Construct.TITLE,
    Kind.BOLD: Construct.BOLD,
    Kind.ITALICS: Construct.ITALICS,
    Kind.ITEM: Construct.ITEM,
}
