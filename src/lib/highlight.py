"""
Custom Pygments lexer for lolmark syntax highlighting

Provides highlighted listings of .lol source documents, written next to the
compiled page when the CLI is run with --listing.

Token types:
- Comment.Multiline: #OBTW ... #TLDR blocks
- Keyword: structural markers (#HAI, #MAEK, #GIMMEH, #OIC, #MKAY, ...)
- Keyword.Declaration: variable phrases (#I HAZ, #IT IZ, #LEMME SEE)
- Name.Tag: kind names after an opener (HEAD, PARAGRAF, BOLD, ...)
- Text: everything else
"""

import re

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import RegexLexer, bygroups
from pygments.token import Comment, Keyword, Name, Text, Whitespace

KIND_NAMES = r'(HEAD|PARAGRAF|LIST|TITLE|BOLD|ITALICS|ITEM|NEWLINE|SOUNDZ|VIDZ)'


class LolmarkLexer(RegexLexer):
    """
    Lexer for lolmark annotation markup

    Example:
        #HAI #MAEK HEAD #GIMMEH TITLE Hello #MKAY #OIC #KTHXBYE

    Tokens:
        #HAI, #MAEK, #GIMMEH, #MKAY, #OIC, #KTHXBYE → Keyword
        HEAD, TITLE → Name.Tag
        Hello → Text
    """

    name = 'Lolmark'
    aliases = ['lolmark', 'lol']
    filenames = ['*.lol']
    flags = re.IGNORECASE | re.MULTILINE

    tokens = {
        'root': [
            (r'\s+', Whitespace),

            # Comments run to #TLDR
            (r'#OBTW(?=\s|$)', Comment.Multiline, 'comment'),

            # Variable phrases
            (r'(#I)(\s+)(HAZ)(?=\s|$)', bygroups(Keyword.Declaration, Whitespace, Keyword.Declaration)),
            (r'(#IT)(\s+)(IZ)(?=\s|$)', bygroups(Keyword.Declaration, Whitespace, Keyword.Declaration)),
            (r'(#LEMME)(\s+)(SEE)(?=\s|$)', bygroups(Keyword.Declaration, Whitespace, Keyword.Declaration)),

            # Openers followed by their kind name
            (r'(#MAEK|#GIMMEH)(\s+)' + KIND_NAMES + r'(?=\s|$)',
             bygroups(Keyword, Whitespace, Name.Tag)),

            # Remaining structural markers
            (r'#(HAI|KTHXBYE|MAEK|OIC|GIMMEH|MKAY|TLDR)(?=\s|$)', Keyword),

            # Plain words
            (r'\S+', Text),
        ],

        'comment': [
            (r'#TLDR(?=\s|$)', Comment.Multiline, '#pop'),
            (r'\s+', Comment.Multiline),
            (r'\S+', Comment.Multiline),
        ],
    }


def get_lexer() -> LolmarkLexer:
    """
    Get the LolmarkLexer instance

    Returns:
        LolmarkLexer instance ready for use with Pygments
    """
    return LolmarkLexer()


def listing_render(source: str, style: str = "default", title: str = "lolmark source") -> str:
    """
    Render lolmark source as a standalone highlighted HTML page

    Args:
        source: lolmark document text
        style: Pygments style name
        title: Page title

    Returns:
        Complete HTML document with inline styles and line numbers
    """
    formatter = HtmlFormatter(style=style, full=True, linenos='table', title=title)
    return highlight(source, get_lexer(), formatter)
