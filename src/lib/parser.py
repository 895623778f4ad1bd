"""
Syntax analyzer for lolmark token streams

Recursive descent over the token tuple, one procedure per nonterminal:

    lolcode        ::= #HAI comment? head body #KTHXBYE
    head           ::= #MAEK HEAD title #OIC
    title          ::= #GIMMEH TITLE TEXT* #MKAY
    comment        ::= #OBTW TEXT* #TLDR
    body           ::= innerBody body | ε
    innerBody      ::= paragraph | bold | italics | list | audio | video
                     | newline | varDefine | varUse | TEXT | comment
    paragraph      ::= #MAEK PARAGRAF varDefine? innerParagraph #OIC
    innerParagraph ::= innerText innerParagraph | ε
    innerText      ::= varUse | bold | italics | list | audio | video
                     | newline | TEXT
    varDefine      ::= #I HAZ NAME #IT IZ TEXT #MKAY
    varUse         ::= #LEMME SEE NAME #MKAY
    bold           ::= #GIMMEH BOLD TEXT+ #MKAY
    italics        ::= #GIMMEH ITALICS TEXT+ #MKAY
    list           ::= #MAEK LIST listItems #OIC
    listItems      ::= #GIMMEH ITEM innerListItem #MKAY listItems | ε
    innerListItem  ::= TEXT* ((bold | italics) TEXT*)?
    audio          ::= #GIMMEH SOUNDZ ADDRESS #MKAY
    video          ::= #GIMMEH VIDZ ADDRESS #MKAY
    newline        ::= #GIMMEH NEWLINE

The parser holds a cursor, the current token, and can peek one token
further without consuming; #GIMMEH and #MAEK are dispatched on that peek.
No tree is built. The only outputs are acceptance and the list of
variable names seen in definitions. Every violation raises LolSyntaxError.

Example:
    >>> from lolmark.lib.lexer import tokenize
    >>> tokens = tokenize("#HAI #MAEK HEAD #GIMMEH TITLE Hi #MKAY #OIC #KTHXBYE")
    >>> Parser(tokens).parse().token_count
    9
"""

from typing import List, Optional

from ..models.keywords import COMPOUND_TAILS, Keyword, Kind
from ..models.tokens import Token, TokenStream, ParseResult
from .errors import LolSyntaxError
from .log import LOG


class Parser:
    """
    Recursive-descent validator for the lolmark grammar

    Attributes:
        tokens: Token sequence under analysis (never modified)
        position: Index of the current token
        defined_variables: Names recorded by variable definitions, in
                           first-seen order
    """

    def __init__(self, tokens: TokenStream):
        self.tokens = tokens
        self.position = 0
        self.defined_variables: List[str] = []

    # ------------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------------

    @property
    def current(self) -> Optional[Token]:
        """Current token, or None at end of input"""
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return None

    def peek(self) -> Optional[Token]:
        """Token after the current one, without consuming anything"""
        if self.position + 1 < len(self.tokens):
            return self.tokens[self.position + 1]
        return None

    def token_next(self) -> Optional[Token]:
        """Consume the current token and return the new current one"""
        self.position += 1
        return self.current

    def at(self, keyword: Keyword) -> bool:
        token = self.current
        return token is not None and token.is_(keyword)

    def at_literal(self) -> bool:
        token = self.current
        return token is not None and token.is_literal

    def at_end(self) -> bool:
        return self.current is None

    def error(self, message: str) -> LolSyntaxError:
        """
        Build a syntax error that names what was found at the cursor

        Returns the error for the caller to raise, so each failure branch
        reads `raise self.error(...)`.
        """
        token = self.current
        found = f"'{token.text}'" if token is not None else "end of input"
        return LolSyntaxError.at(f"{message}, found {found}", token)

    def keyword_expect(self, keyword: Keyword, message: str) -> None:
        if not self.at(keyword):
            raise self.error(message)
        self.token_next()

    def word_expect(self, word: str, message: str) -> None:
        token = self.current
        if token is None or not token.word_is(word):
            raise self.error(message)
        self.token_next()

    def literal_expect(self, message: str) -> Token:
        token = self.current
        if token is None or not token.is_literal:
            raise self.error(message)
        self.token_next()
        return token

    def compoundTail_expect(self, head: Keyword) -> None:
        """Second word of #I HAZ, #IT IZ or #LEMME SEE"""
        tail = COMPOUND_TAILS[head]
        self.word_expect(tail, f"Expected '{tail}' after {head.value}")

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def parse(self) -> ParseResult:
        """
        Validate the whole token sequence against the grammar

        Returns:
            ParseResult with the token count and defined variable names

        Raises:
            LolSyntaxError: On the first token that breaks a production
        """
        self.position = 0
        self.defined_variables = []
        self.lolcode_parse()
        LOG(
            f"Accepted {len(self.tokens)} tokens, "
            f"{len(self.defined_variables)} variable(s) defined",
            level=3,
        )
        return ParseResult(
            token_count=len(self.tokens),
            defined_variables=list(self.defined_variables),
        )

    # ------------------------------------------------------------------
    # Nonterminals
    # ------------------------------------------------------------------

    def lolcode_parse(self) -> None:
        """lolcode ::= #HAI comment? head body #KTHXBYE"""
        self.keyword_expect(Keyword.HAI, "Program MUST start with #HAI")

        if self.at(Keyword.OBTW):
            self.comment_parse()

        self.head_parse()
        self.body_parse()

        self.keyword_expect(Keyword.KTHXBYE, "Program MUST end with #KTHXBYE")
        if not self.at_end():
            raise self.error("Nothing may follow #KTHXBYE")

    def head_parse(self) -> None:
        """head ::= #MAEK HEAD title #OIC"""
        self.keyword_expect(Keyword.MAEK, "A head annotation must start with #MAEK")
        self.word_expect(Kind.HEAD.value, "A head annotation must have HEAD after #MAEK")
        self.title_parse()
        self.keyword_expect(Keyword.OIC, "A head annotation must end with #OIC")

    def title_parse(self) -> None:
        """title ::= #GIMMEH TITLE TEXT* #MKAY"""
        self.keyword_expect(Keyword.GIMMEH, "A title annotation must start with #GIMMEH")
        self.word_expect(Kind.TITLE.value, "Expected TITLE after #GIMMEH")
        while self.at_literal():
            self.token_next()
        self.keyword_expect(Keyword.MKAY, "A title annotation must end with #MKAY")

    def comment_parse(self) -> None:
        """comment ::= #OBTW TEXT* #TLDR"""
        self.keyword_expect(Keyword.OBTW, "A comment must begin with #OBTW")
        while self.at_literal():
            self.token_next()
        self.keyword_expect(Keyword.TLDR, "A comment must end with #TLDR")

    def body_parse(self) -> None:
        """
        body ::= innerBody body | ε

        Stops at #KTHXBYE or #OIC, and at end of input so that the caller
        reports the missing terminator.
        """
        while not (self.at_end() or self.at(Keyword.KTHXBYE) or self.at(Keyword.OIC)):
            self.innerBody_parse()

    def innerBody_parse(self) -> None:
        """
        innerBody ::= paragraph | bold | italics | list | audio | video
                    | newline | varDefine | varUse | TEXT | comment
        """
        token = self.current
        if token is None:
            raise self.error("Unexpected end of input inside body")

        if token.is_(Keyword.MAEK):
            follower = self.peek()
            kind = follower.kind if follower is not None else None
            LOG(f"Block #MAEK {follower} at {token.where()}", level=3)
            if kind is Kind.PARAGRAF:
                self.paragraph_parse()
            elif kind is Kind.LIST:
                self.list_parse()
            else:
                self.token_next()
                raise self.error("Expected PARAGRAF or LIST after #MAEK")
        elif token.is_(Keyword.GIMMEH):
            self.inline_dispatch("inside body")
        elif token.is_(Keyword.I):
            self.variableDefine_parse()
        elif token.is_(Keyword.LEMME):
            self.variableUse_parse()
        elif token.is_(Keyword.OBTW):
            self.comment_parse()
        elif token.is_literal:
            self.text_parse()
        else:
            raise self.error("Unexpected token inside body")

    def inline_dispatch(self, where: str) -> None:
        """
        Choose the #GIMMEH production by peeking at the kind name after it

        Shared by body and paragraph content, which accept the same set of
        inline annotations.
        """
        follower = self.peek()
        kind = follower.kind if follower is not None else None
        LOG(f"Inline #GIMMEH {follower} {where}", level=3)

        if kind is Kind.BOLD:
            self.bold_parse()
        elif kind is Kind.ITALICS:
            self.italics_parse()
        elif kind is Kind.SOUNDZ:
            self.audio_parse()
        elif kind is Kind.VIDZ:
            self.video_parse()
        elif kind is Kind.NEWLINE:
            self.newline_parse()
        else:
            self.token_next()
            raise self.error(f"Unrecognized #GIMMEH annotation {where}")

    def paragraph_parse(self) -> None:
        """paragraph ::= #MAEK PARAGRAF varDefine? innerParagraph #OIC"""
        self.keyword_expect(Keyword.MAEK, "A paragraph annotation must start with #MAEK")
        self.word_expect(Kind.PARAGRAF.value, "Expected PARAGRAF after #MAEK")

        if self.at(Keyword.I):
            self.variableDefine_parse()

        self.innerParagraph_parse()
        self.keyword_expect(Keyword.OIC, "A paragraph annotation must end with #OIC")

    def innerParagraph_parse(self) -> None:
        """innerParagraph ::= innerText innerParagraph | ε"""
        while not (self.at_end() or self.at(Keyword.OIC) or self.at(Keyword.KTHXBYE)):
            self.innerText_parse()

    def innerText_parse(self) -> None:
        """
        innerText ::= varUse | bold | italics | list | audio | video
                    | newline | TEXT
        """
        token = self.current
        if token is None:
            raise self.error("Unexpected end of input inside paragraph")

        if token.is_(Keyword.LEMME):
            self.variableUse_parse()
        elif token.is_(Keyword.GIMMEH):
            self.inline_dispatch("inside paragraph")
        elif token.is_(Keyword.MAEK):
            follower = self.peek()
            if follower is not None and follower.kind is Kind.LIST:
                self.list_parse()
            else:
                self.token_next()
                raise self.error("Only a LIST block may open inside a paragraph")
        elif token.is_literal:
            self.text_parse()
        else:
            raise self.error("Unexpected token inside paragraph")

    def variableDefine_parse(self) -> None:
        """varDefine ::= #I HAZ NAME #IT IZ TEXT #MKAY"""
        self.keyword_expect(Keyword.I, "A variable definition must start with #I HAZ")
        self.compoundTail_expect(Keyword.I)
        name = self.literal_expect("Expected variable name after HAZ")
        self.keyword_expect(Keyword.IT, "Expected #IT after variable name")
        self.compoundTail_expect(Keyword.IT)
        self.literal_expect("Expected value after IZ")
        self.keyword_expect(Keyword.MKAY, "A variable definition must end with #MKAY")

        if not any(name.word_is(seen) for seen in self.defined_variables):
            self.defined_variables.append(name.text)
        LOG(f"Variable '{name.text}' defined at {name.where()}", level=3)

    def variableUse_parse(self) -> None:
        """varUse ::= #LEMME SEE NAME #MKAY"""
        self.keyword_expect(Keyword.LEMME, "A variable use must start with #LEMME SEE")
        self.compoundTail_expect(Keyword.LEMME)
        self.literal_expect("Expected variable name after SEE")
        self.keyword_expect(Keyword.MKAY, "A variable use must end with #MKAY")

    def bold_parse(self) -> None:
        """bold ::= #GIMMEH BOLD TEXT+ #MKAY"""
        self.keyword_expect(Keyword.GIMMEH, "A bold annotation must start with #GIMMEH")
        self.word_expect(Kind.BOLD.value, "Expected BOLD after #GIMMEH")
        self.literal_expect("Expected TEXT after BOLD")
        while self.at_literal():
            self.token_next()
        self.keyword_expect(Keyword.MKAY, "A bold annotation must end with #MKAY")

    def italics_parse(self) -> None:
        """italics ::= #GIMMEH ITALICS TEXT+ #MKAY"""
        self.keyword_expect(Keyword.GIMMEH, "An italics annotation must start with #GIMMEH")
        self.word_expect(Kind.ITALICS.value, "Expected ITALICS after #GIMMEH")
        self.literal_expect("Expected TEXT after ITALICS")
        while self.at_literal():
            self.token_next()
        self.keyword_expect(Keyword.MKAY, "An italics annotation must end with #MKAY")

    def list_parse(self) -> None:
        """list ::= #MAEK LIST listItems #OIC"""
        self.keyword_expect(Keyword.MAEK, "A list annotation must start with #MAEK")
        self.word_expect(Kind.LIST.value, "Expected LIST after #MAEK")
        self.listItems_parse()
        self.keyword_expect(Keyword.OIC, "A list annotation must end with #OIC")

    def listItems_parse(self) -> None:
        """listItems ::= #GIMMEH ITEM innerListItem #MKAY listItems | ε"""
        while not (self.at_end() or self.at(Keyword.OIC)):
            self.keyword_expect(Keyword.GIMMEH, "Expected #GIMMEH ITEM inside the list")
            self.word_expect(Kind.ITEM.value, "Expected ITEM after #GIMMEH inside the list")
            self.innerListItem_parse()
            self.keyword_expect(Keyword.MKAY, "A list item must end with #MKAY")

    def innerListItem_parse(self) -> None:
        """innerListItem ::= TEXT* ((bold | italics) TEXT*)?"""
        inline_seen = False
        while not (self.at_end() or self.at(Keyword.MKAY)):
            if self.at_literal():
                self.token_next()
                continue
            if not self.at(Keyword.GIMMEH):
                raise self.error("Unexpected token inside list item")
            if inline_seen:
                raise self.error("A list item holds at most one inline annotation")

            follower = self.peek()
            kind = follower.kind if follower is not None else None
            if kind is Kind.BOLD:
                self.bold_parse()
            elif kind is Kind.ITALICS:
                self.italics_parse()
            else:
                self.token_next()
                raise self.error("Expected BOLD or ITALICS after #GIMMEH inside list item")
            inline_seen = True

    def audio_parse(self) -> None:
        """audio ::= #GIMMEH SOUNDZ ADDRESS #MKAY"""
        self.keyword_expect(Keyword.GIMMEH, "An audio annotation must start with #GIMMEH")
        self.word_expect(Kind.SOUNDZ.value, "Expected SOUNDZ after #GIMMEH")
        self.literal_expect("Expected ADDRESS after SOUNDZ")
        self.keyword_expect(Keyword.MKAY, "An audio annotation must end with #MKAY")

    def video_parse(self) -> None:
        """video ::= #GIMMEH VIDZ ADDRESS #MKAY"""
        self.keyword_expect(Keyword.GIMMEH, "A video annotation must start with #GIMMEH")
        self.word_expect(Kind.VIDZ.value, "Expected VIDZ after #GIMMEH")
        self.literal_expect("Expected ADDRESS after VIDZ")
        self.keyword_expect(Keyword.MKAY, "A video annotation must end with #MKAY")

    def newline_parse(self) -> None:
        """newline ::= #GIMMEH NEWLINE"""
        self.keyword_expect(Keyword.GIMMEH, "A newline annotation must start with #GIMMEH")
        self.word_expect(Kind.NEWLINE.value, "Expected NEWLINE after #GIMMEH")

    def text_parse(self) -> None:
        """TEXT"""
        self.literal_expect("Expected TEXT")


def parse(tokens: TokenStream) -> ParseResult:
    """Convenience wrapper: Parser(tokens).parse()"""
    return Parser(tokens).parse()
