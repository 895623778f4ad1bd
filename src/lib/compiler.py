"""
Compiler for lolmark token streams to HTML

Contains the semantic generator, which re-walks the validated token
sequence and emits HTML, and source_compile(), the driver that runs the
lexer, the syntax analyzer and the generator in order.
"""

import html
from typing import List, Optional

from ..config import appsettings
from ..models.keywords import (
    BLOCK_CONSTRUCTS,
    INLINE_CONSTRUCTS,
    Construct,
    Keyword,
    Kind,
)
from ..models.tokens import CompileResult, Token, TokenStream, VariableBinding
from .errors import StaticSemanticError
from .lexer import Lexer
from .log import LOG
from .parser import Parser


class Compiler:
    """
    Generates HTML from a lolmark token sequence

    The generator assumes its input already passed the syntax analyzer and
    does not re-check structure. Malformed input still produces output on
    a best-effort basis; the one fatal case is a variable used without a
    binding in scope.

    Responsibilities:
    - Map block/inline annotations to HTML tags via an open-construct stack
    - Copy comments and literal text to the output
    - Record variable bindings and resolve uses (most recent wins)
    - Close paragraph/head blocks left open at end of input

    Attributes:
        tokens: Token sequence in source order (never modified)
        escape: HTML-escape literal text when True
        position: Index of the token being interpreted
        stack: Open constructs, innermost last
        bindings: Variable bindings in definition order
        output: HTML fragments emitted so far
    """

    def __init__(self, tokens: TokenStream, escape: Optional[bool] = None) -> None:
        self.tokens = tokens
        self.escape = appsettings.escape_html if escape is None else escape
        self.position = 0
        self.stack: List[Construct] = []
        self.bindings: List[VariableBinding] = []
        self.output: List[str] = []

    def generate(self) -> str:
        """
        Interpret every token and return the complete HTML document

        Returns:
            HTML text wrapped in <html> ... </html>

        Raises:
            StaticSemanticError: If a #LEMME SEE names an unbound variable
        """
        self.position = 0
        self.stack = []
        self.bindings = []
        self.output = []

        while self.position < len(self.tokens):
            self.token_compile(self.tokens[self.position])
            self.position += 1

        self.unclosed_repair()
        self.emit("\n</html>\n")

        LOG(
            f"Generated {sum(len(part) for part in self.output)} characters "
            f"from {len(self.tokens)} tokens",
            level=3,
        )
        return ''.join(self.output)

    def emit(self, fragment: str) -> None:
        self.output.append(fragment)

    def text(self, raw: str) -> str:
        """Literal text as it goes into the document"""
        return html.escape(raw) if self.escape else raw

    def token_at(self, offset: int) -> Optional[Token]:
        """Token at position + offset, or None past the end"""
        index = self.position + offset
        if index < len(self.tokens):
            return self.tokens[index]
        return None

    def closer_skip(self) -> None:
        """Consume the #MKAY that ends a variable or media construct"""
        follower = self.token_at(1)
        if follower is not None and follower.is_(Keyword.MKAY):
            self.position += 1

    def token_compile(self, token: Token) -> None:
        """
        Interpret one token, advancing past any tokens it consumes

        On return, position indexes the last token consumed; generate()
        then steps to the next one.
        """
        keyword = token.keyword

        if keyword is Keyword.HAI:
            self.emit("<html>\n")
        elif keyword is Keyword.KTHXBYE:
            # closing wrapper is appended after the pass
            pass
        elif keyword is Keyword.OBTW:
            self.comment_compile()
        elif keyword is Keyword.MAEK:
            self.block_open()
        elif keyword is Keyword.OIC:
            self.construct_close(block=True)
        elif keyword is Keyword.GIMMEH:
            self.inline_open()
        elif keyword is Keyword.MKAY:
            self.construct_close(block=False)
        elif keyword is Keyword.I:
            self.variable_define()
        elif keyword is Keyword.LEMME:
            self.variable_use()
        elif token.is_literal:
            self.emit(self.text(token.text) + " ")

    def comment_compile(self) -> None:
        """#OBTW words #TLDR  ->  <!-- words -->"""
        self.emit("<!-- ")
        self.position += 1
        while self.position < len(self.tokens) and not self.tokens[self.position].is_(Keyword.TLDR):
            self.emit(self.text(self.tokens[self.position].text) + " ")
            self.position += 1
        self.emit("-->\n")

    def block_open(self) -> None:
        """#MAEK HEAD/PARAGRAF/LIST: emit the opening tag and push the block"""
        follower = self.token_at(1)
        if follower is None:
            return
        kind = follower.kind
        construct = BLOCK_CONSTRUCTS.get(kind) if kind is not None else None
        if construct is not None:
            self.emit(construct.openTag)
            self.stack.append(construct)
        self.position += 1

    def inline_open(self) -> None:
        """
        #GIMMEH followed by a kind name

        TITLE, BOLD, ITALICS and ITEM open a construct. NEWLINE emits a line
        break. SOUNDZ and VIDZ take the next literal as the media address.
        """
        follower = self.token_at(1)
        if follower is None:
            return
        kind = follower.kind

        construct = INLINE_CONSTRUCTS.get(kind) if kind is not None else None
        if construct is not None:
            self.emit(construct.openTag)
            self.stack.append(construct)
            self.position += 1
        elif kind is Kind.NEWLINE:
            self.emit("<br>\n")
            self.position += 1
        elif kind in (Kind.SOUNDZ, Kind.VIDZ):
            address = self.token_at(2)
            if address is None:
                return
            source = html.escape(address.text, quote=True) if self.escape else address.text
            if kind is Kind.SOUNDZ:
                self.emit(f'<audio controls><source src="{source}"></audio>')
            else:
                self.emit(f'<iframe src="{source}"/>')
            self.position += 2
            self.closer_skip()

    def construct_close(self, block: bool) -> None:
        """
        #OIC closes the innermost block, #MKAY the innermost inline

        A close marker whose kind does not match the top of the stack emits
        nothing and leaves the stack as it is.
        """
        if not self.stack:
            return
        top = self.stack[-1]
        if (block and top.is_block) or (not block and top.is_inline):
            self.stack.pop()
            self.emit(top.closeTag)

    def variable_define(self) -> None:
        """#I HAZ name #IT IZ value #MKAY: record (name, value)"""
        name = self.token_at(2)
        value = self.token_at(5)
        if name is None or value is None:
            return
        self.bindings.append(VariableBinding(name=name.text, value=value.text))
        LOG(f"Bound '{name.text}' = '{value.text}'", level=3)
        self.position += 5
        self.closer_skip()

    def variable_use(self) -> None:
        """#LEMME SEE name #MKAY: emit the most recent binding of name"""
        name = self.token_at(2)
        if name is None:
            return
        binding = self.variable_resolve(name.text)
        if binding is None:
            raise StaticSemanticError.at(f"variable '{name.text}' not defined", name)
        self.emit(self.text(binding.value))
        self.position += 2
        self.closer_skip()

    def variable_resolve(self, name: str) -> Optional[VariableBinding]:
        """Scan bindings newest first for a case-insensitive name match"""
        for binding in reversed(self.bindings):
            if binding.matches(name):
                return binding
        return None

    def unclosed_repair(self) -> None:
        """
        Close a paragraph and/or head block left open at end of input

        Applied only here, after generation; the syntax analyzer still
        rejects such documents.
        """
        if Construct.PARAGRAF in self.stack:
            LOG("Closing unterminated paragraph", level=2)
            self.emit(Construct.PARAGRAF.closeTag)
        if Construct.HEAD in self.stack:
            LOG("Closing unterminated head", level=2)
            self.emit(Construct.HEAD.closeTag)


def generate(tokens: TokenStream, escape: Optional[bool] = None) -> str:
    """Convenience wrapper: Compiler(tokens, escape).generate()"""
    return Compiler(tokens, escape=escape).generate()


def source_compile(source: str, escape: Optional[bool] = None) -> CompileResult:
    """
    Run the full pipeline: tokenize, parse (validate), generate

    Both the parser and the generator walk the same immutable token tuple,
    each with its own cursor. Generation only runs once parsing succeeded.

    Args:
        source: Complete lolmark document text
        escape: Override appsettings.escape_html for this run

    Returns:
        CompileResult with the HTML, token count and defined variables

    Raises:
        LexicalError, LolSyntaxError, StaticSemanticError
    """
    tokens = Lexer(source).tokenize()
    LOG(f"Tokenized {len(tokens)} tokens", level=2)

    parsed = Parser(tokens).parse()
    LOG(f"Syntax OK, variables defined: {parsed.defined_variables or 'none'}", level=2)

    html_text = Compiler(tokens, escape=escape).generate()
    return CompileResult(
        html=html_text,
        token_count=parsed.token_count,
        defined_variables=parsed.defined_variables,
    )
