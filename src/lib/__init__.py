"""
lolmark - LOLCODE-flavoured markup to HTML compiler

Lexical analyzer, syntax analyzer, HTML generator and their support code.
"""

__version__ = "1.0.0"

from .lexer import Lexer, tokenize
from .parser import Parser, parse
from .compiler import Compiler, generate, source_compile
from .errors import LolcodeError, LexicalError, LolSyntaxError, StaticSemanticError
from .highlight import LolmarkLexer, listing_render
from .log import LOG, state_connectToLogger

__all__ = [
    "Lexer",
    "tokenize",
    "Parser",
    "parse",
    "Compiler",
    "generate",
    "source_compile",
    "LolcodeError",
    "LexicalError",
    "LolSyntaxError",
    "StaticSemanticError",
    "LolmarkLexer",
    "listing_render",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
