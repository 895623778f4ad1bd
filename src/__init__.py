"""
lolmark - LOLCODE-flavoured markup to HTML compiler

Compiles #HAI ... #KTHXBYE annotated documents into HTML through a lexer,
a recursive-descent syntax analyzer and a token-driven HTML generator.
"""

__version__ = "1.0.0"

from .lib import (
    Lexer,
    Parser,
    Compiler,
    source_compile,
    LolcodeError,
    LexicalError,
    LolSyntaxError,
    StaticSemanticError,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "Lexer",
    "Parser",
    "Compiler",
    "source_compile",
    "LolcodeError",
    "LexicalError",
    "LolSyntaxError",
    "StaticSemanticError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
