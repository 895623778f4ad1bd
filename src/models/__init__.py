"""
Models package for lolmark

Contains data structures and type definitions for the compilation pipeline.
"""

from .state import ProgramState, pipeline
from .keywords import (
    Keyword,
    Kind,
    Construct,
    keyword_lookup,
    kind_lookup,
)
from .tokens import Token, TokenStream, VariableBinding, ParseResult, CompileResult

__all__ = [
    "ProgramState",
    "pipeline",
    "Keyword",
    "Kind",
    "Construct",
    "keyword_lookup",
    "kind_lookup",
    "Token",
    "TokenStream",
    "VariableBinding",
    "ParseResult",
    "CompileResult",
]
