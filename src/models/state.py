"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

import dataclasses
from functools import reduce
from pathlib import Path
from argparse import Namespace
from typing import Optional, Type, TypeVar, Callable
from dataclasses import dataclass, field

from .tokens import CompileResult


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the compilation pipeline (state bus pattern).

    Each stage receives a copy of the state, fills in the fields it owns and
    hands the result to the next stage.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, outputFile,
                   listing, openBrowser
        - env_check: inputSourceFile, htmlOutputFile, envOK
        - source_read: sourceText
        - html_compile: compileResult
        - html_write: listingOutputFile (when listing is requested)
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the .lol source file
        outputdir: Directory for compiled files
        verbosity: Logging verbosity level (1-3)
        inputFile: Input .lol filename (relative to inputdir)
        outputFile: Output HTML filename (relative to outputdir)
        listing: Also write a highlighted listing of the source
        openBrowser: Open the compiled page in the default browser
        envOK: Environment validation passed
        inputSourceFile: Resolved path to the input file
        htmlOutputFile: Resolved path of the HTML result
        listingOutputFile: Resolved path of the source listing, if written
        sourceText: Raw source read from inputSourceFile
        compileResult: Result of the tokenize/parse/generate pipeline
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    outputFile: Optional[str] = field(default=None)
    listing: bool = field(default=False)
    openBrowser: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    htmlOutputFile: Path = field(default=Path("/"))
    listingOutputFile: Optional[Path] = field(default=None)
    sourceText: Optional[str] = field(default=None)
    compileResult: Optional[CompileResult] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type[PS], options: Namespace, inputdir: Path, outputdir: Path
    ) -> PS:
        """
        Create ProgramState from argparse Namespace and directory paths.

        Options without a matching field are dropped.

        Args:
            options: Parsed CLI arguments (inputFile, outputFile, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for compilation output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in vars(options).items() if k in valid_fields}
        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_read,
            html_compile,
            html_write,
            results_report,
        )

    is the left-to-right spelling of
        results_report(html_write(html_compile(source_read(env_check(s)))))
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
