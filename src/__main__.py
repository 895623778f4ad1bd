#!/usr/bin/env python3
"""
lolmark - LOLCODE-flavoured markup to HTML compiler

Compiles a single .lol document into a single HTML page.

    #HAI
    #MAEK HEAD #GIMMEH TITLE My page #MKAY #OIC
    #MAEK PARAGRAF
        #I HAZ animal #IT IZ cat #MKAY
        I can haz #GIMMEH BOLD cheezburger #MKAY says the #LEMME SEE animal #MKAY
    #OIC
    #KTHXBYE

Compilation runs in three strict stages: lexical analysis, syntax analysis
(validation only), then HTML generation. The first error in any stage stops
the run and no output is written.

Usage:
    lolmark inputdir/ outputdir/ --inputFile page.lol

Examples:
    # Basic compilation, writes outputdir/output.html
    lolmark . out/ --inputFile page.lol

    # Custom output name plus a highlighted listing of the source
    lolmark . out/ --inputFile page.lol --outputFile page.html --listing

    # Verbose output, then open the result in a browser
    lolmark . out/ --inputFile page.lol -vv --open
"""

import sys
import webbrowser
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import LolcodeError, LOG, source_compile, listing_render, state_connectToLogger, __version__
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
  _       _                      _
 | | ___ | |_ __ ___   __ _ _ __| | __
 | |/ _ \| | '_ ` _ \ / _` | '__| |/ /
 | | (_) | | | | | | | (_| | |  |   <
 |_|\___/|_|_| |_| |_|\__,_|_|  |_|\_\

  KTHXBYE markup, HAI html
"""

# Define CLI arguments
parser = ArgumentParser(
    description="lolmark - compile LOLCODE-flavoured markup to HTML",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input lolmark (.lol) file (relative to inputdir)"
)

parser.add_argument(
    "--outputFile",
    default=None,
    type=str,
    help=f"Output HTML file (relative to outputdir). Defaults to {appsettings.output_file}",
)

parser.add_argument(
    "--listing",
    action="store_true",
    default=False,
    help="Also write a syntax-highlighted HTML listing of the source",
)

parser.add_argument(
    "--open",
    dest="openBrowser",
    action="store_true",
    default=appsettings.open_browser,
    help="Open the compiled page in the default browser",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate the invocation and resolve all file paths.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the .lol input file
            - htmlOutputFile: Resolved path of the HTML result
            - envOK: True if environment is valid

    Exits:
        1 if the input file has the wrong extension or does not exist
    """
    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    if not appsettings.suffix_matches(state.inputFile):
        print(
            f"Error: input file needs a {appsettings.source_suffix} extension: {state.inputFile}",
            file=sys.stderr,
        )
        state.envOK = False
        sys.exit(1)

    input_file = Path(state.inputdir or ".") / state.inputFile
    if not input_file.is_file():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    outputdir = Path(state.outputdir or ".")
    state.htmlOutputFile = outputdir / (state.outputFile or appsettings.output_file)
    state.htmlOutputFile.parent.mkdir(parents=True, exist_ok=True)
    LOG(f"Output file: {state.htmlOutputFile}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the whole source document as UTF-8 text.

    Returns:
        ProgramState with added field:
            - sourceText: Contents of inputSourceFile

    Exits:
        1 if the file cannot be read
    """
    state = inputstate.copy()

    LOG("Reading source file...", level=1)
    try:
        state.sourceText = state.inputSourceFile.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Read {len(state.sourceText)} characters from {state.inputSourceFile.name}", level=2)
    return state


def html_compile(inputstate: ProgramState) -> ProgramState:
    """
    Tokenize, validate and generate HTML from the source text.

    Returns:
        ProgramState with added field:
            - compileResult: CompileResult with html, token count, variables

    Exits:
        1 on the first lexical, syntax or static semantic error
    """
    state = inputstate.copy()

    if state.sourceText is None:
        print("Error: No source text available", file=sys.stderr)
        sys.exit(1)

    LOG("Compiling source to HTML...", level=1)
    try:
        state.compileResult = source_compile(state.sourceText)
    except LolcodeError as e:
        print(e.diagnostic(), file=sys.stderr)
        sys.exit(1)

    LOG(f"Compiled {state.compileResult.token_count} tokens", level=2)
    return state


def html_write(inputstate: ProgramState) -> ProgramState:
    """
    Persist the generated HTML, and the source listing when requested.

    Returns:
        ProgramState with added field:
            - listingOutputFile: Path of the listing, if one was written

    Exits:
        1 if nothing was compiled or the output cannot be written
    """
    state = inputstate.copy()

    if not state.compileResult:
        print("Error: Compilation failed", file=sys.stderr)
        sys.exit(1)

    try:
        state.htmlOutputFile.write_text(state.compileResult.html, encoding="utf-8")
        LOG(f"Wrote {state.htmlOutputFile}", level=2)

        if state.listing and state.sourceText is not None:
            listing_file = state.htmlOutputFile.with_name(
                f"{state.inputSourceFile.stem}.listing.html"
            )
            listing_file.write_text(
                listing_render(
                    state.sourceText,
                    style=appsettings.listing_style,
                    title=state.inputSourceFile.name,
                ),
                encoding="utf-8",
            )
            state.listingOutputFile = listing_file
            LOG(f"Wrote {listing_file}", level=2)
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        sys.exit(1)

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display compilation results, and open the page if asked to.

    Returns:
        ProgramState unchanged (terminal pipeline stage)
    """
    state: ProgramState = inputstate.copy()
    result = state.compileResult
    if result is None:
        print("Error: Compilation failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Compilation successful!", level=1)
    LOG(f"  Output:    {state.htmlOutputFile}", level=1)
    LOG(f"  Tokens:    {result.token_count}", level=1)
    LOG(f"  Variables: {', '.join(result.defined_variables) or 'none'}", level=1)
    if state.listingOutputFile:
        LOG(f"  Listing:   {state.listingOutputFile}", level=1)

    if state.openBrowser:
        LOG("Opening result in browser...", level=2)
        webbrowser.open(state.htmlOutputFile.resolve().as_uri())
    return state


@chris_plugin(
    parser=parser,
    title="lolmark - LOLCODE-flavoured markup compiler",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - compile one .lol document to HTML.

    Orchestrates the pipeline:
        1. env_check: Validate arguments and resolve paths
        2. source_read: Load the source text
        3. html_compile: Tokenize, parse, generate
        4. html_write: Persist HTML (and listing)
        5. results_report: Summarize, optionally open browser

    Args:
        options: CLI arguments from argparse
        inputdir: Directory containing the source document
        outputdir: Directory where the HTML will be written
    """
    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, source_read, html_compile, html_write, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
