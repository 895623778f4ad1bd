"""
End-to-end compilation tests

Tests the full pipeline: lolmark source → Lexer → Parser → Compiler → HTML,
and the CLI stages that read the document and write the page.
"""

import pytest
from argparse import Namespace

from lolmark.__main__ import env_check, source_read, html_compile, html_write, results_report
from lolmark.lib.compiler import source_compile
from lolmark.lib.errors import LexicalError, LolSyntaxError, StaticSemanticError
from lolmark.models import ProgramState, pipeline


DOCUMENT = """#HAI
#OBTW my first page #TLDR
#MAEK HEAD #GIMMEH TITLE Cat facts #MKAY #OIC
#MAEK PARAGRAF
    #I HAZ animal #IT IZ cat #MKAY
    the #LEMME SEE animal #MKAY is #GIMMEH BOLD great #MKAY
    #GIMMEH NEWLINE
    #MAEK LIST #GIMMEH ITEM naps #MKAY #GIMMEH ITEM #GIMMEH ITALICS boxes #MKAY #MKAY #OIC
#OIC
#KTHXBYE
"""


class TestSourceCompile:
    """Driver: tokenize, parse, generate"""

    def test_full_document(self):
        """A document exercising every construct compiles"""
        result = source_compile(DOCUMENT, escape=False)
        assert result.html.startswith("<html>\n<!-- my first page -->\n<head>\n")
        assert "<title>Cat facts </title>\n</head>\n" in result.html
        assert "<p>the catis <b>great </b>\n<br>\n" in result.html
        assert "<ul><li>naps </li>\n<li><i>boxes </i>\n</li>\n</ul>\n</p>\n" in result.html
        assert result.html.endswith("\n</html>\n")
        assert result.defined_variables == ["animal"]
        assert result.token_count == len(DOCUMENT.split())

    def test_lexical_error_first(self):
        """Lexing fails before parsing starts"""
        with pytest.raises(LexicalError):
            source_compile("#HAI #WAT")

    def test_syntax_error_stops_generation(self):
        """An unclosed head is repaired by the generator but rejected here"""
        with pytest.raises(LolSyntaxError):
            source_compile("#HAI #MAEK HEAD #GIMMEH TITLE Hi #MKAY #KTHXBYE")

    def test_semantic_error(self):
        """Valid syntax, undefined variable"""
        source = "#HAI #MAEK HEAD #GIMMEH TITLE Hi #MKAY #OIC #LEMME SEE ghost #MKAY #KTHXBYE"
        with pytest.raises(StaticSemanticError) as excinfo:
            source_compile(source)
        assert excinfo.value.diagnostic() == (
            "Static semantic error: variable 'ghost' not defined (line 1, column 56)"
        )


def make_state(tmp_path, inputFile="page.lol", source=DOCUMENT, **kwargs) -> ProgramState:
    inputdir = tmp_path / "in"
    outputdir = tmp_path / "out"
    inputdir.mkdir()
    if source is not None:
        (inputdir / inputFile).write_text(source, encoding="utf-8")
    options = Namespace(inputFile=inputFile, verbosity=0, unknownOption=True, **kwargs)
    return ProgramState.state_createFromNamespace(options, inputdir, outputdir)


class TestPipelineStages:
    """CLI stages threaded through ProgramState"""

    def test_state_from_namespace(self, tmp_path):
        """Unknown options are dropped"""
        state = make_state(tmp_path)
        assert state.inputFile == "page.lol"
        assert not hasattr(state, "unknownOption")

    def test_default_output(self, tmp_path):
        """HTML lands in outputdir/output.html"""
        state = pipeline(make_state(tmp_path), env_check, source_read, html_compile, html_write)
        assert state.envOK
        assert state.htmlOutputFile == tmp_path / "out" / "output.html"
        assert state.htmlOutputFile.read_text(encoding="utf-8") == state.compileResult.html
        assert state.listingOutputFile is None

    def test_named_output_and_listing(self, tmp_path):
        """--outputFile and --listing"""
        state = pipeline(
            make_state(tmp_path, outputFile="cats.html", listing=True),
            env_check,
            source_read,
            html_compile,
            html_write,
        )
        assert state.htmlOutputFile.name == "cats.html"
        assert state.listingOutputFile == tmp_path / "out" / "page.listing.html"
        listing = state.listingOutputFile.read_text(encoding="utf-8")
        assert "page.lol" in listing
        assert "KTHXBYE" in listing

    def test_stages_do_not_mutate(self, tmp_path):
        """Each stage works on a copy"""
        initial = make_state(tmp_path)
        checked = env_check(initial)
        assert checked is not initial
        assert initial.envOK is False

    def test_wrong_extension(self, tmp_path, capsys):
        """Sources must carry the .lol suffix"""
        state = make_state(tmp_path, inputFile="page.txt")
        with pytest.raises(SystemExit) as excinfo:
            env_check(state)
        assert excinfo.value.code == 1
        assert ".lol extension" in capsys.readouterr().err

    def test_suffix_case_ignored(self, tmp_path):
        """PAGE.LOL is accepted"""
        state = env_check(make_state(tmp_path, inputFile="PAGE.LOL"))
        assert state.envOK

    def test_missing_file(self, tmp_path, capsys):
        """A missing input file is reported"""
        state = make_state(tmp_path, source=None)
        with pytest.raises(SystemExit) as excinfo:
            env_check(state)
        assert excinfo.value.code == 1
        assert "not found" in capsys.readouterr().err

    def test_compile_error_writes_nothing(self, tmp_path, capsys):
        """Diagnostic on stderr and no output file"""
        state = make_state(tmp_path, source="#HAI #MAEK HEAD #GIMMEH TITLE x #MKAY #OIC #LEMME SEE y #MKAY #KTHXBYE")
        with pytest.raises(SystemExit) as excinfo:
            pipeline(state, env_check, source_read, html_compile, html_write)
        assert excinfo.value.code == 1
        assert "Static semantic error: variable 'y' not defined" in capsys.readouterr().err
        assert not (tmp_path / "out" / "output.html").exists()

    def test_syntax_error_diagnostic(self, tmp_path, capsys):
        """Syntax errors name the offending token and position"""
        state = make_state(tmp_path, source="#KTHXBYE")
        with pytest.raises(SystemExit):
            pipeline(state, env_check, source_read, html_compile)
        err = capsys.readouterr().err
        assert err.startswith("Syntax error: Program MUST start with #HAI")
        assert "line 1, column 1" in err


class TestResultsReport:
    """Terminal stage"""

    def test_open_browser(self, tmp_path, monkeypatch):
        """--open hands the page URI to the browser"""
        opened = []
        monkeypatch.setattr("webbrowser.open", lambda uri: opened.append(uri))
        state = pipeline(
            make_state(tmp_path, openBrowser=True),
            env_check,
            source_read,
            html_compile,
            html_write,
            results_report,
        )
        assert opened == [state.htmlOutputFile.resolve().as_uri()]

    def test_no_browser_by_default(self, tmp_path, monkeypatch):
        """Browser stays closed without --open"""
        opened = []
        monkeypatch.setattr("webbrowser.open", lambda uri: opened.append(uri))
        pipeline(make_state(tmp_path), env_check, source_read, html_compile, html_write, results_report)
        assert opened == []

    def test_report_without_result(self, tmp_path):
        """Nothing compiled is a failure"""
        with pytest.raises(SystemExit):
            results_report(make_state(tmp_path))
