"""
Syntax analyzer tests - documents the grammar accepts

Each test builds a complete program around the construct under test.
"""

from lolmark.lib.lexer import tokenize
from lolmark.lib.parser import Parser, parse

HEAD = "#MAEK HEAD #GIMMEH TITLE My Page #MKAY #OIC"


def program(body: str = "", comment: str = "") -> str:
    return f"#HAI {comment} {HEAD} {body} #KTHXBYE"


def accepts(source: str):
    return parse(tokenize(source))


class TestProgramShape:
    """Start symbol and head"""

    def test_minimal_program(self):
        """Head with title and an empty body"""
        result = accepts(program())
        assert result.token_count == 10
        assert result.defined_variables == []

    def test_empty_title(self):
        """Title text is optional"""
        accepts("#HAI #MAEK HEAD #GIMMEH TITLE #MKAY #OIC #KTHXBYE")

    def test_leading_comment(self):
        """Optional comment between #HAI and the head"""
        accepts(program(comment="#OBTW written by a cat #TLDR"))

    def test_keywords_any_case(self):
        """Keywords and kind names match regardless of case"""
        accepts("#hai #maek head #gimmeh title hi #mkay #oic #kthxbye")

    def test_parser_reusable(self):
        """parse() resets the cursor and the variable table"""
        parser = Parser(tokenize(program("#I HAZ a #IT IZ 1 #MKAY")))
        assert parser.parse().defined_variables == ["a"]
        assert parser.parse().defined_variables == ["a"]


class TestBody:
    """Constructs allowed directly in the body"""

    def test_plain_text(self):
        """Free literals"""
        accepts(program("just some words"))

    def test_bold_and_italics(self):
        """Inline emphasis with several words"""
        accepts(program("#GIMMEH BOLD very loud #MKAY #GIMMEH ITALICS so quiet #MKAY"))

    def test_newline(self):
        """#GIMMEH NEWLINE takes no terminator"""
        accepts(program("one #GIMMEH NEWLINE two"))

    def test_media(self):
        """Audio and video take one address each"""
        accepts(program(
            "#GIMMEH SOUNDZ https://example.com/meow.mp3 #MKAY "
            "#GIMMEH VIDZ clips/cat.mp4 #MKAY"
        ))

    def test_comment_in_body(self):
        """Comments may appear anywhere in the body"""
        accepts(program("hello #OBTW note to self #TLDR world"))

    def test_variables(self):
        """Definitions and uses at body level"""
        result = accepts(program("#I HAZ name #IT IZ Tom #MKAY hi #LEMME SEE name #MKAY"))
        assert result.defined_variables == ["name"]

    def test_list(self):
        """List with plain, bold and italic items"""
        accepts(program(
            "#MAEK LIST "
            "#GIMMEH ITEM milk #MKAY "
            "#GIMMEH ITEM #GIMMEH BOLD cheez #MKAY #MKAY "
            "#GIMMEH ITEM fresh #GIMMEH ITALICS fish #MKAY today #MKAY "
            "#OIC"
        ))

    def test_empty_list_and_item(self):
        """listItems and innerListItem may both be empty"""
        accepts(program("#MAEK LIST #OIC #MAEK LIST #GIMMEH ITEM #MKAY #OIC"))


class TestParagraph:
    """Paragraph blocks"""

    def test_simple_paragraph(self):
        """Text inside a paragraph"""
        accepts(program("#MAEK PARAGRAF hello there #OIC"))

    def test_empty_paragraph(self):
        """innerParagraph may be empty"""
        accepts(program("#MAEK PARAGRAF #OIC"))

    def test_leading_definition(self):
        """A paragraph may open with one variable definition"""
        result = accepts(program(
            "#MAEK PARAGRAF #I HAZ food #IT IZ fish #MKAY "
            "I want #LEMME SEE food #MKAY #OIC"
        ))
        assert result.defined_variables == ["food"]

    def test_inline_content(self):
        """All inline annotations are allowed inside a paragraph"""
        accepts(program(
            "#MAEK PARAGRAF a #GIMMEH BOLD b #MKAY #GIMMEH ITALICS c #MKAY "
            "#GIMMEH NEWLINE #GIMMEH SOUNDZ s.mp3 #MKAY #GIMMEH VIDZ v.mp4 #MKAY #OIC"
        ))

    def test_list_inside_paragraph(self):
        """innerText includes lists"""
        accepts(program("#MAEK PARAGRAF #MAEK LIST #GIMMEH ITEM x #MKAY #OIC #OIC"))

    def test_several_paragraphs(self):
        """Body repeats"""
        accepts(program("#MAEK PARAGRAF one #OIC between #MAEK PARAGRAF two #OIC"))


class TestDefinedVariables:
    """Side table of names seen in definitions"""

    def test_order_and_duplicates(self):
        """First-seen order, each name once"""
        result = accepts(program(
            "#I HAZ b #IT IZ 1 #MKAY #I HAZ a #IT IZ 2 #MKAY #I HAZ b #IT IZ 3 #MKAY"
        ))
        assert result.defined_variables == ["b", "a"]

    def test_duplicates_ignore_case(self):
        """Names that resolve to the same binding are listed once"""
        result = accepts(program(
            "#I HAZ x #IT IZ 1 #MKAY #I HAZ X #IT IZ 2 #MKAY #LEMME SEE x #MKAY"
        ))
        assert result.defined_variables == ["x"]

    def test_compound_tails_any_case(self):
        """HAZ, IZ and SEE match regardless of case"""
        result = accepts(program("#i haz cat #it iz Tom #mkay #lemme see CAT #mkay"))
        assert result.defined_variables == ["cat"]

    def test_use_before_definition_passes_syntax(self):
        """Undefined uses are left for the generator to reject"""
        result = accepts(program("#LEMME SEE ghost #MKAY"))
        assert result.defined_variables == []
