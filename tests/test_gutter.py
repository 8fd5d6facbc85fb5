"""
Gutter (line segmentation) tests

Tests line collection across text and element children, blank-line policy,
numbering, highlighting and diff-state tagging.
"""

import pytest

from codegutter.lib.gutter import Gutter, classMarker_matches
from codegutter.models.directives import DirectiveSet, LineNumbering, LineRange
from codegutter.models.gutter import LogicalLine
from codegutter.models.tree import Element, Text, text_content


NUMBERED = DirectiveSet(numbering=LineNumbering.ON)


def span(classes, value):
    return Element(tag="span", classes=list(classes), children=[Text(value)])


def containers(nodes):
    return [node for node in nodes if isinstance(node, Element)]


class TestCollect:
    """Test grouping children into logical lines"""

    def test_plain_text(self):
        """Each break ends a line; the final run has no break"""
        lines = Gutter(NUMBERED).lines_collect([Text("a\nb\nc")])

        assert [text_content(line.children) for line in lines] == ["a", "b", "c"]
        assert [line.eol for line in lines] == ["\n", "\n", None]

    def test_trailing_break_opens_no_line(self):
        """A block ending in a break has no extra empty line"""
        lines = Gutter(NUMBERED).lines_collect([Text("a\nb\n")])
        assert [text_content(line.children) for line in lines] == ["a", "b"]

    def test_line_spans_several_elements(self):
        """Remainder text is carried to the next line across elements"""
        children = [
            span(["k"], "const"),
            Text(" a=1;\nconst "),
            span(["n"], "b"),
            Text("=2;\n"),
        ]
        lines = Gutter(NUMBERED).lines_collect(children)

        assert len(lines) == 2
        assert lines[0].children == [span(["k"], "const"), Text(" a=1;")]
        assert lines[1].children == [Text("const "), span(["n"], "b"), Text("=2;")]

    def test_text_without_break_inside_line(self):
        """Text without a break stays in the current line"""
        children = [Text("a\nb"), Text("c"), span(["x"], "d")]
        lines = Gutter(NUMBERED).lines_collect(children)

        assert lines[1].children == [Text("b"), Text("c"), span(["x"], "d")]
        assert lines[1].eol is None

    def test_consecutive_breaks(self):
        """Consecutive breaks produce empty lines"""
        lines = Gutter(NUMBERED).lines_collect([Text("a\n\n\nb")])
        assert [line.children for line in lines] == [[Text("a")], [], [], [Text("b")]]

    def test_mixed_line_endings(self):
        """CRLF, CR and LF are each kept as the line's break"""
        lines = Gutter(NUMBERED).lines_collect([Text("a\r\nb\rc\n")])
        assert [line.eol for line in lines] == ["\r\n", "\r", "\n"]

    def test_no_children(self):
        """An empty block has no lines"""
        assert Gutter(NUMBERED).lines_collect([]) == []


class TestBlankLines:
    """Test blank line detection and the outer blank-line policy"""

    @pytest.mark.parametrize("children,expected", [
        ([], True),
        ([Text("   ")], True),
        ([Text("")], True),
        ([Text(" x ")], False),
        ([span(["k"], " ")], False),
        ([Text(" "), Text(" ")], False),
    ])
    def test_blank_is(self, children, expected):
        """Only no children or one whitespace text node is blank"""
        assert LogicalLine(children=children).blank_is() is expected

    def test_interior_blank_lines_kept(self):
        """Trim never drops blank lines between content"""
        directives = DirectiveSet(numbering=LineNumbering.ON, trim_blank_lines=True)
        result = Gutter(directives).run([Text("a\n\n\nb\n")])

        lines = containers(result)
        assert len(lines) == 4
        assert [line.properties["data-line-number"] for line in lines] == [1, 2, 3, 4]

    def test_trim_drops_outer_blank_lines(self):
        """Trim drops a blank first and last line with their breaks"""
        directives = DirectiveSet(numbering=LineNumbering.ON, trim_blank_lines=True)
        result = Gutter(directives).run([Text("\nlet a;\n\nlet b;\n\n")])

        lines = containers(result)
        assert [text_content(line) for line in lines] == ["let a;", "", "let b;"]
        assert text_content(result) == "let a;\n\nlet b;\n"

    def test_only_one_line_dropped_per_end(self):
        """At most one blank line is dropped at each end"""
        directives = DirectiveSet(numbering=LineNumbering.ON, trim_blank_lines=True)
        result = Gutter(directives).run([Text("\n\nx\n\n\n")])

        assert [text_content(line) for line in containers(result)] == ["", "x", ""]

    def test_without_trim_outer_blank_lines_kept(self):
        """Outer blank lines are numbered when trim is off"""
        result = Gutter(NUMBERED).run([Text("\nlet a;\n\n")])

        lines = containers(result)
        assert [text_content(line) for line in lines] == ["", "let a;", ""]
        assert [line.properties["data-line-number"] for line in lines] == [1, 2, 3]
        assert text_content(result) == "\nlet a;\n\n"

    def test_keep_overrides_trim(self):
        """keepOuterBlankLine wins over trimBlankLines"""
        directives = DirectiveSet(trim_blank_lines=True, keep_outer_blank_line=True)
        result = Gutter(directives).run([Text("\nx\n\n")])
        assert len(containers(result)) == 3

    def test_whitespace_only_last_line_without_break(self):
        """A whitespace-only final run counts as blank"""
        directives = DirectiveSet(trim_blank_lines=True)
        result = Gutter(directives).run([Text("x\n   ")])

        assert [text_content(line) for line in containers(result)] == ["x"]
        assert text_content(result) == "x\n"


class TestNumbering:
    """Test numbering and highlighting"""

    def test_start_offset(self):
        """Numbers count up from the start number"""
        directives = DirectiveSet(numbering=LineNumbering.START_AT, start=33)
        result = Gutter(directives).run([Text("a\nb\nc\nd\ne\n")])

        numbers = [line.properties["data-line-number"] for line in containers(result)]
        assert numbers == [33, 34, 35, 36, 37]

    def test_highlight_ranges(self):
        """{2,4-5} over five lines highlights 2, 4 and 5"""
        directives = DirectiveSet(highlighted=frozenset({LineRange(2, 2), LineRange(4, 5)}))
        result = Gutter(directives).run([Text("1\n2\n3\n4\n5\n")])

        flags = ["highlighted-code-line" in line.classes for line in containers(result)]
        assert flags == [False, True, False, True, True]

    def test_highlight_uses_display_number(self):
        """Highlighting tests the shown number, not the position"""
        directives = DirectiveSet(
            numbering=LineNumbering.START_AT, start=10, highlighted=frozenset({LineRange(11, 11)})
        )
        result = Gutter(directives).run([Text("a\nb\n")])

        lines = containers(result)
        assert "highlighted-code-line" not in lines[0].classes
        assert "highlighted-code-line" in lines[1].classes

    def test_no_numbering_no_attribute(self):
        """Without numbering no line number attribute is set"""
        result = Gutter(DirectiveSet(highlighted=frozenset({LineRange(1, 1)}))).run([Text("a\n")])

        line = containers(result)[0]
        assert line.properties == {}
        assert line.classes == ["code-line", "highlighted-code-line"]

    def test_numbering_after_dropped_first_line(self):
        """A dropped line takes no number"""
        directives = DirectiveSet(numbering=LineNumbering.ON, trim_blank_lines=True)
        result = Gutter(directives).run([Text("\na\nb\n")])

        numbers = [line.properties["data-line-number"] for line in containers(result)]
        assert numbers == [1, 2]

    def test_output_interleaves_breaks(self):
        """Containers alternate with the breaks that ended them"""
        result = Gutter(NUMBERED).run([Text("a\nb")])

        assert [type(node).__name__ for node in result] == ["Element", "Text", "Element"]
        assert result[1] == Text("\n")
        assert result[0].tag == "span"

    def test_sequence_counter(self):
        """The gutter counts emitted lines"""
        gutter = Gutter(NUMBERED)
        gutter.run([Text("a\nb\nc")])
        assert gutter.sequence == 3


class TestDiffState:
    """Test inserted/deleted tagging from the first child"""

    def test_markers(self):
        """Markers match whole class parts, not substrings"""
        assert classMarker_matches(["hljs-addition"], ["addition"])
        assert classMarker_matches(["gd"], ["deletion", "gd"])
        assert not classMarker_matches(["hljs-keyword"], ["addition", "gi"])
        assert not classMarker_matches(["origin"], ["gi"])

    def test_inserted_and_deleted(self):
        """Addition and deletion leaves tag their lines"""
        children = [
            span(["hljs-addition"], "+ a"),
            Text("\n"),
            span(["hljs-deletion"], "- b"),
            Text("\n  c\n"),
        ]
        lines = containers(Gutter(NUMBERED).run(children))

        assert lines[0].classes == ["code-line", "numbered-code-line", "inserted"]
        assert lines[1].classes == ["code-line", "numbered-code-line", "deleted"]
        assert lines[2].classes == ["code-line", "numbered-code-line"]

    def test_only_first_child_inspected(self):
        """A marker after the first child does not tag the line"""
        children = [Text("x"), span(["gi"], "+a")]
        lines = containers(Gutter(NUMBERED).run(children))
        assert "inserted" not in lines[0].classes

    def test_custom_markers(self):
        """Markers come from the caller"""
        gutter = Gutter(NUMBERED, insertedMarkers=["plus"], deletedMarkers=["minus"])
        lines = containers(gutter.run([span(["diff-plus"], "+a")]))
        assert "inserted" in lines[0].classes
