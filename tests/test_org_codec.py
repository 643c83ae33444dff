"""Tests for Org document parsing and rendering."""

from ephemeris.adapters.org_codec import OrgCodec
from ephemeris.core.model import Heading, OutlineDocument


JOURNAL = """#+TITLE: Journal

* 2024
** 2024-03 March
*** 2024-03-05 Tuesday
:PROPERTIES:
:DAYONE_UUID: U1
:SOURCE: Day One
:END:
Hello

* Notes
Some notes
"""


def test_parse_tree():
    """Test headings nest by level and keep drawers and bodies."""
    doc = OrgCodec().parse(JOURNAL)

    assert doc.preamble == "#+TITLE: Journal\n\n"
    assert [h.title for h in doc.headings] == ["2024", "Notes"]

    month = doc.headings[0].children[0]
    day = month.children[0]
    assert month.title == "2024-03 March"
    assert month.level == 2
    assert day.title == "2024-03-05 Tuesday"
    assert day.level == 3
    assert day.parent is month
    assert dict(day.properties) == {"DAYONE_UUID": "U1", "SOURCE": "Day One"}
    assert day.body == "Hello\n\n"
    assert doc.headings[1].body == "Some notes\n"


def test_render_roundtrip():
    """Test render(parse(text)) reproduces the text."""
    codec = OrgCodec()
    assert codec.render(codec.parse(JOURNAL)) == JOURNAL


def test_parse_empty_property_value():
    """Test a property with no value parses as an empty string and renders back."""
    text = "* Entry\n:PROPERTIES:\n:EMPTY:\n:URL: http://example.com/a:b\n:END:\n"
    codec = OrgCodec()
    doc = codec.parse(text)

    assert doc.headings[0].properties["EMPTY"] == ""
    assert doc.headings[0].properties["URL"] == "http://example.com/a:b"
    assert codec.render(doc) == text


def test_parse_bold_line_is_not_heading():
    """Test a line starting with *bold* stays in the body."""
    doc = OrgCodec().parse("* Entry\n*bold* text\n")

    assert len(doc.headings) == 1
    assert doc.headings[0].body == "*bold* text\n"


def test_parse_skipped_levels():
    """Test a shallower heading after a deep one attaches to the right parent."""
    doc = OrgCodec().parse("* A\n*** C\n** B\n* D\n")

    a = doc.headings[0]
    assert [h.title for h in a.children] == ["C", "B"]
    assert [h.title for h in doc.headings] == ["A", "D"]


def test_parse_drawer_not_after_heading_is_body():
    """Test a drawer that does not directly follow the heading is body text."""
    text = "* Entry\ntext\n:PROPERTIES:\n:X: 1\n:END:\n"
    doc = OrgCodec().parse(text)

    assert len(doc.headings[0].properties) == 0
    assert doc.headings[0].body == "text\n:PROPERTIES:\n:X: 1\n:END:\n"


def test_parse_unterminated_drawer_is_body():
    """Test a drawer without :END: is kept as body text."""
    text = "* Entry\n:PROPERTIES:\n:X: 1\n"
    doc = OrgCodec().parse(text)

    assert len(doc.headings[0].properties) == 0
    assert doc.headings[0].body == ":PROPERTIES:\n:X: 1\n"


def test_parse_no_headings():
    """Test a document without headings is all preamble."""
    doc = OrgCodec().parse("just text\n")

    assert doc.preamble == "just text\n"
    assert doc.headings == []


def test_render_built_document():
    """Test rendering a document built in memory."""
    doc = OutlineDocument(preamble="#+TITLE: J")
    year = doc.add_heading(Heading(title="2024"))
    day = year.add_child(Heading(title="2024-01-01 Monday", level=2))
    day.properties["SOURCE"] = "Day One"
    day.body = "Entry text"

    assert OrgCodec().render(doc) == (
        "#+TITLE: J\n"
        "* 2024\n"
        "** 2024-01-01 Monday\n"
        ":PROPERTIES:\n"
        ":SOURCE: Day One\n"
        ":END:\n"
        "Entry text\n"
    )


def test_render_multiline_property_value_roundtrips():
    """Test line breaks in a property value are folded so the drawer parses back."""
    doc = OutlineDocument()
    day = doc.add_heading(Heading(title="2024-03-05 Tuesday"))
    day.properties["DAYONE_UUID"] = "U1"
    day.properties["DAYONE_PLACENAME"] = "Line1\nLine2\r\n  Line3"
    day.body = "Entry text\n"

    text = OrgCodec().render(doc)
    reparsed = OrgCodec().parse(text)

    assert ":DAYONE_PLACENAME: Line1 Line2 Line3\n" in text
    heading = reparsed.headings[0]
    assert dict(heading.properties) == {
        "DAYONE_UUID": "U1",
        "DAYONE_PLACENAME": "Line1 Line2 Line3",
    }
    assert heading.body == "Entry text\n"
    assert OrgCodec().render(reparsed) == text
