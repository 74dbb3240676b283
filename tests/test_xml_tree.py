import pytest

from testng_ctrf.errors import StructureError
from testng_ctrf.xml_tree import Element, int_attr, parse_xml_file, parse_xml_string, str_attr


def test_document_node_wraps_root_in_list():
    doc = parse_xml_string('<testng-results total="1"><suite name="s"/></testng-results>')

    roots = doc.get_all("testng-results")
    assert len(roots) == 1
    assert roots[0].attributes == {"total": "1"}
    assert doc.attributes == {}


def test_repeated_children_keep_document_order():
    doc = parse_xml_string('<a><b name="1"/><c/><b name="2"/><b name="3"/></a>')
    root = doc.first("a")

    assert [b.attributes["name"] for b in root.get_all("b")] == ["1", "2", "3"]
    assert len(root.get_all("c")) == 1
    assert root.get_all("missing") == []
    assert root.first("missing") is None


def test_cdata_text_is_exposed_and_trimmed():
    doc = parse_xml_string("<m>\n  <![CDATA[boom <here>]]>\n</m>")
    assert doc.first("m").text == "boom <here>"


def test_whitespace_only_text_is_none():
    doc = parse_xml_string("<a>\n   <b/>\n</a>")
    assert doc.first("a").text is None


def test_first_text():
    root = parse_xml_string("<e><message>oops</message><message>second</message></e>").first("e")
    assert root.first_text("message") == "oops"
    assert root.first_text("full-stacktrace") is None


def test_syntax_error_raises_structure_error():
    with pytest.raises(StructureError, match="Failed to parse TestNG XML"):
        parse_xml_string("<testng-results><suite></testng-results>")


def test_parse_xml_file(tmp_path):
    path = tmp_path / "r.xml"
    path.write_text("<root><child/></root>", encoding="utf-8")
    assert parse_xml_file(path).first("root").first("child") is not None


@pytest.mark.parametrize("value, expected", [
    ("42", 42),
    ("  7", 7),
    ("12ms", 12),
    ("1.5", 1),
    ("-3", -3),
    ("abc", 0),
    ("", 0),
])
def test_int_attr(value, expected):
    node = Element(tag="x", attributes={"n": value})
    assert int_attr(node, "n") == expected


def test_int_attr_default_when_absent():
    assert int_attr(Element(tag="x"), "n", 5) == 5
    assert int_attr(None, "n", 9) == 9


def test_str_attr():
    node = Element(tag="x", attributes={"name": "a", "empty": ""})
    assert str_attr(node, "name") == "a"
    assert str_attr(node, "empty", "fallback") == "fallback"
    assert str_attr(node, "missing") is None
    assert str_attr(None, "name", "d") == "d"
