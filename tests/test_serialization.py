"""Tests for obsidized.serialization: AST JSON round-trip."""

import json

import pytest

from obsidized import parse_document
from obsidized.config import ParseConfig, parse_config_context
from obsidized.location import SourceLocation
from obsidized.nodes import (
    Block,
    Callout,
    CodeBlock,
    Document,
    HorizontalBar,
    Italic,
    ListElement,
    Tables,
    Task,
    TaskList,
    Text,
)
from obsidized.serialization import from_dict, from_json, to_dict, to_json

_LOC = SourceLocation(lineno=2, col_offset=3, offset=10, end_offset=14, source_file="a.md")


class TestToDict:
    """Shape of the serialized form."""

    def test_text(self) -> None:
        assert to_dict(Text("hi", location=_LOC)) == {
            "_type": "Text",
            "content": "hi",
            "location": {
                "_type": "SourceLocation",
                "lineno": 2,
                "col_offset": 3,
                "offset": 10,
                "end_offset": 14,
                "source_file": "a.md",
            },
        }

    def test_children_become_lists(self) -> None:
        data = to_dict(Italic((Text("x"),)))
        assert data["_type"] == "Italic"
        assert isinstance(data["children"], list)
        assert data["children"][0]["content"] == "x"

    def test_json_is_deterministic(self) -> None:
        doc = parse_document("**a** [[b]]")
        assert to_json(doc) == to_json(doc)
        assert list(json.loads(to_json(doc))) == sorted(json.loads(to_json(doc)))


class TestRoundTrip:
    """Parsed and hand-built trees survive to_json/from_json."""

    def test_parsed_document(self) -> None:
        source = "# T\n\n> [!tip] **a** `b` $c$\n\n---\n\n![x](y.png) ![[z.png]] ==h== ~~s~~"
        with parse_config_context(ParseConfig.from_plugins(["all"])):
            doc = parse_document(source, source_file="n.md")
        restored = from_json(to_json(doc))
        assert restored == doc
        assert restored.location == doc.location
        assert restored.children[0].location == doc.children[0].location

    def test_unrendered_nodes(self) -> None:
        doc = Document(
            (
                Block(
                    (
                        CodeBlock(lang="py", contents="\nx = 1"),
                        TaskList((Task(completed=True, children=(Text("done"),)),)),
                        Callout(callout_type="note", children=()),
                        Tables(((Text("a"), Text("b")), (Text("c"), Text("d")))),
                        ListElement(style="-", loose=True, children=(Text("item"),)),
                        HorizontalBar(),
                    )
                ),
            )
        )
        assert from_json(to_json(doc)) == doc

    def test_table_rows_are_tuples(self) -> None:
        restored = from_dict(to_dict(Tables(((Text("a"),),))))
        assert restored == Tables(((Text("a"),),))
        assert isinstance(restored.rows[0], tuple)


class TestErrors:
    """Malformed input is rejected."""

    def test_missing_type(self) -> None:
        with pytest.raises(ValueError, match="Missing '_type'"):
            from_dict({"content": "x"})

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown node type: 'Paragraph'"):
            from_dict({"_type": "Paragraph"})

    def test_json_must_be_document(self) -> None:
        with pytest.raises(ValueError, match="Expected Document, got Text"):
            from_json(to_json(Text("x")))  # type: ignore[arg-type]
