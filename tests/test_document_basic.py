import pytest
from pydantic import ValidationError

from docpager.document import Document


def test_clone_merges_overlay_and_keeps_original():
    shared = {"nested": [1, 2]}
    base = Document(source="a.md", content="hi", metadata={"x": 1, "obj": shared})
    clone = base.clone({"x": 2, "y": 3})

    assert clone is not base
    assert clone["x"] == 2 and clone["y"] == 3
    assert clone["obj"] is base["obj"]
    assert base.metadata == {"x": 1, "obj": shared}
    assert clone.source == "a.md" and clone.content == "hi"


def test_clone_without_overlay_and_with_content():
    base = Document(content="old", metadata={"k": "v"})
    assert base.clone().metadata == {"k": "v"}
    c = base.clone(content="new")
    assert c.content == "new" and base.content == "old"


def test_document_is_frozen():
    doc = Document(content="x")
    with pytest.raises(ValidationError):
        doc.content = "y"


def test_mapping_access():
    doc = Document(metadata={"a": 1})
    assert "a" in doc and "b" not in doc
    assert doc.get("b", 5) == 5
    assert list(doc.keys()) == ["a"]
    with pytest.raises(KeyError):
        doc["b"]


def test_metadata_is_read_only():
    doc = Document(metadata={"a": 1})
    with pytest.raises(TypeError):
        doc.metadata["a"] = 99
    with pytest.raises(TypeError):
        doc.clone({"b": 2}).metadata["b"] = 3
    with pytest.raises(TypeError):
        Document().metadata["x"] = 1
    assert doc["a"] == 1


def test_input_dict_is_copied():
    raw = {"a": 1}
    doc = Document(metadata=raw)
    raw["a"] = 2
    assert doc["a"] == 1


def test_document_is_not_hashable():
    with pytest.raises(TypeError):
        hash(Document())
