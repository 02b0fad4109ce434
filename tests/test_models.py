import json

import pytest

from docoutline.models.blocks import BlockElement, Document, TextModel, TextType, load_document, text_type_precedence
from docoutline.models.outline import OutlineNode, reference_node_id, referenced_document_id


def test_outline_node_add_child_if_absent_is_idempotent_by_id():
    root = OutlineNode(id="title", title="Doc", priority=0, node_type="normal")
    first = OutlineNode(id="Ref-a", title="A", priority=-100, node_type="reference")
    duplicate = OutlineNode(id="Ref-a", title="A again", priority=-100, node_type="reference")

    assert root.add_child_if_absent(first) is True
    assert root.add_child_if_absent(duplicate) is False
    assert root.children == [first]


def test_outline_node_to_dict_uses_wire_keys():
    root = OutlineNode(id="title", title="Doc", priority=0, node_type="normal")
    root.add_child(OutlineNode(id="h1", title="Intro", priority=1, node_type="heading1"))

    assert root.to_dict() == {
        "id": "title",
        "title": "Doc",
        "priority": 0,
        "nodeType": "normal",
        "children": [
            {"id": "h1", "title": "Intro", "priority": 1, "nodeType": "heading1", "children": []},
        ],
    }


def test_reference_ids_round_trip():
    assert reference_node_id("abc") == "Ref-abc"
    assert referenced_document_id("Ref-abc") == "abc"
    assert referenced_document_id("heading-block") is None


def test_text_type_precedence():
    assert text_type_precedence("heading1") == 1
    assert text_type_precedence(TextType.HEADING3) == 3
    assert text_type_precedence("normal") == 0
    assert text_type_precedence("quoted") == 0
    assert text_type_precedence(None) == 0
    assert text_type_precedence(2) == 0


def test_text_model_flattens_plain_inserts_only():
    model = TextModel.from_ops(
        [
            {"insert": "See "},
            {"insert": {"type": "reference", "docId": "x"}},
            {"insert": "here", "attributes": {"bold": True}},
        ]
    )

    assert str(model) == "See here"
    assert list(model.embeds()) == [{"type": "reference", "docId": "x"}]


def test_text_model_rejects_op_without_insert():
    with pytest.raises(ValueError, match="#1"):
        TextModel.from_ops([{"insert": "ok"}, {"delete": 3}])


def test_block_children_form_linked_list():
    body = BlockElement("Body", "body")
    a = body.append_child(BlockElement("Text", "a"))
    b = body.append_child(BlockElement("Text", "b"))

    assert body.first_child is a
    assert body.last_child is b
    assert a.next_sibling is b
    assert b.prev_sibling is a
    assert b.parent is body
    assert [child.id for child in body.iter_children()] == ["a", "b"]

    with pytest.raises(ValueError):
        BlockElement("Body", "other").append_child(a)


def test_load_document_from_json(tmp_path):
    payload = {
        "title": {"id": "t", "nodeName": "Title", "textModels": {"textContent": [{"insert": "My Doc"}]}},
        "body": {
            "id": "b",
            "nodeName": "Body",
            "children": [
                {
                    "id": "h",
                    "nodeName": "Text",
                    "attributes": {"textType": "heading1"},
                    "textModels": {"textContent": [{"insert": "Intro"}]},
                }
            ],
        },
    }
    path = tmp_path / "doc.json"
    path.write_text(json.dumps(payload), encoding="utf-8")

    document = load_document(path)

    assert document.title_text == "My Doc"
    heading = document.body.first_child
    assert heading is not None
    assert heading.get_attribute("textType") == "heading1"
    assert str(heading.get_text_model()) == "Intro"


def test_document_from_dict_reports_missing_fields():
    with pytest.raises(ValueError, match="body"):
        Document.from_dict({"title": {"id": "t", "nodeName": "Title"}})

    with pytest.raises(ValueError, match=r"\$\.body\.children\[0\]"):
        Document.from_dict(
            {
                "title": {"id": "t", "nodeName": "Title"},
                "body": {"id": "b", "nodeName": "Body", "children": [{"nodeName": "Text"}]},
            }
        )


def test_document_without_title_text_model_has_empty_title():
    document = Document(title=BlockElement("Title", "t"), body=BlockElement("Body", "b"))

    assert document.title_text == ""


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ({"id": "b", "nodeName": "Body", "children": ["oops"]}, r"\$\.body\.children\[0\] must be an object"),
        ({"id": "b", "nodeName": "Body", "textModels": [["insert"]]}, r"\$\.body has non-object 'textModels'"),
        (
            {"id": "b", "nodeName": "Body", "textModels": {"textContent": ["plain"]}},
            r"#0 at \$\.body\.textModels\.textContent is not an object",
        ),
        (
            {"id": "b", "nodeName": "Body", "textModels": {"textContent": {"insert": "x"}}},
            r"\$\.body\.textModels\.textContent must be a list",
        ),
        ({"id": "b", "nodeName": "Body", "attributes": ["textType"]}, r"\$\.body has non-object 'attributes'"),
        ({"id": "b", "nodeName": "Body", "children": {"id": "c"}}, r"\$\.body has non-list 'children'"),
    ],
)
def test_document_from_dict_rejects_malformed_structure_with_location(body, message):
    with pytest.raises(ValueError, match=message):
        Document.from_dict({"title": {"id": "t", "nodeName": "Title"}, "body": body})


def test_document_from_dict_rejects_non_object_payload():
    with pytest.raises(ValueError, match="JSON object"):
        Document.from_dict(["title", "body"])
