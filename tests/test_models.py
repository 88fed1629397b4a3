from pydantic import ValidationError
import pytest

from adfconvert.models import (
    Doc,
    Heading,
    HeadingAttrs,
    Paragraph,
    StrongMark,
    TaskItemAttrs,
    Text,
    UnknownMark,
    UnknownNode,
)


class TestDocumentModels:
    def test_from_dict_and_as_dict(self, adf_document_dict):
        doc = Doc.from_dict(adf_document_dict)

        assert doc.as_dict() == adf_document_dict

    def test_from_json(self, adf_document):
        assert Doc.from_json(adf_document.as_json()) == adf_document

    def test_unknown_node_is_preserved(self):
        data = {
            'type': 'doc',
            'version': 1,
            'content': [{'type': 'extension', 'attrs': {'extensionKey': 'macro', 'parameters': {'a': 1}}}],
        }

        doc = Doc.from_dict(data)

        assert isinstance(doc.content[0], UnknownNode)
        assert doc.as_dict() == data

    def test_unknown_mark_is_preserved(self):
        data = {
            'type': 'doc',
            'version': 1,
            'content': [
                {
                    'type': 'paragraph',
                    'content': [{'type': 'text', 'text': 'x', 'marks': [{'type': 'annotation', 'attrs': {'id': 'a'}}]}],
                }
            ],
        }

        doc = Doc.from_dict(data)

        assert isinstance(doc.content[0].content[0].marks[0], UnknownMark)
        assert doc.as_dict() == data

    def test_fields_are_camel_case_on_the_wire(self):
        assert TaskItemAttrs(local_id='a').as_dict() == {'localId': 'a', 'state': 'TODO'}

    def test_models_are_frozen(self):
        text = Text(text='x')

        with pytest.raises(ValidationError):
            text.text = 'y'

    def test_heading_level_is_not_validated(self):
        heading = Heading.model_validate({'type': 'heading', 'attrs': {'level': 9}})

        assert heading.attrs == HeadingAttrs(level=9)

    def test_nodes_compare_by_value(self):
        assert Paragraph(content=[Text(text='x', marks=[StrongMark()])]) == Paragraph(
            content=[Text(text='x', marks=[StrongMark()])]
        )
