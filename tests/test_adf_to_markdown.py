from adfconvert.markdown import adf_to_markdown, markdown_to_adf
from adfconvert.models import Doc


def _with_markdown(configuration, **options):
    return configuration.model_copy(update={'markdown': configuration.markdown.model_copy(update=options)})


class TestAdfToMarkdownConversion:
    def test_convert_document(self, adf_document):
        markdown = adf_to_markdown(adf_document)

        assert markdown.startswith('# Release notes')
        assert '**bold**' in markdown
        assert '(https://example.com "Example")' in markdown
        assert '<sup>2</sup>' in markdown
        assert '<span style="color: #ff5630">red</span>' in markdown

        assert '<adf-status' in markdown
        assert '<adf-emoji' in markdown
        assert '<adf-mention' in markdown
        assert '<time datetime="2023-11-14T22:13:20Z">' in markdown

        assert '* First' in markdown
        assert '3. Nested' in markdown
        assert '[x] Ship it' in markdown
        assert '[ ] Announce' in markdown
        assert '<adf-decision-item id="decision-1">Use ADF</adf-decision-item>' in markdown

        assert "```python\nprint('hi')" in markdown
        assert '> Quoted' in markdown
        assert '> [!WARNING]\n> Careful' in markdown
        assert '<summary>Details</summary>' in markdown

        assert '| Key | Value |' in markdown
        assert '<adf-media-single data-layout="center">' in markdown
        assert '<adf-block-card data-url="https://example.atlassian.net/browse/ABC-2">' in markdown

    def test_extended_marks(self, adf_document, mock_configuration):
        markdown = adf_to_markdown(adf_document, _with_markdown(mock_configuration, extended_marks=True))

        assert 'x^2^' in markdown
        assert '{color:red}red{color}' in markdown

    def test_panels_without_alerts(self, adf_document, mock_configuration):
        markdown = adf_to_markdown(adf_document, _with_markdown(mock_configuration, alert_panels=False))

        assert '<figure data-panel-type="warning">' in markdown
        assert '[!WARNING]' not in markdown

    def test_markdown_round_trip(self):
        doc = Doc.from_dict(
            {
                'type': 'doc',
                'version': 1,
                'content': [
                    {'type': 'heading', 'attrs': {'level': 2}, 'content': [{'type': 'text', 'text': 'Plan'}]},
                    {
                        'type': 'paragraph',
                        'content': [
                            {'type': 'text', 'text': 'Hello '},
                            {'type': 'text', 'text': 'world', 'marks': [{'type': 'strong'}]},
                        ],
                    },
                    {
                        'type': 'bulletList',
                        'content': [
                            {
                                'type': 'listItem',
                                'content': [{'type': 'paragraph', 'content': [{'type': 'text', 'text': 'one'}]}],
                            },
                            {
                                'type': 'listItem',
                                'content': [{'type': 'paragraph', 'content': [{'type': 'text', 'text': 'two'}]}],
                            },
                        ],
                    },
                    {
                        'type': 'panel',
                        'attrs': {'panelType': 'success'},
                        'content': [{'type': 'paragraph', 'content': [{'type': 'text', 'text': 'Done'}]}],
                    },
                    {'type': 'codeBlock', 'attrs': {'language': 'python'}, 'content': [{'type': 'text', 'text': 'x = 1'}]},
                    {
                        'type': 'taskList',
                        'attrs': {'localId': ''},
                        'content': [
                            {
                                'type': 'taskItem',
                                'attrs': {'localId': '', 'state': 'TODO'},
                                'content': [{'type': 'text', 'text': 'Follow up'}],
                            }
                        ],
                    },
                ],
            }
        )

        assert markdown_to_adf(adf_to_markdown(doc)) == doc
