import pytest

from adfconvert.exceptions import MarkdownConversionException
from adfconvert.markdown import markdown_to_adf
from adfconvert.models import (
    BulletList,
    CodeMark,
    EmMark,
    OrderedList,
    Paragraph,
    StrikeMark,
    StrongMark,
    TaskItemState,
    Text,
)


def _types(doc):
    return [node.type for node in doc.content]


class TestMarkdownToAdfConversion:
    def test_convert_markdown(self, markdown_document):
        doc = markdown_to_adf(markdown_document)

        assert doc.version == 1
        assert _types(doc) == [
            'heading',
            'paragraph',
            'bulletList',
            'orderedList',
            'taskList',
            'panel',
            'blockquote',
            'codeBlock',
            'table',
            'rule',
            'paragraph',
        ]

        heading = doc.content[0]
        assert heading.attrs.level == 1
        assert heading.content == [Text(text='Release notes')]

        marks = {node.text: node.marks for node in doc.content[1].content}
        assert marks['bold'] == [StrongMark()]
        assert marks['italic'] == [EmMark()]
        assert marks['struck'] == [StrikeMark()]
        assert marks['inline code'] == [CodeMark()]
        assert marks['link'][0].attrs.href == 'https://example.com'

        bullets = doc.content[2]
        assert isinstance(bullets, BulletList)
        first = bullets.content[0]
        assert first.content[0] == Paragraph(content=[Text(text='First')])
        assert isinstance(first.content[1], BulletList)

        assert isinstance(doc.content[3], OrderedList)

        tasks = doc.content[4]
        assert [item.attrs.state for item in tasks.content] == [TaskItemState.DONE, TaskItemState.TODO]
        assert [item.content for item in tasks.content] == [[Text(text='Ship it')], [Text(text='Announce')]]

        panel = doc.content[5]
        assert panel.attrs.panel_type == 'warning'
        assert panel.content == [Paragraph(content=[Text(text='Be careful')])]

        code = doc.content[7]
        assert code.attrs.language == 'python'
        assert code.content == [Text(text="print('hi')")]

        table = doc.content[8]
        assert [cell.type for cell in table.content[0].content] == ['tableHeader', 'tableHeader']
        assert [cell.type for cell in table.content[1].content] == ['tableCell', 'tableCell']

        status = doc.content[10].content[1]
        assert status.type == 'status'
        assert status.attrs.color == 'green'
        assert status.attrs.text == 'Done'

    @pytest.mark.parametrize(
        'alert, panel_type',
        [('NOTE', 'info'), ('TIP', 'success'), ('IMPORTANT', 'note'), ('WARNING', 'warning'), ('CAUTION', 'error')],
    )
    def test_alert_types(self, alert, panel_type):
        doc = markdown_to_adf(f'> [!{alert}]\n> Text')

        assert doc.content[0].type == 'panel'
        assert doc.content[0].attrs.panel_type == panel_type

    def test_alert_marker_on_the_text_line(self):
        doc = markdown_to_adf('> [!TIP] Use shortcuts')

        assert doc.content[0].content == [Paragraph(content=[Text(text='Use shortcuts')])]

    def test_alert_panels_disabled(self, mock_configuration):
        configuration = mock_configuration.model_copy(
            update={'markdown': mock_configuration.markdown.model_copy(update={'alert_panels': False})}
        )

        doc = markdown_to_adf('> [!NOTE]\n> Text', configuration)

        assert doc.content[0].type == 'blockquote'

    def test_task_lists_disabled(self, mock_configuration):
        configuration = mock_configuration.model_copy(
            update={'markdown': mock_configuration.markdown.model_copy(update={'task_lists': False})}
        )

        doc = markdown_to_adf('- [ ] todo', configuration)

        assert doc.content[0].type == 'bulletList'

    def test_inline_html_block_is_hoisted_out_of_paragraph(self):
        doc = markdown_to_adf('Before <details><summary>More</summary>hidden</details>')

        assert _types(doc) == ['paragraph', 'expand']
        assert doc.content[1].attrs.title == 'More'

    def test_unconvertible_html(self):
        with pytest.raises(MarkdownConversionException) as exc_info:
            markdown_to_adf('<adf-media-single><img data-media-id="1"></adf-media-single> media')

        assert 'html' in exc_info.value.extra

    def test_empty_markdown(self):
        assert markdown_to_adf('').content == []
