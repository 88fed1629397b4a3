from adfconvert.models import Doc
from adfconvert.parser import html_to_adf
from adfconvert.renderer import adf_to_html


def _doc(*content):
    return Doc.from_dict({'type': 'doc', 'version': 1, 'content': list(content)})


def _paragraph(*content):
    return {'type': 'paragraph', 'content': list(content)}


def _text(text, *marks):
    node = {'type': 'text', 'text': text}
    if marks:
        node['marks'] = list(marks)
    return node


class TestHtmlRenderer:
    def test_paragraph_text_is_escaped(self):
        html = adf_to_html(_doc(_paragraph(_text('a < b & c'))))

        assert html == '<p>a &lt; b &amp; c</p>'

    def test_marks_are_nested_in_order(self):
        html = adf_to_html(_doc(_paragraph(_text('x', {'type': 'strong'}, {'type': 'em'}))))

        assert html == '<p><strong><em>x</em></strong></p>'

    def test_heading_level_is_clamped(self):
        doc = _doc({'type': 'heading', 'attrs': {'level': 9}, 'content': [_text('Deep')]})

        html = adf_to_html(doc)

        assert html == '<h6>Deep</h6>'
        assert html_to_adf(html).content[0].attrs.level == 6

    def test_table_without_header_row_has_only_a_body(self):
        doc = _doc(
            {
                'type': 'table',
                'content': [{'type': 'tableRow', 'content': [{'type': 'tableCell', 'content': [_paragraph(_text('x'))]}]}],
            }
        )

        html = adf_to_html(doc)

        assert '<thead>' not in html
        assert html == '<table><tbody><tr><td><p>x</p></td></tr></tbody></table>'

    def test_task_list_markup(self):
        doc = _doc(
            {
                'type': 'taskList',
                'attrs': {'localId': 'list'},
                'content': [
                    {'type': 'taskItem', 'attrs': {'localId': 'a', 'state': 'DONE'}, 'content': [_text('Done')]}
                ],
            }
        )

        html = adf_to_html(doc)

        assert html == (
            '<adf-local-data data-tag="task-list" id="list"></adf-local-data>'
            '<ul><li><adf-task-item type="checkbox" id="a" checked></adf-task-item>Done</li></ul>'
        )

    def test_status(self):
        doc = _doc(_paragraph({'type': 'status', 'attrs': {'text': 'Open', 'color': 'green', 'localId': 's'}}))

        assert adf_to_html(doc) == '<p><adf-status style="background-color: green" aria-label="s">Open</adf-status></p>'

    def test_date_uses_rfc3339(self):
        doc = _doc(_paragraph({'type': 'date', 'attrs': {'timestamp': '1700000000000'}}))

        assert adf_to_html(doc) == '<p><time datetime="2023-11-14T22:13:20Z">2023-11-14T22:13:20Z</time></p>'

    def test_unknown_nodes_are_skipped(self):
        doc = _doc({'type': 'extension', 'attrs': {'extensionKey': 'x'}}, _paragraph(_text('kept')))

        assert adf_to_html(doc) == '<p>kept</p>'

    def test_panel(self):
        doc = _doc({'type': 'panel', 'attrs': {'panelType': 'note'}, 'content': [_paragraph(_text('x'))]})

        assert adf_to_html(doc) == '<figure data-panel-type="note"><p>x</p></figure>'
