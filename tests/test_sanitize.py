from adfconvert.models import Paragraph, Table, Text
from adfconvert.parser import html_to_adf
from adfconvert.sanitize import sanitize_html_structure


class TestSanitizeHtmlStructure:
    def test_table_is_hoisted_out_of_a_paragraph(self):
        html = sanitize_html_structure('<p>Intro<table><tr><td>x</td></tr></table>Outro</p>')

        assert html == '<p>Intro</p><table><tr><td>x</td></tr></table><p>Outro</p>'

    def test_blank_runs_do_not_become_paragraphs(self):
        html = sanitize_html_structure('<p> <details><summary>S</summary>x</details> </p>')

        assert html == '<details><summary>S</summary>x</details>'

    def test_nested_anchor_is_replaced_by_its_text(self):
        html = sanitize_html_structure('<a href="https://a.example">outer <a href="https://b.example">inner</a></a>')

        assert 'https://b.example' not in html
        assert 'outer inner' in html

    def test_script_style_and_head_are_removed(self):
        html = sanitize_html_structure(
            '<head><title>t</title></head><style>p {}</style><p>kept</p><script>alert(1)</script>'
        )

        assert html == '<p>kept</p>'

    def test_sanitized_conversion(self):
        doc = html_to_adf('<p>Intro<table><tr><td>x</td></tr></table></p>', sanitize=True)

        assert doc.content[0] == Paragraph(content=[Text(text='Intro')])
        assert isinstance(doc.content[1], Table)

    def test_configuration_enables_sanitizing(self, mock_configuration):
        configuration = mock_configuration.model_copy(update={'sanitize_html': True})

        doc = html_to_adf('<p><script>x</script>text</p>', configuration=configuration)

        assert doc.content == [Paragraph(content=[Text(text='text')])]
