"""Conversion between ADF and Markdown.

Markdown is converted through HTML in both directions: markdown-it-py renders Markdown as HTML for the builder and
markdownify turns the renderer's HTML into Markdown. ADF elements without a Markdown syntax are kept as inline HTML,
which markdown-it passes through unchanged.
"""

from html import escape
import logging

from bs4 import Tag
from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdownify import MarkdownConverter, chomp
from mdit_py_plugins.tasklists import tasklists_plugin

from adfconvert.config import ConverterConfiguration, get_configuration
from adfconvert.constants import CODE_LANGUAGE_CLASS_PREFIX, LOGGER_NAME, PANEL_TYPE_TO_ALERT
from adfconvert.exceptions import MarkdownConversionException, StructuralFault
from adfconvert.marks import apply_markup, style_marks
from adfconvert.models import Doc, SubSupAttrs, SubSupMark, UnderlineMark
from adfconvert.parser.tokenizer import html_to_adf
from adfconvert.renderer import adf_to_html
from adfconvert.sanitize import sanitize_html_structure
from adfconvert.utils.mdit_adf_panels import panels_plugin

logger = logging.getLogger(LOGGER_NAME)


def _start_tag(el: Tag) -> str:
    attrs = []
    for name, value in el.attrs.items():
        if isinstance(value, list):
            value = ' '.join(value)
        attrs.append(f' {name}="{escape(str(value), quote=True)}"')
    return f'<{el.name}{"".join(attrs)}>'


def code_language(el: Tag) -> str | None:
    """Returns the language of a `<pre>` block from the `language-*` class of its `<code>` child."""

    code = el.find('code')
    if not isinstance(code, Tag):
        return None
    for css_class in code.get('class') or []:
        if css_class.startswith(CODE_LANGUAGE_CLASS_PREFIX):
            return css_class.removeprefix(CODE_LANGUAGE_CLASS_PREFIX)
    return None


class AdfMarkdownConverter(MarkdownConverter):
    """Converts the HTML written by the ADF renderer to Markdown."""

    class Options(MarkdownConverter.DefaultOptions):
        extended_marks = False
        alert_panels = True
        task_lists = True

    def _inline_raw(self, el: Tag, text: str) -> str:
        prefix, suffix, text = chomp(text)
        if not text:
            return ''
        return f'{prefix}{_start_tag(el)}{text}</{el.name}>{suffix}'

    def _raw_block(self, el: Tag, text: str, parent_tags: set[str]) -> str:
        if '_inline' in parent_tags:
            return str(el)
        return f'\n\n{str(el)}\n\n'

    def _marked(self, el: Tag, text: str, mark) -> str:
        if self.options['extended_marks']:
            prefix, suffix, text = chomp(text)
            return f'{prefix}{apply_markup(text, [mark])}{suffix}' if text else ''
        return self._inline_raw(el, text)

    def convert_u(self, el, text, parent_tags):
        return self._marked(el, text, UnderlineMark())

    def convert_sub(self, el, text, parent_tags):
        return self._marked(el, text, SubSupMark(attrs=SubSupAttrs(type='sub')))

    def convert_sup(self, el, text, parent_tags):
        return self._marked(el, text, SubSupMark(attrs=SubSupAttrs(type='sup')))

    def convert_span(self, el, text, parent_tags):
        marks = style_marks(el.get('style'))
        if not marks:
            return text
        if self.options['extended_marks'] and len(marks) == 1:
            return self._marked(el, text, marks[0])
        return self._inline_raw(el, text)

    def convert_a(self, el, text, parent_tags):
        if el.has_attr('data-inline-card'):
            return str(el)
        return super().convert_a(el, text, parent_tags)

    def convert_time(self, el, text, parent_tags):
        return str(el)

    def convert_adf_status(self, el, text, parent_tags):
        return str(el)

    def convert_adf_emoji(self, el, text, parent_tags):
        return str(el)

    def convert_adf_mention(self, el, text, parent_tags):
        return str(el)

    def convert_adf_media_group(self, el, text, parent_tags):
        return self._raw_block(el, text, parent_tags)

    def convert_adf_media_single(self, el, text, parent_tags):
        return self._raw_block(el, text, parent_tags)

    def convert_adf_block_card(self, el, text, parent_tags):
        return self._raw_block(el, text, parent_tags)

    def convert_adf_local_data(self, el, text, parent_tags):
        if self.options['task_lists'] and el.get('data-tag') == 'task-list':
            return ''
        return self._raw_block(el, text, parent_tags)

    def convert_adf_task_item(self, el, text, parent_tags):
        if self.options['task_lists']:
            return '[x] ' if el.has_attr('checked') else '[ ] '
        return str(el)

    def convert_adf_decision_item(self, el, text, parent_tags):
        return f'{_start_tag(el)}{text.strip()}</{el.name}>'

    def convert_details(self, el, text, parent_tags):
        summary = el.find('summary', recursive=False)
        heading = f'\n{str(summary)}' if summary is not None else ''
        return f'\n\n{_start_tag(el)}{heading}\n\n{text.strip()}\n\n</details>\n\n'

    def convert_summary(self, el, text, parent_tags):
        # written by the enclosing details element
        return ''

    def convert_figure(self, el, text, parent_tags):
        alert = PANEL_TYPE_TO_ALERT.get(el.get('data-panel-type', '')) if self.options['alert_panels'] else None
        body = text.strip()
        if alert is None:
            return f'\n\n{_start_tag(el)}\n\n{body}\n\n</figure>\n\n'
        lines = [f'[!{alert}]', *body.split('\n')] if body else [f'[!{alert}]']
        return '\n\n' + '\n'.join(f'> {line}'.rstrip() for line in lines) + '\n\n'


def _strip_code_newline(state: StateCore) -> None:
    """Drops the line break markdown-it keeps after the last line of a code block."""

    for token in state.tokens:
        if token.type in ('fence', 'code_block') and token.content.endswith('\n'):
            token.content = token.content[:-1]


def _markdown_parser(configuration: ConverterConfiguration) -> MarkdownIt:
    md = MarkdownIt('commonmark', {'html': True}).enable(['table', 'strikethrough'])
    md.core.ruler.after('block', 'adf-code-newline', _strip_code_newline)
    if configuration.markdown.task_lists:
        md.use(tasklists_plugin)
    if configuration.markdown.alert_panels:
        md.use(panels_plugin)
    return md


def markdown_to_html(text: str, configuration: ConverterConfiguration | None = None) -> str:
    """Renders Markdown as HTML, keeping inline HTML as is."""

    configuration = configuration or get_configuration()
    return _markdown_parser(configuration).render(text)


def html_to_markdown(html: str, configuration: ConverterConfiguration | None = None) -> str:
    """Converts HTML written by the ADF renderer into Markdown."""

    configuration = configuration or get_configuration()
    converter = AdfMarkdownConverter(
        heading_style=configuration.markdown.heading_style,
        bullets=configuration.markdown.bullets,
        code_language_callback=code_language,
        extended_marks=configuration.markdown.extended_marks,
        alert_panels=configuration.markdown.alert_panels,
        task_lists=configuration.markdown.task_lists,
    )
    return converter.convert(html).strip()


def markdown_to_adf(text: str, configuration: ConverterConfiguration | None = None) -> Doc:
    """Converts Markdown into an ADF document.

    Args:
        text: the Markdown text.
        configuration: the configuration to use; defaults to the active configuration.

    Returns:
        The ADF document.

    Raises:
        MarkdownConversionException: the Markdown contains HTML that cannot be represented in ADF.
    """

    configuration = configuration or get_configuration()
    html = sanitize_html_structure(markdown_to_html(text, configuration))
    try:
        return html_to_adf(html, sanitize=False, configuration=configuration)
    except StructuralFault as e:
        logger.error(f'Unable to convert markdown to ADF: {e}')
        raise MarkdownConversionException(str(e), extra={'html': html}) from e


def adf_to_markdown(doc: Doc, configuration: ConverterConfiguration | None = None) -> str:
    """Converts an ADF document into Markdown.

    Args:
        doc: the document to convert.
        configuration: the configuration to use; defaults to the active configuration.

    Returns:
        The Markdown text.
    """

    configuration = configuration or get_configuration()
    return html_to_markdown(adf_to_html(doc, configuration), configuration)
