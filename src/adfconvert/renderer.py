"""Renders ADF documents as HTML.

The output is the HTML dialect understood by `adfconvert.parser`: ADF nodes without an HTML counterpart are written
as `adf-*` elements or as HTML elements carrying `data-*` attributes, so that `html_to_adf(adf_to_html(doc)) == doc`.
"""

from html import escape
import logging

from adfconvert.config import ConverterConfiguration, get_configuration
from adfconvert.constants import DECISION_LIST_TAG, LOGGER_NAME, TASK_LIST_TAG
from adfconvert.models import (
    BackgroundColorMark,
    BlockCard,
    Blockquote,
    BorderMark,
    BulletList,
    CodeBlock,
    CodeMark,
    Date,
    DecisionList,
    Doc,
    EmMark,
    Emoji,
    Expand,
    HardBreak,
    Heading,
    InlineCard,
    LinkMark,
    ListItem,
    Media,
    MediaGroup,
    MediaSingle,
    Mention,
    NestedExpand,
    OrderedList,
    Panel,
    Paragraph,
    Rule,
    Status,
    StrikeMark,
    StrongMark,
    SubSupMark,
    Table,
    TableCell,
    TableHeader,
    TableRow,
    TaskItemState,
    TaskList,
    Text,
    TextColorMark,
    UnderlineMark,
)
from adfconvert.utils.dates import timestamp_to_rfc3339

logger = logging.getLogger(LOGGER_NAME)


def _attributes(attrs: dict[str, object]) -> str:
    """Formats attributes, skipping None values and writing True as a valueless attribute."""

    parts = []
    for name, value in attrs.items():
        if value is None or value is False:
            continue
        if value is True:
            parts.append(f' {name}')
        else:
            parts.append(f' {name}="{escape(str(value), quote=True)}"')
    return ''.join(parts)


def _element(tag: str, content: str = '', **attrs) -> str:
    return f'<{tag}{_attributes(attrs)}>{content}</{tag}>'


def _number(value: int | float | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class HtmlRenderer:
    def __init__(self, configuration: ConverterConfiguration | None = None):
        self.configuration = configuration or get_configuration()

    def render(self, doc: Doc) -> str:
        return self.blocks(doc.content)

    def blocks(self, nodes: list) -> str:
        return ''.join(self.block(node) for node in nodes)

    def inlines(self, nodes: list) -> str:
        return ''.join(self.inline(node) for node in nodes)

    def block(self, node) -> str:
        if isinstance(node, Paragraph):
            return _element('p', self.inlines(node.content))
        if isinstance(node, Heading):
            level = node.attrs.level if 1 <= node.attrs.level <= 6 else 6
            return _element(f'h{level}', self.inlines(node.content))
        if isinstance(node, Blockquote):
            return _element('blockquote', self.blocks(node.content))
        if isinstance(node, BulletList):
            return _element('ul', self.list_items(node.content))
        if isinstance(node, OrderedList):
            order = node.attrs.order if node.attrs else None
            return _element('ol', self.list_items(node.content), start=order)
        if isinstance(node, CodeBlock):
            language = node.attrs.language if node.attrs else None
            code = escape(''.join(text.text for text in node.content), quote=False)
            css_class = f'language-{language}' if language else None
            return _element('pre', _element('code', code, **{'class': css_class}))
        if isinstance(node, Rule):
            return '<hr>'
        if isinstance(node, Table):
            return self.table(node)
        if isinstance(node, Panel):
            return _element('figure', self.blocks(node.content), **{'data-panel-type': node.attrs.panel_type})
        if isinstance(node, Expand):
            summary = _element('summary', escape(node.attrs.title)) if node.attrs.title is not None else ''
            return _element('details', summary + self.blocks(node.content))
        if isinstance(node, NestedExpand):
            summary = _element('summary', escape(node.attrs.title))
            return _element('details', summary + self.blocks(node.content), **{'data-nested': 'true'})
        if isinstance(node, MediaGroup):
            return _element('adf-media-group', self.media_nodes(node.content))
        if isinstance(node, MediaSingle):
            attrs = {'data-layout': node.attrs.layout, 'data-width': _number(node.attrs.width)}
            return _element('adf-media-single', self.media_nodes(node.content), **attrs)
        if isinstance(node, TaskList):
            return self.task_list(node)
        if isinstance(node, DecisionList):
            return self.decision_list(node)
        if isinstance(node, BlockCard):
            return self.block_card(node)
        logger.warning(f'Skipping unsupported block node {node.type!r}')
        return ''

    def list_items(self, items: list[ListItem]) -> str:
        return ''.join(_element('li', self.blocks(item.content)) for item in items)

    def local_data(self, tag: str, local_id: str) -> str:
        return _element('adf-local-data', **{'data-tag': tag, 'id': local_id})

    def task_list(self, node: TaskList) -> str:
        items = []
        for item in node.content:
            checkbox = _element(
                'adf-task-item',
                type='checkbox',
                id=item.attrs.local_id,
                checked=item.attrs.state == TaskItemState.DONE,
            )
            items.append(_element('li', checkbox + self.inlines(item.content)))
        return self.local_data(TASK_LIST_TAG, node.attrs.local_id) + _element('ul', ''.join(items))

    def decision_list(self, node: DecisionList) -> str:
        items = [
            _element('li', _element('adf-decision-item', self.inlines(item.content), id=item.attrs.local_id))
            for item in node.content
        ]
        return self.local_data(DECISION_LIST_TAG, node.attrs.local_id) + _element('ul', ''.join(items))

    def table(self, node: Table) -> str:
        rows = list(node.content)
        header_count = 0
        while header_count < len(rows) and rows[header_count].content and all(
            isinstance(cell, TableHeader) for cell in rows[header_count].content
        ):
            header_count += 1
        sections = ''
        if header_count:
            sections += _element('thead', ''.join(self.table_row(row) for row in rows[:header_count]))
        if header_count < len(rows):
            sections += _element('tbody', ''.join(self.table_row(row) for row in rows[header_count:]))
        attrs = {}
        if node.attrs:
            if node.attrs.is_number_column_enabled is not None:
                attrs['data-number-column-enabled'] = str(node.attrs.is_number_column_enabled).lower()
            attrs['data-layout'] = node.attrs.layout
            attrs['data-width'] = _number(node.attrs.width)
            attrs['data-display-mode'] = node.attrs.display_mode
        return _element('table', sections, **attrs)

    def table_row(self, row: TableRow) -> str:
        cells = []
        for cell in row.content:
            tag = 'th' if isinstance(cell, TableHeader) else 'td'
            attrs = {}
            if isinstance(cell, (TableHeader, TableCell)) and cell.attrs:
                attrs = {
                    'colspan': cell.attrs.colspan,
                    'rowspan': cell.attrs.rowspan,
                    'data-background': cell.attrs.background,
                    'data-colwidth': ','.join(str(width) for width in cell.attrs.colwidth)
                    if cell.attrs.colwidth
                    else None,
                }
            cells.append(_element(tag, self.blocks(cell.content), **attrs))
        return _element('tr', ''.join(cells))

    def media_nodes(self, nodes: list[Media]) -> str:
        return ''.join(self.media(node) for node in nodes)

    def media(self, node: Media) -> str:
        width = f'width: {node.attrs.width}px' if node.attrs.width is not None else None
        height = f'height: {node.attrs.height}px' if node.attrs.height is not None else None
        style = '; '.join(part for part in (width, height) if part) or None
        attrs = {
            'data-media-id': node.attrs.id,
            'data-collection': node.attrs.collection,
            'data-type': node.attrs.type.value,
            'alt': node.attrs.alt,
            'style': style,
        }
        href = None
        for mark in node.marks or []:
            if isinstance(mark, LinkMark):
                href = mark.attrs.href
            elif isinstance(mark, BorderMark):
                attrs['data-border-color'] = mark.attrs.color
                attrs['data-border-size'] = mark.attrs.size
        if href is not None:
            return _element('a', href=href, **attrs)
        return f'<img{_attributes(attrs)}>'

    def block_card(self, node: BlockCard) -> str:
        content = ''
        if source := node.attrs.datasource:
            attrs = {
                'data-id': source.id,
                'data-cloud-id': source.parameters.cloud_id,
                'data-jql': source.parameters.jql,
            }
            content = _element('adf-block-card-data-source', **attrs)
            for view in source.views:
                columns = ','.join(column.key for column in view.properties.columns)
                content += _element('adf-block-card-view', **{'data-columns': columns})
        return _element('adf-block-card', content, **{'data-url': node.attrs.url})

    def inline(self, node) -> str:
        if isinstance(node, Text):
            return self.text(node)
        if isinstance(node, HardBreak):
            return '<br>'
        if isinstance(node, Date):
            value = timestamp_to_rfc3339(node.attrs.timestamp, self.configuration.timestamp_unit)
            return _element('time', escape(value), datetime=value)
        if isinstance(node, Emoji):
            attrs = {'aria-alt': node.attrs.short_name, 'data-emoji-id': node.attrs.id}
            return _element('adf-emoji', escape(node.attrs.text or node.attrs.short_name), **attrs)
        if isinstance(node, InlineCard):
            url = node.attrs.url
            return _element('a', escape(url or ''), href=url, **{'data-inline-card': 'true'})
        if isinstance(node, Mention):
            attrs = {
                'data-mention-id': node.attrs.id,
                'data-user-type': node.attrs.user_type.value if node.attrs.user_type else None,
                'data-access-level': node.attrs.access_level.value if node.attrs.access_level else None,
            }
            return _element('adf-mention', escape(node.attrs.text or ''), **attrs)
        if isinstance(node, Status):
            attrs = {'style': f'background-color: {node.attrs.color}', 'aria-label': node.attrs.local_id}
            return _element('adf-status', escape(node.attrs.text), **attrs)
        logger.warning(f'Skipping unsupported inline node {node.type!r}')
        return ''

    def text(self, node: Text) -> str:
        html = escape(node.text, quote=False)
        for mark in reversed(node.marks or []):
            html = self.mark(mark, html)
        return html

    def mark(self, mark, html: str) -> str:
        if isinstance(mark, StrongMark):
            return _element('strong', html)
        if isinstance(mark, EmMark):
            return _element('em', html)
        if isinstance(mark, CodeMark):
            return _element('code', html)
        if isinstance(mark, StrikeMark):
            return _element('del', html)
        if isinstance(mark, UnderlineMark):
            return _element('u', html)
        if isinstance(mark, SubSupMark):
            return _element(mark.attrs.type, html)
        if isinstance(mark, LinkMark):
            attrs = {
                'href': mark.attrs.href,
                'title': mark.attrs.title,
                'data-link-id': mark.attrs.id,
                'data-collection': mark.attrs.collection,
                'data-occurrence-key': mark.attrs.occurrence_key,
            }
            return _element('a', html, **attrs)
        if isinstance(mark, TextColorMark):
            return _element('span', html, style=f'color: {mark.attrs.color}')
        if isinstance(mark, BackgroundColorMark):
            return _element('span', html, style=f'background-color: {mark.attrs.color}')
        logger.warning(f'Skipping unsupported mark {mark.type!r}')
        return html


def adf_to_html(doc: Doc, configuration: ConverterConfiguration | None = None) -> str:
    """Renders an ADF document as HTML.

    Args:
        doc: the document to render.
        configuration: the configuration to use; defaults to the active configuration.

    Returns:
        The HTML fragment.
    """

    return HtmlRenderer(configuration).render(doc)
