"""Open-element frames of the HTML to ADF builder.

A frame is pushed for every HTML element that produces an ADF block (or an inline element that needs to collect its
text). When the element ends the frame is popped and `close()` turns it into ADF nodes attached to the new top of
the stack.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import TYPE_CHECKING, Any

from adfconvert.constants import DECISION_LIST_TAG, LOGGER_NAME, TASK_LIST_TAG
from adfconvert.marks import style_marks
from adfconvert.models import (
    AccessLevel,
    BlockCard,
    BlockCardAttrs,
    Blockquote,
    BulletList,
    CodeBlock,
    CodeBlockAttrs,
    Datasource,
    DatasourceColumn,
    DatasourceParameters,
    DatasourceView,
    DatasourceViewProperties,
    Date,
    DateAttrs,
    DecisionItem,
    DecisionItemAttrs,
    DecisionList,
    Emoji,
    EmojiAttrs,
    Expand,
    ExpandAttrs,
    HardBreak,
    Heading,
    HeadingAttrs,
    InlineCard,
    InlineCardAttrs,
    ListItem,
    LocalIdAttrs,
    Media,
    MediaGroup,
    MediaSingle,
    MediaSingleAttrs,
    Mention,
    MentionAttrs,
    NestedExpand,
    NestedExpandAttrs,
    OrderedList,
    OrderedListAttrs,
    Panel,
    PanelAttrs,
    Paragraph,
    Status,
    StatusAttrs,
    Table,
    TableAttrs,
    TableCell,
    TableCellAttrs,
    TableHeader,
    TableRow,
    TaskItem,
    TaskItemAttrs,
    TaskItemState,
    TaskList,
    Text,
    UserType,
)
from adfconvert.utils.dates import rfc3339_to_timestamp
from adfconvert.utils.styles import clean_surrounding_text, extract_style

if TYPE_CHECKING:
    from adfconvert.parser.state import BuilderState

logger = logging.getLogger(LOGGER_NAME)


class CustomBlockKind(str, Enum):
    DIV = 'div'
    EXPAND = 'expand'
    NESTED_EXPAND = 'nested-expand'
    PANEL = 'panel'
    BLOCK_CARD = 'block-card'
    MENTION = 'mention'
    STATUS = 'status'
    EMOJI = 'emoji'
    DATE = 'date'
    INLINE_CARD = 'inline-card'


CONTAINER_KINDS = frozenset(
    {CustomBlockKind.DIV, CustomBlockKind.EXPAND, CustomBlockKind.NESTED_EXPAND, CustomBlockKind.PANEL}
)
"""Custom blocks that hold block content."""

TEXT_KINDS = frozenset(
    {
        CustomBlockKind.MENTION,
        CustomBlockKind.STATUS,
        CustomBlockKind.EMOJI,
        CustomBlockKind.DATE,
        CustomBlockKind.INLINE_CARD,
    }
)
"""Custom inline elements that collect their raw text."""

EXPAND_KINDS = frozenset({CustomBlockKind.EXPAND, CustomBlockKind.NESTED_EXPAND})


class MediaBlockKind(str, Enum):
    GROUP = 'media-group'
    SINGLE = 'media-single'


def parse_number(value: str | None) -> int | float | None:
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        logger.warning(f'Ignoring non numeric attribute value {value!r}')
        return None


@dataclass
class Frame:
    tag: str = ''
    """The name of the HTML element that opened the frame."""

    def describe(self) -> str:
        return f'{type(self).__name__}({self.tag})'

    def close(self, state: BuilderState) -> None:
        raise NotImplementedError()


@dataclass
class InlineFrame(Frame):
    """A frame whose children are inline nodes."""

    children: list[Any] = field(default_factory=list)


@dataclass
class BlockContainerFrame(Frame):
    """A frame holding block children.

    Inline content arriving directly in the container is buffered in `inline` and wrapped into a paragraph before
    the next block child or when the container closes.
    """

    children: list[Any] = field(default_factory=list)
    inline: list[Any] = field(default_factory=list)

    @property
    def is_container(self) -> bool:
        return True

    def close_inline(self) -> None:
        if self.inline:
            self.children.append(Paragraph(content=self.inline))
            self.inline = []

    def block_content(self) -> list[Any]:
        self.close_inline()
        return self.children


@dataclass
class DocumentFrame(BlockContainerFrame):
    def close(self, state: BuilderState) -> None:
        raise state.fault('The document frame cannot be closed', self.tag)


@dataclass
class ParagraphFrame(InlineFrame):
    def close(self, state: BuilderState) -> None:
        if self.children:
            state.push_block(Paragraph(content=self.children), self.tag)


@dataclass
class HeadingFrame(InlineFrame):
    level: int = 1

    def close(self, state: BuilderState) -> None:
        state.push_block(Heading(attrs=HeadingAttrs(level=self.level), content=self.children), self.tag)


@dataclass
class BlockquoteFrame(BlockContainerFrame):
    def close(self, state: BuilderState) -> None:
        state.push_block(Blockquote(content=self.block_content()), self.tag)


@dataclass
class ListItemFrame(BlockContainerFrame):
    def close(self, state: BuilderState) -> None:
        state.push_list_item(ListItem(content=self.block_content()), self.tag)

    def inline_content(self) -> list[Any]:
        """Flattens the content collected so far into inline nodes, for migrating into a task or decision item."""

        content = []
        for child in self.children:
            if isinstance(child, (Paragraph, Heading)):
                content.extend(child.content)
            else:
                logger.warning(f'Dropping {child.type} while converting a list item into a task or decision item')
        content.extend(self.inline)
        return content


@dataclass
class TaskItemFrame(InlineFrame):
    local_id: str = ''
    state: TaskItemState = TaskItemState.TODO
    absorbed: int = 0
    """Number of paragraph end tags still expected from paragraphs merged into this item."""

    def close(self, state: BuilderState) -> None:
        item = TaskItem(attrs=TaskItemAttrs(local_id=self.local_id, state=self.state), content=self.children)
        state.push_list_item(item, self.tag)


@dataclass
class DecisionItemFrame(InlineFrame):
    local_id: str = ''
    absorbed: int = 0

    def close(self, state: BuilderState) -> None:
        item = DecisionItem(attrs=DecisionItemAttrs(local_id=self.local_id), content=self.children)
        state.push_list_item(item, self.tag)


@dataclass
class PendingListFrame(Frame):
    ordered: bool = False
    local_id: str | None = None
    local_tag: str | None = None
    order: int | None = None
    items: list[Any] = field(default_factory=list)

    def _select(self, item_type: type) -> list[Any]:
        selected = [item for item in self.items if isinstance(item, item_type)]
        if len(selected) != len(self.items):
            logger.debug(f'Dropped {len(self.items) - len(selected)} items not matching {item_type.__name__}')
        return selected

    def close(self, state: BuilderState) -> None:
        if self.local_tag == TASK_LIST_TAG:
            node = TaskList(attrs=LocalIdAttrs(local_id=self.local_id or ''), content=self._select(TaskItem))
        elif self.local_tag == DECISION_LIST_TAG:
            node = DecisionList(
                attrs=LocalIdAttrs(local_id=self.local_id or ''), content=self._select(DecisionItem)
            )
        elif self.ordered:
            attrs = OrderedListAttrs(order=self.order) if self.order is not None else None
            node = OrderedList(attrs=attrs, content=self._select(ListItem))
        else:
            node = BulletList(content=self._select(ListItem))
        state.push_block(node, self.tag)


@dataclass
class CodeBlockFrame(Frame):
    language: str | None = None
    text: list[str] = field(default_factory=list)

    def close(self, state: BuilderState) -> None:
        text = ''.join(self.text)
        attrs = CodeBlockAttrs(language=self.language) if self.language else None
        state.push_block(CodeBlock(attrs=attrs, content=[Text(text=text)] if text else []), self.tag)


@dataclass
class TableFrame(Frame):
    attrs: TableAttrs | None = None
    rows: list[TableRow] = field(default_factory=list)

    def close(self, state: BuilderState) -> None:
        state.push_block(Table(attrs=self.attrs, content=self.rows), self.tag)


@dataclass
class TableSectionFrame(Frame):
    """`thead`, `tbody` and `tfoot`; their rows are spliced into the table."""

    rows: list[TableRow] = field(default_factory=list)

    def close(self, state: BuilderState) -> None:
        parent = state.top
        if not isinstance(parent, TableFrame):
            raise state.fault(f'<{self.tag}> must be placed in a table', self.tag)
        parent.rows.extend(self.rows)


@dataclass
class TableRowFrame(Frame):
    cells: list[Any] = field(default_factory=list)

    def close(self, state: BuilderState) -> None:
        parent = state.top
        if not isinstance(parent, (TableFrame, TableSectionFrame)):
            raise state.fault('Table rows must be placed in a table', self.tag)
        parent.rows.append(TableRow(content=self.cells))


@dataclass
class TableCellFrame(BlockContainerFrame):
    header: bool = False
    attrs: TableCellAttrs | None = None

    def close(self, state: BuilderState) -> None:
        parent = state.top
        if not isinstance(parent, TableRowFrame):
            raise state.fault('Table cells must be placed in a table row', self.tag)
        node_type = TableHeader if self.header else TableCell
        parent.cells.append(node_type(attrs=self.attrs, content=self.block_content()))


@dataclass
class SummaryFrame(Frame):
    text: list[str] = field(default_factory=list)

    def close(self, state: BuilderState) -> None:
        expand = state.find_frame(CustomBlockFrame, lambda frame: frame.kind in EXPAND_KINDS)
        if expand is None:
            logger.debug('Ignoring <summary> outside of an expand')
            return
        expand.attrs['title'] = clean_surrounding_text(''.join(self.text))


@dataclass
class MediaBlockFrame(Frame):
    kind: MediaBlockKind = MediaBlockKind.GROUP
    attrs: dict[str, str] = field(default_factory=dict)
    media: list[Media] = field(default_factory=list)

    def close(self, state: BuilderState) -> None:
        if self.kind == MediaBlockKind.SINGLE:
            attrs = MediaSingleAttrs(layout=self.attrs['data-layout'], width=parse_number(self.attrs.get('data-width')))
            node = MediaSingle(attrs=attrs, content=self.media)
        else:
            node = MediaGroup(content=self.media)
        state.push_block(node, self.tag)


@dataclass
class CustomBlockFrame(BlockContainerFrame):
    """ADF elements without a plain HTML counterpart, parameterized by kind.

    Container kinds hold blocks like any other container. Text kinds collect their raw text in `text`. Block cards
    collect the attributes of their data source and view sub-elements in `parts`.
    """

    kind: CustomBlockKind = CustomBlockKind.DIV
    attrs: dict[str, str] = field(default_factory=dict)
    text: list[str] = field(default_factory=list)
    parts: list[tuple[str, dict[str, str]]] = field(default_factory=list)

    @property
    def is_container(self) -> bool:
        return self.kind in CONTAINER_KINDS

    @property
    def collects_text(self) -> bool:
        return self.kind in TEXT_KINDS

    def describe(self) -> str:
        return f'{type(self).__name__}({self.tag}, {self.kind.value})'

    def collected_text(self) -> str:
        return clean_surrounding_text(''.join(self.text))

    def close(self, state: BuilderState) -> None:
        if self.kind == CustomBlockKind.DIV:
            self._close_div(state)
        elif self.kind == CustomBlockKind.EXPAND:
            expand = Expand(attrs=ExpandAttrs(title=self.attrs.get('title')), content=self.block_content())
            state.push_block(expand, self.tag)
        elif self.kind == CustomBlockKind.NESTED_EXPAND:
            nested = NestedExpand(
                attrs=NestedExpandAttrs(title=self.attrs.get('title') or ''), content=self.block_content()
            )
            state.push_block(nested, self.tag)
        elif self.kind == CustomBlockKind.PANEL:
            panel_type = self.attrs.get('data-panel-type')
            if not panel_type:
                panel_type = state.configuration.default_panel_type
                logger.debug(f'Panel without a type; using {panel_type}')
            state.push_block(Panel(attrs=PanelAttrs(panel_type=panel_type), content=self.block_content()), self.tag)
        elif self.kind == CustomBlockKind.BLOCK_CARD:
            state.push_block(self._block_card(), self.tag)
        elif self.kind == CustomBlockKind.STATUS:
            state.push_inline(self._status(state), self.tag)
        elif self.kind == CustomBlockKind.EMOJI:
            text = self.collected_text()
            short_name = self.attrs['aria-alt']
            attrs = EmojiAttrs(
                short_name=short_name,
                id=self.attrs.get('data-emoji-id') or None,
                text=text if text and text != short_name else None,
            )
            state.push_inline(Emoji(attrs=attrs), self.tag)
        elif self.kind == CustomBlockKind.MENTION:
            state.push_inline(self._mention(), self.tag)
        elif self.kind == CustomBlockKind.DATE:
            timestamp = rfc3339_to_timestamp(self.attrs.get('datetime'), state.configuration.timestamp_unit)
            state.push_inline(Date(attrs=DateAttrs(timestamp=timestamp)), self.tag)
        elif self.kind == CustomBlockKind.INLINE_CARD:
            state.push_inline(InlineCard(attrs=InlineCardAttrs(url=self.attrs.get('href') or None)), self.tag)

    def _close_div(self, state: BuilderState) -> None:
        if self.children:
            for block in self.block_content():
                state.push_block(block, self.tag)
            return
        if not self.inline:
            return
        marks = style_marks(self.attrs.get('style'))
        if marks and all(isinstance(node, (Text, HardBreak)) for node in self.inline):
            text = ''.join(node.text for node in self.inline if isinstance(node, Text))
            state.push_inline(Text(text=text, marks=marks), self.tag)
        else:
            state.push_block(Paragraph(content=self.inline), self.tag)

    def _status(self, state: BuilderState) -> Status:
        color = extract_style(self.attrs.get('style'), 'background-color') or self.attrs.get('data-color')
        if not color:
            color = state.configuration.default_status_color
            logger.warning(f'Status without a color; using {color}')
        attrs = StatusAttrs(text=self.collected_text(), color=color, local_id=self.attrs.get('aria-label') or None)
        return Status(attrs=attrs)

    def _mention(self) -> Mention:
        access_level = self.attrs.get('data-access-level')
        if access_level and access_level not in AccessLevel.__members__:
            logger.warning(f'Ignoring unknown mention access level {access_level!r}')
            access_level = None
        user_type = self.attrs.get('data-user-type')
        if user_type and user_type not in UserType.__members__:
            logger.warning(f'Ignoring unknown mention user type {user_type!r}')
            user_type = None
        attrs = MentionAttrs(
            id=self.attrs['data-mention-id'],
            text=self.collected_text() or None,
            access_level=access_level or None,
            user_type=user_type or None,
        )
        return Mention(attrs=attrs)

    def _block_card(self) -> BlockCard:
        datasource = None
        views = []
        for role, attrs in self.parts:
            if role == 'view':
                columns = [column.strip() for column in attrs.get('data-columns', '').split(',') if column.strip()]
                properties = DatasourceViewProperties(columns=[DatasourceColumn(key=key) for key in columns])
                views.append(DatasourceView(properties=properties))
            elif role == 'datasource':
                datasource = attrs
        source = None
        if datasource is not None:
            source = Datasource(
                id=datasource.get('data-id', ''),
                parameters=DatasourceParameters(
                    cloud_id=datasource.get('data-cloud-id') or None, jql=datasource.get('data-jql') or None
                ),
                views=views,
            )
        return BlockCard(attrs=BlockCardAttrs(url=self.attrs.get('data-url') or None, datasource=source))
