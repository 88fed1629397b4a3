"""Typed models of the Atlassian Document Format (ADF).

Every node and mark is a frozen pydantic model with a literal `type` discriminator. Field names are snake_case in
Python and camelCase on the wire. Unknown node and mark types are preserved as `UnknownNode` / `UnknownMark` so that
documents produced by newer editors still load.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag
from pydantic.alias_generators import to_camel

from adfconvert.constants import ADF_DOCUMENT_VERSION, DECISION_STATE


class AdfModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def as_dict(self) -> dict[str, Any]:
        """Dumps the model into its ADF JSON dictionary, omitting unset optional fields."""

        return self.model_dump(by_alias=True, exclude_none=True, mode='json')

    def as_json(self, indent: int | None = None) -> str:
        """Dumps the model into an ADF JSON string."""

        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)


class MediaType(str, Enum):
    FILE = 'file'
    LINK = 'link'


class TaskItemState(str, Enum):
    TODO = 'TODO'
    DONE = 'DONE'


class AccessLevel(str, Enum):
    NONE = 'NONE'
    SITE = 'SITE'
    APPLICATION = 'APPLICATION'
    CONTAINER = 'CONTAINER'


class UserType(str, Enum):
    DEFAULT = 'DEFAULT'
    SPECIAL = 'SPECIAL'
    APP = 'APP'


# marks


class StrongMark(AdfModel):
    type: Literal['strong'] = 'strong'


class EmMark(AdfModel):
    type: Literal['em'] = 'em'


class CodeMark(AdfModel):
    type: Literal['code'] = 'code'


class StrikeMark(AdfModel):
    type: Literal['strike'] = 'strike'


class UnderlineMark(AdfModel):
    type: Literal['underline'] = 'underline'


class SubSupAttrs(AdfModel):
    type: Literal['sub', 'sup']


class SubSupMark(AdfModel):
    type: Literal['subsup'] = 'subsup'
    attrs: SubSupAttrs


class ColorAttrs(AdfModel):
    color: str


class TextColorMark(AdfModel):
    type: Literal['textColor'] = 'textColor'
    attrs: ColorAttrs


class BackgroundColorMark(AdfModel):
    type: Literal['backgroundColor'] = 'backgroundColor'
    attrs: ColorAttrs


class LinkAttrs(AdfModel):
    href: str
    title: str | None = None
    id: str | None = None
    collection: str | None = None
    occurrence_key: str | None = None


class LinkMark(AdfModel):
    type: Literal['link'] = 'link'
    attrs: LinkAttrs


class BorderAttrs(AdfModel):
    color: str
    size: int


class BorderMark(AdfModel):
    type: Literal['border'] = 'border'
    attrs: BorderAttrs


class UnknownMark(AdfModel):
    """A mark whose type is not modelled. Every field of the original payload is kept."""

    model_config = ConfigDict(extra='allow')

    type: str


# inline nodes


class Text(AdfModel):
    type: Literal['text'] = 'text'
    text: str
    marks: list[Mark] | None = None


class HardBreak(AdfModel):
    type: Literal['hardBreak'] = 'hardBreak'


class DateAttrs(AdfModel):
    timestamp: str


class Date(AdfModel):
    type: Literal['date'] = 'date'
    attrs: DateAttrs


class EmojiAttrs(AdfModel):
    short_name: str
    id: str | None = None
    text: str | None = None


class Emoji(AdfModel):
    type: Literal['emoji'] = 'emoji'
    attrs: EmojiAttrs


class InlineCardAttrs(AdfModel):
    url: str | None = None


class InlineCard(AdfModel):
    type: Literal['inlineCard'] = 'inlineCard'
    attrs: InlineCardAttrs


class MentionAttrs(AdfModel):
    id: str
    text: str | None = None
    access_level: AccessLevel | None = None
    user_type: UserType | None = None


class Mention(AdfModel):
    type: Literal['mention'] = 'mention'
    attrs: MentionAttrs


class StatusAttrs(AdfModel):
    text: str
    color: str
    local_id: str | None = None


class Status(AdfModel):
    type: Literal['status'] = 'status'
    attrs: StatusAttrs


class UnknownNode(AdfModel):
    """A node whose type is not modelled. Every field of the original payload is kept."""

    model_config = ConfigDict(extra='allow')

    type: str


# block nodes


class Paragraph(AdfModel):
    type: Literal['paragraph'] = 'paragraph'
    content: list[InlineNode] = Field(default_factory=list)


class HeadingAttrs(AdfModel):
    level: int


class Heading(AdfModel):
    type: Literal['heading'] = 'heading'
    attrs: HeadingAttrs
    content: list[InlineNode] = Field(default_factory=list)


class Blockquote(AdfModel):
    type: Literal['blockquote'] = 'blockquote'
    content: list[BlockNode] = Field(default_factory=list)


class ListItem(AdfModel):
    type: Literal['listItem'] = 'listItem'
    content: list[BlockNode] = Field(default_factory=list)


class BulletList(AdfModel):
    type: Literal['bulletList'] = 'bulletList'
    content: list[ListItem] = Field(default_factory=list)


class OrderedListAttrs(AdfModel):
    order: int | None = None


class OrderedList(AdfModel):
    type: Literal['orderedList'] = 'orderedList'
    attrs: OrderedListAttrs | None = None
    content: list[ListItem] = Field(default_factory=list)


class CodeBlockAttrs(AdfModel):
    language: str | None = None


class CodeBlock(AdfModel):
    type: Literal['codeBlock'] = 'codeBlock'
    attrs: CodeBlockAttrs | None = None
    content: list[Text] = Field(default_factory=list)


class Rule(AdfModel):
    type: Literal['rule'] = 'rule'


class TableCellAttrs(AdfModel):
    background: str | None = None
    colspan: int | None = None
    colwidth: list[int] | None = None
    rowspan: int | None = None


class TableHeader(AdfModel):
    type: Literal['tableHeader'] = 'tableHeader'
    attrs: TableCellAttrs | None = None
    content: list[BlockNode] = Field(default_factory=list)


class TableCell(AdfModel):
    type: Literal['tableCell'] = 'tableCell'
    attrs: TableCellAttrs | None = None
    content: list[BlockNode] = Field(default_factory=list)


class TableRow(AdfModel):
    type: Literal['tableRow'] = 'tableRow'
    content: list[Annotated[Union[TableHeader, TableCell], Field(discriminator='type')]] = Field(
        default_factory=list
    )


class TableAttrs(AdfModel):
    is_number_column_enabled: bool | None = None
    layout: str | None = None
    width: int | float | None = None
    display_mode: str | None = None


class Table(AdfModel):
    type: Literal['table'] = 'table'
    attrs: TableAttrs | None = None
    content: list[TableRow] = Field(default_factory=list)


class PanelAttrs(AdfModel):
    panel_type: str


class Panel(AdfModel):
    type: Literal['panel'] = 'panel'
    attrs: PanelAttrs
    content: list[BlockNode] = Field(default_factory=list)


class ExpandAttrs(AdfModel):
    title: str | None = None


class Expand(AdfModel):
    type: Literal['expand'] = 'expand'
    attrs: ExpandAttrs = Field(default_factory=ExpandAttrs)
    content: list[BlockNode] = Field(default_factory=list)


class NestedExpandAttrs(AdfModel):
    title: str = ''


class NestedExpand(AdfModel):
    type: Literal['nestedExpand'] = 'nestedExpand'
    attrs: NestedExpandAttrs = Field(default_factory=NestedExpandAttrs)
    content: list[BlockNode] = Field(default_factory=list)


class MediaAttrs(AdfModel):
    id: str
    collection: str
    type: MediaType = MediaType.FILE
    alt: str | None = None
    width: int | None = None
    height: int | None = None


class Media(AdfModel):
    type: Literal['media'] = 'media'
    attrs: MediaAttrs
    marks: list[Annotated[Union[LinkMark, BorderMark], Field(discriminator='type')]] | None = None


class MediaGroup(AdfModel):
    type: Literal['mediaGroup'] = 'mediaGroup'
    content: list[Media] = Field(default_factory=list)


class MediaSingleAttrs(AdfModel):
    layout: str
    width: int | float | None = None


class MediaSingle(AdfModel):
    type: Literal['mediaSingle'] = 'mediaSingle'
    attrs: MediaSingleAttrs
    content: list[Media] = Field(default_factory=list)


class LocalIdAttrs(AdfModel):
    local_id: str


class TaskItemAttrs(AdfModel):
    local_id: str
    state: TaskItemState = TaskItemState.TODO


class TaskItem(AdfModel):
    type: Literal['taskItem'] = 'taskItem'
    attrs: TaskItemAttrs
    content: list[InlineNode] = Field(default_factory=list)


class TaskList(AdfModel):
    type: Literal['taskList'] = 'taskList'
    attrs: LocalIdAttrs
    content: list[TaskItem] = Field(default_factory=list)


class DecisionItemAttrs(AdfModel):
    local_id: str
    state: Literal['DECIDED'] = DECISION_STATE


class DecisionItem(AdfModel):
    type: Literal['decisionItem'] = 'decisionItem'
    attrs: DecisionItemAttrs
    content: list[InlineNode] = Field(default_factory=list)


class DecisionList(AdfModel):
    type: Literal['decisionList'] = 'decisionList'
    attrs: LocalIdAttrs
    content: list[DecisionItem] = Field(default_factory=list)


class DatasourceColumn(AdfModel):
    key: str


class DatasourceViewProperties(AdfModel):
    columns: list[DatasourceColumn] = Field(default_factory=list)


class DatasourceView(AdfModel):
    type: Literal['table'] = 'table'
    properties: DatasourceViewProperties = Field(default_factory=DatasourceViewProperties)


class DatasourceParameters(AdfModel):
    cloud_id: str | None = None
    jql: str | None = None


class Datasource(AdfModel):
    id: str
    parameters: DatasourceParameters = Field(default_factory=DatasourceParameters)
    views: list[DatasourceView] = Field(default_factory=list)


class BlockCardAttrs(AdfModel):
    url: str | None = None
    datasource: Datasource | None = None


class BlockCard(AdfModel):
    type: Literal['blockCard'] = 'blockCard'
    attrs: BlockCardAttrs


class Doc(AdfModel):
    type: Literal['doc'] = 'doc'
    version: int = ADF_DOCUMENT_VERSION
    content: list[BlockNode] = Field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Doc:
        return cls.model_validate(data)

    @classmethod
    def from_json(cls, data: str | bytes) -> Doc:
        return cls.model_validate_json(data)


def _discriminator(known: frozenset[str]):
    def discriminate(value: Any) -> str:
        node_type = value.get('type') if isinstance(value, dict) else getattr(value, 'type', None)
        return node_type if node_type in known else 'unknown'

    return discriminate


def _tagged_union(*models: type[AdfModel], unknown: type[AdfModel]) -> Any:
    tags = {model.model_fields['type'].default: model for model in models}
    members = [Annotated[model, Tag(tag)] for tag, model in tags.items()]
    members.append(Annotated[unknown, Tag('unknown')])
    return Annotated[Union[tuple(members)], Discriminator(_discriminator(frozenset(tags)))]


Mark = _tagged_union(
    StrongMark,
    EmMark,
    CodeMark,
    StrikeMark,
    UnderlineMark,
    SubSupMark,
    TextColorMark,
    BackgroundColorMark,
    LinkMark,
    unknown=UnknownMark,
)

InlineNode = _tagged_union(Text, HardBreak, Date, Emoji, InlineCard, Mention, Status, unknown=UnknownNode)

BlockNode = _tagged_union(
    Paragraph,
    Heading,
    Blockquote,
    BulletList,
    OrderedList,
    CodeBlock,
    Rule,
    Table,
    Panel,
    Expand,
    NestedExpand,
    MediaGroup,
    MediaSingle,
    TaskList,
    DecisionList,
    BlockCard,
    unknown=UnknownNode,
)

for _model in (
    Text,
    Paragraph,
    Heading,
    Blockquote,
    ListItem,
    BulletList,
    OrderedList,
    CodeBlock,
    TableHeader,
    TableCell,
    TableRow,
    Table,
    Panel,
    Expand,
    NestedExpand,
    Media,
    MediaGroup,
    MediaSingle,
    TaskItem,
    TaskList,
    DecisionItem,
    DecisionList,
    Doc,
):
    _model.model_rebuild()
