from __future__ import annotations

from collections.abc import Callable
import logging
from typing import Any, TypeVar

from adfconvert.config import ConverterConfiguration, get_configuration
from adfconvert.constants import LOGGER_NAME
from adfconvert.exceptions import StructuralFault
from adfconvert.marks import MarkStack
from adfconvert.models import DecisionItem, HardBreak, ListItem, Mark, TaskItem, Text
from adfconvert.parser.frames import (
    BlockContainerFrame,
    CodeBlockFrame,
    CustomBlockFrame,
    DecisionItemFrame,
    DocumentFrame,
    Frame,
    HeadingFrame,
    InlineFrame,
    ListItemFrame,
    ParagraphFrame,
    PendingListFrame,
    SummaryFrame,
    TaskItemFrame,
)
from adfconvert.utils.styles import clean_surrounding_text

logger = logging.getLogger(LOGGER_NAME)

FrameT = TypeVar('FrameT', bound=Frame)


class BuilderState:
    """The mutable state of the HTML to ADF builder.

    Holds the stack of open frames (the document frame at the bottom), the active marks, the characters received
    since the last tag and the list subtype announced by the last `<adf-local-data>` element.
    """

    def __init__(self, configuration: ConverterConfiguration | None = None):
        self.configuration = configuration or get_configuration()
        self.stack: list[Frame] = [DocumentFrame(tag='body')]
        self.marks = MarkStack()
        self.element_marks: list[tuple[str, list[Mark]]] = []
        self.pending_text: list[str] = []
        self.local_id: str | None = None
        self.local_tag: str | None = None
        self.absorbed_end_tags: list[str] = []

    @property
    def top(self) -> Frame:
        return self.stack[-1]

    def describe_stack(self) -> list[str]:
        return [frame.describe() for frame in self.stack]

    def fault(self, message: str, tag: str | None, fault_type: type[StructuralFault] = StructuralFault):
        return fault_type(message, tag=tag, stack=self.describe_stack())

    def push_frame(self, frame: Frame) -> None:
        self.stack.append(frame)

    def find_frame(
        self, frame_type: type[FrameT], predicate: Callable[[FrameT], bool] | None = None
    ) -> FrameT | None:
        """Returns the innermost open frame of the given type, optionally matching a predicate."""

        for frame in reversed(self.stack):
            if isinstance(frame, frame_type) and (predicate is None or predicate(frame)):
                return frame
        return None

    def take_local_data(self) -> tuple[str | None, str | None]:
        """Consumes the list subtype announced by `<adf-local-data>`; it applies to exactly one list."""

        local_id, local_tag = self.local_id, self.local_tag
        self.local_id = self.local_tag = None
        return local_id, local_tag

    # text

    def append_text(self, text: str) -> None:
        self.pending_text.append(text)

    def flush_text(self) -> None:
        """Turns the characters received since the last tag into content of the top frame."""

        if not self.pending_text:
            return
        raw = ''.join(self.pending_text)
        self.pending_text.clear()
        frame = self.top

        if isinstance(frame, CodeBlockFrame):
            frame.text.append(raw)
            return
        if isinstance(frame, SummaryFrame) or (isinstance(frame, CustomBlockFrame) and frame.collects_text):
            frame.text.append(raw)
            return

        if isinstance(frame, InlineFrame):
            has_content = bool(frame.children)
        elif isinstance(frame, BlockContainerFrame) and frame.is_container:
            has_content = bool(frame.inline)
        else:
            if raw.strip():
                logger.debug(f'Dropping text {raw!r} in {frame.describe()}')
            return

        text = clean_surrounding_text(raw)
        if isinstance(frame, (TaskItemFrame, DecisionItemFrame)) and not has_content:
            text = text.lstrip()
        if not text.strip():
            keep = text and '\n' not in raw and (isinstance(frame, (ParagraphFrame, HeadingFrame)) or has_content)
            if not keep:
                return
        self.push_inline(Text(text=text, marks=self.marks.snapshot() or None))

    # marks

    def push_marks(self, tag: str, marks: list[Mark]) -> None:
        """Activates the marks of a formatting element, remembering which of them it actually added."""

        self.element_marks.append((tag, [mark for mark in marks if self.marks.push(mark)]))

    def pop_marks(self, tag: str) -> None:
        """Deactivates the marks added by the innermost open formatting element with the given tag."""

        for index in range(len(self.element_marks) - 1, -1, -1):
            if self.element_marks[index][0] == tag:
                _, marks = self.element_marks.pop(index)
                for mark in marks:
                    self.marks.remove(mark)
                return
        logger.debug(f'Ignoring unmatched </{tag}>')

    # attaching nodes

    def push_inline(self, node: Any, tag: str | None = None) -> None:
        frame = self.top
        if isinstance(frame, InlineFrame):
            frame.children.append(node)
        elif isinstance(frame, BlockContainerFrame) and frame.is_container:
            frame.inline.append(node)
        elif isinstance(frame, CodeBlockFrame) and isinstance(node, (Text, HardBreak)):
            frame.text.append(node.text if isinstance(node, Text) else '\n')
        elif isinstance(frame, SummaryFrame) or (isinstance(frame, CustomBlockFrame) and frame.collects_text):
            if isinstance(node, Text):
                frame.text.append(node.text)
            else:
                logger.debug(f'Ignoring {node.type} in {frame.describe()}')
        else:
            raise self.fault(f'{node.type} cannot be placed in {frame.describe()}', tag)

    def push_block(self, node: Any, tag: str | None = None) -> None:
        frame = self.top
        if isinstance(frame, BlockContainerFrame) and frame.is_container:
            frame.close_inline()
            frame.children.append(node)
        elif isinstance(frame, ParagraphFrame) and not frame.children:
            self.stack.pop()
            self.absorbed_end_tags.append(frame.tag)
            self.push_block(node, tag)
        else:
            raise self.fault(f'{node.type} cannot be placed in {frame.describe()}', tag)

    def push_list_item(self, node: ListItem | TaskItem | DecisionItem, tag: str | None = None) -> None:
        frame = self.top
        if not isinstance(frame, PendingListFrame):
            raise self.fault(f'{node.type} must be placed in a list', tag)
        frame.items.append(node)

    # closing frames

    def pop_frame(
        self, frame_type: type[FrameT], tag: str, predicate: Callable[[FrameT], bool] | None = None
    ) -> FrameT | None:
        """Pops the top frame for an end tag.

        Args:
            frame_type: the frame type the end tag closes.
            tag: the name of the end tag.
            predicate: an additional condition the top frame must satisfy.

        Returns:
            The popped frame, or None when the end tag belongs to a frame that was already closed by a rule.

        Raises:
            StructuralFault: the top frame does not match the end tag.
        """

        frame = self.top
        if isinstance(frame, frame_type) and (predicate is None or predicate(frame)):
            return self.stack.pop()
        if tag in self.absorbed_end_tags:
            self.absorbed_end_tags.remove(tag)
            logger.debug(f'Absorbed </{tag}> of a frame closed earlier')
            return None
        raise self.fault(f'Unexpected </{tag}> while {frame.describe()} is open', tag)

    def close_frame(self, frame_type: type[FrameT], tag: str, predicate: Callable[[FrameT], bool] | None = None):
        """Flushes pending text, then pops the matching frame and attaches its node to the new top."""

        self.flush_text()
        frame = self.pop_frame(frame_type, tag, predicate)
        if frame is not None:
            frame.close(self)
        return frame

    def close_top(self) -> None:
        self.stack.pop().close(self)

    def close_until(self, predicate: Callable[[Frame], bool]) -> None:
        """Closes frames until the top one satisfies the predicate.

        The tags of the closed frames are recorded so that their end tags are absorbed when they arrive.
        """

        while len(self.stack) > 1 and not predicate(self.top):
            tag = self.top.tag
            self.close_top()
            self.absorbed_end_tags.append(tag)

    def migrate_list_item(self, element_tag: str, factory: Callable[[list[Any], int], Frame]) -> bool:
        """Replaces the innermost list item frame by a task or decision item frame.

        Paragraphs opened inside the list item are merged into the new frame and their end tags absorbed.

        Args:
            element_tag: the tag of the element triggering the migration.
            factory: builds the new frame from the inline content collected so far and the number of merged
                paragraphs.

        Returns:
            False when there is no open list item.
        """

        item = self.find_frame(ListItemFrame)
        if item is None:
            return False
        index = self.stack.index(item)
        above = self.stack[index + 1 :]
        if not all(isinstance(frame, ParagraphFrame) for frame in above):
            raise self.fault(f'<{element_tag}> must be placed directly in a list item', element_tag)

        self.flush_text()
        del self.stack[index:]
        content = item.inline_content()
        for paragraph in above:
            content.extend(paragraph.children)
        frame = factory(content, len(above))
        frame.tag = item.tag
        self.stack.append(frame)
        return True

    def close_all(self) -> DocumentFrame:
        """Flushes pending text and closes every frame above the document, innermost first."""

        self.flush_text()
        while len(self.stack) > 1:
            self.close_top()
        return self.stack.pop()
