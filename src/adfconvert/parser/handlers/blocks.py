from adfconvert.constants import CODE_LANGUAGE_CLASS_PREFIX
from adfconvert.models import HardBreak, Rule
from adfconvert.parser.element import Element
from adfconvert.parser.frames import (
    BlockquoteFrame,
    CodeBlockFrame,
    CustomBlockFrame,
    CustomBlockKind,
    DecisionItemFrame,
    DocumentFrame,
    Frame,
    HeadingFrame,
    ParagraphFrame,
    TableCellFrame,
    TaskItemFrame,
)
from adfconvert.parser.state import BuilderState

HEADING_TAGS = ('h1', 'h2', 'h3', 'h4', 'h5', 'h6')


def paragraph_start(state: BuilderState, element: Element) -> bool:
    state.flush_text()
    state.push_frame(ParagraphFrame(tag=element.tag))
    return True


def paragraph_end(state: BuilderState, element: Element) -> bool:
    state.flush_text()
    frame = state.top
    # paragraphs merged into a task or decision item
    if isinstance(frame, (TaskItemFrame, DecisionItemFrame)) and frame.absorbed:
        frame.absorbed -= 1
        return True
    state.close_frame(ParagraphFrame, element.tag)
    return True


def heading_start(state: BuilderState, element: Element) -> bool:
    state.flush_text()
    state.push_frame(HeadingFrame(tag=element.tag, level=int(element.tag[1])))
    return True


def heading_end(state: BuilderState, element: Element) -> bool:
    level = int(element.tag[1])
    state.close_frame(HeadingFrame, element.tag, lambda frame: frame.level == level)
    return True


def blockquote_start(state: BuilderState, element: Element) -> bool:
    state.flush_text()
    state.push_frame(BlockquoteFrame(tag=element.tag))
    return True


def blockquote_end(state: BuilderState, element: Element) -> bool:
    state.close_frame(BlockquoteFrame, element.tag)
    return True


def pre_start(state: BuilderState, element: Element) -> bool:
    state.flush_text()
    state.push_frame(CodeBlockFrame(tag=element.tag))
    return True


def pre_end(state: BuilderState, element: Element) -> bool:
    state.close_frame(CodeBlockFrame, element.tag)
    return True


def code_block_language(state: BuilderState, element: Element) -> bool:
    """Handles `<code>` inside `<pre>`: it only carries the language of the code block."""

    code_block = state.find_frame(CodeBlockFrame)
    if code_block is None:
        return False
    if element.self_closing:
        return True
    for css_class in element.classes:
        if css_class.startswith(CODE_LANGUAGE_CLASS_PREFIX) and code_block.language is None:
            code_block.language = css_class.removeprefix(CODE_LANGUAGE_CLASS_PREFIX) or None
    return True


def _holds_rules(frame: Frame) -> bool:
    if isinstance(frame, CustomBlockFrame):
        return frame.is_container
    return isinstance(frame, (DocumentFrame, TableCellFrame))


def rule(state: BuilderState, element: Element) -> bool:
    state.flush_text()
    state.close_until(_holds_rules)
    state.push_block(Rule(), element.tag)
    return True


def hard_break(state: BuilderState, element: Element) -> bool:
    state.flush_text()
    state.push_inline(HardBreak(), element.tag)
    return True


def div_start(state: BuilderState, element: Element) -> bool:
    state.flush_text()
    state.push_frame(CustomBlockFrame(tag=element.tag, kind=CustomBlockKind.DIV, attrs=dict(element.attrs)))
    return True


def div_end(state: BuilderState, element: Element) -> bool:
    state.close_frame(CustomBlockFrame, element.tag, lambda frame: frame.kind == CustomBlockKind.DIV)
    return True


def register(table) -> None:
    table.insert_start_handler('p', paragraph_start)
    table.insert_end_handler('p', paragraph_end)
    for tag in HEADING_TAGS:
        table.insert_start_handler(tag, heading_start)
        table.insert_end_handler(tag, heading_end)
    table.insert_start_handler('blockquote', blockquote_start)
    table.insert_end_handler('blockquote', blockquote_end)
    table.insert_start_handler('pre', pre_start)
    table.insert_end_handler('pre', pre_end)
    table.insert_start_handler('hr', rule)
    table.insert_start_handler('br', hard_break)
    table.insert_start_handler('div', div_start)
    table.insert_end_handler('div', div_end)
