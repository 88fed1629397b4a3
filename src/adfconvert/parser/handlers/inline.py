from adfconvert.marks import style_marks
from adfconvert.models import (
    CodeMark,
    EmMark,
    LinkAttrs,
    LinkMark,
    StrikeMark,
    StrongMark,
    SubSupAttrs,
    SubSupMark,
    UnderlineMark,
)
from adfconvert.parser.element import Element
from adfconvert.parser.frames import CodeBlockFrame
from adfconvert.parser.handlers.blocks import code_block_language
from adfconvert.parser.state import BuilderState

SIMPLE_MARKS = {
    'strong': StrongMark(),
    'b': StrongMark(),
    'em': EmMark(),
    'i': EmMark(),
    'del': StrikeMark(),
    's': StrikeMark(),
    'strike': StrikeMark(),
    'u': UnderlineMark(),
    'sub': SubSupMark(attrs=SubSupAttrs(type='sub')),
    'sup': SubSupMark(attrs=SubSupAttrs(type='sup')),
}
"""Formatting elements and the mark each one applies."""


def mark_start(state: BuilderState, element: Element) -> bool:
    state.flush_text()
    state.push_marks(element.tag, [SIMPLE_MARKS[element.tag]])
    return True


def mark_end(state: BuilderState, element: Element) -> bool:
    state.flush_text()
    state.pop_marks(element.tag)
    return True


def code_start(state: BuilderState, element: Element) -> bool:
    state.flush_text()
    if code_block_language(state, element):
        return True
    state.push_marks(element.tag, [CodeMark()])
    return True


def code_end(state: BuilderState, element: Element) -> bool:
    state.flush_text()
    if state.find_frame(CodeBlockFrame) is None:
        state.pop_marks(element.tag)
    return True


def link_start(state: BuilderState, element: Element) -> bool:
    state.flush_text()
    marks = []
    if href := element.get('href'):
        attrs = LinkAttrs(
            href=href,
            title=element.get('title') or None,
            id=element.get('data-link-id') or None,
            collection=element.get('data-collection') or None,
            occurrence_key=element.get('data-occurrence-key') or None,
        )
        marks.append(LinkMark(attrs=attrs))
    state.push_marks(element.tag, marks)
    return True


def span_start(state: BuilderState, element: Element) -> bool:
    state.flush_text()
    state.push_marks(element.tag, style_marks(element.get('style')))
    return True


def register(table) -> None:
    for tag in SIMPLE_MARKS:
        table.insert_start_handler(tag, mark_start)
        table.insert_end_handler(tag, mark_end)
    table.insert_start_handler('code', code_start)
    table.insert_end_handler('code', code_end)
    table.insert_start_handler('a', link_start)
    table.insert_end_handler('a', mark_end)
    table.insert_start_handler('span', span_start)
    table.insert_end_handler('span', mark_end)
