"""Handlers of the ADF elements that have no plain HTML counterpart.

The elements are the ones written by the renderer: `<adf-status>`, `<adf-emoji>`, `<adf-mention>`, `<time>`,
`<a data-inline-card>`, `<details>` / `<summary>`, `<figure data-panel-type>` and `<adf-block-card>`.
"""

import logging

from adfconvert.constants import LOGGER_NAME
from adfconvert.exceptions import MissingAttributeFault
from adfconvert.parser.element import Element
from adfconvert.parser.frames import CustomBlockFrame, CustomBlockKind, SummaryFrame
from adfconvert.parser.handlers.media import media_start
from adfconvert.parser.state import BuilderState

logger = logging.getLogger(LOGGER_NAME)

REQUIRED_ATTRIBUTES = {
    CustomBlockKind.EMOJI: 'aria-alt',
    CustomBlockKind.MENTION: 'data-mention-id',
}
"""Attributes without which an element cannot be converted."""

BLOCK_CARD_PARTS = {
    'adf-block-card-data-source': 'datasource',
    'adf-block-card-view': 'view',
}


def _open(state: BuilderState, element: Element, kind: CustomBlockKind) -> bool:
    if (required := REQUIRED_ATTRIBUTES.get(kind)) and not element.get(required):
        raise state.fault(f'<{element.tag}> requires a {required} attribute', element.tag, MissingAttributeFault)
    state.flush_text()
    state.push_frame(CustomBlockFrame(tag=element.tag, kind=kind, attrs=dict(element.attrs)))
    return True


def custom_block(kind: CustomBlockKind):
    """Builds the start and end handlers of an element converted through a custom block frame."""

    def start(state: BuilderState, element: Element) -> bool:
        return _open(state, element, kind)

    def end(state: BuilderState, element: Element) -> bool:
        state.close_frame(CustomBlockFrame, element.tag, lambda frame: frame.kind == kind)
        return True

    return start, end


def details_start(state: BuilderState, element: Element) -> bool:
    nested = element.has('data-nested') and (element.get('data-nested') or '').lower() != 'false'
    return _open(state, element, CustomBlockKind.NESTED_EXPAND if nested else CustomBlockKind.EXPAND)


def details_end(state: BuilderState, element: Element) -> bool:
    kinds = (CustomBlockKind.EXPAND, CustomBlockKind.NESTED_EXPAND)
    state.close_frame(CustomBlockFrame, element.tag, lambda frame: frame.kind in kinds)
    return True


def summary_start(state: BuilderState, element: Element) -> bool:
    state.flush_text()
    state.push_frame(SummaryFrame(tag=element.tag))
    return True


def summary_end(state: BuilderState, element: Element) -> bool:
    state.close_frame(SummaryFrame, element.tag)
    return True


def block_card_part(state: BuilderState, element: Element) -> bool:
    frame = state.top
    if not (isinstance(frame, CustomBlockFrame) and frame.kind == CustomBlockKind.BLOCK_CARD):
        logger.debug(f'Ignoring <{element.tag}> outside of a block card')
        return True
    frame.parts.append((BLOCK_CARD_PARTS[element.tag], dict(element.attrs)))
    return True


def anchor_start(state: BuilderState, element: Element) -> bool:
    """Anchors are media inside a media container, inline cards when flagged, and links otherwise."""

    if media_start(state, element):
        return True
    if element.has('data-inline-card'):
        return _open(state, element, CustomBlockKind.INLINE_CARD)
    return False


def anchor_end(state: BuilderState, element: Element) -> bool:
    frame = state.top
    if isinstance(frame, CustomBlockFrame) and frame.kind == CustomBlockKind.INLINE_CARD:
        state.close_frame(CustomBlockFrame, element.tag)
        return True
    return False


def register(table) -> None:
    for tag, kind in (
        ('adf-status', CustomBlockKind.STATUS),
        ('adf-emoji', CustomBlockKind.EMOJI),
        ('adf-mention', CustomBlockKind.MENTION),
        ('time', CustomBlockKind.DATE),
        ('figure', CustomBlockKind.PANEL),
        ('adf-block-card', CustomBlockKind.BLOCK_CARD),
    ):
        start, end = custom_block(kind)
        table.insert_start_handler(tag, start)
        table.insert_end_handler(tag, end)
    table.insert_start_handler('details', details_start)
    table.insert_end_handler('details', details_end)
    table.insert_start_handler('summary', summary_start)
    table.insert_end_handler('summary', summary_end)
    for tag in BLOCK_CARD_PARTS:
        table.insert_start_handler(tag, block_card_part)
    table.add_start_handler('a', anchor_start)
    table.add_end_handler('a', anchor_end)
