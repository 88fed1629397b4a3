import logging

from adfconvert.constants import LOGGER_NAME, MARKDOWN_TASK_LIST_CLASS, TASK_LIST_TAG
from adfconvert.models import TaskItemState
from adfconvert.parser.element import Element
from adfconvert.parser.frames import (
    DecisionItemFrame,
    ListItemFrame,
    PendingListFrame,
    TaskItemFrame,
)
from adfconvert.parser.state import BuilderState

logger = logging.getLogger(LOGGER_NAME)


def local_data(state: BuilderState, element: Element) -> bool:
    """`<adf-local-data>` announces the subtype and local id of the next list."""

    state.local_id = element.get('id')
    state.local_tag = element.get('data-tag')
    return True


def list_start(state: BuilderState, element: Element) -> bool:
    state.flush_text()
    local_id, local_tag = state.take_local_data()
    if local_tag is None and MARKDOWN_TASK_LIST_CLASS in element.classes:
        local_tag = TASK_LIST_TAG
    order = None
    if element.tag == 'ol' and (start := element.get('start')):
        try:
            order = int(start)
        except ValueError:
            logger.warning(f'Ignoring invalid ordered list start {start!r}')
    state.push_frame(
        PendingListFrame(
            tag=element.tag, ordered=element.tag == 'ol', local_id=local_id, local_tag=local_tag, order=order
        )
    )
    return True


def list_end(state: BuilderState, element: Element) -> bool:
    state.close_frame(PendingListFrame, element.tag, lambda frame: frame.tag == element.tag)
    return True


def list_item_start(state: BuilderState, element: Element) -> bool:
    state.flush_text()
    state.push_frame(ListItemFrame(tag=element.tag))
    return True


def list_item_end(state: BuilderState, element: Element) -> bool:
    state.close_frame((ListItemFrame, TaskItemFrame, DecisionItemFrame), element.tag)
    return True


def checkbox(state: BuilderState, element: Element) -> bool:
    """`<input type="checkbox">` and `<adf-task-item>` turn the enclosing list item into a task item."""

    input_type = element.get('type')
    if element.tag == 'input' and (input_type or 'text').lower() != 'checkbox':
        if state.find_frame(ListItemFrame) is not None:
            raise state.fault(f'Unsupported input type {input_type!r} in a list item', element.tag)
        logger.debug(f'Ignoring <input type="{input_type}">')
        return True

    task_state = TaskItemState.DONE if element.has('checked') else TaskItemState.TODO
    local_id = element.get('id') or ''

    def factory(content, absorbed):
        return TaskItemFrame(children=content, state=task_state, local_id=local_id, absorbed=absorbed)

    if not state.migrate_list_item(element.tag, factory):
        logger.debug(f'Ignoring <{element.tag}> outside of a list item')
    return True


def decision_marker(state: BuilderState, element: Element) -> bool:
    """`<adf-decision-item>` turns the enclosing list item into a decision item."""

    local_id = element.get('id') or ''

    def factory(content, absorbed):
        return DecisionItemFrame(children=content, local_id=local_id, absorbed=absorbed)

    if not state.migrate_list_item(element.tag, factory):
        logger.debug(f'Ignoring <{element.tag}> outside of a list item')
    return True


def register(table) -> None:
    table.insert_start_handler('adf-local-data', local_data)
    for tag in ('ul', 'ol'):
        table.insert_start_handler(tag, list_start)
        table.insert_end_handler(tag, list_end)
    table.insert_start_handler('li', list_item_start)
    table.insert_end_handler('li', list_item_end)
    table.insert_start_handler('input', checkbox)
    table.insert_start_handler('adf-task-item', checkbox)
    table.insert_start_handler('adf-decision-item', decision_marker)
