import logging

from adfconvert.constants import LOGGER_NAME
from adfconvert.models import TableAttrs, TableCellAttrs
from adfconvert.parser.element import Element
from adfconvert.parser.frames import (
    TableCellFrame,
    TableFrame,
    TableRowFrame,
    TableSectionFrame,
    parse_number,
)
from adfconvert.parser.state import BuilderState

logger = logging.getLogger(LOGGER_NAME)


def _int_attr(element: Element, name: str) -> int | None:
    value = element.get(name)
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning(f'Ignoring invalid {name}={value!r} on <{element.tag}>')
        return None


def table_attrs(element: Element) -> TableAttrs | None:
    number_column = element.get('data-number-column-enabled')
    attrs = TableAttrs(
        is_number_column_enabled=None if number_column is None else number_column.lower() == 'true',
        layout=element.get('data-layout') or None,
        width=parse_number(element.get('data-width')),
        display_mode=element.get('data-display-mode') or None,
    )
    return attrs if attrs.as_dict() else None


def cell_attrs(element: Element) -> TableCellAttrs | None:
    colwidth = None
    if widths := element.get('data-colwidth'):
        try:
            colwidth = [int(width) for width in widths.split(',') if width.strip()]
        except ValueError:
            logger.warning(f'Ignoring invalid data-colwidth={widths!r}')
    attrs = TableCellAttrs(
        background=element.get('data-background') or None,
        colspan=_int_attr(element, 'colspan'),
        colwidth=colwidth,
        rowspan=_int_attr(element, 'rowspan'),
    )
    return attrs if attrs.as_dict() else None


def table_start(state: BuilderState, element: Element) -> bool:
    state.flush_text()
    state.push_frame(TableFrame(tag=element.tag, attrs=table_attrs(element)))
    return True


def table_end(state: BuilderState, element: Element) -> bool:
    state.close_frame(TableFrame, element.tag)
    return True


def section_start(state: BuilderState, element: Element) -> bool:
    state.flush_text()
    state.push_frame(TableSectionFrame(tag=element.tag))
    return True


def section_end(state: BuilderState, element: Element) -> bool:
    state.close_frame(TableSectionFrame, element.tag)
    return True


def row_start(state: BuilderState, element: Element) -> bool:
    state.flush_text()
    state.push_frame(TableRowFrame(tag=element.tag))
    return True


def row_end(state: BuilderState, element: Element) -> bool:
    state.close_frame(TableRowFrame, element.tag)
    return True


def cell_start(state: BuilderState, element: Element) -> bool:
    state.flush_text()
    state.push_frame(TableCellFrame(tag=element.tag, header=element.tag == 'th', attrs=cell_attrs(element)))
    return True


def cell_end(state: BuilderState, element: Element) -> bool:
    header = element.tag == 'th'
    state.close_frame(TableCellFrame, element.tag, lambda frame: frame.header == header)
    return True


def register(table) -> None:
    table.insert_start_handler('table', table_start)
    table.insert_end_handler('table', table_end)
    for tag in ('thead', 'tbody', 'tfoot'):
        table.insert_start_handler(tag, section_start)
        table.insert_end_handler(tag, section_end)
    table.insert_start_handler('tr', row_start)
    table.insert_end_handler('tr', row_end)
    for tag in ('td', 'th'):
        table.insert_start_handler(tag, cell_start)
        table.insert_end_handler(tag, cell_end)
