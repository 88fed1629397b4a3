from collections.abc import Callable
from functools import lru_cache
import logging

from adfconvert.constants import LOGGER_NAME
from adfconvert.parser.element import Element
from adfconvert.parser.state import BuilderState

logger = logging.getLogger(LOGGER_NAME)

TagHandler = Callable[[BuilderState, Element], bool]
"""Handles a tag event; returns False to let the next tier handle it."""


class TagDispatchTable:
    """Maps tag names to start and end handlers in two tiers.

    Handlers registered with `add_start_handler` / `add_end_handler` form the custom tier and are consulted before
    the base tier populated with `insert_start_handler` / `insert_end_handler`. A custom handler declines an event by
    returning False. Tags without handlers are ignored.
    """

    def __init__(self):
        self._custom_start: dict[str, TagHandler] = {}
        self._custom_end: dict[str, TagHandler] = {}
        self._base_start: dict[str, TagHandler] = {}
        self._base_end: dict[str, TagHandler] = {}

    def add_start_handler(self, tag: str, handler: TagHandler) -> None:
        self._custom_start[tag] = handler

    def add_end_handler(self, tag: str, handler: TagHandler) -> None:
        self._custom_end[tag] = handler

    def insert_start_handler(self, tag: str, handler: TagHandler) -> None:
        self._base_start[tag] = handler

    def insert_end_handler(self, tag: str, handler: TagHandler) -> None:
        self._base_end[tag] = handler

    def lookup(self, tag: str, is_start: bool) -> tuple[TagHandler, ...]:
        """Returns the handlers registered for a tag, custom tier first."""

        tiers = (self._custom_start, self._base_start) if is_start else (self._custom_end, self._base_end)
        return tuple(tier[tag] for tier in tiers if tag in tier)

    def dispatch(self, state: BuilderState, element: Element, is_start: bool) -> bool:
        """Runs the handlers of a tag event until one of them handles it.

        Returns:
            True if a handler handled the event.
        """

        for handler in self.lookup(element.tag, is_start):
            if handler(state, element):
                return True
        logger.debug(f'Ignoring {"start" if is_start else "end"} tag <{element.tag}>')
        return False


@lru_cache(maxsize=1)
def default_dispatch_table() -> TagDispatchTable:
    """Returns the dispatch table with every supported HTML and ADF element. The table is shared; do not modify it."""

    from adfconvert.parser.handlers import register_handlers

    table = TagDispatchTable()
    register_handlers(table)
    return table
