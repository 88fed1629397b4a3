import logging

from adfconvert.config import ConverterConfiguration
from adfconvert.constants import ADF_DOCUMENT_VERSION, LOGGER_NAME
from adfconvert.exceptions import BuilderConsumedError
from adfconvert.models import Doc
from adfconvert.parser.dispatch import TagDispatchTable, default_dispatch_table
from adfconvert.parser.element import Element
from adfconvert.parser.state import BuilderState

logger = logging.getLogger(LOGGER_NAME)


class AdfBuilder:
    """Builds an ADF document from a stream of HTML tag and character events.

    Feed the events in document order with `start_tag`, `end_tag` and `characters`, then call `emit` once to close
    every open element and get the document. The builder cannot be reused after `emit`.

    Example:
        builder = AdfBuilder()
        builder.start_tag(Element('p'))
        builder.characters('Hello')
        builder.end_tag(Element('p'))
        doc = builder.emit()
    """

    def __init__(
        self,
        dispatch_table: TagDispatchTable | None = None,
        configuration: ConverterConfiguration | None = None,
    ):
        self.dispatch_table = dispatch_table or default_dispatch_table()
        self.state: BuilderState | None = BuilderState(configuration)

    def _current_state(self) -> BuilderState:
        if self.state is None:
            raise BuilderConsumedError('The builder has already emitted its document')
        return self.state

    def start_tag(self, element: Element) -> None:
        self.dispatch_table.dispatch(self._current_state(), element, is_start=True)

    def end_tag(self, element: Element) -> None:
        self.dispatch_table.dispatch(self._current_state(), element, is_start=False)

    def characters(self, text: str) -> None:
        self._current_state().append_text(text)

    def emit(self) -> Doc:
        """Closes every open element, innermost first, and returns the document.

        Raises:
            StructuralFault: an open element cannot be attached to its parent.
            BuilderConsumedError: the document was already emitted.
        """

        state = self._current_state()
        self.state = None
        document = state.close_all()
        if state.absorbed_end_tags:
            logger.debug(f'End tags never received for force-closed elements: {state.absorbed_end_tags}')
        return Doc(version=ADF_DOCUMENT_VERSION, content=document.block_content())
