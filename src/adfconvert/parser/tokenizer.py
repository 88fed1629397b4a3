from html.parser import HTMLParser
import logging

from adfconvert.config import ConverterConfiguration, get_configuration
from adfconvert.constants import LOGGER_NAME
from adfconvert.models import Doc
from adfconvert.parser.builder import AdfBuilder
from adfconvert.parser.dispatch import TagDispatchTable
from adfconvert.parser.element import Element
from adfconvert.sanitize import sanitize_html_structure

logger = logging.getLogger(LOGGER_NAME)


class HtmlTokenizer(HTMLParser):
    """Forwards the events of the standard library HTML parser to an `AdfBuilder`.

    Tag names are lowercased and character references are decoded by the parser. Self-closing tags (`<br/>`) produce a
    single start event flagged as self-closing.
    """

    def __init__(self, builder: AdfBuilder):
        super().__init__(convert_charrefs=True)
        self.builder = builder

    @staticmethod
    def _element(tag: str, attrs: list[tuple[str, str | None]], self_closing: bool = False) -> Element:
        return Element(tag, {name: value if value is not None else '' for name, value in attrs}, self_closing)

    def handle_starttag(self, tag, attrs):
        self.builder.start_tag(self._element(tag, attrs))

    def handle_startendtag(self, tag, attrs):
        self.builder.start_tag(self._element(tag, attrs, self_closing=True))

    def handle_endtag(self, tag):
        self.builder.end_tag(Element(tag))

    def handle_data(self, data):
        self.builder.characters(data)


def html_to_adf(
    html: str,
    sanitize: bool | None = None,
    configuration: ConverterConfiguration | None = None,
    dispatch_table: TagDispatchTable | None = None,
) -> Doc:
    """Converts HTML into an ADF document.

    Args:
        html: the HTML to convert; a fragment or a complete document.
        sanitize: whether to structurally sanitize the HTML first; defaults to the `sanitize_html` setting.
        configuration: the configuration to use; defaults to the active configuration.
        dispatch_table: the tag handlers to use; defaults to the shared table of supported elements.

    Returns:
        The ADF document.

    Raises:
        StructuralFault: the HTML cannot be represented as a well-formed ADF document.
    """

    configuration = configuration or get_configuration()
    if sanitize is None:
        sanitize = configuration.sanitize_html
    if sanitize:
        html = sanitize_html_structure(html)

    builder = AdfBuilder(dispatch_table=dispatch_table, configuration=configuration)
    tokenizer = HtmlTokenizer(builder)
    tokenizer.feed(html)
    tokenizer.close()
    doc = builder.emit()
    logger.debug(f'Converted {len(html)} characters of HTML into {len(doc.content)} ADF blocks')
    return doc
