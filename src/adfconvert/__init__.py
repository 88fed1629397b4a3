from adfconvert.config import CONFIGURATION, ConverterConfiguration, get_configuration
from adfconvert.exceptions import (
    AdfConvertException,
    BuilderConsumedError,
    MarkdownConversionException,
    MissingAttributeFault,
    StructuralFault,
)
from adfconvert.logs import setup_logging
from adfconvert.markdown import adf_to_markdown, markdown_to_adf
from adfconvert.models import Doc
from adfconvert.parser import AdfBuilder, Element, TagDispatchTable, html_to_adf
from adfconvert.renderer import adf_to_html
from adfconvert.sanitize import sanitize_html_structure

__all__ = [
    'CONFIGURATION',
    'AdfBuilder',
    'AdfConvertException',
    'BuilderConsumedError',
    'ConverterConfiguration',
    'Doc',
    'Element',
    'MarkdownConversionException',
    'MissingAttributeFault',
    'StructuralFault',
    'TagDispatchTable',
    'adf_to_html',
    'adf_to_markdown',
    'get_configuration',
    'html_to_adf',
    'markdown_to_adf',
    'sanitize_html_structure',
    'setup_logging',
]
