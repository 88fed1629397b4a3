from adfconvert.parser.builder import AdfBuilder
from adfconvert.parser.dispatch import TagDispatchTable, default_dispatch_table
from adfconvert.parser.element import Element
from adfconvert.parser.tokenizer import HtmlTokenizer, html_to_adf

__all__ = [
    'AdfBuilder',
    'Element',
    'HtmlTokenizer',
    'TagDispatchTable',
    'default_dispatch_table',
    'html_to_adf',
]
