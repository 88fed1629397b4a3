from __future__ import annotations

import re

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.token import Token

from adfconvert.constants import ALERT_TO_PANEL_TYPE

ALERT_MARKER = re.compile(r'^\[!(NOTE|TIP|IMPORTANT|WARNING|CAUTION)\][ \t]*')


def panels_plugin(md: MarkdownIt) -> None:
    """Turn GitHub-style alert blockquotes (`> [!NOTE]`) into `<figure data-panel-type>` panels."""

    def process_alerts(state: StateCore) -> None:
        tokens = state.tokens
        i = 0

        while i < len(tokens):
            token = tokens[i]

            if token.type == 'blockquote_open' and (match := detect_alert(tokens, i + 1)):
                close_index = find_blockquote_close(tokens, i)
                if close_index is not None:
                    token.tag = 'figure'
                    token.attrSet('data-panel-type', ALERT_TO_PANEL_TYPE[match.group(1)])
                    tokens[close_index].tag = 'figure'
                    strip_alert_marker(tokens, i + 1, match)

            i += 1

    def detect_alert(tokens: list[Token], start_index: int) -> re.Match | None:
        if start_index + 1 >= len(tokens):
            return None
        if tokens[start_index].type != 'paragraph_open' or tokens[start_index + 1].type != 'inline':
            return None
        return ALERT_MARKER.match(tokens[start_index + 1].content)

    def find_blockquote_close(tokens: list[Token], open_index: int) -> int | None:
        depth = 0
        for j in range(open_index, len(tokens)):
            if tokens[j].type == 'blockquote_open':
                depth += 1
            elif tokens[j].type == 'blockquote_close':
                depth -= 1
                if depth == 0:
                    return j
        return None

    def strip_alert_marker(tokens: list[Token], para_open_idx: int, match: re.Match) -> None:
        inline = tokens[para_open_idx + 1]
        inline.content = inline.content[match.end() :].lstrip('\n')

        children = list(inline.children or [])
        if children and children[0].type == 'text':
            children[0].content = ALERT_MARKER.sub('', children[0].content, count=1)
            if not children[0].content:
                children.pop(0)
                if children and children[0].type in ('softbreak', 'hardbreak'):
                    children.pop(0)
        inline.children = children

        # a marker alone on its line leaves an empty paragraph behind
        if not children:
            del tokens[para_open_idx : para_open_idx + 3]

    md.core.ruler.after('inline', 'adf-alert-panels', process_alerts)
