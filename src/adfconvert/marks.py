from collections.abc import Callable

from adfconvert.constants import TEXT_COLORS
from adfconvert.models import (
    BackgroundColorMark,
    CodeMark,
    ColorAttrs,
    EmMark,
    LinkMark,
    Mark,
    StrikeMark,
    StrongMark,
    SubSupMark,
    TextColorMark,
    UnderlineMark,
)
from adfconvert.utils.styles import extract_style

MARKUP_ORDER = (
    StrongMark,
    EmMark,
    CodeMark,
    LinkMark,
    StrikeMark,
    SubSupMark,
    TextColorMark,
    UnderlineMark,
    BackgroundColorMark,
)
"""Mark classes in the order they are tried when serializing markup; longer delimiters come first."""


class MarkStack:
    """The formatting marks active at the current point of an HTML event stream.

    Marks are kept in the order they were opened, which is the order they are stamped on text runs.
    """

    def __init__(self):
        self._marks: list[Mark] = []

    def __len__(self) -> int:
        return len(self._marks)

    def __iter__(self):
        return iter(self._marks)

    def push(self, mark: Mark) -> bool:
        """Activates a mark.

        Pushing a mark that is already active is a no-op. Pushing `code` deactivates every other mark, and no
        other mark can be pushed while `code` is active.

        Args:
            mark: the mark to activate.

        Returns:
            True if the stack changed.
        """

        if isinstance(mark, CodeMark):
            if self._marks == [mark]:
                return False
            self._marks = [mark]
            return True
        if mark in self._marks or any(isinstance(active, CodeMark) for active in self._marks):
            return False
        self._marks.append(mark)
        return True

    def pop(self, predicate: Callable[[Mark], bool]) -> Mark | None:
        """Removes the most recently pushed mark matching the predicate, wherever it sits in the stack."""

        for index in range(len(self._marks) - 1, -1, -1):
            if predicate(self._marks[index]):
                return self._marks.pop(index)
        return None

    def remove(self, mark: Mark) -> Mark | None:
        return self.pop(lambda active: active == mark)

    def snapshot(self) -> list[Mark]:
        return list(self._marks)


def text_color_name(color: str) -> str | None:
    """Returns the palette name of a text color hex value, e.g. `red` for `#ff5630`."""

    return TEXT_COLORS.get(color.strip().lower())


def markup_delimiters(mark: Mark) -> tuple[str, str] | None:
    """Returns the opening and closing markup delimiters of a mark.

    Args:
        mark: the mark to serialize.

    Returns:
        A `(open, close)` pair, or None when the mark has no markup representation: links, background colors and
        text colors outside the palette.
    """

    if isinstance(mark, CodeMark):
        return '`', '`'
    if isinstance(mark, StrongMark):
        return '**', '**'
    if isinstance(mark, EmMark):
        return '*', '*'
    if isinstance(mark, StrikeMark):
        return '~~', '~~'
    if isinstance(mark, UnderlineMark):
        return '__', '__'
    if isinstance(mark, SubSupMark):
        symbol = '~' if mark.attrs.type == 'sub' else '^'
        return symbol, symbol
    if isinstance(mark, TextColorMark):
        if name := text_color_name(mark.attrs.color):
            return f'{{color:{name}}}', '{color}'
        return None
    return None


def apply_markup(text: str, marks: list[Mark]) -> str:
    """Wraps text in the markup delimiters of its marks, following `MARKUP_ORDER` from the outside in.

    Marks without a markup representation are skipped.
    """

    ordered = sorted(marks, key=lambda mark: MARKUP_ORDER.index(type(mark)) if type(mark) in MARKUP_ORDER else 99)
    for mark in reversed(ordered):
        if delimiters := markup_delimiters(mark):
            text = f'{delimiters[0]}{text}{delimiters[1]}'
    return text


def style_marks(style: str | None) -> list[Mark]:
    """Returns the marks expressed by an inline `style` attribute.

    `color` yields a text color mark, `background-color` a background color mark and `text-decoration: underline`
    an underline mark, in that order.
    """

    marks: list[Mark] = []
    if color := extract_style(style, 'color'):
        marks.append(TextColorMark(attrs=ColorAttrs(color=color)))
    if background := extract_style(style, 'background-color'):
        marks.append(BackgroundColorMark(attrs=ColorAttrs(color=background)))
    if 'underline' in (extract_style(style, 'text-decoration') or '').lower():
        marks.append(UnderlineMark())
    return marks
