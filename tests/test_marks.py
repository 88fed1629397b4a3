from adfconvert.marks import MarkStack, apply_markup, markup_delimiters, style_marks, text_color_name
from adfconvert.models import (
    BackgroundColorMark,
    CodeMark,
    ColorAttrs,
    EmMark,
    LinkAttrs,
    LinkMark,
    StrikeMark,
    StrongMark,
    SubSupAttrs,
    SubSupMark,
    TextColorMark,
    UnderlineMark,
)


class TestMarkStack:
    def test_push_is_idempotent(self):
        stack = MarkStack()

        assert stack.push(StrongMark())
        assert not stack.push(StrongMark())
        assert stack.snapshot() == [StrongMark()]

    def test_code_clears_other_marks(self):
        stack = MarkStack()
        stack.push(StrongMark())
        stack.push(EmMark())

        assert stack.push(CodeMark())
        assert stack.snapshot() == [CodeMark()]
        assert not stack.push(CodeMark())

    def test_no_marks_join_code(self):
        stack = MarkStack()
        stack.push(CodeMark())

        assert not stack.push(StrongMark())
        assert stack.snapshot() == [CodeMark()]

    def test_pop_removes_the_most_recent_match(self):
        first = LinkMark(attrs=LinkAttrs(href='a'))
        second = LinkMark(attrs=LinkAttrs(href='b'))
        stack = MarkStack()
        stack.push(first)
        stack.push(StrongMark())
        stack.push(second)

        popped = stack.pop(lambda mark: isinstance(mark, LinkMark))

        assert popped == second
        assert stack.snapshot() == [first, StrongMark()]

    def test_pop_without_match(self):
        stack = MarkStack()

        assert stack.pop(lambda mark: True) is None
        assert len(stack) == 0

    def test_snapshot_is_a_copy(self):
        stack = MarkStack()
        stack.push(EmMark())
        snapshot = stack.snapshot()
        stack.remove(EmMark())

        assert snapshot == [EmMark()]
        assert list(stack) == []


class TestMarkup:
    def test_delimiters(self):
        assert markup_delimiters(StrongMark()) == ('**', '**')
        assert markup_delimiters(EmMark()) == ('*', '*')
        assert markup_delimiters(CodeMark()) == ('`', '`')
        assert markup_delimiters(StrikeMark()) == ('~~', '~~')
        assert markup_delimiters(UnderlineMark()) == ('__', '__')
        assert markup_delimiters(SubSupMark(attrs=SubSupAttrs(type='sub'))) == ('~', '~')
        assert markup_delimiters(SubSupMark(attrs=SubSupAttrs(type='sup'))) == ('^', '^')

    def test_links_and_background_colors_have_no_markup(self):
        assert markup_delimiters(LinkMark(attrs=LinkAttrs(href='https://example.com'))) is None
        assert markup_delimiters(BackgroundColorMark(attrs=ColorAttrs(color='#ffe380'))) is None

    def test_text_colors_use_the_palette_name(self):
        assert text_color_name('#FF5630') == 'red'
        assert markup_delimiters(TextColorMark(attrs=ColorAttrs(color='#ff5630'))) == ('{color:red}', '{color}')
        assert markup_delimiters(TextColorMark(attrs=ColorAttrs(color='#123456'))) is None

    def test_apply_markup_orders_marks(self):
        assert apply_markup('x', [EmMark(), StrongMark()]) == '***x***'
        assert apply_markup('x', [UnderlineMark(), CodeMark()]) == '`__x__`'


class TestStyleMarks:
    def test_color_background_and_underline(self):
        marks = style_marks('COLOR: #ff5630; background-color:#deebff;text-decoration: underline solid')

        assert marks == [
            TextColorMark(attrs=ColorAttrs(color='#ff5630')),
            BackgroundColorMark(attrs=ColorAttrs(color='#deebff')),
            UnderlineMark(),
        ]

    def test_no_style(self):
        assert style_marks(None) == []
        assert style_marks('font-weight: bold') == []
