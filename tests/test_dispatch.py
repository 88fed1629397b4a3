from adfconvert.models import Paragraph, StrongMark, Text
from adfconvert.parser import Element, TagDispatchTable, default_dispatch_table, html_to_adf
from adfconvert.parser.handlers import register_handlers


def _handler(calls, name, result):
    def handle(state, element):
        calls.append(name)
        return result

    return handle


class TestTagDispatchTable:
    def test_custom_tier_is_consulted_first(self):
        calls = []
        table = TagDispatchTable()
        table.insert_start_handler('x', _handler(calls, 'base', True))
        table.add_start_handler('x', _handler(calls, 'custom', True))

        assert table.dispatch(None, Element('x'), is_start=True)
        assert calls == ['custom']

    def test_declined_event_falls_through_to_the_base_tier(self):
        calls = []
        table = TagDispatchTable()
        table.insert_end_handler('x', _handler(calls, 'base', True))
        table.add_end_handler('x', _handler(calls, 'custom', False))

        assert table.dispatch(None, Element('x'), is_start=False)
        assert calls == ['custom', 'base']

    def test_start_and_end_handlers_are_separate(self):
        table = TagDispatchTable()
        table.insert_start_handler('x', _handler([], 'start', True))

        assert len(table.lookup('x', is_start=True)) == 1
        assert table.lookup('x', is_start=False) == ()

    def test_unhandled_tag(self):
        assert not TagDispatchTable().dispatch(None, Element('x'), is_start=True)

    def test_default_table_is_shared(self):
        assert default_dispatch_table() is default_dispatch_table()

    def test_anchor_handlers_use_both_tiers(self):
        assert len(default_dispatch_table().lookup('a', is_start=True)) == 2


class TestCustomHandlers:
    def test_extra_formatting_element(self):
        def mark_start(state, element):
            state.flush_text()
            state.push_marks(element.tag, [StrongMark()])
            return True

        def mark_end(state, element):
            state.flush_text()
            state.pop_marks(element.tag)
            return True

        table = TagDispatchTable()
        register_handlers(table)
        table.add_start_handler('mark', mark_start)
        table.add_end_handler('mark', mark_end)

        doc = html_to_adf('<p><mark>hi</mark></p>', dispatch_table=table)

        assert doc.content == [Paragraph(content=[Text(text='hi', marks=[StrongMark()])])]

    def test_declining_handler_keeps_default_behavior(self):
        seen = []

        def record(state, element):
            seen.append(element.get('id'))
            return False

        table = TagDispatchTable()
        register_handlers(table)
        table.add_start_handler('p', record)

        doc = html_to_adf('<p id="first">text</p>', dispatch_table=table)

        assert seen == ['first']
        assert doc.content == [Paragraph(content=[Text(text='text')])]
