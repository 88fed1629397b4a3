from adfconvert.parser.handlers import blocks, elements, inline, lists, media, tables


def register_handlers(table) -> None:
    """Registers the handlers of every supported element.

    `<a>` and `<img>` go to the custom tier so that media and inline cards are recognized before anchors fall back to
    links; everything else goes to the base tier.
    """

    for module in (blocks, inline, lists, tables, media, elements):
        module.register(table)
