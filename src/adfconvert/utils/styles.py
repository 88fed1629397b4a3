import re

_NEWLINE_EDGE = re.compile(r'^\s*\n|\n\s*$')


def extract_style(style: str | None, name: str) -> str | None:
    """Extracts the value of a CSS property from an inline style attribute.

    Declarations are split on `;` and each one on its first `:`. Property names are matched case-insensitively.

    Args:
        style: the value of a `style` attribute.
        name: the CSS property to look up, e.g. `background-color`.

    Returns:
        The stripped property value or None if the property is not declared.
    """

    if not style:
        return None
    for declaration in style.split(';'):
        prop, separator, value = declaration.partition(':')
        if separator and prop.strip().lower() == name.lower():
            return value.strip()
    return None


def parse_pixels(value: str | None) -> int | None:
    """Parses a CSS length such as `659px` into an integer number of pixels."""

    if not value:
        return None
    value = value.strip().lower().removesuffix('px').strip()
    try:
        return int(float(value))
    except ValueError:
        return None


def clean_surrounding_text(text: str) -> str:
    """Removes leading and trailing whitespace up to and including the nearest newline.

    Whitespace on the text side of that newline is kept, so `'\\n  Heading  \\n '` becomes `'  Heading  '` while
    `'  Heading  '` is unchanged.
    """

    return _NEWLINE_EDGE.sub('', text)
