import logging

from bs4 import BeautifulSoup, NavigableString, Tag

from adfconvert.constants import LOGGER_NAME, PARAGRAPH_HOISTED_TAGS, SANITIZER_REMOVED_TAGS

logger = logging.getLogger(LOGGER_NAME)


def _unwrap_nested_anchors(soup: BeautifulSoup) -> None:
    for anchor in soup.find_all('a'):
        for nested in anchor.find_all('a'):
            nested.replace_with(NavigableString(nested.get_text()))


def _is_blank(node) -> bool:
    return isinstance(node, NavigableString) and not node.strip()


def _split_paragraph(soup: BeautifulSoup, paragraph: Tag) -> None:
    replacement = []
    run = []

    def close_run():
        if run and not all(_is_blank(node) for node in run):
            wrapper = soup.new_tag('p')
            for node in run:
                wrapper.append(node)
            replacement.append(wrapper)
        run.clear()

    for child in list(paragraph.children):
        child.extract()
        if isinstance(child, Tag) and child.name in PARAGRAPH_HOISTED_TAGS:
            close_run()
            replacement.append(child)
        else:
            run.append(child)
    close_run()

    for node in replacement:
        paragraph.insert_before(node)
    paragraph.decompose()


def sanitize_html_structure(html: str) -> str:
    """Rewrites HTML so that the builder can convert it.

    - anchors nested inside anchors are replaced by their text;
    - paragraphs directly containing a `details`, `summary`, `table` or `adf-media-group` element are split so that
      the block becomes a sibling of the paragraphs holding the inline content around it;
    - `script`, `style` and `head` elements are removed.

    Args:
        html: the HTML to sanitize.

    Returns:
        The sanitized HTML.
    """

    soup = BeautifulSoup(html, 'html.parser')

    for name in SANITIZER_REMOVED_TAGS:
        for element in soup.find_all(name):
            element.decompose()

    _unwrap_nested_anchors(soup)

    for paragraph in soup.find_all('p'):
        if any(isinstance(child, Tag) and child.name in PARAGRAPH_HOISTED_TAGS for child in paragraph.children):
            logger.debug('Hoisting block elements out of a paragraph')
            _split_paragraph(soup, paragraph)

    return str(soup)
