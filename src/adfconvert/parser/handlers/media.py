import logging

from adfconvert.constants import LOGGER_NAME
from adfconvert.exceptions import MissingAttributeFault
from adfconvert.models import BorderAttrs, BorderMark, LinkAttrs, LinkMark, Media, MediaAttrs, MediaType
from adfconvert.parser.element import Element
from adfconvert.parser.frames import MediaBlockFrame, MediaBlockKind
from adfconvert.parser.state import BuilderState
from adfconvert.utils.styles import extract_style, parse_pixels

logger = logging.getLogger(LOGGER_NAME)

MEDIA_BLOCK_TAGS = {
    'adf-media-group': MediaBlockKind.GROUP,
    'adf-media-single': MediaBlockKind.SINGLE,
}


def media_block_start(state: BuilderState, element: Element) -> bool:
    state.flush_text()
    kind = MEDIA_BLOCK_TAGS[element.tag]
    if kind == MediaBlockKind.SINGLE and not element.get('data-layout'):
        raise state.fault('Media single requires a data-layout attribute', element.tag, MissingAttributeFault)
    state.push_frame(MediaBlockFrame(tag=element.tag, kind=kind, attrs=dict(element.attrs)))
    return True


def media_block_end(state: BuilderState, element: Element) -> bool:
    state.close_frame(MediaBlockFrame, element.tag, lambda frame: frame.tag == element.tag)
    return True


def _media_marks(element: Element) -> list | None:
    marks = []
    if element.tag == 'a' and (href := element.get('href')):
        marks.append(LinkMark(attrs=LinkAttrs(href=href)))
    if border_color := element.get('data-border-color'):
        size = parse_pixels(element.get('data-border-size')) or 1
        marks.append(BorderMark(attrs=BorderAttrs(color=border_color, size=size)))
    return marks or None


def media_start(state: BuilderState, element: Element) -> bool:
    """Handles `<img>` and `<a>` inside a media group or media single; declines anywhere else."""

    frame = state.top
    if not isinstance(frame, MediaBlockFrame):
        return False
    media_id = element.get('data-media-id')
    if not media_id:
        raise state.fault('Media requires a data-media-id attribute', element.tag, MissingAttributeFault)
    media_type = element.get('data-type') or MediaType.FILE.value
    if media_type not in {item.value for item in MediaType}:
        logger.warning(f'Unknown media type {media_type!r}; using {MediaType.FILE.value}')
        media_type = MediaType.FILE.value
    style = element.get('style')
    attrs = MediaAttrs(
        id=media_id,
        collection=element.get('data-collection') or '',
        type=media_type,
        alt=element.get('alt') or None,
        width=parse_pixels(extract_style(style, 'width')),
        height=parse_pixels(extract_style(style, 'height')),
    )
    frame.media.append(Media(attrs=attrs, marks=_media_marks(element)))
    if element.tag == 'a' and not element.self_closing:
        # keeps </a> from closing an enclosing link
        state.push_marks(element.tag, [])
    return True


def register(table) -> None:
    for tag in MEDIA_BLOCK_TAGS:
        table.insert_start_handler(tag, media_block_start)
        table.insert_end_handler(tag, media_block_end)
    table.add_start_handler('img', media_start)
