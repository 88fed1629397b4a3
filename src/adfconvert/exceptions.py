from typing import Any


class AdfConvertException(Exception):
    """General conversion exception, whenever a specific reason can't be determined."""

    extra: dict[str, Any] = {}

    def __init__(self, *args, **kwargs):
        self.extra = kwargs.pop('extra', self.extra)
        super().__init__(*args)


class StructuralFault(AdfConvertException):
    """The HTML event stream cannot be turned into a well-formed ADF tree.

    Raised for mismatched end tags, blocks attached to a parent that cannot hold them and illegal element
    combinations. The offending tag name and a snapshot of the open frames are available in `extra`.
    """

    def __init__(self, message: str, tag: str | None = None, stack: list[str] | None = None, **kwargs):
        self.tag = tag
        self.stack = list(stack or [])
        kwargs.setdefault('extra', {'tag': tag, 'stack': self.stack})
        super().__init__(f'{message} (tag: {tag}, open frames: {" > ".join(self.stack)})', **kwargs)


class MissingAttributeFault(StructuralFault):
    pass


class BuilderConsumedError(AdfConvertException):
    pass


class MarkdownConversionException(AdfConvertException):
    pass
