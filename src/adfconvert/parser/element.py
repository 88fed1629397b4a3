from dataclasses import dataclass, field


@dataclass(frozen=True)
class Element:
    """An HTML tag event: the lowercase tag name and its attributes in document order.

    Attributes without a value are stored with an empty string.
    """

    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    self_closing: bool = False

    def get(self, name: str, default: str | None = None) -> str | None:
        return self.attrs.get(name, default)

    def has(self, name: str) -> bool:
        return name in self.attrs

    @property
    def classes(self) -> list[str]:
        return (self.attrs.get('class') or '').split()
