"""Contract of the HTML parser used by the rich text resolver.

Why Protocol:
- Structural contract (duck typing) without rigid inheritance.
- The resolver stays independent from BeautifulSoup; tests or callers can
  plug in another parser.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class RichTextHtmlParser(Protocol):
    """Minimal DOM operations the resolution pipeline needs.

    Design rules:
    - `parse` raises `RichTextParseError` on markup it cannot handle at all.
    - Mutations (`set_attribute`, `replace_with`) only touch the given
      element; `serialize` keeps every other byte of the source.
    - `query_all` returns elements in document order.
    """

    def parse(self, html: str) -> Any:
        ...

    def query_all(self, document: Any, predicate: Callable[[Any], bool]) -> list[Any]:
        ...

    def tag_name(self, element: Any) -> str:
        ...

    def get_attribute(self, element: Any, name: str) -> str | None:
        ...

    def set_attribute(self, document: Any, element: Any, name: str, value: str) -> None:
        ...

    def replace_with(self, document: Any, element: Any, html: str) -> None:
        ...

    def is_inside(self, element: Any, container: Any) -> bool:
        ...

    def outer_html(self, document: Any, element: Any) -> str:
        ...

    def serialize(self, document: Any) -> str:
        ...
