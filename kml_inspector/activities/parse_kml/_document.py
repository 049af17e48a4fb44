"""Typed read-only view over an lxml element tree.

``KmlElement`` and ``KmlDocument`` expose exactly the queries the
activities need (descendants by name, children by name, trimmed text)
so traversal code never touches raw lxml nodes or namespace-qualified
``{uri}local`` tags.

Element names are reported as written in the source: ``kml:Placemark``
when a prefix is used, ``Placemark`` otherwise. A default namespace
does not change the name. Comments and processing instructions are
never returned as elements.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from lxml.etree import _Element


def qualified_name(elem: _Element) -> str:
    """Return the element's tag name as written in the source document."""
    from lxml import etree  # type: ignore[attr-defined]

    local = etree.QName(elem).localname
    if elem.prefix:
        return f"{elem.prefix}:{local}"
    return local


def _is_element(node: _Element) -> bool:
    # Comments, PIs and entity references carry a non-string tag.
    return isinstance(node.tag, str)


class KmlElement:
    """A single element of a parsed KML document."""

    __slots__ = ("_elem",)

    def __init__(self, elem: _Element) -> None:
        self._elem = elem

    def __repr__(self) -> str:
        return f"KmlElement({self.name!r}, line={self.line})"

    @property
    def name(self) -> str:
        """Tag name as written in the source (``prefix:local`` or ``local``)."""
        return qualified_name(self._elem)

    @property
    def line(self) -> int | None:
        """Source line of the start tag, when known."""
        return self._elem.sourceline

    @property
    def text(self) -> str:
        """Trimmed text content of this element and all its descendants.

        Comment and processing-instruction content is excluded; CDATA
        sections are included.
        """
        parts = [self._elem.text or ""]
        for node in self._elem.iterdescendants():
            if _is_element(node):
                parts.append(node.text or "")
            parts.append(node.tail or "")
        return "".join(parts).strip()

    def iter_descendants(self, name: str) -> Iterator[KmlElement]:
        """Yield descendants named ``name`` in document order, excluding self."""
        for node in self._elem.iterdescendants():
            if _is_element(node) and qualified_name(node) == name:
                yield KmlElement(node)

    def first_descendant(self, name: str) -> KmlElement | None:
        """Return the first descendant named ``name``, or ``None``."""
        return next(self.iter_descendants(name), None)

    def children(self, name: str) -> list[KmlElement]:
        """Return direct children named ``name`` in document order."""
        return [
            KmlElement(node)
            for node in self._elem
            if _is_element(node) and qualified_name(node) == name
        ]

    def first_child(self, name: str) -> KmlElement | None:
        """Return the first direct child named ``name``, or ``None``."""
        matches = self.children(name)
        return matches[0] if matches else None


class KmlDocument:
    """A parsed KML document.

    Built once by ``parse_document`` and never mutated afterwards, so it
    can be shared by the summary and geometry activities.

    Attributes:
        source_bytes: Size of the encoded input, in bytes.
        depth: Deepest element nesting (root = 1).
    """

    __slots__ = ("_root", "depth", "source_bytes")

    def __init__(self, root: _Element, *, source_bytes: int = 0, depth: int = 1) -> None:
        self._root = root
        self.source_bytes = source_bytes
        self.depth = depth

    def __repr__(self) -> str:
        return f"KmlDocument(root={self.root.name!r}, bytes={self.source_bytes})"

    @property
    def root(self) -> KmlElement:
        """The document element."""
        return KmlElement(self._root)

    def iter_elements(self, name: str) -> Iterator[KmlElement]:
        """Yield every element named ``name`` in document order, root included."""
        for node in self._root.iter():
            if _is_element(node) and qualified_name(node) == name:
                yield KmlElement(node)

    def count(self, name: str) -> int:
        """Number of elements named ``name`` anywhere in the document."""
        return sum(1 for _ in self.iter_elements(name))
