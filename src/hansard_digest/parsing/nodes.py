"""Read-only tree nodes consumed by the debate segmenter.

The segmenter only needs four things from a node: its kind, its attributes,
its text content and its ordered children. :class:`Node` captures that
contract so in-memory trees (:class:`TreeNode`) and parsed XML
(:class:`XmlNode`) are interchangeable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Mapping, Protocol, Sequence, Union

from lxml import etree


class TreeBuildError(ValueError):
    """Raised when transcript markup cannot be turned into a node tree."""


class NodeKind(Enum):
    """Node kinds the segmenter dispatches on."""

    ORAL_HEADING = "oral-heading"
    MAJOR_HEADING = "major-heading"
    MINOR_HEADING = "minor-heading"
    SPEECH = "speech"
    OTHER = "other"

    @classmethod
    def from_name(cls, name: str) -> "NodeKind":
        try:
            return cls(name)
        except ValueError:
            return cls.OTHER


class Node(Protocol):
    @property
    def kind(self) -> str: ...

    @property
    def attributes(self) -> Mapping[str, str]: ...

    @property
    def text(self) -> str: ...

    @property
    def children(self) -> Sequence["Node"]: ...


@dataclass(frozen=True, slots=True)
class TreeNode:
    """Plain in-memory node.

    ``own_text`` holds the node's direct text; like DOM ``textContent``,
    :attr:`text` also includes the text of every descendant.
    """

    kind: str
    attributes: Mapping[str, str] = field(default_factory=dict)
    own_text: str = ""
    children: Sequence["TreeNode"] = ()

    @property
    def text(self) -> str:
        return self.own_text + "".join(child.text for child in self.children)


class XmlNode:
    """Adapter exposing an ``lxml`` element through the :class:`Node` protocol."""

    __slots__ = ("_element",)

    def __init__(self, element: etree._Element) -> None:
        self._element = element

    @property
    def kind(self) -> str:
        return etree.QName(self._element).localname

    @property
    def attributes(self) -> Mapping[str, str]:
        return dict(self._element.attrib)

    @property
    def text(self) -> str:
        return _text_content(self._element)

    @property
    def children(self) -> List["XmlNode"]:
        return [XmlNode(child) for child in self._element if isinstance(child.tag, str)]

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"XmlNode({self.kind!r}, {self.attributes!r})"


def _text_content(element: etree._Element) -> str:
    # Comment text is skipped but a comment's tail belongs to the parent.
    parts = [element.text or ""]
    for child in element:
        if isinstance(child.tag, str):
            parts.append(_text_content(child))
        parts.append(child.tail or "")
    return "".join(parts)


def build_tree(markup: Union[str, bytes]) -> XmlNode:
    """Parse transcript ``markup`` into an :class:`XmlNode` tree."""

    if isinstance(markup, str):
        markup = markup.encode("utf8")
    if not markup.strip():
        raise TreeBuildError("Transcript markup is empty")
    parser = etree.XMLParser(recover=True, huge_tree=True, resolve_entities=False)
    try:
        root = etree.fromstring(markup, parser=parser)
    except etree.XMLSyntaxError as exc:
        raise TreeBuildError(f"Transcript markup could not be parsed: {exc}") from exc
    if root is None:
        raise TreeBuildError("Transcript markup does not contain a root element")
    return XmlNode(root)


def iter_descendants(node: Node) -> Iterator[Node]:
    """Yield every descendant of ``node`` in document order."""

    for child in node.children:
        yield child
        yield from iter_descendants(child)


def paragraph_texts(node: Node) -> List[str]:
    """Return the trimmed text of every ``p`` element below ``node``."""

    return [descendant.text.strip() for descendant in iter_descendants(node) if descendant.kind == "p"]


__all__ = [
    "Node",
    "NodeKind",
    "TreeBuildError",
    "TreeNode",
    "XmlNode",
    "build_tree",
    "iter_descendants",
    "paragraph_texts",
]
