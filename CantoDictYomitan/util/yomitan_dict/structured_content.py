"""Typed nodes for Yomitan structured content."""

from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple, Union

NodeContent = Union[str, Tuple['Node', ...], None]


@dataclass(frozen=True)
class Node:
    """
    One structured-content element.

    ``content`` is either text or a tuple of child nodes. Attributes left as
    None are not serialized.
    """

    tag: str
    content: NodeContent = None
    data: Optional[Dict[str, str]] = None
    style: Optional[Dict[str, str]] = None
    lang: Optional[str] = None
    href: Optional[str] = None

    is_empty = False

    def to_dict(self) -> dict:
        node = {"tag": self.tag}
        if self.href is not None:
            node["href"] = self.href
        if isinstance(self.content, tuple):
            node["content"] = [child.to_dict() for child in self.content]
        elif self.content is not None:
            node["content"] = self.content
        if self.data:
            node["data"] = dict(self.data)
        if self.style:
            node["style"] = dict(self.style)
        if self.lang:
            node["lang"] = self.lang
        return node


@dataclass(frozen=True)
class EmptyNode(Node):
    """
    Placeholder for a section that is intentionally empty.

    Keeps the position of optional parts of a card stable, so a consumer reading
    sections by index sees the same layout for every entry.
    """

    tag: str = field(default='span')

    is_empty = True

    def to_dict(self) -> dict:
        return {"tag": self.tag}


def element(tag: str, content: Union[str, Sequence[Node], None] = None, **attributes) -> Node:
    """Build a Node, freezing a child list into a tuple."""
    if content is not None and not isinstance(content, str):
        content = tuple(content)
    return Node(tag=tag, content=content, **attributes)


def structured_content(sections: Sequence[Node]) -> dict:
    return {
        "type": "structured-content",
        "content": [section.to_dict() for section in sections],
    }
