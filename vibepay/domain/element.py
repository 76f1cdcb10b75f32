"""Headless stand-in for the page elements the animation helpers drive.

Only the parts of an element the helpers read or mutate are modelled: its
class tokens, inline style, resolved style, text and layout size.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional


class MissingElementError(KeyError):
    def __init__(self, element_id: str):
        self.element_id = element_id
        super().__init__(f"Element '{element_id}' not found in document")


class ClassList:
    """Ordered set of class tokens."""

    def __init__(self, tokens: Iterable[str] = ()):
        self._tokens: List[str] = []
        self.add(*tokens)

    def add(self, *tokens: str) -> None:
        for token in tokens:
            if token not in self._tokens:
                self._tokens.append(token)

    def remove(self, *tokens: str) -> None:
        for token in tokens:
            if token in self._tokens:
                self._tokens.remove(token)

    def toggle(self, token: str, force: Optional[bool] = None) -> bool:
        present = token in self._tokens if force is None else not force
        if present:
            self.remove(token)
            return False
        self.add(token)
        return True

    def contains(self, token: str) -> bool:
        return token in self._tokens

    def clear(self) -> None:
        self._tokens.clear()

    def __contains__(self, token: object) -> bool:
        return token in self._tokens

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._tokens))

    def __len__(self) -> int:
        return len(self._tokens)

    def __repr__(self) -> str:
        return f"ClassList({self._tokens!r})"


@dataclass(eq=False)
class Element:
    id: Optional[str] = None
    tag: str = "div"
    class_list: ClassList = field(default_factory=ClassList)
    text: str = ""
    offset_width: float = 0.0
    offset_height: float = 0.0
    disabled: bool = False
    value: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)
    style: Dict[str, str] = field(default_factory=dict)
    # resolved by the renderer; the helpers only read it
    computed_style: Dict[str, str] = field(default_factory=dict)
    parent: Optional["Element"] = field(default=None, repr=False)
    children: List["Element"] = field(default_factory=list, repr=False)

    def append_child(self, child: "Element") -> "Element":
        if child.parent is not None:
            child.parent.remove_child(child)
        child.parent = self
        self.children.append(child)
        return child

    def remove_child(self, child: "Element") -> None:
        self.children.remove(child)
        child.parent = None

    @property
    def next_element_sibling(self) -> Optional["Element"]:
        if self.parent is None:
            return None
        siblings = self.parent.children
        index = siblings.index(self)
        return siblings[index + 1] if index + 1 < len(siblings) else None

    def closest(self, class_name: str) -> Optional["Element"]:
        node: Optional[Element] = self
        while node is not None:
            if class_name in node.class_list:
                return node
            node = node.parent
        return None

    def iter_descendants(self) -> Iterator["Element"]:
        for child in self.children:
            yield child
            yield from child.iter_descendants()


class Document:
    def __init__(self, body: Optional[Element] = None):
        self.body = body if body is not None else Element(tag="body")

    def get_element_by_id(self, element_id: str) -> Optional[Element]:
        if self.body.id == element_id:
            return self.body
        for node in self.body.iter_descendants():
            if node.id == element_id:
                return node
        return None

    def require_element(self, element_id: str) -> Element:
        node = self.get_element_by_id(element_id)
        if node is None:
            raise MissingElementError(element_id)
        return node

    def elements_with_class(self, class_name: str, root: Optional[Element] = None) -> List[Element]:
        scope = root if root is not None else self.body
        return [node for node in scope.iter_descendants() if class_name in node.class_list]

    def elements_with_tag(self, tag: str, root: Optional[Element] = None) -> List[Element]:
        scope = root if root is not None else self.body
        return [node for node in scope.iter_descendants() if node.tag == tag]
