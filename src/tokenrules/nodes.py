from typing import Any, Callable, Iterator, List, Protocol, runtime_checkable


@runtime_checkable
class ResultNode(Protocol):
    """What the matcher needs from a node: append one item, give them back in order."""

    def append(self, item: Any) -> None: ...

    def __iter__(self) -> Iterator[Any]: ...


class Node:
    """
    Labelled tree node, for grammars that want more than nested lists.

    Use ``Grammar(node_factory=node_factory("expr"))`` and relabel in the
    actions, e.g. ``lambda node, name: node.relabel(name)``.
    """

    __slots__ = ("kind", "children")

    def __init__(self, kind: str = "", children=None):
        self.kind = kind
        self.children: List[Any] = list(children) if children is not None else []

    def append(self, item: Any) -> None:
        self.children.append(item)

    def relabel(self, kind: str) -> "Node":
        self.kind = kind
        return self

    def __iter__(self) -> Iterator[Any]:
        return iter(self.children)

    def __len__(self) -> int:
        return len(self.children)

    def __getitem__(self, index):
        return self.children[index]

    def __eq__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        return self.kind == other.kind and self.children == other.children

    def __repr__(self) -> str:
        return f"Node({self.kind!r}, {self.children!r})"


def node_factory(kind: str = "") -> Callable[[], Node]:
    return lambda: Node(kind)
