from dataclasses import dataclass
from typing import Any, Iterator, Optional, Tuple


class NodeView:
    """
    Visão somente-leitura de um nó vivo da árvore.
    Não expõe setters: quem consome a visão não consegue alterar a estrutura.
    Reflete a árvore no momento do acesso (use TreeSnapshot para congelar).
    """
    __slots__ = ("_node",)

    def __init__(self, node):
        self._node = node

    @property
    def key(self) -> Any:
        return self._node.key

    @property
    def height(self) -> int:
        return self._node.height

    @property
    def left(self) -> Optional["NodeView"]:
        return NodeView(self._node.left) if self._node.left else None

    @property
    def right(self) -> Optional["NodeView"]:
        return NodeView(self._node.right) if self._node.right else None

    @property
    def balance_factor(self) -> int:
        left_h = self._node.left.height if self._node.left else -1
        right_h = self._node.right.height if self._node.right else -1
        return left_h - right_h

    @property
    def is_leaf(self) -> bool:
        return self._node.left is None and self._node.right is None

    def __eq__(self, other):
        return isinstance(other, NodeView) and other._node is self._node

    def __hash__(self):
        return id(self._node)

    def __repr__(self):
        return f"NodeView(key={self.key!r}, h={self.height})"


@dataclass(frozen=True)
class SnapshotNode:
    key: Any
    height: int
    left: Optional["SnapshotNode"] = None
    right: Optional["SnapshotNode"] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


@dataclass(frozen=True)
class TreeSnapshot:
    """
    Retrato imutável da árvore num checkpoint.
    É tudo o que os exportadores (DOT, imagem) recebem da árvore.
    """
    root: Optional[SnapshotNode]
    size: int
    height: int
    label: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.root is None

    def nodes(self) -> Iterator[SnapshotNode]:
        """Todos os nós em pré-ordem."""
        stack = [self.root] if self.root else []
        while stack:
            node = stack.pop()
            yield node
            if node.right:
                stack.append(node.right)
            if node.left:
                stack.append(node.left)

    def edges(self) -> Iterator[Tuple[Any, Any, str]]:
        """Arestas (chave_pai, chave_filho, lado) com lado "L" ou "R"."""
        for node in self.nodes():
            if node.left:
                yield node.key, node.left.key, "L"
            if node.right:
                yield node.key, node.right.key, "R"
