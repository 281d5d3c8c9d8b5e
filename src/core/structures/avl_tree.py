from collections import Counter
from typing import Any, Iterable, Iterator, Optional

from src.core.models.snapshot import NodeView, SnapshotNode, TreeSnapshot


class TraversalOrder:
    IN_ORDER = "in"
    PRE_ORDER = "pre"
    POST_ORDER = "post"

    ALL = (IN_ORDER, PRE_ORDER, POST_ORDER)


class AVLNode:
    """
    Nó interno da Árvore AVL.
    Armazena apenas a chave e a altura da subárvore (folha = 0).
    Não existe referência ao pai: o rebalanceamento sobe pela pilha de chamadas.
    """
    def __init__(self, key):
        self.key = key
        self.left = None
        self.right = None
        self.height = 0         # Filho ausente conta como -1

    def __repr__(self):
        return f"AVLNode(key={self.key!r}, h={self.height})"


class AVLTree:
    """
    Árvore AVL sobre chaves totalmente ordenadas.

    Política de duplicatas: inserir uma chave já existente não altera a árvore
    e retorna False. Após qualquer operação pública as invariantes de ordem (BST),
    de balanceamento (|fb| <= 1) e de altura em cache são válidas.

    Se a comparação entre chaves levantar exceção no meio de uma mutação,
    as invariantes não são garantidas.
    """
    def __init__(self):
        self.root = None
        self._size = 0
        # Quantas vezes cada caso de rotação foi aplicado (LL, RR, LR, RL)
        self.rotation_counts = Counter()

    @classmethod
    def from_iterable(cls, keys: Iterable) -> "AVLTree":
        """Constrói a árvore inserindo as chaves na ordem recebida."""
        tree = cls()
        for key in keys:
            tree.insert(key)
        return tree

    # --- Mutação ---

    def insert(self, key) -> bool:
        """Insere a chave e rebalanceia. Retorna False se a chave já existia."""
        self.root, inserted = self._insert_recursive(self.root, key)
        if inserted:
            self._size += 1
        return inserted

    def remove(self, key) -> bool:
        """Remove a chave se existir, rebalanceando todos os ancestrais."""
        self.root, removed = self._remove_recursive(self.root, key)
        if removed:
            self._size -= 1
        return removed

    def clear(self):
        """Descarta todos os nós iterativamente (sem limite de recursão)."""
        stack = [self.root] if self.root else []
        while stack:
            node = stack.pop()
            if node.left:
                stack.append(node.left)
            if node.right:
                stack.append(node.right)
            node.left = None
            node.right = None
        self.root = None
        self._size = 0

    def _insert_recursive(self, node, key):
        # 1. Inserção normal de BST
        if not node:
            return AVLNode(key), True

        if key < node.key:
            node.left, inserted = self._insert_recursive(node.left, key)
        elif key > node.key:
            node.right, inserted = self._insert_recursive(node.right, key)
        else:
            # Chave duplicada: nada muda
            return node, False

        if not inserted:
            return node, False

        # 2. Atualizar altura e rebalancear este nó na volta da recursão
        return self._rebalance(node), True

    def _remove_recursive(self, node, key):
        if not node:
            return None, False

        if key < node.key:
            node.left, removed = self._remove_recursive(node.left, key)
        elif key > node.key:
            node.right, removed = self._remove_recursive(node.right, key)
        else:
            removed = True
            if not node.left:
                return node.right, True
            if not node.right:
                return node.left, True

            # Dois filhos: copia o sucessor in-order e o remove da subárvore direita
            successor = node.right
            while successor.left:
                successor = successor.left
            node.key = successor.key
            node.right, _ = self._remove_recursive(node.right, successor.key)

        if not removed:
            return node, False

        # Na remoção o rebalanceamento pode ocorrer em todos os níveis
        return self._rebalance(node), True

    # --- Métodos Auxiliares e Rotações ---

    def _get_height(self, node):
        if not node:
            return -1
        return node.height

    def _update_height(self, node):
        node.height = 1 + max(self._get_height(node.left), self._get_height(node.right))

    def _get_balance(self, node):
        if not node:
            return 0
        return self._get_height(node.left) - self._get_height(node.right)

    def _rebalance(self, node):
        """
        Recalcula a altura do nó e aplica um dos quatro casos de rotação,
        escolhido pelo fator de balanceamento do nó e do filho mais alto.
        Retorna a nova raiz da subárvore.
        """
        self._update_height(node)
        balance = self._get_balance(node)

        if balance > 1:
            # Caso Left-Right: filho esquerdo pesado à direita
            if self._get_balance(node.left) < 0:
                node.left = self._rotate_left(node.left)
                self.rotation_counts["LR"] += 1
            else:
                self.rotation_counts["LL"] += 1
            return self._rotate_right(node)

        if balance < -1:
            # Caso Right-Left: filho direito pesado à esquerda
            if self._get_balance(node.right) > 0:
                node.right = self._rotate_right(node.right)
                self.rotation_counts["RL"] += 1
            else:
                self.rotation_counts["RR"] += 1
            return self._rotate_left(node)

        return node

    def _rotate_left(self, z):
        """
        Rotação simples à esquerda.
        Usada quando o peso está na direita (Right-Right).
        """
        y = z.right
        T2 = y.left

        y.left = z
        z.right = T2

        # z primeiro: a altura de y depende da nova altura de z
        self._update_height(z)
        self._update_height(y)

        return y

    def _rotate_right(self, z):
        """
        Rotação simples à direita.
        Usada quando o peso está na esquerda (Left-Left).
        """
        y = z.left
        T3 = y.right

        y.right = z
        z.left = T3

        self._update_height(z)
        self._update_height(y)

        return y

    # --- Consultas ---

    def contains(self, key) -> bool:
        return self._find_node(key) is not None

    def __contains__(self, key) -> bool:
        return self.contains(key)

    def find(self, key) -> Optional[NodeView]:
        """Busca em O(log n). Retorna uma visão somente-leitura do nó ou None."""
        node = self._find_node(key)
        return NodeView(node) if node else None

    def _find_node(self, key):
        current = self.root
        while current:
            if key == current.key:
                return current
            elif key < current.key:
                current = current.left
            else:
                current = current.right
        return None

    def min(self) -> Optional[Any]:
        if not self.root:
            return None
        current = self.root
        while current.left:
            current = current.left
        return current.key

    def max(self) -> Optional[Any]:
        if not self.root:
            return None
        current = self.root
        while current.right:
            current = current.right
        return current.key

    def height(self) -> int:
        """Altura da árvore; -1 se vazia."""
        return self._get_height(self.root)

    def size(self) -> int:
        return self._size

    def __len__(self):
        return self._size

    def is_empty(self) -> bool:
        return self.root is None

    # --- Travessias ---

    def traverse(self, order: str = TraversalOrder.IN_ORDER) -> Iterator:
        """
        Retorna um iterador novo sobre as chaves na ordem pedida
        ("in", "pre" ou "post"). Cada chamada recomeça do início.
        """
        if order not in TraversalOrder.ALL:
            raise ValueError(f"Ordem de travessia desconhecida: {order!r}")
        return (node.key for node in self._walk(order))

    def __iter__(self):
        return self.traverse(TraversalOrder.IN_ORDER)

    def node_iter(self) -> Iterator[NodeView]:
        """Visões dos nós em ordem crescente de chave."""
        return (NodeView(node) for node in self._walk(TraversalOrder.IN_ORDER))

    def _walk(self, order):
        if order == TraversalOrder.IN_ORDER:
            return self._in_order(self.root)
        if order == TraversalOrder.PRE_ORDER:
            return self._pre_order(self.root)
        return self._post_order(self.root)

    def _in_order(self, node):
        stack = []
        current = node
        while stack or current:
            while current:
                stack.append(current)
                current = current.left
            current = stack.pop()
            yield current
            current = current.right

    def _pre_order(self, node):
        stack = [node] if node else []
        while stack:
            current = stack.pop()
            yield current
            if current.right:
                stack.append(current.right)
            if current.left:
                stack.append(current.left)

    def _post_order(self, node):
        # Pilha com marcação de "filhos já visitados"
        stack = [(node, False)] if node else []
        while stack:
            current, expanded = stack.pop()
            if expanded:
                yield current
                continue
            stack.append((current, True))
            if current.right:
                stack.append((current.right, False))
            if current.left:
                stack.append((current.left, False))

    # --- Exportação ---

    def snapshot(self, label: Optional[str] = None) -> TreeSnapshot:
        """Cópia congelada da estrutura atual, usada pelos exportadores."""
        return TreeSnapshot(
            root=self._freeze(self.root),
            size=self._size,
            height=self.height(),
            label=label,
        )

    def _freeze(self, node) -> Optional[SnapshotNode]:
        if not node:
            return None
        return SnapshotNode(
            key=node.key,
            height=node.height,
            left=self._freeze(node.left),
            right=self._freeze(node.right),
        )

    def __repr__(self):
        return f"AVLTree(size={self._size}, height={self.height()})"
