from typing import List

import numpy as np


def avl_height_bound(n: int) -> float:
    """Altura máxima teórica de uma AVL com n chaves: 1.44*log2(n+2) - 0.328."""
    return 1.44 * np.log2(n + 2) - 0.328


class AVLInvariantChecker:
    """
    Verifica as invariantes da árvore (ordem BST, balanceamento AVL e
    altura em cache). Aceita tanto uma AVLTree quanto um TreeSnapshot,
    pois ambos expõem `root` com nós key/height/left/right.

    Qualquer violação é defeito interno, nunca condição recuperável.
    """
    def __init__(self, structure):
        self.root = structure.root
        self.violations: List[str] = []
        self.node_count = 0

    def check(self) -> List[str]:
        self.violations = []
        self.node_count = 0
        self._check_recursive(self.root, None, None)
        return self.violations

    def _check_recursive(self, node, low, high) -> int:
        """Retorna a altura real da subárvore (-1 se vazia)."""
        if node is None:
            return -1
        self.node_count += 1

        # 1. Ordem: low < key < high
        if low is not None and not low < node.key:
            self.violations.append(f"Ordem: {node.key!r} deveria ser maior que {low!r}")
        if high is not None and not node.key < high:
            self.violations.append(f"Ordem: {node.key!r} deveria ser menor que {high!r}")

        left_h = self._check_recursive(node.left, low, node.key)
        right_h = self._check_recursive(node.right, node.key, high)
        real_height = 1 + max(left_h, right_h)

        # 2. Altura em cache
        if node.height != real_height:
            self.violations.append(
                f"Altura: nó {node.key!r} guarda {node.height}, real é {real_height}"
            )

        # 3. Balanceamento
        if abs(left_h - right_h) > 1:
            self.violations.append(
                f"Balanceamento: nó {node.key!r} com fator {left_h - right_h}"
            )

        return real_height

    @classmethod
    def is_valid(cls, structure) -> bool:
        return not cls(structure).check()
