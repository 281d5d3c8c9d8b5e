import sys
import os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.core.structures.avl_tree import AVLTree
from src.core.algorithms.invariants import AVLInvariantChecker


def test_remove_two_children_uses_successor():
    print("--- Iniciando Teste de Remoção (dois filhos) ---")

    avl = AVLTree.from_iterable([5, 3, 8, 1, 4, 7, 9, 2, 6])
    assert avl.root.key == 5

    assert avl.remove(5) is True

    # O sucessor in-order de 5 é 6
    print(f"Nova raiz: {avl.root.key}")
    assert avl.root.key == 6
    assert avl.size() == 8
    assert list(avl) == [1, 2, 3, 4, 6, 7, 8, 9]
    assert 5 not in avl
    assert AVLInvariantChecker.is_valid(avl)
    print(">> SUCESSO: Sucessor promovido e invariantes preservadas.")


def test_remove_leaf():
    avl = AVLTree.from_iterable([2, 1, 3])

    assert avl.remove(1) is True
    assert avl.root.left is None
    assert avl.root.height == 1
    assert list(avl) == [2, 3]


def test_remove_node_with_one_child():
    avl = AVLTree.from_iterable([2, 1, 3, 4])

    # 3 só tem o filho direito 4: 4 ocupa o lugar de 3
    assert avl.remove(3) is True
    assert avl.root.right.key == 4
    assert avl.root.right.height == 0
    assert AVLInvariantChecker.is_valid(avl)


def test_remove_triggers_rotation():
    avl = AVLTree.from_iterable([2, 1, 3, 4])
    avl.rotation_counts.clear()

    # Sem o 1, o nó 2 fica com fator -2 e o filho 3 pesa à direita
    assert avl.remove(1) is True
    assert avl.rotation_counts == {"RR": 1}
    assert avl.root.key == 3
    assert avl.root.left.key == 2
    assert avl.root.right.key == 4


def test_successive_removals_rotate_at_different_levels():
    # Lado esquerdo mais alto; esvaziar o lado direito gira primeiro
    # na raiz (remoção de 9) e depois em 8 (remoção de 11).
    keys = [8, 5, 11, 3, 7, 10, 12, 2, 4, 6, 9, 1]
    avl = AVLTree.from_iterable(keys)
    assert AVLInvariantChecker.is_valid(avl)

    rotations_per_removal = []
    for key in [9, 10, 12, 11]:
        avl.rotation_counts.clear()
        assert avl.remove(key) is True
        assert AVLInvariantChecker.is_valid(avl), f"Invariante quebrada após remover {key}"
        rotations_per_removal.append(sum(avl.rotation_counts.values()))

    assert rotations_per_removal == [1, 0, 0, 1]
    assert avl.root.key == 5
    assert list(avl) == [1, 2, 3, 4, 5, 6, 7, 8]


def test_single_removal_rotates_at_two_ancestors():
    print("--- Iniciando Teste de Remoção (rotação em cascata) ---")
    # Árvore final: 16(6(1(0,4(,5)),12(7,13)), 23(19,28(,29)))
    avl = AVLTree.from_iterable([28, 23, 16, 6, 19, 13, 0, 7, 29, 12, 4, 1, 5])
    assert avl.root.key == 16
    assert avl.height() == 4
    avl.rotation_counts.clear()

    # 16 é trocado pelo sucessor 19; tirar 19 da direita desbalanceia 23 (RR)
    # e, na volta da recursão, a raiz fica pesada à esquerda (LL)
    assert avl.remove(16) is True

    assert avl.rotation_counts == {"RR": 1, "LL": 1}
    assert AVLInvariantChecker.is_valid(avl)
    assert avl.root.key == 6
    assert avl.root.right.key == 19
    assert avl.root.right.right.key == 28
    assert avl.height() == 3
    assert avl.size() == 12
    assert list(avl) == [0, 1, 4, 5, 6, 7, 12, 13, 19, 23, 28, 29]
    print(">> SUCESSO: Uma remoção rebalanceou dois ancestrais.")


def test_remove_missing_key_is_noop():
    avl = AVLTree.from_iterable([10, 20, 30])
    before = list(avl.traverse("pre"))

    assert avl.remove(99) is False
    assert avl.size() == 3
    assert list(avl.traverse("pre")) == before


def test_insert_then_remove_round_trip():
    avl = AVLTree.from_iterable([50, 20, 70, 10, 30, 60, 80])
    before = list(avl)

    assert avl.insert(35) is True
    assert avl.remove(35) is True

    assert avl.contains(35) is False
    assert list(avl) == before
    assert avl.size() == len(before)


def test_remove_everything():
    avl = AVLTree.from_iterable(range(100))
    for key in range(100):
        assert avl.remove(key) is True
        assert AVLInvariantChecker.is_valid(avl)

    assert avl.is_empty()
    assert avl.height() == -1
    assert avl.size() == 0


if __name__ == "__main__":
    test_remove_two_children_uses_successor()
