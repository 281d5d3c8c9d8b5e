from typing import Iterable, List, Optional

from src.core.algorithms.invariants import AVLInvariantChecker
from src.core.models.snapshot import TreeSnapshot
from src.core.persistence.manager import SnapshotWriter
from src.core.structures.avl_tree import AVLTree


class InvariantViolationError(AssertionError):
    """A árvore saiu de uma operação pública com invariantes quebradas."""
    def __init__(self, label: str, violations: List[str]):
        super().__init__(f"{label}: " + "; ".join(violations))
        self.label = label
        self.violations = violations


class TreeSession:
    """
    O Maestro da visualização.
    Alimenta a AVL com os valores na ordem dada e captura snapshots
    após cada operação (modo intermediário) ou só ao final.
    """
    MAX_LOGS = 50

    def __init__(self, verbose: bool = True, self_check: bool = False):
        self.tree = AVLTree()
        self.snapshots: List[TreeSnapshot] = []
        self.verbose = verbose
        self.self_check = self_check
        self.logs: List[str] = []

    def insert_all(self, values: Iterable, intermediates: bool = False) -> List[TreeSnapshot]:
        """
        Insere os valores em ordem. Retorna apenas os snapshots capturados nesta chamada.
        Sem modo intermediário, captura um único snapshot no final (mesmo sem valores).
        """
        captured = []
        for value in values:
            if self.tree.insert(value):
                self.log(f"Inserido {value!r} (altura {self.tree.height()})")
            else:
                self.log(f"Valor {value!r} já existe, ignorado.")
            if intermediates:
                captured.append(self.checkpoint(f"insert {value!r}"))

        if not intermediates:
            captured.append(self.checkpoint("final"))
        return captured

    def remove_all(self, values: Iterable, intermediates: bool = False) -> List[TreeSnapshot]:
        captured = []
        removed_any = False
        for value in values:
            removed_any = True
            if self.tree.remove(value):
                self.log(f"Removido {value!r} (altura {self.tree.height()})")
            else:
                self.log(f"Valor {value!r} não encontrado.")
            if intermediates:
                captured.append(self.checkpoint(f"remove {value!r}"))

        if removed_any and not intermediates:
            captured.append(self.checkpoint("final"))
        return captured

    def checkpoint(self, label: Optional[str] = None) -> TreeSnapshot:
        snapshot = self.tree.snapshot(label)
        if self.self_check:
            violations = AVLInvariantChecker(snapshot).check()
            if violations:
                self.log(f"[Invariante] {len(violations)} violação(ões) em '{label}'")
                raise InvariantViolationError(label or "checkpoint", violations)
        self.snapshots.append(snapshot)
        return snapshot

    def final_snapshots(self, intermediates: bool) -> List[TreeSnapshot]:
        """
        Snapshots a exportar: todos no modo intermediário,
        senão apenas o último estado da árvore.
        """
        if intermediates:
            return list(self.snapshots)
        return self.snapshots[-1:]

    def export(self, writer: SnapshotWriter, output_type: str, intermediates: bool = False) -> List[str]:
        snapshots = self.final_snapshots(intermediates)
        paths = writer.write(snapshots, output_type)
        self.log(f"{len(paths)} arquivo(s) gerado(s) em {writer.output_dir}")
        return paths

    def log(self, msg: str):
        if self.verbose:
            print(msg)
        self.logs.append(msg)
        # Mantém apenas as últimas mensagens na memória
        if len(self.logs) > self.MAX_LOGS:
            self.logs.pop(0)
