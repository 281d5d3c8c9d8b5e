import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
from typing import List, Tuple

from src.core.models.snapshot import SnapshotNode, TreeSnapshot


class TreeRenderer:
    """
    Desenha um TreeSnapshot com matplotlib e salva em svg, pdf ou png.
    Posição: x = posição in-order da chave, y = profundidade (raiz no topo).
    """
    FORMATS = ("svg", "pdf", "png")
    FIGURE_SIZE = (10, 6)
    NODE_COLOR = "#DCE8FA"

    @staticmethod
    def layout(snapshot: TreeSnapshot) -> List[Tuple[SnapshotNode, float, float]]:
        """
        Calcula (nó, x, y) percorrendo a árvore em ordem.
        Não indexa por chave: chaves só precisam ser comparáveis.
        """
        placed = []
        stack = []
        current = snapshot.root
        depth = 0
        rank = 0
        while stack or current:
            while current:
                stack.append((current, depth))
                current = current.left
                depth += 1
            current, depth = stack.pop()
            placed.append((current, float(rank), float(-depth)))
            rank += 1
            current = current.right
            depth += 1
        return placed

    def render(self, snapshot: TreeSnapshot, filepath: str, fmt: str = "svg"):
        if fmt not in self.FORMATS:
            raise ValueError(f"Formato de imagem não suportado: {fmt!r}")

        fig, ax = plt.subplots(figsize=self.FIGURE_SIZE)
        try:
            ax.set_axis_off()
            if snapshot.label:
                ax.set_title(snapshot.label)

            if snapshot.is_empty:
                ax.text(0.5, 0.5, "(árvore vazia)", ha="center", va="center")
            else:
                self._draw(ax, snapshot)

            fig.savefig(filepath, format=fmt)
        finally:
            plt.close(fig)

    def _draw(self, ax, snapshot: TreeSnapshot):
        placed = self.layout(snapshot)
        positions = {id(node): (x, y) for node, x, y in placed}

        # Arestas primeiro, para ficarem atrás dos círculos
        for node, x0, y0 in placed:
            for child in (node.left, node.right):
                if child is not None:
                    x1, y1 = positions[id(child)]
                    ax.plot([x0, x1], [y0, y1], color="gray", linewidth=1, zorder=1)

        coords = np.array([(x, y) for _node, x, y in placed])
        ax.scatter(coords[:, 0], coords[:, 1], s=600, c=self.NODE_COLOR,
                   edgecolors="black", zorder=2)

        for node, x, y in placed:
            ax.text(x, y, str(node.key), ha="center", va="center", zorder=3)
            ax.text(x, y - 0.3, f"h={node.height}", ha="center", va="top",
                    fontsize=7, color="dimgray", zorder=3)

        # Margem para os rótulos não serem cortados
        ax.set_xlim(coords[:, 0].min() - 1, coords[:, 0].max() + 1)
        ax.set_ylim(coords[:, 1].min() - 1, coords[:, 1].max() + 0.5)
