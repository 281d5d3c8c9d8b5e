from typing import Dict, List

from src.core.models.snapshot import TreeSnapshot


class DotExporter:
    """
    Gera a descrição em grafo (formato DOT do Graphviz) de um TreeSnapshot.
    Cada nó recebe um identificador gerado (n0, n1, ...) e a chave vai só no
    rótulo, junto com a altura; cada aresta leva o lado (L/R).
    Quando só um filho existe, o outro vira um ponto invisível (p0, p1, ...)
    para manter a distinção esquerda/direita no desenho.
    """
    GRAPH_NAME = "AVLTree"

    @staticmethod
    def _escape(value) -> str:
        return str(value).replace("\\", "\\\\").replace('"', '\\"')

    @classmethod
    def to_dot(cls, snapshot: TreeSnapshot) -> str:
        lines: List[str] = [f"digraph {cls.GRAPH_NAME} {{"]
        if snapshot.label:
            lines.append(f'    label="{cls._escape(snapshot.label)}";')
        lines.append("    node [shape=circle];")

        # Chaves só precisam ser comparáveis: o id vem da identidade do nó
        ids: Dict[int, str] = {}

        def node_id(node) -> str:
            return ids.setdefault(id(node), f"n{len(ids)}")

        placeholder = 0
        for node in snapshot.nodes():
            current = node_id(node)
            label = f'"{cls._escape(node.key)}\\nh={node.height}"'
            lines.append(f"    {current} [label={label}];")

            if node.is_leaf:
                continue
            for side, child in (("L", node.left), ("R", node.right)):
                if child is not None:
                    lines.append(f'    {current} -> {node_id(child)} [label="{side}"];')
                else:
                    # Filho ausente ao lado de um irmão presente
                    null_id = f"p{placeholder}"
                    placeholder += 1
                    lines.append(f"    {null_id} [shape=point, style=invis];")
                    lines.append(f"    {current} -> {null_id} [style=invis];")

        lines.append("}")
        return "\n".join(lines) + "\n"
