import os
from typing import List, Optional, Sequence

from src.core.io.dot_exporter import DotExporter
from src.core.io.renderer import TreeRenderer
from src.core.models.snapshot import TreeSnapshot


class OutputType:
    SVG = "svg"
    DOTFILE = "dotfile"
    PDF = "pdf"
    PNG = "png"

    ALL = (SVG, DOTFILE, PDF, PNG)


class SnapshotWriteError(OSError):
    """Falha de escrita de um snapshot; `filepath` indica o arquivo."""
    def __init__(self, filepath: str, reason: Exception):
        super().__init__(f"Falha ao escrever {filepath}: {reason}")
        self.filepath = filepath
        self.reason = reason


class SnapshotWriter:
    """
    Gerenciador de saída dos snapshots:
    um arquivo por checkpoint, numerado na ordem em que foi capturado.
    - dotfile: out-{i} (texto DOT, sem extensão)
    - imagens: out-{i}.svg / .pdf / .png
    """
    FILE_PREFIX = "out"

    def __init__(self, output_dir: Optional[str] = None, renderer: Optional[TreeRenderer] = None):
        self.output_dir = output_dir or os.getcwd()
        self.renderer = renderer or TreeRenderer()

    def path_for(self, index: int, output_type: str) -> str:
        name = f"{self.FILE_PREFIX}-{index}"
        if output_type != OutputType.DOTFILE:
            name = f"{name}.{output_type}"
        return os.path.join(self.output_dir, name)

    def write(self, snapshots: Sequence[TreeSnapshot], output_type: str) -> List[str]:
        """Grava todos os snapshots e retorna os caminhos criados."""
        if output_type not in OutputType.ALL:
            raise ValueError(f"Tipo de saída desconhecido: {output_type!r}")

        # Garante que o diretório existe antes de salvar
        try:
            os.makedirs(self.output_dir, exist_ok=True)
        except OSError as e:
            raise SnapshotWriteError(self.output_dir, e) from e

        written = []
        for index, snapshot in enumerate(snapshots):
            filepath = self.path_for(index, output_type)
            try:
                if output_type == OutputType.DOTFILE:
                    with open(filepath, "w", encoding="utf-8") as f:
                        f.write(DotExporter.to_dot(snapshot))
                else:
                    self.renderer.render(snapshot, filepath, output_type)
            except OSError as e:
                raise SnapshotWriteError(filepath, e) from e
            written.append(filepath)
        return written
