"""
Linha de comando do visualizador de Árvores AVL.

Exemplo:
    avl-visualizer -t svg -i -o saida 10 20 30 25
"""
import os
import sys

import click

from src.core.persistence.manager import OutputType, SnapshotWriter, SnapshotWriteError
from src.core.simulation.session import InvariantViolationError, TreeSession


@click.command(name="avl-visualizer")
@click.argument("values", nargs=-1, type=int)
@click.option("-v", "--value", "extra_values", multiple=True, type=int,
              help="Valor a inserir (pode repetir).")
@click.option("-i", "--intermediates", is_flag=True,
              help="Gera um arquivo para cada valor inserido.")
@click.option("-o", "--output-directory", type=click.Path(),
              default=None, help="Diretório de saída. Padrão: diretório atual.")
@click.option("-t", "--filetype", required=True,
              type=click.Choice(OutputType.ALL, case_sensitive=False),
              help="Gerar SVG, PDF, PNG ou o dotfile da árvore.")
@click.option("-r", "--remove", "to_remove", multiple=True, type=int,
              help="Valor a remover depois das inserções (pode repetir).")
@click.option("--check", is_flag=True, help="Verifica as invariantes AVL a cada checkpoint.")
@click.option("-q", "--quiet", is_flag=True, help="Não imprime o log da sessão.")
def main(values, extra_values, intermediates, output_directory, filetype, to_remove, check, quiet):
    """Insere VALUES numa Árvore AVL e gera os arquivos de visualização."""
    session = TreeSession(verbose=not quiet, self_check=check)
    writer = SnapshotWriter(output_directory or os.getcwd())

    try:
        session.insert_all(list(values) + list(extra_values), intermediates=intermediates)
        session.remove_all(to_remove, intermediates=intermediates)
        session.export(writer, filetype.lower(), intermediates=intermediates)
    except InvariantViolationError as e:
        click.echo(f"Erro de invariante: {e}", err=True)
        sys.exit(1)
    except SnapshotWriteError as e:
        click.echo(f"Erro de escrita: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
