from pathlib import Path
import logging as lg
from typing import Tuple, List

import click

from tinyisa.common.errors import IsaError
from tinyisa.isa.instructions import Instruction
from tinyisa.isa.grammar import parse_program
from tinyisa.isa.compile import compile_items, listing


def collect_file(filepath: str | Path) -> List[Instruction]:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.debug(f'Collecting file {filepath}')

    try:
        return parse_program(filepath.read_text(encoding='utf-8'))
    except UnicodeDecodeError as e:
        raise click.ClickException(f'{filepath}: not a text file ({e.reason})') from e
    except IsaError as e:
        where = filepath if e.line is None else f'{filepath}:{e.line}'
        raise click.ClickException(f'{where}: {e}') from e


def collect_files(filepaths: list[Path]) -> list[Instruction]:
    program: list[Instruction] = []

    for path in filepaths:
        program.extend(collect_file(path))

    return program


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--hex', 'hexdump', is_flag=True, help='Print a listing of the encoded frames')
@click.argument('sources', nargs=-1, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('binary', type=Path)
def encode(verbose: bool, hexdump: bool, sources: Tuple[Path], binary: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('TINYISA ENC')

    program = collect_files(list(sources))
    bytestr = compile_items(program)

    if hexdump:
        for row in listing(program):
            click.echo(row)

    binary.parent.mkdir(parents=True, exist_ok=True)
    binary.write_bytes(bytestr)
    lg.info(f'{len(program)} instructions, {len(bytestr)} bytes written to {binary}')


if __name__ == '__main__':
    encode()
