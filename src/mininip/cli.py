# -*- encoding: utf-8 -*-
# @File   : cli.py
# @Time   : 2024/10/16 22:18:09
# @Author : Kariko Lin

"""Tiny front end over `mininip.handles`, mostly a usage demo."""

import logging
from contextlib import ExitStack

import click

from .handles import (
    DataHandle,
    create_tree_from_data,
    get_entry,
    get_parser_data,
    new_parser,
    parse_file_into
)
from .ini.values import ValueType


@click.group(context_settings={'help_option_names': ['-h', '--help']})
@click.option('--encoding', default=None,
              help='Encoding of INI files. Guessed when decoding fails.')
@click.option('-v', '--verbose', is_flag=True,
              help='Log what the parser is doing to stderr.')
@click.pass_context
def cli(ctx: click.Context, encoding: str | None, verbose: bool) -> None:
    """Parse INI files and look into them."""
    ctx.ensure_object(dict)
    ctx.obj['encoding'] = encoding
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING,
                        format='[%(asctime)s] %(levelname)s: %(message)s')


def _load(ctx: click.Context, path: str) -> DataHandle:
    parser = new_parser(encoding=ctx.obj['encoding'])
    data = get_parser_data(parser)
    err = parse_file_into(data, path, ctx.obj['encoding'])
    if err:
        click.echo(f'error ({err.kind.name.lower()}): {err.message}', err=True)
        err.release()
        data.release()
        raise SystemExit(2)
    return data


@cli.command('show')
@click.argument('path')
@click.pass_context
def show(ctx: click.Context, path: str) -> None:
    """Print every section and key of PATH with its preferred type."""
    with ExitStack() as stack:
        data = stack.enter_context(_load(ctx, path))
        tree = create_tree_from_data(data)
        if tree is None:
            click.echo('error (runtime): unable to build a tree view', err=True)
            raise SystemExit(2)
        stack.enter_context(tree)
        for section in stack.enter_context(tree.sections()):
            if section.name is None and not len(section):
                continue
            if section.name is not None:
                click.echo(f'[{section.name}]')
            for key in section.keys():
                value = key.value()
                click.echo(
                    f'{key.key} = {key.entry.raw}  ; {value.type.name.lower()}')


@cli.command('get')
@click.argument('path')
@click.argument('key')
@click.option('-s', '--section', default=None,
              help='Section to look into. Global section if omitted.')
@click.option('-t', '--type', 'value_type', default=None,
              type=click.Choice([i.name.lower() for i in ValueType]),
              help='Wanted type. The strongest possible one if omitted.')
@click.pass_context
def get(
    ctx: click.Context, path: str, key: str,
    section: str | None, value_type: str | None
) -> None:
    """Print the value of KEY in PATH."""
    with _load(ctx, path) as data:
        entry = get_entry(
            data, section, key,
            None if value_type is None else ValueType[value_type.upper()])
        if entry is None:
            where = f'[{section}]' if section else 'the global section'
            click.echo(f'"{key}" not found in {where}, '
                       'or not representable as requested.', err=True)
            raise SystemExit(1)
        with entry:
            click.echo(str(entry.value))
