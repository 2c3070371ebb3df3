"""
Ad-hoc classification commands - try a field or table name against the rules.
"""
from typing import Optional

import click

from semtype.classify import classify_field, classify_table
from semtype.cli.console import console
from semtype.errors import InvalidInputError
from semtype.storage import StaticEngineLookup


@click.command('field')
@click.argument('name')
@click.option('--type', 'storage_type', required=True, help='Storage type tag, e.g. type/Float')
def field_command(name: str, storage_type: str):
    """Infer the semantic type of a field called NAME."""
    try:
        semantic_type = classify_field(name, storage_type)
    except InvalidInputError as e:
        raise click.BadParameter(str(e), param_hint='NAME')

    if semantic_type:
        console.print(f"{name} ({storage_type}) -> [type]{semantic_type}[/]")
    else:
        console.print(f"{name} ({storage_type}) -> [muted]no semantic type[/]")


@click.command('table')
@click.argument('name')
@click.option('--engine', help='Engine of the owning data source, e.g. druid')
def table_command(name: str, engine: Optional[str]):
    """Infer the entity type of a table called NAME."""
    lookup = StaticEngineLookup({'cli': engine}) if engine else None
    try:
        entity_type = classify_table(name, 'cli', lookup)
    except InvalidInputError as e:
        raise click.BadParameter(str(e), param_hint='NAME')

    console.print(f"{name} -> [type]{entity_type}[/]")
