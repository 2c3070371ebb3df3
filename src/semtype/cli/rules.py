"""
Rule table commands - inspect and check the built-in rules.

Commands:
    rules   Print the ordered field (or table) rules
    check   Run the startup checks and exit non-zero on violations
    types   Show where a tag sits in the type hierarchy
"""
import sys

import click
from rich.table import Table

from semtype.classify import (
    FIELD_RULES,
    TABLE_NAME_RULES,
    ENGINE_ENTITY_TYPES,
    GENERIC_TABLE,
    collect_violations,
)
from semtype.cli.console import console
from semtype.types import TYPES


@click.command('rules')
@click.option('--tables', is_flag=True, help='Show table name rules instead of field rules')
def rules_command(tables: bool):
    """Print rules in priority order (first match wins)."""
    if tables:
        table = Table(title="Table name rules", header_style="bold")
        table.add_column("#", justify="right")
        table.add_column("Pattern", style="pattern")
        table.add_column("Entity type", style="type")
        for i, rule in enumerate(TABLE_NAME_RULES, 1):
            table.add_row(str(i), rule.pattern, rule.entity_type)
        console.print(table)

        console.print("\n[bold]Fallback by engine:[/]")
        for engine, entity_type in ENGINE_ENTITY_TYPES.items():
            console.print(f"  {engine} -> [type]{entity_type}[/]")
        console.print(f"  otherwise -> [type]{GENERIC_TABLE}[/]")
        return

    table = Table(title="Field rules", header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Pattern", style="pattern")
    table.add_column("Storage types")
    table.add_column("Semantic type", style="type")
    table.add_row("-", "id (exact)", "any", "type/PK")
    for i, rule in enumerate(FIELD_RULES, 1):
        storage = ", ".join(sorted(rule.storage_types)) if rule.storage_types is not None else "any"
        table.add_row(str(i), rule.pattern, storage, rule.semantic_type)
    console.print(table)


@click.command('check')
def check_command():
    """Validate the type hierarchy and rule tables."""
    violations = collect_violations()
    if not violations:
        console.print(f"[success]OK[/] - {len(TYPES)} types, "
                      f"{len(FIELD_RULES)} field rules, {len(TABLE_NAME_RULES)} table rules")
        return

    console.print(f"[error]{len(violations)} violation(s):[/]")
    for v in violations:
        console.print(f"  - {v}")
    sys.exit(1)


@click.command('types')
@click.argument('tag')
def types_command(tag: str):
    """Show parents and ancestors of TAG (e.g. type/Latitude)."""
    if not TYPES.is_registered(tag):
        console.print(f"[error]Unknown type {tag}[/]")
        sys.exit(1)

    parents = TYPES.parents(tag)
    console.print(f"[highlight]{tag}[/]")
    console.print(f"  Parents:   {', '.join(parents) if parents else '[muted]none[/]'}")
    ancestors = sorted(TYPES.ancestors(tag))
    console.print(f"  Ancestors: {', '.join(ancestors) if ancestors else '[muted]none[/]'}")
