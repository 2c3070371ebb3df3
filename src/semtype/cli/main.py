#!/usr/bin/env python3
"""
semtype CLI - inspect and try out the name-based classifiers

Commands:
    rules   Print the ordered rule tables
    check   Validate the rule tables and type hierarchy
    types   Show ancestors of a type tag
    field   Classify a field name + storage type
    table   Classify a table name (optionally with its engine)
"""
import logging
import sys

import click

from semtype.classify import run_startup_checks
from semtype.cli.console import console
from semtype.errors import RuleConfigError
from semtype.cli.classify import field_command, table_command
from semtype.cli.rules import rules_command, check_command, types_command


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Show classifier debug logging')
def cli(verbose: bool):
    """semtype - name-based semantic type inference"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    # Rule tables are only checked outside production (SEMTYPE_RUN_MODE=dev|test)
    try:
        run_startup_checks()
    except RuleConfigError as e:
        console.print(f"[error]{len(e.violations)} rule configuration violation(s):[/]")
        for v in e.violations:
            console.print(f"  - {v}")
        sys.exit(1)


cli.add_command(rules_command)
cli.add_command(check_command)
cli.add_command(types_command)
cli.add_command(field_command)
cli.add_command(table_command)


if __name__ == '__main__':
    cli()
