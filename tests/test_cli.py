"""Test the semtype CLI commands."""
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from semtype.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestClassifyCommands:

    def test_field(self, runner):
        result = runner.invoke(cli, ['field', 'user_lat', '--type', 'type/Float'])
        assert result.exit_code == 0
        assert "type/Latitude" in result.output

    def test_field_no_match(self, runner):
        result = runner.invoke(cli, ['field', 'user_lat', '--type', 'type/Text'])
        assert result.exit_code == 0
        assert "no semantic type" in result.output

    def test_field_requires_type(self, runner):
        result = runner.invoke(cli, ['field', 'user_lat'])
        assert result.exit_code == 2

    def test_field_blank_name(self, runner):
        result = runner.invoke(cli, ['field', '  ', '--type', 'type/Text'])
        assert result.exit_code == 2

    def test_table_by_name(self, runner):
        result = runner.invoke(cli, ['table', 'orders'])
        assert result.exit_code == 0
        assert "type/TransactionTable" in result.output

    def test_table_by_engine(self, runner):
        result = runner.invoke(cli, ['table', 'widgets', '--engine', 'googleanalytics'])
        assert result.exit_code == 0
        assert "type/GoogleAnalyticsTable" in result.output

    def test_table_generic(self, runner):
        result = runner.invoke(cli, ['table', 'widgets', '--engine', 'postgres'])
        assert result.exit_code == 0
        assert "type/GenericTable" in result.output


class TestRuleCommands:

    def test_rules(self, runner):
        result = runner.invoke(cli, ['rules'])
        assert result.exit_code == 0
        assert "Field rules" in result.output

    def test_table_rules(self, runner):
        result = runner.invoke(cli, ['rules', '--tables'])
        assert result.exit_code == 0
        assert "Table name rules" in result.output
        assert "googleanalytics" in result.output

    def test_check_ok(self, runner):
        result = runner.invoke(cli, ['check'])
        assert result.exit_code == 0
        assert "OK" in result.output

    def test_check_violations(self, runner):
        with patch('semtype.cli.rules.collect_violations', return_value=['bad rule']):
            result = runner.invoke(cli, ['check'])
        assert result.exit_code == 1
        assert "bad rule" in result.output

    def test_types(self, runner):
        result = runner.invoke(cli, ['types', 'type/Latitude'])
        assert result.exit_code == 0
        assert "type/Coordinate" in result.output

    def test_types_unknown(self, runner):
        result = runner.invoke(cli, ['types', 'type/Nope'])
        assert result.exit_code == 1
        assert "Unknown type" in result.output


class TestStartupChecks:

    def test_dev_mode_fails_on_violations(self, runner, monkeypatch):
        monkeypatch.setenv('SEMTYPE_RUN_MODE', 'dev')
        with patch('semtype.classify.validate.collect_violations', return_value=['bad rule']):
            result = runner.invoke(cli, ['field', 'user_lat', '--type', 'type/Float'])
        assert result.exit_code == 1
        assert "bad rule" in result.output
        assert "type/Latitude" not in result.output

    def test_dev_mode_passes_with_built_in_rules(self, runner, monkeypatch):
        monkeypatch.setenv('SEMTYPE_RUN_MODE', 'dev')
        result = runner.invoke(cli, ['field', 'user_lat', '--type', 'type/Float'])
        assert result.exit_code == 0
        assert "type/Latitude" in result.output

    def test_prod_mode_skips_checks(self, runner, monkeypatch):
        monkeypatch.setenv('SEMTYPE_RUN_MODE', 'prod')
        with patch('semtype.classify.validate.collect_violations', return_value=['bad rule']) as collect:
            result = runner.invoke(cli, ['table', 'orders'])
        assert result.exit_code == 0
        collect.assert_not_called()
