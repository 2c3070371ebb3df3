"""Test table entity type classification."""
import logging
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import Mock

import pytest
from semtype.classify import (
    classify_field,
    classify_table,
    TableNameRule,
    TABLE_NAME_RULES,
    GENERIC_TABLE,
)
from semtype.classify.tables import entity_type_for_name, entity_type_for_engine
from semtype.errors import InvalidInputError


class TestNameRules:

    def test_orders_any_data_source(self, engines):
        for db_id in (1, 2, 3, 99):
            assert classify_table('orders', db_id, engines) == 'type/TransactionTable'

    def test_case_insensitive(self):
        assert classify_table('ORDERS', 1) == 'type/TransactionTable'
        assert classify_table('Sales_2024', 1) == 'type/TransactionTable'

    def test_substring_match(self):
        assert classify_table('dim_products', 1) == 'type/ProductTable'
        assert classify_table('app_users', 1) == 'type/UserTable'
        assert classify_table('page_events', 1) == 'type/EventTable'
        # "log" is a substring rule, so catalog counts as an event table
        assert classify_table('catalog', 1) == 'type/EventTable'

    def test_first_match_wins(self):
        assert classify_table('user_orders', 1) == 'type/TransactionTable'
        assert classify_table('product_events', 1) == 'type/ProductTable'
        assert classify_table('account_log', 1) == 'type/UserTable'

    def test_custom_rules(self):
        rules = (TableNameRule(r'^stg_', 'type/EventTable'),)
        assert classify_table('stg_orders', 1, rules=rules) == 'type/EventTable'
        assert classify_table('orders_stg_', 1, rules=rules) == GENERIC_TABLE

    def test_name_rule_skips_lookup(self):
        lookup = Mock()
        assert classify_table('orders', 1, lookup) == 'type/TransactionTable'
        lookup.get_engine.assert_not_called()

    def test_entity_type_for_name(self):
        assert entity_type_for_name('people') == 'type/UserTable'
        assert entity_type_for_name('widgets') is None


class TestEngineFallback:

    def test_google_analytics(self, engines):
        assert classify_table('widgets', 2, engines) == 'type/GoogleAnalyticsTable'

    def test_druid(self, engines):
        assert classify_table('widgets', 3, engines) == 'type/EventTable'

    def test_engine_name_case(self, engines):
        assert classify_table('widgets', 4, engines) == 'type/EventTable'

    def test_unmapped_engine(self, engines):
        assert classify_table('widgets', 1, engines) == GENERIC_TABLE
        assert classify_table('widgets', 5, engines) == GENERIC_TABLE

    def test_unknown_data_source(self, engines):
        assert classify_table('widgets', 404, engines) == GENERIC_TABLE

    def test_no_lookup(self):
        assert classify_table('widgets', 2) == GENERIC_TABLE

    def test_lookup_called_with_data_source_id(self):
        lookup = Mock()
        lookup.get_engine.return_value = 'druid'
        assert classify_table('widgets', 'db-7', lookup) == 'type/EventTable'
        lookup.get_engine.assert_called_once_with('db-7')

    def test_custom_engine_map(self, engines):
        engine_map = {'postgres': 'type/ProductTable'}
        assert classify_table('widgets', 1, engines, engine_map=engine_map) == 'type/ProductTable'
        assert classify_table('widgets', 2, engines, engine_map=engine_map) == GENERIC_TABLE


class TestLookupFailure:

    def test_lookup_error_falls_back_to_generic(self, caplog):
        lookup = Mock()
        lookup.get_engine.side_effect = ConnectionError("catalog unreachable")
        with caplog.at_level(logging.WARNING, logger='semtype'):
            assert classify_table('widgets', 3, lookup) == GENERIC_TABLE
        assert "Engine lookup failed for data source 3" in caplog.text
        assert "catalog unreachable" in caplog.text

    def test_entity_type_for_engine_swallows_errors(self):
        lookup = Mock()
        lookup.get_engine.side_effect = KeyError(3)
        assert entity_type_for_engine(3, lookup) is None

    def test_empty_engine(self):
        lookup = Mock()
        lookup.get_engine.return_value = ''
        assert classify_table('widgets', 3, lookup) == GENERIC_TABLE


class TestInvalidInput:

    @pytest.mark.parametrize("name", ["", "  ", None])
    def test_blank_name(self, name, engines):
        with pytest.raises(InvalidInputError):
            classify_table(name, 1, engines)


class TestPurity:

    def test_idempotent(self, engines):
        names = ['orders', 'widgets', 'catalog', 'People']
        first = [classify_table(n, 2, engines) for n in names]
        second = [classify_table(n, 2, engines) for n in names]
        assert first == second == [
            'type/TransactionTable', 'type/GoogleAnalyticsTable', 'type/EventTable', 'type/UserTable'
        ]

    def test_rule_table_order(self):
        assert isinstance(TABLE_NAME_RULES, tuple)
        assert TABLE_NAME_RULES[0] == TableNameRule(r'order', 'type/TransactionTable')
        assert TABLE_NAME_RULES[-1] == TableNameRule(r'log', 'type/EventTable')


@pytest.mark.concurrency
class TestConcurrency:

    def test_parallel_calls_agree(self, engines):
        def work(_):
            return (
                classify_field('user_lat', 'type/Float'),
                classify_field('item_count', 'type/Integer'),
                classify_table('orders', 1, engines),
                classify_table('widgets', 2, engines),
            )

        with ThreadPoolExecutor(max_workers=16) as pool:
            results = list(pool.map(work, range(500)))

        assert set(results) == {(
            'type/Latitude', 'type/Quantity', 'type/TransactionTable', 'type/GoogleAnalyticsTable'
        )}
