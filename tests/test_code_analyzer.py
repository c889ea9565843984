"""Tests for the lexical code analyzer."""

import pytest

from spapi_mcp.migration.code_analyzer import analyze_code, contains_word, longest_first_pattern
from spapi_mcp.migration.models import CodeAnalysis


class TestWordMatching:

    def test_whole_word(self):
        assert contains_word("api.getOrder(id)", "getOrder")

    def test_no_partial_match(self):
        assert not contains_word("api.getOrderX(id)", "getOrder")
        assert not contains_word("mygetOrder(id)", "getOrder")

    def test_dots_are_literal(self):
        assert contains_word("order.BuyerInfo.BuyerEmail", "BuyerInfo.BuyerEmail")
        assert not contains_word("order.BuyerInfoXBuyerEmail", "BuyerInfo.BuyerEmail")

    def test_longest_name_wins(self):
        pattern = longest_first_pattern(("A.B", "A.B.C"))
        assert pattern.findall("x.A.B.C; y.A.B;") == ["A.B.C", "A.B"]


class TestMethodDetection:

    def test_unavailable_method_produces_endpoint_and_breaking_change(self, migration_data):
        for method, mapping in migration_data.unavailable_methods():
            analysis = analyze_code(f"await client.{method}(orderId);", migration_data)
            names = [e.method for e in analysis.deprecated_endpoints]
            assert names.count(method) == 1
            assert any(method in c.change and c.explanation == mapping.notes
                       for c in analysis.breaking_changes)

    def test_available_method_not_deprecated(self, migration_data):
        analysis = analyze_code("client.cancelOrder(id)", migration_data)
        assert analysis.methods_found == ["cancelOrder"]
        assert analysis.deprecated_endpoints == []
        assert analysis.breaking_changes == []

    def test_methods_in_table_order(self, migration_data):
        source = "client.cancelOrder(a); client.getOrderItems(b); client.getOrders(c);"
        analysis = analyze_code(source, migration_data)
        assert analysis.methods_found == ["getOrders", "getOrderItems", "cancelOrder"]

    def test_method_counted_once(self, migration_data):
        source = "getOrderBuyerInfo(a); getOrderBuyerInfo(b);"
        analysis = analyze_code(source, migration_data)
        assert analysis.methods_found == ["getOrderBuyerInfo"]
        assert len(analysis.deprecated_endpoints) == 1

    def test_breaking_change_summary(self, migration_data):
        analysis = analyze_code("getOrderBuyerInfo(orderId)", migration_data)
        change = analysis.breaking_changes[0]
        assert change.change == "getOrderBuyerInfo has no replacement in orders-2026-01-01"


class TestAttributeDetection:

    def test_deprecated_attribute(self, migration_data):
        analysis = analyze_code("if (order.IsSoldByAB) {}", migration_data)
        assert [c.change for c in analysis.breaking_changes] == ["Deprecated attribute: IsSoldByAB"]
        assert "no replacement" in analysis.breaking_changes[0].explanation

    def test_every_mapping_pair_detected(self, migration_data):
        for source, target in migration_data.attribute_mapping.items():
            analysis = analyze_code(f"value = order.{source};", migration_data)
            pairs = [(m.source, m.target) for m in analysis.attribute_mappings]
            assert (source, target) in pairs

    def test_extended_key_not_reported_as_its_prefix(self, migration_data):
        analysis = analyze_code(
            "url = item.ItemBuyerInfo.BuyerCustomizedInfo.CustomizedURL;", migration_data
        )
        assert [m.source for m in analysis.attribute_mappings] == [
            "ItemBuyerInfo.BuyerCustomizedInfo.CustomizedURL"
        ]

    def test_prefix_key_on_its_own(self, migration_data):
        analysis = analyze_code("info = item.ItemBuyerInfo.BuyerCustomizedInfo;", migration_data)
        assert [m.source for m in analysis.attribute_mappings] == [
            "ItemBuyerInfo.BuyerCustomizedInfo"
        ]

    def test_mapping_note(self, migration_data):
        analysis = analyze_code("order.AmazonOrderId", migration_data)
        found = analysis.attribute_mappings[0]
        assert found.source == "AmazonOrderId"
        assert found.target == "Order.orderId"
        assert found.note == "Mapped from AmazonOrderId to Order.orderId"

    def test_substring_not_matched(self, migration_data):
        analysis = analyze_code("const myAmazonOrderIdList = [];", migration_data)
        assert analysis.attribute_mappings == []


class TestAnalysisResult:

    def test_empty_source(self, migration_data):
        analysis = analyze_code("", migration_data)
        assert analysis == CodeAnalysis()

    @pytest.mark.parametrize("source", [
        "getOrderBuyerInfo(orderId); order.IsPrime; order.OrderChannel; getOrders();",
        "nothing to see here",
    ])
    def test_idempotent(self, migration_data, source):
        assert analyze_code(source, migration_data) == analyze_code(source, migration_data)
