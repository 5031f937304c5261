"""Tests for the consumption ledger and summary."""

from datetime import date

import pytest

from larder.errors import CategorizationError
from larder.ledger import ConsumptionLedger, ConsumptionSummary, summarize
from larder.models import CategorizedItem, InventoryItem


def _consumed(*names):
    return [
        InventoryItem(id=str(n), name=name, quantity="1", expiry_date=date(2025, 3, 12))
        for n, name in enumerate(names)
    ]


def test_record_appends_without_dedup():
    ledger = ConsumptionLedger()
    ledger.record(_consumed("Broccoli"))
    ledger.record(_consumed("Broccoli", "Yogurt"))
    assert len(ledger) == 3
    assert ledger.names() == ["Broccoli", "Broccoli", "Yogurt"]


def test_summarize_counts_in_first_seen_order():
    summary = summarize(
        [
            CategorizedItem("Broccoli", "Vegetable"),
            CategorizedItem("Chicken", "Meat & Fish"),
            CategorizedItem("Peppers", "Vegetable"),
            CategorizedItem("Yogurt", "Dairy & Eggs"),
        ]
    )
    assert list(summary.counts) == ["Vegetable", "Meat & Fish", "Dairy & Eggs"]
    assert summary.counts["Vegetable"] == 2
    assert summary.total == 4
    assert summary.proportions()["Vegetable"] == 0.5
    assert summary.percentages() == {"Vegetable": 50, "Meat & Fish": 25, "Dairy & Eggs": 25}


def test_empty_summary():
    summary = ConsumptionSummary()
    assert summary.is_empty
    assert summary.proportions() == {}
    assert summary.percentages() == {}


def test_percentages_round_to_whole_numbers():
    summary = ConsumptionSummary({"Fruit": 1, "Vegetable": 2})
    assert summary.percentages() == {"Fruit": 33, "Vegetable": 67}


class TestLedgerSummarize:
    @pytest.mark.asyncio
    async def test_empty_ledger_skips_gateway(self, stub_gateway):
        gateway = stub_gateway()
        summary = await ConsumptionLedger().summarize(gateway)
        assert summary.is_empty
        assert gateway.calls == []

    @pytest.mark.asyncio
    async def test_categorizes_consumed_names(self, stub_gateway):
        gateway = stub_gateway(
            [
                {"name": "Broccoli", "category": "Vegetable"},
                {"name": "Yogurt", "category": "Dairy & Eggs"},
            ]
        )
        ledger = ConsumptionLedger()
        ledger.record(_consumed("Broccoli", "Yogurt"))
        summary = await ledger.summarize(gateway)
        assert summary.counts == {"Vegetable": 1, "Dairy & Eggs": 1}
        assert '["Broccoli", "Yogurt"]' in gateway.calls[0][0]

    @pytest.mark.asyncio
    async def test_gateway_failure_propagates(self, stub_gateway):
        gateway = stub_gateway(error=ConnectionError("offline"))
        ledger = ConsumptionLedger()
        ledger.record(_consumed("Broccoli"))
        with pytest.raises(CategorizationError):
            await ledger.summarize(gateway)
