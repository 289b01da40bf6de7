"""Tests for InvoiceLedger persistence and mutations."""

import json
import logging

import pytest

from app.ledger import InvoiceLedger, InvoiceRecord, MemoryBlobStore, history_key
from app.ledger.ledger import HISTORY_KEY, decode_records, encode_records


@pytest.fixture
def store():
    return MemoryBlobStore()


class TestAppend:
    def test_inserts_at_front_and_persists(self, store, record_factory):
        ledger = InvoiceLedger(store)
        ledger.append(record_factory(1))
        ledger.append(record_factory(2))

        assert [r.id for r in ledger.records] == ["rec-002", "rec-001"]
        persisted = json.loads(store.get(HISTORY_KEY))
        assert [item["id"] for item in persisted] == ["rec-002", "rec-001"]

    def test_caps_at_capacity_dropping_first_inserted(self, store, record_factory):
        ledger = InvoiceLedger(store)
        for i in range(201):
            ledger.append(record_factory(i))

        assert len(ledger) == 200
        ids = [r.id for r in ledger.records]
        assert "rec-000" not in ids
        assert ids[0] == "rec-200"
        assert ids[-1] == "rec-001"
        assert len(json.loads(store.get(HISTORY_KEY))) == 200

    def test_custom_capacity(self, store, record_factory):
        ledger = InvoiceLedger(store, capacity=2)
        for i in range(3):
            ledger.append(record_factory(i))
        assert [r.id for r in ledger.records] == ["rec-002", "rec-001"]

    def test_records_is_a_copy(self, store, record_factory):
        ledger = InvoiceLedger(store)
        ledger.append(record_factory(1))
        ledger.records.clear()
        assert len(ledger) == 1


class TestRemoveAndClear:
    def test_remove_by_id(self, store, record_factory):
        ledger = InvoiceLedger(store)
        for i in range(3):
            ledger.append(record_factory(i))
        ledger.remove("rec-001")

        assert [r.id for r in ledger.records] == ["rec-002", "rec-000"]
        assert [r.id for r in InvoiceLedger(store).records] == ["rec-002", "rec-000"]

    def test_remove_missing_id_is_noop(self, store, record_factory):
        ledger = InvoiceLedger(store)
        ledger.append(record_factory(1))
        before = ledger.records

        ledger.remove("does-not-exist")

        assert ledger.records == before

    def test_clear_deletes_blob(self, store, record_factory):
        ledger = InvoiceLedger(store)
        ledger.append(record_factory(1))
        ledger.clear()

        assert len(ledger) == 0
        assert store.get(HISTORY_KEY) is None

    def test_get(self, store, record_factory):
        ledger = InvoiceLedger(store)
        ledger.append(record_factory(4))
        assert ledger.get("rec-004").customer_name == "Customer 004"
        assert ledger.get("nope") is None


class TestPersistence:
    @pytest.mark.parametrize("count", [0, 1, 17, 200])
    def test_round_trip(self, store, record_factory, count):
        ledger = InvoiceLedger(store)
        for i in range(count):
            ledger.append(record_factory(i, notes=f'line one\n"quoted", {i}'))
        ledger.save()

        assert InvoiceLedger(store).records == ledger.records

    def test_keys_are_isolated(self, store, record_factory):
        alice = InvoiceLedger(store, key=history_key("alice"))
        bob = InvoiceLedger(store, key=history_key("bob"))
        alice.append(record_factory(1))

        assert len(InvoiceLedger(store, key=history_key("alice"))) == 1
        assert len(bob) == 0

    @pytest.mark.parametrize("blob", [
        "{not json",
        '{"id": "x"}',
        '[{"id": "x"}, 42]',
        '"just a string"',
    ])
    def test_malformed_blob_reads_as_empty(self, store, blob, caplog):
        store.put(HISTORY_KEY, blob)
        with caplog.at_level(logging.WARNING, logger="app.ledger.ledger"):
            ledger = InvoiceLedger(store)
        assert len(ledger) == 0
        assert "starting empty" in caplog.text

    def test_missing_fields_are_empty_and_extras_ignored(self):
        records = decode_records(json.dumps([{"id": "a1", "make": "BMW", "kilometers": 1200, "legacy": True}]))
        assert records == [InvoiceRecord(id="a1", make="BMW", kilometers="1200")]

    def test_encode_uses_persisted_field_names(self, record_factory):
        payload = json.loads(encode_records([record_factory(1)]))[0]
        assert payload["totalSellingPrice"] == "120000.00"
        assert payload["chassisNo"] == "AHTYUS9GX04000001"
        assert payload["createdAt"].endswith("Z")
        assert set(payload) == {
            "id", "make", "model", "mmCode", "chassisNo", "engineNo", "registerNo",
            "kilometers", "year", "condition", "color", "licenseNo", "customerName",
            "customerEmail", "customerPhone", "address", "sellingPrice", "vatAmount",
            "totalSellingPrice", "invoiceNumber", "date", "notes", "createdAt",
        }
