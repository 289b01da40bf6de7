"""Tests for the MongoEngine-backed blob store (mongomock)."""

import mongoengine
import mongomock
import pytest

from app.ledger import InvoiceLedger, MemoryBlobStore, MongoBlobStore, create_blob_store
from app.models import StoredBlob


@pytest.fixture
def mongo_store():
    mongoengine.connect("tskauto_test", host="mongodb://localhost", mongo_client_class=mongomock.MongoClient)
    yield MongoBlobStore()
    StoredBlob.drop_collection()
    mongoengine.disconnect()


class TestMongoBlobStore:
    def test_get_missing_returns_none(self, mongo_store):
        assert mongo_store.get("invoiceHistory:nobody") is None

    def test_put_overwrites(self, mongo_store):
        mongo_store.put("k", "[]")
        mongo_store.put("k", '[{"id": "a"}]')
        assert mongo_store.get("k") == '[{"id": "a"}]'
        assert StoredBlob.objects(key="k").count() == 1

    def test_delete(self, mongo_store):
        mongo_store.put("k", "[]")
        mongo_store.delete("k")
        mongo_store.delete("k")
        assert mongo_store.get("k") is None

    def test_ledger_round_trip(self, mongo_store, record_factory):
        ledger = InvoiceLedger(mongo_store, key="invoiceHistory:u1")
        for i in range(3):
            ledger.append(record_factory(i))
        assert InvoiceLedger(mongo_store, key="invoiceHistory:u1").records == ledger.records


class TestCreateBlobStore:
    def test_backends(self):
        assert isinstance(create_blob_store("memory"), MemoryBlobStore)
        assert isinstance(create_blob_store("mongo"), MongoBlobStore)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            create_blob_store("redis")
