from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import PyMongoError

from depot_inventory.core.exceptions import DatabaseConnectionError, InvalidIdentifierError, StoreAccessError
from depot_inventory.db.core import DB


@pytest.fixture
def client():
    return MagicMock()


class TestDB:

    def test_missing_uri_rejected(self):
        with pytest.raises(DatabaseConnectionError):
            DB({'uri': None})

    def test_context_manager_closes_client(self, client):
        with DB({'dbname': 'test'}, client=client) as db:
            assert db.dbname == 'test'
        client.close.assert_called_once()

    def test_to_object_id(self):
        oid = ObjectId()
        assert DB.toObjectId(str(oid)) == oid
        assert DB.toObjectId(oid) is oid
        with pytest.raises(InvalidIdentifierError):
            DB.toObjectId("123")
        with pytest.raises(InvalidIdentifierError):
            DB.toObjectId(12345)

    def test_driver_error_wrapped(self, client):
        db = DB({}, client=client)
        client.__getitem__.return_value.__getitem__.return_value.find.side_effect = PyMongoError("boom")
        with pytest.raises(StoreAccessError):
            db.listRecords("products")

    def test_delete_reports_count(self, client):
        db = DB({}, client=client)
        collection = client.__getitem__.return_value.__getitem__.return_value
        collection.delete_one.return_value.deleted_count = 0
        assert db.deleteRecord("products", str(ObjectId())) is False

    def test_distinct_sorted_without_none(self, client):
        db = DB({}, client=client)
        collection = client.__getitem__.return_value.__getitem__.return_value
        collection.distinct.return_value = ["Mobilier", None, "Deco"]
        assert db.distinct("products", "categorie") == ["Deco", "Mobilier"]
