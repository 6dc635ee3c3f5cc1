import copy
import re
from datetime import datetime, timedelta, timezone

import pytest
from bson import ObjectId

from depot_inventory.core.exceptions import StoreAccessError
from depot_inventory.db.core import DB
from depot_inventory.models.product import Product, ProductMetadata
from depot_inventory.services.product_service import ProductService


def _matches(document, query):
    for key, condition in query.items():
        if key == "$or":
            if not any(_matches(document, sub) for sub in condition):
                return False
            continue

        value = document.get(key)
        if isinstance(condition, dict) and "$regex" in condition:
            flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
            if not isinstance(value, str) or not re.search(condition["$regex"], value, flags):
                return False
        elif isinstance(condition, dict) and "$in" in condition:
            if value not in condition["$in"]:
                return False
        elif value != condition:
            return False
    return True


def _evaluate(document, expression):
    if isinstance(expression, str) and expression.startswith("$"):
        return document.get(expression[1:])
    if isinstance(expression, dict):
        (operator, args), = expression.items()
        if operator == "$multiply":
            result = 1
            for arg in args:
                result *= _evaluate(document, arg)
            return result
        if operator == "$lte":
            left, right = (_evaluate(document, arg) for arg in args)
            return left <= right
        if operator == "$cond":
            condition, if_true, if_false = args
            return if_true if _evaluate(document, condition) else if_false
        raise NotImplementedError(operator)
    return expression


class FakeDB:
    """In-memory stand-in for ``DB`` covering the queries the service issues."""

    toObjectId = staticmethod(DB.toObjectId)

    def __init__(self, fail=False):
        self.collections = {}
        self.fail = fail

    def _collection(self, name):
        if self.fail:
            raise StoreAccessError("store unavailable")
        return self.collections.setdefault(name, [])

    def listRecords(self, collection, query=None, sort=None):
        documents = [copy.deepcopy(d) for d in self._collection(collection) if _matches(d, query or {})]
        for field, direction in reversed(list((sort or {}).items())):
            documents.sort(key=lambda d: d.get(field), reverse=direction < 0)
        return documents

    def listOne(self, collection, query):
        found = self.listRecords(collection, query)
        return found[0] if found else None

    def findById(self, collection, record_id):
        return self.listOne(collection, {"_id": self.toObjectId(record_id)})

    def insertRecord(self, collection, data):
        document = copy.deepcopy(data)
        document["_id"] = ObjectId()
        self._collection(collection).append(document)
        return str(document["_id"])

    def bulkInsertRecords(self, collection, data_list):
        return [self.insertRecord(collection, data) for data in data_list]

    def updateRecord(self, collection, record_id, data):
        oid = self.toObjectId(record_id)
        for document in self._collection(collection):
            if document["_id"] == oid:
                document.update(copy.deepcopy(data))
                return copy.deepcopy(document)
        return None

    def deleteRecord(self, collection, record_id):
        oid = self.toObjectId(record_id)
        documents = self._collection(collection)
        for index, document in enumerate(documents):
            if document["_id"] == oid:
                del documents[index]
                return True
        return False

    def aggregate(self, collection, pipeline):
        (stage,) = pipeline
        group_stage = stage["$group"]
        groups = {}
        for document in self._collection(collection):
            key = _evaluate(document, group_stage["_id"])
            group = groups.setdefault(key, {"_id": key, **{name: 0 for name in group_stage if name != "_id"}})
            for name, accumulator in group_stage.items():
                if name != "_id":
                    group[name] += _evaluate(document, accumulator["$sum"])
        return list(groups.values())

    def distinct(self, collection, field):
        return sorted({d.get(field) for d in self._collection(collection) if d.get(field) is not None})


@pytest.fixture
def fake_db():
    return FakeDB()


@pytest.fixture
def service(fake_db):
    return ProductService(fake_db, config={'chunk_size': 2})


@pytest.fixture
def product_data():
    return {
        'nom': 'Chaise',
        'categorie': 'Mobilier',
        'quantite': 12,
        'prixUnitaire': 45.5,
        'seuilAlerte': 5,
        'metadata': {'fournisseur': 'Ikea', 'emplacement': 'A1'},
    }


@pytest.fixture
def scenario_products():
    return [
        Product(name="A", category="X", quantity=5, unit_price=10, alert_threshold=10),
        Product(name="B", category="X", quantity=20, unit_price=2, alert_threshold=5),
    ]


@pytest.fixture
def catalogue():
    created = datetime(2024, 3, 15, 10, 30, tzinfo=timezone.utc)
    return [
        Product(
            name="Chaise, pliante", category="Mobilier", quantity=3, unit_price=25.0,
            alert_threshold=5, id="65f1c0ffee0000000000a001",
            metadata=ProductMetadata(supplier="Ikea", reference="CH-01", location="A1"),
            created_at=created, updated_at=created,
        ),
        Product(
            name="Bureau", category="Mobilier", quantity=10, unit_price=150.0,
            alert_threshold=2, id="65f1c0ffee0000000000a002",
            created_at=created + timedelta(days=1), updated_at=created + timedelta(days=1),
        ),
        Product(
            name="Souris", category="Informatique", quantity=40, unit_price=12.5,
            alert_threshold=10, id="65f1c0ffee0000000000a003",
            created_at=created + timedelta(days=2), updated_at=created + timedelta(days=2),
        ),
    ]
