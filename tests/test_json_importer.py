"""JSON ingestion tests."""

import json
import sys

import pytest

from depot_inventory.core.validator import QUANTITY_MESSAGE, THRESHOLD_MESSAGE
from depot_inventory.exporters import export_json
from depot_inventory.importers import ingest_json
from depot_inventory.importers.json_importer import (
    PayloadShape, resolve_payload, UNRECOGNIZED_FORMAT_MESSAGE, PARSE_ERROR_PREFIX,
)
from depot_inventory.models.product import Product


class TestResolvePayload:

    def test_bare_array(self):
        resolved = resolve_payload([{'nom': 'A'}])
        assert resolved.shape is PayloadShape.ARRAY
        assert resolved.records == [{'nom': 'A'}]

    def test_wrapped_array(self):
        resolved = resolve_payload({'products': [], 'exportDate': 'x'})
        assert resolved.shape is PayloadShape.WRAPPED

    def test_other_shapes(self):
        assert resolve_payload({'produits': []}) is None
        assert resolve_payload({'products': {}}) is None
        assert resolve_payload("texte") is None


class TestJsonIngestion:

    def test_bare_object_is_wholesale_failure(self):
        result = ingest_json(json.dumps({'nom': 'Chaise'}))
        assert not result.success
        assert result.imported == 0
        assert result.duplicates == 0
        assert result.errors == [UNRECOGNIZED_FORMAT_MESSAGE]
        assert result.preview == []

    def test_malformed_json_is_wholesale_failure(self):
        result = ingest_json('[{"nom": ')
        assert not result.success
        assert len(result.errors) == 1
        assert result.errors[0].startswith(PARSE_ERROR_PREFIX)

    def test_integer_too_large_is_reported(self):
        payload = '[{"nom":"A","categorie":"X","quantite":1' + '0' * 400 + ',"prixUnitaire":1,"seuilAlerte":0}]'
        result = ingest_json(payload)
        assert not result.success
        assert result.imported == 0
        assert result.errors == [f"Produit 1: {QUANTITY_MESSAGE}"]

    def test_integer_beyond_64_bits_is_reported(self, product_data):
        product_data['seuilAlerte'] = 2 ** 63
        result = ingest_json(json.dumps([product_data]))
        assert result.errors == [f"Produit 1: {THRESHOLD_MESSAGE}"]

    @pytest.mark.skipif(not hasattr(sys, "get_int_max_str_digits"),
                        reason="integer digit limit added in Python 3.11")
    def test_integer_over_digit_limit_is_wholesale_failure(self):
        payload = '[{"nom":"A","categorie":"X","quantite":1' + '0' * 5000 + ',"prixUnitaire":1,"seuilAlerte":0}]'
        result = ingest_json(payload)
        assert not result.success
        assert len(result.errors) == 1
        assert result.errors[0].startswith(PARSE_ERROR_PREFIX)

    def test_deeply_nested_json_is_wholesale_failure(self):
        result = ingest_json("[" * 100000 + "]" * 100000)
        assert not result.success
        assert len(result.errors) == 1

    def test_unknown_attributes_dropped_and_text_trimmed(self, product_data):
        product_data.update(nom='  Chaise ', couleur='rouge', image=' ')
        result = ingest_json(json.dumps([product_data]))
        record = result.products[0]
        assert record['nom'] == 'Chaise'
        assert 'couleur' not in record
        assert 'image' not in record

    def test_integral_floats_become_ints(self, product_data):
        product_data.update(quantite=12.0, seuilAlerte=5.0)
        record = ingest_json(json.dumps([product_data])).products[0]
        assert record['quantite'] == 12 and isinstance(record['quantite'], int)

    def test_invalid_item_reported_by_position(self, product_data):
        payload = {'products': [product_data, {'nom': 'Table'}]}
        result = ingest_json(json.dumps(payload))
        assert not result.success
        assert result.imported == 1
        assert len(result.errors) == 1
        assert result.errors[0].startswith("Produit 2: ")

    def test_non_object_item_is_invalid(self):
        result = ingest_json('[42]')
        assert result.errors[0].startswith("Produit 1: ")

    def test_duplicates_counted_not_errors(self, product_data):
        result = ingest_json(json.dumps([product_data, dict(product_data, nom='CHAISE')]),
                             existing_products=[{'nom': 'Bureau'}])
        assert result.success
        assert result.imported == 1
        assert result.duplicates == 1


class TestExportRoundTrip:

    def test_export_then_ingest_keeps_every_product(self, catalogue):
        result = ingest_json(export_json(catalogue))

        assert result.success
        assert result.imported == len(catalogue)
        for record, source in zip(result.products, catalogue):
            product = Product.from_dict(record)
            assert product.total_value == product.quantity * product.unit_price
            assert product.total_value == source.total_value
