"""Validator and partial-update rule tests."""

import pytest

from depot_inventory.core.validator import (
    validate_product, validate_partial,
    NAME_MESSAGE, CATEGORY_MESSAGE, QUANTITY_MESSAGE, PRICE_MESSAGE, THRESHOLD_MESSAGE,
)

REQUIRED = ['nom', 'categorie', 'quantite', 'prixUnitaire', 'seuilAlerte']


class TestValidateProduct:

    def test_valid_record_has_no_errors(self, product_data):
        result = validate_product(product_data)
        assert result.is_valid
        assert result.errors == []

    @pytest.mark.parametrize("missing", REQUIRED)
    def test_missing_field_fails(self, product_data, missing):
        del product_data[missing]
        result = validate_product(product_data)
        assert not result.is_valid
        assert len(result.errors) == 1

    def test_all_violations_collected_in_rule_order(self):
        result = validate_product({})
        assert result.errors == [
            NAME_MESSAGE, CATEGORY_MESSAGE, QUANTITY_MESSAGE, PRICE_MESSAGE, THRESHOLD_MESSAGE,
        ]

    def test_non_mapping_record_fails_every_rule(self):
        assert len(validate_product(["Chaise"]).errors) == 5

    def test_blank_name_rejected(self, product_data):
        product_data['nom'] = "   "
        assert validate_product(product_data).errors == [NAME_MESSAGE]

    def test_zero_price_rejected(self, product_data):
        product_data['prixUnitaire'] = 0
        assert validate_product(product_data).errors == [PRICE_MESSAGE]

    def test_zero_quantity_and_threshold_allowed(self, product_data):
        product_data.update(quantite=0, seuilAlerte=0)
        assert validate_product(product_data).is_valid

    def test_negative_quantity_rejected(self, product_data):
        product_data['quantite'] = -1
        assert validate_product(product_data).errors == [QUANTITY_MESSAGE]

    @pytest.mark.parametrize("value", ["12", True, None, float("nan")])
    def test_non_numeric_quantity_rejected(self, product_data, value):
        product_data['quantite'] = value
        assert QUANTITY_MESSAGE in validate_product(product_data).errors


class TestValidatePartial:

    def test_only_present_fields_checked(self):
        assert validate_partial({'quantite': 3}).is_valid

    def test_present_invalid_field_reported(self):
        result = validate_partial({'prixUnitaire': -2, 'nom': 'Table'})
        assert result.errors == [PRICE_MESSAGE]

    def test_empty_update_is_valid(self):
        assert validate_partial({}).is_valid
