import pytest

from depot_inventory.utils.field_normalizer import FieldNormalizer


class TestFieldNormalizer:

    @pytest.mark.parametrize("value, expected", [
        ("12", 12), (" 7 ", 7), ("3.9", 3), ("", None), ("abc", None), (None, None),
    ])
    def test_parse_integer(self, value, expected):
        assert FieldNormalizer.parse_integer(value, default=None) == expected

    def test_parse_numeric(self):
        assert FieldNormalizer.parse_numeric("45.5") == 45.5
        assert FieldNormalizer.parse_numeric("inf", default=None) is None
        assert FieldNormalizer.parse_numeric("x") == 0.0

    def test_is_number(self):
        assert FieldNormalizer.is_number(0)
        assert FieldNormalizer.is_number(2.5)
        assert not FieldNormalizer.is_number(True)
        assert not FieldNormalizer.is_number(float("nan"))
        assert not FieldNormalizer.is_number("1")

    def test_is_number_rejects_integers_beyond_64_bits(self):
        assert FieldNormalizer.is_number(2 ** 63 - 1)
        assert not FieldNormalizer.is_number(2 ** 63)
        assert not FieldNormalizer.is_number(10 ** 400)

    def test_text_normalization(self):
        assert FieldNormalizer.normalize_string("  Chaise ") == "Chaise"
        assert FieldNormalizer.normalize_string(None) == ""
        assert FieldNormalizer.normalize_optional_text("   ") is None
        assert FieldNormalizer.normalize_optional_text(3) is None

    def test_coerce_whole_number(self):
        assert FieldNormalizer.coerce_whole_number(4.0) == 4
        assert isinstance(FieldNormalizer.coerce_whole_number(4.0), int)
        assert FieldNormalizer.coerce_whole_number(4.5) == 4.5
