import pytest

from depot_inventory.config.settings import load_config
from depot_inventory.core.exceptions import ImportConfigError


class TestLoadConfig:

    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(str(tmp_path / "absent.yaml"))
        assert config.importer.chunk_size == 500
        assert config.importer.preview_size == 5
        assert config.export.currency == "MAD"
        assert 'dbname' in config.database

    def test_sections_read_from_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("importer:\n  chunk_size: 50\nexport:\n  currency: EUR\n")
        config = load_config(str(path))
        assert config.importer.chunk_size == 50
        assert config.importer.preview_size == 5
        assert config.export.currency == "EUR"

    def test_database_section_ignored(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("database:\n  uri: mongodb://ailleurs\n")
        config = load_config(str(path))
        assert config.database.get('uri') != "mongodb://ailleurs"

    def test_unknown_key_rejected(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("importer:\n  batch: 10\n")
        with pytest.raises(ImportConfigError):
            load_config(str(path))

    def test_unknown_section_rejected(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("exporter: {}\n")
        with pytest.raises(ImportConfigError):
            load_config(str(path))

    def test_invalid_yaml_rejected(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("importer: [unclosed\n")
        with pytest.raises(ImportConfigError):
            load_config(str(path))
