from dataclasses import dataclass, field, fields
from typing import Dict, Any
import yaml
from pathlib import Path

from depot_inventory.config.database import DATABASE_CONFIG
from depot_inventory.core.exceptions import ImportConfigError

@dataclass
class ImporterConfig:
    """Configuration for importers and the confirm step."""
    chunk_size: int = 500
    preview_size: int = 5
    log_level: str = "INFO"

@dataclass
class ExportConfig:
    """Export rendering options."""
    currency: str = "MAD"

@dataclass
class FilePathConfig:
    """File path configuration."""
    input_dir: str = "data/input"
    output_dir: str = "data/output"
    log_dir: str = "logs"

@dataclass
class ApplicationConfig:
    """Main application configuration."""
    importer: ImporterConfig = field(default_factory=ImporterConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    file_paths: FilePathConfig = field(default_factory=FilePathConfig)
    database: Dict[str, Any] = field(default_factory=dict)

SECTIONS = {
    'importer': ImporterConfig,
    'export': ExportConfig,
    'file_paths': FilePathConfig,
}

def _build_section(name: str, section_cls, data: Any):
    if data is None:
        return section_cls()
    if not isinstance(data, dict):
        raise ImportConfigError(f"Section '{name}' must be a mapping")

    known = {f.name for f in fields(section_cls)}
    unknown = set(data) - known
    if unknown:
        raise ImportConfigError(f"Unknown keys in section '{name}': {sorted(unknown)}")
    return section_cls(**data)

def load_config(config_path: str = "config/settings.yaml") -> ApplicationConfig:
    """Load configuration from YAML; database settings always come from the environment."""
    if not Path(config_path).exists():
        config = ApplicationConfig()
        config.database = dict(DATABASE_CONFIG)
        return config

    with open(config_path, 'r') as f:
        try:
            config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ImportConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(config_data, dict):
        raise ImportConfigError(f"{config_path} must contain a mapping")

    # Connection settings are never read from the YAML file
    config_data.pop('database', None)

    unknown = set(config_data) - set(SECTIONS)
    if unknown:
        raise ImportConfigError(f"Unknown configuration sections: {sorted(unknown)}")

    config = ApplicationConfig(**{
        name: _build_section(name, section_cls, config_data.get(name))
        for name, section_cls in SECTIONS.items()
    })
    config.database = dict(DATABASE_CONFIG)
    return config
