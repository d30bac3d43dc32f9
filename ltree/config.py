from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError

SCHEMA_VERSION = 1
DEFAULT_CFG_FILE = "ltree.yaml"

# --------------------------------------------------------------------------- #
# MODELS
# --------------------------------------------------------------------------- #
class AssemblySettings(BaseModel):
    indent: int = Field(4, ge=0, le=16)          # spaces per level in generated source
    json_indent: int = Field(4, ge=0, le=16)     # structured-data output
    # last-resort template when neither the file nor a boilerplate exists;
    # null disables it and makes such assemblies fail
    fallback_template: Optional[str] = "export default {};"
    # per file stem ("about" for about.ts), merged over the built-in ones
    templates: Dict[str, str] = Field(default_factory=dict)


class DraftSettings(BaseModel):
    directory: str = ".ltree-drafts"


class Settings(BaseModel):
    schema_version: int = SCHEMA_VERSION
    assembly: AssemblySettings = Field(default_factory=AssemblySettings)
    drafts: DraftSettings = Field(default_factory=DraftSettings)


# --------------------------------------------------------------------------- #
# YAML loader
# --------------------------------------------------------------------------- #
_yaml = YAML(typ="safe")


# --------------------------------------------------------------------------- #
# PUBLIC API
# --------------------------------------------------------------------------- #
def load_config(path: Path) -> Settings:
    """
    Load ltree.yaml.

    • No file: defaults.
    • Missing schema_version: assume the current one.
    • Incompatible schema or invalid values: ConfigError.
    """
    if not path.exists():
        return Settings()

    try:
        with path.open(encoding="utf-8") as f:
            raw: Any = _yaml.load(f) or {}
    except YAMLError as e:
        raise ConfigError(f"{path}: invalid YAML: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: top level must be a mapping")

    if raw.get("schema_version", SCHEMA_VERSION) != SCHEMA_VERSION:
        raise ConfigError(
            f"Unsupported config schema {raw.get('schema_version')} "
            f"(tool expects {SCHEMA_VERSION})"
        )

    try:
        return Settings.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"{path}: {e}") from e


def find_config(root: Path) -> Path:
    """Default config location for a working directory."""
    return root / DEFAULT_CFG_FILE


__all__ = ["SCHEMA_VERSION", "DEFAULT_CFG_FILE", "AssemblySettings", "DraftSettings", "Settings", "load_config", "find_config"]
