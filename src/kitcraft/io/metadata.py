"""Kit metadata.yaml I/O."""

from datetime import datetime
from pathlib import Path
from typing import Any

import yaml

from kitcraft.errors import ValidationError
from kitcraft.models import Kit

METADATA_FILENAME = "metadata.yaml"


def load_kit_metadata(kit_path: Path) -> Kit:
    """Load metadata.yaml from a kit directory.

    Args:
        kit_path: Kit root directory

    Returns:
        Kit with local_path and install_date filled in from the directory

    Raises:
        ValidationError: If the file is missing, is not valid YAML, or lacks
            a non-empty name or description
    """
    metadata_path = kit_path / METADATA_FILENAME
    if not metadata_path.is_file():
        raise ValidationError(f"{METADATA_FILENAME} not found in kit: {kit_path}")

    try:
        with open(metadata_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise ValidationError(f"Failed to parse {metadata_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValidationError(f"{metadata_path} must contain a mapping")

    name = _optional_str(data, "name", metadata_path)
    if not name:
        raise ValidationError(f"Kit name is required in {metadata_path}")
    description = _optional_str(data, "description", metadata_path)
    if not description:
        raise ValidationError(f"Kit description is required in {metadata_path}")

    repository = _optional_str(data, "repository", metadata_path)

    return Kit(
        name=name,
        description=description,
        language=_optional_str(data, "language", metadata_path),
        version=_optional_str(data, "version", metadata_path),
        author=_optional_str(data, "author", metadata_path),
        repository=repository or None,
        dependencies=_str_list(data, "dependencies", metadata_path),
        placeholders=_str_list(data, "placeholders", metadata_path),
        tags=_str_list(data, "tags", metadata_path),
        metadata=_str_map(data, "metadata", metadata_path),
        local_path=kit_path,
        install_date=datetime.fromtimestamp(kit_path.stat().st_mtime),
    )


def _optional_str(data: dict[str, Any], key: str, source: Path) -> str:
    value = data.get(key)
    if value is None:
        return ""
    # YAML turns `version: 1.0` into a float
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, str):
        raise ValidationError(f"Field '{key}' in {source} must be a string")
    return value.strip()


def _str_list(data: dict[str, Any], key: str, source: Path) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError(f"Field '{key}' in {source} must be a list of strings")
    return [str(item) for item in value]


def _str_map(data: dict[str, Any], key: str, source: Path) -> dict[str, str]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValidationError(f"Field '{key}' in {source} must be a mapping")
    return {str(k): str(v) for k, v in value.items()}
