"""Manifest Parser - JSON to typed Manifest with validation."""

from pathlib import Path
from typing import Any

import pydantic
from returns.result import Failure, Result, Success

from manifest_compiler.core import get_logger, ValidationError
from manifest_compiler.core.json import extract_json, JSONParseError
from manifest_compiler.core.validate import (
    MAX_JSON_DEPTH,
    MAX_MANIFEST_SIZE,
    ValidationResult,
    validate_json_depth,
    validate_json_size,
)
from .models import Manifest

logger = get_logger(__name__)


class ManifestParser:
    """Parses manifest JSON into a validated `Manifest`."""

    def __init__(
        self,
        max_size: int = MAX_MANIFEST_SIZE,
        max_depth: int = MAX_JSON_DEPTH,
        repair: bool = False,
    ) -> None:
        self.max_size = max_size
        self.max_depth = max_depth
        self.repair = repair

    def parse(self, content: str | bytes) -> Manifest:
        """
        Parse manifest JSON text.

        Args:
            content: Manifest JSON document

        Returns:
            Validated manifest

        Raises:
            ValidationError: If the document is too large, too deep, not JSON
                or does not match the manifest schema
        """
        validate_json_size(content, self.max_size, "Manifest")

        try:
            data = extract_json(content, repair=self.repair)
        except JSONParseError as e:
            logger.error("json_parse_failed", error=str(e))
            raise ValidationError(f"Invalid JSON: {e}") from e

        return self.parse_dict(data)

    def parse_dict(self, data: dict[str, Any]) -> Manifest:
        """Validate an already-decoded manifest dictionary."""
        validate_json_depth(data, self.max_depth)

        if "components" not in data:
            logger.error("missing_field", field="components")
            raise ValidationError("Invalid manifest: missing 'components' section")

        try:
            manifest = Manifest.model_validate(data)
        except pydantic.ValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first["loc"])
            logger.error("schema_invalid", field=location, errors=e.error_count())
            raise ValidationError(f"Invalid manifest at '{location}': {first['msg']}") from e

        logger.debug(
            "manifest_parsed",
            components=len(manifest.components),
            flows=len(manifest.flows),
        )
        return manifest


def parse_manifest(content: str | bytes) -> Manifest:
    """
    Convenience function to parse manifest content with default limits.

    Raises:
        ValidationError: If the manifest is invalid
    """
    return ManifestParser().parse(content)


def load_manifest(path: str | Path, parser: ManifestParser | None = None) -> Manifest:
    """Read and parse a UTF-8 manifest file."""
    content = Path(path).read_bytes()
    return (parser or ManifestParser()).parse(content)


def validate_manifest(data: dict[str, Any]) -> Result[Manifest, ValidationResult]:
    """
    Validate a decoded manifest (Result pattern version).

    Returns:
        Success with the manifest, or Failure describing the first problem
    """
    try:
        return Success(ManifestParser().parse_dict(data))
    except ValidationError as e:
        return Failure(ValidationResult(str(e)))
