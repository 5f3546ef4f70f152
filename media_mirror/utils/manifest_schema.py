"""
JSON Schema validation for the media manifest.
Reports every violation with its JSON path for readable error messages.
"""

from typing import Any

from jsonschema import Draft7Validator

_ASSET_PROPERTIES = {
    "src": {
        "type": ["string", "null"],
        "description": "Remote (or already local) URL of the asset",
    },
    "cachedSrc": {
        "type": ["string", "null"],
        "description": "Public path of the locally cached copy",
    },
}

# Unknown fields are allowed everywhere; the UI owns them. A null asset field is
# treated as absent.
MANIFEST_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Media Manifest",
    "description": "Remote media assets and their cached locations",
    "type": "object",
    "properties": {
        "videos": {
            "type": ["array", "null"],
            "items": {
                "type": "object",
                "properties": {
                    "id": {"type": ["string", "number", "null"]},
                    **_ASSET_PROPERTIES,
                },
            },
        },
        "background": {
            "oneOf": [
                {"type": "string"},
                {"type": "null"},
                {
                    "type": "object",
                    "properties": _ASSET_PROPERTIES,
                },
            ],
        },
    },
}


def validate_manifest_schema(document: Any) -> tuple[bool, list[str]]:
    """
    Validate a decoded manifest against the JSON schema.

    Args:
        document: The decoded JSON document

    Returns:
        Tuple of (is_valid, error_messages)
    """
    validator = Draft7Validator(MANIFEST_SCHEMA)
    errors = sorted(
        validator.iter_errors(document), key=lambda e: [str(p) for p in e.path]
    )

    if not errors:
        return True, []

    error_messages = []
    for error in errors:
        path = ".".join(str(p) for p in error.path) if error.path else "root"
        error_messages.append(f"{path}: {error.message}")

    return False, error_messages

