"""Parse npm package-lock.json documents (lockfileVersion 2 and 3)."""

from __future__ import annotations

import json
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

from ..errors import UnsupportedDocumentError

_DEPENDENCY_MAP = {"type": "object", "additionalProperties": {"type": "string"}}

PACKAGE_LOCK_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["lockfileVersion", "packages"],
    "properties": {
        "lockfileVersion": {"enum": [2, 3]},
        "packages": {
            "type": "object",
            "required": [""],
            "properties": {
                "": {
                    "type": "object",
                    "properties": {
                        "dependencies": _DEPENDENCY_MAP,
                        "devDependencies": _DEPENDENCY_MAP,
                        "optionalDependencies": _DEPENDENCY_MAP,
                        "peerDependencies": _DEPENDENCY_MAP,
                    },
                },
            },
            "additionalProperties": {
                "type": "object",
                "properties": {
                    "version": {"type": "string"},
                    "dev": {"type": "boolean"},
                    "optional": {"type": "boolean"},
                    "peer": {"type": "boolean"},
                },
            },
        },
    },
}

_VALIDATOR = Draft202012Validator(PACKAGE_LOCK_SCHEMA)


def parse(text: str, side: str) -> dict[str, Any]:
    """Return the decoded lockfile, or raise if it is not a v2/v3 npm lockfile."""
    message = f"'{side}' is not a supported v2 or v3 NPM lock file"
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise UnsupportedDocumentError(side, f"{message}: {exc}") from exc

    error = best_match(_VALIDATOR.iter_errors(data))
    if error is not None:
        pointer = "/".join(str(p) for p in error.path)
        raise UnsupportedDocumentError(side, f"{message}: {pointer or '<root>'}: {error.message}")

    return data
