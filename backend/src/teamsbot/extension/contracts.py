"""Static contract validation between the manifest and the registered commands."""

from __future__ import annotations

import importlib
import re
from typing import Any

import jsonschema

from ..schemas.character import QUERY_TEXT_PARAMETER
from .actions import CommandRegistry

_MODULE_PATTERN = re.compile(r"^[\w.]+:[\w]+$")

MANIFEST_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "version": {"type": "string", "minLength": 1},
        "module": {"type": "string"},
        "commands": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "properties": {
                    "id": {"type": "string", "minLength": 1},
                    "type": {"enum": ["query", "action"]},
                    "parameters": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {"name": {"type": "string"}},
                            "required": ["name"],
                        },
                    },
                },
                "required": ["id", "type", "parameters"],
            },
        },
    },
    "required": ["name", "version", "module", "commands"],
}


def assert_extension_contract(manifest: dict, registry: CommandRegistry) -> None:
    """Validate the manifest shape and its cross references.

    Raises:
        AssertionError: If the manifest is malformed, names an action command
            with no registered implementation, registers a command the
            manifest does not declare, or declares a query command without a
            ``queryText`` first parameter.
    """
    try:
        jsonschema.validate(instance=manifest, schema=MANIFEST_SCHEMA)
    except jsonschema.ValidationError as e:
        raise AssertionError(f"Extension manifest is invalid: {e.message}") from e

    _validate_module_string(manifest)
    _validate_unique_ids(manifest)
    _validate_action_commands(manifest, registry)
    _validate_query_commands(manifest)


def declared_command_ids(manifest: dict, command_type: str) -> list[str]:
    """Return the ids of manifest commands of ``command_type`` ("query" or "action")."""
    return [c["id"] for c in manifest["commands"] if c.get("type") == command_type]


def _validate_module_string(manifest: dict) -> None:
    module_str: str = manifest["module"]
    if not _MODULE_PATTERN.match(module_str):
        raise AssertionError(f"Manifest 'module' value '{module_str}' is not a valid 'dotted.path:ClassName' string.")
    module_name, attr = module_str.split(":")
    module = importlib.import_module(module_name)
    if not hasattr(module, attr):
        raise AssertionError(f"Manifest 'module' points at '{module_str}' which does not exist.")


def _validate_unique_ids(manifest: dict) -> None:
    ids = [c["id"] for c in manifest["commands"]]
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    if duplicates:
        raise AssertionError(f"Manifest declares duplicate command ids: {duplicates}")


def _validate_action_commands(manifest: dict, registry: CommandRegistry) -> None:
    declared = set(declared_command_ids(manifest, "action"))
    registered = set(registry.command_ids())

    missing = declared - registered
    if missing:
        raise AssertionError(
            f"Manifest declares action command(s) {sorted(missing)} with no registered implementation."
        )
    undeclared = registered - declared
    if undeclared:
        raise AssertionError(
            f"Command(s) {sorted(undeclared)} are registered but not declared in the manifest; "
            "the client can never invoke them."
        )


def _validate_query_commands(manifest: dict) -> None:
    # Only the first parameter of a query invoke is read
    for command in manifest["commands"]:
        if command["type"] != "query":
            continue
        params = command["parameters"]
        if not params or params[0]["name"] != QUERY_TEXT_PARAMETER:
            raise AssertionError(
                f"Query command '{command['id']}' must declare '{QUERY_TEXT_PARAMETER}' as its first parameter."
            )
