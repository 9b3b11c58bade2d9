"""
Tests for the manifest/registry contract check run at startup.
"""

import copy
import os
import subprocess
import sys
from pathlib import Path

import pytest

from teamsbot.extension.actions import CommandRegistry, default_registry
from teamsbot.extension.contracts import assert_extension_contract, declared_command_ids
from teamsbot.manifest import EXTENSION_MANIFEST


@pytest.fixture
def manifest():
    return copy.deepcopy(EXTENSION_MANIFEST)


@pytest.fixture
def registry():
    return default_registry("https://x/p.png")


def test_shipped_manifest_matches_default_commands(manifest, registry):
    assert_extension_contract(manifest, registry)


def test_declared_command_ids():
    assert declared_command_ids(EXTENSION_MANIFEST, "query") == ["searchQuery"]
    assert declared_command_ids(EXTENSION_MANIFEST, "action") == ["CreateAvenger"]


def test_missing_required_key(manifest, registry):
    del manifest["commands"]
    with pytest.raises(AssertionError, match="invalid"):
        assert_extension_contract(manifest, registry)


@pytest.mark.parametrize("module", ["teamsbot.extension.handler", "not a module:Thing"])
def test_malformed_module_string(manifest, registry, module):
    manifest["module"] = module
    with pytest.raises(AssertionError, match="dotted.path:ClassName"):
        assert_extension_contract(manifest, registry)


def test_module_attribute_must_exist(manifest, registry):
    manifest["module"] = "teamsbot.extension.handler:NoSuchHandler"
    with pytest.raises(AssertionError, match="does not exist"):
        assert_extension_contract(manifest, registry)


def test_duplicate_command_ids(manifest, registry):
    manifest["commands"].append(copy.deepcopy(manifest["commands"][1]))
    with pytest.raises(AssertionError, match="duplicate"):
        assert_extension_contract(manifest, registry)


def test_declared_action_without_implementation(manifest):
    with pytest.raises(AssertionError, match="no registered implementation"):
        assert_extension_contract(manifest, CommandRegistry())


def test_registered_command_not_declared(manifest, registry):
    manifest["commands"] = [c for c in manifest["commands"] if c["type"] == "query"]
    with pytest.raises(AssertionError, match="not declared"):
        assert_extension_contract(manifest, registry)


def test_query_command_needs_query_text_first(manifest, registry):
    manifest["commands"][0]["parameters"].insert(0, {"name": "initialRun"})
    with pytest.raises(AssertionError, match="queryText"):
        assert_extension_contract(manifest, registry)


def test_checks_still_run_with_optimizations_enabled():
    # -O strips assert statements; the contract check must not depend on them
    src = Path(__file__).resolve().parents[3]
    code = (
        "from teamsbot.extension.actions import CommandRegistry\n"
        "from teamsbot.extension.contracts import assert_extension_contract\n"
        "from teamsbot.manifest import EXTENSION_MANIFEST\n"
        "assert_extension_contract(EXTENSION_MANIFEST, CommandRegistry())\n"
    )
    env = {**os.environ, "PYTHONPATH": str(src)}

    result = subprocess.run([sys.executable, "-O", "-c", code], env=env, capture_output=True, text=True, check=False)

    assert result.returncode != 0
    assert "no registered implementation" in result.stderr
