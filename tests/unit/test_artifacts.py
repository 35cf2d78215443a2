"""Unit tests for compiled artifact detection and reading."""

import json
from pathlib import Path

import pytest

from pharbit_deployments.artifacts import (
    ArtifactFormat,
    detect_artifact_format,
    read_compiled_artifact,
)
from pharbit_deployments.exceptions import InvalidArtifactError


class TestDetectArtifactFormat:
    """Test the detect_artifact_format function."""

    def test_detects_hardhat_format(self):
        assert detect_artifact_format({"abi": [], "bytecode": "0x00"}) == ArtifactFormat.HARDHAT

    def test_detects_foundry_format(self):
        data = {"abi": [], "bytecode": {"object": "0x00"}}
        assert detect_artifact_format(data) == ArtifactFormat.FOUNDRY

    def test_abi_only_is_hardhat(self):
        """Test that an ABI-only artifact is treated as Hardhat format."""
        assert detect_artifact_format({"abi": []}) == ArtifactFormat.HARDHAT

    def test_returns_none_without_abi(self):
        assert detect_artifact_format({"bytecode": "0x00"}) is None

    def test_returns_none_for_non_dict(self):
        assert detect_artifact_format([{"type": "function"}]) is None


class TestReadCompiledArtifact:
    """Test the read_compiled_artifact function."""

    def test_reads_hardhat_artifact(self, hardhat_artifact_sample: Path):
        """Test reading a Hardhat artifact."""
        artifact = read_compiled_artifact(hardhat_artifact_sample)

        assert artifact is not None
        assert artifact.name == "PharmaTracker"
        assert artifact.format == ArtifactFormat.HARDHAT
        assert artifact.bytecode.startswith("0x6080")
        assert any(item.get("name") == "getTotalDrugs" for item in artifact.abi)

    def test_keeps_raw_content(self, hardhat_artifact_sample: Path):
        """Test that the raw JSON is preserved for copying."""
        artifact = read_compiled_artifact(hardhat_artifact_sample)

        with open(hardhat_artifact_sample) as f:
            assert artifact.content == json.load(f)

    def test_reads_foundry_artifact(self, foundry_artifact_sample: Path):
        """Test reading a Foundry artifact, name taken from the file stem."""
        artifact = read_compiled_artifact(foundry_artifact_sample)

        assert artifact.format == ArtifactFormat.FOUNDRY
        assert artifact.name == "foundry_PharmaTracker"
        assert artifact.bytecode == "0x6080604052348015600f57600080fd5b50603f80601d6000396000f3fe"

    def test_missing_file_returns_none(self, tmp_path: Path):
        """Test that a missing artifact is a NotFound result, not an error."""
        assert read_compiled_artifact(tmp_path / "missing.json") is None

    def test_adds_hex_prefix(self, tmp_path: Path):
        path = tmp_path / "Bare.json"
        path.write_text(json.dumps({"abi": [], "bytecode": "6080"}))

        assert read_compiled_artifact(path).bytecode == "0x6080"

    def test_invalid_json_raises(self, tmp_path: Path):
        path = tmp_path / "Broken.json"
        path.write_text("{ not json")

        with pytest.raises(InvalidArtifactError):
            read_compiled_artifact(path)

    def test_missing_abi_raises(self, tmp_path: Path):
        path = tmp_path / "NoAbi.json"
        path.write_text(json.dumps({"bytecode": "0x00"}))

        with pytest.raises(InvalidArtifactError) as exc_info:
            read_compiled_artifact(path)

        assert "abi" in str(exc_info.value)

    def test_to_contract(self, hardhat_artifact_sample: Path):
        """Test conversion to a deployable contract definition."""
        contract = read_compiled_artifact(hardhat_artifact_sample).to_contract()

        assert contract.name == "PharmaTracker"
        assert contract.artifact_format == "hardhat"
        assert contract.source_path == hardhat_artifact_sample


class TestUnreadableArtifacts:
    """Test that every unusable artifact shape is reported as InvalidArtifactError."""

    def test_directory_raises(self, tmp_path: Path):
        path = tmp_path / "PharmaTracker.json"
        path.mkdir()

        with pytest.raises(InvalidArtifactError):
            read_compiled_artifact(path)

    def test_invalid_utf8_raises(self, tmp_path: Path):
        path = tmp_path / "PharmaTracker.json"
        path.write_bytes(b'{"abi": [], "x": "\xff\xfe"}')

        with pytest.raises(InvalidArtifactError):
            read_compiled_artifact(path)

    def test_bytecode_object_without_object_key_raises(self, tmp_path: Path):
        """Test that a bytecode dict lacking ``object`` is rejected, not crashed on."""
        path = tmp_path / "PharmaTracker.json"
        path.write_text(json.dumps({"abi": [], "bytecode": {"linkReferences": {}}}))

        with pytest.raises(InvalidArtifactError) as exc_info:
            read_compiled_artifact(path)

        assert "bytecode" in str(exc_info.value)

    def test_foundry_non_string_object_raises(self, tmp_path: Path):
        path = tmp_path / "PharmaTracker.json"
        path.write_text(json.dumps({"abi": [], "bytecode": {"object": 1234}}))

        with pytest.raises(InvalidArtifactError):
            read_compiled_artifact(path)

    def test_non_list_abi_raises(self, tmp_path: Path):
        path = tmp_path / "PharmaTracker.json"
        path.write_text(json.dumps({"abi": "[]", "bytecode": "0x00"}))

        with pytest.raises(InvalidArtifactError):
            read_compiled_artifact(path)

    def test_keeps_file_text(self, hardhat_artifact_sample: Path):
        """Test that the file contents are kept exactly as read."""
        artifact = read_compiled_artifact(hardhat_artifact_sample)
        assert artifact.text == hardhat_artifact_sample.read_text(encoding="utf-8")
