"""Tests for the Terragrunt v0/v1 flag and command mapping."""

import pytest

from cmdcraft.errors import InvalidArgument, InvalidCommand
from cmdcraft.terragrunt_flags import TERRAGRUNT_FLAG_MAP, command_tokens, select_flag


class TestSelectFlag:
    """Tests for select_flag()."""

    def test_v0_uses_terragrunt_prefix(self):
        """Test that every v0 flag carries the --terragrunt- prefix."""
        for key in TERRAGRUNT_FLAG_MAP:
            assert select_flag(key, 0).startswith("--terragrunt-")

    def test_v1_drops_prefix(self):
        """Test that no v1 flag carries the --terragrunt- prefix."""
        for key in TERRAGRUNT_FLAG_MAP:
            assert not select_flag(key, 1).startswith("--terragrunt-")

    def test_queue_flags(self):
        """Test the v1 run-queue renames."""
        assert select_flag("exclude_dir", 1) == "--queue-exclude-dir"
        assert select_flag("ignore_dependency_errors", 1) == "--queue-ignore-errors"
        assert select_flag("ignore_external_deps", 1) == "--queue-exclude-external"

    def test_unknown_key_raises(self):
        """Test that unknown keys raise InvalidArgument instead of KeyError."""
        with pytest.raises(InvalidArgument, match="Unknown Terragrunt flag key"):
            select_flag("nope", 0)


class TestCommandTokens:
    """Tests for command_tokens()."""

    def test_v0_is_unchanged(self):
        """Test that v0 commands are emitted verbatim."""
        assert command_tokens("run-all", 0) == ["run-all"]
        assert command_tokens("hclfmt", 0) == ["hclfmt"]

    def test_v1_renames(self):
        """Test the v1 command renames."""
        assert command_tokens("run-all", 1) == ["run", "--all"]
        assert command_tokens("hclfmt", 1) == ["hcl", "fmt"]
        assert command_tokens("graph-dependencies", 1) == ["dag", "graph"]
        assert command_tokens("validate-inputs", 1) == ["validate", "inputs"]

    def test_v1_terraform_command_unchanged(self):
        """Test that Terraform commands keep their name in v1."""
        assert command_tokens("plan", 1) == ["plan"]

    def test_v1_removed_command_raises(self):
        """Test that commands without a v1 equivalent are rejected."""
        with pytest.raises(InvalidCommand, match="aws-provider-patch"):
            command_tokens("aws-provider-patch", 1)
