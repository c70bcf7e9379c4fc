"""Tests for YAML configuration loading."""

import pytest
import yaml

from cmdcraft.builders import ImageToolsBuilder, TerraformBuilder, TerragruntBuilder
from cmdcraft.config import ImageToolsConfig, TerraformConfig, TerragruntConfig


class TestTerraformConfigFromYaml:
    """Tests for TerraformConfig.from_yaml."""

    def test_native_yaml_values(self, tmp_path):
        """Test a config written with native YAML lists and mappings."""
        config_file = tmp_path / "terraform.yml"
        config_file.write_text(
            "command: plan\n"
            "working-directory: infra\n"
            "variables:\n"
            "  env: prod\n"
            "var-files:\n"
            "  - common.tfvars\n"
            "targets:\n"
            "  - module.vpc\n"
            "plan-file: prod.tfplan\n"
            "parallelism: 5\n"
            "no-color: true\n"
            "refresh: false\n"
        )

        config = TerraformConfig.from_yaml(config_file)

        assert config.command == "plan"
        assert config.working_directory == "infra"
        assert config.variables == {"env": "prod"}
        assert config.var_files == ["common.tfvars"]
        assert config.targets == ["module.vpc"]
        assert config.parallelism == 5
        assert config.no_color is True
        assert config.refresh is False

    def test_action_style_strings(self, tmp_path):
        """Test a config written with Action-style string inputs."""
        config_file = tmp_path / "terraform.yml"
        config_file.write_text(
            "command: apply\n"
            "variables: '{\"env\": \"prod\"}'\n"
            "targets: 'a,,b,'\n"
            "auto-approve: 'true'\n"
            "parallelism: '3'\n"
        )

        config = TerraformConfig.from_yaml(config_file)

        assert config.variables == {"env": "prod"}
        assert config.targets == ["a", "b"]
        assert config.auto_approve is True
        assert config.parallelism == 3
        assert config.refresh is None

    def test_empty_file_raises(self, tmp_path):
        """Test that an empty file is rejected."""
        config_file = tmp_path / "empty.yml"
        config_file.write_text("")
        with pytest.raises(ValueError, match="Terraform config file is empty"):
            TerraformConfig.from_yaml(config_file)

    def test_non_mapping_raises(self, tmp_path):
        """Test that a YAML list is rejected."""
        config_file = tmp_path / "list.yml"
        config_file.write_text("- plan\n- apply\n")
        with pytest.raises(TypeError, match="must contain a mapping"):
            TerraformConfig.from_yaml(config_file)

    def test_missing_file_raises(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            TerraformConfig.from_yaml(tmp_path / "missing.yml")

    def test_malformed_yaml_raises(self, tmp_path):
        """Test that malformed YAML raises a YAML error."""
        config_file = tmp_path / "bad.yml"
        config_file.write_text("command: [plan\n")
        with pytest.raises(yaml.YAMLError):
            TerraformConfig.from_yaml(config_file)

    def test_non_numeric_parallelism_ignored(self):
        """Test that a non-numeric parallelism input is ignored."""
        assert TerraformConfig.from_mapping({"parallelism": "lots"}).parallelism is None

    def test_native_yaml_scalars_in_mappings(self, tmp_path):
        """Test that YAML booleans render as Terraform literals and nulls are skipped."""
        config_file = tmp_path / "terraform.yml"
        config_file.write_text(
            "command: plan\n"
            "variables:\n"
            "  enabled: true\n"
            "  replicas: 3\n"
            "  zones: [a, b]\n"
            "  region:\n"
        )

        config = TerraformConfig.from_yaml(config_file)

        assert config.variables == {"enabled": "true", "replicas": "3", "zones": '["a", "b"]'}
        assert config.to_builder().build().to_command_args() == [
            "-var",
            "enabled=true",
            "-var",
            "replicas=3",
            "-var",
            'zones=["a", "b"]',
        ]

    def test_yaml_and_json_variables_agree(self):
        """Test that native and JSON-string variables produce the same values."""
        native = TerraformConfig.from_mapping({"variables": {"enabled": False, "region": None}})
        json_text = TerraformConfig.from_mapping({"variables": '{"enabled": false, "region": null}'})
        assert native.variables == json_text.variables == {"enabled": "false"}

    def test_indexed_targets_one_per_line(self, tmp_path):
        """Test that indexed resource addresses given one per line are all kept."""
        config_file = tmp_path / "terraform.yml"
        config_file.write_text(
            "command: plan\n"
            "targets: |\n"
            "  aws_instance.web[0]\n"
            "  aws_instance.web[1]\n"
            "  module.vpc\n"
        )

        config = TerraformConfig.from_yaml(config_file)

        assert config.to_builder().build().to_command_args() == [
            "-target",
            "aws_instance.web[0]",
            "-target",
            "aws_instance.web[1]",
            "-target",
            "module.vpc",
        ]


class TestTerraformConfigToBuilder:
    """Tests for TerraformConfig.to_builder."""

    def test_plan_file_is_out_for_plan(self):
        """Test that plan-file becomes -out for plan."""
        builder = TerraformConfig.from_mapping({"command": "plan", "plan-file": "tfplan"}).to_builder()
        assert isinstance(builder, TerraformBuilder)
        assert builder.build().to_command_args() == ["-out", "tfplan"]

    def test_plan_file_is_positional_for_apply(self):
        """Test that plan-file becomes the positional plan for apply."""
        config = TerraformConfig.from_mapping({"command": "apply", "plan-file": "tfplan", "auto-approve": True})
        assert config.to_builder().build().to_command_args() == ["tfplan"]

    def test_plan_file_ignored_for_other_commands(self):
        """Test that plan-file has no effect on destroy."""
        config = TerraformConfig.from_mapping({"command": "destroy", "plan-file": "tfplan"})
        assert config.to_builder().build().to_command_args() == []

    def test_matches_fluent_builder(self):
        """Test that the config produces the same argv as the fluent API."""
        config = TerraformConfig.from_mapping(
            {
                "command": "init",
                "backend-config": {"bucket": "state"},
                "reconfigure": "true",
                "lock-timeout": "30s",
            }
        )
        fluent = TerraformBuilder.for_init().with_backend_config("bucket", "state").with_reconfigure()
        fluent.with_lock_timeout("30s")
        assert config.to_builder().build().build_command() == fluent.build().build_command()

    def test_refresh_tristate(self):
        """Test refresh true, false and unset."""
        base = {"command": "plan"}
        assert TerraformConfig.from_mapping({**base, "refresh": "true"}).to_builder().build().to_command_args() == [
            "-refresh=true"
        ]
        assert TerraformConfig.from_mapping({**base, "refresh": "false"}).to_builder().build().to_command_args() == [
            "-refresh=false"
        ]
        assert TerraformConfig.from_mapping({**base, "refresh": ""}).to_builder().build().to_command_args() == []

    def test_dry_run(self):
        """Test that dry-run reaches the service."""
        service = TerraformConfig.from_mapping({"command": "plan", "dry-run": "true"}).to_builder().build()
        assert service.dry_run is True

    def test_merged_overrides(self):
        """Test that None overrides are ignored and others replace values."""
        config = TerraformConfig.from_mapping({"command": "plan", "targets": ["a"]})
        merged = config.merged({"command": None, "targets": ["b"], "unknown": 1})
        assert merged.command == "plan"
        assert merged.targets == ["b"]
        assert config.targets == ["a"]


class TestTerragruntConfig:
    """Tests for TerragruntConfig."""

    def test_terragrunt_keys(self, tmp_path):
        """Test that Terragrunt keys are loaded and applied."""
        config_file = tmp_path / "terragrunt.yml"
        config_file.write_text(
            "command: plan\n"
            "run-all: true\n"
            "non-interactive: true\n"
            "terragrunt-parallelism: 2\n"
            "include-dirs: prod/*, shared/*\n"
            "source-map: '{\"git::a\": \"../a\"}'\n"
            "iam-role: arn:aws:iam::1:role/ci\n"
            "iam-role-session-name: ci\n"
        )

        builder = TerragruntConfig.from_yaml(config_file).to_builder()

        assert isinstance(builder, TerragruntBuilder)
        assert builder.build().build_command() == [
            "terragrunt",
            "run-all",
            "plan",
            "--terragrunt-non-interactive",
            "--terragrunt-parallelism",
            "2",
            "--terragrunt-include-dir",
            "prod/*",
            "--terragrunt-include-dir",
            "shared/*",
            "--terragrunt-source-map",
            "git::a=../a",
            "--terragrunt-iam-role",
            "arn:aws:iam::1:role/ci",
            "--terragrunt-iam-role-session-name",
            "ci",
        ]

    def test_terragrunt_version(self):
        """Test that terragrunt-version selects the v1 syntax."""
        config = TerragruntConfig.from_mapping({"command": "hclfmt", "terragrunt-version": "1"})
        assert config.to_builder().build().build_command() == ["terragrunt", "hcl", "fmt"]

    def test_empty_file_label(self, tmp_path):
        """Test that the error names the Terragrunt config."""
        config_file = tmp_path / "empty.yml"
        config_file.write_text("")
        with pytest.raises(ValueError, match="Terragrunt config file is empty"):
            TerragruntConfig.from_yaml(config_file)

    def test_merged_keeps_subclass(self):
        """Test that merging preserves the Terragrunt fields."""
        merged = TerragruntConfig.from_mapping({"command": "plan", "run-all": True}).merged({"no_color": True})
        assert isinstance(merged, TerragruntConfig)
        assert merged.run_all is True
        assert merged.no_color is True


class TestImageToolsConfig:
    """Tests for ImageToolsConfig."""

    def test_from_yaml(self, tmp_path):
        """Test loading every image-tools key."""
        config_file = tmp_path / "imagetools.yml"
        config_file.write_text(
            "command: create\n"
            "tags:\n"
            "  - app:1.0\n"
            "  - app:latest\n"
            "sources: app:amd64,app:arm64\n"
            "annotations:\n"
            "  index:org.opencontainers.image.version: '1.0'\n"
            "platforms: linux/amd64\n"
            "string-list: true\n"
        )

        config = ImageToolsConfig.from_yaml(config_file)

        assert config.tags == ["app:1.0", "app:latest"]
        assert config.sources == ["app:amd64", "app:arm64"]
        assert config.annotations == {"index:org.opencontainers.image.version": "1.0"}
        assert config.string_list is True

    def test_to_builder_order(self):
        """Test that sources come last."""
        config = ImageToolsConfig.from_mapping(
            {"command": "create", "sources": ["src"], "tags": ["t"], "platforms": ["linux/arm64"], "file": "f.json"}
        )
        builder = config.to_builder()
        assert isinstance(builder, ImageToolsBuilder)
        assert builder.build().to_command_args() == ["--tag", "t", "--platform", "linux/arm64", "--file", "f.json", "src"]

    def test_string_list_mode(self):
        """Test that string-list reaches the service."""
        config = ImageToolsConfig.from_mapping({"command": "create", "tags": "a,b", "string-list": "true"})
        assert config.to_builder().build().to_string_multi_line_command() == "docker buildx imagetools create --tag=a,b"

    def test_empty_file_raises(self, tmp_path):
        """Test that an empty file is rejected."""
        config_file = tmp_path / "empty.yml"
        config_file.write_text("")
        with pytest.raises(ValueError, match="Image tools config file is empty"):
            ImageToolsConfig.from_yaml(config_file)
