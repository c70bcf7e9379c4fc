"""Tests for built services and the executor request."""

import pytest

from cmdcraft.errors import EmptyCommand
from cmdcraft.metadata import MetadataStore
from cmdcraft.models import TerraformProvider, TerragruntProvider
from cmdcraft.services import ExecRequest, ImageToolsService, TerraformService, TerragruntService


class TestExecRequest:
    """Tests for ExecRequest.from_command."""

    def test_splits_executor_and_args(self):
        """Test that the first token becomes the executor."""
        request = ExecRequest.from_command(["terraform", "plan", "-no-color"], cwd="infra", env={"TF_LOG": "1"})
        assert request.executor == "terraform"
        assert request.args == ("plan", "-no-color")
        assert request.cwd == "infra"
        assert request.env == {"TF_LOG": "1"}

    def test_empty_command_raises(self):
        """Test that an empty argv cannot be executed."""
        with pytest.raises(EmptyCommand):
            ExecRequest.from_command([])

    def test_blank_executor_raises(self):
        """Test that a blank executor cannot be executed."""
        with pytest.raises(EmptyCommand):
            ExecRequest.from_command(["  ", "plan"])


class TestTerraformService:
    """Tests for TerraformService."""

    def test_exposes_provider_fields(self):
        """Test the read-only accessors."""
        provider = TerraformProvider(command="plan", working_directory="infra", environment={"A": "1"}, dry_run=True)
        service = TerraformService(provider)
        assert service.provider is provider
        assert service.command == "plan"
        assert service.executor == "terraform"
        assert service.working_directory == "infra"
        assert service.environment == {"A": "1"}
        assert service.dry_run is True

    def test_string_forms(self):
        """Test str, repr and the formatter outputs."""
        service = TerraformService(TerraformProvider(command="plan", targets=("a",)))
        assert str(service) == "terraform plan -target a"
        assert repr(service) == "TerraformService('terraform plan -target a')"
        assert service.to_string_list() == ["terraform", "plan", "-target", "a"]
        assert service.to_string_multi_line_command() == "terraform \\\n  plan \\\n  -target a"

    def test_exec_request_uses_working_directory(self):
        """Test that the request carries cwd and environment."""
        service = TerraformService(TerraformProvider(command="init", working_directory="infra"))
        request = service.exec_request()
        assert request == ExecRequest("terraform", ("init",), "infra", {})

    def test_provider_is_frozen(self):
        """Test that provider collections cannot be mutated."""
        provider = TerraformProvider(command="plan", variables={"a": "b"}, targets=["x"])
        assert provider.targets == ("x",)
        with pytest.raises(TypeError):
            provider.variables["c"] = "d"


class TestTerragruntService:
    """Tests for TerragruntService."""

    def test_run_all_property(self):
        """Test that run_all is exposed and drives the argv."""
        service = TerragruntService(TerragruntProvider(command="plan", run_all=True))
        assert service.run_all is True
        assert service.build_command() == ["terragrunt", "run-all", "plan"]


class TestImageToolsService:
    """Tests for ImageToolsService."""

    def test_metadata_operations_chain(self):
        """Test that the metadata can still be edited after construction."""
        service = ImageToolsService("create")
        service.add_metadata("--tag", "a").add_metadata(value="src").set_metadata("--platform", ["linux/amd64"])
        assert service.get_metadata("--tag") == ["a"]
        assert service.get_first_metadata("--platform") == "linux/amd64"
        assert service.metadata == {"--tag": ["a"], "": ["src"], "--platform": ["linux/amd64"]}
        service.remove_metadata("--platform")
        assert service.build_command() == ["docker", "buildx", "imagetools", "create", "--tag", "a", "src"]
        service.clear_metadata()
        assert service.to_command_args() == []

    def test_store_is_copied(self):
        """Test that the service does not share the store it was given."""
        store = MetadataStore().add("--tag", "a")
        service = ImageToolsService("create", store=store)
        store.add("--tag", "b")
        assert service.get_metadata("--tag") == ["a"]

    def test_string_list_multi_line(self):
        """Test the flat layout in string-list mode."""
        store = MetadataStore().add("--tag", "a").add("--tag", "b").add(value="src")
        service = ImageToolsService("create", use_string_list=True, store=store)
        assert service.use_string_list is True
        assert service.to_string_multi_line_command() == "docker buildx imagetools create --tag=a,b src"
        assert service.to_string() == "docker buildx imagetools create --tag a --tag b src"

    def test_multi_line_without_string_list(self):
        """Test the continued layout when string-list mode is off."""
        service = ImageToolsService("inspect", store=MetadataStore().add(value="app:1"))
        assert service.to_string_multi_line_command() == (
            "docker \\\n  buildx \\\n  imagetools \\\n  inspect \\\n  app:1"
        )

    def test_exec_request(self):
        """Test the request handed to an executor."""
        service = ImageToolsService("prune")
        request = service.exec_request()
        assert request.executor == "docker"
        assert request.args == ("buildx", "imagetools", "prune")

    def test_repr(self):
        """Test the debug view, including the unkeyed bucket."""
        service = ImageToolsService("create", store=MetadataStore().add("--tag", "a").add(value="s1").add(value="s2"))
        assert repr(service) == (
            "ImageToolsService(command='create', executor='docker', "
            "sub_commands=['buildx', 'imagetools'], use_string_list=False, "
            "metadata={'--tag': 'a', '(empty)': ['s1', 's2']})"
        )

    def test_repr_empty_metadata(self):
        """Test the debug view without metadata."""
        assert repr(ImageToolsService("prune")).endswith("metadata={})")
