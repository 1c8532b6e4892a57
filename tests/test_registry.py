import pytest
from pydantic import ValidationError

from uploaded_files.exceptions import NoConfiguration
from uploaded_files.models.configuration import UploadConfiguration
from uploaded_files.registry import ConfigurationRegistry, load_configurations


def _registry() -> ConfigurationRegistry:
    return ConfigurationRegistry(
        {
            "images": {"filesystem": "fs.images", "base_uri": "https://images.example.com", "path": "/images"},
            "documents": {"filesystem": "fs.docs", "base_uri": "https://docs.example.com", "path": "/documents"},
        }
    )


class TestConfigurationRegistry:
    def test_has(self):
        registry = _registry()
        assert registry.has("images")
        assert registry.has("documents")
        assert not registry.has("nonexistent")
        assert not registry.has(None)

    def test_names_keep_insertion_order(self):
        assert _registry().names() == ["images", "documents"]

    def test_resolve_returns_exact_match(self):
        config = _registry().resolve("documents")
        assert config.filesystem == "fs.docs"
        assert config.path == "/documents"

    def test_resolve_unknown_name_falls_back_to_first(self):
        registry = _registry()
        assert registry.resolve("nonexistent") == registry.resolve("images")

    def test_resolve_default_name_falls_back_to_first(self):
        assert _registry().resolve().filesystem == "fs.images"

    def test_resolve_on_empty_registry_raises(self):
        registry = ConfigurationRegistry({})
        with pytest.raises(NoConfiguration, match="No upload configuration found"):
            registry.resolve("default")

    def test_no_configuration_is_a_lookup_error(self):
        with pytest.raises(LookupError):
            ConfigurationRegistry().resolve("anything")

    def test_get_is_strict(self):
        registry = _registry()
        assert registry.get("images").filesystem == "fs.images"
        assert registry.get("nonexistent") is None
        assert registry.get(None) is None

    def test_accepts_model_instances(self):
        config = UploadConfiguration(filesystem="fs")
        registry = ConfigurationRegistry({"default": config})
        assert registry.resolve("default") is config

    def test_registry_is_read_only(self):
        source = {"a": {"filesystem": "fs.a"}}
        registry = ConfigurationRegistry(source)
        source["b"] = {"filesystem": "fs.b"}

        assert registry.names() == ["a"]
        with pytest.raises(TypeError):
            registry._configurations["c"] = UploadConfiguration(filesystem="fs.c")

    def test_len_contains_iter(self):
        registry = _registry()
        assert len(registry) == 2
        assert "images" in registry
        assert list(registry) == ["images", "documents"]


class TestLoadConfigurations:
    def test_minimal_configuration(self):
        registry = load_configurations({"default": {"filesystem": "fs.default"}})

        config = registry.resolve("default")
        assert config.filesystem == "fs.default"
        assert config.base_uri is None
        assert config.path is None

    def test_full_configuration(self):
        registry = load_configurations(
            {
                "default": {
                    "filesystem": "fs.default",
                    "base_uri": "https://cdn.example.com",
                    "path": "/uploads/images",
                }
            }
        )

        config = registry.resolve("default")
        assert config.base_uri == "https://cdn.example.com"
        assert config.path == "/uploads/images"

    def test_multiple_configurations(self):
        registry = load_configurations(
            {
                "images": {"filesystem": "fs.images"},
                "documents": {"filesystem": "fs.docs"},
            }
        )
        assert registry.names() == ["images", "documents"]

    def test_empty_configurations_raise(self):
        with pytest.raises(ValueError, match="At least one upload configuration"):
            load_configurations({})

    def test_missing_filesystem_raises(self):
        with pytest.raises(ValidationError):
            load_configurations({"default": {"base_uri": "https://cdn.example.com"}})

    def test_empty_filesystem_raises(self):
        with pytest.raises(ValidationError):
            load_configurations({"default": {"filesystem": ""}})

    def test_misspelt_key_raises(self):
        with pytest.raises(ValidationError, match="base_url"):
            load_configurations({"default": {"filesystem": "fs.default", "base_url": "https://cdn.example.com"}})
