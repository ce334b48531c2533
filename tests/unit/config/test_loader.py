"""Tests for the typed configuration loader."""

from __future__ import annotations

import json

import pytest

from orgmatch.config import (
    CONFIG_SCHEMA,
    ConfigError,
    ConfigFileError,
    ConfigLoader,
    ConfigType,
    MissingKeyError,
    UnknownKeyError,
    ValidationError,
    get_all_required_keys,
    validate_key,
)


class TestSchema:
    def test_required_keys(self):
        assert get_all_required_keys() == ["identity.domain"]

    def test_defaults(self):
        assert CONFIG_SCHEMA["matching.auto_accept_threshold"].default == 80
        assert CONFIG_SCHEMA["matching.ambiguity_margin"].default == 10
        assert CONFIG_SCHEMA["directory.root_department"].default == "Executive"

    def test_validate_key(self):
        assert validate_key("matching.ambiguity_margin", 10) is None
        assert validate_key("matching.ambiguity_margin", 101) is not None
        assert validate_key("identity.domain", "user@techco.com") is not None
        assert validate_key("nope.key", 1) is not None

    def test_schema_uses_declared_types(self):
        assert {schema.config_type for schema in CONFIG_SCHEMA.values()} == set(ConfigType)

    def test_range_checked_only_for_int_keys(self):
        assert CONFIG_SCHEMA["matching.max_candidates"].validate(0) == "must be >= 1, got 0"
        assert CONFIG_SCHEMA["directory.root_department"].validate("") is None


class TestConfigLoader:
    """Test value access and validation."""

    def test_typed_getters(self, config_loader):
        assert config_loader.get_str("identity.domain") == "techco.com"
        assert config_loader.get_int("matching.auto_accept_threshold") == 80
        assert config_loader.get_json("directory.department_labels") == {"Luis Amadeo": "AI Platform"}

    def test_optional_keys_fall_back_to_default(self):
        loader = ConfigLoader({"identity.domain": "x.com"})
        assert loader.get_int("matching.candidate_floor") == 50
        assert loader.get_int("matching.max_candidates") == 5
        assert loader.get_json("directory.department_labels") == {}

    def test_missing_required_key(self):
        loader = ConfigLoader({})
        with pytest.raises(MissingKeyError):
            loader.get_str("identity.domain")

    def test_unknown_key_supplied(self):
        with pytest.raises(UnknownKeyError):
            ConfigLoader({"identity.domain": "x.com", "matching.threshold": 80})

    def test_unknown_key_requested(self, config_loader):
        with pytest.raises(UnknownKeyError):
            config_loader.get("matching.nope")

    def test_out_of_range(self):
        loader = ConfigLoader({"identity.domain": "x.com", "matching.ambiguity_margin": 150})
        with pytest.raises(ValidationError):
            loader.get_int("matching.ambiguity_margin")

    def test_bool_is_not_int(self):
        loader = ConfigLoader({"identity.domain": "x.com", "matching.max_candidates": True})
        with pytest.raises(ValidationError):
            loader.get_int("matching.max_candidates")

    def test_bad_label_table(self):
        loader = ConfigLoader({"identity.domain": "x.com", "directory.department_labels": {"Luis Amadeo": 3}})
        with pytest.raises(ValidationError):
            loader.get_json("directory.department_labels")

    def test_validate_all_collects_errors(self):
        loader = ConfigLoader({"matching.ambiguity_margin": -1})
        with pytest.raises(ConfigError) as exc_info:
            loader.validate_all()
        message = str(exc_info.value)
        assert "identity.domain" in message
        assert "matching.ambiguity_margin" in message

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("ORGMATCH_MATCHING_AMBIGUITY_MARGIN", "15")
        monkeypatch.setenv("ORGMATCH_DIRECTORY_DEPARTMENT_LABELS", '{"Sarah Okafor": "Sales"}')
        loader = ConfigLoader({"identity.domain": "x.com", "matching.ambiguity_margin": 10})
        assert loader.get_int("matching.ambiguity_margin") == 15
        assert loader.get_json("directory.department_labels") == {"Sarah Okafor": "Sales"}

    def test_cache_invalidation(self, monkeypatch):
        loader = ConfigLoader({"identity.domain": "x.com"})
        assert loader.get_int("matching.ambiguity_margin") == 10
        monkeypatch.setenv("ORGMATCH_MATCHING_AMBIGUITY_MARGIN", "20")
        assert loader.get_int("matching.ambiguity_margin") == 10
        loader.invalidate_cache("matching.ambiguity_margin")
        assert loader.get_int("matching.ambiguity_margin") == 20


class TestConfigFile:
    """Test loading from JSON files."""

    def test_nested_file(self, tmp_path):
        path = tmp_path / "orgmatch.json"
        path.write_text(
            json.dumps(
                {
                    "identity": {"domain": "techco.com"},
                    "matching": {"ambiguity_margin": 12},
                    "directory": {"department_labels": {"Sarah Okafor": "Sales"}},
                }
            )
        )
        loader = ConfigLoader.from_file(path)
        assert loader.get_int("matching.ambiguity_margin") == 12
        assert loader.get_json("directory.department_labels") == {"Sarah Okafor": "Sales"}

    def test_flat_file(self, tmp_path):
        path = tmp_path / "orgmatch.json"
        path.write_text(json.dumps({"identity.domain": "techco.com"}))
        assert ConfigLoader.from_file(path).get_str("identity.domain") == "techco.com"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigFileError):
            ConfigLoader.from_file(tmp_path / "missing.json")

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "orgmatch.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigFileError):
            ConfigLoader.from_file(path)


class TestSingleton:
    """Test singleton lifecycle."""

    def test_get_instance_before_initialize(self):
        with pytest.raises(ConfigError):
            ConfigLoader.get_instance()

    def test_initialize(self, tmp_path):
        path = tmp_path / "orgmatch.json"
        path.write_text(json.dumps({"identity": {"domain": "techco.com"}}))
        loader = ConfigLoader.initialize(config_path=path)
        assert ConfigLoader.get_instance() is loader
        assert ConfigLoader.initialize(config_path=path) is loader

    def test_initialize_validates(self, tmp_path):
        path = tmp_path / "orgmatch.json"
        path.write_text(json.dumps({"matching": {"ambiguity_margin": 10}}))
        with pytest.raises(ConfigError):
            ConfigLoader.initialize(config_path=path)

    def test_initialize_from_settings(self, tmp_path, monkeypatch):
        path = tmp_path / "orgmatch.json"
        path.write_text(json.dumps({"identity": {"domain": "techco.com"}}))
        monkeypatch.setenv("ORGMATCH_CONFIG_PATH", str(path))
        assert ConfigLoader.initialize().get_str("identity.domain") == "techco.com"

    def test_use_restores(self, config_loader):
        other = ConfigLoader({"identity.domain": "other.com"})
        with ConfigLoader.use(other):
            assert ConfigLoader.get_instance().get_str("identity.domain") == "other.com"
        assert ConfigLoader.get_instance() is config_loader
