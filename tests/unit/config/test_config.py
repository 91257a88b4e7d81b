import pytest
from pydantic import ValidationError as PydanticValidationError

from emcs.config import Config, ReferenceConfig


class TestConfig:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("EMCS_CONFIG_FILE", raising=False)
        config = Config()

        assert config.ledger.stub is True
        assert config.ledger.max_attempts == 3
        assert config.ledger.base_delay == 1.0
        assert config.reference.country_code == "EU"
        assert config.reference.max_attempts == 5

    def test_nested_env_override(self, monkeypatch):
        monkeypatch.setenv("EMCS_LEDGER__MAX_ATTEMPTS", "5")
        monkeypatch.setenv("EMCS_STORAGE__BACKEND", "memory")

        config = Config()

        assert config.ledger.max_attempts == 5
        assert config.storage.backend == "memory"

    def test_yaml_file(self, monkeypatch, tmp_path):
        config_file = tmp_path / "emcs.yaml"
        config_file.write_text("reference:\n  country_code: IE\nledger:\n  stub: false\n")
        monkeypatch.setenv("EMCS_CONFIG_FILE", str(config_file))

        config = Config()

        assert config.reference.country_code == "IE"
        assert config.ledger.stub is False

    def test_env_beats_yaml(self, monkeypatch, tmp_path):
        config_file = tmp_path / "emcs.yaml"
        config_file.write_text("reference:\n  country_code: IE\n")
        monkeypatch.setenv("EMCS_CONFIG_FILE", str(config_file))
        monkeypatch.setenv("EMCS_REFERENCE__COUNTRY_CODE", "DE")

        assert Config().reference.country_code == "DE"

    def test_country_code_must_be_two_letters(self):
        with pytest.raises(PydanticValidationError):
            ReferenceConfig(country_code="eu")
