import logging
import os
import sys
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from emcs.domain.consignment.model.value import GoodsCategory


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load settings from YAML file specified by EMCS_CONFIG_FILE env var."""

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get the value for a field from the YAML config."""
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all settings from YAML file."""
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        """Load config from YAML file if specified."""
        config_file = os.environ.get("EMCS_CONFIG_FILE")
        if config_file:
            path = Path(config_file)
            if path.exists():
                return yaml.safe_load(path.read_text()) or {}
        return {}


class Server(BaseModel):
    """Server configuration (nested in Config, uses env_nested_delimiter)."""

    name: str = "EMCS Consignment Ledger"
    version: str = "0.1.0"
    description: str = "Tamper-evident tracking of excise goods movements"


class LoggingConfig(BaseModel):
    """Logging configuration (nested in Config, uses env_nested_delimiter)."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @property
    def file(self) -> str | None:
        """Get log file path from EMCS_LOG_FILE env var."""
        return os.environ.get("EMCS_LOG_FILE")


class LedgerConfig(BaseModel):
    """Ledger node access and submission retry policy."""

    stub: bool = True  # Synthetic in-process ledger; set False to talk to rpc_url
    rpc_url: str = "http://127.0.0.1:9000"  # Ledger gateway JSON-RPC endpoint
    package_id: str = ""  # Deployed contract package
    max_attempts: int = Field(default=3, ge=1)
    base_delay: float = Field(default=1.0, ge=0)  # Seconds; doubled per attempt
    attempt_timeout: float | None = 30.0  # Per-attempt deadline in seconds
    request_timeout: float = 10.0  # HTTP timeout for a single RPC call


class ReferenceConfig(BaseModel):
    """ARC issuance settings."""

    country_code: str = Field(default="EU", pattern=r"^[A-Z]{2}$")
    max_attempts: int = Field(default=5, ge=1)


class StorageConfig(BaseModel):
    backend: Literal["memory", "json"] = "json"
    data_dir: str = "data"  # consignments.json / events.json live here


class OperatorConfig(BaseModel):
    """Registered excise operator (party directory entry)."""

    address: str
    excise_number: str
    company_name: str
    vat_number: str = ""
    country: str = ""
    address_line: str = ""
    authorized_goods: list[GoodsCategory] = list(GoodsCategory)


class RegistryConfig(BaseModel):
    seed_defaults: bool = True  # Include the built-in demo operators
    operators: list[OperatorConfig] = []


class Config(BaseSettings):
    # These are BaseModel, so env_nested_delimiter handles their env vars
    server: Server = Server()
    logging: LoggingConfig = LoggingConfig()
    ledger: LedgerConfig = LedgerConfig()
    reference: ReferenceConfig = ReferenceConfig()
    storage: StorageConfig = StorageConfig()
    registry: RegistryConfig = RegistryConfig()

    model_config = {
        "env_prefix": "EMCS_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",  # Allows EMCS_LEDGER__RPC_URL override
    }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML config.

        Priority (highest to lowest):
        1. init_settings - values passed to Config()
        2. env_settings - environment variables
        3. dotenv_settings - .env file
        4. yaml_settings - EMCS_CONFIG_FILE yaml
        5. file_secret_settings - secrets from files
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def configure_logging(config: LoggingConfig) -> None:
    """Configure Python logging based on config.

    Should be called early in application startup so all loggers pick up
    the configuration.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(config.format, datefmt=config.date_format)

    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(config.level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(config.level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.debug("Logging configured: level=%s, file=%s", config.level, config.file)
