"""Configuration loading: YAML files validated against pydantic models."""

import os
from pathlib import Path
from typing import TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from reading_recs.models.config import ServiceConfig
from reading_recs.utils.logging import get_logger

logger = get_logger(__name__)

CONFIG_ENV_VAR = "READING_RECS_CONFIG"
DEFAULT_CONFIG_PATH = Path("config/service.yaml")

ModelT = TypeVar("ModelT", bound=BaseModel)


def resolve_config_path(file_path: Path | str | None = None) -> Path:
    """
    Pick the configuration file to read.

    An explicit path wins, then ``$READING_RECS_CONFIG``, then
    ``config/service.yaml`` relative to the working directory.
    """
    if file_path is not None:
        return Path(file_path)
    return Path(os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH)


def load_yaml_config(file_path: Path | str, model_class: type[ModelT]) -> ModelT:
    """
    Read a YAML file and validate it as ``model_class``.

    An empty file counts as an empty mapping, so every field keeps its default.

    Raises:
        FileNotFoundError: If the file does not exist
        yaml.YAMLError: If the YAML is malformed
        ValidationError: If the content does not match the model
    """
    path = Path(file_path)
    if not path.is_file():
        logger.error("Configuration file not found", path=str(path))
        raise FileNotFoundError(f"Configuration file not found: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        logger.error("Invalid YAML syntax", path=str(path), error=str(e))
        raise

    try:
        config = model_class.model_validate(raw or {})
    except ValidationError as e:
        logger.error(
            "Configuration validation failed",
            path=str(path),
            errors=e.error_count(),
            first_error=e.errors()[0]["msg"],
        )
        raise

    logger.info("Configuration loaded", path=str(path), model=model_class.__name__)
    return config


def load_service_config(
    file_path: Path | str | None = None,
    *,
    missing_ok: bool = False,
) -> ServiceConfig:
    """
    Load the service configuration.

    Args:
        file_path: YAML file; resolved with ``resolve_config_path`` when omitted
        missing_ok: Fall back to built-in defaults when the file does not exist

    Returns:
        Validated ServiceConfig
    """
    path = resolve_config_path(file_path)
    if missing_ok and not path.exists():
        logger.warning("Configuration file not found, using defaults", path=str(path))
        return ServiceConfig()
    return load_yaml_config(path, ServiceConfig)
