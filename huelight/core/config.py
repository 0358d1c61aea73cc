"""Bridge configuration loading and validation."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from huelight.core.errors import ConfigLoadError, ConfigValidationError

LOGGER = logging.getLogger(__name__)


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate mapping keys."""


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise ConfigValidationError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


@dataclass(frozen=True)
class BridgeConfig:
    host: str
    username: str
    scheme: str = "http"
    timeout_s: float = 5.0


def config_path() -> Path:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "huelight/bridge.yaml"


def _load_schema_validator() -> Any:
    schema_text = resources.files("huelight.schemas").joinpath("bridge.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigLoadError(f"Could not read config file {path}: {exc}") from exc

    try:
        loaded = yaml.load(content, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise ConfigValidationError(f"Invalid YAML in {path}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigValidationError(f"Config file {path} must contain a mapping at root")
    return loaded


def _validate(doc: dict[str, Any], source: Path) -> None:
    try:
        _load_schema_validator().validate(doc)
    except ValidationError as exc:
        where = ".".join(str(p) for p in exc.path)
        where = f" ({where})" if where else ""
        raise ConfigValidationError(f"Schema validation failed for {source}{where}: {exc.message}") from exc


def load_bridge_config(
    *,
    host: str | None = None,
    username: str | None = None,
    path: Path | None = None,
) -> BridgeConfig:
    """Build a bridge config from the YAML file, with explicit arguments taking precedence."""
    source = path or config_path()
    doc: dict[str, Any] = {}
    if source.is_file():
        doc = _read_yaml(source)
        _validate(doc, source)
        LOGGER.debug("Loaded bridge config from %s", source)
    elif path is not None:
        raise ConfigLoadError(f"Config file {source} does not exist")

    resolved_host = host or doc.get("host")
    resolved_username = username or doc.get("username")
    if not resolved_host or not resolved_username:
        raise ConfigLoadError(
            f"Bridge host and username are required. Pass --host/--username or set them in {source}."
        )

    return BridgeConfig(
        host=resolved_host,
        username=resolved_username,
        scheme=doc.get("scheme", "http"),
        timeout_s=float(doc.get("timeout_s", 5.0)),
    )
