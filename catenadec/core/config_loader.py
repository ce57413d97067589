"""Configuration loading and validation for YAML-based catenadec settings."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from catenadec.core.errors import ConfigLoadError, ConfigValidationError
from catenadec.core.model import DecoderSettings, HeatIndexLimits

_NESTED_SECTIONS = ("heat_index", "node")
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
class LoadedSettings:
    settings: DecoderSettings
    warnings: tuple[str, ...]


def _load_schema_validator() -> Any:
    schema_text = resources.files("catenadec.schemas").joinpath("config.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def user_config_path() -> Path:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "catenadec/config.yaml"


def _read_yaml(path: Path | Traversable) -> dict[str, Any]:
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


def _validate(doc: dict[str, Any], source: Path | Traversable) -> None:
    validator = _load_schema_validator()
    try:
        validator.validate(doc)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise ConfigValidationError(f"Schema validation failed for {source}{where}: {exc.message}") from exc


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if key in _NESTED_SECTIONS and isinstance(value, dict):
            merged[key] = {**base.get(key, {}), **value}
        else:
            merged[key] = value
    return merged


def _build_settings(doc: dict[str, Any], source: Path | Traversable) -> DecoderSettings:
    _validate(doc, source)

    limits_doc = doc.get("heat_index", {})
    limits = HeatIndexLimits(
        min_temperature_f=float(limits_doc.get("min_temperature_f", 76.0)),
        max_temperature_f=float(limits_doc.get("max_temperature_f", 126.0)),
        ceiling_f=float(limits_doc.get("ceiling_f", 183.5)),
    )
    if limits.min_temperature_f > limits.max_temperature_f:
        raise ConfigValidationError(
            f"heat_index.min_temperature_f exceeds max_temperature_f in {source}"
        )

    uplink_ports = tuple(int(p) for p in doc.get("uplink_ports", (1, 4)))
    response_port = int(doc.get("response_port", 3))
    if response_port in uplink_ports:
        raise ConfigValidationError(
            f"response_port {response_port} must not also be an uplink port in {source}"
        )

    return DecoderSettings(
        format_tag=int(doc.get("format_tag", 0x50)),
        uplink_ports=uplink_ports,
        response_port=response_port,
        default_model=int(doc.get("default_model", 5230)),
        heat_index=limits,
        derived_metrics=bool(doc.get("derived_metrics", False)),
        node=dict(doc.get("node", {})),
    )


def load_settings() -> LoadedSettings:
    warnings: list[str] = []

    defaults_path = resources.files("catenadec.config").joinpath("defaults.yaml")
    doc = _read_yaml(defaults_path)
    source: Path | Traversable = defaults_path

    user_path = user_config_path()
    if user_path.is_file():
        user_doc = _read_yaml(user_path)
        _validate(user_doc, user_path)
        for key in sorted(user_doc):
            warning = f"User config overrides packaged '{key}'"
            LOGGER.warning(warning)
            warnings.append(warning)
        doc = _merge(doc, user_doc)
        source = user_path

    return LoadedSettings(settings=_build_settings(doc, source), warnings=tuple(warnings))
