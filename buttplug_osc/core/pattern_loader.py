"""Pattern loading and validation for YAML-based vibration patterns."""

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

from buttplug_osc.core.errors import PatternLoadError, PatternValidationError
from buttplug_osc.core.model import Pattern, PatternStep

LOGGER = logging.getLogger(__name__)


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate mapping keys."""


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise PatternValidationError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


@dataclass(frozen=True)
class LoadedPatterns:
    patterns: dict[int, Pattern]
    warnings: tuple[str, ...]


def _load_schema_validator() -> Any:
    schema_text = resources.files("buttplug_osc.schemas").joinpath("pattern.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def _pattern_dirs() -> tuple[Path, Path]:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    xdg_data = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local/share"))
    return xdg_config / "buttplug-osc/patterns", xdg_data / "buttplug-osc/patterns"


def _read_yaml(path: Path | Traversable) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PatternLoadError(f"Could not read pattern file {path}: {exc}") from exc

    try:
        loaded = yaml.load(content, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise PatternValidationError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise PatternValidationError(f"Pattern file {path} must contain a mapping at root")
    return loaded


def _build_pattern(doc: dict[str, Any], source: Path | Traversable, validator: Any) -> Pattern:
    try:
        validator.validate(doc)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise PatternValidationError(f"Schema validation failed for {source}{where}: {exc.message}") from exc

    return Pattern(
        index=doc["index"],
        name=doc["name"],
        steps=tuple(
            PatternStep(
                motor=step["motor"],
                intensity=step["intensity"],
                duration_ms=step["duration_ms"],
            )
            for step in doc["steps"]
        ),
    )


def _iter_packaged_pattern_paths() -> list[Traversable]:
    pattern_root = resources.files("buttplug_osc.patterns")
    return [item for item in pattern_root.iterdir() if item.name.endswith((".yml", ".yaml"))]


def _iter_user_pattern_paths() -> list[Path]:
    paths: list[Path] = []
    for directory in _pattern_dirs():
        if not directory.exists() or not directory.is_dir():
            continue
        paths.extend(sorted(p for p in directory.iterdir() if p.suffix in {".yml", ".yaml"}))
    return paths


def load_patterns() -> LoadedPatterns:
    validator = _load_schema_validator()
    patterns: dict[int, Pattern] = {}
    warnings: list[str] = []

    for path in sorted(_iter_packaged_pattern_paths(), key=lambda p: p.name):
        pattern = _build_pattern(_read_yaml(path), path, validator)
        patterns[pattern.index] = pattern

    packaged = set(patterns)
    user_sources: dict[int, Path] = {}
    for path in _iter_user_pattern_paths():
        pattern = _build_pattern(_read_yaml(path), path, validator)
        if pattern.index in user_sources:
            raise PatternValidationError(
                f"Pattern index {pattern.index} defined in both {user_sources[pattern.index]} and {path}"
            )
        user_sources[pattern.index] = path
        if pattern.index in packaged:
            warning = f"User pattern {pattern.index} ('{pattern.name}') overrides packaged pattern"
            LOGGER.warning(warning)
            warnings.append(warning)
        patterns[pattern.index] = pattern

    return LoadedPatterns(patterns=patterns, warnings=tuple(warnings))
