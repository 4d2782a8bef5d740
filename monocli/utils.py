#!/usr/bin/env python3
"""
monocli/utils.py

Utility functions for the application.

Provides functions for loading and saving JSON and YAML files, merging
configuration dictionaries and removing directory trees.
"""

import json
import logging
import os
import shutil
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from monocli.errors import ConfigurationError

logger = logging.getLogger(__name__)


def load_json(file_path: Path) -> dict:
    logger.debug("Loading JSON file: %s", file_path)
    try:
        with open(file_path, "r", encoding="utf-8") as file:
            data = json.load(file)
            logger.debug("Successfully loaded JSON from: %s", file_path)
            return data
    except FileNotFoundError:
        logger.debug("JSON file not found: %s", file_path)
        return {}
    except json.JSONDecodeError as e:
        logger.error("Error decoding JSON in %s: %s", file_path, e)
        return {}


def save_json(file_path: Path, data: dict, indent: Union[int, None] = 2) -> None:
    logger.debug("Saving JSON to file: %s", file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "w", encoding="utf-8") as file:
        json.dump(data, file, indent=indent)
        file.write("\n")
    logger.debug("JSON successfully saved to: %s", file_path)


def load_manifest(manifest_path: Path) -> Dict[str, Any]:
    """
    Load a workspace manifest (package.json, composer.json).
    Unlike load_json, a malformed manifest is a ConfigurationError.
    """
    logger.debug("Loading manifest file: %s", manifest_path)
    try:
        with manifest_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Malformed manifest {manifest_path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read manifest {manifest_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Malformed manifest {manifest_path}: expected an object")
    return data


def load_yaml(file_path: Path) -> Dict[str, Any]:
    logger.debug("Loading YAML file: %s", file_path)
    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Malformed YAML in {file_path}: {e}") from e
    return data or {}


def merge_configs(*configs: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge multiple dictionaries in order, where later values overwrite earlier ones.
    If both values for a key are dictionaries, merge them shallowly.
    """
    logger.debug("Merging %d configuration sources.", len(configs))
    result: Dict[str, Any] = {}
    for config in configs:
        if not config:
            continue
        for key, value in config.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                merged = result[key].copy()
                merged.update(value)
                result[key] = merged
            else:
                result[key] = value
    return result


def on_exc(func, path, exc):
    logger.debug("Handling exception for path: %s; Exception: %s", path, exc)
    if isinstance(exc, PermissionError):
        # Git marks pack files read-only on Windows.
        os.chmod(path, 0o777)
        func(path)
    else:
        raise exc


def force_remove(path: Path) -> None:
    """Remove a directory tree, clearing read-only flags on the way."""
    if path.exists():
        shutil.rmtree(path, onexc=on_exc)
        logger.debug("Removed directory tree: %s", path)
