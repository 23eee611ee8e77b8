"""Read the manifest.json a dbt compile leaves in the project's target directory"""

import json
import os
from collections import Counter
from pathlib import Path

import yaml

from chartdesk.utils.custom_logger import CustomLogger

logger = CustomLogger("chartdesk.dbt")

DEFAULT_TARGET_PATH = "target"


class ManifestLoadError(Exception):
    """raised when the manifest file cannot be read or parsed"""


def get_manifest_path(target_dir) -> Path:
    """the manifest lives at <target_dir>/manifest.json"""
    return Path(target_dir) / "manifest.json"


def get_target_dir(project_dir) -> Path:
    """
    the target directory of a dbt project: `target-path` from dbt_project.yml,
    relative to the project, or "target" if it is not set
    """
    project_dir = Path(project_dir)
    dbt_project_filename = project_dir / "dbt_project.yml"
    target_path = DEFAULT_TARGET_PATH
    if os.path.exists(dbt_project_filename):
        with open(dbt_project_filename, "r", encoding="utf-8") as dbt_project_file:
            dbt_project = yaml.safe_load(dbt_project_file) or {}
        target_path = dbt_project.get("target-path") or DEFAULT_TARGET_PATH
    return project_dir / target_path


def load_manifest(target_dir) -> dict:
    """parse the manifest. any failure to read or parse it raises ManifestLoadError"""
    filename = get_manifest_path(target_dir)
    logger.debug(f"loading dbt manifest from {filename}")
    try:
        with open(filename, "r", encoding="utf-8") as manifest_file:
            return json.load(manifest_file)
    except (OSError, ValueError) as err:
        raise ManifestLoadError(f"Could not load manifest from {filename}:\n  {err}") from err


def summarize_manifest(manifest: dict) -> dict:
    """node counts per resource type, the number of sources and the model names"""
    nodes = manifest.get("nodes") or {}
    resource_types = Counter(node.get("resource_type", "unknown") for node in nodes.values())
    models = sorted(
        node["name"] for node in nodes.values() if node.get("resource_type") == "model"
    )
    return {
        "dbt_version": (manifest.get("metadata") or {}).get("dbt_version"),
        "resource_types": dict(resource_types),
        "sources": len(manifest.get("sources") or {}),
        "models": models,
    }
