"""
Project Metadata — Best-effort facts from a project's package.json.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from rta.models.analysis_models import ProjectMetadata

logger = logging.getLogger("rta.metadata")

# Checked in order; the first dependency present names the framework.
_FRAMEWORKS = (
    ("next", "Next.js"),
    ("@remix-run/react", "Remix"),
    ("gatsby", "Gatsby"),
    ("react-native", "React Native"),
    ("react", "React"),
)


def detect_framework(dependencies: list[str], dev_dependencies: list[str]) -> str:
    installed = set(dependencies) | set(dev_dependencies)
    for package, framework in _FRAMEWORKS:
        if package in installed:
            return framework
    return "Unknown"


def load_project_metadata(root: str | Path) -> ProjectMetadata:
    """
    Read package.json under root.

    A missing or invalid manifest yields the defaults rather than an error.
    """
    root_path = Path(root)
    manifest = root_path / "package.json"
    has_tsconfig = (root_path / "tsconfig.json").is_file()

    if not manifest.is_file():
        return ProjectMetadata(has_typescript=has_tsconfig)

    try:
        data = json.loads(manifest.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Could not read {manifest}, using default metadata: {e}")
        return ProjectMetadata(has_typescript=has_tsconfig)

    if not isinstance(data, dict):
        return ProjectMetadata(has_typescript=has_tsconfig)

    dependencies = _names(data.get("dependencies"))
    dev_dependencies = _names(data.get("devDependencies"))

    return ProjectMetadata(
        project_name=str(data.get("name") or "Unknown Project"),
        framework=detect_framework(dependencies, dev_dependencies),
        version=str(data.get("version") or "0.0.0"),
        dependencies=dependencies,
        dev_dependencies=dev_dependencies,
        has_typescript=has_tsconfig or "typescript" in dependencies + dev_dependencies,
    )


def _names(section: object) -> list[str]:
    return sorted(section) if isinstance(section, dict) else []
