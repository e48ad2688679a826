"""Installed package version."""

from __future__ import annotations

import importlib.metadata

DISTRIBUTION_NAME = "tabdent"


def package_version() -> str:
    try:
        return importlib.metadata.version(DISTRIBUTION_NAME)
    except importlib.metadata.PackageNotFoundError:
        return "unknown"
