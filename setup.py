"""Setuptools entry point for building and distributing PyD2RQ."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomllib
from setuptools import find_packages, setup


ROOT = Path(__file__).parent
PROJECT_METADATA: dict[str, Any] = tomllib.loads((ROOT / "pyproject.toml").read_text("utf-8"))["project"]


def _author_fields(authors: list[dict[str, str]]) -> tuple[str | None, str | None]:
    names = [author["name"] for author in authors if author.get("name")]
    emails = [author["email"] for author in authors if author.get("email")]
    return (
        ", ".join(names) if names else None,
        ", ".join(emails) if emails else None,
    )


def _readme(readme: str | dict[str, str]) -> str:
    path = readme if isinstance(readme, str) else readme.get("file", "README.md")
    return (ROOT / path).read_text("utf-8")


author, author_email = _author_fields(PROJECT_METADATA.get("authors", []))

setup(
    name=PROJECT_METADATA["name"],
    version=PROJECT_METADATA["version"],
    description=PROJECT_METADATA.get("description", ""),
    long_description=_readme(PROJECT_METADATA.get("readme", "README.md")),
    long_description_content_type="text/markdown",
    author=author,
    author_email=author_email,
    python_requires=PROJECT_METADATA.get("requires-python"),
    classifiers=PROJECT_METADATA.get("classifiers", []),
    install_requires=PROJECT_METADATA.get("dependencies", []),
    extras_require=PROJECT_METADATA.get("optional-dependencies", {}),
    packages=find_packages(where=".", include=["PyD2RQ*"]),
)
