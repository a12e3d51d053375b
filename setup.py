"""Packaging for the PocketPlayer application.

Runtime dependencies are listed in ``requirements.txt``; install with
``pip install -e .[test]`` for development.
"""
from __future__ import annotations

from pathlib import Path

from setuptools import find_namespace_packages, setup

ROOT = Path(__file__).resolve().parent
REQUIREMENTS_FILE = ROOT / "requirements.txt"


def read_requirements() -> list[str]:
    """Return the requirement specifiers, skipping comments and blank lines."""
    lines = REQUIREMENTS_FILE.read_text(encoding="utf-8").splitlines()
    return [line.strip() for line in lines if line.strip() and not line.startswith("#")]


setup(
    name="pocketplayer",
    version="0.1.0",
    description="Local-file music player with shuffle and a desktop now playing surface",
    python_requires=">=3.10",
    packages=find_namespace_packages(include=["PocketPlayer", "PocketPlayer.*"]),
    install_requires=read_requirements(),
    extras_require={"test": ["pytest>=7.4"]},
    entry_points={"gui_scripts": ["pocketplayer = PocketPlayer.__main__:main"]},
)
