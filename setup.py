"""
Setup script for packmat

This setup.py is primarily for compatibility. The main configuration is in pyproject.toml.
It only reads the version from the package so the two never drift apart.
"""

from pathlib import Path
from setuptools import setup


# Read version from src/packmat/__init__.py
def get_version():
    version_file = Path("src/packmat/__init__.py")
    if version_file.exists():
        for line in version_file.read_text().splitlines():
            if line.startswith("__version__"):
                return line.split("=")[1].strip().strip('"').strip("'")
    return "0.1.0"


# Configuration is primarily in pyproject.toml
setup(
    version=get_version(),
)
