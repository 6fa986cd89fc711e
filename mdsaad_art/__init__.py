"""Bundled ASCII art, laid out as ``<category>/<name>.txt``."""

from pathlib import Path

ART_ROOT = Path(__file__).resolve().parent
