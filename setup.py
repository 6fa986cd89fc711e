#!/usr/bin/env python3
"""
Setup script for mdsaad
"""

from setuptools import setup
from pathlib import Path

# Read the contents of README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

# Read requirements
requirements = []
with open(this_directory / "requirements.txt", "r", encoding="utf-8") as f:
    for line in f:
        line = line.strip()
        if line and not line.startswith("#"):
            requirements.append(line)

setup(
    name="mdsaad",
    version="1.2.0",
    description="Terminal ASCII art display system with colors, color schemes and animations",
    long_description=long_description,
    long_description_content_type="text/markdown",
    py_modules=[
        "mdsaad",
        "art_catalog",
        "render_engine",
        "colors",
        "terminal",
        "metadata_cache",
        "config_manager",
        "logger",
        "errors",
        "completion",
    ],
    packages=["mdsaad_art"],
    package_data={"mdsaad_art": ["*/*.txt"]},
    install_requires=requirements,
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "mdsaad=mdsaad:run",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "Topic :: Artistic Software",
        "Topic :: Terminals",
        "Topic :: Utilities",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: POSIX :: Linux",
        "Operating System :: MacOS",
        "Operating System :: Microsoft :: Windows",
        "Environment :: Console",
    ],
    python_requires=">=3.8",
    keywords="ascii art terminal cli animation",
    include_package_data=True,
    zip_safe=False,
)
