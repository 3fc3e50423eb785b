# setup.py
from __future__ import annotations

from setuptools import find_namespace_packages, setup

setup(
    name="pixelbuf",
    version="0.1.0",
    description="In-memory image buffers with convertible pixel layouts and channel types",
    python_requires=">=3.10",
    packages=find_namespace_packages(include=["pixelbuf", "pixelbuf.*"]),
    install_requires=[
        "numpy>=1.24",
        "Pillow>=9.1",
    ],
    extras_require={
        "test": [
            "pytest>=7",
            "pytest-benchmark>=4",
        ],
    },
)
