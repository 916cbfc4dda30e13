#!/usr/bin/env python3
"""Setup script for portalgrid."""

from setuptools import find_packages, setup

setup(
    name="portalgrid",
    version="0.1.0",
    packages=find_packages(include=["portalgrid", "portalgrid.*"]),
    py_modules=["run_portalgrid"],
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.110",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "loguru>=0.7",
        "uvicorn>=0.27",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
            "httpx>=0.26",
        ],
    },
    entry_points={
        "console_scripts": ["portalgrid=run_portalgrid:main"],
    },
)
