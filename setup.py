#!/usr/bin/env python3
"""
Manu-shop setup script.

This setup script enables installation of the Manu-shop package
for development or production use.
"""

from setuptools import setup, find_packages

# Runtime dependencies: UI, charts, hosted database, LLM provider, config, error reporting
INSTALL_REQUIRES = [
    "streamlit>=1.37.0",
    "pandas>=2.0.0",
    "plotly>=5.18.0",
    "supabase>=2.10.0",
    "openai>=1.30.0",
    "pydantic>=2.6.0",
    "pydantic-settings>=2.1.0",
    "python-dotenv>=1.0.0",
    "sentry-sdk>=1.40.0",
]

# Test dependencies
TEST_DEPENDENCIES = [
    "pytest>=7.0.0",
    "faker>=20.0.0",
]

# Development dependencies
DEV_DEPENDENCIES = TEST_DEPENDENCIES + [
    "black>=22.3.0",
    "flake8>=4.0.1",
    "mypy>=0.950",
]

setup(
    name="manu_shop",
    version="0.1.0",
    description="Manu-shop - Inventory, point of sale and AI assistant dashboard",
    author="Manu-shop Team",

    # Package structure
    package_dir={"": "src"},
    packages=find_packages(where="src"),

    # Dependencies
    install_requires=INSTALL_REQUIRES,

    # Optional dependencies
    extras_require={
        "dev": DEV_DEPENDENCIES,
        "test": TEST_DEPENDENCIES,
    },

    python_requires=">=3.9",

    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
    ],
)
