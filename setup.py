"""
Setup script for the playground-engine package.

Installs the engine from src/ together with the ``playground-engine``
console script.
"""

from setuptools import setup, find_packages

setup(
    name="playground-engine",
    version="1.0.0",
    description="Quiz, coding-challenge and mini-game session engine for a learning platform",
    author="Platform Team",
    license="MIT",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "build",
            "wheel",
        ],
    },
    entry_points={
        "console_scripts": [
            "playground-engine=playground_engine.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Education",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
