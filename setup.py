"""
Setup script for the word-conquest package.

Installs the game engine from src/ and registers the ``word-conquest``
console command. Internal modules (_*) are shipped as plain source
next to the public API (store, cli, runner, types, errors).
"""

from setuptools import setup, find_packages

setup(
    name="word-conquest",
    version="1.0.0",
    description="Word Conquest - vocabulary quiz territory game engine",
    author="Word Conquest Team",
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
            "word-conquest=word_conquest.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Education",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Games/Entertainment",
    ],
)
