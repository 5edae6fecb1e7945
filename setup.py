"""
LTO Chain Indexer: derived indexes for the LTO Network

The indexer follows an LTO node block by block and maintains anchors, public keys,
verification methods, trust network roles, associations and per-address transaction
history in a pluggable storage backend (memory, SQLite or Redis).
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh.readlines() if line.strip() and not line.startswith("#")]

# Get version from the package
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '.'))
from ltoindexer.units.version import get_version
from ltoindexer import VERSION

setup(
    name="lto-indexer",
    version=get_version(VERSION),
    description="Block indexer for anchors, identities and associations on the LTO Network",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=['ltoindexer', 'ltoindexer.*'], exclude=['tests*']),
    install_requires=requirements,
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
            "hypothesis>=6.90",
        ],
    },
    entry_points={
        "console_scripts": [
            "lto-indexer=ltoindexer.cli:lto_indexer",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Database :: Front-Ends",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
    keywords="blockchain, indexer, lto, anchoring, identity",
)
