#!/usr/bin/env python3
"""
Setup script for stripcutter
============================
"""

from pathlib import Path
from setuptools import setup, find_packages

HERE = Path(__file__).parent
README = (HERE / "README.md").read_text(encoding='utf-8')


def read_requirements(filename):
    """Read requirements from a file, skipping comments"""
    req_file = HERE / filename
    if req_file.exists():
        lines = req_file.read_text().strip().split('\n')
        return [l.strip() for l in lines if l.strip() and not l.startswith('#')]
    return []


setup(
    name="stripcutter",
    version="1.0.0",
    description="Split tall comic strips and webtoon pages into panels at detected seams",
    long_description=README,
    long_description_content_type="text/markdown",
    license="MIT",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Multimedia :: Graphics",
    ],
    keywords="comics webtoon image split seam detection",

    package_dir={"": "src"},
    packages=find_packages(where="src"),

    python_requires=">=3.9",
    install_requires=read_requirements("requirements.txt"),
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov",
            "black",
            "flake8",
            "mypy",
        ],
    },

    entry_points={
        "console_scripts": [
            "stripcutter=stripcutter.cli:main",
        ],
    },
)
