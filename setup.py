# SPDX-FileCopyrightText: (c) 2025 Tenstorrent AI ULC
#
# SPDX-License-Identifier: Apache-2.0

#!/usr/bin/env python3
# rstr Python package setup

import pathlib

from setuptools import setup

readme = None

version = "0.1.0"

# Read README.md file from project root
readme_path = pathlib.Path(__file__).absolute().parent / "README.md"
with open(str(readme_path), "r", encoding="utf-8") as f:
    readme = f.read()

setup(
    name="rstr",
    version=version,
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2,<3",
        "loguru",
    ],
    extras_require={
        "test": ["pytest"],
    },
    packages=["rstr"],
    package_dir={"rstr": "python/rstr"},
    zip_safe=False,
    # Write to readme
    long_description=readme,
    long_description_content_type="text/markdown",
)
