#!/usr/bin/env python
#
# Copyright 2014 Quantopian, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
import os

from setuptools import find_packages, setup  # noqa: E402


def read_version():
    namespace = {}
    path = os.path.join(os.path.dirname(__file__), "src", "logmerge", "_version.py")
    with open(path) as f:
        exec(f.read(), namespace)
    return namespace["version"]


setup(
    name="logmerge",
    version=read_version(),
    description="Merge timestamped log sources into one ordered stream.",
    license="Apache 2.0",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.10",
    install_requires=[
        "click>=7.1",
        "numpy>=1.16",
        "pandas>=1.3",
        "python-interface>=1.5.3",
        "toolz>=0.8.2",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
        ],
    },
    entry_points={
        "console_scripts": [
            "logmerge = logmerge.__main__:main",
        ],
    },
)
