#!/usr/bin/env python
"""
Copyright 2025 Hathor Labs

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

   http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import re
from pathlib import Path

from setuptools import find_packages, setup

# XXX: importing nanoserde here would need its dependencies installed before they are declared
version_file = Path(__file__).parent / 'nanoserde' / 'version.py'
__version__ = re.search(r"^BASE_VERSION = '([^']+)'", version_file.read_text(), re.M).group(1)

setup(
    name='nanoserde',
    version=__version__,
    description='Binary, JSON and RON serialization driven by type annotations, plus a small TOML reader',
    author='Hathor Team',
    author_email='contact@hathor.network',
    url='https://hathor.network/',
    license='Apache License 2.0',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
        'License :: OSI Approved :: Apache Software License',
    ],
    python_requires='>=3.10',
    packages=find_packages(exclude=('nanoserde_tests', 'nanoserde_tests.*')),
    package_data={'nanoserde.conf': ['*.yml']},
    install_requires=[
        'structlog',
        'pydantic>=2',
        'PyYAML',
        'typing_extensions',
    ],
    extras_require={
        'test': [
            'pytest',
            'hypothesis',
        ],
    },
)
