#!/usr/bin/env python

# SPDX-FileCopyrightText: 2026 shuttlemap contributors
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- encoding: utf-8 -*-

from setuptools import find_packages
from setuptools import setup

setup(
    name="shuttlemap",
    version="0.1.0",
    license="GPL-3.0-or-later",
    description="Map Contour ShuttlePRO buttons, jog dial and shuttle ring to X11 keystrokes",
    long_description="Reads a per-window rule file and turns ShuttlePRO input into synthetic key and button events via XTest.",
    packages=find_packages("src"),
    package_dir={"": "src"},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: X11 Applications",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: Multimedia :: Video :: Non-Linear Editor",
    ],
    keywords=["shuttlepro", "evdev", "xtest"],
    python_requires=">=3.10",
    install_requires=[
        "cattrs>=23.1.0",
        "libevdev>=0.11",
        "msgspec",
        "python-xlib>=0.33",
        "trio>=0.22.0",
    ],
    extras_require={
        "test": ["pytest>=6.2.4", "pytest-trio>=0.8.0"],
    },
    entry_points={
        "console_scripts": [
            "shuttlemap = shuttlemap.app:main",
            "shuttlemap-check = shuttlemap.scripts:check_config_cli",
            "shuttlemap-events = shuttlemap.scripts:print_shuttle_events",
        ],
    },
    setup_requires=[
        "setuptools>=30.3.0",
        "wheel",
    ],
)
