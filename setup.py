"""Setup module for zigpy-devices"""

import pathlib

from setuptools import find_packages, setup

import zigpy_devices

REQUIRES = [
    "attrs",
    "frozendict",
    "voluptuous",
    "zigpy>=0.66.0,<2",
]

setup(
    name="zigpy-devices",
    version=zigpy_devices.__version__,
    description="Per-model Zigbee device definitions and converters for zigpy",
    long_description=(pathlib.Path(__file__).parent / "README.md").read_text(),
    long_description_content_type="text/markdown",
    url="https://github.com/zigpy/zigpy-devices",
    license="GPL-3.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=REQUIRES,
    extras_require={
        "testing": [
            "pytest",
            "pytest-asyncio",
            "pytest-timeout",
            "pytest-cov",
        ],
    },
    python_requires=">=3.9",
)
