#!/usr/bin/env python
# coding=utf-8

from setuptools import setup, find_packages

from codecs import open
import os
import re


CLASSIFIERS = """
Development Status :: 4 - Beta
Intended Audience :: Science/Research
License :: OSI Approved :: MIT License
Programming Language :: Python :: 3
Programming Language :: Python :: 3.10
Programming Language :: Python :: 3.11
Programming Language :: Python :: 3.12
Programming Language :: Python :: Implementation :: CPython
Topic :: Scientific/Engineering
Operating System :: Microsoft :: Windows
Operating System :: POSIX
Operating System :: Unix
Operating System :: MacOS
"""

MINIMUM_VERSIONS = {
    "numpy": "1.20",
    "loguru": "0.6",
    "click": "8.0",
    "jax": "0.4.14",
}


CONSOLE_SCRIPTS = [
    "npzd-box = npzd.cli.npzd_box:cli",
]

here = os.path.abspath(os.path.dirname(__file__))

with open(os.path.join(here, "README.md"), encoding="utf-8") as f:
    long_description = f.read()


def parse_requirements(reqfile):
    requirements = []

    with open(os.path.join(here, reqfile), encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            parsed = re.match(r"(\w+)(.*?)(;.*)?$", line)
            pkg, deps, extra = parsed.groups()
            if extra is None:
                extra = ""
            deps = deps.replace("==", "<=")
            if pkg in MINIMUM_VERSIONS:
                deps = f"{deps},>={MINIMUM_VERSIONS[pkg]}" if deps else f">={MINIMUM_VERSIONS[pkg]}"
            line = "".join([pkg, deps, extra])
            requirements.append(line)

    return requirements


INSTALL_REQUIRES = parse_requirements("requirements.txt")

jax_req = parse_requirements("requirements_jax.txt")
for line in jax_req:  # inject jaxlib requirement
    if line.startswith("jax"):
        jax_req.append(line.replace("jax", "jaxlib", 1))
        break

EXTRAS_REQUIRE = {
    "test": ["pytest", "pytest-cov"],
    "jax": jax_req,
}


setup(
    name="npzd",
    license="MIT",
    keywords="oceanography biogeochemistry npzd plankton ecosystem-model numpy jax",
    description="Nutrient-Phytoplankton-Zooplankton-Detritus reaction kernel for ocean models, powered by NumPy or JAX.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    version="0.1.0",
    packages=find_packages(include=["npzd", "npzd.*"]),
    install_requires=INSTALL_REQUIRES,
    extras_require=EXTRAS_REQUIRE,
    entry_points={"console_scripts": CONSOLE_SCRIPTS},
    classifiers=[c for c in CLASSIFIERS.split("\n") if c],
    zip_safe=False,
)
