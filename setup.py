#!/usr/bin/env python
# -*- encoding: utf-8 -*-
# flake8: noqa
import io
from os import path

from setuptools import setup
from setuptools import find_packages


here = path.abspath(path.dirname(__file__))


def read(*names, **kwargs):
    return io.open(
        path.join(here, *names),
        encoding=kwargs.get("encoding", "utf8")
    ).read()


long_description = read("README.md")
requirements = [line for line in read("requirements.txt").split("\n") if line]
optional_requirements = {"test": ["pytest"]}

setup(
    name="diffreg",
    version="0.1.0",
    description="Differentiable regularization penalties for gradient-based optimizers",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="",
    author="Rafael Pastrana",
    author_email="arpastrana@princeton.edu",
    license="MIT license",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Scientific/Engineering",
        "License :: OSI Approved :: MIT License",
        "Operating System :: Unix",
        "Operating System :: POSIX",
        "Operating System :: Microsoft :: Windows",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: Implementation :: CPython",
    ],
    keywords=["jax", "regularization", "ridge", "optimization", "l-bfgs"],
    project_urls={},
    packages=find_packages("src"),
    package_dir={"": "src"},
    package_data={},
    data_files=[],
    include_package_data=True,
    zip_safe=False,
    install_requires=requirements,
    python_requires=">=3.9",
    extras_require=optional_requirements,
    entry_points={
        "console_scripts": [],
    },
    ext_modules=[],
)
