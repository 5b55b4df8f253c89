from setuptools import setup, find_packages
import pathlib, os

# Detect layout
use_src = pathlib.Path("src/contentgen").exists()
pkg_args = {"package_dir": {"": "src"}, "packages": find_packages(where="src")} if use_src \
           else {"packages": find_packages(where=".")}

setup(
    name="contentgen",
    version="0.1.0",
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "babel>=2.12",
        "jinja2",
        "jsonpath-ng",
        "pydantic>=2",
        "pyyaml",
        "typer",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["contentgen=contentgen.cli:app"],
    },
    **pkg_args
)
