from setuptools import setup, find_packages
import pathlib

# Detect layout
use_src = pathlib.Path("src/genmap").exists()
pkg_args = {"package_dir": {"": "src"}, "packages": find_packages(where="src")} if use_src \
           else {"packages": find_packages(where=".")}

setup(
    name="gen-mapping-tools",
    version="0.1.0",
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=[
        "typer",
        "pyyaml",
        "pydantic>=2",
        "jsonschema",
    ],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["genmap=genmap.cli:app"]},
    **pkg_args
)
