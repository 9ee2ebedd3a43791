#!/usr/bin/env python

from setuptools import setup, find_packages

setup(
    name="eqlog_tools",
    version="0.2.0",
    description="Python tools for classifying and reporting on EverQuest client log files",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    include_package_data=True,
    package_data={
        "config": ["profiles/*.json"],
    },
    python_requires=">=3.8",
    install_requires=[
        "pandas>=1.0.0",
        "openpyxl>=3.0.0",
        "matplotlib>=3.0.0",
    ],
    extras_require={
        "test": ["pytest>=6.0.0"],
    },
    entry_points={
        "console_scripts": [
            "eqlog-to-csv=eqlog_tools.tools.csv_exporter:main",
            "eqlog-line-type-frequency=eqlog_tools.tools.line_type_frequency:main",
            "eqlog-unrecognized-lines=eqlog_tools.tools.unrecognized_lines:main",
        ],
    },
)
