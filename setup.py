# setup.py
from setuptools import setup, find_packages

setup(
    name="graph_worksheet",
    version="0.1.0",
    description="Value tables, graphs and printable worksheets for y = ax, y = ax + b and y = ax²",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "sympy",
        "matplotlib",
        "pillow",
        "numpy",
        "python-docx",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "graph-worksheet = graph_worksheet.cli:main",
        ],
    },
)
