"""LinkedWith setup - who was connected to whom, and when."""
from setuptools import setup, find_packages

setup(
    name="linkedwith",
    version="1.0.0",
    description="LinkedWith: temporal social graph with time-filtered neighborhoods",
    packages=find_packages(include=["linkedwith", "linkedwith.*", "linkedwith_cli", "linkedwith_cli.*"]),
    python_requires=">=3.10",
    install_requires=[
        "click>=8.0",
        "networkx>=3.0",
        "blake3>=0.3",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "linkedwith=linkedwith_cli.main:cli",
        ],
    },
)
