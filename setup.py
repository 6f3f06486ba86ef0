# setup.py
from setuptools import setup, find_packages

setup(
    name="lox",
    version="0.1.0",
    description="A tree-walk interpreter for the Lox scripting language",
    packages=find_packages(include=["lox", "lox.*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.22",
        "termcolor>=2.3",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["lox=lox.cli:main"],
    },
    zip_safe=False,
)
