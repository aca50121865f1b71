# setup.py
from setuptools import setup, find_packages

setup(
    name="lox",
    version="0.1.0",
    description="Tree-walking interpreter for the Lox scripting language",
    packages=find_packages(include=["lox", "lox.*", "lox_lsp", "lox_lsp.*"]),
    python_requires=">=3.11",
    install_requires=[],
    extras_require={
        "lsp": ["pygls>=1.1,<2", "lsprotocol"],
        "test": ["pytest", "hypothesis", "pygls>=1.1,<2", "lsprotocol"],
    },
    entry_points={
        "console_scripts": [
            "lox=lox.__main__:main",
        ],
    },
    zip_safe=False,
)
