# setup.py
from setuptools import setup, find_packages

setup(
    name="lisper",
    version="0.3.0",
    description="A small interpreter for a LISP-family language",
    packages=find_packages(include=["lisper", "lisper.*", "lisper_lsp", "lisper_lsp.*"]),
    python_requires=">=3.11",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol>=2023.0.0",
    ],
    extras_require={
        "test": ["pytest>=7", "hypothesis>=6"],
    },
    entry_points={
        "console_scripts": [
            "lisper=lisper.__main__:main",
            "lisper-ls=lisper_lsp.server:main",
        ],
    },
    zip_safe=False,
)
