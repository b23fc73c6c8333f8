from setuptools import setup, find_packages

VERSION = "0.1.0"
DESCRIPTION = "Enforce module boundaries between the projects of a monorepo workspace"
LONG_DESCRIPTION = (
    "monoguard checks every import in a multi-project workspace against project "
    "ownership, the dependency graph between projects, tag-based constraints and "
    "import-style rules (no deep imports, no imports of applications, no circular "
    "dependencies, no eager imports of lazy-loaded libraries)."
)

setup(
    name="monoguard",
    version=VERSION,
    author="The monoguard authors",
    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    packages=find_packages(include=["monoguard", "monoguard.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.0",
        "pyyaml>=6.0",
        "tomli>=1.2.2",
        "rich>=13.0",
        "networkx>=2.6",
        "pydot>=1.4",
        "typing_extensions>=4.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-mock>=3.10",
        ],
    },
    entry_points={
        "console_scripts": [
            "monoguard=monoguard.cli:main",
        ],
    },
    keywords=["monorepo", "module", "boundaries", "imports", "lint", "enforcement"],
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Programming Language :: Python :: 3",
    ],
)
