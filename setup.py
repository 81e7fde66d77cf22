"""Package setup for tilgin_restart."""

from setuptools import setup, find_packages

setup(
    name="tilgin-restart",
    version="1.0.0",
    description="Restart a Tilgin (Hyperoptic) router through its web admin interface",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31.0",
        "urllib3>=2.0.0",
        "colorlog>=6.8.0",
        "tldextract>=5.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "tilgin-restart=tilgin_restart.cli:run",
        ],
    },
)
