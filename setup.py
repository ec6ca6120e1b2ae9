"""
Conductor Setup Configuration

MVC routing for Python backends.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

setup(
    name="conductor",
    version="0.1.0",

    description="Convention-based MVC routing with JSON/XML/CSV responses (standalone, Flask, FastAPI)",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["conductor", "conductor.*"]),
    include_package_data=True,
    package_data={
        "conductor.cli": ["templates/*.j2"],
    },
    install_requires=[
        "click>=8.0.0",
        "questionary>=2.0.0",
        "jinja2>=3.0.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "fastapi": ["fastapi>=0.100.0", "uvicorn[standard]>=0.20.0", "python-multipart>=0.0.6", "httpx>=0.24.0"],
        "flask": ["flask>=2.0.0"],
        "dev": [
            "pytest>=7.0.0",
            "flask>=2.0.0",
            "fastapi>=0.100.0",
            "httpx>=0.24.0",
            "python-multipart>=0.0.6",
        ],
    },
    entry_points={
        "console_scripts": [
            "conductor=conductor.cli.main:cli",
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Framework :: FastAPI",
        "Framework :: Flask",
    ],
    keywords="mvc routing controllers rest flask fastapi",
)
