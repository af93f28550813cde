"""
Setup script for deskscripts.

This script configures the package for installation via pip and installs
one console script per utility.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README for long description
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding='utf-8')

# Read requirements
with open(this_directory / "requirements.txt") as f:
    requirements = [line for line in f.read().splitlines() if line and not line.startswith("#")]

setup(
    name="deskscripts",
    version="1.0.0",
    description="Desktop glue utilities: pdftk concatenation, PipeWire sink switching and SMTP setup",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="deskscripts contributors",
    author_email="",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "cat-pdf=deskscripts.cli:cat_pdf",
            "change-sink=deskscripts.cli:change_sink",
            "send-invoice=deskscripts.cli:send_invoice",
        ],
    },
    python_requires=">=3.11",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "Topic :: Utilities",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Operating System :: POSIX :: Linux",
        "Environment :: Console",
    ],
    keywords="pdf pdftk concatenate pipewire pactl sink smtp cli",
    license="MIT",
    include_package_data=True,
    zip_safe=False,
)
