"""
Setup script for the colour region growing package
"""
from setuptools import setup, find_packages
import sys

# Check Python version
if sys.version_info < (3, 9):
    sys.exit('Python >= 3.9 is required')

# Read README for long description
try:
    with open("README.md", "r", encoding="utf-8") as f:
        long_description = f.read()
except FileNotFoundError:
    long_description = ""

setup(
    name="reggrow",
    version="0.1.0",
    author="Mvzvrt",
    description="Colour region growing segmentation with fixed and adaptive thresholds",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    # Command line scripts live at the repository root
    py_modules=["region_grow", "region_grow_seeded"],
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.19.0",
        "pillow>=8.0.0",
        "tqdm>=4.0.0",
        "matplotlib>=3.3.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "region-grow=region_grow:main",
            "region-grow-seeded=region_grow_seeded:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: Image Processing",
    ],
)
