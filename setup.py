"""Setup script for the patch diagram renderer."""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="patchvis",
    version="1.0.0",
    author="Nayyer",
    author_email="nayyer@example.com",
    description="Render modular-synthesizer patch descriptions as SVG diagrams",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/yourusername/patchvis",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Multimedia :: Graphics",
        "Topic :: Multimedia :: Sound/Audio",
    ],
    python_requires=">=3.9",
    install_requires=[
        "pyyaml>=6.0",
        "svgwrite>=1.4.0",
        "click>=8.0.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "flake8>=6.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "patchvis=patchvis.cli.main:main",
        ],
    },
)
