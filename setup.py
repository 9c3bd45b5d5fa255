#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from setuptools import setup, find_packages

setup(
    name="radar_frame_processor",
    version="1.0.0",
    description="Per-frame clustering of radar returns into object detections",
    author="Your Name",
    author_email="your.email@example.com",
    url="https://github.com/yourusername/radar_frame_processor",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["main"],
    include_package_data=True,
    install_requires=[
        "numpy>=1.19.0",
        "pandas>=1.1.0",
        "matplotlib>=3.3.0",
        "scipy>=1.6.0",
        "PyYAML>=5.3",
    ],
    extras_require={
        "dev": ["pytest>=6.0.0", "pylint>=2.5.0"],
    },
    entry_points={
        "console_scripts": [
            "radar_processor=main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Topic :: Scientific/Engineering",
        "License :: OSI Approved :: MIT License",
    ],
    python_requires=">=3.8",
)
