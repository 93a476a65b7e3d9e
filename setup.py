"""
Setup script for codetrack.

CodeTrack is a local, terminal-based progress tracker for curated
coding-interview problem lists (Blind 75, LeetCode 75, NeetCode 150):

1. Problem lists - Mark problems solved, filter by topic and difficulty
2. Spaced repetition - Five reviews at 1, 3, 7, 14 and 30 days
3. Local state - One JSON file, with export/import and backups

The 'codetrack' command is the entry point.
"""

from setuptools import find_packages, setup

setup(
    name="codetrack",
    version="1.0.0",
    description="Spaced-repetition progress tracker for coding-interview problem lists",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(include=["src", "src.*"]),
    py_modules=["config"],
    package_data={"src.tracker": ["data/*.json"]},
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "codetrack=src.tracker.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
    ],
    keywords="leetcode spaced-repetition cli interview-prep",
)
