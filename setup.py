from setuptools import setup, find_packages

setup(
    name="file-lister",
    version="1.0.0",
    description="Lazy directory-tree listing with depth and extension filters",
    packages=find_packages(include=["lister", "lister.*", "common", "common.*"]),
    python_requires=">=3.9",
    install_requires=[
        "PyYAML>=6.0",
        "rich>=13.0",
        "tqdm>=4.60",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "file-list = lister.cli:main",
        ],
    },
)
