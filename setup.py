from setuptools import setup, find_packages

setup(
    name="thumbkit",
    version="0.1.0",
    description="Compact placeholder hashes for small RGBA images",
    author="Andrew Luetgers",
    packages=find_packages(include=["thumbkit", "thumbkit.*"]),
    install_requires=[
        "numpy>=1.21.0",
        "click>=8.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "Pillow>=9.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "thumbkit=thumbkit.cli:main",
        ],
    },
    python_requires=">=3.7",
)
