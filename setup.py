"""
qsshaskpass - a Qt askpass helper for ssh and git with keyring storage.
"""

from setuptools import setup, find_packages
from pathlib import Path

readme = Path(__file__).parent / "README.md"
long_description = readme.read_text() if readme.exists() else ""

setup(
    name="qsshaskpass",
    version="0.1.0",
    author="Scott Peterman",
    description="Qt SSH_ASKPASS / GIT_ASKPASS helper that remembers secrets in the system keyring",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/scottpeterman/qsshaskpass",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6>=6.4.0",
        "keyring>=24.0.0",
        "click>=8.0.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-qt>=4.0.0",
            "black>=23.0.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "qsshaskpass=qsshaskpass.__main__:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Security",
        "Topic :: System :: Networking",
    ],
    keywords="ssh askpass git keyring pyqt6 passphrase",
)
