from setuptools import setup

setup(
    name="pdf_split",
    version="0.1",
    packages=["pdf_split"],
    python_requires=">=3.9",
    install_requires=[
        "pdfplumber>=0.10.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": ["pdf-split=pdf_split.cli:main"],
    },
)
