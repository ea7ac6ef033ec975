from setuptools import setup, find_packages

setup(
    name="dialect-adapter",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "pydantic>=2.0",
        "structlog>=23.1.0",
        "PyYAML>=6.0",
        "jsonschema>=4.0",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "dialect-adapter=dialect_adapter.core.cli:main",
        ],
    },
    description="Bidirectional translation between the Chat Completions and Response API dialects.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
)
