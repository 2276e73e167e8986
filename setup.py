from setuptools import setup, find_packages

setup(
    name="xml-json-etl",
    version="0.1.0",
    description="Convert XML documents to JSON, inferring lists from tag names",
    author="Your Name",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "snowballstemmer>=2.2",
        "structlog>=23.1",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "pyyaml>=6.0",
        "typer>=0.9",
        "rich>=13.0",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "xml-json-etl=xml_json_etl.cli:app"
        ]
    },
    python_requires=">=3.10",
    include_package_data=True,
)
