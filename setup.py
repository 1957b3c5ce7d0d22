from setuptools import setup, find_packages

setup(
    name="template-registry-sdk",
    version="0.1.0",
    description="Python SDK and CLI for the template registry API",
    author="Template Registry Team",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "httpx>=0.25.1",
        "pydantic>=2.5.0",
        "structlog>=23.2.0",
        "pyyaml>=6.0",
        "click>=8.1.7",
        "rich>=13.7.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "template-registry=template_registry.cli:cli",
        ],
    },
    python_requires=">=3.10",
)
