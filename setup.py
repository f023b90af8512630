# setup.py
from setuptools import setup, find_packages

setup(
    name="openrouter_flow",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "typer>=0.9.0",
        "questionary>=2.0.0",
        "python-dotenv>=1.0.0",
        "loguru>=0.7.2",
        "httpx>=0.24.1",
    ],
    extras_require={
        "test": [
            "pytest>=8.0.0",
            "pytest-asyncio>=0.23.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'openrouter-flow=openrouter_flow.cli:app',
        ],
    },
)
