from setuptools import setup, find_packages

setup(
    name="nodehub",
    version="0.1.0",
    description="NodeHub - реестр нод хостинг-панели и сверка их состояния",
    author="NodeHub Team",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "typer>=0.16.0",
        "rich>=13.7.1",
        "fastapi>=0.110.0",
        "uvicorn>=0.29.0",
        "pydantic>=2.6.0",
        "httpx>=0.27.0",
        "PyYAML>=6.0.2",
        "python-dotenv>=1.0.1",
    ],
    extras_require={
        "test": [
            "pytest>=8.3.2",
        ],
    },
    entry_points={
        "console_scripts": [
            "nodehub=nodehub.apps.cli.app:app",  # команда `nodehub`
        ],
    },
)
