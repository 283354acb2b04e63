from setuptools import setup, find_namespace_packages

setup(
    name="shelfstream",
    version="0.1.0",
    packages=find_namespace_packages(include=['api*', 'cli*', 'core*']),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "Click",
        "SQLAlchemy>=2.0",
        "fastapi",
        "pydantic>=2.5",
        "uvicorn",
        "anyio",
        "python-jose[cryptography]",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
    entry_points={
        "console_scripts": [
            "shelfstream=cli.main:main",
        ],
    },
)
