from setuptools import find_packages, setup

setup(
    name="devterm",
    version="0.1.0",
    packages=find_packages(include=["devterm", "devterm.*"]),
    install_requires=[
        "pydantic>=2.0",
        "fastapi",
        "structlog",
        "pyyaml",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
            "httpx",
        ],
    },
    description="Command-language engine for a project-management terminal.",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
)
