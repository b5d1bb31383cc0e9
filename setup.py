import os

from setuptools import find_packages, setup

setup(
    name="pathcheck",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "pydantic>=2.10.6,<3.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
            "hypothesis>=6.100",
        ],
    },
    author="Pathcheck Contributors",
    description="Composable, path-aware validation with fail-fast and fail-slow combinators",
    long_description=open("README.md").read() if os.path.exists("README.md") else "",
    long_description_content_type="text/markdown",
)
