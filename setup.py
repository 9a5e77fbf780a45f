# setup.py
from setuptools import setup, find_packages

setup(
    name="mental_math",
    version="0.1.0",
    description="Choose and explain the best mental multiplication method for two integers",
    packages=find_packages(exclude=("tests", "tests.*")),
    python_requires=">=3.10",
    install_requires=[
        "sympy",
    ],
    extras_require={
        "test": [
            "pytest",
            "hypothesis",
        ],
    },
    entry_points={
        "console_scripts": [
            "mental-math = mental_math.cli:main",
        ],
    },
)
