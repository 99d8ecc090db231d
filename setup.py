# setup.py
from setuptools import setup, find_packages

setup(
    name="eta",
    version="0.1.0",
    description="Lisp-syntax front end that compiles S-expressions to Python syntax trees",
    packages=find_packages(include=["eta", "eta.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
