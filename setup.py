from setuptools import setup, find_packages


setup(
    name="redshirt",
    version="0.1",
    packages=find_packages(include=["redshirt", "redshirt.*"]),
    description="Readers and writers for the Redshirt 1 and Redshirt 2 data encodings.",
    author="vercingetorx",
    python_requires=">=3.8",
    install_requires=[
        "pycryptodomex>=3.23.0",
    ],
)
