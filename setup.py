import re

from setuptools import setup

with open("templatehash/__init__.py") as init:
    __version__ = re.search(r'^__version__ = "([^"]+)"', init.read(), re.M).group(1)

with open("README.rst") as readme:
    long_description = readme.read()

setup(
    name="templatehash",
    version=__version__,
    description="OP_TEMPLATEHASH template hash calculation for bitcoin-utils transactions",
    long_description=long_description,
    license="MIT",
    keywords="bitcoin templatehash covenant tapscript",
    python_requires=">=3.10",
    install_requires=[
        "bitcoin-utils>=0.8.0,<0.9",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    packages=["templatehash"],
    py_modules=["templatehash_cli"],
    entry_points={
        "console_scripts": ["templatehash=templatehash_cli:main"],
    },
    zip_safe=False,
)
