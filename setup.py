import re
from setuptools import setup

version = re.search(
    r'^__version__\s*=\s*"(.*)"',
    open('cophy/cophy.py').read(),
    re.M
    ).group(1)


with open("README.rst", "rb") as f:
    long_descr = f.read().decode("utf-8")


setup(
    name = "cophy",
    packages = ["cophy"],
    entry_points = {
        "console_scripts": ['cophy = cophy.cophy:main']
        },
    version = version,
    description = "Python command line application for laying out and drawing host-parasite cophylogenies.",
    long_description = long_descr,
    long_description_content_type='text/x-rst',
    install_requires=['biopython','matplotlib'],
    extras_require={'test': ['pytest']},
    include_package_data=True,
    classifiers=(
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ),
    )
