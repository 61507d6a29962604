# This file is part of layerplan.

# Imports:

from setuptools import setup


# Constants

#: Runtime dependencies.
INSTALL_REQUIRES = [
    "numpy",
]

#: Extra dependencies for running the test suite under pytest.
#: The suite itself is plain unittest, and setup.py's test_suite
#: works without them.
TESTS_REQUIRE = [
    "pytest",
]


# Setup script "main()":

setup(
    name='layerplan',
    version='0.1.0',
    description='Composite-order planning for layered, animated images.',
    license="GPLv2+",

    packages=['layerplan', 'layerplan.layer'],
    python_requires=">=3.6",
    install_requires=INSTALL_REQUIRES,
    extras_require={
        "test": TESTS_REQUIRE,
    },
    test_suite='tests',
)
