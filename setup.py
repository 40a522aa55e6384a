#!/usr/bin/env python
# -*- coding: utf-8 -*-

from setuptools import find_packages, setup


# Load the __version__ variable
exec(open('vow/__version__.py').read())


with open('README.rst') as readme_file:
    long_description = readme_file.read()


setup_kwargs = {
    'name': "vow",
    'version': __version__,  # noqa
    'description': "Single-threaded Deferred values, with callback chains "
                   "and fan-in lists",
    'long_description': long_description,
    'author': "vow developers",
    'license': "GPLv3",
    'classifiers': [
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Libraries"
    ],
    'keywords': "deferred promise future callback async",
    'packages': find_packages(exclude=['tests', 'tests.*']),
    'install_requires': [
        'appdirs>=1.4',
    ],
    'extras_require': {
        'test': ['pytest', 'tox'],
    },
    'zip_safe': False,
}


setup(**setup_kwargs)
