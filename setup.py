import re
from setuptools import setup, find_packages

# Find version without importing the package, its dependencies
# may not be installed yet.


def find_version(filename):
    _version_re = re.compile(r'__version__ = "(.*)"')
    for line in open(filename):
        version_match = _version_re.match(line)
        if version_match:
            return version_match.group(1)

version = find_version('sparqlbuilder/__init__.py')


requires = ['rdflib>=6.0', 'pyparsing>=3.0', 'requests']

setup(
    name="sparqlbuilder",
    description="Build SPARQL queries from Python, validated and pretty printed",
    version=version,
    packages=find_packages(exclude=['test', 'test.*']),
    python_requires='>=3.8',
    install_requires=requires,
    extras_require={
        'test': ['pytest'],
    },
)
