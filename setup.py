"""
sentgraph setup: sentgraph is a library for navigating the syntactic
annotations (dependency graphs, constituency trees, coreference chains)
of parsed sentences
"""

from setuptools import setup, find_packages

REQS = [
    'frozendict',
    'nltk >= 3.0.0',
    'pydot',
    'tabulate',
]

TEST_REQS = [
    'pytest',
]


setup(name='sentgraph',
      version='0.1',
      author='Eric Kow',
      author_email='eric@erickow.com',
      packages=find_packages(),
      install_requires=REQS,
      extras_require={'test': TEST_REQS})
