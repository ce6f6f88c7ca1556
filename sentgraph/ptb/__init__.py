# Author: Eric Kow
# License: BSD3
# pylint: disable=W0401

"""
Conventions specific to the Penn Treebank.

The constituency strings and part of speech tags we consume follow
the PTB label set
"""

from .annotation import *
