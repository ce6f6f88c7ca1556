# Author: Eric Kow
# License: BSD3

"""
Miscellaneous utility functions
"""

from itertools import chain


def concat_l(items):
    ":: [[a]] -> [a]"
    return list(chain.from_iterable(items))


def group_pairs(pairs):
    """
    Group an iterable of (key, value) pairs into a dictionary from
    each key to the set of values it was seen with ::

        group_pairs([(1, 'a'), (2, 'b'), (1, 'c')]) ==
            {1: {'a', 'c'}, 2: {'b'}}
    """
    res = {}
    for key, val in pairs:
        res.setdefault(key, set()).add(val)
    return res


def range_gap(left, right):
    """
    Distance between the nearest ends of two ranges of token ids;
    0 if they overlap ::

        range_gap(range(1, 3), range(5, 7)) == 3
    """
    if left.start < right.stop and right.start < left.stop:
        return 0
    elif left.stop <= right.start:
        return right.start - (left.stop - 1)
    else:
        return left.start - (right.stop - 1)
