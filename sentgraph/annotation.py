"""
Low-level building blocks shared by the rest of the library: character
spans, and the exceptions raised when annotations do not hold together.

Query functions elsewhere in the library never raise to say that some
relationship does not exist (no common ancestor, no path, nothing found);
they return None or an empty collection. The exceptions below are kept
for input that is broken, or for lookups that make no sense.
"""

# Author: Eric Kow
# License: CeCILL-B (French BSD3)

# pylint: disable=too-few-public-methods


class AnnotationException(Exception):
    """
    Conditions that arise when annotations cannot be turned into
    a consistent structure
    """
    def __init__(self, *args, **kw):
        super(AnnotationException, self).__init__(*args, **kw)


class MalformedTreeError(AnnotationException):
    """
    A bracketed constituency string does not follow the grammar
    (unbalanced parentheses, missing label, terminal without text),
    or the resulting tree does not cover the sentence's tokens.

    No partial tree is ever produced.
    """
    def __init__(self, msg):
        super(MalformedTreeError, self).__init__(msg)


class MalformedGraphError(AnnotationException):
    """
    Dependency edges do not form a rooted forest over the sentence's
    tokens (a dependent with two governors, a cycle, an unknown token)
    """
    def __init__(self, msg):
        super(MalformedGraphError, self).__init__(msg)


class OutOfRangeError(AnnotationException, IndexError):
    """
    Lookup by token or sentence id outside of the valid range
    """
    def __init__(self, msg):
        super(OutOfRangeError, self).__init__(msg)


class Span(object):
    """
    Character offsets of a token (or of a run of tokens) in the text
    of a document.

    Offsets sit between characters, so in ::

          T   h   i   s
        0   1   2   3   4

    the word is `Span(0, 4)`. The end offset is the position just past
    the last character, which `contains_offset` still counts as part of
    the span.
    """
    def __init__(self, start, end):
        self.char_start = start
        self.char_end = end

    def __str__(self):
        return '(%d,%d)' % (self.char_start, self.char_end)

    def __repr__(self):
        return 'Span(%d, %d)' % (self.char_start, self.char_end)

    def __eq__(self, other):
        if not isinstance(other, Span):
            return NotImplemented
        return\
            self.char_start == other.char_start and\
            self.char_end == other.char_end

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return (self.char_start, self.char_end).__hash__()

    def contains_offset(self, offset):
        """
        True if the offset falls within this span, counting both of its
        edges (so that the offset just past a word still finds it)
        """
        return self.char_start <= offset <= self.char_end

    def encloses(self, other):
        """
        True if the other span lies entirely within this one (edges
        included, so a span encloses itself); False for None
        """
        if other is None:
            return False
        else:
            return\
                self.char_start <= other.char_start and\
                self.char_end >= other.char_end

    @classmethod
    def merge_all(cls, spans):
        """
        Smallest span covering all of the given spans
        """
        spans = list(spans)
        if len(spans) < 1:
            raise ValueError("must have at least one span")
        big_start = min(x.char_start for x in spans)
        big_end = max(x.char_end for x in spans)
        return Span(big_start, big_end)
