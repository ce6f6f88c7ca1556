# -*- coding: utf-8 -*-
#
# Author: Eric Kow
# License: BSD3
# pylint: disable=too-many-public-methods, invalid-name

"""
Tests for sentgraph
"""

import unittest

from sentgraph.annotation import (AnnotationException, MalformedGraphError,
                                  MalformedTreeError, OutOfRangeError, Span)
from sentgraph.external.corenlp import read_sentence
from sentgraph.graph import DependencyDotGraph, dependency_table
from sentgraph.ptb.annotation import (basic_category, is_clause_label,
                                      is_nominal_tag, is_noun_phrase_label,
                                      is_verb_phrase_label, is_verbal_tag)
from sentgraph.util import concat_l, group_pairs, range_gap

# ---------------------------------------------------------------------
# spans
# ---------------------------------------------------------------------


class SpanTest(unittest.TestCase):
    "tests for sentgraph.annotation.Span"

    def __init__(self, *args, **kwargs):
        super(SpanTest, self).__init__(*args, **kwargs)
        self.addTypeEqualityFunc(Span, self.assertEqualStrFail)

    def assertEqualStrFail(self, a, b, msg):
        """
        just like assertEqual but display both sides with str on failure
        """
        if a != b:
            msg = msg or "{0} != {1}".format(a, b)
            raise self.failureException(msg)

    def test_contains_offset(self):
        "offsets on both edges count"
        span = Span(10, 14)
        self.assertTrue(span.contains_offset(10))
        self.assertTrue(span.contains_offset(12))
        self.assertTrue(span.contains_offset(14))
        self.assertFalse(span.contains_offset(9))
        self.assertFalse(span.contains_offset(15))

    def test_encloses(self):
        "Span.encloses() function"
        self.assertTrue(Span(5, 10).encloses(Span(5, 10)))
        self.assertTrue(Span(5, 10).encloses(Span(6, 8)))
        self.assertFalse(Span(5, 10).encloses(Span(4, 8)))
        self.assertFalse(Span(5, 10).encloses(None))

    def test_merge_all(self):
        "stretching spans"
        self.assertEqual(Span(0, 15),
                         Span.merge_all([Span(5, 7), Span(0, 4),
                                         Span(14, 15)]))
        self.assertRaises(ValueError, Span.merge_all, [])

    def test_identity(self):
        "spans are compared by offsets"
        self.assertEqual(Span(1, 2), Span(1, 2))
        self.assertNotEqual(Span(1, 2), Span(1, 3))
        self.assertEqual(1, len(set([Span(1, 2), Span(1, 2)])))


class ExceptionTest(unittest.TestCase):
    "the error taxonomy"

    def test_hierarchy(self):
        "everything is an annotation exception"
        for exc in [MalformedTreeError, MalformedGraphError,
                    OutOfRangeError]:
            self.assertTrue(issubclass(exc, AnnotationException))

    def test_index_error(self):
        "out of range lookups can be caught as index errors"
        try:
            raise OutOfRangeError("no token 6")
        except IndexError as exc:
            self.assertEqual("no token 6", str(exc))


# ---------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------


class UtilTest(unittest.TestCase):
    "tests for sentgraph.util"

    def test_group_pairs(self):
        "grouping values by key"
        res = group_pairs([(1, 'a'), (2, 'b'), (1, 'c'), (1, 'a')])
        self.assertEqual({1: set(['a', 'c']), 2: set(['b'])}, res)
        self.assertEqual({}, group_pairs([]))

    def test_range_gap(self):
        "gap between ranges, in either order"
        self.assertEqual(3, range_gap(range(1, 3), range(5, 7)))
        self.assertEqual(3, range_gap(range(5, 7), range(1, 3)))
        self.assertEqual(1, range_gap(range(1, 3), range(3, 5)))
        self.assertEqual(0, range_gap(range(1, 4), range(3, 5)))
        self.assertEqual(0, range_gap(range(1, 9), range(3, 5)))

    def test_concat(self):
        "flattening"
        self.assertEqual([1, 2, 3], concat_l([[1], [], [2, 3]]))


class PtbTest(unittest.TestCase):
    "Penn Treebank label conventions"

    def test_basic_category(self):
        "function tags and indices are stripped"
        self.assertEqual('NP', basic_category('NP-SBJ-1'))
        self.assertEqual('S', basic_category('S=2'))
        self.assertEqual('-LRB-', basic_category('-LRB-'))
        self.assertEqual('-', basic_category('--PU'))
        self.assertEqual('.', basic_category('.'))
        self.assertEqual('', basic_category(''))

    def test_phrase_labels(self):
        "clauses, noun phrases, verb phrases"
        self.assertTrue(is_clause_label('S'))
        self.assertTrue(is_clause_label('SBAR'))
        self.assertTrue(is_clause_label('S-TPC-1'))
        self.assertFalse(is_clause_label('SQ'))
        self.assertFalse(is_clause_label('ROOT'))
        self.assertTrue(is_noun_phrase_label('NP-SBJ'))
        self.assertFalse(is_noun_phrase_label('NNP'))
        self.assertTrue(is_verb_phrase_label('VP'))
        self.assertFalse(is_verb_phrase_label('VBZ'))

    def test_tags(self):
        "tags that confirm phrases"
        for tag in ['NN', 'NNS', 'NNP', 'PRP', 'PRP$', 'WP', 'CD', 'EX']:
            self.assertTrue(is_nominal_tag(tag), tag)
        for tag in ['DT', 'JJ', 'IN', '.']:
            self.assertFalse(is_nominal_tag(tag), tag)
        for tag in ['VB', 'VBZ', 'VBD', 'MD']:
            self.assertTrue(is_verbal_tag(tag), tag)
        self.assertFalse(is_verbal_tag('NN'))


# ---------------------------------------------------------------------
# debug views
# ---------------------------------------------------------------------


def _tok(tid, word, start, end, pos):
    "token record"
    return {'id': tid, 'word': word, 'char_start': start,
            'char_end': end, 'pos': pos}


class DependencyViewTest(unittest.TestCase):
    "dot graphs and tables of dependencies"

    def setUp(self):
        self.sentence =\
            read_sentence(1,
                          [_tok(1, 'This', 0, 4, 'DT'),
                           _tok(2, 'is', 5, 7, 'VBZ'),
                           _tok(3, 'a', 8, 9, 'DT'),
                           _tok(4, 'test', 10, 14, 'NN'),
                           _tok(5, '.', 14, 15, '.')],
                          [(0, 4, 'root'),
                           (4, 1, 'nsubj'),
                           (4, 2, 'cop'),
                           (4, 3, 'det')])

    def test_dot(self):
        "one node per token plus root, one edge per dependency"
        graph = DependencyDotGraph(self.sentence)
        self.assertEqual(6, len(graph.get_nodes()))
        self.assertEqual(4, len(graph.get_edges()))
        dot = graph.to_string()
        self.assertIn('1: This DT', dot)
        self.assertIn('0: ROOT', dot)
        self.assertIn('nsubj', dot)

    def test_dot_no_root(self):
        "no ROOT node if nothing hangs off it"
        sentence = read_sentence(1,
                                 [_tok(1, 'Hi', 0, 2, 'UH'),
                                  _tok(2, '!', 2, 3, '.')],
                                 [(1, 2, 'punct')])
        graph = DependencyDotGraph(sentence)
        self.assertEqual(2, len(graph.get_nodes()))
        self.assertNotIn('ROOT', graph.to_string())

    def test_table(self):
        "one row per token"
        table = dependency_table(self.sentence)
        lines = table.splitlines()
        # header, rule, then tokens
        self.assertEqual(2 + 5, len(lines))
        self.assertIn('relation', lines[0])
        self.assertIn('nsubj', lines[2])
        self.assertIn('test', lines[5])
