# -*- coding: utf-8 -*-
#
# Author: Eric Kow
# License: CeCILL-B (French BSD3)

# pylint: disable=R0904, invalid-name

"""
Tests for sentgraph.external
"""

import itertools
import unittest
import warnings

import nltk.tree

from sentgraph.annotation import (MalformedGraphError, MalformedTreeError,
                                  OutOfRangeError, Span)
from .corenlp import (Document, DocumentIndex, Sentence, read_chain,
                      read_document, read_sentence, read_token)
from .coref import Chain, Mention
from .depgraph import DependencyGraph
from .parser import (LEFT, RIGHT, TEXT, Internal, Leaf, ParseTree,
                     build_tree, node_to_range, parse_node, tokenize_tree_str)
from .phrase import has_dep_relationship, share_sentence
from .postag import Token

# ---------------------------------------------------------------------
# fixture: "This is a test. I hope it works."
# ---------------------------------------------------------------------


def _tok(tid, word, lemma, start, end, pos):
    "token record"
    return {'id': tid, 'word': word, 'lemma': lemma,
            'char_start': start, 'char_end': end,
            'pos': pos, 'ner': 'O'}


PARSE_1 = "(ROOT (S (NP (DT This)) (VP (VBZ is) (NP (DT a) (NN test)))"\
    " (. .))) "
PARSE_2 = "(ROOT (S (NP (PRP I)) (VP (VBP hope) (SBAR (S (NP (PRP it))"\
    " (VP (VBZ works))))) (. .))) "

SENTENCES = [
    {'tokens': [_tok(1, 'This', 'this', 0, 4, 'DT'),
                _tok(2, 'is', 'be', 5, 7, 'VBZ'),
                _tok(3, 'a', 'a', 8, 9, 'DT'),
                _tok(4, 'test', 'test', 10, 14, 'NN'),
                _tok(5, '.', '.', 14, 15, '.')],
     'dependencies': [(0, 4, 'root'),
                      (4, 1, 'nsubj'),
                      (4, 2, 'cop'),
                      (4, 3, 'det')],
     'parse': PARSE_1},
    {'tokens': [_tok(1, 'I', 'I', 16, 17, 'PRP'),
                _tok(2, 'hope', 'hope', 18, 22, 'VBP'),
                _tok(3, 'it', 'it', 23, 25, 'PRP'),
                _tok(4, 'works', 'work', 26, 31, 'VBZ'),
                _tok(5, '.', '.', 31, 32, '.')],
     'dependencies': [(0, 2, 'root'),
                      (2, 1, 'nsubj'),
                      (4, 3, 'nsubj'),
                      (2, 4, 'ccomp')],
     'parse': PARSE_2},
]

CHAINS = [[{'sentence': 1, 'start': 3, 'end': 5, 'head': 4,
            'representative': True},
           {'sentence': 1, 'start': 1, 'end': 2, 'head': 1},
           {'sentence': 2, 'start': 3, 'end': 4, 'head': 3}]]


def mk_test_doc():
    "the two sentence test document"
    return read_document('Test Doc', SENTENCES, CHAINS)


def pick_tokens(sentence, token_ids):
    "set of tokens from a sentence"
    return frozenset(sentence.token_by_id(i) for i in token_ids)


# ---------------------------------------------------------------------
# tokens
# ---------------------------------------------------------------------


class TokenTest(unittest.TestCase):
    "annotated tokens"

    def test_identity(self):
        "tokens are identified by sentence and token id"
        t1 = Token(1, 1, 'This', 'this', 0, 4, 'DT')
        t1b = Token(1, 1, 'That', 'that', 0, 4, 'DT')
        t2 = Token(1, 2, 'I', 'I', 16, 17, 'PRP')
        self.assertEqual(t1, t1b)
        self.assertEqual(hash(t1), hash(t1b))
        self.assertNotEqual(t1, t2)
        self.assertEqual(1, len(set([t1, t1b])))

    def test_ordering(self):
        "sentence id first, then token id"
        toks = [Token(2, 2, 'b', 'b', 0, 1, 'NN'),
                Token(5, 1, 'a', 'a', 0, 1, 'NN'),
                Token(1, 2, 'c', 'c', 0, 1, 'NN')]
        self.assertEqual([(1, 5), (2, 1), (2, 2)],
                         [t.key() for t in sorted(toks)])
        self.assertTrue(toks[1] < toks[0])
        self.assertTrue(toks[0] >= toks[2])

    def test_read_only(self):
        "tokens cannot be modified"
        tok = Token(1, 1, 'This', 'this', 0, 4, 'DT')
        with self.assertRaises(AttributeError):
            tok.word = 'That'

    def test_record(self):
        "reading a token record"
        tok = read_token(3, {'id': '2', 'word': ' is ', 'char_start': 5,
                             'char_end': 7, 'pos': 'VBZ'})
        self.assertEqual((3, 2), tok.key())
        self.assertEqual(' is ', tok.lemma)
        self.assertEqual('O', tok.ner)
        self.assertEqual('is', str(tok))
        self.assertEqual(Span(5, 7), tok.span)
        self.assertTrue(tok.is_verb())
        self.assertFalse(tok.is_noun())
        self.assertTrue(tok.contains_offset(7))
        self.assertFalse(tok.contains_offset(8))

    def test_pos_predicates(self):
        "coarse part of speech"
        tok = Token(1, 1, 'Paris', 'Paris', 0, 5, 'NNP')
        self.assertTrue(tok.is_noun())
        self.assertTrue(tok.is_proper_noun())
        self.assertFalse(tok.is_pronoun())
        self.assertTrue(Token(2, 1, 'it', 'it', 6, 8, 'PRP$').is_pronoun())
        self.assertTrue(Token(3, 1, 'big', 'big', 9, 12, 'JJR').is_adj())
        self.assertTrue(Token(4, 1, 'so', 'so', 13, 15, 'RB').is_adv())


# ---------------------------------------------------------------------
# constituency trees
# ---------------------------------------------------------------------


class TreeTokenizeTest(unittest.TestCase):
    "splitting bracketed strings"

    def test_simple(self):
        "brackets, labels, words"
        toks = tokenize_tree_str("(NP (DT a))")
        self.assertEqual([LEFT, TEXT, LEFT, TEXT, TEXT, RIGHT, RIGHT],
                         [t.kind for t in toks])
        self.assertEqual([None, None, None, None, 1, None, None],
                         [t.index for t in toks])

    def test_no_whitespace(self):
        "parentheses need not be surrounded by spaces"
        toks = tokenize_tree_str("(NP(DT a)(NN b))")
        words = [(t.text, t.index) for t in toks if t.index is not None]
        self.assertEqual([('a', 1), ('b', 2)], words)

    def test_newlines(self):
        "any whitespace separates atoms"
        toks = tokenize_tree_str("(NP\n\t(DT a)\n  (NN b))")
        self.assertEqual(['NP', 'DT', 'a', 'NN', 'b'],
                         [t.text for t in toks if t.kind == TEXT])


class _CountingList(list):
    "list that keeps track of how many items were looked up"

    def __init__(self, items):
        super(_CountingList, self).__init__(items)
        self.reads = 0

    def __getitem__(self, key):
        self.reads += 1
        return super(_CountingList, self).__getitem__(key)


class TreeBuildTest(unittest.TestCase):
    "reading constituency trees"

    def test_noun_phrase(self):
        "single noun phrase"
        tree = build_tree("(ROOT (NP (DT The) (NN dog)))")
        self.assertIsInstance(tree.root, Internal)
        self.assertEqual('ROOT', tree.root.label)
        self.assertEqual(1, len(tree.root.children))
        np = tree.root.children[0]
        self.assertEqual('NP', np.label)
        self.assertEqual([1, 2], [kid.index for kid in np.children])
        self.assertTrue(all(isinstance(kid, Leaf) for kid in np.children))
        self.assertEqual([], list(tree.clauses))
        self.assertEqual([range(1, 3)], tree.noun_phrases())
        self.assertEqual(['ROOT', 'NP', 'DT', 'NN'],
                         [n.label for n in tree.nodes()])

    def test_leaves(self):
        "one leaf per token, numbered left to right"
        for parse, words in [(PARSE_1, 'This is a test .'),
                             (PARSE_2, 'I hope it works .')]:
            tree = build_tree(parse)
            leaves = tree.leaves()
            self.assertEqual(list(range(1, 6)), [l.index for l in leaves])
            self.assertEqual(words.split(), [l.text for l in leaves])
            self.assertEqual(len(nltk.tree.Tree.fromstring(parse).leaves()),
                             len(tree))

    def test_parse_node(self):
        "reading a node straight off tokens"
        leaf, pos = parse_node(tokenize_tree_str("(NN dog)"))
        self.assertIsInstance(leaf, Leaf)
        self.assertEqual(('NN', 'dog', 1), (leaf.label, leaf.text, leaf.index))
        self.assertEqual(4, pos)

    def test_parse_node_position(self):
        "reading stops right after the node's closing bracket"
        toks = tokenize_tree_str("(NP (DT a) (NN b)) (VP (VB c))")
        node, pos = parse_node(toks)
        self.assertEqual(['DT', 'NN'], [kid.label for kid in node.children])
        self.assertEqual(10, pos)
        node, pos = parse_node(toks, pos)
        self.assertEqual('VP', node.label)
        self.assertEqual(len(toks), pos)

    def test_single_pass(self):
        "each token is read a bounded number of times, however deep"
        for depth in [10, 100, 1000]:
            toks = _CountingList(tokenize_tree_str("(X " * depth + "(NN w)" +
                                                   ")" * depth))
            node, pos = parse_node(toks)
            self.assertEqual(len(toks), pos)
            self.assertEqual('X', node.label)
            self.assertTrue(toks.reads <= 2 * len(toks),
                            "%d reads for %d tokens" % (toks.reads, len(toks)))

    def test_deep(self):
        "deep trees do not exhaust the stack"
        depth = 5000
        tree = build_tree("(X " * depth + "(NN w)" + ")" * depth)
        self.assertEqual(1, len(tree))
        self.assertEqual(depth + 1, len(tree.nodes()))
        self.assertEqual(range(1, 2), node_to_range(tree.root))

    def test_read_only(self):
        "nodes cannot be modified"
        tree = build_tree("(ROOT (NP (DT The) (NN dog)))")
        with self.assertRaises(AttributeError):
            tree.root.label = 'S'

    def test_identity(self):
        "identical subtrees are still different nodes"
        tree = build_tree("(ROOT (S (NP (DT a)) (NP (DT a))))")
        first, second = tree.root.children[0].children
        self.assertNotEqual(first, second)
        self.assertIs(tree.parent(first), tree.parent(second))
        self.assertEqual(2, len(set([first, second])))

    def test_malformed(self):
        "broken trees are rejected"
        for bad in ["",
                    "NP (DT a)",
                    "((DT a))",
                    "(NP (DT a)",
                    "(NP (DT a) (NN b)",
                    "(NP (DT a b))",
                    "(NP )",
                    "(S (NP (DT a)) word)",
                    "(NP (DT a))) (NN b)",
                    "(NP (DT a)) (NP (DT b))"]:
            with self.assertRaises(MalformedTreeError, msg=bad):
                build_tree(bad)

    def test_nltk(self):
        "to and from NLTK trees"
        ntree = nltk.tree.Tree.fromstring(PARSE_2)
        tree = ParseTree.from_nltk(ntree)
        self.assertEqual(ntree, tree.to_nltk())
        self.assertEqual(ntree, build_tree(PARSE_2).to_nltk())
        self.assertEqual(str(ntree), str(tree))
        self.assertEqual([l.index for l in build_tree(PARSE_2).leaves()],
                         [l.index for l in tree.leaves()])

    def test_nltk_malformed(self):
        "preterminals must have exactly one word"
        with self.assertRaises(MalformedTreeError):
            ParseTree.from_nltk(nltk.tree.Tree('NP', ['a', 'b']))


class ParseTreeTest(unittest.TestCase):
    "indices and searches on constituency trees"

    def setUp(self):
        self.tree1 = build_tree(PARSE_1)
        self.tree2 = build_tree(PARSE_2)

    def test_parents(self):
        "parent lookup by node and by token id"
        tree = self.tree1
        self.assertIsNone(tree.parent(tree.root))
        self.assertEqual('NP', tree.parent(1).label)
        self.assertEqual('VP', tree.parent(tree.leaf(2)).label)
        self.assertIsNone(tree.parent(42))
        for node in tree.nodes()[1:]:
            self.assertIn(node, tree.parent(node).children)

    def test_leaf_out_of_range(self):
        "no such token"
        self.assertRaises(OutOfRangeError, self.tree1.leaf, 6)
        self.assertRaises(OutOfRangeError, self.tree1.leaf, 0)

    def test_clauses(self):
        "clauses and the tokens directly in them"
        tree = self.tree2
        self.assertEqual(['S', 'SBAR', 'S'], [c.label for c in tree.clauses])
        outer, _, inner = tree.clauses
        for i in [1, 2, 5]:
            self.assertEqual(frozenset([outer]), tree.clause_index[i])
        for i in [3, 4]:
            self.assertEqual(frozenset([inner]), tree.clause_index[i])
        self.assertTrue(tree.same_clause(1, 2))
        self.assertTrue(tree.same_clause(3, 4))
        self.assertFalse(tree.same_clause(1, 3))
        self.assertFalse(tree.same_clause(1, 42))

    def test_descendants(self):
        "depth relative to the starting node, document order"
        tree = self.tree1
        vp = tree.parent(2)
        found = [(n.label, d) for n, d in tree.descendants_with_depth(vp)]
        self.assertEqual([('VBZ', 1), ('NP', 1), ('DT', 2), ('NN', 2)],
                         found)
        pruned = tree.descendants(tree.root, lambda n: n.label != 'VP')
        self.assertEqual(['S', 'NP', 'DT', '.'], [n.label for n in pruned])

    def test_phrases(self):
        "phrases are checked against their tags"
        # NP (DT This) has no nominal tag
        self.assertEqual([range(3, 5)], self.tree1.noun_phrases())
        self.assertEqual([range(2, 5)], self.tree1.verb_phrases())
        self.assertEqual([range(1, 2), range(3, 4)],
                         self.tree2.noun_phrases())
        self.assertEqual([range(2, 5), range(4, 5)],
                         self.tree2.verb_phrases())

    def test_node_to_range(self):
        "token ids covered by a node"
        tree = self.tree1
        self.assertEqual(range(3, 5), node_to_range(tree.parent(3)))
        self.assertEqual(range(1, 6), node_to_range(tree.root))
        self.assertEqual(range(2, 3), node_to_range(tree.leaf(2)))

    def test_nearest_cousin(self):
        "first match in document order, outside of where we came from"
        tree = self.tree2
        is_pronoun = lambda n: n.is_leaf() and n.label == 'PRP'
        never = lambda n: False
        self.assertEqual(range(3, 4),
                         tree.nearest_cousin(is_pronoun, never, 4))
        self.assertEqual(range(3, 4),
                         tree.nearest_cousin(is_pronoun, never, 2))
        self.assertIsNone(tree.nearest_cousin(lambda n: n.label == 'ADJP',
                                              never, 2))

    def test_nearest_subject(self):
        "noun phrase above, skipping verb phrases"
        self.assertEqual(range(1, 2), self.tree1.nearest_subject(2))
        self.assertEqual(range(1, 2), self.tree1.nearest_subject(4))
        self.assertEqual(range(1, 2), self.tree2.nearest_subject(2))
        self.assertEqual(range(3, 4), self.tree2.nearest_subject(4))
        tree = build_tree("(ROOT (NP (DT The) (NN dog)))")
        self.assertIsNone(tree.nearest_subject(1))
        self.assertIsNone(self.tree1.nearest_subject(42))

    def test_nearest_object(self):
        "noun phrase below, shallowest then closest"
        self.assertEqual(range(3, 5), self.tree1.nearest_object(2))
        self.assertEqual(range(3, 4), self.tree2.nearest_object(2))
        self.assertIsNone(self.tree2.nearest_object(4))
        # equal depth: lexically closer wins
        tree = build_tree("(ROOT (VP (VB give) (NP (NN book))"
                          " (NP (PRP him))))")
        self.assertEqual(range(2, 3), tree.nearest_object(1))
        tree = build_tree("(ROOT (VP (NP (DT the) (NN book)) (ADVP (RB so))"
                          " (VB give) (NP (PRP him))))")
        self.assertEqual(range(5, 6), tree.nearest_object(4))
        # complete ties go to document order
        tree = build_tree("(ROOT (VP (NP (NN book)) (VB give)"
                          " (NP (PRP him))))")
        self.assertEqual(range(1, 2), tree.nearest_object(2))
        # shallower wins even if further
        tree = build_tree("(ROOT (VP (VB saw) (S (NP (NN x))) (NP (NN y))))")
        self.assertEqual(range(3, 4), tree.nearest_object(1))

    def test_nearest_object_from_phrase(self):
        "starting from a phrase searches below the phrase itself"
        vp1 = self.tree1.parent(2)
        self.assertEqual('VP', vp1.label)
        self.assertEqual(range(3, 5), self.tree1.nearest_object(vp1))
        self.assertEqual(range(1, 2),
                         self.tree2.nearest_object(self.tree2.root))
        np1 = self.tree1.parent(1)
        self.assertIsNone(self.tree1.nearest_object(np1))

    def test_verbs(self):
        "governing and dependent verb phrases"
        self.assertEqual(range(2, 5), self.tree1.governing_verb(4))
        self.assertIsNone(self.tree1.governing_verb(1))
        self.assertEqual(range(4, 5), self.tree2.governing_verb(4))
        self.assertEqual(range(2, 5), self.tree2.dependent_verb(1))
        self.assertEqual(range(4, 5), self.tree2.dependent_verb(3))
        self.assertEqual(range(2, 5), self.tree1.dependent_verb(1))


# ---------------------------------------------------------------------
# dependencies
# ---------------------------------------------------------------------


class DependencyGraphTest(unittest.TestCase):
    "dependency graphs over token ids"

    def setUp(self):
        self.graph = DependencyGraph(5, SENTENCES[1]['dependencies'])

    def test_basics(self):
        "lookups"
        graph = self.graph
        self.assertEqual([2], graph.roots())
        self.assertIsNone(graph.parent(2))
        self.assertEqual(2, graph.parent(4))
        self.assertEqual('ccomp', graph.label(4))
        self.assertIsNone(graph.label(5))
        self.assertEqual([1, 4], graph.children(2))
        self.assertEqual([(2, 1, 'nsubj'), (0, 2, 'root'),
                          (4, 3, 'nsubj'), (2, 4, 'ccomp')],
                         graph.edges())

    def test_ancestry(self):
        "ancestors, descendants, depth"
        graph = self.graph
        self.assertEqual([2, 4, 3], graph.ancestors(3))
        self.assertEqual([5], graph.ancestors(5))
        self.assertEqual(frozenset([1, 3, 4]), graph.descendants(2))
        self.assertEqual(frozenset(), graph.descendants(5))
        self.assertEqual([0, 1, 2], [graph.depth(i) for i in [2, 4, 3]])

    def test_distance(self):
        "common ancestors, distances and paths"
        graph = self.graph
        self.assertEqual(2, graph.common_ancestor(1, 3))
        self.assertEqual(4, graph.common_ancestor(3, 4))
        self.assertIsNone(graph.common_ancestor(1, 5))
        self.assertEqual(3, graph.syntactic_distance(1, 3))
        self.assertEqual(1, graph.syntactic_distance(4, 3))
        self.assertIsNone(graph.syntactic_distance(5, 1))
        self.assertEqual([1, 2, 4, 3], graph.path(1, 3))
        self.assertEqual([3, 4, 2], graph.path(3, 2))
        self.assertEqual([4], graph.path(4, 4))
        self.assertIsNone(graph.path(5, 3))

    def test_forest(self):
        "tokens attached to a token that is not attached themselves"
        graph = DependencyGraph(4, [(1, 2, 'amod'), (3, 4, 'det')])
        self.assertEqual([1, 2], graph.ancestors(2))
        self.assertEqual(1, graph.common_ancestor(1, 2))
        self.assertIsNone(graph.common_ancestor(2, 4))
        self.assertEqual([], graph.roots())

    def test_deep(self):
        "long chains"
        size = 2000
        edges = [(0, 1, 'root')] + [(i, i + 1, 'dep') for i in range(1, size)]
        graph = DependencyGraph(size, edges)
        self.assertEqual(size - 1, len(graph.descendants(1)))
        self.assertEqual(size - 1, graph.depth(size))
        self.assertEqual(size - 1, graph.syntactic_distance(1, size))

    def test_malformed(self):
        "edges must form a forest over the tokens"
        for size, edges in [(2, [(0, 1, 'root'), (0, 1, 'root')]),
                            (2, [(0, 1, 'root'), (1, 2, 'a'), (0, 2, 'b')]),
                            (2, [(1, 1, 'self')]),
                            (2, [(0, 3, 'root')]),
                            (2, [(3, 1, 'x')]),
                            (3, [(1, 2, 'x'), (2, 3, 'y'), (3, 1, 'z')])]:
            with self.assertRaises(MalformedGraphError, msg=str(edges)):
                DependencyGraph(size, edges)


# ---------------------------------------------------------------------
# sentences
# ---------------------------------------------------------------------


class SentenceSyntaxTest(unittest.TestCase):
    "dependency queries on sentences"

    def setUp(self):
        self.doc = mk_test_doc()
        self.sent1 = self.doc.sentence_by_id(1)
        self.sent2 = self.doc.sentence_by_id(2)

    def test_common_ancestor(self):
        "two regular tokens have a common ancestor"
        sent = self.sent1
        result = sent.common_ancestor(sent.token_by_id(1),
                                      sent.token_by_id(2))
        self.assertEqual(sent.token_by_id(4), result)
        self.assertEqual('test', result.word)
        sent = self.sent2
        self.assertEqual(sent.token_by_id(2),
                         sent.common_ancestor(sent.token_by_id(1),
                                              sent.token_by_id(4)))

    def test_governor_is_common_ancestor(self):
        "a governing token is its own common ancestor with a descendant"
        sent = self.sent2
        token1 = sent.token_by_id(2)
        token2 = sent.token_by_id(4)
        self.assertEqual(token1, sent.common_ancestor(token1, token2))

    def test_punctuation(self):
        "unattached punctuation has no relatives and does not throw"
        sent = self.sent1
        punc = sent.token_by_id(5)
        self.assertEqual([punc], sent.ancestors(punc))
        self.assertEqual(frozenset(), sent.descendants(punc))
        self.assertEqual([], sent.children(punc))
        self.assertIsNone(sent.parent(punc))
        self.assertEqual(0, sent.depth(punc))
        self.assertIsNone(sent.common_ancestor(sent.token_by_id(1), punc))
        self.assertIsNone(sent.syntactic_distance(punc, sent.token_by_id(1)))
        self.assertEqual(0, sent.syntactic_distance(punc, punc))

    def test_ancestors(self):
        "regular tokens have ancestors"
        sent = self.sent1
        tok = sent.token_by_id(1)
        self.assertEqual([sent.token_by_id(4), tok], sent.ancestors(tok))

    def test_children(self):
        "children and descendants"
        sent = self.sent2
        self.assertEqual(pick_tokens(sent, [1, 4]),
                         frozenset(sent.children(sent.token_by_id(2))))
        self.assertEqual(pick_tokens(sent, [1, 3, 4]),
                         sent.descendants(sent.token_by_id(2)))
        self.assertEqual([], sent.children(sent.token_by_id(3)))
        self.assertEqual(frozenset(), sent.descendants(sent.token_by_id(3)))
        self.assertEqual(frozenset(), sent.descendants(sent.token_by_id(5)))
        self.assertEqual(sent.token_by_id(2), sent.parent(sent.token_by_id(4)))

    def test_different_sentences(self):
        "tokens in different sentences have no common ancestor"
        token1 = self.sent1.token_by_id(1)
        token2 = self.sent2.token_by_id(2)
        self.assertIsNone(self.sent1.common_ancestor(token1, token2))
        self.assertIsNone(self.sent2.common_ancestor(token1, token2))
        self.assertIsNone(self.sent1.syntactic_distance(token1, token2))
        self.assertIsNone(self.sent1.path(token1, token2))
        self.assertEqual([], self.sent1.ancestors(token2))

    def test_properties(self):
        "depth, symmetry, distances"
        for sent in self.doc.sentences:
            toks = sent.tokens()
            for tok in toks:
                self.assertTrue(sent.depth(tok) >= 0)
                depths = [sent.depth(a) for a in sent.ancestors(tok)]
                self.assertEqual(list(range(len(depths))), depths)
                self.assertEqual(tok, sent.common_ancestor(tok, tok))
            for tok, tok2 in itertools.product(toks, toks):
                self.assertEqual(sent.common_ancestor(tok, tok2),
                                 sent.common_ancestor(tok2, tok))
                dist = sent.syntactic_distance(tok, tok2)
                self.assertEqual(dist, sent.syntactic_distance(tok2, tok))
                self.assertEqual(dist == 0, tok == tok2)

    def test_distance_and_path(self):
        "distance goes through the lowest common ancestor"
        sent = self.sent2
        t1, t2, t3, t4 = sent.tokens_by_id(range(1, 5))
        self.assertEqual(3, sent.syntactic_distance(t1, t3))
        self.assertEqual(2, sent.syntactic_distance(t2, t3))
        self.assertEqual([t1, t2, t4, t3], sent.path(t1, t3))
        self.assertEqual([t3, t4, t2], sent.path(t3, t2))
        self.assertIsNone(sent.path(t1, sent.token_by_id(5)))

    def test_dep_types(self):
        "relation labels match by substring"
        sent1, sent2 = self.sent1, self.sent2
        self.assertEqual('nsubj', sent1.dep_type(sent1.token_by_id(1)))
        self.assertIsNone(sent1.dep_type(sent1.token_by_id(5)))
        self.assertTrue(sent1.is_subject(sent1.token_by_id(1)))
        self.assertFalse(sent1.is_object(sent1.token_by_id(1)))
        self.assertTrue(sent2.has_dep_type(sent2.token_by_id(4), 'comp'))
        self.assertFalse(sent2.has_dep_type(sent2.token_by_id(5), 'comp'))
        self.assertEqual([sent1.token_by_id(3)], sent1.tokens_with_type('det'))
        self.assertEqual(sent2.tokens_by_id([1, 3]), sent2.subjects())
        self.assertEqual([], sent2.objects())
        self.assertEqual([sent1.token_by_id(4)], sent1.roots())

    def test_nearest_token_with_type(self):
        "syntactically closest token with a relation"
        sent = self.sent2
        t1, t2, t3, t4 = sent.tokens_by_id(range(1, 5))
        self.assertEqual(t1, sent.nearest_token_with_type(t3, 'subj'))
        self.assertEqual(t3, sent.nearest_token_with_type(t4, 'subj'))
        self.assertEqual(t1, sent.nearest_token_with_type(t4, 'subj',
                                                          subset=[t1, t2]))
        self.assertIsNone(sent.nearest_token_with_type(t4, 'obj'))
        self.assertIsNone(sent.nearest_token_with_type(sent.token_by_id(5),
                                                       'subj'))

    def test_nearest_token_tie(self):
        "ties go to the lowest token id"
        sent = read_sentence(1,
                             [_tok(1, 'big', 'big', 0, 3, 'JJ'),
                              _tok(2, 'red', 'red', 4, 7, 'JJ'),
                              _tok(3, 'dog', 'dog', 8, 11, 'NN')],
                             [(0, 3, 'root'), (3, 2, 'amod'), (3, 1, 'amod')])
        dog = sent.token_by_id(3)
        self.assertEqual(sent.token_by_id(1),
                         sent.nearest_token_with_type(dog, 'mod'))
        self.assertTrue(sent.is_modifier(sent.token_by_id(2)))

    def test_lookup(self):
        "token ids out of range"
        self.assertRaises(OutOfRangeError, self.sent1.token_by_id, 0)
        self.assertRaises(OutOfRangeError, self.sent1.token_by_id, 6)
        self.assertRaises(OutOfRangeError, self.sent1.tokens_by_id,
                          range(4, 8))
        self.assertEqual(1, self.sent1.min_token_id)
        self.assertEqual(5, self.sent1.max_token_id)
        self.assertEqual('This is a test .', str(self.sent1))


class SentencePhraseTest(unittest.TestCase):
    "constituency queries on sentences"

    def setUp(self):
        self.doc = mk_test_doc()
        self.sent1 = self.doc.sentence_by_id(1)
        self.sent2 = self.doc.sentence_by_id(2)

    def test_nearest_subject(self):
        "head of the subject phrase"
        sent1, sent2 = self.sent1, self.sent2
        self.assertEqual(range(1, 2),
                         sent1.nearest_subject_phrase(sent1.token_by_id(2)))
        self.assertEqual(sent1.token_by_id(1),
                         sent1.nearest_subject(sent1.token_by_id(2)))
        self.assertEqual(sent2.token_by_id(3),
                         sent2.nearest_subject(sent2.token_by_id(4)))

    def test_nearest_object(self):
        "head of the object phrase"
        sent = self.sent1
        self.assertEqual(range(3, 5),
                         sent.nearest_object_phrase(sent.token_by_id(2)))
        self.assertEqual(sent.token_by_id(4),
                         sent.nearest_object(sent.token_by_id(2)))

    def test_verbs(self):
        "heads of verb phrases"
        sent = self.sent2
        self.assertEqual(sent.token_by_id(2),
                         sent.dependent_verb(sent.token_by_id(1)))
        self.assertEqual(sent.token_by_id(4),
                         sent.governing_verb(sent.token_by_id(4)))
        self.assertIsNone(self.sent1.governing_verb(self.sent1.token_by_id(1)))

    def test_same_clause(self):
        "tokens in the same clause"
        sent = self.sent2
        t1, t2, t3, t4 = sent.tokens_by_id(range(1, 5))
        self.assertTrue(sent.same_clause(t1, t2))
        self.assertTrue(sent.same_clause(t3, t4))
        self.assertFalse(sent.same_clause(t1, t3))
        self.assertFalse(sent.same_clause(t1, self.sent1.token_by_id(1)))

    def test_phrase_head(self):
        "unattached phrases fall back to their last token"
        sent = self.sent1
        self.assertEqual(sent.token_by_id(4), sent.phrase_head(range(3, 6)))
        self.assertEqual(sent.token_by_id(5), sent.phrase_head(range(5, 6)))
        self.assertIsNone(sent.phrase_head(None))

    def test_foreign_token(self):
        "tokens from another sentence have no phrases here"
        sent1, sent2 = self.sent1, self.sent2
        tok = sent2.token_by_id(2)
        self.assertIsNone(sent1.nearest_subject_phrase(tok))
        self.assertIsNone(sent1.nearest_object_phrase(tok))
        self.assertIsNone(sent1.governing_verb_phrase(tok))
        self.assertIsNone(sent1.dependent_verb_phrase(tok))
        self.assertIsNone(sent1.nearest_object(tok))

    def test_no_tree(self):
        "sentences without a parse"
        record = SENTENCES[0]
        sent = read_sentence(1, record['tokens'], record['dependencies'])
        tok = sent.token_by_id(2)
        self.assertIsNone(sent.tree)
        self.assertIsNone(sent.nearest_subject(tok))
        self.assertIsNone(sent.nearest_object_phrase(tok))
        self.assertFalse(sent.same_clause(tok, sent.token_by_id(1)))
        self.assertEqual(sent.token_by_id(4),
                         sent.common_ancestor(tok, sent.token_by_id(3)))

    def test_nltk_parse(self):
        "parses can come as NLTK trees"
        record = SENTENCES[1]
        sent = read_sentence(2, record['tokens'], record['dependencies'],
                             nltk.tree.Tree.fromstring(PARSE_2))
        self.assertEqual(sent.token_by_id(3),
                         sent.nearest_subject(sent.token_by_id(4)))

    def test_mismatch(self):
        "tree and tokens must agree"
        record = SENTENCES[0]
        self.assertRaises(MalformedTreeError, read_sentence, 1,
                          record['tokens'], record['dependencies'],
                          "(ROOT (NP (DT The) (NN dog)))")
        self.assertRaises(OutOfRangeError, read_sentence, 1,
                          record['tokens'][1:], [], None)
        tok = Token(1, 2, 'a', 'a', 0, 1, 'DT')
        self.assertRaises(OutOfRangeError, Sentence, 1, [tok], [])


# ---------------------------------------------------------------------
# documents
# ---------------------------------------------------------------------


class DocumentTest(unittest.TestCase):
    "cross sentence queries"

    def setUp(self):
        self.doc = mk_test_doc()
        self.sent1 = self.doc.sentence_by_id(1)
        self.sent2 = self.doc.sentence_by_id(2)

    def test_lookup(self):
        "sentences and tokens by id"
        doc = self.doc
        self.assertEqual('hope', doc.token_by_id(2, 2).word)
        self.assertEqual(10, len(doc.tokens()))
        self.assertIs(self.sent2, doc.sentence_by_token(doc.token_by_id(2, 1)))
        self.assertRaises(OutOfRangeError, doc.sentence_by_id, 0)
        self.assertRaises(OutOfRangeError, doc.sentence_by_id, 3)
        self.assertRaises(OutOfRangeError, doc.token_by_id, 2, 6)
        self.assertEqual(['a', 'test'],
                         [t.word for t in doc.tokens_in(1, range(3, 5))])
        self.assertEqual('Test Doc', str(doc))
        self.assertEqual(Document('Test Doc', []), doc)

    def test_offsets(self):
        "tokens by character offset"
        doc = self.doc
        self.assertEqual(doc.token_by_id(1, 1), doc.token_at_offset(0))
        self.assertEqual(doc.token_by_id(1, 4), doc.token_at_offset(14))
        self.assertEqual(doc.token_by_id(1, 5), doc.token_at_offset(15))
        self.assertEqual(doc.token_by_id(2, 1), doc.token_at_offset(16))
        self.assertIsNone(doc.token_at_offset(100))
        self.assertEqual(doc.token_by_id(2, 2),
                         doc.token_that_covers(Span(18, 20)))
        self.assertIsNone(doc.token_that_covers(Span(13, 16)))

    def test_window(self):
        "windows are clamped to the sentence"
        doc = self.doc
        sent = self.sent1
        self.assertEqual(sent.tokens_by_id([2, 3, 4]),
                         doc.window([sent.token_by_id(3)], 1))
        self.assertEqual(sent.tokens_by_id([1, 2, 3]),
                         doc.window([sent.token_by_id(1)], 2))
        self.assertEqual(sent.tokens_by_id([2, 3, 4, 5]),
                         doc.window([sent.token_by_id(5)], 3))
        self.assertEqual(sent.tokens_by_id([1, 2, 3, 4, 5]),
                         doc.window(sent.tokens_by_id([3, 2]), 10))
        left, right = doc.context([sent.token_by_id(3)], 1)
        self.assertEqual([sent.token_by_id(2)], left)
        self.assertEqual([sent.token_by_id(4)], right)
        left, right = doc.context([sent.token_by_id(1)], 1)
        self.assertEqual([], left)

    def test_lexical_distance(self):
        "distances within and across sentences"
        doc = self.doc
        sent1, sent2 = self.sent1, self.sent2
        this = [sent1.token_by_id(1)]
        test = [sent1.token_by_id(4)]
        hope = [sent2.token_by_id(2)]
        self.assertEqual(3, doc.lexical_distance(this, test))
        self.assertEqual(3, doc.lexical_distance(test, this))
        self.assertEqual(0, doc.lexical_distance(sent1.tokens_by_id([1, 2]),
                                                 sent1.tokens_by_id([2, 3])))
        self.assertEqual(3, doc.lexical_distance(test, hope))
        self.assertEqual(3, doc.lexical_distance(hope, test))
        self.assertEqual(1, doc.lexical_distance([sent1.token_by_id(5)],
                                                 [sent2.token_by_id(1)]))

    def test_three_sentences(self):
        "sizes of the sentences in between count"
        doc = read_document('d3', SENTENCES + SENTENCES[:1])
        first = [doc.token_by_id(1, 4)]
        last = [doc.token_by_id(3, 2)]
        self.assertEqual(1 + 5 + 2, doc.lexical_distance(first, last))

    def test_coref(self):
        "coreference chains and their mentions"
        doc = self.doc
        self.assertEqual(1, len(doc.chains))
        chain = doc.chains[0]
        self.assertEqual(3, len(chain))
        self.assertIs(chain.mentions[0], chain.canonical)
        self.assertEqual(['a', 'test'],
                         [t.word for t in doc.mention_tokens(chain.canonical)])
        self.assertEqual([chain], doc.chains_for(doc.token_by_id(2, 3)))
        self.assertEqual([], doc.chains_for(doc.token_by_id(2, 1)))
        self.assertTrue(chain.mentions[1].contains(doc.token_by_id(1, 1)))
        self.assertFalse(chain.mentions[1].contains(doc.token_by_id(2, 1)))

    def test_read_chain(self):
        "mention records"
        chain = read_chain(CHAINS[0])
        self.assertEqual(3, len(chain))
        self.assertEqual(range(3, 5), chain.canonical.span)
        self.assertEqual(4, chain.canonical.head)
        self.assertEqual([range(3, 5), range(1, 2), range(3, 4)],
                         [m.span for m in chain])

    def test_coref_no_representative(self):
        "the first mention stands in for a missing representative"
        mentions = [Mention(1, range(1, 2), 1), Mention(2, range(3, 4), 3)]
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always')
            chain = Chain(mentions)
        self.assertIs(mentions[0], chain.canonical)
        self.assertEqual(1, len(caught))

    def test_index(self):
        "tokens by word"
        index = DocumentIndex(self.doc)
        self.assertEqual([self.doc.token_by_id(1, 1)], index.lookup('this'))
        self.assertEqual([self.doc.token_by_id(2, 3)], index.lookup('IT'))
        self.assertEqual(2, len(index.lookup('.')))
        self.assertEqual([], index.lookup('nope'))

    def test_malformed(self):
        "a broken parse means no document"
        bad = dict(SENTENCES[1])
        bad['parse'] = "(ROOT (S (NP (PRP I))"
        self.assertRaises(MalformedTreeError, read_document, 'bad',
                          [SENTENCES[0], bad])

    def test_order_warning(self):
        "offset lookup assumes sentences are in order"
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always')
            read_document('backwards', [SENTENCES[1], SENTENCES[0]])
        self.assertEqual(1, len(caught))


class PhraseTest(unittest.TestCase):
    "relationships between phrases"

    def setUp(self):
        self.doc = mk_test_doc()
        self.sent1 = self.doc.sentence_by_id(1)
        self.sent2 = self.doc.sentence_by_id(2)

    def test_different_sentences(self):
        "tokens from different sentences have no relationship"
        token1 = [self.sent1.token_by_id(1)]
        token2 = [self.sent2.token_by_id(2)]
        self.assertFalse(has_dep_relationship(token1, token2, self.doc))
        self.assertFalse(has_dep_relationship(token2, token1, self.doc))
        self.assertFalse(share_sentence(token1, token2))
        self.assertFalse(share_sentence(token2, token1))

    def test_same_tree(self):
        "two regular tokens have a relationship"
        token1 = [self.sent1.token_by_id(1)]
        token2 = [self.sent1.token_by_id(2)]
        self.assertTrue(has_dep_relationship(token1, token2, self.doc))
        self.assertTrue(has_dep_relationship(token2, token1, self.doc))
        self.assertTrue(share_sentence(token1, token2))

    def test_punctuation(self):
        "punctuation shares a sentence but has no relationship"
        token1 = [self.sent1.token_by_id(1)]
        token2 = [self.sent1.token_by_id(5)]
        self.assertFalse(has_dep_relationship(token1, token2, self.doc))
        self.assertFalse(has_dep_relationship(token2, token1, self.doc))
        self.assertTrue(share_sentence(token1, token2))

    def test_implies_shared_sentence(self):
        "having a relationship implies sharing a sentence"
        toks = self.doc.tokens()
        for tok, tok2 in itertools.product(toks, toks):
            if has_dep_relationship([tok], [tok2], self.doc):
                self.assertTrue(share_sentence([tok], [tok2]))
