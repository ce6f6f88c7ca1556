#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Author: Eric Kow
# License: BSD3

"""
Syntactic parser output (at least as emitted by Stanford's CoreNLP_
pipeline) into navigable constituency trees.

A constituency tree comes to us as a Penn Treebank bracketed string ::

    (ROOT (S (NP (DT This)) (VP (VBZ is) (NP (DT a) (NN test))) (. .)))

which `build_tree` reads into a `ParseTree`. Trees are made of two
kinds of node: `Internal` nodes (a label and some children) and `Leaf`
nodes (a part of speech tag, the word, and the id of the token in the
sentence). The preterminal and the word are folded into a single leaf,
so a sentence of N tokens has exactly N leaves, numbered 1 to N from
left to right.

Nodes do not know their parents. The `ParseTree` builds that mapping
(along with a token id to leaf mapping, and a token id to clause
mapping) once, when it is created. Nodes are compared by identity, so
two identical looking subtrees are still two different keys.

We can also go to and from NLTK trees, which is mostly useful for
pretty printing.

.. _CoreNLP:       http://nlp.stanford.edu/software/corenlp.shtml
"""

from collections import namedtuple
import itertools
import re

from frozendict import frozendict
import nltk.tree

from sentgraph.annotation import MalformedTreeError, OutOfRangeError
from sentgraph.external.postag import Token
from sentgraph.ptb.annotation import (is_clause_label,
                                      is_noun_phrase_label,
                                      is_verb_phrase_label,
                                      is_nominal_tag,
                                      is_verbal_tag)
from sentgraph.util import group_pairs, range_gap

# pylint: disable=too-few-public-methods

# ---------------------------------------------------------------------
# nodes
# ---------------------------------------------------------------------


class TreeNode(object):
    """
    Common behaviour for constituency tree nodes. You only ever get
    one of the two variants, `Internal` or `Leaf`
    """
    __slots__ = ()

    def __setattr__(self, name, value):
        raise AttributeError("tree nodes are read-only (%s)" % name)

    def is_leaf(self):
        "True for `Leaf` nodes"
        return isinstance(self, Leaf)

    def is_clause(self):
        "True for nodes labeled S or SBAR"
        return is_clause_label(self.label)

    def is_noun_phrase(self):
        "True for internal nodes labeled NP"
        return isinstance(self, Internal) and is_noun_phrase_label(self.label)

    def is_verb_phrase(self):
        "True for internal nodes labeled VP"
        return isinstance(self, Internal) and is_verb_phrase_label(self.label)


class Internal(TreeNode):
    """
    A labeled phrase with (ordered) children
    """
    __slots__ = ('label', 'children')

    def __init__(self, label, children):
        object.__setattr__(self, 'label', label)
        object.__setattr__(self, 'children', tuple(children))

    def __repr__(self):
        return 'Internal(%s, %d children)' % (self.label, len(self.children))


class Leaf(TreeNode):
    """
    A word with its part of speech tag (`label`) and token id (`index`)
    """
    __slots__ = ('label', 'text', 'index')

    children = ()

    def __init__(self, label, text, index):
        object.__setattr__(self, 'label', label)
        object.__setattr__(self, 'text', text)
        object.__setattr__(self, 'index', index)

    def __repr__(self):
        return 'Leaf(%s %s %d)' % (self.label, self.text, self.index)


def is_not_clause(node):
    "True if the node is not an S or SBAR"
    return not node.is_clause()


def leafs(nodes):
    """
    Just the `Leaf` nodes out of the given nodes (preserving order)
    """
    return [n for n in nodes if isinstance(n, Leaf)]


def depth_first_iterator(node):
    """
    Iterate on the nodes of the tree, depth-first, pre-order
    (that is, in document order).
    """
    parent_stack = []
    while parent_stack or (node is not None):
        if node is not None:
            yield node
            if node.children:
                parent_stack.extend(reversed(node.children[1:]))
                node = node.children[0]
            else:
                node = None
        else:
            node = parent_stack.pop()


# ---------------------------------------------------------------------
# bracket notation
# ---------------------------------------------------------------------

LEFT = 'left'
RIGHT = 'right'
TEXT = 'text'

TreeToken = namedtuple('TreeToken', 'kind text index')
"""
An atom of the bracket notation: an opening or closing parenthesis,
or some text (a label or a word). Words, that is text immediately
followed by a closing parenthesis, have an index (1-based, in order
of appearance); everything else has None.
"""

_TREE_TOKEN_RE = re.compile(r'\(|\)|[^()\s]+')


def tokenize_tree_str(tree_str):
    """
    Split a bracketed tree string into `TreeToken` atoms.

    Parentheses need not be surrounded by whitespace.
    """
    atoms = _TREE_TOKEN_RE.findall(tree_str)
    res = []
    index = 0
    for atom, nxt in zip(atoms, atoms[1:] + [None]):
        if atom == '(':
            res.append(TreeToken(LEFT, atom, None))
        elif atom == ')':
            res.append(TreeToken(RIGHT, atom, None))
        elif nxt == ')':
            index += 1
            res.append(TreeToken(TEXT, atom, index))
        else:
            res.append(TreeToken(TEXT, atom, None))
    return res


def parse_node(tokens, start=0, end=None):
    """
    Read the node whose opening bracket is at `start`, in a single
    forward pass over `tokens[start:end]`. Nodes still waiting for
    their closing bracket are kept on a stack, so that every token is
    looked at a bounded number of times however deep the tree.

    Return the node along with the position just past its closing
    bracket.

    :raises MalformedTreeError: if a node is not `( label ( ...`
        (an internal node) or `( label word )` (a leaf), or if
        parentheses are unbalanced
    """
    end = len(tokens) if end is None else end
    pending = []  # (label, children) for each open internal node
    pos = start
    while True:
        if pos >= end:
            raise MalformedTreeError("Unbalanced parentheses: missing ')' "
                                     "in %s" % _show(tokens, start, end))
        tok = tokens[pos]
        if tok.kind == LEFT:
            label = tokens[pos + 1] if pos + 1 < end else None
            if label is None or label.kind != TEXT:
                raise MalformedTreeError("Expected a node label in %s" %
                                         _show(tokens, start, end))
            nxt = tokens[pos + 2] if pos + 2 < end else None
            if nxt is not None and nxt.kind == LEFT:
                pending.append((label.text, []))
                pos += 2
                continue
            elif nxt is not None and nxt.kind == TEXT\
                    and nxt.index is not None and pos + 3 < end:
                # indexed words are always followed by ')'
                node = Leaf(label.text, nxt.text, nxt.index)
                pos += 4
            else:
                raise MalformedTreeError("Expected either a child node or a "
                                         "word after label %s in %s" %
                                         (label.text,
                                          _show(tokens, start, end)))
        elif tok.kind == RIGHT and pending:
            label, children = pending.pop()
            node = Internal(label, children)
            pos += 1
        else:
            raise MalformedTreeError("Expected '(' at position %d of %s" %
                                     (pos - start,
                                      _show(tokens, start, end)))
        if not pending:
            return node, pos
        pending[-1][1].append(node)


def _show(tokens, start, end):
    "bracketed string for error messages"
    return ' '.join(t.text for t in tokens[start:end]) or '<empty>'


def build_tree(tree_str):
    """
    Read a bracketed constituency string into a `ParseTree`.

    A single stray closing bracket after the tree is tolerated.

    :raises MalformedTreeError: if the string is not exactly one
        well-formed tree
    """
    tokens = tokenize_tree_str(tree_str)
    if not tokens:
        raise MalformedTreeError("Expected exactly one tree, got nothing")
    root, pos = parse_node(tokens)
    rest = tokens[pos:]
    if rest and not (len(rest) == 1 and rest[0].kind == RIGHT):
        raise MalformedTreeError("Expected exactly one tree, got more "
                                 "after position %d in %s" %
                                 (pos, tree_str))
    return ParseTree(root)


# ---------------------------------------------------------------------
# trees
# ---------------------------------------------------------------------


def node_to_range(node):
    """
    Range of token ids covered by a node, `range(0, 0)` if there are
    none (which cannot happen in a well-formed tree)
    """
    kids = [n.index for n in leafs(depth_first_iterator(node))]
    return range(min(kids), max(kids) + 1) if kids else range(0, 0)


class ParseTree(object):
    """
    A constituency tree over the tokens of a sentence, with the
    indices needed to search it efficiently.

    Query functions which take a `head` accept either a `Token` or a
    token id, and return the token id `range` of the phrase they find
    (or None).

    Attributes
    ----------
    root : TreeNode
    parents : frozendict from TreeNode to Internal
        Parent of every node but the root
    index : frozendict from int to Leaf
        Leaf for every token id
    clauses : tuple of TreeNode
        Nodes labeled S or SBAR, in document order
    clause_index : frozendict from int to frozenset of TreeNode
        Clauses each token id belongs to directly (ie. not by way of
        a nested clause)
    """
    def __init__(self, root):
        self.root = root
        self._nodes = tuple(depth_first_iterator(root))

        self.parents = frozendict((kid, node)
                                  for node in self._nodes
                                  for kid in node.children)

        self.index = frozendict((leaf.index, leaf)
                                for leaf in leafs(self._nodes))
        expected = list(range(1, len(self.index) + 1))
        found = [leaf.index for leaf in leafs(self._nodes)]
        if found != expected:
            raise MalformedTreeError("Leaves should be numbered 1 to %d "
                                     "from left to right, got %s" %
                                     (len(expected), found))

        self.clauses = tuple(n for n in self._nodes if n.is_clause())
        pairs = ((leaf.index, clause)
                 for clause in self.clauses
                 for leaf in leafs(self.descendants(clause, is_not_clause)))
        self.clause_index = frozendict((k, frozenset(v)) for k, v in
                                       group_pairs(pairs).items())

    @classmethod
    def from_nltk(cls, tree):
        """
        Build a parse tree out of an NLTK tree whose preterminals
        have a single word each, eg. `nltk.Tree.fromstring(...)`.
        Token ids are assigned to words from left to right.
        """
        counter = itertools.count(1)

        def step(subtree):
            "recursive helper"
            if not isinstance(subtree, nltk.tree.Tree):
                raise MalformedTreeError("Word without a tag: %s" % subtree)
            kids = list(subtree)
            if len(kids) == 1 and not isinstance(kids[0], nltk.tree.Tree):
                return Leaf(subtree.label(), kids[0], next(counter))
            elif kids and all(isinstance(k, nltk.tree.Tree) for k in kids):
                return Internal(subtree.label(), [step(k) for k in kids])
            else:
                raise MalformedTreeError("Expected either a single word or "
                                         "only subtrees under %s" %
                                         subtree.label())
        return cls(step(tree))

    def to_nltk(self):
        """
        This tree as an `nltk.Tree`, leaves becoming preterminals
        over their word
        """
        def step(node):
            "recursive helper"
            if isinstance(node, Leaf):
                return nltk.tree.Tree(node.label, [node.text])
            return nltk.tree.Tree(node.label, [step(k) for k in node.children])
        return step(self.root)

    def __str__(self):
        return self.to_nltk().pformat()

    def __len__(self):
        return len(self.index)

    def nodes(self):
        "All the nodes in the tree, root first, in document order"
        return list(self._nodes)

    def leaves(self):
        "The leaves, left to right"
        return [self.index[i] for i in range(1, len(self.index) + 1)]

    def leaf(self, token_id):
        """
        Leaf for the given token id

        :raises OutOfRangeError: if there is no such leaf
        """
        if token_id not in self.index:
            raise OutOfRangeError("No leaf for token %s (tree has %d)" %
                                  (token_id, len(self.index)))
        return self.index[token_id]

    def _lookup(self, head):
        "node for a node, token, or token id (None if unknown)"
        if isinstance(head, TreeNode):
            return head
        elif isinstance(head, Token):
            return self.index.get(head.id)
        else:
            return self.index.get(head)

    def parent(self, node):
        """
        Parent of a node (or of the leaf for a token or token id);
        None for the root
        """
        node = self._lookup(node)
        return None if node is None else self.parents.get(node)

    def same_clause(self, token, other):
        """
        True if the two tokens (or token ids) sit directly in a
        common clause
        """
        token = token.id if isinstance(token, Token) else token
        other = other.id if isinstance(other, Token) else other
        mine = self.clause_index.get(token, frozenset())
        theirs = self.clause_index.get(other, frozenset())
        return bool(mine & theirs)

    def descendants_with_depth(self, node, pred=None):
        """
        All the descendants of a node, in document order, with their
        depth relative to it (children are at depth 1).

        If a predicate is supplied, nodes for which it is False are
        left out, along with everything below them.
        """
        res = []
        stack = [(kid, 1) for kid in reversed(node.children)]
        while stack:
            current, depth = stack.pop()
            if pred is not None and not pred(current):
                continue
            res.append((current, depth))
            stack.extend((kid, depth + 1)
                         for kid in reversed(current.children))
        return res

    def descendants(self, node, pred=None):
        """
        See `descendants_with_depth` (without the depth)
        """
        return [n for n, _ in self.descendants_with_depth(node, pred)]

    def qualified_phrases(self, target, confirm):
        """
        Token ranges of the nodes satisfying `target`, keeping only
        those with at least one leaf whose tag satisfies `confirm`
        """
        res = []
        for node in self._nodes:
            if not target(node):
                continue
            tags = [leaf.label for leaf in leafs(depth_first_iterator(node))]
            if any(confirm(t) for t in tags):
                res.append(node_to_range(node))
        return res

    def noun_phrases(self):
        "Token ranges of all the noun phrases"
        return self.qualified_phrases(lambda n: n.is_noun_phrase(),
                                      is_nominal_tag)

    def verb_phrases(self):
        "Token ranges of all the verb phrases"
        return self.qualified_phrases(lambda n: n.is_verb_phrase(),
                                      is_verbal_tag)

    def nearest_object(self, head):
        """
        Nearest noun phrase under the phrase the head belongs to (for a
        token) or under the head itself (for an internal node).
        Shallower phrases win; at equal depth, the phrase lexically
        closest to the head does.
        """
        node = self._lookup(head)
        if node is None:
            return None
        start = self.parents.get(node) if node.is_leaf() else node
        if start is None:
            return None
        origin = node_to_range(node)
        phrases = [(node_to_range(n), d)
                   for n, d in self.descendants_with_depth(start)
                   if n.is_noun_phrase()]
        if not phrases:
            return None
        best = min(phrases,
                   key=lambda p: (p[1], range_gap(origin, p[0])))
        return best[0]

    def nearest_subject(self, head):
        """
        Nearest governing noun phrase (skipping over verb phrases on
        the way up)
        """
        return self.nearest_cousin(lambda n: n.is_noun_phrase(),
                                   lambda n: n.is_verb_phrase(),
                                   head)

    def dependent_verb(self, head):
        """
        Verb phrase that is a sibling of the head's phrase (skipping
        over noun phrases on the way up)
        """
        return self.nearest_cousin(lambda n: n.is_verb_phrase(),
                                   lambda n: n.is_noun_phrase(),
                                   head)

    def governing_verb(self, head):
        """
        Smallest verb phrase the head is part of
        """
        node = self._lookup(head)
        while node is not None:
            if node.is_verb_phrase():
                return node_to_range(node)
            node = self.parents.get(node)
        return None

    def nearest_cousin(self, pred, ignore, head):
        """
        Walk up from the head. Whenever the next ancestor up satisfies
        `ignore`, just keep going; otherwise look for the first node in
        document order below it (but outside of where we came from)
        that satisfies `pred`, and return its range.
        """
        current = self._lookup(head)
        while current is not None:
            par = self.parents.get(current)
            if par is None:
                return None
            if not ignore(par):
                came_from = current
                targets = [n for n in
                           self.descendants(par, lambda n: n is not came_from)
                           if pred(n)]
                if targets:
                    return node_to_range(targets[0])
            current = par
        return None
