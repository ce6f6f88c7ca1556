# -*- coding: utf-8 -*-
#
# Author: Eric Kow
# License: BSD3

"""
Debug views of the dependency structure of a sentence.

* DependencyDotGraph: Graphviz dot rendering; the `to_string()`
  method is most likely to be of interest here

* dependency_table: plain text table, one row per token

These are meant for people to look at; we never read them back.
"""

import pydot
from tabulate import tabulate

from sentgraph.external.depgraph import ROOT_ID

# pylint: disable=too-few-public-methods


def _quote(text):
    "dot string literal"
    return '"%s"' % text.replace('\\', '\\\\').replace('"', '\\"')


class DependencyDotGraph(pydot.Dot):
    """
    A dot representation of the dependency graph of a sentence, with
    one node per token (`id: word POS`) and one edge per dependency
    (labeled with the relation). Dependencies on the virtual root hang
    off a `0: ROOT` node.
    """
    def _dot_id(self, token_id):
        return 't%d' % token_id

    def _token_label(self, token):
        return "%d: %s %s" % (token.id, token.word, token.pos)

    def _add_token(self, token):
        attrs = {'label': _quote(self._token_label(token)),
                 'shape': 'plaintext'}
        self.add_node(pydot.Node(self._dot_id(token.id), **attrs))

    def _add_root(self):
        attrs = {'label': _quote('%d: ROOT' % ROOT_ID),
                 'shape': 'box'}
        self.add_node(pydot.Node(self._dot_id(ROOT_ID), **attrs))

    def _add_dep(self, gov, dep, label):
        attrs = {'label': _quote(label)}
        self.add_edge(pydot.Edge(self._dot_id(gov), self._dot_id(dep),
                                 **attrs))

    def __init__(self, sentence):
        super(DependencyDotGraph, self).__init__(graph_type='digraph')
        self.sentence = sentence
        edges = sentence.graph.edges()
        if any(gov == ROOT_ID for gov, _, _ in edges):
            self._add_root()
        for tok in sentence.tokens():
            self._add_token(tok)
        for gov, dep, label in edges:
            self._add_dep(gov, dep, label)


def dependency_table(sentence, tablefmt='simple'):
    """
    Tokens of a sentence with their relation and governor, as a
    `tabulate` table
    """
    headers = ['id', 'word', 'lemma', 'pos', 'relation', 'governor']
    rows = []
    for tok in sentence.tokens():
        entry = sentence.graph.heads.get(tok.id)
        rel, gov = entry if entry is not None else ('', '')
        rows.append([tok.id, tok.word, tok.lemma, tok.pos, rel, gov])
    return tabulate(rows, headers=headers, tablefmt=tablefmt)
