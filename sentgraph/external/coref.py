#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Author: Eric Kow
# License: BSD3

"""
Coreference chains (at least as emitted by Stanford's CoreNLP_ pipeline)

A coreference chain is considered to be a set of mentions, one of which
is the canonical (most representative) one. Each mention picks out a
contiguous run of tokens within one sentence.

.. _CoreNLP:       http://nlp.stanford.edu/software/corenlp.shtml
"""

import warnings


class Mention(object):
    """
    A mention of some entity

    Attributes
    ----------
    sentence_id : int
    span : range
        Token ids covered by the mention (end exclusive)
    head : int
        Token id of the head of the mention
    most_representative : bool
    """
    def __init__(self, sentence_id, span, head, most_representative=False):
        self.sentence_id = sentence_id
        self.span = span
        self.head = head
        self.most_representative = most_representative

    def contains(self, token):
        """
        True if the token is part of this mention
        """
        return token.sentence_id == self.sentence_id and token.id in self.span

    def __str__(self):
        return '%d: %s' % (self.sentence_id,
                           ','.join(str(i) for i in self.span))

    def __repr__(self):
        return 'Mention(%d, %r, %d)' % (self.sentence_id, self.span, self.head)


class Chain(object):
    """
    A group of mentions that refer to the same entity
    """
    def __init__(self, mentions, canonical=None):
        """
        If the canonical mention is not supplied, we use the one
        flagged as most representative (or, failing that, the first
        one, with a warning)
        """
        self.mentions = list(mentions)
        if canonical is None:
            canonical = next((m for m in self.mentions
                              if m.most_representative), None)
        if canonical is None and self.mentions:
            warnings.warn("Coreference chain with no representative "
                          "mention; using %s" % self.mentions[0])
            canonical = self.mentions[0]
        self.canonical = canonical

    def in_group(self, token):
        """
        True if the token is part of one of the mentions
        """
        return any(m.contains(token) for m in self.mentions)

    def __iter__(self):
        return iter(self.mentions)

    def __len__(self):
        return len(self.mentions)

    def __str__(self):
        return "Coref Group:\n" + "\n".join(str(m) for m in self.mentions)
