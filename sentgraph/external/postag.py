#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Author: Eric Kow
# License: BSD3

"""
Tagged tokens, as emitted by a part of speech tagger and later
completed with a lemma, character offsets and a named entity tag
by the rest of a CoreNLP-style pipeline.

Tokens are identified by their position: a 1-based token id within
a 1-based sentence id. Two tokens with the same pair of ids are the
same token, whatever else they carry.
"""

from functools import total_ordering

from sentgraph.annotation import Span

# I don't yet see how "too few public methods" is helpful
# pylint: disable=R0903


@total_ordering
class Token(object):
    """
    A single annotated word in a sentence.

    Tokens are immutable; equality, hashing and ordering only look
    at `(sentence_id, id)`.

    Attributes
    ----------
    id : int
        Position of the token in its sentence, starting from 1
    sentence_id : int
        Position of the sentence in its document, starting from 1
    word : str
    lemma : str
    char_start : int
    char_end : int
        Character offsets of the token in the document text
    pos : str
        Part of speech tag
    ner : str
        Named entity tag (`O` outside of entities)
    """
    __slots__ = ('id', 'sentence_id', 'word', 'lemma',
                 'char_start', 'char_end', 'pos', 'ner')

    # pylint: disable=too-many-arguments, redefined-builtin
    def __init__(self, id, sentence_id, word, lemma,
                 char_start, char_end, pos, ner='O'):
        for attr, val in [('id', id),
                          ('sentence_id', sentence_id),
                          ('word', word),
                          ('lemma', lemma),
                          ('char_start', char_start),
                          ('char_end', char_end),
                          ('pos', pos),
                          ('ner', ner)]:
            object.__setattr__(self, attr, val)
    # pylint: enable=too-many-arguments, redefined-builtin

    def __setattr__(self, name, value):
        raise AttributeError("Token is read-only (%s)" % name)

    def __delattr__(self, name):
        raise AttributeError("Token is read-only (%s)" % name)

    def key(self):
        "(sentence id, token id) pair identifying this token"
        return (self.sentence_id, self.id)

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return self.key() == other.key()

    def __ne__(self, other):
        return not self == other

    def __lt__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return self.key() < other.key()

    def __hash__(self):
        return hash(self.key())

    def __str__(self):
        return self.word.strip()

    def __repr__(self):
        return 'Token(%d:%d %s/%s)' % (self.sentence_id, self.id,
                                        self.word, self.pos)

    @property
    def span(self):
        "character offsets of this token"
        return Span(self.char_start, self.char_end)

    def contains_offset(self, offset):
        """
        True if the character offset falls within this token
        (both edges included)
        """
        return self.span.contains_offset(offset)

    # coarse part of speech predicates

    def is_verb(self):
        return self.pos.startswith("VB")

    def is_noun(self):
        return self.pos.startswith("NN")

    def is_proper_noun(self):
        return self.pos.startswith("NNP")

    def is_adj(self):
        return self.pos.startswith("JJ")

    def is_adv(self):
        return self.pos.startswith("RB")

    def is_pronoun(self):
        return self.pos.startswith("PR")
