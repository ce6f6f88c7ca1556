# Author: Eric Kow
# License: BSD3

"""
Annotations from the CoreNLP pipeline, assembled into sentences and
documents.

A `Sentence` combines the tokens of a sentence with its dependency graph
and its constituency tree (both over the same token ids), and answers
questions on tokens rather than ids. A `Document` is an ordered list of
sentences, plus coreference chains.

We do not read CoreNLP's output files ourselves; the `read_*` functions
build these structures out of records (plain dictionaries and tuples)
extracted by whatever loads the annotations ::

    doc = read_document('d1', [{'tokens': [{'id': 1, 'word': 'Hi', ...}],
                                'dependencies': [(0, 1, 'root')],
                                'parse': '(ROOT (INTJ (UH Hi)))'}])
"""

import warnings

import nltk.tree

from sentgraph.annotation import (MalformedTreeError, OutOfRangeError,
                                  Span)
from sentgraph.external.coref import Chain, Mention
from sentgraph.external.depgraph import DependencyGraph
from sentgraph.external.parser import ParseTree, build_tree
from sentgraph.external.postag import Token
from sentgraph.util import concat_l, range_gap

SUBJECT_REL = 'subj'
OBJECT_REL = 'obj'
AUX_REL = 'aux'
MODIFIER_REL = 'mod'
"""
Relation labels are matched by substring, so that eg. `subj` picks out
`nsubj`, `nsubjpass`, `csubj`...
"""


# ---------------------------------------------------------------------
# sentences
# ---------------------------------------------------------------------


class Sentence(object):
    """
    A sentence: its tokens, dependency graph and (optional)
    constituency tree.

    Tokens from other sentences are never related to anything here:
    queries involving them return None or empty results.

    Attributes
    ----------
    id : int
        Position of the sentence in its document, starting from 1
    graph : DependencyGraph
    tree : ParseTree or None
    """
    def __init__(self, sentence_id, tokens, edges, tree=None):
        """
        :raises OutOfRangeError: if the token ids are not 1 to N in order
        :raises MalformedTreeError: if the tree does not have a leaf
            for every token
        :raises MalformedGraphError: if the edges do not make a forest
        """
        self.id = sentence_id
        self._tokens = tuple(tokens)
        for i, tok in enumerate(self._tokens, 1):
            if tok.id != i or tok.sentence_id != sentence_id:
                raise OutOfRangeError("Expected token %d:%d, got %d:%d" %
                                      (sentence_id, i,
                                       tok.sentence_id, tok.id))
        self.graph = DependencyGraph(len(self._tokens), edges)
        if tree is not None and len(tree) != len(self._tokens):
            raise MalformedTreeError("Sentence %d has %d tokens but its "
                                     "tree has %d leaves" %
                                     (sentence_id, len(self._tokens),
                                      len(tree)))
        self.tree = tree

    def __len__(self):
        return len(self._tokens)

    def __str__(self):
        return ' '.join(str(t) for t in self._tokens)

    def __repr__(self):
        return 'Sentence(%d, %r)' % (self.id, str(self))

    @property
    def size(self):
        "number of tokens"
        return len(self._tokens)

    @property
    def min_token_id(self):
        return 1

    @property
    def max_token_id(self):
        return len(self._tokens)

    def tokens(self):
        "tokens in order"
        return list(self._tokens)

    def text_span(self):
        "span from the first to the last character of the sentence"
        return Span.merge_all(t.span for t in self._tokens)

    def __contains__(self, token):
        return token.sentence_id == self.id\
            and 1 <= token.id <= len(self._tokens)

    def token_by_id(self, token_id):
        """
        :raises OutOfRangeError: if there is no such token
        """
        if not 1 <= token_id <= len(self._tokens):
            raise OutOfRangeError("No token %d in sentence %d (1-%d)" %
                                  (token_id, self.id, len(self._tokens)))
        return self._tokens[token_id - 1]

    def tokens_by_id(self, span):
        """
        Tokens for a range of token ids

        :raises OutOfRangeError: if the range goes beyond the sentence
        """
        return [self.token_by_id(i) for i in span]

    def _tok(self, token_id):
        return None if token_id is None else self._tokens[token_id - 1]

    def _toks(self, token_ids):
        return [self._tokens[i - 1] for i in token_ids]

    # ------------------------------------------------------------
    # dependencies
    # ------------------------------------------------------------

    def dep_type(self, token):
        "relation between the token and its governor (None if none)"
        return self.graph.label(token.id) if token in self else None

    def has_dep_type(self, token, dep):
        "True if the token's relation label contains `dep`"
        label = self.dep_type(token)
        return label is not None and dep in label

    def tokens_with_type(self, dep):
        "tokens whose relation label contains `dep`"
        return [t for t in self._tokens if self.has_dep_type(t, dep)]

    def is_subject(self, token):
        return self.has_dep_type(token, SUBJECT_REL)

    def is_object(self, token):
        return self.has_dep_type(token, OBJECT_REL)

    def is_aux(self, token):
        return self.has_dep_type(token, AUX_REL)

    def is_modifier(self, token):
        return self.has_dep_type(token, MODIFIER_REL)

    def subjects(self):
        return self.tokens_with_type(SUBJECT_REL)

    def objects(self):
        return self.tokens_with_type(OBJECT_REL)

    def roots(self):
        "tokens governed by the virtual ROOT"
        return self._toks(self.graph.roots())

    def parent(self, token):
        "governor of the token (None for roots and detached tokens)"
        if token not in self:
            return None
        return self._tok(self.graph.parent(token.id))

    def children(self, token):
        "tokens directly governed by this one"
        if token not in self:
            return []
        return self._toks(self.graph.children(token.id))

    def ancestors(self, token):
        """
        Governors from the top of the tree down to the token, which
        comes last
        """
        if token not in self:
            return []
        return self._toks(self.graph.ancestors(token.id))

    def descendants(self, token):
        "set of all tokens below this one"
        if token not in self:
            return frozenset()
        return frozenset(self._toks(self.graph.descendants(token.id)))

    def depth(self, token):
        """
        Number of governors above the token

        :raises OutOfRangeError: if the token is not in this sentence
        """
        if token not in self:
            raise OutOfRangeError("%r is not in sentence %d" %
                                  (token, self.id))
        return self.graph.depth(token.id)

    def common_ancestor(self, token, other):
        """
        Lowest common ancestor of the two tokens, None if they are
        not in the same dependency tree (or not in this sentence)
        """
        if token not in self or other not in self:
            return None
        return self._tok(self.graph.common_ancestor(token.id, other.id))

    def syntactic_distance(self, token, other):
        """
        Number of dependency links from one token to the other,
        None if they are not connected
        """
        if token not in self or other not in self:
            return None
        return self.graph.syntactic_distance(token.id, other.id)

    def path(self, token, other):
        """
        Tokens on the way from one token to the other through their
        lowest common ancestor, None if they are not connected
        """
        if token not in self or other not in self:
            return None
        ids = self.graph.path(token.id, other.id)
        return None if ids is None else self._toks(ids)

    def nearest_token_with_type(self, seed, dep, subset=None):
        """
        Token whose relation label contains `dep` that is syntactically
        closest to the seed token (which is itself excluded), possibly
        limited to some subset of tokens. Ties go to the lowest token id.
        """
        allowed = None if subset is None else frozenset(subset)
        best = None
        for tok in self.tokens_with_type(dep):
            if tok == seed or (allowed is not None and tok not in allowed):
                continue
            dist = self.syntactic_distance(seed, tok)
            if dist is None:
                continue
            if best is None or dist < best[0]:
                best = (dist, tok)
        return None if best is None else best[1]

    # ------------------------------------------------------------
    # constituency
    # ------------------------------------------------------------

    def phrase_head(self, span):
        """
        Head token of a range of token ids: the one highest up in the
        dependency graph (lowest id on ties), or the last token if none
        of them are attached
        """
        if span is None or not len(span):
            return None
        attached = [i for i in span if i in self.graph.heads]
        if not attached:
            return self.token_by_id(span[-1])
        best = min(attached, key=lambda i: (self.graph.depth(i), i))
        return self.token_by_id(best)

    def _phrase(self, search, token):
        "run a ParseTree search from the token (None for foreign tokens)"
        return search(token.id) if token in self else None

    def nearest_subject_phrase(self, token):
        if self.tree is None:
            return None
        return self._phrase(self.tree.nearest_subject, token)

    def nearest_object_phrase(self, token):
        if self.tree is None:
            return None
        return self._phrase(self.tree.nearest_object, token)

    def governing_verb_phrase(self, token):
        if self.tree is None:
            return None
        return self._phrase(self.tree.governing_verb, token)

    def dependent_verb_phrase(self, token):
        if self.tree is None:
            return None
        return self._phrase(self.tree.dependent_verb, token)

    def nearest_subject(self, token):
        "head of the nearest governing noun phrase"
        return self.phrase_head(self.nearest_subject_phrase(token))

    def nearest_object(self, token):
        "head of the nearest noun phrase below the token's phrase"
        return self.phrase_head(self.nearest_object_phrase(token))

    def governing_verb(self, token):
        "head of the verb phrase the token is part of"
        return self.phrase_head(self.governing_verb_phrase(token))

    def dependent_verb(self, token):
        "head of the verb phrase next to the token's phrase"
        return self.phrase_head(self.dependent_verb_phrase(token))

    def same_clause(self, token, other):
        """
        True if the two tokens sit directly in a common clause
        (False if we have no tree)
        """
        if self.tree is None or token not in self or other not in self:
            return False
        return self.tree.same_clause(token.id, other.id)


# ---------------------------------------------------------------------
# documents
# ---------------------------------------------------------------------


class Document(object):
    """
    Sentences of a document, in order, and coreference chains
    between them. Sentence ids are their 1-based positions.

    Documents are identified by their id.
    """
    def __init__(self, doc_id, sentences, chains=()):
        """
        :raises OutOfRangeError: if the sentence ids are not 1 to N
            in order
        """
        self.id = doc_id
        self.sentences = list(sentences)
        self.chains = list(chains)
        for i, sent in enumerate(self.sentences, 1):
            if sent.id != i:
                raise OutOfRangeError("Expected sentence %d, got %d" %
                                      (i, sent.id))
        spans = [s.text_span() for s in self.sentences if len(s)]
        for before, after in zip(spans, spans[1:]):
            if after.char_start < before.char_end:
                warnings.warn("Sentences out of order in %s (%s then %s); "
                              "offset lookups may be wrong" %
                              (doc_id, before, after))
                break

    def __str__(self):
        return str(self.id)

    def __eq__(self, other):
        if not isinstance(other, Document):
            return NotImplemented
        return self.id == other.id

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash(self.id)

    def sentence_by_id(self, sentence_id):
        """
        :raises OutOfRangeError: if there is no such sentence
        """
        if not 1 <= sentence_id <= len(self.sentences):
            raise OutOfRangeError("No sentence %d in %s (1-%d)" %
                                  (sentence_id, self.id,
                                   len(self.sentences)))
        return self.sentences[sentence_id - 1]

    def sentence_by_token(self, token):
        "sentence the token belongs to"
        return self.sentence_by_id(token.sentence_id)

    def token_by_id(self, sentence_id, token_id):
        return self.sentence_by_id(sentence_id).token_by_id(token_id)

    def tokens(self):
        "all the tokens in the document, in order"
        return concat_l(s.tokens() for s in self.sentences)

    def tokens_in(self, sentence_id, span):
        "tokens for a range of token ids in a sentence"
        return self.sentence_by_id(sentence_id).tokens_by_id(span)

    def mention_tokens(self, mention):
        "tokens covered by a coreference mention"
        return self.tokens_in(mention.sentence_id, mention.span)

    def chains_for(self, token):
        "coreference chains with a mention including the token"
        return [c for c in self.chains if c.in_group(token)]

    def token_at_offset(self, offset):
        """
        First token whose span contains the character offset
        (both edges included), None if there is none
        """
        for tok in self.tokens():
            if tok.contains_offset(offset):
                return tok
        return None

    def token_that_covers(self, span):
        """
        First token whose span encloses the given `Span`, None if
        there is none
        """
        for tok in self.tokens():
            if tok.span.encloses(span):
                return tok
        return None

    def window(self, phrase, width):
        """
        The phrase (a sequence of tokens from one sentence) along with
        up to `width` tokens on either side, not going beyond its
        sentence
        """
        phrase = sorted(phrase)
        sent = self.sentence_by_token(phrase[0])
        start = max(sent.min_token_id, phrase[0].id - width)
        end = min(phrase[-1].id + width, sent.max_token_id)
        return sent.tokens_by_id(range(start, end + 1))

    def context(self, phrase, width):
        """
        The tokens to the left and to the right of the phrase in its
        `window`
        """
        phrase = sorted(phrase)
        window = self.window(phrase, width)
        left = [t for t in window if t < phrase[0]]
        right = [t for t in window if t > phrase[-1]]
        return left, right

    def lexical_distance(self, phrase, other):
        """
        Number of token positions between the nearest ends of two
        phrases (0 if they overlap), counting across sentence
        boundaries if needed
        """
        if set(phrase) & set(other):
            return 0
        first, second = sorted([sorted(phrase), sorted(other)])
        if first[-1].sentence_id == second[0].sentence_id:
            return range_gap(range(first[0].id, first[-1].id + 1),
                             range(second[0].id, second[-1].id + 1))
        last = first[-1]
        nxt = second[0]
        between = sum(self.sentence_by_id(i).size
                      for i in range(last.sentence_id + 1, nxt.sentence_id))
        return (self.sentence_by_token(last).max_token_id - last.id)\
            + nxt.id + between


class DocumentIndex(object):
    """
    Index of the tokens of a document by (lowercased) word
    """
    def __init__(self, document):
        self.document = document
        self.index = {}
        for tok in document.tokens():
            self.index.setdefault(tok.word.lower(), []).append(tok)

    def lookup(self, word):
        "all the tokens for the given word (case insensitive)"
        return list(self.index.get(word.lower(), []))


# ---------------------------------------------------------------------
# reading records
# ---------------------------------------------------------------------


def read_token(sentence_id, record):
    """
    Token from a record with the keys `id`, `word`, `lemma`,
    `char_start`, `char_end`, `pos`, and `ner` (lemma defaults to the
    word, ner to `O`)
    """
    return Token(int(record['id']),
                 sentence_id,
                 record['word'],
                 record.get('lemma', record['word']),
                 int(record['char_start']),
                 int(record['char_end']),
                 record['pos'],
                 record.get('ner', 'O'))


def read_tree(parse):
    """
    Parse tree from a bracketed string or an NLTK tree (None stays
    None)
    """
    if parse is None or isinstance(parse, ParseTree):
        return parse
    elif isinstance(parse, nltk.tree.Tree):
        return ParseTree.from_nltk(parse)
    else:
        return build_tree(parse)


def read_sentence(sentence_id, tokens, edges, parse=None):
    """
    Sentence from token records (see `read_token`), dependency
    triples `(governor, dependent, label)` with governor 0 for the
    ROOT, and an optional constituency parse (see `read_tree`)
    """
    toks = [read_token(sentence_id, r) for r in tokens]
    edges = [(int(g), int(d), l) for g, d, l in edges]
    return Sentence(sentence_id, toks, edges, read_tree(parse))


def read_mention(record):
    """
    Mention from a record with the keys `sentence`, `start`, `end`
    (exclusive), `head` and optionally `representative`
    """
    return Mention(int(record['sentence']),
                   range(int(record['start']), int(record['end'])),
                   int(record['head']),
                   bool(record.get('representative', False)))


def read_chain(records):
    "coreference chain from mention records"
    return Chain([read_mention(r) for r in records])


def read_document(doc_id, sentences, chains=()):
    """
    Document from sentence records (dictionaries with the keys
    `tokens`, `dependencies` and optionally `parse`) and coreference
    chains (lists of mention records)

    :raises MalformedTreeError: if any of the parses is broken; we do
        not build partial documents
    """
    sents = [read_sentence(i, s['tokens'], s['dependencies'], s.get('parse'))
             for i, s in enumerate(sentences, 1)]
    return Document(doc_id, sents, [read_chain(c) for c in chains])
