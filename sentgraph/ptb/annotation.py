"""
Penn Treebank conventions for constituency labels and part of speech tags.

The constituency and dependency structures in `sentgraph.external` only
ever look at labels through the predicates here, so this is the place to
change if your parser emits a different label set.
"""

# Author: Eric Kow
# License: CeCILL-B (French BSD3-like)

CLAUSE_LABELS = frozenset(["S", "SBAR"])
NOUN_PHRASE_LABEL = "NP"
VERB_PHRASE_LABEL = "VP"

NOMINAL_TAG_PREFIXES = ("NN", "PRP", "WP", "CD", "EX")
"""
Tags that confirm a noun phrase really is one (common and proper
nouns, personal and wh- pronouns, numbers, existential there)
"""

VERBAL_TAG_PREFIXES = ("VB", "MD")
"""
Tags that confirm a verb phrase really is one
"""

# label annotation introducing characters
_LAIC = [
    '-',  # function tags, identity index, reference index
    '=',  # gap co-indexing
]


# pylint: disable=invalid-name
def post_basic_category_index(label):
    """Get the index of the first char after the basic label.

    This should never match the first char of the label ;
    if the first char is such a char, then a matched char is also
    not used iff there is something in between, e.g.
    (-LRB- => -LRB-) but (--PU => -).
    """
    first_char = ''
    i = 0
    for i, c in enumerate(label):
        if c in _LAIC:
            if i == 0:
                first_char = c
            elif first_char and (i > 1) and (c == first_char):
                first_char = ''
            else:
                break
    else:
        i += 1
    return i
# pylint: enable=invalid-name


def basic_category(label):
    """Get the basic syntactic category of a label.

    This is done by truncating whatever comes after a
    (non-word-initial) occurrence of one of the
    label_annotation_introducing_characters(), so that
    `NP-SBJ-1` and `NP` are both noun phrases.
    """
    return label[0:post_basic_category_index(label)] if label else label


def is_clause_label(label):
    "True if the constituency label denotes a clause (S or SBAR)"
    return basic_category(label) in CLAUSE_LABELS


def is_noun_phrase_label(label):
    "True if the constituency label denotes a noun phrase"
    return basic_category(label) == NOUN_PHRASE_LABEL


def is_verb_phrase_label(label):
    "True if the constituency label denotes a verb phrase"
    return basic_category(label) == VERB_PHRASE_LABEL


def is_nominal_tag(postag):
    """True if the part of speech tag can head a noun phrase"""
    return postag.startswith(NOMINAL_TAG_PREFIXES)


def is_verbal_tag(postag):
    """True if the part of speech tag can head a verb phrase"""
    return postag.startswith(VERBAL_TAG_PREFIXES)
