# Author: Eric Kow
# License: BSD3

"""
Relationships between phrases, a phrase being any sequence of tokens
(eg. the tokens of a mention, or of a chunk)
"""


def share_sentence(phrase, other):
    """
    True if some token of the phrase is in the same sentence as some
    token of the other
    """
    mine = set(t.sentence_id for t in phrase)
    return any(t.sentence_id in mine for t in other)


def has_dep_relationship(phrase, other, doc):
    """
    True if some token of the phrase and some token of the other are
    in the same dependency tree (ie. have a common ancestor).

    This implies `share_sentence` (but not the other way around:
    detached punctuation shares a sentence with everything in it)
    """
    for tok in phrase:
        sent = doc.sentence_by_token(tok)
        for tok2 in other:
            if tok2.sentence_id != tok.sentence_id:
                continue
            if sent.common_ancestor(tok, tok2) is not None:
                return True
    return False
