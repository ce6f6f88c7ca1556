# Author: Eric Kow
# License: BSD3

"""
Dependency structure of a single sentence, in terms of token ids.

The graph is a rooted forest: every token has at most one governor,
and the governor id 0 stands for the virtual ROOT (which is not a
token). Tokens without any governor at all (typically punctuation
that the parser did not attach) are simply isolated.

Everything here works on integer token ids; see
`sentgraph.external.corenlp.Sentence` for the same queries on tokens.
"""

from frozendict import frozendict

from sentgraph.annotation import MalformedGraphError

ROOT_ID = 0
"""
Governor id for the virtual ROOT node
"""


class DependencyGraph(object):
    """
    Dependency relations between the tokens of a sentence.

    Attributes
    ----------
    size : int
        Number of tokens in the sentence (ids are 1 to size)
    heads : frozendict from int to (str, int)
        For every dependent, its relation label and governor id
    dependents : frozendict from int to tuple of int
        For every governor (ROOT included), its dependents in
        ascending order
    """
    def __init__(self, size, edges):
        """
        Parameters
        ----------
        size : int
            Number of tokens in the sentence
        edges : iterable of (int, int, str)
            (governor id, dependent id, relation label) triples

        :raises MalformedGraphError: if a token has two governors,
            governs itself (directly or not), or if an id is out of
            range
        """
        self.size = size
        heads = {}
        for gov, dep, label in edges:
            if not 1 <= dep <= size:
                raise MalformedGraphError("Dependent %s out of range 1-%d" %
                                          (dep, size))
            if not 0 <= gov <= size:
                raise MalformedGraphError("Governor %s out of range 0-%d" %
                                          (gov, size))
            if gov == dep:
                raise MalformedGraphError("Token %d governs itself" % dep)
            if dep in heads:
                raise MalformedGraphError("Token %d has two governors "
                                          "(%d and %d)" %
                                          (dep, heads[dep][1], gov))
            heads[dep] = (label, gov)
        self.heads = frozendict(heads)

        dependents = {}
        for dep in sorted(heads):
            dependents.setdefault(heads[dep][1], []).append(dep)
        self.dependents = frozendict((k, tuple(v))
                                     for k, v in dependents.items())
        self._check_acyclic()

    def _check_acyclic(self):
        "every chain of governors should end at ROOT or a detached token"
        settled = set([ROOT_ID])
        for start in self.heads:
            chain = []
            current = start
            while current not in settled and current in self.heads:
                if current in chain:
                    raise MalformedGraphError("Dependency cycle through %s" %
                                              sorted(chain))
                chain.append(current)
                current = self.heads[current][1]
            settled.update(chain)

    def __contains__(self, token_id):
        return 1 <= token_id <= self.size

    def edges(self):
        """
        (governor id, dependent id, label) triples by ascending
        dependent id
        """
        return [(self.heads[d][1], d, self.heads[d][0])
                for d in sorted(self.heads)]

    def label(self, token_id):
        "relation label between the token and its governor, or None"
        entry = self.heads.get(token_id)
        return None if entry is None else entry[0]

    def parent(self, token_id):
        """
        Governor of the token, or None for tokens governed by ROOT
        or not governed at all
        """
        entry = self.heads.get(token_id)
        if entry is None or entry[1] == ROOT_ID:
            return None
        return entry[1]

    def roots(self):
        "tokens directly governed by ROOT"
        return list(self.dependents.get(ROOT_ID, ()))

    def children(self, token_id):
        "tokens directly governed by this one (ascending id)"
        if token_id == ROOT_ID:
            return []
        return list(self.dependents.get(token_id, ()))

    def ancestors(self, token_id):
        """
        The chain of governors from the top of the tree down to the
        token itself, so that `ancestors(t)[-1] == t`; a token with no
        governor is its own (sole) ancestor
        """
        res = [token_id]
        current = self.parent(token_id)
        while current is not None:
            res.append(current)
            current = self.parent(current)
        res.reverse()
        return res

    def descendants(self, token_id):
        """
        Every token reachable from this one by following dependency
        links downwards (not including itself)
        """
        seen = set()
        todo = self.children(token_id)
        while todo:
            current = todo.pop()
            if current in seen:
                continue
            seen.add(current)
            todo.extend(self.children(current))
        return frozenset(seen)

    def depth(self, token_id):
        "number of governors above the token (0 for the top of a tree)"
        return len(self.ancestors(token_id)) - 1

    def common_ancestor(self, token_id, other_id):
        """
        Lowest common ancestor of the two tokens (possibly one of
        them), None if they are not in the same tree
        """
        common = None
        for mine, theirs in zip(self.ancestors(token_id),
                                self.ancestors(other_id)):
            if mine != theirs:
                break
            common = mine
        return common

    def syntactic_distance(self, token_id, other_id):
        """
        Number of dependency links between the two tokens; None if
        they are not connected
        """
        if token_id == other_id:
            return 0
        common = self.common_ancestor(token_id, other_id)
        if common is None:
            return None
        return self.depth(token_id) + self.depth(other_id)\
            - 2 * self.depth(common)

    def path(self, token_id, other_id):
        """
        Token ids from the first token up to the lowest common
        ancestor and then down to the other one (both ends included);
        None if they are not connected
        """
        common = self.common_ancestor(token_id, other_id)
        if common is None:
            return None
        up = self.ancestors(token_id)
        down = self.ancestors(other_id)
        up = up[up.index(common):]
        down = down[down.index(common) + 1:]
        return list(reversed(up)) + down
