"""
The sentgraph library turns pre-computed sentence annotations (tokens,
part of speech tags, dependency edges, constituency parses, coreference
chains) into navigable in-memory structures, and provides the tree and
graph queries that downstream consumers rely on.

Layers
~~~~~~
It has the same three-layer structure as the annotation libraries it grew
out of:

* base layer: character spans and the error taxonomy
  (`sentgraph.annotation`), small helpers (`sentgraph.util`) and debug
  renderings (`sentgraph.graph`)

* conventions: Penn Treebank labels and part of speech tags
  (`sentgraph.ptb`)

* external tool output (`sentgraph.external`): tokens, constituency
  trees, dependency graphs and coreference chains as emitted by a
  CoreNLP-style pipeline, assembled into sentences and documents ::

                 corenlp                         [document layer]
                    |
        +--------+--+---------+--------+
        |        |            |        |
        v        v            v        v
     postag   parser      depgraph   coref        [tool output]
        |        |            |        |
        v        v            v        v
       annotation  <-------  ptb  ---> util       [base layer]

Everything is built once from fully materialized input and is read-only
afterwards; nothing in here does any I/O.
"""
