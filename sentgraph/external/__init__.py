"""
Output of external annotation tools (part of speech taggers, syntactic
parsers, coreference resolvers), as produced by eg. the CoreNLP
pipeline, and the sentences and documents we build out of them.
"""
