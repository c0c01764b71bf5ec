"""In-memory inverted index and query engine.

- models: index entries, mode enum, reports
- tokenizers, sanitizers, index_strategies, pruning: pluggable collaborators
- token_index: plain and weighted inverted index store
- indexing: document indexing pass
- idf_cache, scoring: TF-IDF relevance
- query: candidate lookup, pruning and ranking
- engine: the ``Search`` facade
"""
