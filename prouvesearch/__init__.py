"""
Prouvé Search - Unified search and recommendation engine for the Jean Prouvé archive.

Example:
    >>> from prouvesearch.adapters.content import JSONContentRepository
    >>> from prouvesearch.domains.content import CorpusSnapshot
    >>> from prouvesearch.domains.search import ContentSearchEngine, SearchQuery
    >>> corpus = CorpusSnapshot.from_repository(JSONContentRepository())
    >>> results = ContentSearchEngine(corpus).perform_search(SearchQuery(term="maison"))
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
