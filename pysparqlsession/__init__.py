"""pysparqlsession

.. module:: pysparqlsession
:platform: Unix, Windows
:synopsis: A triplestore session implemented with SPARQL Query and Update

.. moduleauthor:: "Open Science Team VLIZ vzw" <opsci@vliz.be>
"""

from .build import (
    SparqlSessionFactory,
    create_session_factory,
    factory_from_env,
)
from .errors import (
    ReadOnlyStoreError,
    TermConversionError,
    TriplestoreError,
    UnsupportedLanguageError,
    UnsupportedQueryTypeError,
)
from .executors import (
    EndpointSparqlExecutor,
    MemorySparqlExecutor,
    QueryExecution,
    SparqlExecutor,
)
from .iterators import AliasManager, TripleIterator, TupleIterator
from .model import BlankNode, Literal, Operation, Triple, URIReference
from .session import ReadOnlySparqlSession, SparqlSession, TriplestoreSession

__all__ = [
    "AliasManager",
    "BlankNode",
    "EndpointSparqlExecutor",
    "Literal",
    "MemorySparqlExecutor",
    "Operation",
    "QueryExecution",
    "ReadOnlySparqlSession",
    "ReadOnlyStoreError",
    "SparqlExecutor",
    "SparqlSession",
    "SparqlSessionFactory",
    "TermConversionError",
    "Triple",
    "TripleIterator",
    "TriplestoreError",
    "TriplestoreSession",
    "TupleIterator",
    "URIReference",
    "UnsupportedLanguageError",
    "UnsupportedQueryTypeError",
    "create_session_factory",
    "factory_from_env",
]
