"""Structured SPARQL requests as handed to a :class:`SparqlExecutor`.

Each request carries the final wire text next to the form rdflib parsed
it into, so executors can send the text while test doubles can assert
on it.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from rdflib.plugins.sparql import prepareQuery, prepareUpdate
from rdflib.plugins.sparql.sparql import Query, Update

log = logging.getLogger(__name__)


class QueryType(Enum):
    SELECT = "SelectQuery"
    CONSTRUCT = "ConstructQuery"
    ASK = "AskQuery"
    DESCRIBE = "DescribeQuery"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class UpdateRequest:
    sparql: str
    update: Update


@dataclass(frozen=True)
class QueryRequest:
    sparql: str
    query: Query
    query_type: QueryType


def parse_update(sparql: str) -> UpdateRequest:
    """parses update text, parser errors from rdflib propagate as is"""
    return UpdateRequest(sparql, prepareUpdate(sparql))


def parse_query(sparql: str) -> QueryRequest:
    """parses query text and derives its declared type,
    parser errors from rdflib propagate as is"""
    query = prepareQuery(sparql)
    query_type = QueryType(query.algebra.name)
    log.debug(f"parsed query of {query_type=}")
    return QueryRequest(sparql, query, query_type)
