import logging
import os
from typing import AbstractSet, Optional

from .common import LANGUAGES
from .executors import (
    EndpointSparqlExecutor,
    MemorySparqlExecutor,
    SparqlExecutor,
)
from .rebase import BaseRebaser, Rebase, no_rebase
from .session import GraphName, ReadOnlySparqlSession, SparqlSession

log = logging.getLogger(__name__)

DEFAULT_GRAPH_NAME = "urn:py-sparql-session:default"
TRUE_VALUES = ("1", "true", "yes", "on")


class SparqlSessionFactory:
    """Hands out sessions bound to one executor and one named graph

    :param executor: the engine running the SPARQL requests
    :type executor: SparqlExecutor
    :param graph_name: the named graph the sessions work in
    :type graph_name: str, URIReference or rdflib Node
    :param read_only: whether the sessions discard all mutations
    :type read_only: bool
    :param rebase: hook applied to all generated text before parsing
    :type rebase: Callable[[str], str]
    """

    def __init__(
        self,
        executor: SparqlExecutor,
        graph_name: GraphName,
        read_only: bool = False,
        rebase: Rebase = no_rebase,
    ):
        self.executor = executor
        self.graph_name = graph_name
        self.read_only = read_only
        self.rebase = rebase

    def new_session(self) -> SparqlSession:
        session_class = (
            ReadOnlySparqlSession if self.read_only else SparqlSession
        )
        log.debug(f"new {session_class.__name__} into {self.graph_name=}")
        return session_class(self.executor, self.graph_name, self.rebase)

    def list_tuple_languages(self) -> AbstractSet[str]:
        return LANGUAGES

    def list_triple_languages(self) -> AbstractSet[str]:
        return LANGUAGES

    def close(self) -> None:
        pass  # nothing held


def create_session_factory(
    graph_name: GraphName = DEFAULT_GRAPH_NAME,
    query_uri: Optional[str] = None,
    update_uri: Optional[str] = None,
    construct_uri: Optional[str] = None,
    read_only: bool = False,
    base_uri: Optional[str] = None,
) -> SparqlSessionFactory:
    """builds a factory for sessions against the indicated endpoints

    Without a query_uri the sessions work on an in-memory dataset.
    Without an update_uri (but with a query_uri) they are read-only.
    """
    if query_uri is None:
        if update_uri or construct_uri:
            log.warning(
                f"ignoring {update_uri=} and {construct_uri=} "
                "without a query uri, using an in-memory store"
            )
        executor = MemorySparqlExecutor()
    else:
        executor = EndpointSparqlExecutor(
            query_endpoint=query_uri,
            update_endpoint=update_uri,
            construct_endpoint=construct_uri,
        )
        if update_uri is None and not read_only:
            log.debug(f"no update uri for {query_uri=}, forcing read-only")
            read_only = True
    rebase = BaseRebaser(base_uri) if base_uri else no_rebase
    return SparqlSessionFactory(executor, graph_name, read_only, rebase)


def factory_from_env() -> SparqlSessionFactory:
    """same as create_session_factory, with settings taken from the
    SPARQL_QUERY_URI, SPARQL_UPDATE_URI, SPARQL_CONSTRUCT_URI,
    SPARQL_GRAPH_NAME, SPARQL_READ_ONLY and SPARQL_BASE_URI env variables
    """
    read_only = os.getenv("SPARQL_READ_ONLY", "").strip().lower()
    return create_session_factory(
        graph_name=os.getenv("SPARQL_GRAPH_NAME", DEFAULT_GRAPH_NAME),
        query_uri=os.getenv("SPARQL_QUERY_URI") or None,
        update_uri=os.getenv("SPARQL_UPDATE_URI") or None,
        construct_uri=os.getenv("SPARQL_CONSTRUCT_URI") or None,
        read_only=read_only in TRUE_VALUES,
        base_uri=os.getenv("SPARQL_BASE_URI") or None,
    )
