import os
from pathlib import Path
from typing import Iterable, List, Set
from uuid import uuid4

import pytest
from rdflib import Graph
from rdflib.query import Result
from util4tests import enable_test_logging, log

from pysparqlsession import (
    MemorySparqlExecutor,
    ReadOnlySparqlSession,
    SparqlSession,
    Triple,
    URIReference,
    create_session_factory,
)
from pysparqlsession.executors import (
    MemoryQueryExecution,
    QueryExecution,
    SparqlExecutor,
)
from pysparqlsession.sparql import QueryRequest, UpdateRequest

TEST_INPUT_FOLDER = Path(__file__).parent / "./input"
GRAPH_NAME = "http://ex.org/g"
EX = "http://ex.org/"
SELECT_ALL_SPO = "SELECT ?s ?p ?o WHERE { GRAPH <%s> { ?s ?p ?o . } }"


enable_test_logging()  # note that this includes loading .env into os.getenv


class CountingExecution(MemoryQueryExecution):
    """memory execution that keeps track of actual executions"""

    def __init__(self, request, dataset):
        super().__init__(request, dataset)
        self.runs = 0

    def _execute(self) -> Result:
        self.runs += 1
        return super()._execute()


class RecordingExecutor(SparqlExecutor):
    """test double recording every request before running it in memory"""

    def __init__(self):
        self.memory = MemorySparqlExecutor()
        self.updates: List[UpdateRequest] = []
        self.queries: List[QueryRequest] = []
        self.constructs: List[QueryRequest] = []
        self.executions: List[CountingExecution] = []

    @property
    def requests(self) -> list:
        return self.updates + self.queries + self.constructs

    def update(self, request: UpdateRequest) -> None:
        log.debug(f"recording update {request.sparql=}")
        self.updates.append(request)
        self.memory.update(request)

    def _open(self, request: QueryRequest) -> QueryExecution:
        execution = CountingExecution(request, self.memory.dataset)
        self.executions.append(execution)
        return execution

    def query(self, request: QueryRequest) -> QueryExecution:
        log.debug(f"recording query {request.sparql=}")
        self.queries.append(request)
        return self._open(request)

    def construct(self, request: QueryRequest) -> QueryExecution:
        log.debug(f"recording construct {request.sparql=}")
        self.constructs.append(request)
        return self._open(request)


class CannedExecution(QueryExecution):
    """execution answering with a prepared graph, whatever was asked"""

    def __init__(self, request: QueryRequest, graph: Graph):
        super().__init__(request)
        self._graph = graph

    def _execute(self) -> Result:
        result = Result(self.request.query_type.name)
        result.graph = self._graph
        return result


class CannedGraphExecutor(RecordingExecutor):
    """recording executor whose triple queries all answer the same graph"""

    def __init__(self, graph: Graph):
        super().__init__()
        self.graph = graph

    def construct(self, request: QueryRequest) -> QueryExecution:
        self.constructs.append(request)
        return CannedExecution(request, self.graph)


@pytest.fixture()
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture()
def session(executor) -> SparqlSession:
    return SparqlSession(executor, GRAPH_NAME)


@pytest.fixture()
def readonly_session(executor) -> ReadOnlySparqlSession:
    return ReadOnlySparqlSession(executor, GRAPH_NAME)


@pytest.fixture(scope="session")
def _uri_session() -> SparqlSession:
    """session against an available triplestore
    But only if environment variables are set and service is available
    else None (which will result in trimming it from sessions fixture)
    """
    read_uri = os.getenv("TEST_SPARQL_READ_URI", None)
    write_uri = os.getenv("TEST_SPARQL_WRITE_URI", read_uri)
    # if no URI provided - skip this by returning None
    if read_uri is None or write_uri is None:
        log.debug("not creating uri session in test - no uri provided")
        return None
    # else -- all is well
    graph_name = f"urn:test:pysparqlsession:{uuid4()}"
    log.debug(f"creating uri session to ({read_uri=}, {write_uri=})")
    factory = create_session_factory(
        graph_name, query_uri=read_uri, update_uri=write_uri
    )
    return factory.new_session()


@pytest.fixture()
def sessions(session, _uri_session) -> Iterable[SparqlSession]:
    """trimmed list of available sessions to be tested
    result should contain at least the memory backed session,
    and (if available) also include the uri backed one
    """
    return tuple(s for s in (session, _uri_session) if s is not None)


def make_sample_triples(items: Iterable, base: str = EX) -> Set[Triple]:
    return {
        Triple(
            *(
                URIReference(f"{base}{part}#{n}")
                for part in ["subject", "predicate", "object"]
            )
        )
        for n in items
    }


@pytest.fixture()
def example_triples() -> Set[Triple]:
    return make_sample_triples(range(10))
