import logging
from abc import ABC, abstractmethod
from typing import Optional

from rdflib import Dataset, Graph
from rdflib.plugins.stores.sparqlstore import SPARQLStore, SPARQLUpdateStore
from rdflib.query import Result

from .errors import (
    ReadOnlyStoreError,
    TriplestoreError,
    UnsupportedQueryTypeError,
)
from .sparql import QueryRequest, QueryType, UpdateRequest

log = logging.getLogger(__name__)


class QueryExecution(ABC):
    """Open execution handle for one parsed query.

    The query is executed lazily, at most once, on the first exec_* call.
    Each exec_* method only accepts queries of its own declared type.
    """

    def __init__(self, request: QueryRequest):
        self.request = request
        self._result: Optional[Result] = None
        self._closed = False

    @abstractmethod
    def _execute(self) -> Result:
        """actually executes the query and returns the raw rdflib result"""
        pass

    def _run(self, expected: QueryType) -> Result:
        query_type = self.request.query_type
        if query_type is not expected:
            raise UnsupportedQueryTypeError(query_type, str(expected))
        if self._closed:
            raise TriplestoreError("query execution is already closed")
        if self._result is None:
            log.debug(f"executing {query_type} query")
            self._result = self._execute()
        return self._result

    def exec_select(self) -> Result:
        return self._run(QueryType.SELECT)

    def exec_ask(self) -> bool:
        return bool(self._run(QueryType.ASK).askAnswer)

    def exec_construct(self) -> Graph:
        return self._run(QueryType.CONSTRUCT).graph

    def exec_describe(self) -> Graph:
        return self._run(QueryType.DESCRIBE).graph

    def close(self) -> None:
        self._closed = True
        self._result = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class SparqlExecutor(ABC):
    """This interface describes the three capabilities a session needs
    from the engine that actually runs its SPARQL requests.
    Each of these can be substituted independently, e.g. by test doubles
    that record the generated request text.
    """

    @abstractmethod
    def update(self, request: UpdateRequest) -> None:
        """executes a SPARQL Update request

        :param request: the parsed update to execute
        :type request: UpdateRequest
        :rtype: None
        """
        pass

    @abstractmethod
    def query(self, request: QueryRequest) -> QueryExecution:
        """opens an execution for a SELECT or ASK query

        :param request: the parsed query to execute
        :type request: QueryRequest
        :return: the (not yet executed) handle to pull rows from
        :rtype: QueryExecution
        """
        pass

    @abstractmethod
    def construct(self, request: QueryRequest) -> QueryExecution:
        """opens an execution for a CONSTRUCT or DESCRIBE query

        :param request: the parsed query to execute
        :type request: QueryRequest
        :return: the (not yet executed) handle to pull a graph from
        :rtype: QueryExecution
        """
        pass


class EndpointQueryExecution(QueryExecution):
    def __init__(self, request: QueryRequest, endpoint: str):
        super().__init__(request)
        self.endpoint = endpoint

    def _execute(self) -> Result:
        store = SPARQLStore(query_endpoint=self.endpoint)
        result = store.query(self.request.sparql)
        log.debug(f"Result from SPARQLStore :: {type(result)=} -> {result=}")
        return result


class EndpointSparqlExecutor(SparqlExecutor):
    """Executes the requests against remote SPARQL endpoints

    :param query_endpoint: The URI of the SPARQL endpoint for SELECT/ASK
    :type query_endpoint: str
    :param update_endpoint: The URI of the SPARQL endpoint to write to.
      If not provided, updates are refused.
    :type update_endpoint: Optional[str]
    :param construct_endpoint: The URI of the SPARQL endpoint for
      CONSTRUCT/DESCRIBE, defaults to the query_endpoint
    :type construct_endpoint: Optional[str]
    """

    def __init__(
        self,
        query_endpoint: str,
        update_endpoint: Optional[str] = None,
        construct_endpoint: Optional[str] = None,
    ):
        self.query_endpoint = query_endpoint
        self.update_endpoint = update_endpoint
        self.construct_endpoint = construct_endpoint or query_endpoint

    @property
    def allows_update(self) -> bool:
        return self.update_endpoint is not None

    @property
    def sparql_store(self) -> SPARQLUpdateStore:  # built per request
        return SPARQLUpdateStore(
            query_endpoint=self.query_endpoint,
            update_endpoint=self.update_endpoint,
            method="POST",
            autocommit=True,
        )

    def update(self, request: UpdateRequest) -> None:
        if not self.allows_update:
            raise ReadOnlyStoreError(
                "updates can not be executed if no update endpoint is provided"
            )
        log.debug(f"exec update at {self.update_endpoint=}")
        self.sparql_store.update(request.sparql)

    def query(self, request: QueryRequest) -> QueryExecution:
        return EndpointQueryExecution(request, self.query_endpoint)

    def construct(self, request: QueryRequest) -> QueryExecution:
        return EndpointQueryExecution(request, self.construct_endpoint)


class MemoryQueryExecution(QueryExecution):
    def __init__(self, request: QueryRequest, dataset: Dataset):
        super().__init__(request)
        self._dataset = dataset

    def _execute(self) -> Result:
        return self._dataset.query(self.request.query)


class MemorySparqlExecutor(SparqlExecutor):
    """Executes the requests in process against an rdflib Dataset

    :param dataset: the dataset to work on, a fresh one if not provided
    :type dataset: Optional[Dataset]
    """

    def __init__(self, dataset: Optional[Dataset] = None):
        self.dataset = dataset if dataset is not None else Dataset()

    def update(self, request: UpdateRequest) -> None:
        self.dataset.update(request.update)

    def query(self, request: QueryRequest) -> QueryExecution:
        return MemoryQueryExecution(request, self.dataset)

    def construct(self, request: QueryRequest) -> QueryExecution:
        return MemoryQueryExecution(request, self.dataset)
