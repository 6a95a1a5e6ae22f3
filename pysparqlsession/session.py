import logging
from abc import ABC, abstractmethod
from typing import AbstractSet, Iterable, Optional, Union

from rdflib import Graph, URIRef, Variable
from rdflib.term import Node

from .common import LANGUAGES, QUERY_BUILDER
from .converters import (
    object_converter,
    predicate_converter,
    render_triple,
    subject_converter,
    triple_converter,
    uri_converter,
)
from .errors import UnsupportedLanguageError, UnsupportedQueryTypeError
from .executors import QueryExecution, SparqlExecutor
from .iterators import AliasManager, TripleIterator, TupleIterator
from .model import (
    ObjectNode,
    Operation,
    PredicateNode,
    SubjectNode,
    Triple,
    URIReference,
)
from .rebase import Rebase, no_rebase
from .sparql import QueryType, parse_query, parse_update

log = logging.getLogger(__name__)

GraphName = Union[str, URIReference, Node]


class TriplestoreSession(ABC):
    """This interface describes the contract of a session against a
    triplestore: mutating sets of triples, and querying either for tuples
    (rows of bindings) or for triples.
    """

    @abstractmethod
    def add(self, triples: Iterable[Triple]) -> None:
        """adds the triples to the store

        :param triples: the triples to add
        :type triples: Iterable[Triple]
        :rtype: None
        """
        pass

    @abstractmethod
    def delete(self, triples: Iterable[Triple]) -> None:
        """deletes the triples from the store

        :param triples: the triples to remove
        :type triples: Iterable[Triple]
        :rtype: None
        """
        pass

    @abstractmethod
    def query(self, query_text: str, lang: str) -> TupleIterator:
        """executes a tuple query

        :param query_text: the query-statement to execute
        :type query_text: str
        :param lang: the query language of the statement
        :type lang: str
        :return: lazy iterator over the result rows
        :rtype: TupleIterator
        """
        pass

    @abstractmethod
    def find_triples(self, lang: str, query_text: str) -> TripleIterator:
        """executes a query producing triples

        :param lang: the query language of the statement
        :type lang: str
        :param query_text: the query-statement to execute
        :type query_text: str
        :return: the triples found
        :rtype: TripleIterator
        """
        pass

    @abstractmethod
    def find_triples_matching(
        self,
        subject: Optional[SubjectNode] = None,
        predicate: Optional[PredicateNode] = None,
        obj: Optional[ObjectNode] = None,
    ) -> TripleIterator:
        """finds the triples matching a pattern, None acts as wildcard

        :return: the triples found
        :rtype: TripleIterator
        """
        pass

    @abstractmethod
    def list_tuple_languages(self) -> AbstractSet[str]:
        pass

    @abstractmethod
    def list_triple_languages(self) -> AbstractSet[str]:
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def check_lang(lang: str) -> None:
    """only SPARQL is supported, in any letter case"""
    if not isinstance(lang, str) or lang.upper() not in LANGUAGES:
        raise UnsupportedLanguageError(lang)


def retrieve_model(execution: QueryExecution) -> Graph:
    """pulls the result graph from an execution of a triple query

    :raises UnsupportedQueryTypeError: for any query type other than
      CONSTRUCT or DESCRIBE
    """
    query_type = execution.request.query_type
    if query_type is QueryType.CONSTRUCT:
        return execution.exec_construct()
    elif query_type is QueryType.DESCRIBE:
        return execution.exec_describe()
    # SELECT, ASK
    raise UnsupportedQueryTypeError(query_type, "CONSTRUCT or DESCRIBE")


def graph_name_n3(graph_name: GraphName) -> str:
    if isinstance(graph_name, URIReference):
        graph_name = uri_converter.forward(graph_name)
    elif not isinstance(graph_name, Node):
        graph_name = URIRef(graph_name)
    return graph_name.n3()


class SparqlSession(TriplestoreSession):
    """A session implementing every operation with SPARQL Query and Update.

    The session keeps no triples itself, every operation is translated
    into SPARQL text and handed to the executor.

    :param executor: the engine running the generated requests
    :type executor: SparqlExecutor
    :param graph_name: the named graph to put triples in and find them in
    :type graph_name: str, URIReference or rdflib Node
    :param rebase: hook applied to all generated text before parsing
    :type rebase: Callable[[str], str]
    """

    def __init__(
        self,
        executor: SparqlExecutor,
        graph_name: GraphName,
        rebase: Rebase = no_rebase,
    ):
        self._executor = executor
        self._graph = graph_name_n3(graph_name)
        self._rebase = rebase

    @property
    def graph_name(self) -> str:
        return self._graph

    def add(self, triples: Iterable[Triple]) -> None:
        self.mutate(triples, Operation.INSERT)

    def delete(self, triples: Iterable[Triple]) -> None:
        self.mutate(triples, Operation.DELETE)

    def mutate(self, triples: Iterable[Triple], operation: Operation) -> None:
        """sends one SPARQL Update for the whole batch of triples"""
        log.debug(f"{operation} for {triples=}")
        block = "".join(f"{render_triple(t)} .\n" for t in triples)
        payload = self._rebase(
            QUERY_BUILDER.build_syntax(
                "update_data.sparql",
                operation=operation.value,
                graph=self._graph,
                block=block,
            ).strip()
        )
        log.debug(f"Sending SPARQL Update operation:\n{payload}")
        self._executor.update(parse_update(payload))

    def query(self, query_text: str, lang: str) -> TupleIterator:
        check_lang(lang)
        request = parse_query(self._rebase(query_text))
        log.debug(f"Sending SPARQL Query:\n{request.sparql}")
        return TupleIterator(self._executor.query(request))

    def find_triples(self, lang: str, query_text: str) -> TripleIterator:
        check_lang(lang)
        request = parse_query(self._rebase(query_text))
        log.debug(f"Sending SPARQL triple Query:\n{request.sparql}")
        with self._executor.construct(request) as execution:
            answer = retrieve_model(execution)
            triples = set(map(triple_converter.backward, answer))
            aliases = AliasManager(dict(answer.namespaces()))
        log.debug(f"found {len(triples)=}")
        return TripleIterator(triples, aliases)

    def find_triples_matching(
        self,
        subject: Optional[SubjectNode] = None,
        predicate: Optional[PredicateNode] = None,
        obj: Optional[ObjectNode] = None,
    ) -> TripleIterator:
        s = Variable("s") if subject is None else (
            subject_converter.forward(subject)
        )
        p = Variable("p") if predicate is None else (
            predicate_converter.forward(predicate)
        )
        o = Variable("o") if obj is None else object_converter.forward(obj)
        pattern = f"{{ {s.n3()} {p.n3()} {o.n3()}}}"
        query_text = QUERY_BUILDER.build_syntax(
            "construct_pattern.sparql", pattern=pattern, graph=self._graph
        ).strip()
        return self.find_triples("sparql", query_text)

    def list_tuple_languages(self) -> AbstractSet[str]:
        return LANGUAGES

    def list_triple_languages(self) -> AbstractSet[str]:
        return LANGUAGES

    def close(self) -> None:
        pass  # nothing held


class ReadOnlySparqlSession(SparqlSession):
    """A SparqlSession that accepts but discards all mutations.

    add() and delete() succeed without ever contacting the store, callers
    of a read-only session must expect their changes to be dropped.
    """

    def mutate(self, triples: Iterable[Triple], operation: Operation) -> None:
        log.debug(f"read-only session ignores {operation}")
