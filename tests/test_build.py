#! /usr/bin/env python
import logging

from util4tests import run_single_test

from pysparqlsession import (
    EndpointSparqlExecutor,
    MemorySparqlExecutor,
    ReadOnlySparqlSession,
    SparqlSession,
    SparqlSessionFactory,
    create_session_factory,
    factory_from_env,
)
from pysparqlsession.build import DEFAULT_GRAPH_NAME
from pysparqlsession.rebase import BaseRebaser, no_rebase

QUERY_URI = "http://localhost:7200/repositories/rdf_store_test"
UPDATE_URI = "http://localhost:7200/repositories/rdf_store_test/statements"


def test_memory_factory():
    factory = create_session_factory()
    assert isinstance(factory.executor, MemorySparqlExecutor)
    assert factory.graph_name == DEFAULT_GRAPH_NAME
    assert factory.rebase is no_rebase
    session = factory.new_session()
    assert type(session) is SparqlSession
    assert factory.list_tuple_languages() == {"SPARQL"}
    assert factory.list_triple_languages() == {"SPARQL"}
    factory.close()


def test_read_only_factory():
    factory = create_session_factory("urn:g:1", read_only=True)
    assert isinstance(factory.new_session(), ReadOnlySparqlSession)


def test_endpoint_factory():
    factory = create_session_factory(
        "urn:g:1", query_uri=QUERY_URI, update_uri=UPDATE_URI
    )
    assert isinstance(factory.executor, EndpointSparqlExecutor)
    assert factory.executor.update_endpoint == UPDATE_URI
    assert type(factory.new_session()) is SparqlSession


def test_endpoint_factory_without_update_is_read_only():
    factory = create_session_factory("urn:g:1", query_uri=QUERY_URI)
    assert factory.read_only
    assert isinstance(factory.new_session(), ReadOnlySparqlSession)


def test_update_uri_without_query_uri_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="pysparqlsession.build"):
        factory = create_session_factory("urn:g:1", update_uri=UPDATE_URI)
    assert isinstance(factory.executor, MemorySparqlExecutor)
    assert not factory.read_only
    assert "without a query uri" in caplog.text
    assert UPDATE_URI in caplog.text


def test_sessions_share_the_executor():
    executor = MemorySparqlExecutor()
    factory = SparqlSessionFactory(executor, "urn:g:1")
    one, two = factory.new_session(), factory.new_session()
    assert one is not two
    assert one.graph_name == two.graph_name == "<urn:g:1>"


def test_factory_from_env(monkeypatch):
    monkeypatch.setenv("SPARQL_QUERY_URI", QUERY_URI)
    monkeypatch.setenv("SPARQL_UPDATE_URI", UPDATE_URI)
    monkeypatch.setenv("SPARQL_GRAPH_NAME", "urn:g:env")
    monkeypatch.setenv("SPARQL_READ_ONLY", "Yes")
    monkeypatch.setenv("SPARQL_BASE_URI", "http://ex.org/")
    monkeypatch.delenv("SPARQL_CONSTRUCT_URI", raising=False)
    factory = factory_from_env()
    assert factory.graph_name == "urn:g:env"
    assert factory.read_only
    assert isinstance(factory.rebase, BaseRebaser)
    assert factory.executor.construct_endpoint == QUERY_URI


def test_factory_from_empty_env(monkeypatch):
    for name in (
        "SPARQL_QUERY_URI",
        "SPARQL_UPDATE_URI",
        "SPARQL_CONSTRUCT_URI",
        "SPARQL_GRAPH_NAME",
        "SPARQL_READ_ONLY",
        "SPARQL_BASE_URI",
    ):
        monkeypatch.delenv(name, raising=False)
    factory = factory_from_env()
    assert isinstance(factory.executor, MemorySparqlExecutor)
    assert not factory.read_only


if __name__ == "__main__":
    run_single_test(__file__)
