#! /usr/bin/env python
from conftest import make_sample_triples
from util4tests import run_single_test

from pysparqlsession.iterators import AliasManager, TripleIterator
from pysparqlsession.model import URIReference


def test_alias_manager_compact():
    aliases = AliasManager(
        {"ex": "http://ex.org/", "exs": "http://ex.org/sub/"}
    )
    assert aliases.compact(URIReference("http://ex.org/a")) == "ex:a"
    assert aliases.compact(URIReference("http://ex.org/sub/b")) == "exs:b"
    assert aliases.compact(URIReference("urn:x:1")) == "<urn:x:1>"
    assert AliasManager().get_aliases() == {}
    assert aliases == AliasManager(aliases.get_aliases())


def test_triple_iterator_single_pass():
    triples = make_sample_triples(range(4))
    found = TripleIterator(list(triples) + list(triples))
    assert found.aliases == AliasManager()
    assert found.to_set() == triples
    assert list(found) == [], "a triple iterator can only be consumed once"


def test_triple_iterator_close():
    with TripleIterator(make_sample_triples(range(4))) as found:
        next(found)
    assert list(found) == []


if __name__ == "__main__":
    run_single_test(__file__)
