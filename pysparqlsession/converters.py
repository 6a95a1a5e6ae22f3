from abc import ABC, abstractmethod
from typing import Tuple

from rdflib import BNode, URIRef
from rdflib import Literal as RDFLiteral
from rdflib.term import Node

from .errors import TermConversionError
from .model import (
    BlankNode,
    Literal,
    ObjectNode,
    PredicateNode,
    SubjectNode,
    Triple,
    URIReference,
)


WireTriple = Tuple[Node, Node, Node]


class NodeConverter(ABC):
    """Bidirectional mapping between the abstract terms of one role and
    the rdflib terms used to build and read SPARQL.

    forward: abstract term -> rdflib term (used for outgoing requests)
    backward: rdflib term -> abstract term (used on inbound results)
    """

    role: str = "term"

    @abstractmethod
    def forward(self, term):
        pass

    @abstractmethod
    def backward(self, node):
        pass

    def _illegal(self, thing) -> TermConversionError:
        return TermConversionError(
            f"{type(thing).__name__} {thing!r} can not be used as {self.role}"
        )


class UriConverter(NodeConverter):
    role = "uri"

    def forward(self, term: URIReference) -> URIRef:
        if not isinstance(term, URIReference):
            raise self._illegal(term)
        return URIRef(term.uri)

    def backward(self, node: URIRef) -> URIReference:
        if not isinstance(node, URIRef):
            raise self._illegal(node)
        try:
            return URIReference(str(node))
        except ValueError as e:
            raise TermConversionError(str(e)) from e


class SubjectConverter(NodeConverter):
    """uri references pass through the uri converter, blank nodes keep
    their label"""

    role = "subject"

    def forward(self, term: SubjectNode) -> Node:
        if isinstance(term, BlankNode):
            return BNode(term.identifier)
        if isinstance(term, URIReference):
            return uri_converter.forward(term)
        raise self._illegal(term)

    def backward(self, node: Node) -> SubjectNode:
        if isinstance(node, BNode):
            try:
                return BlankNode(str(node))
            except ValueError as e:
                raise TermConversionError(str(e)) from e
        if isinstance(node, URIRef):
            return uri_converter.backward(node)
        raise self._illegal(node)


class PredicateConverter(NodeConverter):
    role = "predicate"

    def forward(self, term: PredicateNode) -> URIRef:
        if not isinstance(term, URIReference):
            raise self._illegal(term)
        return uri_converter.forward(term)

    def backward(self, node: URIRef) -> PredicateNode:
        if not isinstance(node, URIRef):
            raise self._illegal(node)
        return uri_converter.backward(node)


class ObjectConverter(NodeConverter):
    role = "object"

    def forward(self, term: ObjectNode) -> Node:
        if isinstance(term, Literal):
            datatype = (
                uri_converter.forward(term.datatype)
                if term.datatype is not None
                else None
            )
            # keep the lexical form exactly as given
            return RDFLiteral(
                term.lexical_form,
                lang=term.language,
                datatype=datatype,
                normalize=False,
            )
        if isinstance(term, (URIReference, BlankNode)):
            return subject_converter.forward(term)
        raise self._illegal(term)

    def backward(self, node: Node) -> ObjectNode:
        if isinstance(node, RDFLiteral):
            datatype = (
                uri_converter.backward(node.datatype)
                if node.datatype is not None
                else None
            )
            try:
                return Literal(str(node), node.language, datatype)
            except ValueError as e:
                raise TermConversionError(str(e)) from e
        if isinstance(node, (URIRef, BNode)):
            return subject_converter.backward(node)
        raise self._illegal(node)


class TripleConverter:
    """positional composition of the subject, predicate and object
    converters"""

    def __init__(
        self,
        subjects: NodeConverter,
        predicates: NodeConverter,
        objects: NodeConverter,
    ):
        self._converters = (subjects, predicates, objects)

    def forward(self, triple: Triple) -> WireTriple:
        return tuple(
            conv.forward(term) for conv, term in zip(self._converters, triple)
        )

    def backward(self, statement: WireTriple) -> Triple:
        """usable as a bulk mapping function, e.g.
        ``set(map(triple_converter.backward, graph))``
        """
        s, p, o = (
            conv.backward(node)
            for conv, node in zip(self._converters, statement)
        )
        return Triple(s, p, o)


uri_converter = UriConverter()
subject_converter = SubjectConverter()
predicate_converter = PredicateConverter()
object_converter = ObjectConverter()
triple_converter = TripleConverter(
    subject_converter, predicate_converter, object_converter
)


def render_triple(triple: Triple) -> str:
    """renders the triple in SPARQL wire syntax as ``s p o``"""
    return " ".join(node.n3() for node in triple_converter.forward(triple))
