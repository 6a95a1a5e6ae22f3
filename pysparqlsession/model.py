"""The abstract relationship model handed to and returned from sessions.

Terms are immutable value objects with structural equality. Their legal
roles inside a :class:`Triple` are:

- subject: :class:`URIReference` or :class:`BlankNode`
- predicate: :class:`URIReference`
- object: :class:`URIReference`, :class:`BlankNode` or :class:`Literal`
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Union
from uuid import uuid4

from .clean import check_valid_bnode_label, check_valid_uri

_LANGTAG = re.compile(r"^[a-zA-Z]+(?:-[a-zA-Z0-9]+)*$")


@dataclass(frozen=True)
class URIReference:
    uri: str

    def __post_init__(self):
        if not check_valid_uri(self.uri):
            raise ValueError(f"not a valid absolute uri: {self.uri!r}")

    def __str__(self) -> str:
        return self.uri


def _fresh_label() -> str:
    return f"b{uuid4().hex}"


@dataclass(frozen=True)
class BlankNode:
    identifier: str = field(default_factory=_fresh_label)

    def __post_init__(self):
        if not check_valid_bnode_label(self.identifier):
            raise ValueError(
                f"not a valid blank node label: {self.identifier!r}"
            )

    def __str__(self) -> str:
        return f"_:{self.identifier}"


@dataclass(frozen=True)
class Literal:
    lexical_form: str
    language: Optional[str] = None
    datatype: Optional[URIReference] = None

    def __post_init__(self):
        if self.language is not None:
            if self.datatype is not None:
                raise ValueError(
                    "a literal can not have both a language and a datatype"
                )
            if not _LANGTAG.match(self.language):
                raise ValueError(f"invalid language tag {self.language!r}")
            # language tags compare case-insensitively
            object.__setattr__(self, "language", self.language.lower())
        if self.datatype is not None and not isinstance(
            self.datatype, URIReference
        ):
            raise TypeError("the datatype of a literal is a URIReference")

    def __str__(self) -> str:
        return self.lexical_form


SubjectNode = Union[URIReference, BlankNode]
PredicateNode = URIReference
ObjectNode = Union[URIReference, BlankNode, Literal]
RelationshipTerm = ObjectNode

SUBJECT_TYPES = (URIReference, BlankNode)
PREDICATE_TYPES = (URIReference,)
OBJECT_TYPES = (URIReference, BlankNode, Literal)


@dataclass(frozen=True)
class Triple:
    subject: SubjectNode
    predicate: PredicateNode
    object: ObjectNode

    def __post_init__(self):
        for role, term, legal in (
            ("subject", self.subject, SUBJECT_TYPES),
            ("predicate", self.predicate, PREDICATE_TYPES),
            ("object", self.object, OBJECT_TYPES),
        ):
            if not isinstance(term, legal):
                raise TypeError(
                    f"{type(term).__name__} is not allowed as {role}"
                )

    def __iter__(self) -> Iterator[RelationshipTerm]:
        return iter((self.subject, self.predicate, self.object))


class Operation(Enum):
    """The SPARQL Update verbs used to mutate a batch of triples."""

    INSERT = "INSERT"
    DELETE = "DELETE"

    def __str__(self) -> str:
        return self.value
