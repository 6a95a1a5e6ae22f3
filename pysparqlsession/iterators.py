import logging
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Set

from .converters import object_converter
from .executors import QueryExecution
from .model import RelationshipTerm, Triple, URIReference

log = logging.getLogger(__name__)

Row = Dict[str, RelationshipTerm]


class AliasManager:
    """Passive carrier of the prefix -> namespace mapping that came
    along with a result graph.

    :param aliases: the mapping of prefix to namespace uri
    :type aliases: Mapping[str, str]
    """

    def __init__(self, aliases: Optional[Mapping[str, str]] = None):
        self._aliases = {
            str(prefix): str(ns) for prefix, ns in (aliases or {}).items()
        }

    def get_aliases(self) -> Dict[str, str]:
        return dict(self._aliases)

    def compact(self, term: URIReference) -> str:
        """renders the uri as prefix:local if a known namespace matches"""
        uri = term.uri
        best = None
        for prefix, ns in self._aliases.items():
            if uri.startswith(ns) and (best is None or len(ns) > len(best[1])):
                best = (prefix, ns)
        if best is None:
            return f"<{uri}>"
        prefix, ns = best
        return f"{prefix}:{uri[len(ns):]}"

    def __eq__(self, other):
        if not isinstance(other, AliasManager):
            return NotImplemented
        return self._aliases == other._aliases

    def __repr__(self):
        return f"AliasManager({self._aliases!r})"


class TupleIterator(Iterator[Row]):
    """Lazy, single-pass stream of result rows for a SELECT execution.

    The execution only runs when the first row is requested. Rows map the
    bound variable names onto abstract terms, unbound ones are left out.
    Closing (or exhausting) the iterator closes the execution handle.
    """

    def __init__(self, execution: QueryExecution):
        self._execution = execution
        self._rows: Optional[Iterator] = None
        self._names: Optional[List[str]] = None
        self._done = False

    def _open(self) -> Iterator:
        if self._rows is None:
            result = self._execution.exec_select()
            self._names = [str(v) for v in (result.vars or [])]
            self._rows = iter(result)
            log.debug(f"streaming tuple results for {self._names=}")
        return self._rows

    def names(self) -> List[str]:
        """the variable names of the result, this executes the query"""
        if self._done:
            return list(self._names or [])
        self._open()
        return list(self._names)

    def __next__(self) -> Row:
        if self._done:
            raise StopIteration
        try:
            row = next(self._open())
        except StopIteration:
            self.close()
            raise
        return {
            name: object_converter.backward(value)
            for name, value in row.asdict().items()
            if value is not None
        }

    def close(self) -> None:
        if not self._done:
            self._done = True
            self._execution.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class TripleIterator(Iterator[Triple]):
    """Finite, single-pass iterator over an already materialised set of
    triples, together with the aliases declared on their source graph.
    """

    def __init__(
        self, triples: Iterable[Triple], aliases: Optional[AliasManager] = None
    ):
        self._triples = iter(frozenset(triples))
        self.aliases = aliases if aliases is not None else AliasManager()

    def __next__(self) -> Triple:
        return next(self._triples)

    def to_set(self) -> Set[Triple]:
        """drains the remaining triples into a set"""
        return set(self)

    def close(self) -> None:
        self._triples = iter(())

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
