class TriplestoreError(Exception):
    """Base for all errors raised by the triplestore session layer."""


class UnsupportedLanguageError(TriplestoreError):
    """The requested query language is not supported by this session."""

    def __init__(self, lang: str):
        super().__init__(
            f"this triplestore session supports only SPARQL, not {lang!r}"
        )
        self.lang = lang


class TermConversionError(TriplestoreError, ValueError):
    """A term can not be represented in the role it is converted for."""


class UnsupportedQueryTypeError(TriplestoreError, ValueError):
    """A query of the wrong declared type was handed to an execution path
    that can not handle it (e.g. a SELECT where a graph is expected).
    This signals a caller bug, it is not meant to be recovered from.
    """

    def __init__(self, query_type, expected: str):
        super().__init__(
            f"triple service called with query type {query_type} "
            f"other than {expected}"
        )
        self.query_type = query_type


class ReadOnlyStoreError(TriplestoreError):
    """An update was sent to an executor without an update endpoint."""
