import re

# scheme ":" as in RFC 3986 section 3.1
_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")
# characters never allowed inside an IRI, nor in the <...> wire form
# keep in sync with rdflib.term._invalid_uri_chars, checked by URIRef.n3()
_INVALID_URI_CHARS = set('<>" {}|\\^`')

# BLANK_NODE_LABEL production of the SPARQL 1.1 grammar (without the "_:")
_PN_CHARS_BASE = (
    "A-Za-z\u00c0-\u00d6\u00d8-\u00f6\u00f8-\u02ff\u0370-\u037d"
    "\u037f-\u1fff\u200c-\u200d\u2070-\u218f\u2c00-\u2fef\u3001-\ud7ff"
    "\uf900-\ufdcf\ufdf0-\ufffd\U00010000-\U000effff"
)
_PN_CHARS_U = _PN_CHARS_BASE + "_"
_PN_CHARS = _PN_CHARS_U + "\\-0-9\u00b7\u0300-\u036f\u203f-\u2040"
_BNODE_LABEL = re.compile(
    f"[{_PN_CHARS_U}0-9](?:[{_PN_CHARS}.]*[{_PN_CHARS}])?"
)


def check_valid_uri(uri: str) -> bool:
    """checks that the passed string is a syntactically valid absolute uri

    :param uri: the candidate uri
    :type uri: str
    :return: True if the uri has a scheme and no forbidden characters
    :rtype: bool
    """
    if not isinstance(uri, str) or not _SCHEME.match(uri):
        return False
    # else
    if len(uri) == uri.index(":") + 1:
        return False  # nothing after the scheme
    return not any(
        c in _INVALID_URI_CHARS or ord(c) <= 0x20 for c in uri
    )


def check_valid_bnode_label(label: str) -> bool:
    """checks that the label can follow "_:" in SPARQL text"""
    return isinstance(label, str) and bool(_BNODE_LABEL.fullmatch(label))
