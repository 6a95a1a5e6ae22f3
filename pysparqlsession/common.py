import os

from pyrdfj2 import J2RDFSyntaxBuilder

QUERY_BUILDER = J2RDFSyntaxBuilder(
    templates_folder=os.path.join(
        os.path.dirname(os.path.abspath(__file__)), "templates"
    )
)

# the query languages this package can speak, matched case-insensitively
LANGUAGES = frozenset({"SPARQL"})
