import argparse
import logging
import sys

from rdflib import Graph
from rdflib.util import from_n3

from pysparqlsession.build import DEFAULT_GRAPH_NAME, create_session_factory
from pysparqlsession.converters import (
    object_converter,
    predicate_converter,
    render_triple,
    subject_converter,
    triple_converter,
)
from pysparqlsession.session import TriplestoreSession

log = logging.getLogger(__name__)


def get_arg_parser():
    parser = argparse.ArgumentParser(
        description="Talk to a triplestore through SPARQL Query and Update",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose logging"
    )
    parser.add_argument(
        "-q",
        "--query-uri",
        required=False,
        help="The SPARQL endpoint for SELECT/ASK queries. "
        "If absent an in-memory store is used.",
    )
    parser.add_argument(
        "-u",
        "--update-uri",
        required=False,
        help="The SPARQL endpoint to post updates to. "
        "If absent (with a query-uri) the session is read-only.",
    )
    parser.add_argument(
        "-c",
        "--construct-uri",
        required=False,
        help="The SPARQL endpoint for CONSTRUCT/DESCRIBE queries, "
        "defaults to the query-uri",
    )
    parser.add_argument(
        "-g",
        "--graph",
        default=DEFAULT_GRAPH_NAME,
        help="The named graph to add to and find triples in",
    )
    parser.add_argument(
        "-b", "--base-uri", required=False, help="Base to rebase text onto"
    )
    parser.add_argument(
        "--read-only",
        action="store_true",
        help="Accept but discard all add and delete operations",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("languages", help="List the supported languages")
    for name, helptext in (
        ("query", "Run a tuple query and print the rows"),
        ("triples", "Run a CONSTRUCT/DESCRIBE query and print the triples"),
    ):
        cmd = commands.add_parser(name, help=helptext)
        cmd.add_argument("sparql", help="The query text")
        cmd.add_argument("-l", "--lang", default="SPARQL")
    find = commands.add_parser(
        "find", help="Print the triples matching a pattern"
    )
    for flag in ("subject", "predicate", "object"):
        find.add_argument(
            f"-{flag[0]}",
            f"--{flag}",
            required=False,
            help=f"The {flag} in N-Triples syntax, wildcard if absent",
        )
    for name in ("add", "delete"):
        cmd = commands.add_parser(
            name, help=f"{name.capitalize()} the triples in an rdf file"
        )
        cmd.add_argument("input", help="The input file to read from")
        cmd.add_argument(
            "-f", "--format", required=False, help="rdflib parser format"
        )

    return parser


def _term(text, converter):
    return converter.backward(from_n3(text)) if text else None


def run(args, session: TriplestoreSession) -> None:
    if args.command == "languages":
        for lang in sorted(session.list_tuple_languages()):
            print(lang)
    elif args.command == "query":
        with session.query(args.sparql, args.lang) as rows:
            for row in rows:
                print(
                    "\t".join(
                        f"{name}={object_converter.forward(term).n3()}"
                        for name, term in row.items()
                    )
                )
    elif args.command in ("triples", "find"):
        if args.command == "triples":
            found = session.find_triples(args.lang, args.sparql)
        else:
            found = session.find_triples_matching(
                _term(args.subject, subject_converter),
                _term(args.predicate, predicate_converter),
                _term(args.object, object_converter),
            )
        for triple in found:
            print(f"{render_triple(triple)} .")
    elif args.command in ("add", "delete"):
        graph = Graph().parse(args.input, format=args.format)
        triples = set(map(triple_converter.backward, graph))
        log.info(f"{args.command} of {len(triples)} triples")
        getattr(session, args.command)(triples)


def main(argv=None):
    args = get_arg_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)
    log.debug("Starting up")
    factory = create_session_factory(
        graph_name=args.graph,
        query_uri=args.query_uri,
        update_uri=args.update_uri,
        construct_uri=args.construct_uri,
        read_only=args.read_only,
        base_uri=args.base_uri,
    )
    try:
        with factory.new_session() as session:
            run(args, session)
    finally:
        factory.close()
    log.debug("Shutting down")


if __name__ == "__main__":
    sys.exit(main())
