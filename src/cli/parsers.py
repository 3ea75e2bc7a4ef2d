"""
CLI argument parser configuration.

This module defines the argument parser structure for all CLI commands.
It centralizes all argument parsing logic and provides a clean interface
for the main entry point.
"""

import argparse

from constants import OutputConfig


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the main argument parser.

    Returns:
        Configured ArgumentParser with all subcommands.
    """
    parser = argparse.ArgumentParser(
        prog="microdata-rdf",
        description="Microdata Item Tree to RDF extractor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s convert items.json --base http://example.org/page
    %(prog)s convert items.json --base http://example.org/ --options all --format nt
    %(prog)s convert items.json --options propuri,multival --registry my_registry.json -o out.ttl
    %(prog)s registry --registry http://www.w3.org/ns/md.json
        """,
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Override the configured log level'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    _add_convert_parser(subparsers)
    _add_registry_parser(subparsers)

    return parser


def _add_convert_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the convert command parser."""
    parser = subparsers.add_parser(
        'convert',
        help='Convert a microdata Item Tree (JSON) to RDF'
    )
    parser.add_argument('items_file', help='Path to the Item Tree JSON file')
    parser.add_argument(
        '--base', '-b',
        help='Document base URI (default: config base_uri, else the file:// URI of the input)'
    )
    parser.add_argument(
        '--options',
        help="Extra triples to emit: comma separated names (propuri, multival, vexpansion, "
             "datatype, topitems, rdfavocab, ventail), 'all' or 'none'"
    )
    parser.add_argument('--registry', '-r', help='Vocabulary registry path or URI')
    parser.add_argument(
        '--format', '-f',
        choices=OutputConfig.SUPPORTED_FORMATS,
        help=f'Output format (default: {OutputConfig.DEFAULT_FORMAT})'
    )
    parser.add_argument('--output', '-o', help='Output file path (default: stdout)')
    parser.add_argument(
        '--skip-duplicates',
        action='store_true',
        help='Drop duplicate triples'
    )
    parser.add_argument('--bnode-prefix', help='Fixed blank node prefix')
    parser.add_argument('--config', '-c', help='Path to configuration file')


def _add_registry_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the registry command parser."""
    parser = subparsers.add_parser(
        'registry',
        help='Load and validate a vocabulary registry'
    )
    parser.add_argument(
        '--registry', '-r',
        help='Vocabulary registry path or URI (default: built-in registry)'
    )
    parser.add_argument('--config', '-c', help='Path to configuration file')
