#!/usr/bin/env python3
"""
Microdata to RDF extractor

This is the main entry point for converting microdata Item Trees to RDF.

Usage:
    python main.py convert <items.json> [--base <uri>] [--options <names>] [--registry <path-or-uri>]
                           [--format turtle|nt|xml|json-ld|n3|simple] [--output <file>] [--config <config.json>]
    python main.py registry [--registry <path-or-uri>] [--config <config.json>]
"""

import sys
from typing import List, Optional

from constants import ExitCode
from cli.commands import ConvertCommand, RegistryCommand
from cli.parsers import create_argument_parser


COMMANDS = {
    'convert': ConvertCommand,
    'registry': RegistryCommand,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return ExitCode.ERROR

    command = COMMANDS[args.command](config_path=getattr(args, 'config', None))
    return int(command.execute(args))


if __name__ == '__main__':
    sys.exit(main())
