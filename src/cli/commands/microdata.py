"""
Microdata CLI commands.

This module contains the commands of the microdata-rdf tool:
- ConvertCommand: Extract RDF from an Item Tree JSON file
- RegistryCommand: Load, validate and describe a vocabulary registry

Diagnostics and summaries go to stderr; stdout only carries the serialized
graph when no output file is given.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from rdflib.plugin import PluginException

from constants import ExitCode
from formats.microdata import (
    ItemParseError,
    MicrodataExtractor,
    MicrodataItemReader,
    RegistryFormatError,
    RegistryLoadError,
    VocabularyRegistry,
    get_default_registry,
)

from .base import BaseCommand
from ..config import parse_options
from ..helpers import print_footer, print_header


logger = logging.getLogger(__name__)

SIMPLE_FORMAT = "simple"


def _error(message: str) -> None:
    print(f"✗ {message}", file=sys.stderr)


class ConvertCommand(BaseCommand):
    """Convert a microdata Item Tree to RDF."""

    def execute(self, args: argparse.Namespace) -> int:
        """Execute the convert command."""
        try:
            config = self.config
            options = parse_options(args.options) if args.options else config.options
        except FileNotFoundError as e:
            _error(f"Configuration error: {e}")
            return ExitCode.CONFIG_ERROR
        except ValueError as e:
            _error(f"Configuration error: {e}")
            return ExitCode.CONFIG_ERROR

        self.setup_logging_from_config(getattr(args, 'log_level', None))

        items_path = Path(args.items_file)
        try:
            items = MicrodataItemReader().parse_file(str(items_path))
        except FileNotFoundError:
            _error(f"File not found: {args.items_file}")
            return ExitCode.FILE_NOT_FOUND
        except ItemParseError as e:
            _error(f"Invalid Item Tree: {e}")
            return ExitCode.VALIDATION_ERROR

        base_uri = args.base or config.base_uri or items_path.resolve().as_uri()
        output_format = args.format or config.output_format

        extractor = MicrodataExtractor(
            options=options,
            bnode_prefix=args.bnode_prefix or config.bnode_prefix,
            skip_duplicates=args.skip_duplicates or config.skip_duplicates,
            decode_entities=config.decode_entities,
            registry_source=args.registry or config.registry,
        )

        try:
            result = extractor.parse(items, base_uri)
        except RegistryLoadError as e:
            _error(f"Cannot load registry: {e}")
            return ExitCode.ERROR
        except RegistryFormatError as e:
            _error(f"Invalid registry: {e}")
            return ExitCode.VALIDATION_ERROR

        try:
            if output_format == SIMPLE_FORMAT:
                output = json.dumps(result.sink.simple_index(), indent=2, ensure_ascii=False)
            else:
                output = result.serialize(output_format)
        except PluginException as e:
            _error(f"Unsupported output format '{output_format}': {e}")
            return ExitCode.CONFIG_ERROR

        if args.output:
            try:
                with open(args.output, 'w', encoding='utf-8') as f:
                    f.write(output)
            except OSError as e:
                _error(f"Cannot write output file {args.output}: {e}")
                return ExitCode.ERROR
            print(f"✓ Wrote {output_format} output to {args.output}", file=sys.stderr)
        else:
            sys.stdout.write(output)
            if not output.endswith("\n"):
                sys.stdout.write("\n")

        print(result.get_summary(), file=sys.stderr)
        return ExitCode.SUCCESS


class RegistryCommand(BaseCommand):
    """Load and validate a vocabulary registry."""

    def execute(self, args: argparse.Namespace) -> int:
        """Execute the registry command."""
        try:
            config = self.config
        except (FileNotFoundError, ValueError) as e:
            _error(f"Configuration error: {e}")
            return ExitCode.CONFIG_ERROR

        self.setup_logging_from_config(getattr(args, 'log_level', None))

        source = args.registry or config.registry
        try:
            registry = VocabularyRegistry.load(source) if source else get_default_registry()
        except RegistryLoadError as e:
            _error(f"Cannot load registry: {e}")
            return ExitCode.ERROR
        except RegistryFormatError as e:
            _error(f"Invalid registry: {e}")
            return ExitCode.VALIDATION_ERROR

        print_header(f"Vocabulary registry: {registry.source}")
        print(f"{'Prefix':<50} {'Scheme':<16} {'Rules':>5}")
        print("-" * 73)
        for definition in registry:
            print(
                f"{definition.prefix:<50} {definition.scheme.name.lower():<16} "
                f"{len(definition.properties):>5}"
            )
        print(f"\n✓ {len(registry)} vocabularies loaded", file=sys.stderr)
        print_footer()
        return ExitCode.SUCCESS
