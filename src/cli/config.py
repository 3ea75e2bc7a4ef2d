"""
Extractor configuration.

Reads the ``"extractor"`` section of a JSON configuration file (or the top
level when the section is absent):

    {
      "extractor": {
        "base_uri": "http://example.org/page",
        "options": ["propuri", "multival", "datatype"],
        "registry": "registry.json",
        "skip_duplicates": false,
        "decode_entities": false,
        "bnode_prefix": null,
        "output_format": "turtle"
      },
      "logging": {"level": "INFO", "file": "microdata_rdf.log", "format": "text"}
    }
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from constants import DEFAULT_OPTIONS, ExtractionOption, OutputConfig


@dataclass
class ExtractorConfig:
    """Configuration for a microdata extraction run."""
    base_uri: Optional[str] = None
    options: ExtractionOption = DEFAULT_OPTIONS
    registry: Optional[str] = None
    skip_duplicates: bool = False
    decode_entities: bool = False
    bnode_prefix: Optional[str] = None
    output_format: str = OutputConfig.DEFAULT_FORMAT
    logging: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'ExtractorConfig':
        """
        Create ExtractorConfig from a dictionary.

        Raises:
            ValueError: If a section is not an object, or ``options`` names an
                unknown option or has the wrong type.
        """
        extractor_config = config_dict.get('extractor', config_dict)
        if not isinstance(extractor_config, dict):
            raise ValueError("'extractor' section must be a JSON object")
        logging_config = config_dict.get('logging', {})
        if not isinstance(logging_config, dict):
            raise ValueError("'logging' section must be a JSON object")
        return cls(
            base_uri=extractor_config.get('base_uri'),
            options=parse_options(extractor_config.get('options', DEFAULT_OPTIONS)),
            registry=extractor_config.get('registry'),
            skip_duplicates=bool(extractor_config.get('skip_duplicates', False)),
            decode_entities=bool(extractor_config.get('decode_entities', False)),
            bnode_prefix=extractor_config.get('bnode_prefix'),
            output_format=extractor_config.get('output_format', OutputConfig.DEFAULT_FORMAT),
            logging=dict(logging_config),
        )

    @classmethod
    def from_file(cls, config_path: str) -> 'ExtractorConfig':
        """
        Load configuration from a JSON file.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ValueError: If the file is not a JSON object or holds invalid values.
        """
        if not config_path:
            raise ValueError("config_path cannot be empty")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_dict = json.load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        except json.JSONDecodeError as e:
            raise ValueError(
                f"Invalid JSON in configuration file {config_path} at line {e.lineno}, column {e.colno}: {e.msg}"
            )
        except UnicodeDecodeError as e:
            raise ValueError(f"Encoding error reading {config_path}: {e}")

        if not isinstance(config_dict, dict):
            raise ValueError(f"Configuration file must contain a JSON object, got {type(config_dict).__name__}")

        return cls.from_dict(config_dict)


def parse_options(value: Any) -> ExtractionOption:
    """
    Turn a configured options value into an ExtractionOption.

    Accepts an int bitmask, a single name or comma separated names, or a list
    of names.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid options value: {value!r}")
    if isinstance(value, int):
        if value < 0 or value > ExtractionOption.ALL:
            raise ValueError(f"Options bitmask out of range: {value}")
        return ExtractionOption(value)
    if isinstance(value, str):
        return ExtractionOption.from_names(value)
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return ExtractionOption.from_names(value)
    raise ValueError(f"Invalid options value: {value!r}")
