"""
CLI command implementations.

- base.py: Base command class
- microdata.py: Microdata commands (convert, registry)
"""

from .base import BaseCommand

from .microdata import (
    ConvertCommand,
    RegistryCommand,
)


__all__ = [
    'BaseCommand',
    'ConvertCommand',
    'RegistryCommand',
]
