"""
Base command class.

This module contains the base command class that all CLI commands inherit from.
"""

import argparse
import logging
from abc import ABC, abstractmethod
from typing import Optional

from ..config import ExtractorConfig
from ..helpers import setup_logging


logger = logging.getLogger(__name__)


class BaseCommand(ABC):
    """
    Base class for CLI commands.

    Provides common functionality like configuration loading and logging setup.
    Subclasses should implement the execute() method.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the command.

        Args:
            config_path: Path to configuration file; defaults apply when omitted.
        """
        self.config_path = config_path
        self._config: Optional[ExtractorConfig] = None

    @property
    def config(self) -> ExtractorConfig:
        """
        Lazy-load configuration.

        Raises:
            FileNotFoundError: If an explicit config file is missing.
            ValueError: If the config file is invalid.
        """
        if self._config is None:
            if self.config_path:
                self._config = ExtractorConfig.from_file(self.config_path)
            else:
                self._config = ExtractorConfig()
        return self._config

    def setup_logging_from_config(self, level: Optional[str] = None) -> None:
        """Setup logging from the config's ``logging`` section, with an optional level override."""
        log_config = dict(self.config.logging)
        if level:
            log_config['level'] = level
        setup_logging(config=log_config)

    @abstractmethod
    def execute(self, args: argparse.Namespace) -> int:
        """
        Execute the command.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code (0 for success, non-zero for error).
        """
        pass
