"""
Base classes for EQ Log Tools.

This module provides base classes used throughout the package.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, List, Iterator
from datetime import datetime
import logging
import os

logger = logging.getLogger(__name__)


class EQLogTool(ABC):
    """Base class for all EQ log tools."""

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize the tool.

        Args:
            config: Optional configuration dictionary.
        """
        self.config = config or {}
        self.setup_logging()

    @staticmethod
    def add_standard_arguments(parser):
        """
        Add standard arguments that should be consistent across all command-line tools.

        Args:
            parser: The ArgumentParser instance to add arguments to
        """
        parser.add_argument("--profile", default=None,
                          help="Configuration profile to use (default: use default profile)")
        parser.add_argument("--console", action="store_true",
                          help="Log detailed output summary (in addition to regular logging)")

    @staticmethod
    def load_config(profile: Optional[str] = None) -> Dict[str, Any]:
        """
        Load configuration from a specified profile.

        Args:
            profile: Name of the profile to load. If None, uses the default profile.

        Returns:
            The configuration dictionary.
        """
        from config.config import Config

        config_obj = Config(profile=profile)
        config_data = config_obj.get()

        log_level = config_data.get('general', {}).get('log_level', 'INFO').upper()

        # Reset any existing handlers to avoid duplicated logs
        for handler in logging.root.handlers[:]:
            logging.root.removeHandler(handler)

        logging.basicConfig(
            level=getattr(logging, log_level, logging.INFO),
            format='%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        logging.getLogger().setLevel(getattr(logging, log_level, logging.INFO))

        logging.debug(f"Logging initialized with level: {log_level}")

        return config_data

    def setup_logging(self, level: int = logging.INFO):
        """
        Set up logging for this tool.

        Args:
            level: The logging level to use.
        """
        log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        logging.basicConfig(level=level, format=log_format)

    def get_config(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: The configuration key in dot notation (e.g. "export.delimiter").
            default: Default value if the key is not found.

        Returns:
            The configuration value, or the default if not found.
        """
        parts = key.split('.')
        value = self.config

        for part in parts:
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default

        return value

    @abstractmethod
    def run(self) -> Any:
        """
        Run the tool. Must be implemented by subclasses.

        Returns:
            The result of running the tool.
        """
        pass


class FileBasedTool(EQLogTool):
    """Base class for tools that read log files and write reports."""

    # Logs above this size are processed but reported
    LARGE_FILE_BYTES = 100 * 1024 * 1024

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize the file-based tool.

        Args:
            config: Optional configuration dictionary.
        """
        super().__init__(config)
        self.output_dir = None
        self.default_log_file = None

    def initialize_directories(self):
        """
        Initialize the output directory and default log file from configuration.
        """
        self.output_dir = self.get_config('general.output_path', 'output')
        self.default_log_file = self.get_config('paths.eqlog_file', None)

        resolved_output_dir = self.resolve_path(self.output_dir)

        if self.output_dir:
            os.makedirs(resolved_output_dir, exist_ok=True)
            logger.info(f"Output directory: {resolved_output_dir}")

        if self.default_log_file:
            logger.debug(f"Default log file: {self.resolve_path(self.default_log_file)}")

    def resolve_path(self, path: str) -> str:
        """
        Resolve a path, expanding user paths and environment variables.

        Args:
            path: The path to resolve.

        Returns:
            The resolved absolute path.
        """
        expanded_path = os.path.expanduser(os.path.expandvars(path))
        return os.path.abspath(expanded_path)

    def resolve_output_path(self, output_path: str) -> str:
        """
        Resolve an output path, placing relative paths inside the output directory.

        Args:
            output_path: Absolute path, or a path relative to the output directory.

        Returns:
            The resolved absolute path.
        """
        if self.output_dir:
            output_dir_norm = os.path.normpath(self.output_dir)
            output_path_norm = os.path.normpath(output_path)

            # Only join with output_dir if the path doesn't already start with it
            if not os.path.isabs(output_path) and not output_path_norm.startswith(output_dir_norm):
                output_path = os.path.join(self.output_dir, output_path)

        resolved_path = self.resolve_path(output_path)
        os.makedirs(os.path.dirname(resolved_path), exist_ok=True)
        return resolved_path

    def resolve_log_file(self, log_file: Optional[str] = None) -> str:
        """
        Pick the log file to read, falling back to the configured paths.eqlog_file.

        Raises:
            ValueError: If no log file was given or configured.
            FileNotFoundError: If the file does not exist.
        """
        log_file = log_file or self.default_log_file
        if not log_file:
            raise ValueError("No log file given and paths.eqlog_file is not configured")

        resolved_path = self.resolve_path(log_file)
        if not os.path.isfile(resolved_path):
            raise FileNotFoundError(f"Log file not found: {resolved_path}")

        file_size = os.path.getsize(resolved_path)
        if file_size > self.LARGE_FILE_BYTES:
            logger.warning(f"Large file detected ({file_size / 1024 / 1024:.1f}MB): {resolved_path}")

        return resolved_path

    def read_log_lines(self, log_file: str) -> Iterator[str]:
        """
        Yield the raw lines of a log file, line terminators included.

        Args:
            log_file: Path to an EverQuest log file.
        """
        resolved_path = self.resolve_log_file(log_file)
        logger.info(f"Reading log file: {resolved_path}")

        with open(resolved_path, 'r', encoding='utf-8', errors='ignore') as f:
            for line in f:
                yield line

    def write_csv(self, data_rows: List, output_path: str, headers: List[str] = None,
                  delimiter: str = ',', missing_value: str = '', quote_values: bool = True) -> str:
        """
        Write data to a CSV file.

        Args:
            data_rows: List of dictionaries with data to write
            output_path: Path to the output CSV file
            headers: Optional list of header columns (if None, uses keys from first row)
            delimiter: Column separator
            missing_value: Written for any header column a row does not have
            quote_values: If False, values are written exactly as given. The caller
                must make sure no value contains the delimiter or a line break.

        Returns:
            Absolute path to the created CSV file
        """
        import csv

        resolved_path = self.resolve_output_path(output_path)
        logger.debug(f"Writing CSV to {resolved_path}")

        if headers is None and data_rows:
            headers = list(data_rows[0].keys())

        if quote_values:
            quoting_options = {}
        else:
            quoting_options = {"quoting": csv.QUOTE_NONE, "quotechar": None}

        with open(resolved_path, "w", newline="", encoding="utf-8") as f:
            if headers:
                writer = csv.DictWriter(f, fieldnames=headers, delimiter=delimiter,
                                        restval=missing_value, extrasaction='ignore',
                                        **quoting_options)
                writer.writeheader()
                writer.writerows(data_rows)

        if not data_rows:
            logger.warning("No data to write to CSV.")

        logger.info(f"Results written to {resolved_path}")
        return resolved_path

    def generate_timestamped_filename(self, base_name: str, extension: str) -> str:
        """
        Generate a filename with a timestamp.

        Args:
            base_name: The base name for the file
            extension: File extension (without the dot)

        Returns:
            A filename in the format: base_name_YYYYMMDD_HHMMSS.extension
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return f"{base_name}_{timestamp}.{extension}"


class JSONTool(FileBasedTool):
    """Base class for tools that work with JSON files."""

    def read_json(self, file_path: str) -> Any:
        """
        Read a JSON file.

        Args:
            file_path: Path to the JSON file.

        Returns:
            The parsed JSON content.

        Raises:
            json.JSONDecodeError: If the file contains invalid JSON.
            FileNotFoundError: If the file doesn't exist.
        """
        import json

        resolved_path = self.resolve_path(file_path)
        logger.debug(f"Reading JSON file: {resolved_path}")

        with open(resolved_path, 'r', encoding='utf-8') as f:
            return json.load(f)
