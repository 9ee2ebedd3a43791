#!/usr/bin/env python3
"""
EQ Log Tools - CSV Exporter

Converts an EverQuest log file into a delimited file with one row per
recognized line. Every row carries the same columns (all fields any line type
can produce), so the output loads straight into a spreadsheet or database.
"""

import argparse
import logging
from typing import Dict, List, Any, Optional

from eqlog_tools.base import EQLogTool, FileBasedTool
from eqlog_tools.log import all_possible_fields, classify

logger = logging.getLogger(__name__)


class LogCsvExporter(FileBasedTool):
    """
    Exports classified log lines to a delimited file.

    The header row is the full field list from the rule table. Fields a line
    type does not produce are filled with the configured missing value, and
    the delimiter is removed from every value so columns stay aligned.
    Values are otherwise written unchanged, without CSV quoting.
    """

    DEFAULT_DELIMITER = "|"

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the exporter with configuration.

        Args:
            config: Configuration dictionary from Config class
        """
        super().__init__(config)
        self.initialize_directories()

        self.delimiter = self.get_config('export.delimiter', self.DEFAULT_DELIMITER)
        self.missing_value = self.get_config('export.missing_value', '')

    def sanitize_record(self, record: Dict[str, Any]) -> Dict[str, str]:
        """
        Convert a record's values to text with the delimiter stripped.

        Args:
            record: A classified record

        Returns:
            Dictionary of field name to delimiter-free text
        """
        return {key: str(value).replace(self.delimiter, '') for key, value in record.items()}

    def collect_rows(self, log_file: str) -> List[Dict[str, str]]:
        """
        Classify every line of a log file and keep the recognized ones.

        Args:
            log_file: Path to the EverQuest log file

        Returns:
            Sanitized records in file order
        """
        rows = []
        total_lines = 0

        for line in self.read_log_lines(log_file):
            total_lines += 1
            record = classify(line)
            if record is not None:
                rows.append(self.sanitize_record(record))

        logger.info(f"Recognized {len(rows)} of {total_lines} lines")
        return rows

    def run(self, log_file: Optional[str] = None, output_file: Optional[str] = None) -> Dict[str, Any]:
        """
        Run the CSV export.

        Args:
            log_file: EverQuest log file (defaults to paths.eqlog_file)
            output_file: Output path (defaults to a timestamped file in the output directory)

        Returns:
            Dictionary with export results
        """
        logger.info("Starting CSV export...")

        rows = self.collect_rows(log_file)
        headers = all_possible_fields()

        if output_file is None:
            output_file = self.generate_timestamped_filename("eqlog", "csv")

        output_path = self.write_csv(rows, output_file, headers=headers,
                                     delimiter=self.delimiter, missing_value=self.missing_value,
                                     quote_values=False)

        return {
            "success": True,
            "row_count": len(rows),
            "column_count": len(headers),
            "output_file": output_path,
        }


def main():
    """
    Main entry point for the CSV exporter command line tool.
    """
    parser = argparse.ArgumentParser(
        description="Convert an EverQuest log file to a delimited file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s --log-file eqlog_Soandso_veeshan.txt
    %(prog)s --log-file eqlog_Soandso_veeshan.txt --output soandso.csv --delimiter ","

Configuration:
    - paths.eqlog_file: Default log file
    - export.delimiter: Column separator (default: |)
    - export.missing_value: Value written for fields a line does not have
    - general.output_path: Directory for output files
        """
    )
    parser.add_argument(
        "--log-file",
        help="Path to the EverQuest log file. If not specified, uses the configured path."
    )
    parser.add_argument(
        "--output",
        help="Output file path. Relative paths are placed in the output directory."
    )
    parser.add_argument(
        "--delimiter",
        help="Column separator, overrides export.delimiter."
    )

    EQLogTool.add_standard_arguments(parser)
    args = parser.parse_args()

    try:
        config = LogCsvExporter.load_config(args.profile)

        exporter = LogCsvExporter(config)
        if args.delimiter:
            exporter.delimiter = args.delimiter

        result = exporter.run(args.log_file, args.output)

        if args.console:
            logger.info(f"CSV export completed: {result}")

        return 0 if result["success"] else 1

    except Exception as e:
        logger.error(f"Error: {e}")
        return 1


if __name__ == "__main__":
    exit(main())
