#!/usr/bin/env python3
"""
EQ Log Tools - Unrecognized Lines

Writes out every line of an EverQuest log file that no line type rule
recognizes. Useful for finding new line formats worth adding to the rule table.
"""

import argparse
import logging
import sys
from typing import Dict, Any, Optional, TextIO

from eqlog_tools.base import EQLogTool, FileBasedTool
from eqlog_tools.log import classify

__all__ = ['UnrecognizedLinesReporter', 'main']

logger = logging.getLogger(__name__)


class UnrecognizedLinesReporter(FileBasedTool):
    """Copies unrecognized log lines, unchanged, to an output stream."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the reporter.

        Args:
            config: Configuration dictionary from Config class
        """
        super().__init__(config)
        self.initialize_directories()

    def write_unrecognized(self, log_file: str, out: TextIO) -> Dict[str, int]:
        """
        Write each unrecognized line of log_file to out, verbatim.

        Args:
            log_file: Path to the EverQuest log file
            out: Text stream receiving the lines

        Returns:
            Dictionary with total, recognized and unrecognized line counts
        """
        total_lines = 0
        unrecognized = 0

        for line in self.read_log_lines(log_file):
            total_lines += 1
            if classify(line) is None:
                unrecognized += 1
                out.write(line)

        return {
            "total_lines": total_lines,
            "recognized_lines": total_lines - unrecognized,
            "unrecognized_lines": unrecognized,
        }

    def run(self, log_file: Optional[str] = None, output_file: Optional[str] = None) -> Dict[str, Any]:
        """
        Run the unrecognized line report.

        Args:
            log_file: EverQuest log file (defaults to paths.eqlog_file)
            output_file: Output path; standard output when not given

        Returns:
            Dictionary with report results
        """
        if output_file:
            resolved_path = self.resolve_output_path(output_file)
            with open(resolved_path, 'w', encoding='utf-8') as out:
                stats = self.write_unrecognized(log_file, out)
            logger.info(f"Unrecognized lines written to {resolved_path}")
        else:
            resolved_path = None
            stats = self.write_unrecognized(log_file, sys.stdout)

        total = stats["total_lines"]
        if total:
            percent = 100.0 * stats["recognized_lines"] / total
            logger.info(f"Recognized {stats['recognized_lines']} of {total} lines ({percent:.1f}%), "
                        f"{stats['unrecognized_lines']} unrecognized")
        else:
            logger.warning("Log file is empty.")

        result = {"success": True, "output_file": resolved_path}
        result.update(stats)
        return result


def main():
    """
    Main entry point for the unrecognized lines command line tool.
    """
    parser = argparse.ArgumentParser(
        description="Print the lines of an EverQuest log file that no line type recognizes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s --log-file eqlog_Soandso_veeshan.txt
    %(prog)s --log-file eqlog_Soandso_veeshan.txt --output unrecognized.txt

Configuration:
    - paths.eqlog_file: Default log file
    - general.output_path: Directory for output files
        """
    )
    parser.add_argument(
        "--log-file",
        help="Path to the EverQuest log file. If not specified, uses the configured path."
    )
    parser.add_argument(
        "--output",
        help="Write the lines to this file instead of standard output."
    )

    EQLogTool.add_standard_arguments(parser)
    args = parser.parse_args()

    try:
        config = UnrecognizedLinesReporter.load_config(args.profile)

        reporter = UnrecognizedLinesReporter(config)
        result = reporter.run(args.log_file, args.output)

        if args.console:
            logger.info(f"Unrecognized line report completed: {result}")

        return 0 if result["success"] else 1

    except Exception as e:
        logger.error(f"Error: {e}")
        return 1


if __name__ == "__main__":
    exit(main())
