#!/usr/bin/env python3
"""
EQ Log Tools - Line Type Frequency

Counts how often each line type occurs in an EverQuest log file. The table
can also be saved as an Excel workbook and as a bar chart image.
"""

import argparse
import logging
import os
import sys
from collections import Counter
from typing import Dict, List, Any, Optional, Tuple

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import openpyxl
import pandas as pd

from eqlog_tools.base import EQLogTool, FileBasedTool
from eqlog_tools.log import classify

__all__ = ['LineTypeFrequency', 'main']

logger = logging.getLogger(__name__)


class LineTypeFrequency(FileBasedTool):
    """Tallies classified log lines by line type."""

    REPORT_LINE_FORMAT = "   %-24s => %s"

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the frequency tool.

        Args:
            config: Configuration dictionary from Config class
        """
        super().__init__(config)
        self.initialize_directories()

        self.write_excel = bool(self.get_config('frequency.excel', False))
        self.write_chart = bool(self.get_config('frequency.chart', False))
        self.chart_dpi = self.get_config('frequency.chart_dpi', 150)

    def count_line_types(self, log_file: str) -> Tuple[Counter, int]:
        """
        Classify every line of a log file and count the line types.

        Args:
            log_file: Path to the EverQuest log file

        Returns:
            Tuple of (line type counts, total number of lines read)
        """
        counts = Counter()
        total_lines = 0

        for line in self.read_log_lines(log_file):
            total_lines += 1
            record = classify(line)
            if record is not None:
                counts[record['line_type']] += 1

        return counts, total_lines

    def format_report(self, counts: Counter) -> List[str]:
        """
        Format the counts as report lines sorted by line type name.

        Args:
            counts: Line type counts

        Returns:
            One formatted line per line type
        """
        return [self.REPORT_LINE_FORMAT % (line_type, counts[line_type]) for line_type in sorted(counts)]

    def to_dataframe(self, counts: Counter) -> pd.DataFrame:
        """Counts as a DataFrame ordered by descending count, then name."""
        df = pd.DataFrame(sorted(counts.items()), columns=['line_type', 'count'])
        return df.sort_values(['count', 'line_type'], ascending=[False, True], kind='mergesort').reset_index(drop=True)

    def save_excel(self, counts: Counter, output_path: str) -> str:
        """
        Save the counts to an Excel workbook.

        Args:
            counts: Line type counts
            output_path: Path of the .xlsx file

        Returns:
            Absolute path to the workbook
        """
        resolved_path = self.resolve_output_path(output_path)
        df = self.to_dataframe(counts)

        with pd.ExcelWriter(resolved_path, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name='Line Types')
            worksheet = writer.sheets['Line Types']

            for idx, column in enumerate(df.columns, 1):
                letter = openpyxl.utils.get_column_letter(idx)
                width = max([len(str(value)) for value in df[column]] + [len(column)])
                worksheet.column_dimensions[letter].width = width + 2
                if column == 'count':
                    for cell in worksheet[letter][1:]:  # Skip header row
                        cell.number_format = '0'

        logger.info(f"Excel report saved to: {resolved_path}")
        return resolved_path

    def save_chart(self, counts: Counter, output_path: str, title: Optional[str] = None) -> str:
        """
        Save the counts as a horizontal bar chart.

        Args:
            counts: Line type counts
            output_path: Path of the image file
            title: Optional chart title

        Returns:
            Absolute path to the image
        """
        resolved_path = self.resolve_output_path(output_path)
        df = self.to_dataframe(counts)

        # Largest count on top
        df = df.iloc[::-1]

        plt.figure(figsize=(10, max(3, 0.35 * len(df) + 1)))
        plt.barh(df['line_type'], df['count'], color='steelblue', edgecolor='black', linewidth=0.5)
        plt.xlabel('Lines')
        if title:
            plt.title(title, fontsize=14, fontweight='bold')
        plt.tight_layout()

        plt.savefig(resolved_path, dpi=self.chart_dpi, bbox_inches='tight', facecolor='white')
        plt.close()  # Close the figure to free memory

        logger.info(f"Chart saved to: {resolved_path}")
        return resolved_path

    def run(self, log_file: Optional[str] = None, output_file: Optional[str] = None) -> Dict[str, Any]:
        """
        Run the line type frequency analysis.

        Args:
            log_file: EverQuest log file (defaults to paths.eqlog_file)
            output_file: Optional text file for the report; otherwise it goes to standard output

        Returns:
            Dictionary with analysis results
        """
        logger.info("Starting line type frequency analysis...")

        counts, total_lines = self.count_line_types(log_file)
        report_lines = self.format_report(counts)

        result = {
            "success": True,
            "total_lines": total_lines,
            "recognized_lines": sum(counts.values()),
            "counts": dict(counts),
            "output_file": None,
            "excel_file": None,
            "chart_file": None,
        }

        if output_file:
            resolved_path = self.resolve_output_path(output_file)
            with open(resolved_path, 'w', encoding='utf-8') as f:
                for report_line in report_lines:
                    f.write(report_line + "\n")
            logger.info(f"Frequency report written to {resolved_path}")
            result["output_file"] = resolved_path
        else:
            for report_line in report_lines:
                sys.stdout.write(report_line + "\n")

        if not counts:
            logger.warning("No recognized lines found in the log file.")
            return result

        if self.write_excel:
            result["excel_file"] = self.save_excel(
                counts, self.generate_timestamped_filename("line_type_frequency", "xlsx"))

        if self.write_chart:
            log_name = os.path.basename(self.resolve_log_file(log_file))
            result["chart_file"] = self.save_chart(
                counts, self.generate_timestamped_filename("line_type_frequency", "png"),
                title=f"Line types in {log_name}")

        return result


def main():
    """
    Main entry point for the line type frequency command line tool.
    """
    parser = argparse.ArgumentParser(
        description="Count the line types in an EverQuest log file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s --log-file eqlog_Soandso_veeshan.txt
    %(prog)s --log-file eqlog_Soandso_veeshan.txt --output frequency.txt --excel --chart

Configuration:
    - paths.eqlog_file: Default log file
    - frequency.excel: Also write an Excel workbook
    - frequency.chart: Also write a bar chart image
    - general.output_path: Directory for output files
        """
    )
    parser.add_argument(
        "--log-file",
        help="Path to the EverQuest log file. If not specified, uses the configured path."
    )
    parser.add_argument(
        "--output",
        help="Write the report to this file instead of standard output."
    )
    parser.add_argument("--excel", action="store_true", help="Also save the counts as an Excel workbook.")
    parser.add_argument("--chart", action="store_true", help="Also save the counts as a bar chart.")

    EQLogTool.add_standard_arguments(parser)
    args = parser.parse_args()

    try:
        config = LineTypeFrequency.load_config(args.profile)

        tool = LineTypeFrequency(config)
        tool.write_excel = tool.write_excel or args.excel
        tool.write_chart = tool.write_chart or args.chart

        result = tool.run(args.log_file, args.output)

        if args.console:
            logger.info(f"Line type frequency completed: {result}")

        return 0 if result["success"] else 1

    except Exception as e:
        logger.error(f"Error: {e}")
        return 1


if __name__ == "__main__":
    exit(main())
