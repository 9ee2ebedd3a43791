#!/usr/bin/env python3
"""Tests for the command line tools and the configuration reader."""

import csv
import json
import logging
import os
import re
import sys
import tempfile

import pandas as pd
import pytest

from config import Config
from eqlog_tools.log import all_possible_fields
from eqlog_tools.tools import LineTypeFrequency, LogCsvExporter, UnrecognizedLinesReporter
from eqlog_tools.tools import csv_exporter

STAMP = "[Mon Oct 13 00:42:36 2003] "

LOG_LINES = [
    STAMP + "You have slain a gnoll pup!\n",
    STAMP + "You have slain a gnoll scout!\n",
    STAMP + "Soandso says, 'a|b'\n",
    STAMP + "You receive 67 platinum, 16 gold, 20 silver and 36 copper from the corpse.\n",
    STAMP + "LOADING, PLEASE WAIT...\n",
    "short\n",
]


@pytest.fixture
def workdir():
    with tempfile.TemporaryDirectory() as temp_dir:
        log_file = os.path.join(temp_dir, "eqlog_Soandso_veeshan.txt")
        with open(log_file, 'w', encoding='utf-8') as f:
            f.writelines(LOG_LINES)
        yield temp_dir, log_file


def _config(output_dir, **sections):
    config = {'general': {'output_path': output_dir}}
    config.update(sections)
    return config


def _read_rows(path, delimiter='|'):
    with open(path, newline='', encoding='utf-8') as f:
        return list(csv.DictReader(f, delimiter=delimiter))


# --- CSV export ---

def test_csv_export_header_and_rows(workdir):
    temp_dir, log_file = workdir
    exporter = LogCsvExporter(_config(temp_dir))

    result = exporter.run(log_file, "soandso.csv")

    assert result["success"]
    assert result["row_count"] == 4
    assert result["output_file"] == os.path.join(temp_dir, "soandso.csv")

    with open(result["output_file"], newline='', encoding='utf-8') as f:
        header = f.readline().rstrip('\r\n')
    assert header.split('|') == all_possible_fields()

    rows = _read_rows(result["output_file"])
    assert [row['line_type'] for row in rows] == ['SLAIN_BY_YOU', 'SLAIN_BY_YOU', 'OTHER_SAYS', 'CORPSE_MONEY']
    assert rows[0]['slayee'] == 'a gnoll pup'
    assert rows[0]['time_stamp'] == STAMP
    assert rows[3]['platinum'] == '67'
    assert rows[3]['copper'] == '36'


def test_csv_export_strips_delimiter_from_values(workdir):
    temp_dir, log_file = workdir
    result = LogCsvExporter(_config(temp_dir)).run(log_file, "soandso.csv")

    rows = _read_rows(result["output_file"])
    assert rows[2]['speaker'] == 'Soandso'
    assert rows[2]['spoken'] == 'ab'


def test_csv_export_fills_missing_fields(workdir):
    temp_dir, log_file = workdir
    config = _config(temp_dir, export={'delimiter': '|', 'missing_value': 'NA'})

    result = LogCsvExporter(config).run(log_file, "soandso.csv")

    rows = _read_rows(result["output_file"])
    assert rows[0]['platinum'] == 'NA'
    assert rows[3]['slayee'] == 'NA'
    assert all(len(row) == len(all_possible_fields()) for row in rows)


def test_csv_export_custom_delimiter(workdir):
    temp_dir, log_file = workdir
    config = _config(temp_dir, export={'delimiter': ','})

    result = LogCsvExporter(config).run(log_file, "soandso.csv")

    rows = _read_rows(result["output_file"], delimiter=',')
    assert rows[2]['spoken'] == 'a|b'


def test_csv_export_writes_quotes_unchanged(workdir):
    temp_dir, _ = workdir
    log_file = os.path.join(temp_dir, "quotes.txt")
    with open(log_file, 'w', encoding='utf-8') as f:
        f.write(STAMP + "Soandso says, 'he said \"hi\"'\n")

    result = LogCsvExporter(_config(temp_dir)).run(log_file, "quotes.csv")

    with open(result["output_file"], newline='', encoding='utf-8') as f:
        lines = f.read().splitlines()

    assert len(lines) == 2
    values = lines[1].split('|')
    assert values[all_possible_fields().index('spoken')] == 'he said "hi"'
    assert values[all_possible_fields().index('speaker')] == 'Soandso'


def test_csv_export_default_output_name(workdir):
    temp_dir, log_file = workdir
    exporter = LogCsvExporter(_config(temp_dir))

    assert re.fullmatch(r"eqlog_\d{8}_\d{6}\.csv", exporter.generate_timestamped_filename("eqlog", "csv"))

    result = exporter.run(log_file)
    assert os.path.dirname(result["output_file"]) == temp_dir
    assert re.fullmatch(r"eqlog_\d{8}_\d{6}\.csv", os.path.basename(result["output_file"]))


def test_csv_export_missing_log_file(workdir):
    temp_dir, _ = workdir
    exporter = LogCsvExporter(_config(temp_dir))

    with pytest.raises(FileNotFoundError):
        exporter.run(os.path.join(temp_dir, "missing.txt"), "out.csv")


def test_csv_export_without_log_file(workdir):
    temp_dir, _ = workdir

    with pytest.raises(ValueError):
        LogCsvExporter(_config(temp_dir)).run(None, "out.csv")


def test_csv_export_uses_configured_log_file(workdir):
    temp_dir, log_file = workdir
    config = _config(temp_dir, paths={'eqlog_file': log_file})

    result = LogCsvExporter(config).run(output_file="out.csv")

    assert result["row_count"] == 4


def test_csv_exporter_main(workdir, monkeypatch):
    temp_dir, log_file = workdir
    output_file = os.path.join(temp_dir, "main.csv")
    monkeypatch.chdir(temp_dir)

    monkeypatch.setattr(sys, 'argv', ['eqlog-to-csv', '--log-file', log_file, '--output', output_file])
    assert csv_exporter.main() == 0
    assert len(_read_rows(output_file)) == 4

    monkeypatch.setattr(sys, 'argv', ['eqlog-to-csv', '--log-file', os.path.join(temp_dir, "nope.txt")])
    assert csv_exporter.main() == 1


# --- Line type frequency ---

def test_frequency_counts(workdir):
    temp_dir, log_file = workdir
    tool = LineTypeFrequency(_config(temp_dir))

    counts, total_lines = tool.count_line_types(log_file)

    assert total_lines == 6
    assert dict(counts) == {'SLAIN_BY_YOU': 2, 'OTHER_SAYS': 1, 'CORPSE_MONEY': 1}


def test_frequency_report_file(workdir):
    temp_dir, log_file = workdir
    result = LineTypeFrequency(_config(temp_dir)).run(log_file, "frequency.txt")

    assert result["total_lines"] == 6
    assert result["recognized_lines"] == 4
    assert result["excel_file"] is None
    assert result["chart_file"] is None

    with open(result["output_file"], encoding='utf-8') as f:
        report = f.read().splitlines()

    assert report == [
        f"   {'CORPSE_MONEY':<24} => 1",
        f"   {'OTHER_SAYS':<24} => 1",
        f"   {'SLAIN_BY_YOU':<24} => 2",
    ]


def test_frequency_report_to_stdout(workdir, capsys, caplog):
    temp_dir, log_file = workdir
    caplog.set_level(logging.WARNING)

    result = LineTypeFrequency(_config(temp_dir)).run(log_file)

    assert result["output_file"] is None
    assert capsys.readouterr().out.splitlines() == [
        f"   {'CORPSE_MONEY':<24} => 1",
        f"   {'OTHER_SAYS':<24} => 1",
        f"   {'SLAIN_BY_YOU':<24} => 2",
    ]


def test_frequency_dataframe_order(workdir):
    temp_dir, log_file = workdir
    tool = LineTypeFrequency(_config(temp_dir))
    counts, _ = tool.count_line_types(log_file)

    df = tool.to_dataframe(counts)

    assert list(df['line_type']) == ['SLAIN_BY_YOU', 'CORPSE_MONEY', 'OTHER_SAYS']
    assert list(df['count']) == [2, 1, 1]


def test_frequency_excel_and_chart(workdir):
    temp_dir, log_file = workdir
    config = _config(temp_dir, frequency={'excel': True, 'chart': True})

    result = LineTypeFrequency(config).run(log_file)

    assert os.path.exists(result["chart_file"])
    df = pd.read_excel(result["excel_file"], sheet_name='Line Types')
    assert list(df.columns) == ['line_type', 'count']
    assert df.iloc[0]['line_type'] == 'SLAIN_BY_YOU'
    assert df.iloc[0]['count'] == 2


# --- Unrecognized lines ---

def test_unrecognized_lines_to_file(workdir):
    temp_dir, log_file = workdir
    result = UnrecognizedLinesReporter(_config(temp_dir)).run(log_file, "unrecognized.txt")

    assert result["total_lines"] == 6
    assert result["recognized_lines"] == 4
    assert result["unrecognized_lines"] == 2

    with open(result["output_file"], encoding='utf-8') as f:
        assert f.read() == LOG_LINES[4] + LOG_LINES[5]


def test_unrecognized_lines_to_stdout(workdir, capsys):
    temp_dir, log_file = workdir
    result = UnrecognizedLinesReporter(_config(temp_dir)).run(log_file)

    assert result["output_file"] is None
    assert capsys.readouterr().out == LOG_LINES[4] + LOG_LINES[5]


# --- Configuration ---

def test_config_defaults_without_profile_file():
    with tempfile.TemporaryDirectory() as temp_dir:
        config = Config(config_dir=temp_dir)

        assert config.get() == Config.DEFAULT_SETTINGS
        assert config.get('export.delimiter') == '|'
        assert config.list_profiles() == []


def test_config_profile_merges_over_defaults():
    with tempfile.TemporaryDirectory() as temp_dir:
        with open(os.path.join(temp_dir, "raid.json"), 'w') as f:
            json.dump({"export": {"delimiter": ","}, "paths": {"eqlog_file": "logs/eqlog.txt"}}, f)

        config = Config(config_dir=temp_dir, profile="raid")

        assert config.get('export.delimiter') == ','
        assert config.get('export.missing_value') == ''
        assert config.get('general.log_level') == 'INFO'
        assert config.get('paths.nonexistent', 'fallback') == 'fallback'
        assert config.get_path('paths.eqlog_file') == os.path.join(temp_dir, "logs", "eqlog.txt")
        assert config.list_profiles() == ['raid']
        # Built-in defaults are left untouched
        assert Config.DEFAULT_SETTINGS['export']['delimiter'] == '|'


def test_config_switch_profile():
    with tempfile.TemporaryDirectory() as temp_dir:
        with open(os.path.join(temp_dir, "verbose.json"), 'w') as f:
            json.dump({"general": {"log_level": "DEBUG"}}, f)

        config = Config(config_dir=temp_dir)

        assert not config.switch_profile("missing")
        assert config.switch_profile("verbose")
        assert config.profile == "verbose"
        assert config.get('general.log_level') == 'DEBUG'


def test_config_invalid_profile_keeps_defaults():
    with tempfile.TemporaryDirectory() as temp_dir:
        with open(os.path.join(temp_dir, "broken.json"), 'w') as f:
            f.write("{not json")

        config = Config(config_dir=temp_dir, profile="broken")

        assert config.get() == Config.DEFAULT_SETTINGS


def test_shipped_default_profile():
    config = Config()

    assert 'default' in config.list_profiles()
    assert config.get('export.delimiter') == '|'
    assert config.get('frequency.excel') is False
