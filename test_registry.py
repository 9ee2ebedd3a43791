#!/usr/bin/env python3
"""Tests for the line type registry: names, field lists and record shapes."""

from eqlog_tools.log import LINE_TYPE_RULES, all_line_types, all_possible_fields, classify

STAMP = "[Mon Oct 13 00:42:36 2003] "


def test_line_types_follow_table_order():
    names = all_line_types()

    assert names == [rule.name for rule in LINE_TYPE_RULES]
    assert len(names) == 45
    assert len(set(names)) == len(names)
    assert names[0] == 'MOB_HITS_YOU'
    assert names[-1] == 'PLAYER_LISTING'


def test_line_types_are_uppercase_identifiers():
    for name in all_line_types():
        assert name == name.upper()
        assert name.replace('_', '').isalpha()


def test_possible_fields_sorted_and_unique():
    fields = all_possible_fields()

    assert fields == sorted(set(fields))
    assert 'line_type' in fields
    assert 'time_stamp' in fields


def test_possible_fields_contains_known_names():
    fields = set(all_possible_fields())

    for name in ('attacker', 'attackee', 'amount', 'slayee', 'spell', 'platinum', 'copper',
                 'merchant', 'item', 'coord_3', 'speaker', 'spoken', 'class', 'lfg'):
        assert name in fields


def test_handler_with_no_captures_yields_declared_fields():
    for rule in LINE_TYPE_RULES:
        probe = rule.handler()
        assert tuple(probe.keys()) == rule.fields, rule.name


def test_possible_fields_covers_every_handler():
    fields = set(all_possible_fields())

    for rule in LINE_TYPE_RULES:
        assert set(rule.handler()) <= fields, rule.name


def test_record_keys_are_declared_fields_plus_universal():
    for rule in LINE_TYPE_RULES:
        record = classify(STAMP + rule.example)
        assert set(record) == set(rule.fields) | {'line_type', 'time_stamp'}, rule.name


def test_money_fields_are_integers():
    money_rules = [rule for rule in LINE_TYPE_RULES if 'platinum' in rule.fields]
    assert {rule.name for rule in money_rules} == {
        'CORPSE_MONEY', 'SPLIT_MONEY', 'SELL_ITEM', 'BUY_ITEM'}

    for rule in money_rules:
        record = classify(STAMP + rule.example)
        for denomination in ('platinum', 'gold', 'silver', 'copper'):
            assert isinstance(record[denomination], int), rule.name
