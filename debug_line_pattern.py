#!/usr/bin/env python3
"""Debug script to show which line type rules match a log line"""

import sys

from eqlog_tools.log import LINE_TYPE_RULES, classify
from eqlog_tools.log.timestamp import TIMESTAMP_LENGTH

# The line to check, overridable from the command line
test_line = "[Mon Oct 13 00:42:36 2003] a Bloodguard crypt sentry was hit by non-melee for 8 points of damage."
if len(sys.argv) > 1:
    test_line = " ".join(sys.argv[1:])

content = test_line[TIMESTAMP_LENGTH:].rstrip("\r\n")

print("Testing line type rules...")
print(f"Test line: {test_line}")
print(f"Content:   {content}")
print()

# Every rule is tried here, not just up to the first match, so overlaps show up
candidates = []
for position, rule in enumerate(LINE_TYPE_RULES, 1):
    fields = rule.match(content)
    if fields is not None:
        candidates.append(rule.name)
        print(f"✅ {position:2d}. {rule.name}")
        for name, value in fields.items():
            print(f"      {name}: {value!r}")

if not candidates:
    print("❌ NO RULE MATCHES")
elif len(candidates) > 1:
    print(f"\n⚠️  {len(candidates)} rules match; table order picks {candidates[0]}")

record = classify(test_line)
print(f"\nclassify() -> {record}")
