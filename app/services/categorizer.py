"""
Deterministic event categorizer: matches event text against an ordered
list of keyword rules and returns the first matching bucket.

Falls back to "other" if no rule matches.
"""
from __future__ import annotations

import enum
import re
from dataclasses import dataclass


class Bucket(str, enum.Enum):
    supportive = "supportive"
    educational = "educational"
    prosocial = "prosocial"
    other = "other"


@dataclass(frozen=True)
class BucketRule:
    bucket: Bucket
    pattern: re.Pattern


# Evaluated top to bottom; stems (therap, donat, fundrais) match any suffix.
BUCKET_RULES: tuple[BucketRule, ...] = (
    BucketRule(Bucket.supportive, re.compile(r"support|counsel|therap|help|wellbeing|mental", re.IGNORECASE)),
    BucketRule(Bucket.educational, re.compile(r"awareness|workshop|talk|webinar|learn|education", re.IGNORECASE)),
    BucketRule(Bucket.prosocial, re.compile(r"volunteer|drive|cleanup|mentorship|donat|fundrais", re.IGNORECASE)),
)


def categorize(text: str | None) -> Bucket:
    t = text or ""
    for rule in BUCKET_RULES:
        if rule.pattern.search(t):
            return rule.bucket
    return Bucket.other


def categorize_event(title: str | None, description: str | None) -> Bucket:
    return categorize(f"{title or ''} {description or ''}")
