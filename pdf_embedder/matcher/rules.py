"""
Filename extraction rules.
File: pdf_embedder/matcher/rules.py

Each rule pairs a display name with an expression whose first capturing
group is the document key. Exactly one rule is active per run; the
order below is the order offered to the user.
"""

import re

from dataclasses import dataclass


class OverlayStrategy:
    """How the raster-overlay matcher is built for a rule."""
    PREFIX          = "prefix"          # Overlay name starts with the full document name
    FIXED_OFFSET    = "fixed_offset"    # Overlay name is the 10 characters after the first "_"


@dataclass(frozen=True)
class ExtractionRule:
    """Named filename pattern used to derive a document key."""
    name: str
    key_expression: re.Pattern
    overlay_strategy: str = OverlayStrategy.PREFIX

    def __str__(self):
        return self.name


def _rule(name: str, expression: str, overlay_strategy: str = OverlayStrategy.PREFIX) -> ExtractionRule:
    return ExtractionRule(name, re.compile(expression, re.IGNORECASE), overlay_strategy)


EXTRACTION_RULES = (
    _rule('Loft|Ann', r'^(\d{5,7}_\d{3,5}(?:_ALT\d|_B\d|_D\d)?)'),
    _rule('CBK', r'^(\d{15}_\d{4})'),
    _rule('NY&CO', r'^(.+)$'),
    _rule('UNIQLO', r'^([a-z]{4}-[0-9a-z]{8}_\d{2}_[0-9a-z]{2})'),
    # Overlays for this rule are named by swatch number (e.g., "1234567890.jpg")
    _rule('Cacique', r'^(cq-\d{6}_\d{10}_\d{7})', OverlayStrategy.FIXED_OFFSET),
)

DEFAULT_RULE_INDEX = 1


def rule_names() -> list[str]:
    """Names of all rules, in selection order."""
    return [rule.name for rule in EXTRACTION_RULES]


def get_default_rule() -> ExtractionRule:
    return EXTRACTION_RULES[DEFAULT_RULE_INDEX]


def get_rule(name: str) -> ExtractionRule:
    """
    Look up a rule by name (case-insensitive).

    Raises:
        ValueError: If no rule has that name
    """
    wanted = name.strip().lower()
    for rule in EXTRACTION_RULES:
        if rule.name.lower() == wanted:
            return rule
    raise ValueError(f"Unknown filename pattern '{name}'. "
                     f"Choose one of: {', '.join(rule_names())}")


# End of file #
