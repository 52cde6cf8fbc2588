"""Parameter dictionary mini-grammar.

Raw parameter text such as ``USING STOGROUP SG1 NOT LOGGED PRIQTY 2 G`` is
normalized by a fixed sequence of rewrites and then paired into an ordered
key/value mapping::

    {"USING_STOGROUP": "SG1", "LOGGED": "False", "PRIQTY": "2G"}

Each rewrite is a plain ``str -> str`` function so it can be used and tested
on its own. The order matters: option expansion must see the output of the
negation rewrite, and the unit merge must run last.
"""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class DictionaryRules:
    """Settings for one kind of parameter dictionary."""

    terminator: str = ";"
    separator: str = " "
    merger: str = "_"
    # multi-word keys collapsed into one token, e.g. "USING STOGROUP"
    merge_keys: tuple[str, ...] = ()
    # bare switches that get an explicit "True" value, e.g. "LOGGED"
    option_keys: tuple[str, ...] = ()


# Rule sets used by the grammar, by construct.
STATEMENT_RULES: dict[str, DictionaryRules] = {
    "database": DictionaryRules(),
    "tablespace": DictionaryRules(
        merge_keys=("USING STOGROUP",),
        option_keys=("LOGGED",),
    ),
    "table": DictionaryRules(merge_keys=("DATA CAPTURE",)),
    "index": DictionaryRules(
        merge_keys=("USING STOGROUP",),
        option_keys=("CLUSTER",),
    ),
    "foreign_key": DictionaryRules(
        merge_keys=("ON DELETE", "SET NULL"),
        option_keys=("ENFORCED",),
    ),
}

_NEGATION = re.compile(r"\bNOT (\w+)")
_PRESENCE = re.compile(r"\bWITH (\w+)")
_FUNCTION = re.compile(r"(\w+)\(\s*([^)\s]+)\s*\)")
_UNIT = re.compile(r"\b(\d+) ([KMG])(?=\s|$)")

_BOOLEAN_VALUES = {"NO": "False", "YES": "True"}


# --- Rewrites (applied in this order) ---


def merge_keys(text: str, keys, separator: str = " ", merger: str = "_") -> str:
    """``USING STOGROUP`` -> ``USING_STOGROUP`` for each configured key."""
    for key in keys:
        text = text.replace(key, key.replace(separator, merger))
    return text


def rewrite_negations(text: str, separator: str = " ") -> str:
    """``NOT LOGGED`` -> ``LOGGED False``."""
    return _NEGATION.sub(lambda m: m.group(1) + separator + "False", text)


def rewrite_presence(text: str, separator: str = " ") -> str:
    """``WITH DEFAULT`` -> ``DEFAULT True``."""
    return _PRESENCE.sub(lambda m: m.group(1) + separator + "True", text)


def rewrite_functions(text: str, separator: str = " ") -> str:
    """``INCLUDE( A,B )`` -> ``INCLUDE A,B``."""
    return _FUNCTION.sub(lambda m: m.group(1) + separator + m.group(2), text)


def expand_options(text: str, options, separator: str = " ") -> str:
    """Give bare switches an explicit ``True`` value.

    Occurrences already followed by ``True`` or ``False`` are left alone.
    """
    for option in options:
        pattern = re.compile(
            r"\b{}\b(?!{}(?:True|False)\b)".format(
                re.escape(option), re.escape(separator)
            )
        )
        text = pattern.sub(lambda m: m.group(0) + separator + "True", text)
    return text


def merge_units(text: str) -> str:
    """``2 G`` -> ``2G`` for the K, M and G size units."""
    return _UNIT.sub(r"\1\2", text)


# --- Pairing ---


def pair_tokens(text: str, separator: str = " ") -> dict[str, str]:
    """Split on ``separator`` and pair tokens into keys and values.

    A trailing unpaired token is dropped. ``NO`` and ``YES`` values become
    ``False`` and ``True``.
    """
    tokens = text.split(separator)
    pairs: dict[str, str] = {}
    for i in range(0, len(tokens) - 1, 2):
        value = tokens[i + 1].strip()
        pairs[tokens[i].strip()] = _BOOLEAN_VALUES.get(value, value)
    return pairs


def parse_dictionary(text: str, rules: DictionaryRules | None = None) -> dict[str, str]:
    """Apply all rewrites to ``text`` and pair the result."""
    rules = rules or DictionaryRules()
    sep = rules.separator
    text = merge_keys(text, rules.merge_keys, sep, rules.merger)
    text = rewrite_negations(text, sep)
    text = rewrite_presence(text, sep)
    text = rewrite_functions(text, sep)
    text = expand_options(text, rules.option_keys, sep)
    text = merge_units(text)
    return pair_tokens(text, sep)
