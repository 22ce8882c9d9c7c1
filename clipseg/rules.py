"""Composable split and remove rules for on-demand text breakdown.

Split rules always run before remove rules, each group in a fixed order no
matter how the rules were selected. Naming split pulls in uppercase split,
and removing symbols overrides splitting on them.
"""

import functools
import logging
import re
from dataclasses import dataclass, field
from enum import Enum

from .config import RuleConfig
from .exceptions import UnknownRuleError
from .strategies.base import CJK_CHAR, CJK_RANGE, WRAPPER_PAIRS
from .strategies.code import split_case
from .strategies.wrapped import PUNCTUATION_SEPARATOR

logger = logging.getLogger(__name__)

# Symbols that open a pair and therefore start a new token
OPENING_SYMBOLS = frozenset(open_ for open_, _ in WRAPPER_PAIRS) | frozenset("{\"'`«")

SYMBOL = re.compile(rf"[^A-Za-z0-9_\s{CJK_RANGE}]")
WHITESPACE = re.compile(r"\s+")
WHITESPACE_TOKEN = re.compile(r"\S+\s*|\s+")
LINE_TOKEN = re.compile(r"[^\r\n]+(?:\r\n|\r|\n)?|\r\n|\r|\n")
SCRIPT_RUN = re.compile(rf"([A-Za-z]+|[{CJK_RANGE}]+)")
UPPERCASE_START = re.compile(r"(?=[A-Z])")
NAMING_PART = re.compile(r"([^_\-\s]*)([_\-\s]*)")
ASCII_WORD = re.compile(r"[A-Za-z0-9]+")
DIGIT_RUN = re.compile(r"([0-9]+)")
LATIN_RUN = re.compile(r"[A-Za-z]+")


class RuleGroup(str, Enum):
    SPLIT = "split"
    REMOVE = "remove"


@dataclass(frozen=True)
class Rule:
    """A selectable rule and how it relates to the other rules."""

    name: str
    group: RuleGroup
    order: int
    description: str
    depends_on: tuple[str, ...] = ()
    conflicts_with: tuple[str, ...] = ()


RULES = {
    rule.name: rule
    for rule in (
        Rule("symbol_split", RuleGroup.SPLIT, 1, "Punctuation ends a token; opening symbols stand alone"),
        Rule("whitespace_split", RuleGroup.SPLIT, 2, "Split at whitespace, kept at the end of the previous token"),
        Rule("newline_split", RuleGroup.SPLIT, 3, "Split at line breaks, kept at the end of the previous line"),
        Rule("chinese_english_split", RuleGroup.SPLIT, 4, "Separate Chinese runs from Latin runs"),
        Rule("uppercase_split", RuleGroup.SPLIT, 5, "Start a new token at every uppercase letter"),
        Rule(
            "naming_split",
            RuleGroup.SPLIT,
            6,
            "Split camelCase, snake_case and kebab-case identifiers",
            depends_on=("uppercase_split",),
        ),
        Rule("digit_split", RuleGroup.SPLIT, 7, "Separate runs of digits"),
        Rule("remove_whitespace", RuleGroup.REMOVE, 8, "Remove all whitespace"),
        Rule(
            "remove_symbols",
            RuleGroup.REMOVE,
            9,
            "Remove everything but letters, digits, underscores, whitespace and Chinese",
            conflicts_with=("symbol_split",),
        ),
        Rule("remove_chinese", RuleGroup.REMOVE, 10, "Remove Chinese characters"),
        Rule("remove_english", RuleGroup.REMOVE, 11, "Remove Latin letters"),
    )
}


@dataclass
class RuleConflict:
    """A selected rule that was dropped because another rule overrides it."""

    rule: str
    action: str
    reason: str

    def to_dict(self) -> dict:
        return {"rule": self.rule, "action": self.action, "reason": self.reason}


@dataclass
class RuleAnalysis:
    """Outcome of running a set of rules over one text."""

    result: list[str] = field(default_factory=list)
    rules: list[str] = field(default_factory=list)
    conflicts: list[RuleConflict] = field(default_factory=list)
    input_length: int = 0

    @property
    def average_length(self) -> int:
        if not self.result:
            return 0
        return int(self.input_length / len(self.result) + 0.5)

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return {
            "result": self.result,
            "rules": self.rules,
            "conflicts": [conflict.to_dict() for conflict in self.conflicts],
            "stats": {
                "inputLength": self.input_length,
                "outputCount": len(self.result),
                "avgLength": self.average_length,
            },
        }


@dataclass
class SingleRuleResult:
    """Outcome of applying one rule to an existing token list."""

    result: list[str] = field(default_factory=list)
    has_conflict: bool = False
    conflict_message: str | None = None


def split_symbols(text: str) -> list[str]:
    """Split after punctuation and around opening symbols.

    A punctuation mark stays at the end of the token it follows. An opening
    bracket or quote becomes a token of its own, so the text it wraps starts
    a fresh token.
    """
    parts = []
    buffer = ""
    for char in text:
        if char in OPENING_SYMBOLS:
            if buffer:
                parts.append(buffer)
                buffer = ""
            parts.append(char)
            continue
        buffer += char
        if PUNCTUATION_SEPARATOR.fullmatch(char):
            parts.append(buffer)
            buffer = ""
    if buffer:
        parts.append(buffer)
    return parts


def split_whitespace(text: str) -> list[str]:
    return WHITESPACE_TOKEN.findall(text)


def split_newlines(text: str) -> list[str]:
    return LINE_TOKEN.findall(text)


def split_scripts(text: str) -> list[str]:
    return [part for part in SCRIPT_RUN.split(text) if part]


def split_uppercase(text: str) -> list[str]:
    return [part for part in UPPERCASE_START.split(text) if part]


def split_naming(text: str, remove_separators: bool = True) -> list[str]:
    """Split naming-convention identifiers into their words.

    Words are delimited by ``_``, ``-`` and whitespace; ASCII words are further
    split at their case boundaries.

    Args:
        text: Text to split
        remove_separators: Drop the delimiters; when False each run of
            delimiters stays at the end of the word before it

    Returns:
        Words in order
    """
    parts = []
    for match in NAMING_PART.finditer(text):
        word, separator = match.groups()
        if ASCII_WORD.fullmatch(word):
            pieces = split_case(word)
        else:
            pieces = [word] if word else []
        if separator and not remove_separators:
            if pieces:
                pieces[-1] += separator
            else:
                pieces = [separator]
        parts.extend(pieces)
    return parts


def split_digits(text: str) -> list[str]:
    return [part for part in DIGIT_RUN.split(text) if part]


def remove_whitespace(text: str) -> str:
    return WHITESPACE.sub("", text)


def remove_symbols(text: str) -> str:
    return SYMBOL.sub("", text)


def remove_chinese(text: str) -> str:
    return CJK_CHAR.sub("", text)


def remove_english(text: str) -> str:
    return LATIN_RUN.sub("", text)


RULE_FUNCTIONS = {
    "symbol_split": split_symbols,
    "whitespace_split": split_whitespace,
    "newline_split": split_newlines,
    "chinese_english_split": split_scripts,
    "uppercase_split": split_uppercase,
    "naming_split": split_naming,
    "digit_split": split_digits,
    "remove_whitespace": remove_whitespace,
    "remove_symbols": remove_symbols,
    "remove_chinese": remove_chinese,
    "remove_english": remove_english,
}


def validate_rules(rules: list[str]) -> None:
    """Raise UnknownRuleError if any name is not a defined rule."""
    unknown = [name for name in rules if name not in RULES]
    if unknown:
        raise UnknownRuleError(f"Unknown rules: {', '.join(unknown)}. Available: {', '.join(RULES)}")


def resolve_dependencies(rules: list[str]) -> list[str]:
    """Add the rules that selected rules depend on, without duplicates."""
    resolved = list(dict.fromkeys(rules))
    for name in resolved:
        for dependency in RULES[name].depends_on:
            if dependency not in resolved:
                logger.debug(f"{name} requires {dependency}")
                resolved.append(dependency)
    return resolved


def check_conflicts(rules: list[str]) -> tuple[list[str], list[RuleConflict]]:
    """Drop rules overridden by another selected rule.

    Returns:
        Tuple of (remaining rules, one RuleConflict per dropped rule)
    """
    remaining = list(rules)
    conflicts = []
    for name in rules:
        for other in RULES[name].conflicts_with:
            if other in remaining:
                remaining.remove(other)
                reason = f"{name} conflicts with {other}; {other} skipped"
                logger.info(reason)
                conflicts.append(RuleConflict(rule=other, action="skipped", reason=reason))
    return remaining, conflicts


def _run_rule(name: str, items: list[str], config: RuleConfig) -> list[str]:
    transform = RULE_FUNCTIONS[name]
    if name == "naming_split":
        transform = functools.partial(split_naming, remove_separators=config.naming_remove_symbol)

    if RULES[name].group is RuleGroup.SPLIT:
        items = [part for item in items for part in transform(item)]
    else:
        items = [transform(item) for item in items]
    return [item for item in items if item]


def multi_rule_analyze(
    text: str, rules: list[str], config: RuleConfig | None = None
) -> RuleAnalysis:
    """Run a combination of rules over text.

    Conflicts are resolved before dependencies are added. Split rules then run
    in their fixed order, each over every token produced so far, followed by
    the remove rules; tokens left empty are dropped.

    Args:
        text: Text to break down
        rules: Names of the selected rules, in any order
        config: Rule configuration, defaults to RuleConfig()

    Returns:
        RuleAnalysis with the tokens, the rules actually applied and any
        conflicts that were resolved

    Raises:
        UnknownRuleError: If a rule name is not defined
    """
    validate_rules(rules)
    if not isinstance(text, str) or not text.strip():
        return RuleAnalysis()
    config = config or RuleConfig()

    selected, conflicts = check_conflicts(list(dict.fromkeys(rules)))
    selected = resolve_dependencies(selected)

    items = [text]
    for group in (RuleGroup.SPLIT, RuleGroup.REMOVE):
        ordered = sorted(
            (name for name in selected if RULES[name].group is group),
            key=lambda name: RULES[name].order,
        )
        for name in ordered:
            items = _run_rule(name, items, config)
            logger.debug(f"{name}: {len(items)} tokens")

    return RuleAnalysis(result=items, rules=selected, conflicts=conflicts, input_length=len(text))


def apply_single_rule(
    items: str | list[str], rule: str, config: RuleConfig | None = None
) -> SingleRuleResult:
    """Apply one rule to a text or to the tokens of a previous step.

    Symbol split over tokens that no longer contain any symbol is reported as
    a conflict; the tokens are returned unchanged in that case.

    Raises:
        UnknownRuleError: If the rule name is not defined
    """
    validate_rules([rule])
    if not items:
        return SingleRuleResult()
    if isinstance(items, str):
        items = [items]

    if rule == "symbol_split" and not any(SYMBOL.search(item) for item in items):
        return SingleRuleResult(
            result=[item for item in items if item],
            has_conflict=True,
            conflict_message="No symbols left to split on",
        )

    return SingleRuleResult(result=_run_rule(rule, list(items), config or RuleConfig()))
