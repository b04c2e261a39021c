"""
Transcription engine.

Applies an ordered table of word substitutions to free-form text.  Two
rules in the table interact: "Alma" becomes "Consciência" while "Terra"
becomes "Alma".  Applied naively, whichever runs second would clobber
the output of the first, so the engine handles them specially:

1. Every "Alma" already in the text becomes "Consciência", before any
   other rule runs.  The ("Alma", "Consciência") rule is dropped from
   the generic pass.
2. The remaining rules run longest original word first.
3. The "Alma" produced by ("Terra", "Alma") is written as a protected
   placeholder that no later rule can match, and resolved back to the
   literal once every rule has run.
4. A last pass rewrites every "Alma" variant a rule wrote ("alma",
   "ALMA", ...) to the literal "Alma".

Usage::

    from transcritor.engine import transcribe

    transcribe("A Terra e a Alma e o sol.")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, List, Sequence, Tuple, Union

from .matcher import replace_word
from .rules import Rule, load_rules

logger = logging.getLogger(__name__)

ALMA = "Alma"
CONSCIENCIA = "Consciência"
TERRA = "Terra"

INVALID_TEXT_MESSAGE = "Texto é obrigatório."

# Private-use code points never appear in the accent classes, and the
# matcher treats them as word characters, so no rule can match a
# placeholder or the text right next to one.
_PLACEHOLDER_MARK = "\ue000"
_PLACEHOLDER_BASE = 0xE100


class InvalidTextError(ValueError):
    """Raised when the text to transcribe is missing or not a string."""

    def __init__(self, message: str = INVALID_TEXT_MESSAGE):
        super().__init__(message)


@dataclass(frozen=True)
class FinalValue:
    """Replacement written to the text as-is."""

    text: str


@dataclass(frozen=True)
class ProtectedValue:
    """Replacement shielded from later rules until the final pass."""

    text: str


SubstitutionValue = Union[FinalValue, ProtectedValue]


def _placeholder(index: int) -> str:
    return f"{_PLACEHOLDER_MARK}{chr(_PLACEHOLDER_BASE + index)}{_PLACEHOLDER_MARK}"


class Transcriber:
    """Applies a rule table to text.

    The table is copied into a tuple on construction and never changed
    afterwards, so one instance can serve any number of callers.
    """

    def __init__(self, rules: Iterable[Union[Rule, Sequence[str]]]):
        self.rules: Tuple[Rule, ...] = tuple(
            rule if isinstance(rule, Rule) else Rule(*rule) for rule in rules
        )
        filtered = [rule for rule in self.rules if not self._is_priority(rule)]
        # sorted() is stable: words of equal length keep table order.
        self.ordered_rules: Tuple[Rule, ...] = tuple(
            sorted(filtered, key=lambda rule: len(rule.original), reverse=True)
        )

    @staticmethod
    def _is_priority(rule: Rule) -> bool:
        return rule.original == ALMA and rule.replacement == CONSCIENCIA

    @staticmethod
    def substitution_value(rule: Rule) -> SubstitutionValue:
        """Return the value a rule writes into the text."""
        if rule.original == TERRA and rule.replacement == ALMA:
            return ProtectedValue(ALMA)
        return FinalValue(rule.replacement)

    def transcribe(self, text: str) -> str:
        """Apply every rule to ``text`` and return the transcribed copy.

        Raises:
            InvalidTextError: If ``text`` is ``None`` or not a string.
        """
        if not isinstance(text, str):
            raise InvalidTextError()

        transcribed = replace_word(text, ALMA, CONSCIENCIA)

        protected: List[str] = []
        for rule in self.ordered_rules:
            value = self.substitution_value(rule)
            if isinstance(value, ProtectedValue):
                protected.append(value.text)
                emitted = _placeholder(len(protected) - 1)
            else:
                emitted = value.text
            transcribed = replace_word(transcribed, rule.original, emitted)

        for index, literal in enumerate(protected):
            transcribed = transcribed.replace(_placeholder(index), literal)
        transcribed = replace_word(transcribed, ALMA, ALMA)

        logger.debug("Transcribed %d chars with %d rules", len(text), len(self.ordered_rules))
        return transcribed


@lru_cache(maxsize=1)
def default_transcriber() -> Transcriber:
    """Build the process-wide transcriber from the configured rule table."""
    return Transcriber(load_rules())


def transcribe(text: str) -> str:
    """Transcribe ``text`` with the configured rule table."""
    return default_transcriber().transcribe(text)
