"""
Accent-insensitive word transcription.

The package replaces whole words in Portuguese text according to an
ordered rule table.  :mod:`transcritor.engine` holds the substitution
logic, :mod:`transcritor.main` exposes it over HTTP and
:mod:`transcritor.batch` runs it over text files in Cloud Storage.
"""

from .engine import InvalidTextError, Transcriber, transcribe
from .rules import Rule, RuleTableError, load_rules

__all__ = [
    "InvalidTextError",
    "Rule",
    "RuleTableError",
    "Transcriber",
    "load_rules",
    "transcribe",
]
