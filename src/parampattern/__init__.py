"""
parampattern
============

Named-placeholder patterns that render in both directions: fill
``"{rootDir}/tmp/{fileName}"`` with values, or read the values back out of
``"/home/user/tmp/notes.txt"``.
"""

from __future__ import annotations

from parampattern.errors import (
    InvalidArgumentError,
    InvalidPatternError,
    PatternException,
    PatternMismatchError,
    PatternWarning,
    UnknownParameterError,
    UnterminatedPlaceholderWarning,
)
from parampattern.parameterized import ParameterizedString
from parampattern.placeholder.model import Delimiters, Occurrence
from parampattern.template import Template
from parampattern.values import ValueStore

__all__ = [
    "ParameterizedString",
    "Template",
    "ValueStore",
    "Delimiters",
    "Occurrence",
    "PatternException",
    "InvalidArgumentError",
    "InvalidPatternError",
    "UnknownParameterError",
    "PatternMismatchError",
    "PatternWarning",
    "UnterminatedPlaceholderWarning",
]
