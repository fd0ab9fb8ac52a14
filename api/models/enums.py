# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Enumeration types for the Vot Romania platform.
"""

from enum import Enum


class MatchLevel(int, Enum):
    """How deep into the address hierarchy a station matched a query."""
    NONE = 0
    LOCALITY = 1
    STREET = 2
    NUMBER = 3


class SearchStrategy(str, Enum):
    """Available polling station search implementations."""
    LINEAR = "linear"
    INDEXED = "indexed"
