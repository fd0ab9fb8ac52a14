# SPDX-License-Identifier: Apache-2.0

"""
Address text normalization.

Citizens type addresses with or without diacritics, in any case and with
stray punctuation. Every comparison made by the resolution engine goes
through these functions so that "Calea Victoriei" and "calea  victoriei."
compare equal.
"""

import re
import unicodedata
from dataclasses import dataclass
from typing import Optional

_PUNCTUATION = re.compile(r"[^\w\s]", re.UNICODE)
_WHITESPACE = re.compile(r"\s+")
_NUMBER_MARKER = re.compile(r"^(?:nr|no|numarul|numar)\s*", re.IGNORECASE)
_STREET_WITH_NUMBER = re.compile(
    r"^(?P<street>.*?\D)[\s,]+(?:nr\.?\s*|no\.?\s*)?(?P<number>\d+\s?[a-zA-Z]?)$",
    re.IGNORECASE
)
_NUMERIC_SEGMENT = re.compile(r"^(?:nr\.?\s*|no\.?\s*)?\d+\s?[a-zA-Z]?$", re.IGNORECASE)
_SUFFIX_GAP = re.compile(r"(?<=\d) (?=[a-z]\b)")
_BUCHAREST_SECTOR = re.compile(r"^sector(?:ul)?\s*[1-6]$", re.IGNORECASE)


def strip_diacritics(text: str) -> str:
    """Remove accents/diacritics from text via NFKD decomposition."""
    nfkd = unicodedata.normalize("NFKD", text)
    return "".join(c for c in nfkd if not unicodedata.combining(c))


def normalize_text(value: Optional[str]) -> str:
    """
    Normalize a free-text address component for comparison.
    
    Args:
        value: Raw text, possibly None
        
    Returns:
        Casefolded text without diacritics or punctuation and with single
        spaces between words; empty string for None or blank input
    """
    if value is None:
        return ""
    text = strip_diacritics(str(value))
    text = _PUNCTUATION.sub(" ", text)
    text = _WHITESPACE.sub(" ", text).strip()
    return text.casefold()


def normalize_number(value: Optional[str]) -> str:
    """
    Normalize a street number so that "Nr. 10 A" and "10a" compare equal.

    A letter suffix is joined to its number; any other separator becomes
    "-", so "10-12", "10/12" and "10 12" stay distinct from "1012".
    """
    text = normalize_text(value)
    text = _NUMBER_MARKER.sub("", text)
    text = _SUFFIX_GAP.sub("", text)
    return text.replace(" ", "-")


@dataclass(frozen=True)
class ParsedAddress:
    """Structured fields recovered from free-form address text."""
    locality: Optional[str] = None
    street: Optional[str] = None
    number: Optional[str] = None
    
    def is_empty(self) -> bool:
        return not (self.locality or self.street or self.number)


def parse_address_text(text: Optional[str]) -> ParsedAddress:
    """
    Split free-form address text into locality, street and number.
    
    The accepted shape is ``"<street> [nr.] <number>, <locality>"``. The last
    comma-separated segment is the locality, the first is the street with an
    optional trailing house number, and a purely numeric middle segment is the
    number. A single segment ending in a house number is a street and number
    with no locality; any other single segment is a locality.
    
    Args:
        text: Free-form address as typed by a citizen
        
    Returns:
        ParsedAddress; empty when nothing usable was found
    """
    if not text:
        return ParsedAddress()
    
    segments = [segment.strip() for segment in str(text).split(',')]
    segments = [segment for segment in segments if segment]
    if not segments:
        return ParsedAddress()
    
    if len(segments) == 1:
        return _parse_single_segment(segments[0])
    
    locality = segments[-1]
    street_part = segments[0]
    number = None
    
    for middle in segments[1:-1]:
        if _NUMERIC_SEGMENT.match(middle):
            number = _NUMBER_MARKER.sub("", middle.replace(".", " ").strip()).strip()
    
    if number is None:
        match = _STREET_WITH_NUMBER.match(street_part)
        if match:
            street_part = match.group('street').strip()
            number = match.group('number').strip()
    
    street = street_part.rstrip(' .') or None
    return ParsedAddress(locality=locality, street=street, number=number)


def _parse_single_segment(segment: str) -> ParsedAddress:
    # "Sector 3" names a Bucharest locality, not street "Sector" number 3
    if _BUCHAREST_SECTOR.match(segment):
        return ParsedAddress(locality=segment)

    match = _STREET_WITH_NUMBER.match(segment)
    if match:
        street = match.group('street').strip().rstrip(' .') or None
        return ParsedAddress(street=street, number=match.group('number').strip())

    return ParsedAddress(locality=segment)
