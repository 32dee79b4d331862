"""
Game Configuration Constants Module

This module defines all game configuration constants and loads the phrase
list the puzzles are drawn from. All game parameters are centralized here to
enable easy modification.
"""

import json
import os
from typing import Dict, Final, List, Union

PhraseEntry = Union[str, Dict[str, str]]

# Core Game Configuration Constants
MAX_GUESSES: Final[int] = 6
"""
Maximum number of rows (guesses) allowed per phrase.
Type: Final[int] - Immutable to prevent accidental modification
"""

MAX_HINTS: Final[int] = 6
"""Maximum number of letter reveals allowed per phrase."""

STORAGE_KEY: Final[str] = "phrasele_save_v1"
"""Versioned key under which saved games are written to the store."""


def _load_phrase_list() -> List[PhraseEntry]:
    """
    Load the phrase list from phrases.json.

    Entries are kept exactly as written (a plain string or an object with
    ``text`` and ``hint``); malformed entries are reported when a game tries
    to load them, not here.

    Returns:
        List of raw phrase entries

    Raises:
        FileNotFoundError: If phrases.json file is not found
        ValueError: If the JSON is malformed or is not an array
    """
    config_dir = os.path.dirname(os.path.abspath(__file__))
    json_file_path = os.path.join(config_dir, 'phrases.json')
    
    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            phrase_list = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Phrase list file not found: {json_file_path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in phrases.json: {e}")
        
    if not isinstance(phrase_list, list):
        raise ValueError("JSON file must contain an array of phrases")
    
    return phrase_list

# Curated phrase database loaded from JSON file
PHRASES: Final[List[PhraseEntry]] = _load_phrase_list()


def _entry_text(entry: PhraseEntry) -> str:
    if isinstance(entry, str):
        return entry
    if isinstance(entry, dict) and isinstance(entry.get('text'), str):
        return entry['text']
    raise ValueError(f"Malformed phrase entry: {entry!r}")


def validate_phrase_list_integrity() -> bool:
    """
    Validates the integrity and consistency of the phrase database.
    
    This function performs validation to ensure:
    1. Format validation: every entry is a string or has a string ``text``
    2. Character validation: only letters and single spaces
    3. Uniqueness validation: no duplicate phrases
    
    Returns:
        bool: True if phrase list passes all validation checks
        
    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    if not PHRASES:
        raise ValueError("Phrase list cannot be empty")
    
    texts = []
    for index, entry in enumerate(PHRASES):
        try:
            text = _entry_text(entry).upper()
        except ValueError:
            raise ValueError(f"Phrase at index {index} is malformed: {entry!r}")
        
        if not text.strip():
            raise ValueError(f"Phrase at index {index} is blank")
        
        if not text.replace(' ', '').isalpha():
            raise ValueError(f"Phrase at index {index} '{text}' contains non-alphabetic characters")
        
        if text != text.strip() or '  ' in text:
            raise ValueError(f"Phrase at index {index} '{text}' has stray spaces")
        
        texts.append(text)
    
    if len(texts) != len(set(texts)):
        duplicates = sorted({text for text in texts if texts.count(text) > 1})
        raise ValueError(f"Duplicate phrases found in phrase list: {duplicates}")
    
    return True


def get_phrase_statistics() -> dict:
    """
    Analyzes the phrase list and returns statistical information.
    
    Returns:
        dict: Statistical analysis including:
            - total_phrases: Number of phrases in database
            - with_hints: Number of phrases carrying a textual hint
            - avg_length: Average phrase length including spaces
            - most_common_letters: Five most frequent letters
    """
    if not PHRASES:
        return {"error": "Phrase list is empty"}
    
    texts = []
    with_hints = 0
    for entry in PHRASES:
        try:
            texts.append(_entry_text(entry).upper())
        except ValueError:
            continue
        if isinstance(entry, dict) and entry.get('hint'):
            with_hints += 1
    
    letter_frequency = {}
    for text in texts:
        for char in text:
            if char != ' ':
                letter_frequency[char] = letter_frequency.get(char, 0) + 1
    
    return {
        "total_phrases": len(PHRASES),
        "valid_phrases": len(texts),
        "with_hints": with_hints,
        "avg_length": round(sum(len(text) for text in texts) / len(texts), 2) if texts else 0,
        "letter_frequency": letter_frequency,
        "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
    }


if __name__ == "__main__":

    try:
        validate_phrase_list_integrity()
        print(" Phrase list validation passed")
        
        stats = get_phrase_statistics()
        print(f" Phrase statistics: {stats}")
        
        print(" All configuration validation checks passed")
    except ValueError as config_error:
        print(f" Configuration validation failed: {config_error}")
        exit(1)
