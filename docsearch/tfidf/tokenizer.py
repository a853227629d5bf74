"""
Tokenizer for TF-IDF text processing.

Tokenization rules:
1. Split on runs of whitespace
2. Lowercase every token

Nothing else is normalized. Punctuation stays attached to the word
("language." is its own term), and there is no stemming or stopword
filtering. Queries and documents must go through this same function,
otherwise their terms never line up.
"""

from typing import List, Optional


def tokenize(text: Optional[str]) -> List[str]:
    """
    Split text into lowercase whitespace-delimited terms.

    Args:
        text: Input text to tokenize

    Returns:
        List of lowercase tokens, in order of appearance

    Examples:
        >>> tokenize("This is a TEST")
        ['this', 'is', 'a', 'test']

        >>> tokenize("Go is a compiled programming language.")
        ['go', 'is', 'a', 'compiled', 'programming', 'language.']

        >>> tokenize("   ")
        []
    """
    if not text:
        return []

    return [word.lower() for word in text.split()]
