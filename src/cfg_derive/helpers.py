import re
from typing import List

from cfg_derive.type_defs import Grammar, CanonicalGrammar

RE_NONTERMINAL = re.compile(r"(<[^<> ]*>)")


def split_expansion(expansion: str) -> List[str]:
    """
    Splits the given expansion alternative into tokens.

    >>> str(split_expansion("a<b><b>c<d>e"))
    "['a', '<b>', '<b>', 'c', '<d>', 'e']"

    :param expansion: The expansion alternative to split at nonterminal boundaries.
    :return: The separated terminal and nonterminal symbols in the expansion, in the
        original order.
    """

    return [token for token in RE_NONTERMINAL.split(expansion) if token]


def is_nonterminal(symbol: str) -> bool:
    """
    Checks whether the given symbol looks like a nonterminal symbol.

    >>> is_nonterminal("a")
    False

    >>> is_nonterminal("<a>")
    True

    >>> is_nonterminal("<a>a")
    False

    :param symbol: The grammar symbol to check.
    :return: True iff the given symbol is a nonterminal symbol.
    """

    return RE_NONTERMINAL.fullmatch(symbol) is not None


def tokenize(text: str) -> List[str]:
    """
    Splits the given text into single-symbol tokens: nonterminals are kept intact,
    every other character becomes a terminal token of its own.

    >>> str(tokenize("ab<c>d"))
    "['a', 'b', '<c>', 'd']"

    The empty string has no tokens:

    >>> tokenize("")
    []

    :param text: A word or expansion alternative.
    :return: The tokens of :code:`text` in their original order.
    """

    return [
        symbol
        for token in split_expansion(text)
        for symbol in ([token] if is_nonterminal(token) else list(token))
    ]


def canonical(grammar: Grammar) -> CanonicalGrammar:
    """
    This function converts a grammar to a "canonical" form in which expansion
    alternatives are lists of individual symbols.

    Example
    -------

    >>> grammar = {
    ...     "<start>": ["<A><B>", ""],
    ...     "<A>": ["a"],
    ...     "<B>": [["if"]],
    ... }

    >>> print(canonical(grammar)["<start>"])
    [['<A>', '<B>'], []]

    Already tokenized alternatives are left alone, such that multi-character
    terminals can be expressed:

    >>> print(canonical(grammar)["<B>"])
    [['if']]

    :param grammar: The grammar to convert.
    :return: The converted canonical grammar.
    """

    return {
        k: [
            tokenize(alternative) if isinstance(alternative, str) else list(alternative)
            for alternative in alternatives
        ]
        for k, alternatives in grammar.items()
    }
