# Copyright © 2026 The CFGDerive authors.
#
# This file is part of CFGDerive.
#
# CFGDerive is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# CFGDerive is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with CFGDerive.  If not, see <http://www.gnu.org/licenses/>.
import logging
from typing import List

from returns.maybe import Maybe
from returns.pipeline import is_successful
from returns.result import Failure

from cfg_derive.config import ParserConfig
from cfg_derive.derivation import Derivation, InitialStep, RewriteStep
from cfg_derive.grammar import (
    ContextFreeGrammar,
    UnsupportedProductionArityException,
    validate_normal_form,
)
from cfg_derive.parse_tree import ParseTreeNode
from cfg_derive.symbols import Word
from cfg_derive.type_defs import Grammar

logger = logging.getLogger(__name__)


class Parser:
    def __init__(
        self,
        grammar: ContextFreeGrammar | Grammar,
        config: ParserConfig = ParserConfig(),
    ):
        """
        Constructs a parser deciding membership in the language of the given
        grammar by breadth-first derivation search. The grammar is expected to be
        in a Chomsky-like normal form: Each rule expands to one or two symbols, and
        only the start variable may have an empty expansion.

        In the documentation of this class, we use the following grammar for the
        language :code:`a^n b^n` (n > 0):

        >>> grammar = {
        ...     "<start>": ["<A><B>", "<A><C>"],
        ...     "<C>": ["<start><B>"],
        ...     "<A>": ["a"],
        ...     "<B>": ["b"],
        ... }
        >>> parser = Parser(grammar)

        >>> parser.is_in_language("aabb")
        True

        >>> parser.is_in_language("aab")
        False

        >>> print(parser.generate_parse_tree("aabb").unwrap())
        <start>
        ├── <A>
        │   └── "a"
        └── <C>
            ├── <start>
            │   ├── <A>
            │   │   └── "a"
            │   └── <B>
            │       └── "b"
            └── <B>
                └── "b"

        Grammars violating the normal form are rejected unless validation is
        disabled in the :class:`~cfg_derive.config.ParserConfig`:

        >>> Parser({"<start>": ["abc"]})
        Traceback (most recent call last):
        ...
        cfg_derive.grammar.UnsupportedProductionArityException: Unsupported production arity 3: <start> -> abc

        :param grammar: The grammar, either as a
            :class:`~cfg_derive.grammar.ContextFreeGrammar` or in the dictionary
            format with start symbol :code:`<start>`.
        :param config: The parser settings.
        """

        self.grammar: ContextFreeGrammar = (
            grammar
            if isinstance(grammar, ContextFreeGrammar)
            else ContextFreeGrammar.from_grammar(grammar)
        )
        self.config: ParserConfig = config

        validation_result = validate_normal_form(self.grammar)
        if config.validate_grammar:
            match validation_result:
                case Failure(exception):
                    raise exception
        elif not is_successful(validation_result):
            logger.warning(
                "Grammar is not in normal form (%s); derivation search may miss words",
                validation_result.failure(),
            )

    def step_bound(self, word: Word) -> int:
        """
        The number of rewrite steps sufficient to derive a word of the given length
        from a grammar in normal form: :code:`len(word) - 1` binary and
        :code:`len(word)` unary steps. The empty word needs one step applying an
        empty production of the start variable.

        >>> parser = Parser({"<start>": ["a"]})
        >>> parser.step_bound(Word()), parser.step_bound(Word.from_string("abc"))
        (1, 5)

        >>> Parser(
        ...     {"<start>": ["a"]}, ParserConfig(extra_steps=2)
        ... ).step_bound(Word.from_string("abc"))
        7
        """

        bound = 2 * len(word) - 1 if len(word) else 1
        return bound + self.config.extra_steps

    def generate_derivations(self, n: int) -> List[Derivation]:
        """
        Generates all derivations of at most :code:`n` rewrite steps, in
        breadth-first order. In each pass, every variable of the latest words of
        the derivations discovered in the previous pass is rewritten with each of
        its rules.

        >>> parser = Parser({"<start>": ["<A><A>"], "<A>": ["a", "b"]})
        >>> derivations = parser.generate_derivations(2)
        >>> [str(derivation.latest_word()) for derivation in derivations]
        ['<start>', '<A><A>', 'a<A>', 'b<A>', '<A>a', '<A>b']

        :param n: The maximum number of rewrite steps.
        :return: All derivations with at most :code:`n` rewrite steps, shorter ones
            first.
        """

        all_derivations: List[Derivation] = [
            Derivation.initial(self.grammar.start_variable)
        ]
        frontier: List[Derivation] = list(all_derivations)

        for pass_nr in range(n):
            derivations_to_add: List[Derivation] = []

            for derivation in frontier:
                word = derivation.latest_word()
                for index, symbol in enumerate(word):
                    for rule in self.grammar.rules_for(symbol):
                        derivations_to_add.append(
                            derivation.extend(
                                word.replace(index, rule.expansion), rule, index
                            )
                        )

                        derivation_count = len(all_derivations) + len(
                            derivations_to_add
                        )
                        if (
                            self.config.max_derivations is not None
                            and derivation_count > self.config.max_derivations
                        ):
                            raise DerivationLimitExceededException(
                                self.config.max_derivations,
                                pass_nr + 1,
                                derivation_count,
                            )

            all_derivations.extend(derivations_to_add)
            frontier = derivations_to_add

            logger.debug(
                "Pass %d: %d new derivations, %d in total",
                pass_nr + 1,
                len(derivations_to_add),
                len(all_derivations),
            )

            if not frontier:
                break

        return all_derivations

    def find_derivation(self, word: Word | str) -> Maybe[Derivation]:
        """
        Searches the first derivation (in breadth-first order) of the given word.

        >>> parser = Parser({"<start>": ["<A><B>"], "<A>": ["a"], "<B>": ["b"]})
        >>> print(parser.find_derivation("ab").unwrap())
        <start>
        <A><B>  [<start> -> <A><B> @ 0]
        a<B>  [<A> -> a @ 0]
        ab  [<B> -> b @ 1]

        >>> parser.find_derivation("ba")
        <Nothing>

        :param word: The word to derive.
        :return: The derivation, or :code:`Nothing` if the word cannot be derived
            within the step bound.
        """

        word = as_word(word)
        bound = self.step_bound(word)
        logger.debug("Searching derivation of '%s' with at most %d steps", word, bound)

        return Maybe.from_optional(
            next(
                (
                    derivation
                    for derivation in self.generate_derivations(bound)
                    if derivation.latest_word() == word
                ),
                None,
            )
        )

    def is_in_language(self, word: Word | str) -> bool:
        result = is_successful(self.find_derivation(word))
        logger.debug("'%s' in language: %s", as_word(word), result)
        return result

    def generate_parse_tree(self, word: Word | str) -> Maybe[ParseTreeNode]:
        """
        Returns a parse tree for the given word if it is in the language.

        >>> parser = Parser({"<start>": ["<A><B>", ""], "<A>": ["a"], "<B>": ["b"]})
        >>> parser.generate_parse_tree("ab").unwrap().to_parse_tree()
        ('<start>', [('<A>', [('a', [])]), ('<B>', [('b', [])])])

        The empty word has a tree consisting of the start variable only:

        >>> parser.generate_parse_tree("").unwrap().to_parse_tree()
        ('<start>', [])

        >>> parser.generate_parse_tree("ba")
        <Nothing>

        :param word: The word to parse.
        :return: The parse tree, or :code:`Nothing` if the word is not in the
            language.
        """

        word = as_word(word)
        if not word:
            return self.find_derivation(word).map(
                lambda _: ParseTreeNode.empty_parse_tree(self.grammar.start_variable)
            )

        return self.find_derivation(word).map(build_parse_tree)


def build_parse_tree(derivation: Derivation) -> ParseTreeNode:
    """
    Builds the parse tree of a derivation. We start with one leaf per symbol of the
    derived word and undo the rewrite steps from the newest to the oldest: Each
    step replaces the nodes at the rewritten position by a node for the rule's
    variable. Since steps are undone in reverse, the node list always corresponds to
    the word before the step undone next.

    >>> from cfg_derive.grammar import Rule
    >>> from cfg_derive.symbols import Variable
    >>> start, a = Variable("<start>"), Variable("<A>")
    >>> derivation = (
    ...     Derivation.initial(start)
    ...     .extend(Word.from_string("<A><A>"), Rule(start, Word.from_string("<A><A>")), 0)
    ...     .extend(Word.from_string("x<A>"), Rule(a, Word.from_string("x")), 0)
    ...     .extend(Word.from_string("xy"), Rule(a, Word.from_string("y")), 1)
    ... )

    >>> build_parse_tree(derivation).to_parse_tree()
    ('<start>', [('<A>', [('x', [])]), ('<A>', [('y', [])])])

    :param derivation: A derivation from the start variable.
    :return: The root node of the parse tree.
    """

    nodes: List[ParseTreeNode] = [
        ParseTreeNode(symbol) for symbol in derivation.latest_word()
    ]

    for step in reversed(derivation.steps()):
        match step:
            case InitialStep():
                continue
            case RewriteStep(_, rule, index):
                arity = len(rule.expansion)
                if arity not in (1, 2):
                    raise UnsupportedProductionArityException(rule)

                parent = ParseTreeNode(rule.variable, tuple(nodes[index : index + arity]))
                nodes[index : index + arity] = [parent]

    assert len(nodes) == 1
    return nodes[0]


def as_word(word: Word | str) -> Word:
    return word if isinstance(word, Word) else Word.from_string(word)


def generate_derivations(
    grammar: ContextFreeGrammar | Grammar, n: int
) -> List[Derivation]:
    return Parser(grammar).generate_derivations(n)


def is_in_language(grammar: ContextFreeGrammar | Grammar, word: Word | str) -> bool:
    """
    Checks whether the given word is in the language of the given grammar.

    >>> grammar = {"<start>": ["<A><B>"], "<A>": ["a"], "<B>": ["b"]}
    >>> is_in_language(grammar, "ab")
    True

    >>> is_in_language(grammar, "ba")
    False
    """

    return Parser(grammar).is_in_language(word)


def generate_parse_tree(
    grammar: ContextFreeGrammar | Grammar, word: Word | str
) -> Maybe[ParseTreeNode]:
    return Parser(grammar).generate_parse_tree(word)


class DerivationLimitExceededException(Exception):
    """
    Signals that the derivation search generated more derivations than
    allowed by :attr:`~cfg_derive.config.ParserConfig.max_derivations`.
    """

    def __init__(self, max_derivations: int, pass_nr: int, derivation_count: int):
        self.max_derivations = max_derivations
        self.pass_nr = pass_nr
        self.derivation_count = derivation_count
        super().__init__(
            f"More than {max_derivations} derivations in pass {pass_nr}"
        )
