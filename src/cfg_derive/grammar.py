import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

from frozendict import frozendict
from ordered_set import OrderedSet
from returns.result import Result, Success, Failure

from cfg_derive.helpers import canonical, is_nonterminal
from cfg_derive.parse_tree import ParseTreeNode
from cfg_derive.symbols import Symbol, Terminal, Variable, Word
from cfg_derive.type_defs import Grammar

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rule:
    """
    A production rewriting a variable into an expansion.

    >>> rule = Rule(Variable("<A>"), Word.from_string("<B><C>"))
    >>> print(rule)
    <A> -> <B><C>

    >>> print(Rule(Variable("<start>"), Word()))
    <start> -> ε
    """

    variable: Variable
    expansion: Word

    def __str__(self):
        return f"{self.variable} -> {self.expansion or 'ε'}"


class ContextFreeGrammar:
    def __init__(self, rules: Tuple[Rule, ...], start_variable: Variable):
        """
        Constructs a grammar from its rules and its start variable. Rules are kept
        in the given order; this order determines the order in which a
        variable's rules are enumerated during derivation search.

        Usually, grammars are created from the dictionary format with
        :meth:`~cfg_derive.grammar.ContextFreeGrammar.from_grammar`:

        >>> cfg = ContextFreeGrammar.from_grammar({
        ...     "<start>": ["<A><B>"],
        ...     "<A>": ["a"],
        ...     "<B>": ["b"],
        ... })

        >>> print(cfg)
        <start> -> <A><B>
        <A> -> a
        <B> -> b

        :param rules: The productions of the grammar.
        :param start_variable: The start variable.
        """

        self.rules: Tuple[Rule, ...] = tuple(rules)
        self.start_variable: Variable = start_variable

        index: Dict[Variable, List[Rule]] = {}
        for rule in self.rules:
            index.setdefault(rule.variable, []).append(rule)
        self.__rules_by_variable: frozendict[Variable, Tuple[Rule, ...]] = frozendict(
            {variable: tuple(rules) for variable, rules in index.items()}
        )

    @staticmethod
    def from_grammar(
        grammar: Grammar, start_symbol: str = "<start>"
    ) -> "ContextFreeGrammar":
        """
        Converts a grammar in the dictionary format into a
        :class:`~cfg_derive.grammar.ContextFreeGrammar`. String alternatives are
        tokenized character by character (nonterminals excepted); list alternatives
        contribute one symbol per element.

        >>> cfg = ContextFreeGrammar.from_grammar({
        ...     "<start>": ["<A><A>", ""],
        ...     "<A>": ["a", ["if"]],
        ... })

        >>> [len(rule.expansion) for rule in cfg.rules]
        [2, 0, 1, 1]

        >>> cfg.start_variable
        Variable(value='<start>')

        :param grammar: The grammar to convert.
        :param start_symbol: The name of the start variable.
        :return: The grammar object.
        """

        assert all(
            is_nonterminal(key) for key in grammar
        ), "Grammar keys must be nonterminals"

        return ContextFreeGrammar(
            tuple(
                Rule(Variable(variable), Word.from_tokens(alternative))
                for variable, alternatives in canonical(grammar).items()
                for alternative in alternatives
            ),
            Variable(start_symbol),
        )

    def rules_for(self, symbol: Symbol) -> Tuple[Rule, ...]:
        """
        Returns the rules for the given symbol in declaration order.

        >>> cfg = ContextFreeGrammar.from_grammar({"<start>": ["a", "b"]})
        >>> [str(rule) for rule in cfg.rules_for(Variable("<start>"))]
        ['<start> -> a', '<start> -> b']

        Terminals and variables without productions have no rules:

        >>> cfg.rules_for(Terminal("a"))
        ()

        >>> cfg.rules_for(Variable("<undefined>"))
        ()
        """

        match symbol:
            case Terminal():
                return ()
            case _:
                return self.__rules_by_variable.get(symbol, ())

    def variables(self) -> OrderedSet[Variable]:
        """
        >>> cfg = ContextFreeGrammar.from_grammar({"<start>": ["<A>b"], "<A>": ["a"]})
        >>> [str(variable) for variable in cfg.variables()]
        ['<start>', '<A>']
        """

        return OrderedSet(
            [self.start_variable]
            + [
                symbol
                for rule in self.rules
                for symbol in (rule.variable,) + rule.expansion.symbols
                if not symbol.is_terminal()
            ]
        )

    def terminals(self) -> OrderedSet[Terminal]:
        """
        >>> cfg = ContextFreeGrammar.from_grammar({"<start>": ["<A>b"], "<A>": ["a"]})
        >>> [str(terminal) for terminal in cfg.terminals()]
        ["'b'", "'a'"]
        """

        return OrderedSet(
            [
                symbol
                for rule in self.rules
                for symbol in rule.expansion
                if symbol.is_terminal()
            ]
        )

    def tree_is_valid(self, tree: ParseTreeNode) -> bool:
        """
        Checks whether the given tree conforms to this grammar: Each inner node is
        labeled with a variable that has a rule whose expansion consists of the
        labels of the node's children, and each leaf is a terminal. Leaves labeled
        with a variable are only valid if that variable has an empty production.

        >>> cfg = ContextFreeGrammar.from_grammar({
        ...     "<start>": ["<A><B>"],
        ...     "<A>": ["a"],
        ...     "<B>": ["b"],
        ... })

        >>> a = ParseTreeNode(Variable("<A>"), (ParseTreeNode(Terminal("a")),))
        >>> b = ParseTreeNode(Variable("<B>"), (ParseTreeNode(Terminal("b")),))

        >>> cfg.tree_is_valid(ParseTreeNode(Variable("<start>"), (a, b)))
        True

        >>> cfg.tree_is_valid(ParseTreeNode(Variable("<start>"), (b, a)))
        False

        >>> cfg.tree_is_valid(ParseTreeNode.empty_parse_tree(cfg.start_variable))
        False

        :param tree: The tree to check.
        :return: True iff the tree is valid.
        """

        if tree.is_leaf():
            return tree.symbol.is_terminal() or any(
                not rule.expansion for rule in self.rules_for(tree.symbol)
            )

        children_labels = Word(tuple(child.symbol for child in tree.children))
        return any(
            rule.expansion == children_labels for rule in self.rules_for(tree.symbol)
        ) and all(self.tree_is_valid(child) for child in tree.children)

    def __eq__(self, other):
        return (
            isinstance(other, ContextFreeGrammar)
            and self.rules == other.rules
            and self.start_variable == other.start_variable
        )

    def __hash__(self):
        return hash((self.rules, self.start_variable))

    def __repr__(self):
        return f"ContextFreeGrammar({self.rules!r}, {self.start_variable!r})"

    def __str__(self):
        return "\n".join(map(str, self.rules))


def validate_normal_form(
    grammar: ContextFreeGrammar,
) -> Result[ContextFreeGrammar, "UnsupportedGrammarException"]:
    """
    Checks that every rule of the grammar expands to one or two symbols. Only the
    start variable may additionally have an empty expansion. In that case, the start
    variable must not occur in any expansion.

    >>> cfg = ContextFreeGrammar.from_grammar({
    ...     "<start>": ["<A><B>", ""],
    ...     "<A>": ["a"],
    ...     "<B>": ["b"],
    ... })
    >>> validate_normal_form(cfg) == Success(cfg)
    True

    >>> print(validate_normal_form(ContextFreeGrammar.from_grammar({
    ...     "<start>": ["<A>"],
    ...     "<A>": ["abc"],
    ... })).failure())
    Unsupported production arity 3: <A> -> abc

    >>> print(validate_normal_form(ContextFreeGrammar.from_grammar({
    ...     "<start>": ["<A>"],
    ...     "<A>": [""],
    ... })).failure())
    Unsupported production arity 0: <A> -> ε

    A nullable start variable cannot be used inside other words:

    >>> print(validate_normal_form(ContextFreeGrammar.from_grammar({
    ...     "<start>": ["<A><start>", ""],
    ...     "<A>": ["a"],
    ... })).failure())
    Nullable start variable used in expansion: <start> -> <A><start>

    :param grammar: The grammar to validate.
    :return: The grammar if it is valid, or a failure describing the first
        offending rule.
    """

    for rule in grammar.rules:
        arity = len(rule.expansion)
        if arity in (1, 2) or (not arity and rule.variable == grammar.start_variable):
            continue

        logger.debug("Rejecting rule %s with arity %d", rule, arity)
        return Failure(UnsupportedProductionArityException(rule))

    if any(not rule.expansion for rule in grammar.rules_for(grammar.start_variable)):
        for rule in grammar.rules:
            if grammar.start_variable in rule.expansion.symbols:
                logger.debug("Rejecting rule %s using the nullable start", rule)
                return Failure(NullableStartInExpansionException(rule))

    return Success(grammar)


class UnsupportedGrammarException(Exception):
    """
    Signals that a grammar violates the structural assumptions of the derivation
    search.
    """

    pass


class UnsupportedProductionArityException(UnsupportedGrammarException):
    """
    Signals a rule whose expansion does not have the required length.
    """

    def __init__(self, rule: Rule):
        self.rule = rule
        super().__init__(
            f"Unsupported production arity {len(rule.expansion)}: {rule}"
        )


class NullableStartInExpansionException(UnsupportedGrammarException):
    """
    Signals a rule using the start variable in its expansion although the start
    variable has an empty production.
    """

    def __init__(self, rule: Rule):
        self.rule = rule
        super().__init__(f"Nullable start variable used in expansion: {rule}")
