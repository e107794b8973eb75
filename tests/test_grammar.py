import unittest

from returns.pipeline import is_successful

from cfg_derive import (
    ContextFreeGrammar,
    NullableStartInExpansionException,
    ParseTreeNode,
    Rule,
    Terminal,
    UnsupportedGrammarException,
    UnsupportedProductionArityException,
    Variable,
    Word,
    validate_normal_form,
)

grammar = {
    "<start>": ["<A><B>", "<B>"],
    "<A>": ["a"],
    "<B>": ["b", "<A><A>"],
}


class TestContextFreeGrammar(unittest.TestCase):
    def test_rules_in_declaration_order(self):
        cfg = ContextFreeGrammar.from_grammar(grammar)

        self.assertEqual(
            [
                "<start> -> <A><B>",
                "<start> -> <B>",
                "<A> -> a",
                "<B> -> b",
                "<B> -> <A><A>",
            ],
            [str(rule) for rule in cfg.rules],
        )

    def test_rules_for(self):
        cfg = ContextFreeGrammar.from_grammar(grammar)

        self.assertEqual(
            (
                Rule(Variable("<B>"), Word.of(Terminal("b"))),
                Rule(Variable("<B>"), Word.of(Variable("<A>"), Variable("<A>"))),
            ),
            cfg.rules_for(Variable("<B>")),
        )
        self.assertEqual((), cfg.rules_for(Terminal("<B>")))

    def test_variables_and_terminals(self):
        cfg = ContextFreeGrammar.from_grammar(grammar)

        self.assertEqual(
            [Variable("<start>"), Variable("<A>"), Variable("<B>")],
            list(cfg.variables()),
        )
        self.assertEqual([Terminal("a"), Terminal("b")], list(cfg.terminals()))

    def test_equality(self):
        self.assertEqual(
            ContextFreeGrammar.from_grammar(grammar),
            ContextFreeGrammar.from_grammar(grammar),
        )
        self.assertNotEqual(
            ContextFreeGrammar.from_grammar(grammar),
            ContextFreeGrammar.from_grammar(grammar, start_symbol="<A>"),
        )
        self.assertEqual(
            hash(ContextFreeGrammar.from_grammar(grammar)),
            hash(ContextFreeGrammar.from_grammar(grammar)),
        )

    def test_tree_is_valid_for_unary_and_binary_nodes(self):
        cfg = ContextFreeGrammar.from_grammar(grammar)
        a = ParseTreeNode(Variable("<A>"), (ParseTreeNode(Terminal("a")),))

        tree = ParseTreeNode(
            Variable("<start>"), (ParseTreeNode(Variable("<B>"), (a, a)),)
        )
        self.assertTrue(cfg.tree_is_valid(tree))

        # <start> has no rule <start> -> <A>.
        self.assertFalse(
            cfg.tree_is_valid(ParseTreeNode(Variable("<start>"), (a,)))
        )

    def test_tree_with_open_leaf_is_invalid(self):
        cfg = ContextFreeGrammar.from_grammar(grammar)
        tree = ParseTreeNode(
            Variable("<start>"),
            (
                ParseTreeNode(Variable("<A>")),
                ParseTreeNode(Variable("<B>"), (ParseTreeNode(Terminal("b")),)),
            ),
        )

        self.assertFalse(cfg.tree_is_valid(tree))

    def test_empty_parse_tree_valid_for_nullable_start(self):
        cfg = ContextFreeGrammar.from_grammar({"<start>": ["", "<A><A>"], "<A>": ["a"]})

        self.assertTrue(
            cfg.tree_is_valid(ParseTreeNode.empty_parse_tree(cfg.start_variable))
        )


class TestValidateNormalForm(unittest.TestCase):
    def test_valid_grammar(self):
        cfg = ContextFreeGrammar.from_grammar(grammar)
        self.assertTrue(is_successful(validate_normal_form(cfg)))

    def test_nullable_start_is_valid(self):
        cfg = ContextFreeGrammar.from_grammar({"<start>": ["", "<A><A>"], "<A>": ["a"]})
        self.assertTrue(is_successful(validate_normal_form(cfg)))

    def test_long_expansion_is_invalid(self):
        cfg = ContextFreeGrammar.from_grammar({"<start>": ["<A><A><A>"], "<A>": ["a"]})
        exception = validate_normal_form(cfg).failure()

        self.assertIsInstance(exception, UnsupportedProductionArityException)
        self.assertIsInstance(exception, UnsupportedGrammarException)
        self.assertEqual(cfg.rules[0], exception.rule)

    def test_nullable_start_in_expansion_is_invalid(self):
        cfg = ContextFreeGrammar.from_grammar({"<start>": ["<A><start>", ""], "<A>": ["a"]})
        exception = validate_normal_form(cfg).failure()

        self.assertIsInstance(exception, NullableStartInExpansionException)
        self.assertIsInstance(exception, UnsupportedGrammarException)
        self.assertEqual(cfg.rules[0], exception.rule)

    def test_start_in_expansion_without_empty_production_is_valid(self):
        cfg = ContextFreeGrammar.from_grammar({"<start>": ["<A><start>", "a"], "<A>": ["a"]})
        self.assertTrue(is_successful(validate_normal_form(cfg)))

    def test_empty_expansion_of_other_variable_is_invalid(self):
        cfg = ContextFreeGrammar.from_grammar({"<start>": ["<A><A>"], "<A>": [""]})
        exception = validate_normal_form(cfg).failure()

        self.assertEqual(Variable("<A>"), exception.rule.variable)


if __name__ == "__main__":
    unittest.main()
