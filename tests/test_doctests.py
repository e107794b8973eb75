import doctest
import unittest

from cfg_derive import (
    config,
    derivation,
    grammar,
    helpers,
    parse_tree,
    parser,
    symbols,
)


class TestDocstrings(unittest.TestCase):
    def test_config(self):
        doctest_results = doctest.testmod(m=config)
        self.assertFalse(doctest_results.failed)

    def test_derivation(self):
        doctest_results = doctest.testmod(m=derivation)
        self.assertFalse(doctest_results.failed)

    def test_grammar(self):
        doctest_results = doctest.testmod(m=grammar)
        self.assertFalse(doctest_results.failed)

    def test_helpers(self):
        doctest_results = doctest.testmod(m=helpers)
        self.assertFalse(doctest_results.failed)

    def test_parse_tree(self):
        doctest_results = doctest.testmod(m=parse_tree)
        self.assertFalse(doctest_results.failed)

    def test_parser(self):
        doctest_results = doctest.testmod(m=parser)
        self.assertFalse(doctest_results.failed)

    def test_symbols(self):
        doctest_results = doctest.testmod(m=symbols)
        self.assertFalse(doctest_results.failed)


if __name__ == "__main__":
    unittest.main()
