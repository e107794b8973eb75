import unittest

from cfg_derive import Derivation, InitialStep, RewriteStep, Rule, Variable, Word

start = Variable("<start>")
to_pair = Rule(start, Word.from_string("<A><A>"))
to_a = Rule(Variable("<A>"), Word.from_string("a"))


class TestDerivation(unittest.TestCase):
    def test_initial_derivation(self):
        derivation = Derivation.initial(start)

        self.assertEqual(1, len(derivation))
        self.assertEqual(Word.of(start), derivation.latest_word())
        self.assertEqual([InitialStep(Word.of(start))], list(derivation))

    def test_extend_does_not_modify_derivation(self):
        zeroth = Derivation.initial(start)
        first = zeroth.extend(Word.from_string("<A><A>"), to_pair, 0)

        self.assertEqual(1, len(zeroth))
        self.assertEqual(Word.of(start), zeroth.latest_word())
        self.assertEqual(2, len(first))

    def test_branches_share_history(self):
        first = Derivation.initial(start).extend(
            Word.from_string("<A><A>"), to_pair, 0
        )
        left = first.extend(Word.from_string("a<A>"), to_a, 0)
        right = first.extend(Word.from_string("<A>a"), to_a, 1)

        self.assertIs(first, left.parent)
        self.assertIs(first, right.parent)
        self.assertEqual(left.steps()[:2], right.steps()[:2])
        self.assertNotEqual(left.latest_word(), right.latest_word())

    def test_steps_oldest_first(self):
        derivation = (
            Derivation.initial(start)
            .extend(Word.from_string("<A><A>"), to_pair, 0)
            .extend(Word.from_string("<A>a"), to_a, 1)
        )

        self.assertEqual(
            [
                InitialStep(Word.of(start)),
                RewriteStep(Word.from_string("<A><A>"), to_pair, 0),
                RewriteStep(Word.from_string("<A>a"), to_a, 1),
            ],
            derivation.steps(),
        )
        self.assertEqual(
            ["<start>", "<A><A>", "<A>a"], list(map(str, derivation.words()))
        )

    def test_extend_at_invalid_index(self):
        with self.assertRaises(AssertionError):
            Derivation.initial(start).extend(Word.from_string("<A><A>"), to_pair, 1)


if __name__ == "__main__":
    unittest.main()
