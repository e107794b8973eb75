from dataclasses import dataclass
from typing import Iterator, List, Optional

from cfg_derive.grammar import Rule
from cfg_derive.symbols import Variable, Word


@dataclass(frozen=True)
class Step:
    """
    One step of a derivation, i.e., the word resulting from a rewrite.

    Abstract base class.
    """

    word: Word


@dataclass(frozen=True)
class InitialStep(Step):
    """
    The zeroth step of a derivation, holding the one-symbol word consisting of the
    start variable.

    >>> print(InitialStep(Word.of(Variable("<start>"))))
    <start>
    """

    def __str__(self):
        return str(self.word)


@dataclass(frozen=True)
class RewriteStep(Step):
    """
    A step applying :code:`rule` to the variable at position :code:`index` of the
    previous step's word.

    >>> rule = Rule(Variable("<A>"), Word.from_string("a"))
    >>> print(RewriteStep(Word.from_string("ab"), rule, 0))
    ab  [<A> -> a @ 0]
    """

    rule: Rule
    index: int

    def __str__(self):
        return f"{self.word}  [{self.rule} @ {self.index}]"


@dataclass(frozen=True)
class Derivation:
    """
    A persistent sequence of derivation steps. Extending a derivation creates a
    new derivation sharing all previous steps with the extended one; derivations are
    never modified.

    >>> start = Variable("<start>")
    >>> rule = Rule(start, Word.from_string("<A><A>"))
    >>> zeroth = Derivation.initial(start)
    >>> first = zeroth.extend(Word.from_string("<A><A>"), rule, 0)

    >>> len(zeroth), len(first)
    (1, 2)

    >>> print(first.latest_word())
    <A><A>

    >>> print(first)
    <start>
    <A><A>  [<start> -> <A><A> @ 0]
    """

    step: Step
    parent: Optional["Derivation"] = None
    length: int = 1

    @staticmethod
    def initial(start_variable: Variable) -> "Derivation":
        return Derivation(InitialStep(Word.of(start_variable)))

    def extend(self, word: Word, rule: Rule, index: int) -> "Derivation":
        """
        Returns a new derivation consisting of this derivation's steps followed by
        a step rewriting the symbol at :code:`index` with :code:`rule`.

        :param word: The word resulting from the rewrite.
        :param rule: The applied rule.
        :param index: The position of the rewritten variable in the latest word of
            this derivation.
        :return: The extended derivation.
        """

        assert 0 <= index < len(self.latest_word())
        return Derivation(RewriteStep(word, rule, index), self, self.length + 1)

    def latest_word(self) -> Word:
        return self.step.word

    def steps(self) -> List[Step]:
        """
        The steps of this derivation from the oldest (the initial step) to the
        newest.
        """

        result: List[Step] = []
        derivation: Optional[Derivation] = self
        while derivation is not None:
            result.append(derivation.step)
            derivation = derivation.parent

        return result[::-1]

    def words(self) -> List[Word]:
        return [step.word for step in self.steps()]

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps())

    def __len__(self) -> int:
        return self.length

    def __str__(self):
        return "\n".join(map(str, self.steps()))
