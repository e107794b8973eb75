from abc import ABC
from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

from cfg_derive.helpers import is_nonterminal, tokenize


@dataclass(frozen=True)
class Symbol(ABC):
    """
    A grammar symbol, i.e., a :class:`~cfg_derive.symbols.Terminal` or a
    :class:`~cfg_derive.symbols.Variable`.

    Abstract base class.
    """

    value: str

    def is_terminal(self) -> bool:
        match self:
            case Terminal():
                return True
            case _:
                return False

    @staticmethod
    def from_token(token: str) -> "Symbol":
        """
        Creates a symbol from a grammar token.

        >>> Symbol.from_token("<A>")
        Variable(value='<A>')

        >>> Symbol.from_token("a")
        Terminal(value='a')
        """

        return Variable(token) if is_nonterminal(token) else Terminal(token)


@dataclass(frozen=True)
class Terminal(Symbol):
    """
    A terminal symbol.

    >>> print(Terminal("a"))
    'a'

    >>> Terminal("a").is_terminal()
    True

    >>> Terminal("a") == Variable("a")
    False
    """

    def __str__(self):
        return repr(self.value)


@dataclass(frozen=True)
class Variable(Symbol):
    """
    A variable (nonterminal) symbol.

    >>> print(Variable("<A>"))
    <A>

    >>> Variable("<A>").is_terminal()
    False
    """

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Word:
    """
    An immutable sequence of grammar symbols.

    >>> word = Word.from_string("a<B>c")
    >>> len(word)
    3

    >>> word[1]
    Variable(value='<B>')

    >>> print(word)
    a<B>c

    Replacing a symbol yields a new word and leaves the original unchanged:

    >>> print(word.replace(1, Word.from_string("<C><D>")))
    a<C><D>c

    >>> print(word)
    a<B>c
    """

    symbols: Tuple[Symbol, ...] = ()

    @staticmethod
    def of(*symbols: Symbol) -> "Word":
        return Word(tuple(symbols))

    @staticmethod
    def from_string(text: str) -> "Word":
        return Word(tuple(map(Symbol.from_token, tokenize(text))))

    @staticmethod
    def from_tokens(tokens: Sequence[str]) -> "Word":
        """
        Creates a word with one symbol per token.

        >>> len(Word.from_tokens(["if", "<cond>"]))
        2
        """

        return Word(tuple(map(Symbol.from_token, tokens)))

    def replace(self, index: int, expansion: "Word") -> "Word":
        """
        Substitutes the symbol at :code:`index` by the symbols of :code:`expansion`.

        >>> print(Word.from_string("<A>").replace(0, Word()))
        <BLANKLINE>

        >>> Word.from_string("ab").replace(2, Word())
        Traceback (most recent call last):
        ...
        IndexError: Index 2 out of range for word of length 2

        :param index: The position of the symbol to replace.
        :param expansion: The replacement.
        :return: The new word.
        """

        if not 0 <= index < len(self.symbols):
            raise IndexError(
                f"Index {index} out of range for word of length {len(self.symbols)}"
            )

        return Word(
            self.symbols[:index] + expansion.symbols + self.symbols[index + 1 :]
        )

    def is_terminal(self) -> bool:
        return all(symbol.is_terminal() for symbol in self.symbols)

    def __len__(self) -> int:
        return len(self.symbols)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self.symbols)

    def __getitem__(self, item: int) -> Symbol:
        return self.symbols[item]

    def __str__(self):
        return "".join(symbol.value for symbol in self.symbols)
