from abc import abstractmethod
from typing import List, Dict, Iterator, Optional, Protocol, Sequence

NonterminalType = str
Grammar = Dict[NonterminalType, List[str | List[str]]]
CanonicalGrammar = Dict[NonterminalType, List[List[str]]]


class ParseTree(Protocol):
    """
    A parse tree is a nested structure containing node labels and children.
    For example:

    >>> tree: ParseTree = ("<start>", [("<A>", [("a", [])]), ("<B>", [("b", [])])])

    is a parse tree.

    Leaves are *closed*: their children element is an empty list. The only leaf
    labeled with a nonterminal is the root of an empty parse, i.e., the tree
    :code:`("<start>", [])` witnessing the derivation of the empty word.
    """

    @abstractmethod
    def __iter__(self) -> Iterator[Optional[str | Sequence["ParseTree"]]]:
        ...

    @abstractmethod
    def __getitem__(self, item: int) -> Optional[str | Sequence["ParseTree"]]:
        ...
