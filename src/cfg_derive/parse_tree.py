import os.path
import pathlib
from dataclasses import dataclass
from typing import List, Tuple

import graphviz

from cfg_derive.symbols import Symbol, Terminal, Variable, Word
from cfg_derive.type_defs import ParseTree


@dataclass(frozen=True)
class ParseTreeNode:
    """
    A node of a parse tree, labeled with a grammar symbol. Nodes have no children
    (terminal leaves and empty parses), one child (unary productions), or two
    children (binary productions).

    In the documentation of this class, we use the tree for the word :code:`ab` in
    the grammar :code:`<start> -> <A><B>, <A> -> a, <B> -> b`:

    >>> tree = ParseTreeNode(
    ...     Variable("<start>"),
    ...     (
    ...         ParseTreeNode(Variable("<A>"), (ParseTreeNode(Terminal("a")),)),
    ...         ParseTreeNode(Variable("<B>"), (ParseTreeNode(Terminal("b")),)),
    ...     ),
    ... )

    >>> print(tree)
    <start>
    ├── <A>
    │   └── "a"
    └── <B>
        └── "b"
    """

    symbol: Symbol
    children: Tuple["ParseTreeNode", ...] = ()

    @staticmethod
    def empty_parse_tree(start_variable: Variable) -> "ParseTreeNode":
        """
        Returns the tree witnessing the derivation of the empty word.

        >>> ParseTreeNode.empty_parse_tree(Variable("<start>")).to_parse_tree()
        ('<start>', [])
        """

        return ParseTreeNode(start_variable)

    def is_leaf(self) -> bool:
        return not self.children

    def leaves(self) -> List["ParseTreeNode"]:
        """
        The leaves of this tree from left to right. The empty parse has no leaves.

        >>> ParseTreeNode.empty_parse_tree(Variable("<start>")).leaves()
        []
        """

        if self.is_leaf():
            return [self] if self.symbol.is_terminal() else []

        return [leaf for child in self.children for leaf in child.leaves()]

    def yield_word(self) -> Word:
        return Word(tuple(leaf.symbol for leaf in self.leaves()))

    def depth(self) -> int:
        if self.is_leaf():
            return 0

        return 1 + max(child.depth() for child in self.children)

    def to_parse_tree(self) -> ParseTree:
        """
        Converts this node into the nested tuple format of
        :class:`~cfg_derive.type_defs.ParseTree`.

        >>> ParseTreeNode(
        ...     Variable("<A>"), (ParseTreeNode(Terminal("a")),)
        ... ).to_parse_tree()
        ('<A>', [('a', [])])
        """

        return self.symbol.value, [child.to_parse_tree() for child in self.children]

    def to_str_repr(self) -> str:
        """
        This method converts a parse tree to a textual representation capturing the
        whole structure.

        >>> print(ParseTreeNode(
        ...     Variable("<A>"),
        ...     (
        ...         ParseTreeNode(Variable("<B>"), (ParseTreeNode(Terminal("b")),)),
        ...         ParseTreeNode(Terminal("c")),
        ...     ),
        ... ).to_str_repr())
        <A>
        ├── <B>
        │   └── "b"
        └── "c"

        :return: A multi-line representation of the tree.
        """

        match self.symbol:
            case Terminal(value):
                result = f'"{value}"'
            case _:
                result = self.symbol.value

        for child_idx, child in enumerate(self.children):
            last_child = child_idx == len(self.children) - 1
            for line_idx, line in enumerate(child.to_str_repr().split("\n")):
                if not line_idx and not last_child:
                    result += "\n" + "├── " + line
                elif not line_idx:
                    result += "\n" + "└── " + line
                elif last_child:
                    result += "\n" + "    " + line
                else:
                    result += "\n" + "│   " + line

        return result

    def to_digraph(self) -> graphviz.Digraph:
        """
        Converts this parse tree into a :class:`graphviz.Digraph`. Vertices are
        numbered in pre-order; edges are labeled with the child position.

        :return: The graph of this parse tree.
        """

        graph = graphviz.Digraph("G")

        def add_vertex(node: ParseTreeNode, vertex: int) -> int:
            graph.node(str(vertex), label=graphviz.escape(str(node.symbol)))

            next_vertex = vertex + 1
            for child_idx, child in enumerate(node.children):
                child_vertex = next_vertex
                next_vertex = add_vertex(child, child_vertex)
                graph.edge(str(vertex), str(child_vertex), label=str(child_idx))

            return next_vertex

        add_vertex(self, 0)
        return graph

    def to_dot(self) -> str:
        """
        This method returns a GraphViz DOT representation of this parse tree.

        >>> print(ParseTreeNode(
        ...     Variable("<A>"), (ParseTreeNode(Terminal("a")),)
        ... ).to_dot())  # doctest: +NORMALIZE_WHITESPACE
        digraph G {
            0 [label="<A>"]
            1 [label="'a'"]
            0 -> 1 [label=0]
        }

        :return: A GraphViz DOT representation of this parse tree.
        """

        return self.to_digraph().source

    def save_to_dot(self, file_name: str) -> None:
        """
        Saves the tree as a DOT digraph that can be, e.g., exported to a PNG file
        using :code:`dot -Tpng dot_file_name.dot -o out.png`. If the given file name
        does not end in :code:`.dot`, this ending is appended to the file name.

        >>> import tempfile
        >>> tree = ParseTreeNode(Variable("<A>"), (ParseTreeNode(Terminal("a")),))
        >>> with tempfile.TemporaryDirectory() as tmp_dir:
        ...     tree.save_to_dot(os.path.join(tmp_dir, "tree"))
        ...     print(pathlib.Path(tmp_dir, "tree.dot").read_text() == tree.to_dot())
        True

        :param file_name: The path to the file into which the exported DOT code will
            be stored. A :code:`.dot` ending is appended if not already present.
        :return: Nothing. Stores a file as side effect.
        """

        assert not os.path.isdir(file_name)

        if not file_name.endswith(".dot"):
            file_name += ".dot"

        pathlib.Path(file_name).write_text(self.to_dot())

    def __str__(self):
        return self.to_str_repr()
