from cfg_derive.config import ParserConfig
from cfg_derive.derivation import Derivation, InitialStep, RewriteStep
from cfg_derive.grammar import (
    ContextFreeGrammar,
    NullableStartInExpansionException,
    Rule,
    UnsupportedGrammarException,
    UnsupportedProductionArityException,
    validate_normal_form,
)
from cfg_derive.parse_tree import ParseTreeNode
from cfg_derive.parser import (
    DerivationLimitExceededException,
    Parser,
    build_parse_tree,
    generate_derivations,
    generate_parse_tree,
    is_in_language,
)
from cfg_derive.symbols import Symbol, Terminal, Variable, Word
