from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class ParserConfig:
    """
    Settings of a :class:`~cfg_derive.parser.Parser`.

    >>> config = ParserConfig()
    >>> config.extra_steps, config.validate_grammar, config.max_derivations
    (0, True, None)

    >>> ParserConfig().with_extra_steps(2).extra_steps
    2

    :param extra_steps: Number of rewrite steps added to the default bound of
        :code:`2 * len(word) - 1`. Grammars with unit productions (rules rewriting a
        variable into a single variable) need a larger bound.
    :param validate_grammar: Whether to check on construction that all productions
        have one or two symbols (and only the start variable an empty one).
    :param max_derivations: If set, the search fails with a
        :class:`~cfg_derive.parser.DerivationLimitExceededException` once more
        derivations than this have been generated.
    """

    extra_steps: int = 0
    validate_grammar: bool = True
    max_derivations: Optional[int] = None

    def __post_init__(self):
        assert self.extra_steps >= 0
        assert self.max_derivations is None or self.max_derivations > 0

    def with_extra_steps(self, extra_steps: int) -> "ParserConfig":
        return replace(self, extra_steps=extra_steps)

    def with_max_derivations(self, max_derivations: Optional[int]) -> "ParserConfig":
        return replace(self, max_derivations=max_derivations)

    def without_validation(self) -> "ParserConfig":
        return replace(self, validate_grammar=False)
