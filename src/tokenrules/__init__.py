from .core import Grammar
from .elements import (
    Literal,
    Pattern,
    RuleReference,
    classify,
    is_literal,
    is_pattern,
    matches_literal,
    matches_pattern,
)
from .errors import (
    EmptyRulesetError,
    NestingDepthError,
    NonstringTokenError,
    ParseError,
    RulesetError,
    SealedRulesetError,
    TokenError,
    TokenStreamError,
    UnknownRuleError,
)
from .nodes import Node, ResultNode, node_factory
from .rule import Rule
from .tokens import TokenStream, split_whitespace

__version__ = "0.1.0"
