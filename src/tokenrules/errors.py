class ParseError(Exception):
    """Base class for every error raised by tokenrules."""

    message = "Parse error"

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__(f"{self.message}: {detail}" if detail else self.message)


# ---------------- ruleset definition ----------------
class RulesetError(ParseError):
    message = "Problem with ruleset definition"


class EmptyRulesetError(RulesetError):
    message = "Problem with ruleset definition: empty ruleset not allowed"


class UnknownRuleError(RulesetError):
    message = "Problem with ruleset definition: reference to an undefined rule"

    def __init__(self, name: str):
        self.name = name
        super().__init__(repr(name))


class SealedRulesetError(RulesetError):
    message = "Problem with ruleset definition: rules cannot change while a parse is running"


# ---------------- tokens ----------------
class TokenError(ParseError):
    message = "Malformed token or grammar element"


class TokenStreamError(TokenError):
    message = "Source can't be turned into a token sequence"


class NonstringTokenError(TokenStreamError):
    message = "Token not a string"


class NestingDepthError(ParseError):
    message = "Grammar nesting exceeds the interpreter recursion limit"
