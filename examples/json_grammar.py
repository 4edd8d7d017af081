# json_grammar.py
import json
import re

from tokenrules import Grammar

TOKEN_RE = re.compile(
    r'"(?:[^"\\]|\\.)*"'  # string, quotes kept
    r"|-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?"  # number
    r"|[{}\[\]:,]"
    r"|true|false|null"
)


def tokenize(text: str):
    return TOKEN_RE.findall(text)


def decode(node, name):
    # strings, numbers and constants are single JSON tokens
    return json.loads(node[0])


def first(node, name):
    return node[0]


def listing(node, name):
    # [item, ",", rest] or [item]
    if len(node) == 3:
        return [node[0]] + node[2]
    return [node[0]]


class JSONGrammar(Grammar):
    def __init__(self):
        super().__init__(split=tokenize)
        # value: object | array | string | number | constant
        self.add_rule("value", ["object", "array", "string", "number", "constant"], first)
        self.add_rule("string", r'/"(?:[^"\\]|\\.)*"/', decode)
        self.add_rule(
            "number", r"/-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?/", decode
        )
        self.add_rule("constant", ['"true', '"false', '"null'], decode)

        # object: {} | { pair (',' pair)* }
        self.add_rule(
            "object",
            ['"{ "}', '"{ members "}'],
            lambda node, name: dict(node[1]) if len(node) == 3 else {},
        )
        self.add_rule("members", ['pair ", members', "pair"], listing)
        self.add_rule("pair", 'string ": value', lambda node, name: (node[0], node[2]))

        # array: [] | [ value (',' value)* ]
        self.add_rule(
            "array",
            ['"[ "]', '"[ elements "]'],
            lambda node, name: node[1] if len(node) == 3 else [],
        )
        self.add_rule("elements", ['value ", elements', "value"], listing)

    def loads(self, text: str):
        res = self.parse(text)
        if res is None:
            raise ValueError(f"not a JSON document: {text!r}")
        matches, value = res
        if len(matches) != len(tokenize(text)):
            raise ValueError(f"trailing input after {' '.join(matches)!r}")
        return value


if __name__ == "__main__":
    jg = JSONGrammar()

    tests = [
        "null",
        "true",
        '"hello world"',
        "-12.34e+2",
        "[]",
        "[1, 2, 3]",
        '[ "a", null, true, 3.14 ]',
        "{}",
        '{"a": 1, "b": [true, false], "c": {"x": "y"}}',
        """
        {
          "name": "Alice",
          "age": 30,
          "tags": ["dev", "py"],
          "prefs": {"dark": true}
        }
        """,
    ]

    for t in tests:
        print("INPUT:", t.strip())
        print("PARSED:", jg.loads(t))
        print("-" * 40)
