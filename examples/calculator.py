import operator
import re
from functools import reduce

from tokenrules import Grammar

OPERATORS = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
}


def tokenize(text: str):
    return re.findall(r"\d+|[-+*/()]", text)


def fold(chain):
    # [a, op, b, op, c] -> ((a op b) op c), keeps - and / left associative
    pairs = zip(chain[1::2], chain[2::2])
    return reduce(lambda acc, pair: OPERATORS[pair[0]](acc, pair[1]), pairs, chain[0])


def chain(node, name):
    # sum/product are right recursive: [x, op, [rest...]] or [x]
    if len(node) == 3:
        return [node[0], node[1]] + node[2]
    return [node[0]]


def factor(node, name):
    if len(node) == 3:  # ( expr )
        return node[1]
    if len(node) == 2:  # - factor
        return -node[1]
    return node[0]


class Calculator(Grammar):
    def __init__(self):
        super().__init__(split=tokenize)
        self.add_rule("calc", "expr", lambda node, name: node[0])
        self.add_rule("expr", "sum", lambda node, name: fold(node[0]))
        self.add_rule("sum", ["term /[+-]/ sum", "term"], chain)
        self.add_rule("term", "product", lambda node, name: fold(node[0]))
        self.add_rule("product", ["factor /[*/]/ product", "factor"], chain)
        self.add_rule("factor", ['"( expr ")', '"- factor', "number"], factor)
        self.add_rule("number", r"/\d+/", lambda node, name: int(node[0]))

    def evaluate(self, text: str):
        res = self.parse(text)
        if res is None:
            raise ValueError(f"not an arithmetic expression: {text!r}")
        matches, value = res
        if len(matches) != len(tokenize(text)):
            raise ValueError(f"trailing input after {' '.join(matches)!r}")
        return value


if __name__ == "__main__":
    calc = Calculator()
    tests = [
        "1 + 2 * 3",  # 7
        "-1 + 4",  # 3
        "2 * 3 + 4",  # 10
        "2 * (3 + 4)",  # 14
        "8 - 3 - 2",  # 3
        "24 / 4 / 3",  # 2.0
    ]
    for t in tests:
        print(t, "->", calc.evaluate(t))
