import copy
import logging
import sys
import threading
from collections.abc import Mapping
from contextlib import contextmanager
from typing import Any, Callable, Dict, List, Optional, Tuple

from . import config
from .elements import Literal, Pattern, classify
from .errors import (
    EmptyRulesetError,
    NestingDepthError,
    RulesetError,
    SealedRulesetError,
    UnknownRuleError,
)
from .nodes import ResultNode
from .rule import Action, Rule, RuleSpec
from .tokens import Splitter, TokenStream

logger = logging.getLogger(__name__)

Match = Tuple[List[str], Any]

# interpreter frames allowed per input token while a parse runs
FRAMES_PER_TOKEN = 8

_limit_lock = threading.Lock()
_limit_users = 0
_base_limit = 0


@contextmanager
def _recursion_budget(frames: int):
    """Raise the interpreter recursion limit by ``frames`` until the last parse ends."""
    global _limit_users, _base_limit
    with _limit_lock:
        if not _limit_users:
            _base_limit = sys.getrecursionlimit()
        _limit_users += 1
        sys.setrecursionlimit(max(sys.getrecursionlimit(), _base_limit + frames))
    try:
        yield
    finally:
        with _limit_lock:
            _limit_users -= 1
            if not _limit_users:
                sys.setrecursionlimit(_base_limit)


# ---------------- Grammar engine ----------------
class Grammar:
    """
    Backtracking recursive-descent matcher over rules defined at runtime.

        >>> g = Grammar({"greeting": '"hello name', "name": "/[a-z]+/"})
        >>> g.parse("hello world")
        (['hello', 'world'], ['hello', ['world']])

    The first rule ever declared is the entry point. Rule references are
    resolved by name only when the matcher reaches them, so rules may refer
    to rules declared later, to themselves, or to each other.

    ``parse`` returns ``(matches, result)`` where ``matches`` is the flat
    list of consumed tokens and ``result`` the entry rule's action applied
    to its node, or ``None`` when the input does not fit the grammar.
    """

    def __init__(
        self,
        rules: Optional[Mapping[str, RuleSpec]] = None,
        node_factory: Callable[[], Any] = list,
        default_action: Optional[Action] = None,
        split: Optional[Splitter] = None,
    ):
        if rules is None:
            rules = {}
        if not isinstance(rules, Mapping):
            raise TypeError(f"cannot form a grammar from a {type(rules).__name__}")
        if not callable(node_factory):
            raise TypeError("node_factory must be callable")
        if default_action is not None and not callable(default_action):
            raise RulesetError("default_action must be callable")

        self._node_factory = node_factory
        self._default_action = default_action
        self._split = split

        # name -> Rule; dict order is declaration order, replacing keeps the slot
        self._rules: Dict[str, Rule] = {}
        for name, spec in rules.items():
            self._rules[name] = Rule(name, spec, default_action, stacklevel=3)

        self._lock = threading.Lock()
        self._active_parses = 0

    # ---------------- rule set ----------------
    def add_rule(self, name: str, spec: RuleSpec, action: Optional[Action] = None):
        """Declare ``name``, or replace its options and action in place."""
        if action is None:
            action = self._default_action
        with self._lock:
            if self._active_parses:
                raise SealedRulesetError(f"can't change rule '{name}'")
            # built before it replaces anything; an existing key keeps its slot
            self._rules[name] = Rule(name, spec, action, stacklevel=3)

    def rules(self) -> Dict[str, List[str]]:
        return copy.deepcopy({name: r.spec for name, r in self._rules.items()})

    def rule_names(self) -> List[str]:
        return list(self._rules)

    def __contains__(self, name) -> bool:
        return name in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def _lookup(self, name: str) -> Rule:
        try:
            return self._rules[name]
        except KeyError:
            raise UnknownRuleError(name) from None

    # ---------------- entry points ----------------
    def parse(self, source) -> Optional[Match]:
        if not self._rules:
            raise EmptyRulesetError()
        entry = next(iter(self._rules.values()))
        return self._run(entry, source)

    def test(self, name: str, source) -> Optional[Match]:
        """Match ``source`` against ``name`` instead of the entry rule."""
        return self._run(self._lookup(name), source)

    def _stream(self, source) -> TokenStream:
        if isinstance(source, TokenStream):
            # the caller's cursor is never moved
            return source.duplicate()
        return TokenStream(source, split=self._split)

    @contextmanager
    def _sealed(self):
        with self._lock:
            self._active_parses += 1
        try:
            yield
        finally:
            with self._lock:
                self._active_parses -= 1

    def _run(self, rule: Rule, source) -> Optional[Match]:
        stream = self._stream(source)
        with self._sealed(), _recursion_budget(FRAMES_PER_TOKEN * len(stream)):
            try:
                return self._match(rule, stream)
            except RecursionError as e:
                raise NestingDepthError(
                    f"while matching rule '{rule.name}' at token {stream.position}"
                ) from e

    def _new_node(self):
        node = self._node_factory()
        if not isinstance(node, ResultNode):
            raise TypeError(
                f"node_factory produced a {type(node).__name__}, "
                "which lacks append() or iteration"
            )
        return node

    # ---------------- matcher ----------------
    def _match(self, rule: Rule, stream: TokenStream) -> Optional[Match]:
        """
        Try the options of ``rule`` in order against ``stream``.

        ``stream`` itself is not advanced; the caller moves its own cursor by
        the length of the returned match list.
        """
        for option in rule:
            if not option:
                # vacuous success; what is left in the stream is not checked
                if config.TRACE_LOGGING:
                    logger.debug("rule: %s; empty option", rule.name)
                return [], rule.trigger(self._new_node())

            tokens = stream.duplicate()
            node = self._new_node()
            matches: List[str] = []

            for element in option:
                token = tokens.peek()
                if config.TRACE_LOGGING:
                    logger.debug(
                        "rule: %s; element: %s; token: %r", rule.name, element, token
                    )
                kind = classify(element)

                if isinstance(kind, Literal):
                    if not kind.matches(token):
                        break
                    matches.append(token)
                    node.append(token)
                    tokens.next()

                elif isinstance(kind, Pattern):
                    if not kind.matches(token):
                        break
                    if token is not None:
                        matches.append(token)
                        node.append(token)
                    tokens.next()

                else:
                    sub = self._match(self._lookup(kind.name), tokens)
                    if sub is None:
                        break
                    sub_matches, sub_result = sub
                    matches.extend(sub_matches)
                    node.append(sub_result)
                    # never stand still after a sub-rule, even an empty one
                    tokens.skip(max(len(sub_matches), 1))
            else:
                if config.TRACE_LOGGING:
                    logger.debug("matches for rule %s: %r", rule.name, matches)
                return matches, rule.trigger(node)

        if config.TRACE_LOGGING:
            logger.debug("rule: %s; no option matched", rule.name)
        return None
