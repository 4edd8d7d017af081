import warnings
from typing import Any, Callable, Iterator, List, Optional, Sequence, Union

from .errors import RulesetError

Action = Callable[[Any, str], Any]
RuleSpec = Union[str, Sequence[str]]


def identity(node, name):
    return node


class Rule:
    """
    A named rule: ordered alternatives ("options") plus the action applied
    to the node built by whichever option matches first.

    An option is a whitespace separated string of elements; the empty
    string is the empty option and always succeeds.
    """

    def __init__(
        self,
        name: str,
        spec: RuleSpec,
        action: Optional[Action] = None,
        stacklevel: int = 2,
    ):
        if not isinstance(name, str) or not name:
            raise RulesetError(f"rule names must be non-empty strings, got {name!r}")
        self._name = name
        # stacklevel as for warnings.warn, counted from the caller of Rule()
        self._set_spec(spec, stacklevel + 1)
        self.action = action

    @property
    def name(self) -> str:
        return self._name

    @property
    def spec(self) -> List[str]:
        return list(self._spec)

    @spec.setter
    def spec(self, spec: RuleSpec):
        self._set_spec(spec, 3)

    def _set_spec(self, spec: RuleSpec, stacklevel: int):
        if isinstance(spec, str):
            options = [spec]
        elif isinstance(spec, (list, tuple)):
            if not all(isinstance(option, str) for option in spec):
                raise RulesetError(
                    f"rule '{self._name}': a list of options must contain only strings"
                )
            options = list(spec)
        else:
            raise RulesetError(
                f"rule '{self._name}': expected a string or a list of strings, "
                f"got {type(spec).__name__}"
            )

        self._spec = options
        self._options = [option.split() for option in options]

        # the empty option never fails, anything declared after it is dead
        for index, elements in enumerate(self._options[:-1]):
            if not elements:
                warnings.warn(
                    f"rule '{self._name}': empty option #{index} shadows the "
                    f"{len(self._options) - index - 1} option(s) after it",
                    UserWarning,
                    stacklevel=stacklevel,
                )
                break

    @property
    def options(self) -> List[List[str]]:
        return [list(elements) for elements in self._options]

    @property
    def action(self) -> Action:
        return self._action

    @action.setter
    def action(self, action: Optional[Action]):
        if action is None:
            self._action = identity
        elif callable(action):
            self._action = action
        else:
            raise RulesetError(f"rule '{self._name}': actions must be callable")

    def allows_empty(self) -> bool:
        return any(not elements for elements in self._options)

    def trigger(self, node):
        return self._action(node, self._name)

    def __iter__(self) -> Iterator[List[str]]:
        return iter(self._options)

    def __repr__(self) -> str:
        return f"Rule({self._name!r}, {self._spec!r})"
