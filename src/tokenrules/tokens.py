from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from .errors import NonstringTokenError, TokenStreamError

Splitter = Callable[[str], Iterable[str]]


def split_whitespace(text: str) -> List[str]:
    """Default tokenizer: split on runs of whitespace, never yielding empty tokens."""
    return text.split()


class TokenStream:
    """
    Read-only token sequence with a private cursor.

    Duplicates share the backing tuple and only copy the cursor, which is
    what makes trying an alternative and throwing it away cheap:

        >>> s = TokenStream("a b c")
        >>> t = s.duplicate()
        >>> t.next(), s.peek()
        ('a', 'a')

    Two kinds of "nothing" are distinguished: the empty token ``""`` is a
    real element of the sequence, while ``None`` means there is no token at
    that position (end of stream). ``next``/``peek`` step over empty tokens,
    ``next_token``/``peek_token``/``skip`` work on raw positions.
    """

    __slots__ = ("_tokens", "_pointer")

    def __init__(self, tokens, split: Optional[Splitter] = None):
        if isinstance(tokens, str):
            splitter = split if split is not None else split_whitespace
            buffer = tuple(splitter(tokens))
        elif isinstance(tokens, tuple):
            buffer = tokens
        elif isinstance(tokens, list):
            buffer = tuple(tokens)
        else:
            try:
                buffer = tuple(tokens)
            except TypeError:
                raise TokenStreamError(
                    f"cannot build a token stream from {type(tokens).__name__}"
                ) from None

        for index, token in enumerate(buffer):
            if not isinstance(token, str):
                raise NonstringTokenError(
                    f"{type(token).__name__} at position {index}"
                )

        self._tokens: Tuple[str, ...] = buffer
        self._pointer = 0

    @classmethod
    def _sharing(cls, buffer: Tuple[str, ...], pointer: int) -> "TokenStream":
        stream = cls.__new__(cls)
        stream._tokens = buffer
        stream._pointer = pointer
        return stream

    def duplicate(self) -> "TokenStream":
        """Independent cursor over the same backing tokens."""
        return self._sharing(self._tokens, self._pointer)

    __copy__ = duplicate

    @property
    def position(self) -> int:
        return self._pointer

    # ---------------- consuming ----------------
    def next(self) -> Optional[str]:
        """Next non-empty token, consuming every token looked at."""
        token = self.next_token()
        while token == "":
            token = self.next_token()
        return token

    def next_token(self) -> Optional[str]:
        """Raw token at the cursor; the cursor moves by one even past the end."""
        token = self._at(self._pointer)
        self._pointer += 1
        return token

    def skip(self, n: int = 1) -> "TokenStream":
        """Consume ``n`` raw tokens. Harmless once the stream is exhausted."""
        self._pointer += n
        return self

    def reset(self) -> "TokenStream":
        self._pointer = 0
        return self

    # ---------------- lookahead ----------------
    def peek(self, n: int = 0) -> Optional[str]:
        """
        The ``n``-th non-empty token ahead, without consuming anything.

        Empty tokens are counted over the raw window ``0..n`` only, so a run
        of empty tokens longer than that window is not fully stepped over.
        """
        offset = 0
        for p in range(n + 1):
            if self.peek_token(p) == "":
                offset += 1
        return self.peek_token(n + offset)

    def peek_token(self, n: int = 0) -> Optional[str]:
        if n < 0:
            raise ValueError("can't look back in the token stream")
        return self._at(self._pointer + n)

    def _at(self, index: int) -> Optional[str]:
        if index < len(self._tokens):
            return self._tokens[index]
        return None

    # ---------------- inspection ----------------
    def is_empty(self) -> bool:
        """True when every lookahead or consume call is bound to return None."""
        return self._pointer >= len(self._tokens)

    def remaining(self) -> List[str]:
        return list(self._tokens[self._pointer :])

    def __iter__(self) -> Iterator[str]:
        # whole backing sequence, the cursor plays no part
        return iter(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __repr__(self) -> str:
        return f"TokenStream({list(self._tokens)!r}, position={self._pointer})"
