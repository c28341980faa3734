"""Character source: one-character lookahead over a text stream."""

from __future__ import annotations

from typing import TextIO

from beginlang.tokens import EOF_CHAR, CharClass, Position, classify, is_space


class CharacterSource:
    """Expose the current raw character, its class, and its position.

    Nothing is read until the first call to advance(); before that the
    source reports end of input. Reaching the end of the stream is not an
    error: the current character becomes EOF_CHAR and stays there.
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self.char = EOF_CHAR
        self.char_class = CharClass.EOF
        self.position = Position(1, 1, 0)
        # Position the next character read will have
        self._line = 1
        self._col = 1
        self._offset = 0

    def advance(self) -> str:
        """Read and classify the next character."""
        self.position = Position(self._line, self._col, self._offset)
        ch = self._stream.read(1)
        self.char = ch
        self.char_class = classify(ch)
        if ch == EOF_CHAR:
            return ch

        self._offset += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def skip_whitespace(self) -> None:
        while is_space(self.char):
            self.advance()

    @property
    def at_eof(self) -> bool:
        return self.char_class is CharClass.EOF
