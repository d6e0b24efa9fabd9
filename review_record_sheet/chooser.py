"""Numbered "list and pick one" prompt shared by every selection step."""

import logging
import re
import sys
from typing import Protocol, Sequence, TextIO, TypeVar

from .exceptions import EmptyListError, ParseError, RangeError

INTEGER_RE = re.compile(r'[+-]?\d+', re.ASCII)


class Named(Protocol):
    """Anything that can be listed by name."""

    @property
    def display_name(self) -> str:
        ...


T = TypeVar('T', bound=Named)


class Chooser:
    """Lists items with 1-based numbers and reads the operator's pick."""

    def __init__(self, input_stream: TextIO = None, output_stream: TextIO = None):
        """Initialize the chooser.

        Args:
            input_stream: Where answers are read from (defaults to stdin)
            output_stream: Where the list and prompt are written (defaults to stdout)
        """
        self.input_stream = input_stream or sys.stdin
        self.output_stream = output_stream or sys.stdout

    def choose(self, items: Sequence[Named], prompt: str = 'Select an item') -> int:
        """Display the items, read one line and return the chosen 0-based index.

        Args:
            items: Ordered items to choose from
            prompt: Text shown before reading the answer

        Returns:
            0-based index into items

        Raises:
            EmptyListError: If items is empty (nothing is displayed or read)
            ParseError: If the answer is not an integer or input is exhausted
            RangeError: If the answer is not between 1 and len(items)
        """
        if not items:
            raise EmptyListError("no items to choose from")

        for position, item in enumerate(items, start=1):
            print(f"{position}. {item.display_name}", file=self.output_stream)
        print(f"{prompt} (enter number): ", end='', file=self.output_stream, flush=True)

        line = self.input_stream.readline()
        if not line:
            raise ParseError("no input received")

        answer = line.strip()
        # Plain ASCII digits only; int() would also take "1_0" and full-width digits
        if not INTEGER_RE.fullmatch(answer):
            raise ParseError(f"invalid input: {answer!r} is not a number")
        number = int(answer)

        if number < 1 or number > len(items):
            raise RangeError(f"invalid number: {number} (expected 1-{len(items)})")

        logging.debug(f"Operator chose item {number} of {len(items)}")
        return number - 1

    def select(self, items: Sequence[T], prompt: str = 'Select an item') -> T:
        """Same as choose(), but return the chosen item itself."""
        return items[self.choose(items, prompt)]
