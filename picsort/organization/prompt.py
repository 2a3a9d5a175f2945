"""
Operator confirmation of event names.

Anything with a ``confirm(suggestion) -> str`` method can stand in for the
console prompt, which is how tests drive the pipeline.
"""
import logging
import os
from typing import Callable, Optional


def is_valid_event_name(name: str) -> bool:
    """An event name becomes one folder, so it cannot contain separators."""
    if name in ('.', '..'):
        return False
    separators = {os.sep, '/'}
    if os.altsep:
        separators.add(os.altsep)
    return not any(sep in name for sep in separators)


class ConsolePrompt:
    def __init__(self, input_func: Optional[Callable[[str], str]] = None):
        self.input_func = input_func or input

    def confirm(self, suggestion: str) -> str:
        """
        Shows the suggestion and reads a line. Blank input (or EOF) keeps
        the suggestion; anything else replaces it.
        """
        while True:
            try:
                answer = self.input_func(f"{suggestion}> ").strip()
            except EOFError:
                logging.debug("No more input, accepting suggestion.")
                return suggestion

            if not answer:
                return suggestion
            if is_valid_event_name(answer):
                return answer
            logging.warning(f"'{answer}' cannot be used as a folder name, try again.")


class AutoAccept:
    """Accepts every suggestion (non-interactive runs)."""

    def confirm(self, suggestion: str) -> str:
        return suggestion
