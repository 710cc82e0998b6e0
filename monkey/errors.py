from typing import List


class MonkeyError(Exception):
    """Base class for host-level failures of the Monkey toolchain.

    Language-level failures never raise; they are :class:`monkey.object.Error`
    values returned by the evaluator.
    """


class ParseError(MonkeyError):
    """Raised by the convenience runners when a program does not parse."""
    def __init__(self, errors: List[str]):
        lines = '\n'.join(f"\t{msg}" for msg in errors)
        super().__init__(f"parser errors:\n{lines}")
        self.errors = list(errors)
