from __future__ import annotations
from typing import Optional


class ColParseError(ValueError):
    """
    Base class for everything that can go wrong while reading a .col file.

    line:     raw text of the offending line (if the error is tied to one)
    position: 0-based index of that line among the non-comment lines
    lineno:   1-based line number of that line in the file
    """

    def __init__(self, message: str, line: Optional[str] = None, position: Optional[int] = None,
                 lineno: Optional[int] = None):
        if line is not None:
            where = f"line {lineno}" if lineno is not None else f"non-comment line {position}"
            message = f"{message} ({where}: {line!r})"
        super().__init__(message)
        self.line = line
        self.position = position
        self.lineno = lineno


class ColIOError(ColParseError):
    pass


class MissingProblemLineError(ColParseError):
    pass


class UnexpectedHeaderLineError(ColParseError):
    pass


class MalformedHeaderLineError(ColParseError):
    pass


class MalformedProblemLineError(ColParseError):
    pass


class MalformedEdgeLineError(ColParseError):
    pass


class VertexOutOfBoundsError(ColParseError):
    pass


class EdgeCountMismatchError(ColParseError):
    def __init__(self, declared: int, actual: int):
        super().__init__(f"Problem line declares {declared} edges but {actual} were read")
        self.declared = declared
        self.actual = actual
