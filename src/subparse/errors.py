"""Exceptions raised while parsing subtitle streams."""

from __future__ import annotations

from typing import Dict, Optional


class FormatError(ValueError):
    """Base class for every subtitle parsing failure."""


class InvalidStreamError(FormatError):
    """Raised when a stream is not readable or not seekable."""


class StructuralParseError(FormatError):
    """Raised when the overall layout of a subtitle file is unusable."""


class TimecodeError(FormatError):
    """Raised when a required timecode cannot be resolved for a block."""


class EmptyResultError(FormatError):
    """Raised when a parser completes without producing any cue."""


class AllFormatsFailedError(FormatError):
    """Raised by the dispatcher when no candidate parser produced cues.

    ``failures`` maps each attempted format name to the error it reported,
    or ``None`` when the parser returned an empty list.
    """

    def __init__(
        self,
        preview: str,
        failures: Optional[Dict[str, Optional[FormatError]]] = None,
    ) -> None:
        self.preview = preview
        self.failures = dict(failures or {})
        super().__init__(
            "All the subtitle parsers failed to parse the following stream: "
            f"Parsing of subtitle stream failed. Beginning of sub stream:\n{preview}"
        )
