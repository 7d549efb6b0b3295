"""Collection of errors, warnings and messages produced during a build."""

from __future__ import annotations

from typing import Optional, TextIO


class BuildLog:
    """Accumulates diagnostics and reports them in one summary."""

    def __init__(self) -> None:
        self._errors: list[str] = []
        self._warnings: list[str] = []
        self._messages: list[str] = []

    @property
    def errors(self) -> tuple[str, ...]:
        return tuple(self._errors)

    @property
    def warnings(self) -> tuple[str, ...]:
        return tuple(self._warnings)

    @property
    def messages(self) -> tuple[str, ...]:
        return tuple(self._messages)

    def log_error(self, text: str, statement_index: Optional[int] = None) -> None:
        """Record an error, tied to a statement when an index is given."""
        if statement_index is None:
            self._errors.append(f"Error: {text}")
        else:
            self._errors.append(f"Error in statement {statement_index}: {text}")

    def log_warning(self, text: str, statement_index: Optional[int] = None) -> None:
        """Record a warning, tied to a statement when an index is given."""
        if statement_index is None:
            self._warnings.append(f"Warning: {text}")
        else:
            self._warnings.append(f"Warning in statement {statement_index}: {text}")

    def log_message(self, text: str, statement_index: Optional[int] = None) -> None:
        """Record an informational message."""
        if statement_index is None:
            self._messages.append(text)
        else:
            self._messages.append(f"Message from statement {statement_index}: {text}")

    def is_successful(self) -> bool:
        """A build is successful when no errors were logged."""
        return not self._errors

    def dump(self, stream: TextIO) -> None:
        """Write the summary of the build to ``stream``."""
        if not self.is_successful():
            stream.write(
                f"Compilation halted due to the following {len(self._errors)} errors: \n"
            )
            for error in self._errors:
                stream.write(f"{error}\n")
            return

        stream.write(
            f"Compilation finished with no errors and {len(self._warnings)} warnings\n"
        )
        if self._warnings:
            stream.write("Warnings:\n")
            for warning in self._warnings:
                stream.write(f"{warning}\n")
        for message in self._messages:
            stream.write(f"{message}\n")