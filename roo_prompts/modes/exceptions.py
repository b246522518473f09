"""Errors raised by the mode system."""

from typing import Optional


class ModeError(Exception):
    """Base exception for mode errors."""
    pass


class ModeNotFoundError(ModeError):
    """No custom or built-in mode has the requested slug."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"No mode found for slug: {slug}")


class FileRestrictionError(ModeError):
    """
    An edit targets a path outside the mode's file restriction.

    This is not a plain denial: it carries the mode name, the pattern, its
    description and the offending path so the caller can explain exactly
    which rule was broken.
    """

    def __init__(
        self,
        mode: str,
        pattern: str,
        description: Optional[str],
        file_path: str,
    ):
        self.mode = mode
        self.pattern = pattern
        self.description = description
        self.file_path = file_path

        suffix = f" ({description})" if description else ""
        super().__init__(
            f"This mode ({mode}) can only edit files matching pattern: {pattern}{suffix}. "
            f"Got: {file_path}"
        )
