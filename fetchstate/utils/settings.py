"""Settings resolution utilities for state holder configuration."""

from __future__ import annotations

import re

from fetchstate.utils.types import DEFAULT_PAGE_SIZE, ContinuationGuard


def _snake_case(name: str) -> str:
    """Convert a holder class name to a snake_case label.

    Args:
        name: Class name, e.g. ``UserListHolder``

    Returns:
        Label with a trailing ``_holder`` removed, e.g. ``user_list``
    """
    label = re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()
    if label.endswith("_holder"):
        label = label[: -len("_holder")]
    return label


class SettingsResolver:
    """Resolves holder settings from an inner Settings class."""

    @staticmethod
    def get_name(cls: type) -> str:
        """Get the holder name used in logs and trace events.

        Args:
            cls: Holder class

        Returns:
            Configured name or a snake_case label derived from the class name
        """
        settings = getattr(cls, "Settings", None)
        if settings and hasattr(settings, "name"):
            return settings.name
        return _snake_case(cls.__name__)

    @staticmethod
    def get_page_size(cls: type) -> int:
        """Get the page size a paged holder starts with.

        Args:
            cls: Holder class

        Returns:
            Page size

        Raises:
            ValueError: If the configured size is below 1
        """
        settings = getattr(cls, "Settings", None)
        if settings and hasattr(settings, "page_size"):
            size = int(settings.page_size)
            if size < 1:
                raise ValueError("page_size must be >= 1")
            return size
        return DEFAULT_PAGE_SIZE

    @staticmethod
    def get_guard(cls: type) -> ContinuationGuard | None:
        """Get the continuation guard override, if any.

        Args:
            cls: Holder class

        Returns:
            Guard callable or None for the default guard
        """
        settings = getattr(cls, "Settings", None)
        if settings and hasattr(settings, "guard"):
            return settings.guard
        return None

    @staticmethod
    def get_keep_history(cls: type) -> bool:
        """Whether emitted snapshots should be recorded on the holder."""
        settings = getattr(cls, "Settings", None)
        if settings and hasattr(settings, "keep_history"):
            return bool(settings.keep_history)
        return False
