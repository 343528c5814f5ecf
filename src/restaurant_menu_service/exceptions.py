"""Exceptions raised by the menu service.

Read paths report storage problems through empty results, so these are only
raised for configuration problems and rejected writes.
"""


class ConfigurationError(RuntimeError):
    """Raised when required configuration (e.g. the database URL) is missing."""


class InvalidCategoryError(ValueError):
    """Raised when a menu item names a category outside the fixed menu."""

    def __init__(self, category: str) -> None:
        super().__init__(f'Category "{category}" not found')
        self.category = category


class DuplicateUsernameError(ValueError):
    """Raised when creating a user whose username is already taken."""

    def __init__(self, username: str) -> None:
        super().__init__(f'Username "{username}" is already taken')
        self.username = username
