"""API key validation for the admin menu endpoints."""

import hmac


class APIKeyValidator:
    """Checks admin API keys against the configured set of keys."""

    def __init__(self, api_keys: list[str]) -> None:
        """Initialize validator with list of valid API keys.

        Args:
            api_keys: List of valid API key strings

        Raises:
            ValueError: If api_keys list is empty
        """
        if not api_keys:
            raise ValueError("At least one API key must be provided")

        self.api_keys = tuple(api_keys)

    def validate(self, api_key: str) -> bool:
        """Validate an API key.

        Every configured key is compared in constant time.

        Args:
            api_key: The API key to validate

        Returns:
            bool: True if valid, False otherwise
        """
        matched = False
        for key in self.api_keys:
            if hmac.compare_digest(key.encode(), api_key.encode()):
                matched = True
        return matched
