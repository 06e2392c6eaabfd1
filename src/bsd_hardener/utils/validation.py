"""Input validation utilities."""

import pwd
from typing import List


class Validator:
    """Validate operator input and account state."""

    @staticmethod
    def validate_username(username: str) -> List[str]:
        """Validate username format.

        Args:
            username: Username to validate

        Returns:
            List of validation error messages
        """
        errors: List[str] = []

        if not username or not username.strip():
            errors.append("Empty username")
            return errors

        if len(username) > 31:
            errors.append(f"Username too long: {username}")

        if username.startswith("-"):
            errors.append(f"Username must not start with '-': {username}")

        if not username.replace("-", "").replace("_", "").replace(".", "").isalnum():
            errors.append(f"Invalid username format: {username}")

        return errors

    @staticmethod
    def validate_user_exists(username: str) -> bool:
        """Check if user exists on system.

        Args:
            username: Username to check

        Returns:
            True if user exists, False otherwise
        """
        try:
            pwd.getpwnam(username)
            return True
        except KeyError:
            return False
