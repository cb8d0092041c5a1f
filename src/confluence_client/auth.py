"""Credential loading for the Confluence client.

Credentials come from environment variables, optionally seeded from a .env
file through python-dotenv. They are never cached on disk or logged.
"""

import logging
import os
from typing import List, NamedTuple, Optional

from dotenv import load_dotenv

from .errors import InvalidCredentialsError

logger = logging.getLogger(__name__)

REQUIRED_VARIABLES = ('CONFLUENCE_URL', 'CONFLUENCE_USER', 'CONFLUENCE_API_TOKEN')


class Credentials(NamedTuple):
    """Confluence API credentials."""
    url: str
    user: str
    api_token: str


class Authenticator:
    """Loads and validates Confluence credentials from the environment.

    Required environment variables:
        CONFLUENCE_URL: Confluence instance URL (e.g., https://yourinstance.atlassian.net/wiki)
        CONFLUENCE_USER: Confluence user email address
        CONFLUENCE_API_TOKEN: Confluence API token

    The account behind these credentials is the acting user: Confluence
    records it as the author of every page the tool creates.

    Example:
        >>> auth = Authenticator()
        >>> creds = auth.get_credentials()
        >>> print(f"Connecting to {creds.url}")
    """

    def __init__(self, env_file: Optional[str] = None):
        """Load environment variables from a .env file.

        Args:
            env_file: Optional path to the .env file (default: search from cwd)
        """
        self.env_file = env_file
        load_dotenv(env_file)

    def missing_variables(self) -> List[str]:
        """Return the names of required variables that are unset or empty."""
        return [name for name in REQUIRED_VARIABLES if not os.getenv(name)]

    def get_credentials(self) -> Credentials:
        """Get Confluence credentials from environment variables.

        Returns:
            Credentials: A named tuple containing url, user, and api_token

        Raises:
            InvalidCredentialsError: If any required credential is missing
        """
        url = os.getenv('CONFLUENCE_URL')
        user = os.getenv('CONFLUENCE_USER')
        api_token = os.getenv('CONFLUENCE_API_TOKEN')

        missing = self.missing_variables()
        if missing:
            logger.debug(f"Missing credential variables: {', '.join(missing)}")
            raise InvalidCredentialsError(
                user=user if user else "unknown",
                endpoint=url if url else "unknown"
            )

        return Credentials(url=url.rstrip('/'), user=user, api_token=api_token)  # type: ignore[union-attr,arg-type]
