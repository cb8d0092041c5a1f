"""Duplicate command orchestration for the CLI.

DuplicateCommand turns the command line input into a TreeDuplicator run:
it resolves the source page, loads configuration, connects to Confluence,
resolves the acting user and maps every outcome to an exit code.
"""

import logging
import re
from typing import Optional

from src.cli.errors import CLIError, InvalidSourceError
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.confluence_client.api_wrapper import APIWrapper
from src.confluence_client.auth import Authenticator
from src.confluence_client.errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
)
from src.page_tree.config_loader import DEFAULT_CONFIG_PATH, ConfigLoader
from src.page_tree.confluence_store import ConfluenceContentStore
from src.page_tree.content_store import ContentStore
from src.page_tree.duplicator import TreeDuplicator
from src.page_tree.errors import (
    ConfigError,
    DuplicationAbortedError,
    FilesystemError,
    NodeNotFoundError,
)
from src.page_tree.models import DuplicationMode

logger = logging.getLogger(__name__)

SUCCESS_NOTICE = "Page and subpages duplicated successfully."
FAILURE_NOTICE = "Page could not be duplicated."


class DuplicateCommand:
    """Runs one page tree duplication for the CLI.

    Example:
        >>> command = DuplicateCommand(output_handler=OutputHandler(verbosity=1))
        >>> exit_code = command.run("https://example.atlassian.net/wiki/spaces/TEAM/pages/123456")
    """

    PAGE_ID = re.compile(r'^\d+$')
    # /spaces/SPACE/pages/PAGE_ID[/title], with or without the /wiki prefix
    URL_WITH_PAGE_ID = re.compile(
        r'^https?://[^/]+(?:/wiki)?/spaces/[^/]+/pages/(\d+)(?:[/?#].*)?$'
    )

    def __init__(
        self,
        config_path: str = DEFAULT_CONFIG_PATH,
        output_handler: Optional[OutputHandler] = None,
        authenticator: Optional[Authenticator] = None,
        store: Optional[ContentStore] = None,
    ):
        """Initialize the command with its dependencies.

        Args:
            config_path: Path to the optional YAML configuration file
            output_handler: OutputHandler for terminal output (optional)
            authenticator: Authenticator for the Confluence API (optional)
            store: ContentStore to copy within (optional, defaults to Confluence)
        """
        self.config_path = config_path
        self.output_handler = output_handler or OutputHandler()
        self.authenticator = authenticator
        self.store = store

    @classmethod
    def parse_source(cls, source: str) -> str:
        """Extract the page ID from a page ID or a Confluence page URL.

        Raises:
            InvalidSourceError: If the source matches neither form
        """
        source = (source or '').strip()
        if cls.PAGE_ID.match(source):
            return source

        match = cls.URL_WITH_PAGE_ID.match(source)
        if match:
            return match.group(1)

        raise InvalidSourceError(source)

    def _get_store(self) -> ContentStore:
        if self.store is None:
            if self.authenticator is None:
                self.authenticator = Authenticator()
            self.store = ConfluenceContentStore(APIWrapper(self.authenticator))
        return self.store

    def run(
        self,
        source: str,
        dry_run: bool = False,
        mode: Optional[DuplicationMode] = None,
        copy_suffix: Optional[str] = None,
    ) -> ExitCode:
        """Duplicate (or preview) the tree rooted at source.

        Args:
            source: Page ID or Confluence page URL of the root page
            dry_run: If True, list the pages that would be copied and stop
            mode: Failure policy, overriding the configuration file
            copy_suffix: Title suffix, overriding the configuration file

        Returns:
            ExitCode indicating success or specific failure type
        """
        try:
            page_id = self.parse_source(source)

            config = ConfigLoader.load(self.config_path)
            if mode is not None:
                config.mode = mode
            if copy_suffix is not None:
                config.copy_suffix = copy_suffix
            logger.info(
                f"Duplicating page {page_id} (mode: {config.mode.value}, "
                f"suffix: '{config.copy_suffix}')"
            )

            store = self._get_store()
            acting_user = store.current_acting_user()
            self.output_handler.debug(f"Acting user: {acting_user}")

            duplicator = TreeDuplicator(
                store,
                acting_user=acting_user,
                copy_suffix=config.copy_suffix,
                mode=config.mode,
            )

            if dry_run:
                entries = duplicator.preview_tree(page_id)
                self.output_handler.print_tree_preview(entries, config.copy_suffix)
                return ExitCode.SUCCESS

            with self.output_handler.spinner(f"Duplicating page {page_id} and its subpages..."):
                report = duplicator.duplicate_tree(page_id)

            if not report.succeeded:
                self.output_handler.error(FAILURE_NOTICE)
                return ExitCode.GENERAL_ERROR

            self.output_handler.success(SUCCESS_NOTICE)
            if self.output_handler.verbosity >= 1:
                self.output_handler.print_duplication_summary(report)
            return ExitCode.SUCCESS

        except DuplicationAbortedError as e:
            logger.error(f"Duplication aborted: {e}")
            self.output_handler.error(f"Duplication aborted: {e.cause or e}")
            self.output_handler.print_duplication_summary(e.report, failed_node_id=e.failed_node_id)
            return ExitCode.ABORTED

        except NodeNotFoundError as e:
            logger.error(str(e))
            self.output_handler.error(str(e))
            return ExitCode.GENERAL_ERROR

        except InvalidCredentialsError as e:
            logger.error(f"Authentication failed: {e}")
            self.output_handler.error(f"Authentication failed: {e}")
            self.output_handler.info(
                "Check CONFLUENCE_URL, CONFLUENCE_USER and CONFLUENCE_API_TOKEN environment variables"
            )
            return ExitCode.AUTH_ERROR

        except (APIUnreachableError, APIAccessError) as e:
            logger.error(f"API error: {e}")
            self.output_handler.error(f"API error: {e}")
            self.output_handler.info("Check your internet connection and try again")
            return ExitCode.NETWORK_ERROR

        except (ConfigError, FilesystemError) as e:
            logger.error(f"Configuration error: {e}")
            self.output_handler.error(f"Configuration error: {e}")
            return ExitCode.GENERAL_ERROR

        except CLIError as e:
            logger.error(f"CLI error: {e}")
            self.output_handler.error(f"Error: {e}")
            return ExitCode.GENERAL_ERROR

        except Exception as e:
            logger.exception("Unexpected error during duplication")
            self.output_handler.error(f"Unexpected error: {e}")
            return ExitCode.GENERAL_ERROR
