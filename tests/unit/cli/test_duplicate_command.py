"""Unit tests for cli.duplicate_command module."""

from unittest.mock import MagicMock, Mock

import pytest

from src.cli.duplicate_command import DuplicateCommand, FAILURE_NOTICE, SUCCESS_NOTICE
from src.cli.errors import InvalidSourceError
from src.cli.models import ExitCode
from src.confluence_client.errors import (
    APIUnreachableError,
    InvalidCredentialsError,
)
from src.page_tree.content_store import InMemoryContentStore
from src.page_tree.models import DuplicationMode, NodeStatus
from tests.fixtures.page_trees import (
    build_handbook_tree,
    build_partial_failure_tree,
    subtree_nodes,
)


@pytest.fixture
def output():
    handler = MagicMock()
    handler.verbosity = 0
    return handler


@pytest.fixture
def config_path(tmp_path):
    return str(tmp_path / ".page-tree-copy" / "config.yaml")


def make_command(store, output, config_path):
    return DuplicateCommand(config_path=config_path, output_handler=output, store=store)


class TestParseSource:
    """Test cases for DuplicateCommand.parse_source."""

    @pytest.mark.parametrize('source,expected', [
        ('123456', '123456'),
        ('  123456 ', '123456'),
        ('https://company.atlassian.net/wiki/spaces/TEAM/pages/123456', '123456'),
        ('https://company.atlassian.net/wiki/spaces/TEAM/pages/123456/Handbook', '123456'),
        ('https://company.atlassian.net/spaces/TEAM/pages/42?focused=1', '42'),
        ('http://wiki.local/wiki/spaces/~me/pages/7#section', '7'),
    ])
    def test_accepts_ids_and_page_urls(self, source, expected):
        """Page IDs and Confluence page URLs resolve to the page ID."""
        assert DuplicateCommand.parse_source(source) == expected

    @pytest.mark.parametrize('source', [
        '',
        'Handbook',
        '12a',
        'https://company.atlassian.net/wiki/spaces/TEAM/overview',
        'ftp://company.atlassian.net/wiki/spaces/TEAM/pages/1',
    ])
    def test_rejects_other_input(self, source):
        """Anything else raises InvalidSourceError."""
        with pytest.raises(InvalidSourceError):
            DuplicateCommand.parse_source(source)


class TestRun:
    """Test cases for DuplicateCommand.run."""

    def test_success_copies_tree_and_reports(self, output, config_path):
        """A full copy prints the success notice and exits 0."""
        store = InMemoryContentStore(acting_user="editor")
        ids = build_handbook_tree(store)

        exit_code = make_command(store, output, config_path).run(ids['root'])

        assert exit_code == ExitCode.SUCCESS
        output.success.assert_called_once_with(SUCCESS_NOTICE)
        output.print_duplication_summary.assert_not_called()
        assert len(store) == 12

    def test_success_summary_when_verbose(self, output, config_path):
        """With verbosity the summary follows the notice."""
        output.verbosity = 1
        store = InMemoryContentStore()
        ids = build_handbook_tree(store)

        make_command(store, output, config_path).run(ids['root'])

        report = output.print_duplication_summary.call_args.args[0]
        assert report.created_count == 6

    def test_copies_are_drafts_by_acting_user(self, output, config_path):
        """The acting user comes from the store."""
        store = InMemoryContentStore(acting_user="alice")
        ids = build_handbook_tree(store)

        make_command(store, output, config_path).run(ids['root'])

        new_root = next(node for node in store.all_nodes() if node.title == "Handbook (Copy)")
        copies = subtree_nodes(store, new_root.node_id)
        assert {node.author_id for node in copies} == {"alice"}
        assert {node.status for node in copies} == {NodeStatus.DRAFT}

    def test_lenient_failure_still_reports_success(self, output, config_path):
        """Skipped subpages do not change the outcome in lenient mode."""
        store = InMemoryContentStore(fail_on=lambda draft: draft.title == "a (Copy)")
        ids = build_partial_failure_tree(store)

        exit_code = make_command(store, output, config_path).run(ids['r'])

        assert exit_code == ExitCode.SUCCESS
        output.success.assert_called_once_with(SUCCESS_NOTICE)
        assert sorted(node.title for node in store.all_nodes()) == [
            "a", "b", "b (Copy)", "c", "r", "r (Copy)"
        ]

    def test_rejected_metadata_does_not_end_lenient_run(self, output, config_path):
        """A page whose metadata is rejected does not stop its siblings from being copied."""
        store = InMemoryContentStore(
            fail_metadata_on=lambda node, key: node.title == "a (Copy)"
        )
        ids = build_partial_failure_tree(store)
        store.set_metadata(ids['a'], "layout", '{"rows": []}')

        exit_code = make_command(store, output, config_path).run(ids['r'])

        assert exit_code == ExitCode.SUCCESS
        assert any(node.title == "b (Copy)" for node in store.all_nodes())

    def test_root_failure_prints_failure_notice(self, output, config_path):
        """If the root cannot be copied the run fails."""
        store = InMemoryContentStore(fail_on=lambda draft: draft.title == "r (Copy)")
        ids = build_partial_failure_tree(store)

        exit_code = make_command(store, output, config_path).run(ids['r'])

        assert exit_code == ExitCode.GENERAL_ERROR
        output.error.assert_called_once_with(FAILURE_NOTICE)
        output.success.assert_not_called()

    def test_missing_root_fails(self, output, config_path):
        """A source page that does not exist fails the run."""
        exit_code = make_command(InMemoryContentStore(), output, config_path).run('999')

        assert exit_code == ExitCode.GENERAL_ERROR
        output.error.assert_called_once_with(FAILURE_NOTICE)

    def test_strict_mode_aborts_with_summary(self, output, config_path):
        """Strict mode stops at the first failure and exits 2."""
        store = InMemoryContentStore(fail_on=lambda draft: draft.title == "a (Copy)")
        ids = build_partial_failure_tree(store)

        exit_code = make_command(store, output, config_path).run(
            ids['r'], mode=DuplicationMode.STRICT
        )

        assert exit_code == ExitCode.ABORTED
        summary = output.print_duplication_summary.call_args
        assert summary.kwargs['failed_node_id'] == ids['a']
        assert summary.args[0].created == {ids['r']: summary.args[0].new_root_id}
        assert not any(node.title == "b (Copy)" for node in store.all_nodes())

    def test_config_file_sets_mode_and_suffix(self, output, tmp_path):
        """Mode and suffix are read from the configuration file."""
        path = tmp_path / "config.yaml"
        path.write_text('copy_suffix: " [old]"\nmode: strict\n', encoding='utf-8')
        store = InMemoryContentStore(fail_on=lambda draft: draft.title == "a [old]")
        ids = build_partial_failure_tree(store)

        exit_code = make_command(store, output, str(path)).run(ids['r'])

        assert exit_code == ExitCode.ABORTED
        assert any(node.title == "r [old]" for node in store.all_nodes())

    def test_arguments_override_config_file(self, output, tmp_path):
        """Explicit mode and suffix win over the configuration file."""
        path = tmp_path / "config.yaml"
        path.write_text('copy_suffix: " [old]"\nmode: strict\n', encoding='utf-8')
        store = InMemoryContentStore(fail_on=lambda draft: draft.title == "a - copy")
        ids = build_partial_failure_tree(store)

        exit_code = make_command(store, output, str(path)).run(
            ids['r'], mode=DuplicationMode.LENIENT, copy_suffix=" - copy"
        )

        assert exit_code == ExitCode.SUCCESS
        assert any(node.title == "b - copy" for node in store.all_nodes())

    def test_invalid_config_exits_1(self, output, tmp_path):
        """A broken configuration file fails before anything is copied."""
        path = tmp_path / "config.yaml"
        path.write_text("mode: sometimes\n", encoding='utf-8')
        store = InMemoryContentStore()
        ids = build_partial_failure_tree(store)

        exit_code = make_command(store, output, str(path)).run(ids['r'])

        assert exit_code == ExitCode.GENERAL_ERROR
        assert len(store) == 4

    def test_dry_run_creates_nothing(self, output, config_path):
        """A dry run previews the tree without writing."""
        store = InMemoryContentStore()
        ids = build_handbook_tree(store)

        exit_code = make_command(store, output, config_path).run(ids['root'], dry_run=True)

        assert exit_code == ExitCode.SUCCESS
        assert len(store) == 6
        entries, suffix = output.print_tree_preview.call_args.args
        assert suffix == " (Copy)"
        assert [(depth, node.title) for depth, node in entries] == [
            (0, "Handbook"),
            (1, "Onboarding"),
            (2, "First Week"),
            (3, "Checklist"),
            (2, "Accounts"),
            (1, "Policies"),
        ]

    def test_dry_run_of_missing_page(self, output, config_path):
        """Previewing a missing page exits 1."""
        exit_code = make_command(InMemoryContentStore(), output, config_path).run('5', dry_run=True)

        assert exit_code == ExitCode.GENERAL_ERROR
        output.error.assert_called_once_with("Page 5 not found")

    def test_invalid_source_exits_1(self, output, config_path):
        """An unparseable source fails with a CLI error."""
        store = Mock()

        exit_code = make_command(store, output, config_path).run('not-a-page')

        assert exit_code == ExitCode.GENERAL_ERROR
        store.current_acting_user.assert_not_called()

    def test_credentials_error_exits_3(self, output, config_path):
        """Authentication failures map to the auth exit code."""
        store = Mock()
        store.current_acting_user.side_effect = InvalidCredentialsError('user', 'url')

        exit_code = make_command(store, output, config_path).run('123')

        assert exit_code == ExitCode.AUTH_ERROR

    def test_network_error_exits_4(self, output, config_path):
        """Network failures map to the network exit code."""
        store = Mock()
        store.current_acting_user.return_value = "editor"
        store.get_node.side_effect = APIUnreachableError('https://test.atlassian.net/wiki')

        exit_code = make_command(store, output, config_path).run('123')

        assert exit_code == ExitCode.NETWORK_ERROR

    def test_unexpected_error_exits_1(self, output, config_path):
        """Unexpected exceptions are reported, not raised."""
        store = Mock()
        store.current_acting_user.side_effect = RuntimeError("boom")

        exit_code = make_command(store, output, config_path).run('123')

        assert exit_code == ExitCode.GENERAL_ERROR
        output.error.assert_called_once_with("Unexpected error: boom")
