"""Tests for setting up and updating external modules."""
import logging
import os

import pytest
from rich.console import Console

from cached_externals.api.exceptions import (
    CheckoutError,
    CommandError,
    ConfigError,
    ExternalMissingError,
    ScmNotFoundError,
    SyncError,
)
from cached_externals.api.externals import Externals, build_remote_setup_command
from cached_externals.models import ExternalModule, ExternalsConfig, OperationStatus


def make_externals(project, **config):
    return Externals(
        config=ExternalsConfig(**config),
        project_root=project,
        console=Console(quiet=True)
    )


class TestLocalSetup:
    """Setup in local mode checks out next to the project and links."""

    def test_clones_and_links(self, project, fake_scm, fake_manifest):
        externals = make_externals(project, stage="local")

        result = externals.setup()

        assert result.status == OperationStatus.SUCCESS
        assert result.operation == "setup"
        assert result.count == 2

        link = project / "vendor/plugins/acts_as_list"
        destination = project.parent / "externals" / "acts_as_list"
        assert link.is_symlink()
        assert os.readlink(link) == str(destination)
        assert (destination / "REVISION").read_text().strip() == "HEAD"
        assert result.externals[0].metadata["cloned"] is True

    def test_existing_checkout_not_recloned(self, project, fake_scm, fake_manifest):
        destination = project.parent / "externals" / "rails"
        destination.mkdir(parents=True)
        (destination / "keep").write_text("local work")

        result = make_externals(project, stage="local").setup()

        assert not (destination / "REVISION").exists()
        assert (project / "vendor/rails" / "keep").read_text() == "local work"
        assert result.externals[1].metadata["cloned"] is False
        assert result.externals[1].message == "linked"

    def test_replaces_existing_target(self, project, fake_scm, fake_manifest):
        target = project / "vendor/rails"
        target.mkdir(parents=True)
        (target / "stale.rb").write_text("old")

        make_externals(project, stage="local").setup()

        assert target.is_symlink()
        assert not (target / "stale.rb").exists()

    def test_setup_twice_relinks(self, project, fake_scm, fake_manifest):
        externals = make_externals(project, stage="local")
        externals.setup()
        result = externals.setup()

        assert (project / "vendor/rails").is_symlink()
        assert all(not r.metadata["cloned"] for r in result.externals)

    def test_working_dir(self, project, tmp_path, fake_scm, write_manifest):
        working_dir = tmp_path / "wc" / "rails"
        write_manifest(f"""\
            vendor/rails:
              :type: fake
              :working_dir: {working_dir}
            """)

        make_externals(project, stage="local").setup()

        assert os.readlink(project / "vendor/rails") == str(working_dir)
        assert (working_dir / "REVISION").exists()

    def test_failed_clone_cleans_up(self, project, fake_scm, write_manifest):
        write_manifest("""\
            vendor/broken:
              :type: fake
              :repository: git://example.com/broken.git
              :fail_checkout: true
            """)

        with pytest.raises(CheckoutError) as exc_info:
            make_externals(project, stage="local").setup()

        destination = project.parent / "externals" / "broken"
        assert str(exc_info.value) == (
            f"Error cloning git://example.com/broken.git to {destination}"
        )
        assert not destination.exists()
        assert not (project / "vendor/broken").exists()

    def test_failed_clone_reports_scm_output(self, project, fake_scm, write_manifest, caplog):
        write_manifest("""\
            vendor/broken:
              :type: fake
              :repository: git://example.com/broken.git
              :fail_checkout: true
            """)

        with caplog.at_level(logging.ERROR, logger="cached_externals"):
            with pytest.raises(CheckoutError):
                make_externals(project, stage="local").setup()

        assert "fatal: repository not found" in caplog.text

    def test_unknown_scm_type(self, project, write_manifest):
        write_manifest("""\
            vendor/x:
              :type: darcs
            """)
        with pytest.raises(ScmNotFoundError):
            make_externals(project, stage="local").setup()

    def test_empty_manifest(self, project):
        result = make_externals(project, stage="local").setup()
        assert result.is_success
        assert result.externals == []


class TestLocalUpdate:
    """Update in local mode synchronizes existing checkouts."""

    def test_syncs_existing_checkouts(self, project, fake_scm, fake_manifest):
        externals = make_externals(project, stage="local")
        externals.setup()

        result = externals.update()

        assert result.operation == "update"
        assert [r.message for r in result.externals] == ["synchronized", "synchronized"]
        assert (project.parent / "externals" / "rails" / "SYNCED").read_text().strip() == "HEAD"

    def test_missing_checkout(self, project, fake_scm, fake_manifest):
        with pytest.raises(ExternalMissingError) as exc_info:
            make_externals(project, stage="local").update()

        message = str(exc_info.value)
        assert str(project.parent / "externals" / "acts_as_list") in message
        assert "Please run 'cached-externals local setup'" in message

    def test_sync_failure(self, project, fake_scm, write_manifest):
        write_manifest("""\
            vendor/x:
              :type: fake
              :fail_sync: true
            """)
        externals = make_externals(project, stage="local")
        externals.setup()

        with pytest.raises(SyncError, match="Error synchronizing .*x with SCM"):
            externals.update()


class TestRemoteSetup:
    """Setup on a deployment target runs one composite command per module."""

    @pytest.fixture
    def externals(self, project, fake_scm, fake_manifest, recording_runner):
        externals = make_externals(
            project,
            shared_path="/srv/app/shared",
            latest_release="/srv/app/releases/20240120"
        )
        externals._runner = recording_runner
        return externals

    def test_composite_command(self, externals, recording_runner):
        result = externals.setup()

        assert len(recording_runner.commands) == 2
        assert recording_runner.commands[1] == (
            "rm -rf /srv/app/releases/20240120/vendor/rails && "
            "mkdir -p /srv/app/shared/externals/vendor/rails && "
            "if [ ! -d /srv/app/shared/externals/vendor/rails/deadbeef ]; then "
            "(mkdir -p /srv/app/shared/externals/vendor/rails/deadbeef && "
            "echo deadbeef > /srv/app/shared/externals/vendor/rails/deadbeef/REVISION) "
            "|| rm -rf /srv/app/shared/externals/vendor/rails/deadbeef; fi && "
            "ln -nsf /srv/app/shared/externals/vendor/rails/deadbeef "
            "/srv/app/releases/20240120/vendor/rails"
        )
        state = result.externals[1].state
        assert state.revision == "deadbeef"
        assert state.command == recording_runner.commands[1]

    def test_revision_resolved_locally(self, externals):
        result = externals.setup()
        assert result.externals[0].state.revision == "abc123"
        assert result.externals[0].state.destination == \
            "/srv/app/shared/externals/vendor/plugins/acts_as_list/abc123"

    def test_update_reruns_setup(self, externals, recording_runner):
        result = externals.update()
        assert result.operation == "update"
        assert len(recording_runner.commands) == 2

    def test_remote_failure_propagates(self, externals, recording_runner):
        recording_runner.returncode = 1
        with pytest.raises(CommandError):
            externals.setup()

    def test_requires_target_paths(self, project, fake_scm, fake_manifest):
        with pytest.raises(ConfigError):
            make_externals(project, shared_path="/srv/shared").setup()


class TestRemoteSetupOnThisHost:
    """Without a host the composite command runs through the local shell."""

    def test_links_cached_revision_into_release(self, project, tmp_path, fake_scm, fake_manifest):
        shared = tmp_path / "shared"
        release = tmp_path / "releases" / "1"
        (release / "vendor/plugins").mkdir(parents=True)

        make_externals(project, shared_path=str(shared), latest_release=str(release)).setup()

        link = release / "vendor/rails"
        assert os.readlink(link) == str(shared / "externals/vendor/rails/deadbeef")
        assert (link / "REVISION").read_text().strip() == "deadbeef"

    def test_cached_revision_reused(self, project, tmp_path, fake_scm, fake_manifest):
        shared = tmp_path / "shared"
        cached = shared / "externals/vendor/rails/deadbeef"
        cached.mkdir(parents=True)
        release = tmp_path / "releases" / "2"
        (release / "vendor/plugins").mkdir(parents=True)

        make_externals(project, shared_path=str(shared), latest_release=str(release)).setup()

        assert not (cached / "REVISION").exists()
        assert os.readlink(release / "vendor/rails") == str(cached)


class TestPlanAndModules:
    """Manifest access and dry planning."""

    def test_modules_can_be_assigned(self, project, fake_scm):
        externals = make_externals(project, stage="local")
        externals.modules = [ExternalModule("lib/x", {"type": "fake"})]
        externals.setup()
        assert (project / "lib/x").is_symlink()

    def test_plan_local(self, project, fake_manifest):
        states = make_externals(project, stage="local").plan()
        assert [s.target for s in states] == [project / "vendor/plugins/acts_as_list", project / "vendor/rails"]
        assert not (project / "vendor").exists()

    def test_plan_remote(self, project, fake_manifest):
        states = make_externals(project, shared_path="/s", latest_release="/r").plan()
        assert states[1].target == "/r/vendor/rails"
        assert states[1].destination == "/s/externals/vendor/rails"

    def test_custom_manifest_path(self, project, fake_scm):
        (project / "externals.yml").write_text("lib/y:\n  :type: fake\n")
        externals = make_externals(project, stage="local", manifest_path="externals.yml")
        assert [m.path for m in externals.modules] == ["lib/y"]


def test_build_remote_setup_command_quotes_paths():
    command = build_remote_setup_command(
        target="/r/my lib",
        shared="/s/externals/my lib",
        destination="/s/externals/my lib/abc",
        checkout="true"
    )
    assert command.startswith("rm -rf '/r/my lib' && mkdir -p '/s/externals/my lib'")
    assert command.endswith("ln -nsf '/s/externals/my lib/abc' '/r/my lib'")
