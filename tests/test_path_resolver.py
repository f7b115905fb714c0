"""Tests for externals path resolution."""
import pytest

from cached_externals.api.exceptions import ConfigError
from cached_externals.core.path_resolver import ExternalsPathResolver
from cached_externals.models import ExternalModule, ExternalsConfig


@pytest.fixture
def module():
    return ExternalModule(path="vendor/plugins/acts_as_list", options={"type": "git"})


class TestLocalPaths:
    """Paths used in local mode."""

    def test_target_inside_project(self, project, module):
        resolver = ExternalsPathResolver(project, ExternalsConfig(stage="local"))
        assert resolver.target_path(module) == project / "vendor/plugins/acts_as_list"

    def test_destination_next_to_project(self, project, module):
        """Default checkout lives in ../externals/<last path component>."""
        resolver = ExternalsPathResolver(project, ExternalsConfig(stage="local"))
        assert resolver.local_destination(module) == project.parent / "externals" / "acts_as_list"

    def test_working_dir_overrides_destination(self, project, tmp_path):
        module = ExternalModule(path="vendor/x", options={"working_dir": str(tmp_path / "wc")})
        resolver = ExternalsPathResolver(project, ExternalsConfig())
        assert resolver.local_destination(module) == tmp_path / "wc"

    def test_relative_working_dir(self, project):
        module = ExternalModule(path="vendor/x", options={"working_dir": "../checkouts/x"})
        resolver = ExternalsPathResolver(project, ExternalsConfig())
        assert resolver.local_destination(module) == project.parent / "checkouts" / "x"

    def test_custom_externals_dir(self, project, module):
        config = ExternalsConfig(externals_dir="tmp/ext")
        resolver = ExternalsPathResolver(project, config)
        assert resolver.local_destination(module) == project / "tmp/ext/acts_as_list"


class TestRemotePaths:
    """Paths on the deployment target."""

    @pytest.fixture
    def resolver(self, project):
        config = ExternalsConfig(shared_path="/srv/app/shared", latest_release="/srv/app/releases/1")
        return ExternalsPathResolver(project, config)

    def test_shared_dir(self, resolver, module):
        assert resolver.shared_dir(module) == "/srv/app/shared/externals/vendor/plugins/acts_as_list"

    def test_revision_destination(self, resolver, module):
        assert resolver.revision_destination(module, "abc123") == \
            "/srv/app/shared/externals/vendor/plugins/acts_as_list/abc123"

    def test_release_target(self, resolver, module):
        assert resolver.release_target(module) == "/srv/app/releases/1/vendor/plugins/acts_as_list"

    def test_missing_shared_path(self, project, module):
        resolver = ExternalsPathResolver(project, ExternalsConfig(latest_release="/r"))
        with pytest.raises(ConfigError, match="shared_path"):
            resolver.shared_dir(module)

    def test_missing_release(self, project, module):
        resolver = ExternalsPathResolver(project, ExternalsConfig(shared_path="/s"))
        with pytest.raises(ConfigError, match="latest_release"):
            resolver.release_target(module)
