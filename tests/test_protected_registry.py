"""Tests for ProtectedPathRegistry - which paths are catastrophic to remove."""

import dataclasses

import pytest

from safe_delete.scope import ProtectedPathRegistry, get_protected_registry
from safe_delete.scope.patterns import HOME_DIRS, SYSTEM_ROOTS
from safe_delete.utils import settings as settings_module


class TestBuild:
    def test_small_registry(self):
        registry = ProtectedPathRegistry.build(
            home="/home/user", system_roots=["/", "/etc/"], home_dirs=[".ssh"]
        )
        assert registry.paths == ("/", "/etc", "/home/user", "/home/user/.ssh")

    def test_defaults(self, fake_home):
        registry = ProtectedPathRegistry.build(home=str(fake_home))
        expected = len(SYSTEM_ROOTS) + 1 + len(HOME_DIRS)
        assert len(registry.paths) == expected
        assert str(fake_home) in registry.paths
        assert str(fake_home / ".ssh") in registry.paths
        assert "/etc" in registry.paths

    def test_entries_are_absolute_without_trailing_slash(self, registry):
        for path in registry.paths:
            assert path.startswith("/")
            assert path == "/" or not path.endswith("/")

    def test_extra_paths_expanded_and_deduplicated(self):
        registry = ProtectedPathRegistry.build(
            home="/home/user",
            system_roots=["/srv"],
            home_dirs=[],
            extra_paths=["~/keys", "/srv/", "/data/db/"],
        )
        assert registry.paths == ("/srv", "/home/user", "/home/user/keys", "/data/db")

    def test_registry_is_immutable(self, registry):
        with pytest.raises(dataclasses.FrozenInstanceError):
            registry.paths = ()
        assert isinstance(registry.paths, tuple)


class TestIsProtected:
    @pytest.fixture
    def registry(self):
        return ProtectedPathRegistry.build(
            home="/home/user", system_roots=["/", "/etc", "/usr"], home_dirs=[".ssh"]
        )

    @pytest.mark.parametrize(
        "target",
        ["/", "/etc", "/etc/", "/usr/../etc", "~", "~/.ssh", "$HOME", "${HOME}/.ssh"],
    )
    def test_exact_matches(self, registry, target):
        assert registry.is_protected(target, "/tmp") is True

    @pytest.mark.parametrize("target", ["/home", "/home/"])
    def test_ancestor_of_protected_path(self, registry, target):
        assert registry.is_protected(target, "/tmp") is True

    @pytest.mark.parametrize(
        "target",
        ["/etc/passwd", "/usr/local/bin", "~/.ssh/known_hosts", "/tmp/build", "/homework"],
    )
    def test_descendants_and_unrelated_paths(self, registry, target):
        assert registry.is_protected(target, "/tmp") is False

    def test_relative_target_resolved_against_cwd(self, registry):
        assert registry.is_protected("..", "/home/user/project") is True
        assert registry.is_protected("build", "/home/user/project") is False
        assert registry.is_protected("../..", "/etc/ssh") is True

    def test_resolve_delegates_to_resolver(self, registry):
        assert registry.resolve("~/x", "/tmp") == "/home/user/x"


class TestFromYaml:
    def test_missing_file_uses_defaults(self, tmp_path, fake_home):
        registry = ProtectedPathRegistry.from_yaml(
            tmp_path / "missing.yaml", home=str(fake_home)
        )
        assert registry == ProtectedPathRegistry.build(home=str(fake_home))

    def test_overrides(self, tmp_path):
        config = tmp_path / "protected_paths.yaml"
        config.write_text(
            "system_roots:\n"
            "  - /data\n"
            "home_dirs:\n"
            "  - vault\n"
            "extra_paths:\n"
            "  - ~/keys\n"
            "  - /srv/db/\n"
        )
        registry = ProtectedPathRegistry.from_yaml(config, home="/home/user")
        assert registry.paths == (
            "/data",
            "/home/user",
            "/home/user/vault",
            "/home/user/keys",
            "/srv/db",
        )

    def test_only_extra_paths_keeps_default_roots(self, tmp_path):
        config = tmp_path / "protected_paths.yaml"
        config.write_text("extra_paths: [/mnt/backup]\n")
        registry = ProtectedPathRegistry.from_yaml(config, home="/home/user")
        assert "/etc" in registry.paths
        assert "/mnt/backup" in registry.paths

    @pytest.mark.parametrize(
        "content",
        [
            "system_roots: [unclosed\n",
            "- just\n- a list\n",
            "",
        ],
    )
    def test_unusable_file_uses_defaults(self, tmp_path, content):
        config = tmp_path / "protected_paths.yaml"
        config.write_text(content)
        registry = ProtectedPathRegistry.from_yaml(config, home="/home/user")
        assert registry == ProtectedPathRegistry.build(home="/home/user")

    def test_non_list_values_are_ignored(self, tmp_path):
        config = tmp_path / "protected_paths.yaml"
        config.write_text("system_roots: /data\n")
        registry = ProtectedPathRegistry.from_yaml(config, home="/home/user")
        assert registry == ProtectedPathRegistry.build(home="/home/user")


class TestGetProtectedRegistry:
    def test_singleton_reads_settings_file(self, tmp_path, monkeypatch):
        config = tmp_path / "protected_paths.yaml"
        config.write_text("extra_paths: [/mnt/archive]\n")
        monkeypatch.setattr(
            settings_module,
            "_settings",
            settings_module.Settings(protected_paths_file=str(config)),
        )

        registry = get_protected_registry()
        assert "/mnt/archive" in registry.paths
        assert get_protected_registry() is registry
