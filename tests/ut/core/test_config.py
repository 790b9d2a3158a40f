"""配置与工作区模型测试"""

from __future__ import annotations

from pathlib import Path

import pytest

from bendpm.core.config import Config, get_config, init_config
from bendpm.core.exceptions import ConfigError, ValidationError
from bendpm.core.models import (
    DependencySpec,
    Workspace,
    default_alias,
    validate_alias,
    validate_name,
    validate_ref,
)


class TestConfig:
    def test_defaults(self) -> None:
        cfg = Config()
        assert cfg.manifest == "mod.toml"
        assert cfg.mirror_dir == ".bend"
        assert cfg.remote_name == "origin"
        assert cfg.repo_url("github.com/org/proj") == "https://github.com/org/proj.git"

    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        assert Config.from_file(tmp_path / "nope.yml") == Config()

    def test_from_file_with_extra(self, tmp_path: Path) -> None:
        p = tmp_path / "bend.yml"
        p.write_text("mirror_dir: deps\nurl_template: 'ssh://git@{name}.git'\nmirror: true\n")
        cfg = Config.from_file(p)
        assert cfg.mirror_dir == "deps"
        assert cfg.repo_url("h/o/p") == "ssh://git@h/o/p.git"
        assert cfg.extra == {"mirror": True}

    def test_template_without_name(self) -> None:
        with pytest.raises(ConfigError, match="url_template"):
            Config(url_template="https://example.com/x.git")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        p = tmp_path / "bend.yml"
        p.write_text("manifest: [unclosed\n")
        with pytest.raises(ConfigError, match="配置文件无效"):
            Config.from_file(p)

    def test_global_init(self, tmp_path: Path) -> None:
        p = tmp_path / "bend.yml"
        p.write_text("manifest: deps.toml\n")
        init_config(p)
        assert get_config().manifest == "deps.toml"


class TestModels:
    def test_default_alias(self) -> None:
        assert default_alias("github.com/HigherOrderCO/Bend") == "Bend"

    @pytest.mark.parametrize("name", ["foo", "github.com/org/", ""])
    def test_invalid_name(self, name: str) -> None:
        with pytest.raises(ValidationError, match="无效的依赖名"):
            validate_name(name)

    def test_name_with_unsafe_chars(self) -> None:
        with pytest.raises(ValidationError, match="非法字符"):
            validate_name("example.com/org/a b")

    @pytest.mark.parametrize("ref", ["-x", "1.0;rm", "", "a b"])
    def test_invalid_ref(self, ref: str) -> None:
        with pytest.raises(ValidationError):
            validate_ref(ref)

    @pytest.mark.parametrize("alias", ["..", "a/b", "."])
    def test_alias_cannot_be_path(self, alias: str) -> None:
        with pytest.raises(ValidationError, match="别名"):
            validate_alias(alias)

    def test_local_name(self) -> None:
        assert DependencySpec("h/o/proj", "1.0.0").local_name == "proj"
        assert DependencySpec("h/o/proj", "1.0.0", alias="p").local_name == "p"

    def test_workspace_paths(self, tmp_path: Path) -> None:
        ws = Workspace(tmp_path, Config(manifest="m.toml", mirror_dir="deps"))
        assert ws.manifest_path == tmp_path / "m.toml"
        assert ws.mirror_path("foo") == tmp_path / "deps" / "foo"
