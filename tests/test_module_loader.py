"""
Tests for resolving extensions by name.
"""

from pathlib import Path
from types import ModuleType
from unittest.mock import Mock, patch

import pytest

from ignis.core.exceptions import InvalidArgumentError
from ignis.infrastructure.modules.loader import ENTRY_POINT_GROUP, ModuleLoader


class TestModuleLoader:
    """Test cases for ModuleLoader."""

    @pytest.fixture
    def loader(self) -> ModuleLoader:
        return ModuleLoader()

    @pytest.fixture
    def modules(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
        (tmp_path / "ignis_loader_peer.py").write_text("def default(cls):\n    pass\n")
        (tmp_path / "loader_plain.py").write_text("def extension(cls):\n    pass\n")
        (tmp_path / "loader_broken.py").write_text("import loader_dependency_missing\n")
        monkeypatch.syspath_prepend(str(tmp_path))
        return tmp_path

    def test_prefers_peer_module(self, loader: ModuleLoader, modules: Path) -> None:
        """Test the ignis_<name> convention with hyphen normalization."""
        module = loader.load("loader-peer")

        assert isinstance(module, ModuleType)
        assert module.__name__ == "ignis_loader_peer"

    def test_plain_module(self, loader: ModuleLoader, modules: Path) -> None:
        """Test falling back to the name itself."""
        module = loader.load("loader_plain")

        assert module.__name__ == "loader_plain"

    def test_module_attribute(self, loader: ModuleLoader, modules: Path) -> None:
        """Test module:attribute names."""
        extension = loader.load("loader_plain:extension")

        assert callable(extension)
        assert extension.__name__ == "extension"

    def test_missing_attribute(self, loader: ModuleLoader, modules: Path) -> None:
        with pytest.raises(InvalidArgumentError, match="loader_plain:nothing"):
            loader.load("loader_plain:nothing")

    def test_not_found(self, loader: ModuleLoader) -> None:
        """Test that unresolvable names list what was tried."""
        with pytest.raises(InvalidArgumentError, match="ignis_nowhere_at_all"):
            loader.load("nowhere-at-all")

    def test_broken_module_propagates(self, loader: ModuleLoader, modules: Path) -> None:
        """Test that import errors inside a found module are not hidden."""
        with pytest.raises(ModuleNotFoundError, match="loader_dependency_missing"):
            loader.load("loader_broken")

    @pytest.mark.parametrize("name", ["", "   "])
    def test_rejects_empty_name(self, loader: ModuleLoader, name: str) -> None:
        with pytest.raises(InvalidArgumentError):
            loader.load(name)

    def test_entry_points_take_precedence(self, loader: ModuleLoader) -> None:
        """Test resolving installed extensions through entry points."""
        extension = Mock()
        entry_point = Mock(value="pkg.module:extension")
        entry_point.name = "installed"
        entry_point.load.return_value = extension

        with patch("ignis.infrastructure.modules.loader.entry_points",
                   return_value=[entry_point]) as mock_entry_points:
            assert loader.load("installed") is extension

        mock_entry_points.assert_called_once_with(group=ENTRY_POINT_GROUP)
