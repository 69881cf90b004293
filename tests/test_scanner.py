"""Tests for scanner module."""

import pytest
from pathlib import Path
import tempfile

from config import ExportSettings
from fragments.errors import DiscoveryError, DocumentParseError
from fragments.model import RunReport
from scanner.builder import load_documents
from scanner.discovery import iter_files, get_relative_path
from scanner.parser import load_document, parse_document
from tests.conftest import write_file


class TestDiscovery:
    """Tests for file discovery."""
    
    def test_finds_nested_graphql_files(self):
        """Test recursive discovery in lexical order."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_file(root / "b.graphql", "")
            write_file(root / "a" / "z.graphql", "")
            write_file(root / "a" / "deep" / "y.graphql", "")
            write_file(root / "notes.txt", "")
            write_file(root / "schema.gql", "")
            
            found = [get_relative_path(p, root) for p in iter_files(root)]
            
            assert found == [
                Path("a/deep/y.graphql"),
                Path("a/z.graphql"),
                Path("b.graphql"),
            ]
    
    def test_custom_extensions(self):
        """Test including additional extensions, case-insensitively."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_file(root / "a.graphql", "")
            write_file(root / "b.GQL", "")
            
            found = {p.name for p in iter_files(root, include_ext={".graphql", ".gql"})}
            
            assert found == {"a.graphql", "b.GQL"}
    
    def test_excluded_directories(self):
        """Test that excluded directories are not descended into."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_file(root / "node_modules" / "pkg" / "a.graphql", "")
            write_file(root / "build.egg-info" / "b.graphql", "")
            write_file(root / "src" / "c.graphql", "")
            
            found = [p.name for p in iter_files(root)]
            
            assert found == ["c.graphql"]
    
    def test_max_depth(self):
        """Test that max_depth limits descent."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_file(root / "top.graphql", "")
            write_file(root / "one" / "mid.graphql", "")
            write_file(root / "one" / "two" / "low.graphql", "")
            
            found = {p.name for p in iter_files(root, max_depth=1)}
            
            assert found == {"top.graphql", "mid.graphql"}
    
    def test_symlinked_directory_yields_files_once(self):
        """Test that a directory reached through a symlink is not scanned twice."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_file(root / "real" / "a.graphql", "")
            (root / "zlink").symlink_to(root / "real", target_is_directory=True)
            
            found = [get_relative_path(p, root) for p in iter_files(root)]
            
            assert found == [Path("real/a.graphql")]
    
    def test_symlink_to_ancestor_does_not_loop(self):
        """Test that a symlink back to the root is walked only once."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_file(root / "a.graphql", "")
            (root / "loop").symlink_to(root, target_is_directory=True)
            
            found = list(iter_files(root))
            
            assert found == [(root / "a.graphql").resolve()]
    
    def test_symlinked_file_yields_target(self):
        """Test that a symlinked file is yielded once, by its resolved path."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            target = write_file(root / "a.graphql", "")
            (root / "b.graphql").symlink_to(target)
            
            found = list(iter_files(root))
            
            assert found == [target.resolve()]
    
    def test_root_must_be_directory(self):
        """Test that a missing root raises DiscoveryError."""
        with tempfile.TemporaryDirectory() as tmpdir:
            missing = Path(tmpdir) / "missing"
            
            with pytest.raises(DiscoveryError) as excinfo:
                list(iter_files(missing))
            
            assert excinfo.value.path == missing.resolve()
    
    def test_unlistable_directory_is_fatal(self, monkeypatch):
        """Test that listing failures are not silently skipped."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_file(root / "locked" / "a.graphql", "")
            locked = (root / "locked").resolve()
            original_iterdir = Path.iterdir
            
            def fake_iterdir(self):
                if self == locked:
                    raise PermissionError(13, "Permission denied")
                return original_iterdir(self)
            
            monkeypatch.setattr(Path, "iterdir", fake_iterdir)
            
            with pytest.raises(DiscoveryError) as excinfo:
                list(iter_files(root))
            
            assert excinfo.value.path == locked
            assert "Permission denied" in str(excinfo.value)


class TestParser:
    """Tests for reading and parsing documents."""
    
    def test_parse_document(self):
        """Test parsing keeps path and text."""
        path = Path("/repo/a.graphql")
        text = "fragment F on User { id }"
        
        document = parse_document(path, text)
        
        assert document.path == path
        assert document.text == text
        assert len(document.tree.definitions) == 1
    
    def test_syntax_error_includes_location(self):
        """Test that syntax errors carry the path and position."""
        path = Path("/repo/bad.graphql")
        
        with pytest.raises(DocumentParseError) as excinfo:
            parse_document(path, "fragment F on {\n  id\n}")
        
        error = excinfo.value
        assert error.path == path
        assert error.error is not None
        assert "line 1" in error.reason
        assert "bad.graphql" in str(error)
    
    def test_invalid_utf8(self):
        """Test that undecodable files are reported as parse errors."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "binary.graphql"
            path.write_bytes(b"\xff\xfe\x00fragment")
            
            with pytest.raises(DocumentParseError) as excinfo:
                load_document(path)
            
            assert "UTF-8" in excinfo.value.reason
            assert excinfo.value.error is None


class TestLoadDocuments:
    """Tests for loading and indexing a whole tree."""
    
    def test_loads_and_indexes(self):
        """Test that every document is parsed and indexed in order."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_file(root / "a.graphql", "fragment F on User { id }")
            write_file(root / "b.graphql", "query Q { viewer { ...F } }")
            report = RunReport(root)
            
            loaded = load_documents(root, report=report)
            
            assert [doc.path.name for doc, _ in loaded] == ["a.graphql", "b.graphql"]
            assert set(loaded[0][1].defined) == {"F"}
            assert loaded[1][1].external_refs == frozenset({"F"})
            assert [p.name for p in report.scanned] == ["a.graphql", "b.graphql"]
    
    def test_parse_error_aborts_by_default(self):
        """Test that an invalid document fails the load."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_file(root / "a.graphql", "fragment F on User { id }")
            write_file(root / "b.graphql", "query {")
            
            with pytest.raises(DocumentParseError) as excinfo:
                load_documents(root)
            
            assert excinfo.value.path.name == "b.graphql"
    
    def test_skip_invalid(self):
        """Test that skip mode records invalid documents and continues."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_file(root / "a.graphql", "query {")
            write_file(root / "b.graphql", "fragment F on User { id }")
            report = RunReport(root)
            
            loaded = load_documents(root, ExportSettings(on_parse_error="skip"), report)
            
            assert [doc.path.name for doc, _ in loaded] == ["b.graphql"]
            assert [p.name for p in report.skipped] == ["a.graphql"]
            assert [p.name for p in report.scanned] == ["b.graphql"]
