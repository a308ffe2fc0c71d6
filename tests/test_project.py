"""
Tests for File Source and Project Metadata.
"""

from rta.config import settings
from rta.project.file_source import is_ignored, iter_source_files
from rta.project.metadata import detect_framework, load_project_metadata


def test_walk_skips_non_source_and_dependency_dirs(project_dir):
    paths = [path for path, _ in iter_source_files(project_dir)]
    assert paths == ["src/ItemList.tsx"]


def test_walk_is_sorted_and_posix(tmp_path):
    for rel in ("src/b/Two.tsx", "src/a/One.jsx", "index.ts"):
        target = tmp_path / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("export {};\n", encoding="utf-8")
    paths = [path for path, _ in iter_source_files(tmp_path)]
    assert paths == ["index.ts", "src/a/One.jsx", "src/b/Two.tsx"]


def test_ignore_patterns(project_dir):
    (project_dir / "src" / "ItemList.test.tsx").write_text("test('x', () => {});\n", encoding="utf-8")
    paths = [path for path, _ in iter_source_files(project_dir, ["*.test.tsx"])]
    assert paths == ["src/ItemList.tsx"]


def test_is_ignored_matches_path_or_name():
    assert is_ignored("src/legacy/Old.tsx", ["src/legacy/*"])
    assert is_ignored("src/App.stories.tsx", ["*.stories.tsx"])
    assert not is_ignored("src/App.tsx", ["*.stories.tsx"])


def test_large_files_are_skipped_with_diagnostic(project_dir, monkeypatch):
    monkeypatch.setattr(settings, "max_file_size_bytes", 10)
    diagnostics = []
    assert list(iter_source_files(project_dir, diagnostics=diagnostics)) == []
    assert len(diagnostics) == 1
    assert diagnostics[0].startswith("Skipped src/ItemList.tsx: file too large")


def test_undecodable_files_are_skipped_with_diagnostic(tmp_path):
    (tmp_path / "Bad.tsx").write_bytes(b"\xff\xfe\x00bad")
    (tmp_path / "Good.tsx").write_text("export {};\n", encoding="utf-8")
    diagnostics = []
    paths = [path for path, _ in iter_source_files(tmp_path, diagnostics=diagnostics)]
    assert paths == ["Good.tsx"]
    assert diagnostics[0].startswith("Could not read Bad.tsx")


def test_metadata_from_manifest(project_dir):
    metadata = load_project_metadata(project_dir)
    assert metadata.project_name == "demo-app"
    assert metadata.version == "1.2.3"
    assert metadata.framework == "React"
    assert metadata.dependencies == ["react", "react-dom"]
    assert metadata.dev_dependencies == ["typescript"]
    assert metadata.has_typescript is True


def test_metadata_defaults_without_manifest(tmp_path):
    metadata = load_project_metadata(tmp_path)
    assert metadata.project_name == "Unknown Project"
    assert metadata.framework == "Unknown"
    assert metadata.has_typescript is False


def test_metadata_tolerates_invalid_manifest(tmp_path):
    (tmp_path / "package.json").write_text("{broken", encoding="utf-8")
    (tmp_path / "tsconfig.json").write_text("{}", encoding="utf-8")
    metadata = load_project_metadata(tmp_path)
    assert metadata.project_name == "Unknown Project"
    assert metadata.has_typescript is True


def test_detect_framework_prefers_meta_frameworks():
    assert detect_framework(["next", "react"], []) == "Next.js"
    assert detect_framework(["react-native", "react"], []) == "React Native"
    assert detect_framework([], ["react"]) == "React"
    assert detect_framework(["vue"], []) == "Unknown"
