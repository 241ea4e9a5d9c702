"""
End-to-end lookups on a small CMake-like project tree: database in the
project root, sources in nested directories, headers never compiled.
"""
import json
import pytest
from cdbflags import get_compile_options
from cdbflags.cdb import MalformedDatabaseError
from cdbflags.utils.config import ConfigManager
from unittest.mock import patch


@pytest.fixture(autouse=True)
def isolated_config(tmp_path):
    def fake_init(self):
        self.config_dir = tmp_path / ".cdbflags"
        self.config_file = self.config_dir / "config.json"
        self.config = self.load_config()

    with patch.object(ConfigManager, "__init__", fake_init):
        yield


@pytest.fixture
def tree(tmp_path):
    root = tmp_path / "proj"
    build = root / "build"
    for d in ("src/deep", "src/net", "include/proj", "build"):
        (root / d).mkdir(parents=True)
    for f in ("src/deep/file.c", "src/net/socket.c", "include/proj/api.h"):
        (root / f).write_text("")

    (root / "compile_commands.json").write_text(json.dumps([
        {
            "directory": str(build),
            "file": str(root / "src/deep/file.c"),
            "command": f"/usr/bin/cc -I../include -DDEEP -std=c11 -o deep.o -c {root / 'src/deep/file.c'}",
        },
        {
            "directory": str(build),
            "file": "../src/net/socket.c",
            "command": "/usr/bin/cc -isystem /opt/ssl/include -DNET -c ../src/net/socket.c -o net.o",
        },
        {"directory": str(build), "file": "broken.c", "command": "cc \"-DBROKEN broken.c"},
    ]))
    return root


class TestEndToEnd:

    def test_exact_lookup_from_deep_file(self, tree):
        assert get_compile_options(str(tree / "src/deep/file.c")) == ["-I../include", "-DDEEP", "-std=c11"]

    def test_relative_file_entry(self, tree):
        assert get_compile_options(str(tree / "src/net/socket.c")) == ["-isystem", "/opt/ssl/include", "-DNET"]

    def test_new_file_next_to_compiled_one(self, tree):
        assert get_compile_options(str(tree / "src/net/tls.c")) == ["-isystem", "/opt/ssl/include", "-DNET"]

    def test_header_in_include_directory(self, tree):
        flags = get_compile_options(str(tree / "include/proj/api.h"))
        assert flags == ["-I../include", "-DDEEP", "-std=c11"]

    def test_file_outside_known_directories(self, tree):
        assert get_compile_options(str(tree / "tools/gen.c")) is None

    def test_search_start_elsewhere(self, tree):
        flags = get_compile_options(str(tree / "src/deep/file.c"), str(tree / "src"))
        assert flags == ["-I../include", "-DDEEP", "-std=c11"]

    def test_malformed_database_propagates(self, tree):
        (tree / "compile_commands.json").write_text("not json")
        with pytest.raises(MalformedDatabaseError):
            get_compile_options(str(tree / "src/deep/file.c"))
