from shipnext.util.paths import LocalProbe, MemoryProbe


def test_local_probe(tmp_path):
    probe = LocalProbe(tmp_path)
    assert not probe.exists("src-tauri")

    (tmp_path / "src-tauri").mkdir()
    # No caching between calls
    assert probe.exists("src-tauri")
    assert not probe.exists("src-tauri/gen/apple")


def test_memory_probe_children_imply_parents():
    probe = MemoryProbe()
    probe.add("src-tauri/gen/apple")

    assert probe.exists("src-tauri")
    assert probe.exists("src-tauri/gen")
    assert probe.exists("src-tauri/gen/apple/")
    assert not probe.exists("src-tauri/gen/android")
    assert not probe.exists("src")
