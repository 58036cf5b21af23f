import subprocess

import pytest

from appdeck import fs_discovery
from appdeck.errors import ProbeFailure
from appdeck.fs_discovery import (
    discover_bundles,
    is_top_level_bundle,
    mdfind_command,
    modified_seconds,
    parse_mdfind_output,
    run_command,
)


def _zero(path):
    return 0


def test_mdfind_command_scopes_every_root():
    cmd = mdfind_command(["/Applications", "/System/Applications"])
    assert cmd[0] == "mdfind"
    assert cmd[1:5] == ["-onlyin", "/Applications", "-onlyin", "/System/Applications"]
    assert cmd[-1] == "kMDItemContentTypeTree == 'com.apple.application-bundle'"


def test_nested_and_non_bundle_paths_are_dropped():
    assert is_top_level_bundle("/Applications/Xcode.app")
    assert not is_top_level_bundle("/Applications/Xcode.app/Contents/Developer/Simulator.app")
    assert not is_top_level_bundle("/Applications/readme.txt")
    assert not is_top_level_bundle("/Applications/Folder")


def test_duplicate_and_nested_copy_yield_one_entry():
    out = "\n".join([
        "/Applications/Safari.app",
        "/Applications/Other.app/Contents/Helpers/Safari.app",
        "/Applications/Safari.app",
    ])
    bundles = parse_mdfind_output(out, mtime=_zero)
    assert [b.path for b in bundles] == ["/Applications/Safari.app"]
    assert bundles[0].display_name == "Safari"


def test_system_classification_by_prefix():
    out = "/System/Applications/Notes.app\n/Applications/Utilities/Terminal.app\n/Applications/Slack.app\n"
    by_name = {b.display_name: b for b in parse_mdfind_output(out, mtime=_zero)}
    assert by_name["Notes"].is_system
    assert by_name["Terminal"].is_system
    assert not by_name["Slack"].is_system


def test_sorted_case_insensitive_then_by_path():
    out = "\n".join([
        "/Users/me/Applications/zoom.app",
        "/Applications/Zoom.app",
        "/Applications/arc.app",
        "/Applications/Bear.app",
    ])
    paths = [b.path for b in parse_mdfind_output(out, mtime=_zero)]
    assert paths == [
        "/Applications/arc.app",
        "/Applications/Bear.app",
        "/Applications/Zoom.app",
        "/Users/me/Applications/zoom.app",
    ]


def test_blank_lines_ignored():
    assert parse_mdfind_output("\n\n   \n", mtime=_zero) == []


def test_modified_seconds_zero_for_missing_path(tmp_path):
    assert modified_seconds(str(tmp_path / "Gone.app")) == 0


def test_modified_seconds_reads_mtime(tmp_path):
    app = tmp_path / "Here.app"
    app.mkdir()
    assert modified_seconds(str(app)) == int(app.stat().st_mtime)


def test_mtime_failure_does_not_drop_entry():
    def flaky(path):
        return 0 if "Broken" in path else 1700000000

    bundles = parse_mdfind_output("/Applications/Broken.app\n/Applications/Fine.app", mtime=flaky)
    assert [(b.display_name, b.last_modified) for b in bundles] == [("Broken", 0), ("Fine", 1700000000)]


def test_probe_failure_gives_empty_list():
    def failing_runner(cmd):
        raise ProbeFailure("mdfind failed (rc=1)")

    assert discover_bundles(runner=failing_runner) == []


def test_discover_uses_runner_output():
    seen = []

    def runner(cmd):
        seen.append(cmd)
        return "/Applications/Maps.app\n"

    bundles = discover_bundles(roots=["/Applications"], runner=runner, mtime=_zero, mdfind="/usr/bin/mdfind")
    assert seen[0][0] == "/usr/bin/mdfind"
    assert [b.display_name for b in bundles] == ["Maps"]


def test_run_command_missing_binary_raises_probe_failure(monkeypatch):
    def no_binary(*args, **kwargs):
        raise FileNotFoundError("mdfind")

    monkeypatch.setattr(fs_discovery.subprocess, "run", no_binary)
    with pytest.raises(ProbeFailure, match="mdfind"):
        run_command(["mdfind", "x"])


def test_run_command_nonzero_exit_raises_probe_failure(monkeypatch):
    def nonzero(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 2, stdout="", stderr="boom")

    monkeypatch.setattr(fs_discovery.subprocess, "run", nonzero)
    with pytest.raises(ProbeFailure, match="rc=2"):
        run_command(["mdfind", "x"])
