import subprocess

import pytest

from appdeck import categorizer
from appdeck.categorizer import (
    auto_categorize,
    classify_category_identifier,
    read_bundle_category,
)
from appdeck.constants import TAXONOMY


@pytest.mark.parametrize("identifier, expected", [
    ("public.app-category.developer-tools", "Development"),
    ("public.app-category.social-networking", "Social"),
    ("public.app-category.graphics-design", "Design"),
    ("public.app-category.photography", "Design"),
    ("public.app-category.video", "Design"),
    ("public.app-category.productivity", "Productivity"),
    ("public.app-category.business", "Productivity"),
    ("public.app-category.finance", "Productivity"),
    ("public.app-category.utilities", "Productivity"),
    ("PUBLIC.APP-CATEGORY.DEVELOPER-TOOLS", "Development"),
    ("public.app-category.games", None),
    ("", None),
    (None, None),
])
def test_classify_identifier(identifier, expected):
    assert classify_category_identifier(identifier) == expected


def test_read_bundle_category_without_info_plist(tmp_path):
    assert read_bundle_category(str(tmp_path / "Empty.app")) is None


def _bundle_with_plist(tmp_path, name="Xcode"):
    contents = tmp_path / f"{name}.app" / "Contents"
    contents.mkdir(parents=True)
    (contents / "Info.plist").write_text("<plist/>", encoding="utf-8")
    return str(tmp_path / f"{name}.app")


def test_read_bundle_category_uses_defaults(tmp_path, monkeypatch):
    bundle = _bundle_with_plist(tmp_path)
    seen = []

    def fake_run(cmd, **kwargs):
        seen.append(cmd)
        return subprocess.CompletedProcess(cmd, 0, stdout="public.app-category.developer-tools\n", stderr="")

    monkeypatch.setattr(categorizer.subprocess, "run", fake_run)
    assert read_bundle_category(bundle) == "public.app-category.developer-tools"
    assert seen[0] == ["defaults", "read", f"{bundle}/Contents/Info", "LSApplicationCategoryType"]


def test_read_bundle_category_nonzero_exit(tmp_path, monkeypatch):
    bundle = _bundle_with_plist(tmp_path)
    monkeypatch.setattr(
        categorizer.subprocess, "run",
        lambda cmd, **kwargs: subprocess.CompletedProcess(cmd, 1, stdout="", stderr="does not exist"),
    )
    assert read_bundle_category(bundle) is None


def test_read_bundle_category_spawn_error(tmp_path, monkeypatch):
    bundle = _bundle_with_plist(tmp_path)

    def no_defaults(*args, **kwargs):
        raise FileNotFoundError("defaults")

    monkeypatch.setattr(categorizer.subprocess, "run", no_defaults)
    assert read_bundle_category(bundle) is None


READER_TABLE = {
    "/Applications/Xcode.app": "public.app-category.developer-tools",
    "/Applications/Slack.app": "public.app-category.social-networking",
    "/Applications/Chess.app": "public.app-category.board-games",
    "/Applications/Odd.app": None,
}


def table_reader(path):
    return READER_TABLE.get(path)


def test_auto_categorize_assigns_known_types(store):
    n = auto_categorize(store, list(READER_TABLE), reader=table_reader)
    assert n == 2
    cfg = store.load()
    assert cfg.categories == {
        "/Applications/Xcode.app": "Development",
        "/Applications/Slack.app": "Social",
    }


def test_auto_categorize_keeps_user_choice(store):
    store.set_category("/Applications/Xcode.app", "Tools")
    auto_categorize(store, ["/Applications/Xcode.app"], reader=table_reader)
    assert store.load().categories["/Applications/Xcode.app"] == "Tools"


def test_auto_categorize_restores_removed_taxonomy_name(store):
    store.remove_category("Social")
    auto_categorize(store, ["/Applications/Slack.app"], reader=table_reader)
    cfg = store.load()
    assert cfg.user_categories == [c for c in TAXONOMY if c != "Social"] + ["Social"]


def test_second_run_does_not_write(store, monkeypatch):
    auto_categorize(store, list(READER_TABLE), reader=table_reader)

    writes = []
    monkeypatch.setattr(store, "save", lambda cfg: writes.append(cfg) or True)
    assert auto_categorize(store, list(READER_TABLE), reader=table_reader) == 0
    assert writes == []


def test_batch_is_written_once(store, monkeypatch):
    writes = []
    real_save = store.save
    monkeypatch.setattr(store, "save", lambda cfg: writes.append(1) or real_save(cfg))
    auto_categorize(store, list(READER_TABLE), reader=table_reader)
    assert writes == [1]


def test_reader_exception_is_isolated(store):
    def reader(path):
        if "Xcode" in path:
            raise RuntimeError("plist exploded")
        return table_reader(path)

    assert auto_categorize(store, list(READER_TABLE), reader=reader) == 1
    assert store.load().categories == {"/Applications/Slack.app": "Social"}


def test_auto_categorize_puts_category_back_in_order(store):
    store.remove_category("Social")
    store.set_category_order(["All", "Frequent", "System"])
    assert "Social" not in store.load().category_order

    auto_categorize(store, ["/Applications/Slack.app"], reader=table_reader)
    cfg = store.load()
    assert "Social" in cfg.user_categories
    assert "Social" in cfg.category_order
