import pytest

from termprofile.settings import Changeset, SettingsBackend

PATH = "/profiles/default/"


def test_defaults_and_missing():
    backend = SettingsBackend({"font": "Monospace 12"})
    assert backend.get(PATH, "font") == "Monospace 12"
    assert backend.get(PATH, "unknown") is None


def test_set_and_get():
    backend = SettingsBackend({"allow-bold": True})
    backend.set(PATH, "allow-bold", False)
    assert backend.get(PATH, "allow-bold") is False
    assert backend.get("/profiles/other/", "allow-bold") is True


def test_listener_called_on_change_only():
    backend = SettingsBackend()
    seen = []
    backend.connect(PATH, seen.append)
    backend.set(PATH, "title", "Terminal")
    backend.set(PATH, "title", "Terminal")
    backend.set("/elsewhere/", "title", "x")
    assert seen == ["title"]


def test_disconnect():
    backend = SettingsBackend()
    seen = []
    backend.connect(PATH, seen.append)
    backend.disconnect(PATH, seen.append)
    backend.disconnect(PATH, seen.append)
    backend.set(PATH, "title", "a")
    assert seen == []


def test_locked_key_rejects_write():
    backend = SettingsBackend()
    backend.set_writable(PATH, "font", False)
    assert backend.is_writable(PATH, "font") is False
    with pytest.raises(PermissionError):
        backend.set(PATH, "font", "Sans 10")
    backend.set_writable(PATH, "font", True)
    backend.set(PATH, "font", "Sans 10")
    assert backend.get(PATH, "font") == "Sans 10"


def test_writability_change_notifies():
    backend = SettingsBackend()
    seen = []
    backend.connect(PATH, seen.append)
    backend.set_writable(PATH, "palette", False)
    backend.set_writable(PATH, "palette", False)
    assert seen == ["palette"]


def test_changeset_is_delayed_until_apply():
    backend = SettingsBackend()
    seen = []
    backend.connect(PATH, seen.append)
    changes = backend.changeset(PATH)
    assert isinstance(changes, Changeset)
    changes.set("title", "one")
    changes.set("scrollback-lines", 1000)
    assert backend.get(PATH, "title") is None
    assert changes.pending == {"title": "one", "scrollback-lines": 1000}
    changes.apply()
    assert backend.get(PATH, "title") == "one"
    assert backend.get(PATH, "scrollback-lines") == 1000
    assert sorted(seen) == ["scrollback-lines", "title"]
    assert changes.pending == {}


def test_changeset_rejects_locked_key():
    backend = SettingsBackend()
    backend.set_writable(PATH, "title", False)
    changes = backend.changeset(PATH)
    with pytest.raises(PermissionError):
        changes.set("title", "x")


def test_changeset_context_manager():
    backend = SettingsBackend()
    with backend.changeset(PATH) as changes:
        changes.set("silent-bell", True)
    assert backend.get(PATH, "silent-bell") is True

    with pytest.raises(RuntimeError):
        with backend.changeset(PATH) as changes:
            changes.set("silent-bell", False)
            raise RuntimeError("abort")
    assert backend.get(PATH, "silent-bell") is True


def test_listener_sees_all_values_written():
    backend = SettingsBackend()
    observed = {}

    def on_change(key):
        observed[key] = (backend.get(PATH, "a"), backend.get(PATH, "b"))

    backend.connect(PATH, on_change)
    with backend.changeset(PATH) as changes:
        changes.set("a", 1)
        changes.set("b", 2)
    assert backend.get(PATH, "a") == 1
    assert backend.get(PATH, "b") == 2
    assert observed == {"a": (1, 2), "b": (1, 2)}