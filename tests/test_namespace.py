import json

import pytest

from persona_core import ClientStorage
from persona_core.constants import NAMESPACE_DEFAULTS
from persona_core.storage import InMemoryStorage, NamespaceStore, SQLiteStorage, load_storage_provider
from persona_core.utils import decode_or_default


def test_decode_or_default():
    assert decode_or_default(None, {}) == ({}, False)
    assert decode_or_default('{"a": 1}', {}, dict) == ({"a": 1}, False)
    assert decode_or_default("{not json", {}, dict) == ({}, True)
    assert decode_or_default("null", {}, dict) == ({}, True)
    assert decode_or_default("[1, 2]", {}, dict) == ({}, True)


def test_defaults_seeded_at_construction(backing, store):
    for namespace, default in NAMESPACE_DEFAULTS.items():
        assert json.loads(backing.get(namespace)) == default


def test_set_default_values_keeps_existing_values(backing):
    backing.set("emails", '{"a@x.com": {}}')
    backing.set("siteInfo", "")
    ClientStorage(backing)
    assert json.loads(backing.get("emails")) == {"a@x.com": {}}
    assert backing.get("siteInfo") == "{}"


def test_corrupt_namespace_reads_as_default(backing):
    ns = NamespaceStore(backing)
    backing.set("siteInfo", "}}}")
    assert ns.get("siteInfo") == {}
    assert ns.read("siteInfo") == ({}, True)


def test_clear_reseeds_and_preserves_trust_and_login(store, backing):
    store.add_email("a@x.com", {"pub": "k"})
    store.site.set("example.com", "email", "a@x.com")
    store.manage_page.set("tab", "emails")
    store.set_logged_in("example.com", "a@x.com")
    store.update_email_to_user_id_mapping(7, ["a@x.com"])
    store.users_computer.set_confirmed(7)
    store.sign_in_email.set("a@x.com")

    store.clear()

    assert store.get_emails() == {}
    assert store.site.count() == 0
    assert store.manage_page.get("tab") is None
    assert backing.get("emails") == "{}"
    assert store.get_logged_in("example.com") == "a@x.com"
    assert store.map_email_to_user_id("a@x.com") == 7
    assert store.users_computer.confirmed(7)
    assert store.sign_in_email.get() == "a@x.com"


def test_sqlite_provider_roundtrip(tmp_path):
    db_path = tmp_path / "state.db"
    s = SQLiteStorage(str(db_path))
    s.set("emails", '{"a@x.com": {}}')
    s.set("emails", '{"b@x.com": {}}')
    assert s.get("emails") == '{"b@x.com": {}}'
    assert s.keys() == ["emails"]
    s.remove("emails")
    assert s.get("emails") is None
    s.close()


def test_sqlite_state_survives_reopen(tmp_path):
    db_path = str(tmp_path / "state.db")
    first = ClientStorage(SQLiteStorage(db_path))
    first.add_email("a@x.com", {"pub": "k"})
    first.close()

    second = ClientStorage(SQLiteStorage(db_path))
    assert second.get_email("a@x.com") == {"pub": "k"}
    second.close()


def test_load_storage_provider_modes(monkeypatch, tmp_path):
    monkeypatch.setenv("PERSONA_STORAGE_PROVIDER", "memory")
    assert isinstance(load_storage_provider(), InMemoryStorage)

    monkeypatch.delenv("PERSONA_STORAGE_PROVIDER", raising=False)
    monkeypatch.setenv("PERSONA_DB_PATH", str(tmp_path / "env.db"))
    assert isinstance(load_storage_provider(), SQLiteStorage)

    provider = load_storage_provider({"provider": "sqlite", "sqlite_path": str(tmp_path / "cfg.db")})
    assert provider.path.endswith("cfg.db")

    with pytest.raises(ValueError):
        load_storage_provider({"provider": "floppy"})
