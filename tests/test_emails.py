import pytest

from persona_core import UnknownEmail


def test_add_and_get_email(store):
    store.add_email("a@x.com", {"pub": "k", "priv": "s"})
    store.add_email("b@x.com")
    assert store.get_email("a@x.com") == {"pub": "k", "priv": "s"}
    assert store.get_email("b@x.com") == {}
    assert store.get_email("c@x.com") is None
    assert store.get_email_count() == 2
    assert set(store.get_emails()) == {"a@x.com", "b@x.com"}


def test_add_email_upserts(store):
    store.add_email("a@x.com", {"pub": "old"})
    store.add_email("a@x.com", {"pub": "new"})
    assert store.get_email("a@x.com") == {"pub": "new"}
    assert store.get_email_count() == 1


def test_remove_email_cascades_to_sites_and_logins(store):
    store.add_email("a@x.com", {"pub": "k"})
    store.add_email("b@x.com", {"pub": "j"})
    store.site.set("one.com", "email", "a@x.com")
    store.site.set("one.com", "remember", True)
    store.site.set("two.com", "email", "b@x.com")
    store.set_logged_in("one.com", "a@x.com")
    store.set_logged_in("three.com", "a@x.com")
    store.set_logged_in("two.com", "b@x.com")

    store.remove_email("a@x.com")

    assert store.get_email("a@x.com") is None
    assert store.site.get("one.com", "email") is None
    assert store.site.get("one.com", "remember") is True
    assert store.site.get("two.com", "email") == "b@x.com"
    assert store.get_logged_in("one.com") is None
    assert store.get_logged_in("three.com") is None
    assert store.get_logged_in("two.com") == "b@x.com"
    assert store.logged_in_count() == 1


def test_remove_email_twice_fails(store):
    store.add_email("a@x.com")
    store.remove_email("a@x.com")
    with pytest.raises(UnknownEmail):
        store.remove_email("a@x.com")


def test_invalidate_email_strips_key_material(store):
    store.add_email("a@x.com", {"priv": "s", "pub": "k", "cert": "c", "verified": True})
    store.invalidate_email("a@x.com")
    assert store.get_email("a@x.com") == {"verified": True}
    assert store.get_email_count() == 1


def test_invalidate_unknown_email_fails(store):
    with pytest.raises(UnknownEmail):
        store.invalidate_email("nobody@x.com")


def test_corrupt_registry_clears_everything(store, backing):
    store.add_email("a@x.com")
    store.site.set("one.com", "email", "a@x.com")
    backing.set("emails", "{broken")

    assert store.get_emails() == {}
    assert backing.get("emails") == "{}"
    assert store.site.count() == 0


def test_null_registry_is_corrupt(store, backing):
    backing.set("emails", "null")
    assert store.get_email_count() == 0
    assert backing.get("emails") == "{}"


def test_end_to_end_site_association(store):
    store.add_email("a@x.com", {"pub": "k"})
    store.site.set("example.com", "email", "a@x.com")
    with pytest.raises(UnknownEmail):
        store.site.set("example.com", "email", "b@x.com")
    assert store.site.get("example.com", "email") == "a@x.com"

    store.remove_email("a@x.com")
    assert store.site.get("example.com", "email") is None
