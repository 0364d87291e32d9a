import pytest

from conftest import new_listing
from flatmate.core.errors import AuthenticationRequired, NotFoundError
from flatmate.models.saved_listing import SavedListing
from flatmate.services.listings import create_listing, delete_listing
from flatmate.services.saved import is_saved, list_saved, save_listing, saved_listing_ids, unsave_listing


def test_saving_twice_keeps_one_edge(db):
    listing = create_listing(db, new_listing(), "owner")
    save_listing(db, "u1", listing.id)
    first_saved_at = db.query(SavedListing).one().saved_at

    save_listing(db, "u1", listing.id)
    edges = db.query(SavedListing).filter(SavedListing.user_id == "u1").all()
    assert len(edges) == 1
    assert edges[0].saved_at == first_saved_at
    assert len(list_saved(db, "u1")) == 1


def test_save_missing_listing(db):
    with pytest.raises(NotFoundError):
        save_listing(db, "u1", "missing")


def test_unsave_is_idempotent(db):
    listing = create_listing(db, new_listing(), "owner")
    unsave_listing(db, "u1", listing.id)
    save_listing(db, "u1", listing.id)
    unsave_listing(db, "u1", listing.id)
    unsave_listing(db, "u1", listing.id)
    assert list_saved(db, "u1") == []
    assert not is_saved(db, "u1", listing.id)


def test_saved_listings_are_most_recent_first(db):
    a = create_listing(db, new_listing(title="A"), "owner")
    b = create_listing(db, new_listing(title="B"), "owner")
    save_listing(db, "u1", b.id)
    save_listing(db, "u1", a.id)
    assert [l.title for l in list_saved(db, "u1")] == ["A", "B"]
    assert saved_listing_ids(db, "u1") == [a.id, b.id]


def test_saved_listings_are_per_user(db):
    listing = create_listing(db, new_listing(), "owner")
    save_listing(db, "u1", listing.id)
    assert list_saved(db, "u2") == []
    assert is_saved(db, "u1", listing.id)


def test_deleted_listing_drops_out_of_saved(db):
    keep = create_listing(db, new_listing(title="keep"), "owner")
    gone = create_listing(db, new_listing(title="gone"), "owner")
    for user in ("u1", "u2"):
        save_listing(db, user, keep.id)
        save_listing(db, user, gone.id)

    delete_listing(db, gone.id, "owner")

    for user in ("u1", "u2"):
        assert [l.id for l in list_saved(db, user)] == [keep.id]
        assert gone.id not in saved_listing_ids(db, user)


def test_registry_requires_a_user(db):
    listing = create_listing(db, new_listing(), "owner")
    with pytest.raises(AuthenticationRequired):
        save_listing(db, None, listing.id)
    with pytest.raises(AuthenticationRequired):
        list_saved(db, None)
