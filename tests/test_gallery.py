import pytest
from fastapi import HTTPException

from app.crud import gallery as gallery_crud
from app.utils import spaces


@pytest.fixture
def storage(monkeypatch):
    """Record what would go to Spaces instead of talking to it."""
    calls = {"put": [], "delete": []}

    async def fake_put(*, key, body, content_type):
        calls["put"].append((key, len(body), content_type))
        return key

    async def fake_delete(key):
        calls["delete"].append(key)

    monkeypatch.setattr(spaces, "put_public_object", fake_put)
    monkeypatch.setattr(spaces, "delete_object", fake_delete)
    monkeypatch.setattr(spaces, "public_url", lambda key: f"https://cdn.test/{key}")
    return calls


async def upload(db, ctx, caption="Grilovačka"):
    return await gallery_crud.upload_photo(
        db, ctx, body=b"\xff\xd8fake-jpeg", content_type="image/jpeg", extension="jpg", caption=caption
    )


async def test_upload_stores_author_and_url(db, alice, storage):
    photo = await upload(db, alice, caption="  Grilovačka  ")

    assert photo.caption == "Grilovačka"
    assert photo.uploaded_by == "alice"
    assert photo.uploaded_by_name == "Alice Nováková"
    assert photo.likes == []
    key, size, content_type = storage["put"][0]
    assert "/alice/" in key and key.endswith(".jpg")
    assert photo.image_url == f"https://cdn.test/{key}"
    assert photo.storage_path == key


async def test_like_is_a_set(db, alice, bob, storage):
    photo = await upload(db, alice)

    await gallery_crud.set_like(db, bob, photo.id, liked=True)
    photo = await gallery_crud.set_like(db, bob, photo.id, liked=True)
    assert photo.likes == ["bob"]

    photo = await gallery_crud.set_like(db, alice, photo.id, liked=True)
    assert sorted(photo.likes) == ["alice", "bob"]

    photo = await gallery_crud.set_like(db, bob, photo.id, liked=False)
    assert photo.likes == ["alice"]

    photo = await gallery_crud.set_like(db, bob, photo.id, liked=False)
    assert photo.likes == ["alice"]


async def test_toggle_like(db, alice, storage):
    photo = await upload(db, alice)
    photo = await gallery_crud.toggle_like(db, alice, photo.id)
    assert photo.likes == ["alice"]
    photo = await gallery_crud.toggle_like(db, alice, photo.id)
    assert photo.likes == []


async def test_like_missing_photo(db, alice):
    with pytest.raises(HTTPException) as exc:
        await gallery_crud.set_like(db, alice, "nope", liked=True)
    assert exc.value.status_code == 404


async def test_only_author_or_admin_deletes(db, admin, alice, bob, storage):
    photo = await upload(db, alice)

    with pytest.raises(HTTPException) as exc:
        await gallery_crud.delete_photo(db, bob, photo.id)
    assert exc.value.status_code == 403

    await gallery_crud.delete_photo(db, admin, photo.id)
    assert storage["delete"] == [photo.storage_path]
    assert await gallery_crud.list_photos(db) == []


async def test_delete_survives_storage_failure(db, alice, storage, monkeypatch):
    photo = await upload(db, alice)

    async def broken_delete(key):
        raise RuntimeError("Spaces is down")

    monkeypatch.setattr(spaces, "delete_object", broken_delete)
    await gallery_crud.delete_photo(db, alice, photo.id)
    assert await gallery_crud.list_photos(db) == []


async def test_list_newest_first(db, alice, storage):
    first = await upload(db, alice, caption="první")
    second = await upload(db, alice, caption="druhá")
    first.created_at = second.created_at.replace(year=second.created_at.year - 1)
    await db.commit()

    photos = await gallery_crud.list_photos(db)
    assert [p.id for p in photos] == [second.id, first.id]
