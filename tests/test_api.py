import io
from datetime import timedelta

from PIL import Image

from app.auth.roles import SessionContext
from app.models.profile import UserRole
from app.utils.timezones import local_today

from conftest import make_profile


def png_bytes(width, height):
    buf = io.BytesIO()
    Image.new("RGBA", (width, height), (200, 120, 40, 255)).save(buf, format="PNG")
    return buf.getvalue()


async def sign_in(client, session_factory, uid, name, role=UserRole.employee):
    async with session_factory() as session:
        profile = await make_profile(session, uid, name, role)
        client.caller.ctx = SessionContext.from_profile(profile)
    return client.caller.ctx


async def test_shift_flow_over_http(client, session_factory):
    day = (local_today() + timedelta(days=2)).isoformat()

    await sign_in(client, session_factory, "boss", "Šéf", UserRole.admin)
    resp = await client.post("/shifts/", json={"date": day, "start_time": "06:00", "end_time": "14:00"})
    assert resp.status_code == 201
    shift = resp.json()
    assert shift["status"] == "open"

    await sign_in(client, session_factory, "alice", "Alice")
    resp = await client.post(f"/shifts/{shift['id']}/claim")
    assert resp.status_code == 200
    assert resp.json()["assigned_to"] == "alice"

    resp = await client.post(f"/shifts/{shift['id']}/claim")
    assert resp.status_code == 409

    resp = await client.get("/shifts/", params={"view": "mine"})
    assert [s["id"] for s in resp.json()] == [shift["id"]]

    await sign_in(client, session_factory, "bob", "Bob")
    resp = await client.post(f"/shifts/{shift['id']}/release")
    assert resp.status_code == 403


async def test_employee_cannot_create_or_bulk(client, session_factory):
    await sign_in(client, session_factory, "alice", "Alice")
    day = (local_today() + timedelta(days=2)).isoformat()

    assert (await client.post("/shifts/", json={"date": day})).status_code == 403
    assert (await client.post("/shifts/bulk", json={"dates": [day]})).status_code == 403
    assert (await client.post("/announcements/", json={"title": "x", "content": "y"})).status_code == 403
    assert (await client.get("/employees/")).status_code == 403


async def test_bulk_over_http(client, session_factory):
    await sign_in(client, session_factory, "boss", "Šéf", UserRole.admin)
    today = local_today()
    resp = await client.post(
        "/shifts/bulk",
        json={
            "dates": [(today + timedelta(days=n)).isoformat() for n in (1, 2, 3)],
            "template": "ranni",
            "tasks": [{"title": "Otevřít"}, {"title": "Kafe", "priority": "low"}],
        },
    )
    assert resp.status_code == 201
    body = resp.json()
    assert len(body["shifts"]) == 3
    assert len(body["tasks"]) == 6
    assert {s["start_time"] for s in body["shifts"]} == {"06:00"}

    resp = await client.get(f"/shifts/{body['shifts'][0]['id']}/tasks")
    assert sorted(t["title"] for t in resp.json()) == ["Kafe", "Otevřít"]

    bad = await client.post("/shifts/bulk", json={"dates": [today.isoformat()], "template": "custom"})
    assert bad.status_code == 400


async def test_print_view(client, session_factory):
    await sign_in(client, session_factory, "boss", "Šéf", UserRole.admin)
    day = local_today() + timedelta(days=1)
    await client.post("/shifts/", json={"date": day.isoformat(), "position": "Kuchař"})

    resp = await client.get("/shifts/print")
    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
    assert "Kuchař" in resp.text
    assert "VOLNÁ" in resp.text


async def test_task_toggle_over_http(client, session_factory):
    await sign_in(client, session_factory, "boss", "Šéf", UserRole.admin)
    task = (await client.post("/tasks/", json={"title": "Vytřít"})).json()

    await sign_in(client, session_factory, "alice", "Alice")
    first = (await client.post(f"/tasks/{task['id']}/toggle")).json()
    second = (await client.post(f"/tasks/{task['id']}/toggle")).json()
    assert first["status"] == "completed"
    assert first["completed_by"] == "alice"
    assert second["status"] == "pending"
    assert second["completed_at"] is None


async def test_profile_self_update_cannot_change_role(client, session_factory):
    await sign_in(client, session_factory, "alice", "Alice")

    resp = await client.put("/profile/me", json={"role": "admin"})
    assert resp.status_code == 422

    resp = await client.put("/profile/me", json={"phone": "602 000 000"})
    assert resp.status_code == 200
    assert resp.json()["role"] == "employee"
    assert resp.json()["phone"] == "602 000 000"


async def test_admin_manages_employees(client, session_factory):
    await sign_in(client, session_factory, "alice", "Alice")
    await sign_in(client, session_factory, "boss", "Šéf", UserRole.admin)

    resp = await client.put("/employees/alice", json={"position": "Barman", "admin_notes": "spolehlivá"})
    assert resp.status_code == 200
    assert resp.json()["admin_notes"] == "spolehlivá"

    listed = (await client.get("/employees/")).json()
    assert {p["uid"] for p in listed} == {"alice", "boss"}

    assert (await client.delete("/employees/boss")).status_code == 409
    assert (await client.delete("/employees/alice")).status_code == 200


async def test_calendar_and_dashboard(client, session_factory):
    await sign_in(client, session_factory, "boss", "Šéf", UserRole.admin)
    day = local_today() + timedelta(days=1)
    await client.post("/shifts/", json={"date": day.isoformat()})

    resp = await client.get(f"/calendar/{day.year}/{day.month}")
    assert resp.status_code == 200
    body = resp.json()
    assert len(body["days"]) == 42
    cell = next(c for c in body["days"] if c["date"] == day.isoformat())
    assert len(cell["shifts"]) == 1

    assert (await client.get("/calendar/2026/13")).status_code == 400

    dash = await client.get("/dashboard")
    assert dash.status_code == 200
    assert dash.json()["profile"]["uid"] == "boss"
    assert len(dash.json()["upcoming_shifts"]) == 1


async def test_gallery_upload_and_like(client, session_factory, monkeypatch):
    from app.utils import spaces

    uploaded = []

    async def fake_put(*, key, body, content_type):
        uploaded.append((body, content_type))
        return key

    monkeypatch.setattr(spaces, "put_public_object", fake_put)
    monkeypatch.setattr(spaces, "public_url", lambda key: f"https://cdn.test/{key}")

    await sign_in(client, session_factory, "alice", "Alice")
    resp = await client.post(
        "/gallery/",
        files={"file": ("pivo.png", png_bytes(2400, 1600), "image/png")},
        data={"caption": "Nový sud"},
    )
    assert resp.status_code == 201
    photo = resp.json()
    assert photo["image_url"].endswith(".jpg")

    body, content_type = uploaded[0]
    assert content_type == "image/jpeg"
    with Image.open(io.BytesIO(body)) as stored:
        assert stored.format == "JPEG"
        assert stored.size == (1200, 800)

    rejected = await client.post("/gallery/", files={"file": ("notes.txt", b"hello", "text/plain")})
    assert rejected.status_code == 400

    broken = await client.post("/gallery/", files={"file": ("pivo.png", b"\x89PNG fake", "image/png")})
    assert broken.status_code == 400

    await client.put(f"/gallery/{photo['id']}/like")
    liked = await client.put(f"/gallery/{photo['id']}/like")
    assert liked.json()["likes"] == ["alice"]
    unliked = await client.delete(f"/gallery/{photo['id']}/like")
    assert unliked.json()["likes"] == []


async def test_auth_errors_get_localized_message(client):
    resp = await client.post("/auth/jwt/login", data={"username": "nikdo@example.com", "password": "whatever"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "LOGIN_BAD_CREDENTIALS"
    assert resp.json()["message"] == "Nesprávný email nebo heslo"


async def test_register_with_admin_email_is_refused(client):
    from app.auth.config import auth_config

    resp = await client.post("/auth/register", json={"email": auth_config.admin_email, "password": "heslo123"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "REGISTER_USER_ALREADY_EXISTS"
    assert resp.json()["message"] == "Email je již registrován"
