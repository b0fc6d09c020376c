import pytest
from fastapi import Depends, FastAPI
from httpx import ASGITransport, AsyncClient

from messenger.core import Messenger
from messenger.deps import get_messenger
from messenger.main import create_app
from messenger.session import SessionUnavailableError


@pytest.mark.anyio
async def test_escape_redirect_non_htmx() -> None:
    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        r1 = await ac.get("/demo/escape?msg=Could not save", follow_redirects=False)
        assert r1.status_code == 303
        assert r1.headers.get("location") == "/"

        # Follow redirect: message should be present once
        r2 = await ac.get("/")
        assert "Could not save" in r2.text
        assert "alert-warning" in r2.text

        # Reload: message should be gone
        r3 = await ac.get("/")
        assert "Could not save" not in r3.text
        assert "alert-warning" not in r3.text


@pytest.mark.anyio
async def test_succeed_hx_redirect_header() -> None:
    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        r1 = await ac.get("/demo/succeed?msg=Hello HX", headers={"HX-Request": "true"})
        assert r1.status_code == 204
        assert r1.headers.get("HX-Redirect") == "/"

        # After redirect (simulated), message should appear once
        r2 = await ac.get("/")
        assert "Hello HX" in r2.text
        assert "alert-success" in r2.text

        r3 = await ac.get("/")
        assert "Hello HX" not in r3.text


@pytest.mark.anyio
async def test_user_supplied_markup_is_shown_as_text() -> None:
    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        await ac.get("/demo/escape", params={"msg": "<script>x()</script>"}, follow_redirects=False)
        resp = await ac.get("/")

    assert "<script>x()</script>" not in resp.text
    assert "&lt;script&gt;x()&lt;/script&gt;" in resp.text


@pytest.mark.anyio
async def test_halt_from_nested_helper() -> None:
    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        r1 = await ac.get("/demo/halt", follow_redirects=False)
        assert r1.status_code == 303
        assert r1.headers.get("location") == "/"
        assert "Invalid token" in (await ac.get("/")).text

        r2 = await ac.get("/demo/halt?token=letmein", follow_redirects=False)
        assert r2.status_code == 303
        page = (await ac.get("/")).text
        assert "Token accepted" in page
        assert "Invalid token" not in page


@pytest.mark.anyio
async def test_halt_success_path_hx_redirect() -> None:
    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        resp = await ac.get("/demo/halt?token=letmein", headers={"HX-Request": "true"})
        assert resp.status_code == 204
        assert resp.headers.get("HX-Redirect") == "/"
        assert "location" not in resp.headers

        assert "Token accepted" in (await ac.get("/")).text


@pytest.mark.anyio
async def test_default_route_from_settings(monkeypatch) -> None:
    monkeypatch.setenv("MSG_DEFAULT_ROUTE", "/done")
    monkeypatch.setenv("MSG_REDIRECT_STATUS", "302")

    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        resp = await ac.get("/demo/succeed", follow_redirects=False)

    assert resp.status_code == 302
    assert resp.headers.get("location") == "/done"


@pytest.mark.anyio
async def test_clients_do_not_share_messages() -> None:
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as alice, AsyncClient(
        transport=transport, base_url="http://test"
    ) as bob:
        await alice.get("/demo/escape?msg=Only for alice", follow_redirects=False)

        assert "Only for alice" not in (await bob.get("/")).text
        assert "Only for alice" in (await alice.get("/")).text


@pytest.mark.anyio
async def test_missing_session_middleware_surfaces() -> None:
    app = FastAPI()

    @app.get("/")
    def index(messenger: Messenger = Depends(get_messenger)) -> dict[str, bool]:
        return {"has_message": messenger.has_message()}

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        with pytest.raises(SessionUnavailableError):
            await ac.get("/")
