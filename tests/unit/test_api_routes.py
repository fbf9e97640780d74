"""Tests for the FastAPI layer."""

from __future__ import annotations

import json

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from charsheet.api.app import create_app
from charsheet.api.runtime import ApiState
from charsheet.config import Settings
from charsheet.repository import SqlSpellRepository
from charsheet.services import SpellService, SrdClient

SPELL = {
    "index": "magic-missile",
    "name": "Magic Missile",
    "level": 1,
    "school": {"name": "Evocation"},
    "casting_time": "1 action",
    "range": "120 feet",
    "duration": "Instantaneous",
    "desc": ["Three glowing darts."],
    "classes": [{"name": "Sorcerer"}, {"name": "Wizard"}],
}


def _srd_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path.endswith("/spells"):
        return httpx.Response(200, json={"count": 1, "results": [{"index": "magic-missile"}]})
    return httpx.Response(200, json=SPELL)


def _make_app(tmp_path, *, storage_backend: str = "sql"):
    def factory() -> ApiState:
        settings = Settings(
            database_url="sqlite:///:memory:",
            storage_backend=storage_backend,
            data_dir=tmp_path / "characters",
        )
        state = ApiState(settings=settings)
        state.srd_client.close()
        state.srd_client = SrdClient(
            "https://srd.test/api/spells", transport=httpx.MockTransport(_srd_handler)
        )
        state.spells = SpellService(SqlSpellRepository(state.session_factory), state.srd_client)
        return state

    app = create_app(state_factory=factory)
    transport = ASGITransport(app=app)
    return app, transport


async def _create_character(client: AsyncClient, payload: dict[str, object]) -> dict:
    response = await client.post("/api/characters", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
@pytest.mark.parametrize("storage_backend", ["sql", "json"])
async def test_character_crud_via_api(tmp_path, character_payload, storage_backend):
    app, transport = _make_app(tmp_path, storage_backend=storage_backend)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        response = await client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["storage_backend"] == storage_backend

        created = await _create_character(client, character_payload)
        assert created["class"] == "Wizard"
        assert created["slug"].startswith("gandalf-the-grey-")
        character_id = created["id"]

        response = await client.get("/api/characters")
        assert [c["id"] for c in response.json()] == [character_id]

        response = await client.get(f"/api/characters/by-slug/{created['slug']}")
        assert response.status_code == 200
        assert response.json()["id"] == character_id

        response = await client.put(
            f"/api/characters/{character_id}", json={"name": "Gandalf the White"}
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Gandalf the White"
        assert response.json()["slug"] == created["slug"]

        response = await client.delete(f"/api/characters/{character_id}")
        assert response.status_code == 204

        response = await client.get(f"/api/characters/{character_id}")
        assert response.status_code == 404


@pytest.mark.asyncio
async def test_validation_errors_return_422(tmp_path, character_payload):
    app, transport = _make_app(tmp_path)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        response = await client.post("/api/characters", json=dict(character_payload, level=0))
        assert response.status_code == 422

        created = await _create_character(client, character_payload)
        response = await client.put(f"/api/characters/{created['id']}", json={"name": None})
        assert response.status_code == 422

        response = await client.post(
            f"/api/characters/{created['id']}/saving-throws/LUCK/toggle"
        )
        assert response.status_code == 422

        response = await client.post(f"/api/characters/{created['id']}/spells/10/use")
        assert response.status_code == 422


@pytest.mark.asyncio
@pytest.mark.parametrize("storage_backend", ["sql", "json"])
async def test_non_finite_numbers_return_422(tmp_path, character_payload, storage_backend):
    app, transport = _make_app(tmp_path, storage_backend=storage_backend)
    headers = {"content-type": "application/json"}

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        # json.dumps writes these as the bare tokens Infinity and NaN
        payload = dict(character_payload, armor_class={"base": float("nan")})
        response = await client.post("/api/characters", content=json.dumps(payload), headers=headers)
        assert response.status_code == 422

        created = await _create_character(client, character_payload)
        response = await client.put(
            f"/api/characters/{created['id']}/ac",
            content=json.dumps({"override": float("inf")}),
            headers=headers,
        )
        assert response.status_code == 422

        response = await client.get("/api/characters")
        assert response.status_code == 200
        assert [c["id"] for c in response.json()] == [created["id"]]


@pytest.mark.asyncio
async def test_action_endpoints(tmp_path, character_payload):
    app, transport = _make_app(tmp_path)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        character_id = (await _create_character(client, character_payload))["id"]
        base = f"/api/characters/{character_id}"

        response = await client.post(f"{base}/damage", json={"amount": 10})
        assert response.json()["hp"]["current"] == 22

        response = await client.post(f"{base}/heal", json={"amount": 3})
        assert response.json()["hp"]["current"] == 25

        response = await client.post(f"{base}/skills/Stealth/toggle")
        stealth = next(s for s in response.json()["skills"] if s["name"] == "Stealth")
        assert stealth["proficient"] is True

        response = await client.post(f"{base}/saving-throws/CON/toggle")
        assert response.json()["saving_throw_proficiencies"] == ["INT", "WIS", "CON"]

        response = await client.post(f"{base}/equipment", json={"name": "Pipe", "weight": 0.5})
        assert response.status_code == 200
        item = response.json()["equipment"][-1]
        assert item["name"] == "Pipe"

        response = await client.delete(f"{base}/equipment/{item['id']}")
        assert all(i["id"] != item["id"] for i in response.json()["equipment"])

        response = await client.put(f"{base}/ac", json={"override": 17})
        assert response.json()["armor_class"]["override"] == 17

        response = await client.get(f"{base}/stats")
        assert response.status_code == 200
        stats = response.json()
        assert stats["armor_class"] == 17
        assert stats["proficiency_bonus"] == 3
        assert stats["saving_throws"]["INT"] == 7

        response = await client.put(f"{base}/ac", json={"override": None})
        assert response.json()["armor_class"]["override"] is None

        for _ in range(3):
            response = await client.post(f"{base}/spells/2/use")
            assert response.status_code == 200
        response = await client.post(f"{base}/spells/2/use")
        assert response.status_code == 400
        assert response.json()["detail"] == "No available spell slots at level 2"

        response = await client.post(f"{base}/spells/2/restore")
        assert response.json()["spell_slots"][1]["used"] == 2

        response = await client.post(f"{base}/long-rest")
        assert [slot["used"] for slot in response.json()["spell_slots"]] == [0, 0]


@pytest.mark.asyncio
async def test_actions_on_missing_character_return_404(tmp_path):
    app, transport = _make_app(tmp_path)
    missing = "/api/characters/00000000-0000-4000-8000-000000000000"

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        assert (await client.post(f"{missing}/damage", json={"amount": 1})).status_code == 404
        assert (await client.post(f"{missing}/long-rest")).status_code == 404
        assert (await client.get(f"{missing}/stats")).status_code == 404
        assert (await client.delete(missing)).status_code == 404
        assert (await client.get("/api/characters/by-slug/nobody-0000")).status_code == 404


@pytest.mark.asyncio
async def test_spell_endpoints(tmp_path):
    app, transport = _make_app(tmp_path)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        response = await client.get("/api/spells")
        assert response.status_code == 200
        assert [s["index"] for s in response.json()] == ["magic-missile"]

        response = await client.get("/api/spells", params={"class": "wizard", "level": 1})
        assert [s["name"] for s in response.json()] == ["Magic Missile"]

        response = await client.get("/api/spells", params={"school": "necromancy"})
        assert response.json() == []

        response = await client.get("/api/spells/magic-missile")
        assert response.status_code == 200
        assert response.json()["classes"] == ["Sorcerer", "Wizard"]

        response = await client.get("/api/spells/wish")
        assert response.status_code == 404

        response = await client.post("/api/spells/refresh")
        assert response.json() == {"cached": 1}
