"""HTTP routes for the character sheet API."""

from __future__ import annotations

import asyncio
from typing import Annotated, TypeVar

import httpx
from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request, status
from pydantic import BaseModel, Field

from charsheet.api.runtime import ApiState
from charsheet.database import check_database_health
from charsheet.domain.enums import AbilityKey
from charsheet.errors import DomainRuleViolation, SlugCollisionError, SrdFetchError
from charsheet.schemas import (
    CharacterCreate,
    CharacterRead,
    CharacterStatsRead,
    CharacterUpdate,
    EquipmentItemCreate,
    FiniteFloat,
    SpellFilters,
    SrdSpell,
)

router = APIRouter(prefix="/api")

T = TypeVar("T")


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]
SpellLevel = Annotated[int, Path(ge=1, le=9)]


class AmountRequest(BaseModel):
    amount: int = Field(..., description="Hit points to remove or restore; non-positive is a no-op")


class ArmorClassOverrideRequest(BaseModel):
    override: FiniteFloat | None = Field(..., description="Manual armor class, or null to clear it")


class RefreshResponse(BaseModel):
    cached: int


def _found(value: T | None, what: str = "character") -> T:
    if value is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{what} not found")
    return value


def _read(character: object | None) -> CharacterRead:
    return CharacterRead.model_validate(_found(character))


@router.get("/health")
async def health(state: ApiStateDep) -> dict[str, object]:
    return {
        "status": "ok",
        "database": check_database_health(state.engine),
        "storage_backend": state.settings.storage_backend.value,
    }


# --- Characters --------------------------------------------------------------


@router.get("/characters", response_model=list[CharacterRead])
async def list_characters(state: ApiStateDep) -> list[CharacterRead]:
    return [CharacterRead.model_validate(c) for c in state.characters.list_characters()]


@router.post(
    "/characters",
    response_model=CharacterRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_character(request: CharacterCreate, state: ApiStateDep) -> CharacterRead:
    try:
        character = state.characters.create_character(request)
    except SlugCollisionError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.message) from exc
    return CharacterRead.model_validate(character)


@router.get("/characters/by-slug/{slug}", response_model=CharacterRead)
async def get_character_by_slug(slug: str, state: ApiStateDep) -> CharacterRead:
    return _read(state.characters.get_character_by_slug(slug))


@router.get("/characters/{character_id}", response_model=CharacterRead)
async def get_character(character_id: str, state: ApiStateDep) -> CharacterRead:
    return _read(state.characters.get_character(character_id))


@router.put("/characters/{character_id}", response_model=CharacterRead)
async def update_character(
    character_id: str, request: CharacterUpdate, state: ApiStateDep
) -> CharacterRead:
    return _read(state.characters.update_character(character_id, request))


@router.delete("/characters/{character_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_character(character_id: str, state: ApiStateDep) -> None:
    if not state.characters.delete_character(character_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="character not found")


@router.get("/characters/{character_id}/stats", response_model=CharacterStatsRead)
async def character_stats(character_id: str, state: ApiStateDep) -> CharacterStatsRead:
    stats = _found(state.characters.character_stats(character_id))
    return CharacterStatsRead.model_validate(stats)


@router.post("/characters/{character_id}/damage", response_model=CharacterRead)
async def deal_damage(
    character_id: str, request: AmountRequest, state: ApiStateDep
) -> CharacterRead:
    return _read(state.characters.deal_damage(character_id, request.amount))


@router.post("/characters/{character_id}/heal", response_model=CharacterRead)
async def heal_character(
    character_id: str, request: AmountRequest, state: ApiStateDep
) -> CharacterRead:
    return _read(state.characters.heal_character(character_id, request.amount))


@router.post("/characters/{character_id}/skills/{skill_name}/toggle", response_model=CharacterRead)
async def toggle_skill(character_id: str, skill_name: str, state: ApiStateDep) -> CharacterRead:
    return _read(state.characters.toggle_skill_proficiency(character_id, skill_name))


@router.post(
    "/characters/{character_id}/saving-throws/{ability_key}/toggle",
    response_model=CharacterRead,
)
async def toggle_saving_throw(
    character_id: str, ability_key: AbilityKey, state: ApiStateDep
) -> CharacterRead:
    return _read(state.characters.toggle_saving_throw_proficiency(character_id, ability_key))


@router.post("/characters/{character_id}/equipment", response_model=CharacterRead)
async def add_equipment(
    character_id: str, request: EquipmentItemCreate, state: ApiStateDep
) -> CharacterRead:
    return _read(state.characters.add_equipment(character_id, request))


@router.delete("/characters/{character_id}/equipment/{item_id}", response_model=CharacterRead)
async def remove_equipment(character_id: str, item_id: str, state: ApiStateDep) -> CharacterRead:
    return _read(state.characters.remove_equipment(character_id, item_id))


@router.post("/characters/{character_id}/spells/{level}/use", response_model=CharacterRead)
async def use_spell_slot(character_id: str, level: SpellLevel, state: ApiStateDep) -> CharacterRead:
    try:
        character = state.characters.use_spell_slot(character_id, level)
    except DomainRuleViolation as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc
    return _read(character)


@router.post("/characters/{character_id}/spells/{level}/restore", response_model=CharacterRead)
async def restore_spell_slot(
    character_id: str, level: SpellLevel, state: ApiStateDep
) -> CharacterRead:
    return _read(state.characters.restore_spell_slot(character_id, level))


@router.post("/characters/{character_id}/long-rest", response_model=CharacterRead)
async def long_rest(character_id: str, state: ApiStateDep) -> CharacterRead:
    return _read(state.characters.long_rest(character_id))


@router.put("/characters/{character_id}/ac", response_model=CharacterRead)
async def set_ac_override(
    character_id: str, request: ArmorClassOverrideRequest, state: ApiStateDep
) -> CharacterRead:
    return _read(state.characters.set_ac_override(character_id, request.override))


# --- SRD spells --------------------------------------------------------------


@router.get("/spells", response_model=list[SrdSpell])
async def list_spells(
    state: ApiStateDep,
    name: str | None = None,
    level: Annotated[int | None, Query(ge=0, le=9)] = None,
    school: str | None = None,
    class_name: Annotated[str | None, Query(alias="class")] = None,
) -> list[SrdSpell]:
    filters = SpellFilters(name=name, level=level, school=school, class_name=class_name)
    try:
        return await asyncio.to_thread(state.spells.get_spells, filters)
    except SrdFetchError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.message) from exc
    except httpx.HTTPError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail="SRD API unreachable"
        ) from exc


@router.get("/spells/{index}", response_model=SrdSpell)
async def get_spell(index: str, state: ApiStateDep) -> SrdSpell:
    return _found(state.spells.get_spell(index), "spell")


@router.post("/spells/refresh", response_model=RefreshResponse)
async def refresh_spells(state: ApiStateDep) -> RefreshResponse:
    try:
        cached = await asyncio.to_thread(state.spells.refresh_cache)
    except SrdFetchError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.message) from exc
    except httpx.HTTPError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail="SRD API unreachable"
        ) from exc
    return RefreshResponse(cached=cached)
