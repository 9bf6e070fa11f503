# agent_admin/api/panchayaths.py
from __future__ import annotations

from typing import Any, Dict, Optional
from fastapi import APIRouter
from pydantic import BaseModel

from agent_admin.api.deps import DB
from agent_admin.storage import panchayaths as store

router = APIRouter(
    prefix="/panchayaths",
    tags=["Panchayaths"],
)


class PanchayathCreate(BaseModel):
    name: str
    district: str
    number_of_wards: int = 1


class PanchayathUpdate(BaseModel):
    name: Optional[str] = None
    district: Optional[str] = None
    number_of_wards: Optional[int] = None


@router.get("")
def list_panchayaths(session: DB) -> Dict[str, Any]:
    items = store.list_panchayaths(session)
    return {"count": len(items), "items": items}


@router.post("", status_code=201)
def create_panchayath(payload: PanchayathCreate, session: DB) -> Dict[str, Any]:
    item = store.create_panchayath(
        session,
        name=payload.name,
        district=payload.district,
        number_of_wards=payload.number_of_wards,
    )
    return {"status": "SUCCESS", "item": item}


@router.get("/{panchayath_id}")
def get_panchayath(panchayath_id: str, session: DB) -> Dict[str, Any]:
    return store.get_panchayath(session, panchayath_id)


@router.put("/{panchayath_id}")
def update_panchayath(panchayath_id: str, payload: PanchayathUpdate, session: DB) -> Dict[str, Any]:
    changes = payload.model_dump(exclude_unset=True)
    if not changes:
        return {"status": "NOOP", "item": store.get_panchayath(session, panchayath_id)}
    item = store.update_panchayath(session, panchayath_id, changes)
    return {"status": "SUCCESS", "item": item}


@router.delete("/{panchayath_id}")
def delete_panchayath(panchayath_id: str, session: DB) -> Dict[str, Any]:
    store.delete_panchayath(session, panchayath_id)
    return {"status": "SUCCESS", "id": panchayath_id}
