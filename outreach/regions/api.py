from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from outreach.core.database import get_db
from outreach.regions.schemas import RegionCreate, RegionRename, RegionRenameResult
from outreach.regions.service import region_service


router = APIRouter(prefix="/api/regions", tags=["regions"])


@router.get("", response_model=list[str])
def list_regions(db: Session = Depends(get_db)) -> list[str]:
    return region_service.list_regions(db)


@router.post("", response_model=str)
def create_region(dto: RegionCreate, db: Session = Depends(get_db)) -> str:
    return region_service.create_region(db, dto.resolved_name)


@router.patch("", response_model=RegionRenameResult)
def rename_region(dto: RegionRename, db: Session = Depends(get_db)) -> RegionRenameResult:
    return region_service.rename_region(db, dto)


@router.delete("", response_model=str)
def delete_region(region: str = Query(default=""), db: Session = Depends(get_db)) -> str:
    return region_service.delete_region(db, region)
