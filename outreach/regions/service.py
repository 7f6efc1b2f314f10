from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from outreach.core import clock
from outreach.errors import InvalidRequestError
from outreach.hotels.repository import HotelRepository, hotel_repository
from outreach.regions.models import Region
from outreach.regions.schemas import RegionRename, RegionRenameResult


logger = logging.getLogger("outreach.regions")


@dataclass(slots=True)
class RegionService:
    """Region lookup list kept consistent with the free-text region on hotels.

    There is no foreign key between the two; renames cascade explicitly and
    deletes are refused while any hotel still carries the name.
    """

    hotels: HotelRepository = field(default_factory=lambda: hotel_repository)

    def list_regions(self, session: Session) -> list[str]:
        registered = session.scalars(select(Region.name)).all()
        in_use = self.hotels.distinct_regions(session)
        return sorted(name for name in set(registered) | set(in_use) if name)

    def create_region(self, session: Session, name: str) -> str:
        region_name = name.strip()
        if not region_name:
            raise InvalidRequestError("Region name is required")

        if self._find(session, region_name) is not None:
            return region_name

        try:
            session.add(Region(name=region_name))
            session.commit()
        except Exception:
            session.rollback()
            raise
        logger.info("region.created", extra={"region": region_name})
        return region_name

    def rename_region(self, session: Session, dto: RegionRename) -> RegionRenameResult:
        if not dto.old_region or not dto.new_region:
            raise InvalidRequestError("oldRegion and newRegion are required")
        if dto.old_region == dto.new_region:
            return RegionRenameResult(old_region=dto.old_region, new_region=dto.new_region, hotels_updated=0)

        try:
            existing = self._find(session, dto.old_region)
            target = self._find(session, dto.new_region)
            if existing is not None:
                if target is None:
                    existing.name = dto.new_region
                else:
                    session.delete(existing)
            hotels_updated = self.hotels.rename_region(
                session,
                dto.old_region,
                dto.new_region,
                updated_at=clock.utcnow(),
            )
            session.commit()
        except Exception:
            session.rollback()
            raise

        logger.info(
            "region.renamed",
            extra={"region": f"{dto.old_region}->{dto.new_region}", "count": hotels_updated},
        )
        return RegionRenameResult(old_region=dto.old_region, new_region=dto.new_region, hotels_updated=hotels_updated)

    def delete_region(self, session: Session, name: str) -> str:
        region_name = name.strip()
        if not region_name:
            raise InvalidRequestError("Region name is required")

        referencing = self.hotels.count_in_region(session, region_name)
        if referencing:
            raise InvalidRequestError(f"Region '{region_name}' is still used by {referencing} hotel(s)")

        try:
            session.execute(delete(Region).where(Region.name == region_name))
            session.commit()
        except Exception:
            session.rollback()
            raise
        logger.info("region.deleted", extra={"region": region_name})
        return region_name

    def ensure_regions(self, session: Session, names: list[str]) -> None:
        existing = set(session.scalars(select(Region.name).where(Region.name.in_(names))).all())
        session.add_all([Region(name=name) for name in names if name not in existing])

    def _find(self, session: Session, name: str) -> Region | None:
        return session.scalar(select(Region).where(Region.name == name))


region_service = RegionService()
