from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from outreach.core.database import Base, SessionLocal, open_database
from outreach.logging import configure_logging
from outreach.regions.service import region_service
from outreach.users.schemas import UserRead
from outreach.users.service import user_service


logger = logging.getLogger("outreach.lifecycle")

DEFAULT_USERS = [
    UserRead(id="1", name="John Admin", role="admin"),
    UserRead(id="2", name="Sarah Caller", role="caller"),
    UserRead(id="3", name="Mike Sales", role="caller"),
    UserRead(id="4", name="Emma Manager", role="admin"),
]

DEFAULT_REGIONS = ["Yangon", "Mandalay", "Bagan", "Inle", "Naypyidaw", "Mawlamyine"]


def seed_reference_data(session: Session) -> None:
    """Insert the default users and regions that are not there yet."""
    try:
        user_service.ensure_users(session, DEFAULT_USERS)
        region_service.ensure_regions(session, DEFAULT_REGIONS)
        session.commit()
    except Exception:
        session.rollback()
        raise
    logger.info("seed.completed", extra={"count": len(DEFAULT_USERS) + len(DEFAULT_REGIONS)})


def main() -> None:
    configure_logging()
    engine = open_database()
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as session:
        seed_reference_data(session)


if __name__ == "__main__":
    main()
