from loguru import logger
from sqlmodel import Session

from app.database.database import engine, create_db_and_tables
from app.database.init_db import init_db


def init() -> None:
    """
    Create the database schema and seed the first admin account.
    """
    create_db_and_tables()
    with Session(engine) as session:
        init_db(session)


def main() -> None:
    """
    Create the database schema and seed initial data while logging progress.
    """
    logger.info("Creating initial data")
    init()
    logger.info("Initial data created")


if __name__ == "__main__":
    main()
