import logging

from sqlalchemy import create_engine

from friends_api import config

log = logging.getLogger(__name__)

# Get connection URL from config
connection_url = config.get_settings().POSTGRES_URI

# Convert postgresql+psycopg:// to postgresql+psycopg2:// for compatibility
if "postgresql+psycopg:" in connection_url and "postgresql+psycopg2:" not in connection_url:
    connection_url = connection_url.replace("postgresql+psycopg:", "postgresql+psycopg2:")

if connection_url.startswith("sqlite"):
    # SQLite is used for local runs and the test suite; no pool tuning
    engine = create_engine(connection_url, pool_pre_ping=True, echo=False)
else:
    engine = create_engine(
        connection_url,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=3,
        max_overflow=7,
        pool_recycle=300,  # Recycle connections after 5 minutes
        echo=False  # Set to True for SQL debugging
    )

log.info("SQLAlchemy engine created for %s", connection_url.split("://")[0])
