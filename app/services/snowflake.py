from __future__ import annotations

import snowflake.connector

from app.config import settings
from app.core.exceptions import DatabaseConnectionException



# MODULE-LEVEL CONNECTION (USED BY REPOSITORIES)


def get_snowflake_connection():
    """
    Snowflake connection factory.
    Used by repositories via BaseRepository.get_connection().
    """
    if not settings.snowflake_configured:
        raise DatabaseConnectionException(
            "Snowflake is not configured (SNOWFLAKE_ACCOUNT / SNOWFLAKE_USER / SNOWFLAKE_PASSWORD)"
        )

    params = dict(
        account=settings.SNOWFLAKE_ACCOUNT,
        user=settings.SNOWFLAKE_USER,
        password=settings.SNOWFLAKE_PASSWORD.get_secret_value(),
        warehouse=settings.SNOWFLAKE_WAREHOUSE,
        database=settings.SNOWFLAKE_DATABASE,
        schema=settings.SNOWFLAKE_SCHEMA,
    )
    if settings.SNOWFLAKE_ROLE:
        params["role"] = settings.SNOWFLAKE_ROLE

    return snowflake.connector.connect(**params)
