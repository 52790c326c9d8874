from databases import Database

from aegis.config import config


def create_database() -> Database:
    return Database(config.mysql_dsn)
