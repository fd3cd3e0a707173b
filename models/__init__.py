"""
Models package: exposes the global DBStorage instance.
The app factory rebinds it to the configured DATABASE_URL and calls reload().
"""
from models.db_storage import DBStorage

storage = DBStorage()
