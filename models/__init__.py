"""
Persistence layer. `storage` is the process-wide DBStorage instance; the
application factory configures it from DATABASE_URL before first use.
"""
from models.db_storage import DBStorage

storage = DBStorage()
