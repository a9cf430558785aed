from .db import Database, get_db
from .repository import AuditRepository
