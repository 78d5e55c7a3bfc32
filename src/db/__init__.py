from src.db.database import get_async_session, init_db, async_session_factory
from src.db.transaction import transaction
