from .conn import SqlCon, AlchemyConnection, AlchemyStatement
from .fallback import DbApiConnection, DbApiStatement, connect_raw
from .cursor import RowCursor, BaseStatement
from .audit import Audit, audited
from .config import DB_CONFIG, load_config

__all__ = [
    'SqlCon', 'AlchemyConnection', 'AlchemyStatement', 'DbApiConnection', 'DbApiStatement',
    'connect_raw', 'RowCursor', 'BaseStatement', 'Audit', 'audited', 'DB_CONFIG', 'load_config'
]
