"""Connection settings read from the environment."""

import os


def _flag(name: str, default: str = 'false') -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'y')


def load_config() -> dict:
    """Build DB_CONFIG from FLUENTSQL_* environment variables."""
    return {
        'conn_str': os.getenv('FLUENTSQL_CONN', 'sqlite:///fluentsql.db'),
        'audit_db': os.getenv('FLUENTSQL_AUDIT_DB') or None,
        'pool_size': int(os.getenv('FLUENTSQL_POOL_SIZE', '5')),
        'pool_timeout': int(os.getenv('FLUENTSQL_POOL_TIMEOUT', '30')),
        'echo': _flag('FLUENTSQL_ECHO'),
        'debug': _flag('FLUENTSQL_DEBUG'),
    }


DB_CONFIG = load_config()
