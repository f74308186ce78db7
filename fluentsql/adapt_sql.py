"""Driver-specific placeholder adaptation for rendered statements."""

import re
from typing import Callable, Dict

_rx_qmark = re.compile(r'\?')

placeholders: Dict[str, Callable[[int], str]] = {
    'qmark': lambda n: '?',
    'numeric': lambda n: f':{n}',
    'named': lambda n: f':p{n}',
    'format': lambda n: '%s',
    'pyformat': lambda n: '%s',
}


def param_name(position: int) -> str:
    """Bind name used for the 1-based position in 'named' style."""
    return f'p{position}'


def adapt_sql(sql: str, paramstyle: str = 'qmark') -> str:
    """Rewrite positional ? markers for the given DB-API paramstyle."""
    style = paramstyle.lower()
    if style not in placeholders:
        raise ValueError(f'Unknown paramstyle: {paramstyle}')
    if style == 'qmark':
        return sql
    if style in ('format', 'pyformat'):
        sql = sql.replace('%', '%%')
    render = placeholders[style]
    counter = iter(range(1, sql.count('?') + 1))
    return _rx_qmark.sub(lambda m: render(next(counter)), sql)
