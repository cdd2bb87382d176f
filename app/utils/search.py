"""
Busca textual com LIKE
"""
LIKE_ESCAPE = "\\"


def like_pattern(term: str) -> str:
    """
    Padrão '%termo%' em minúsculas com curingas do usuário escapados.
    Use com .like(pattern, escape=LIKE_ESCAPE).
    """
    escaped = (
        term.strip().lower()
        .replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"
