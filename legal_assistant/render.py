import markdown

# fenced_code и tables: ответы модели часто содержат код и таблицы
EXTENSIONS = ["fenced_code", "tables", "sane_lists"]


def render_markdown(text: str) -> str:
    """Markdown ответа модели -> HTML для фронтенда."""
    if not isinstance(text, str):
        raise TypeError(f"expected markdown text, got {type(text).__name__}")
    return markdown.markdown(text, extensions=EXTENSIONS)
