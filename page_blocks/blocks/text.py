"""Famille Texte — HTML riche pré-nettoyé, rendu tel quel (TX01–TX11)."""
from .base import BlockFamily, ContentModel, Subvariant


class TextContent(ContentModel):
    html: str = ""


def _tx(num: int, title: str, description: str = "", **extra) -> Subvariant:
    sid = f"TX{num:02d}"
    content = {"html": ""} if num == 1 else {"html": "", "variant": sid}
    content.update(extra.pop("content", {}))
    return Subvariant(
        id=sid, name=sid, title=title, description=description,
        preview=f"/previews/{sid.lower()}.bmp", default_content=content, **extra,
    )


TEXT_FAMILY = BlockFamily(
    id="text",
    label="Bloc texte",
    icon="text",
    aliases=("text",),
    subvariants=[
        _tx(1, "Texte", "Bloc de texte courant."),
        _tx(2, "Texte étroit", "60 % de la largeur de la page, pour attirer l'attention sur une phrase."),
        _tx(3, "Texte étroit centré", "60 % de la largeur, texte centré."),
        _tx(4, "Petit texte", "Police réduite pour l'information secondaire."),
        _tx(5, "Grand texte"),
        _tx(6, "Texte décoratif", "Adapté aux phrases clés."),
        _tx(7, "Texte décoratif en capitales"),
        _tx(8, "Texte décoratif bleu en capitales", "Variante bleue du précédent."),
        _tx(9, "Citation"),
        _tx(10, "Texte avec filet supérieur", "Convient aussi aux citations."),
        _tx(
            11, "Note typée", "Texte informatif avec type et icône.",
            content={"noteType": "info", "icon": "bi bi-info-lg", "color": "blue"},
            options=[
                {"value": "info", "label": "Info", "color": "blue", "icons": ["bi bi-info-lg", "bi bi-info-square"]},
                {"value": "warning", "label": "Attention", "color": "red", "icons": ["bi bi-lightbulb", "bi bi-exclamation-square"]},
                {"value": "explanation", "label": "Explication", "color": "green", "icons": ["bi bi-exclamation-circle", "bi bi-bookmarks-fill"]},
            ],
        ),
    ],
)
