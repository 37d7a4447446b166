"""Famille Question-Réponse — QA01 accordéon (une seule réponse ouverte), QA02 tout ouvert."""
from typing import List

from pydantic import Field, field_validator

from .base import BlockFamily, ContentModel, ItemModel, Subvariant

SINGLE_OPEN_VARIANTS = frozenset({"QA01"})


class QAAnswer(ItemModel):
    html: str = ""


class QAItem(ItemModel):
    question: str = ""
    answer: QAAnswer = Field(default_factory=QAAnswer)

    @field_validator("answer", mode="before")
    @classmethod
    def _answer_from_html(cls, v):
        if v is None:
            return {}
        if isinstance(v, str):
            return {"html": v}
        return v


class QAContent(ContentModel):
    items: List[QAItem] = []


def _default_items() -> dict:
    return {"items": [{"question": "Question n°1", "answer": {"html": "<p>réponse à la première question</p>"}}]}


QA_FAMILY = BlockFamily(
    id="qa",
    label="Question-Réponse",
    icon="help",
    subvariants=[
        Subvariant(
            id="QA01", name="QA01", title="Réponses en cartes dépliables",
            description="Liste de questions ; la réponse s'ouvre au clic. Une seule réponse ouverte à la fois.",
            preview="/previews/qa01.bmp", default_content=_default_items(),
        ),
        Subvariant(
            id="QA02", name="QA02", title="Réponses toujours visibles",
            description="Liste de questions avec toutes les réponses affichées.",
            preview="/previews/qa02.bmp", default_content=_default_items(),
        ),
    ],
)
