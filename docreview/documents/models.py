from dataclasses import dataclass
from enum import Enum


class DocumentType(str, Enum):
    PDF = "pdf"
    TXT = "txt"
    EMPTY = "empty"


@dataclass(frozen=True)
class Document:
    """The material every agent in a run is given."""

    name: str
    type: DocumentType
    content: str

    @classmethod
    def empty(cls) -> "Document":
        return cls(name="No document loaded", type=DocumentType.EMPTY, content="")

    @property
    def is_empty(self) -> bool:
        return self.type is DocumentType.EMPTY or not self.content.strip()
