from abc import ABC, abstractmethod
import xml.etree.ElementTree as ET
from models.errors import MalformedDocument


class DocumentValidator(ABC):
    @abstractmethod
    def validate(self, document: str) -> None:
        """Raise MalformedDocument unless the document is well-formed."""
        pass


class XMLDocumentValidator(DocumentValidator):
    """Checks that a race result document is syntactically correct XML.

    Only well-formedness is checked, no schema.
    """

    def validate(self, document: str) -> None:
        if not document or not document.strip():
            raise MalformedDocument("xml malformed: document is empty")

        try:
            ET.fromstring(document)
        except (ET.ParseError, UnicodeEncodeError) as e:
            # Lone surrogates cannot be encoded for the parser
            raise MalformedDocument(f"xml malformed: {e}") from e
