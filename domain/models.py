"""
Domain models for article amendment checks.

This module contains the core value objects. All of them are built fresh for a
single check and never shared between checks.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

# Placeholder used when an amendment lacks a reference code or description
NOT_AVAILABLE = "No disponible"

ARTICLE_KIND = "articulo"


class CheckStatus(Enum):
    """Classification of a single article check."""

    MODIFIED = "modified"
    NOT_MODIFIED = "not_modified"
    NOT_FOUND = "not_found"
    ERROR = "error"


class IndexEntry:
    """Node of a document's structural outline (table of contents)."""

    def __init__(
        self,
        kind: Optional[str] = None,
        label: Optional[str] = None,
        id: Optional[str] = None,
        children: Optional[List["IndexEntry"]] = None,
    ):
        self.kind = kind
        self.label = label
        self.id = id
        self.children: List[IndexEntry] = children if children is not None else []

    @classmethod
    def from_dict(cls, data: Union[Dict[str, Any], List[Any]]) -> "IndexEntry":
        """
        Build an index tree from the API payload.

        The payload uses ``tipo``, ``titulo``, ``id`` and ``items``. A bare list
        is taken as the children of an anonymous root. The tree is built with
        an explicit stack so deeply nested payloads cannot exhaust the
        interpreter stack.
        """
        if isinstance(data, list):
            data = {"items": data}

        root = cls._from_fields(data)
        stack = [(data, root)]
        while stack:
            node_data, node = stack.pop()
            for child_data in node_data.get("items") or []:
                if not isinstance(child_data, dict):
                    continue
                child = cls._from_fields(child_data)
                node.children.append(child)
                stack.append((child_data, child))
        return root

    @classmethod
    def _from_fields(cls, data: Dict[str, Any]) -> "IndexEntry":
        label = data.get("titulo")
        entry_id = data.get("id")
        return cls(
            kind=data.get("tipo"),
            label=str(label) if label is not None else None,
            id=str(entry_id) if entry_id is not None else None,
        )

    @property
    def is_article(self) -> bool:
        return self.kind == ARTICLE_KIND

    def __repr__(self) -> str:
        return (
            f"IndexEntry(kind={self.kind}, label={self.label}, id={self.id}, "
            f"children={len(self.children)})"
        )


class AmendmentRecord:
    """One entry of a document's amendment history."""

    def __init__(
        self,
        affected: Union[str, List[str], None] = None,
        date: Any = None,
        reference_code: Optional[str] = None,
        text: Optional[str] = None,
    ):
        self.affected = affected
        self.date = date
        self.reference_code = reference_code
        self.text = text

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AmendmentRecord":
        """Create from an element of ``analisis.modificaciones``."""
        return cls(
            affected=data.get("afectado"),
            date=data.get("fecha"),
            reference_code=data.get("referencia"),
            text=data.get("texto"),
        )

    def __repr__(self) -> str:
        return f"AmendmentRecord(affected={self.affected}, date={self.date})"


class ModificationDetail:
    """A qualifying amendment as shown in the report."""

    def __init__(
        self,
        date: str,
        reference_code: Optional[str] = None,
        text: Optional[str] = None,
    ):
        self.date = date
        self.reference_code = reference_code or NOT_AVAILABLE
        self.text = text or NOT_AVAILABLE

    @classmethod
    def from_record(cls, record: AmendmentRecord) -> "ModificationDetail":
        return cls(
            date=str(record.date),
            reference_code=record.reference_code,
            text=record.text,
        )

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary representation."""
        return {
            "date": self.date,
            "reference_code": self.reference_code,
            "text": self.text,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModificationDetail):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"ModificationDetail(date={self.date}, reference_code={self.reference_code})"


class AmendmentSummary:
    """Outcome of scanning an analysis for one article."""

    def __init__(
        self,
        modified: bool = False,
        last_modified_date: Optional[str] = None,
        details: Optional[List[ModificationDetail]] = None,
    ):
        self.modified = modified
        self.last_modified_date = last_modified_date
        self.details: List[ModificationDetail] = details if details is not None else []

    def __repr__(self) -> str:
        return (
            f"AmendmentSummary(modified={self.modified}, "
            f"last_modified_date={self.last_modified_date}, details={len(self.details)})"
        )


class CheckResult:
    """Result of checking one article of one document."""

    def __init__(
        self,
        found: bool,
        article_id: Optional[str] = None,
        title: Optional[str] = None,
        modified: bool = False,
        last_modified_date: Optional[str] = None,
        modification_details: Optional[List[ModificationDetail]] = None,
        message: Optional[str] = None,
        error_message: Optional[str] = None,
    ):
        self.found = found
        self.article_id = article_id
        self.title = title
        self.modified = modified if found else False
        self.last_modified_date = last_modified_date if found else None
        self.modification_details: List[ModificationDetail] = (
            list(modification_details or []) if found else []
        )
        self.message = message
        self.error_message = error_message

    @classmethod
    def not_found(cls, message: str) -> "CheckResult":
        return cls(found=False, message=message)

    @classmethod
    def failed(cls, error_message: str) -> "CheckResult":
        return cls(found=False, error_message=error_message)

    @classmethod
    def resolved(cls, entry: IndexEntry, summary: AmendmentSummary) -> "CheckResult":
        return cls(
            found=True,
            article_id=entry.id,
            title=entry.label,
            modified=summary.modified,
            last_modified_date=summary.last_modified_date,
            modification_details=summary.details,
        )

    @property
    def status(self) -> CheckStatus:
        if not self.found:
            if self.error_message:
                return CheckStatus.ERROR
            return CheckStatus.NOT_FOUND
        if self.modified:
            return CheckStatus.MODIFIED
        return CheckStatus.NOT_MODIFIED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "found": self.found,
            "status": self.status.value,
            "article_id": self.article_id,
            "title": self.title,
            "modified": self.modified,
            "last_modified_date": self.last_modified_date,
            "modification_details": [d.to_dict() for d in self.modification_details],
            "message": self.message,
            "error_message": self.error_message,
        }

    def __repr__(self) -> str:
        return f"CheckResult(status={self.status.value}, article_id={self.article_id})"


class LawReference:
    """Abbreviation mapping entry: which BOE document an abbreviation names."""

    def __init__(self, abbreviation: str, document_id: str, display_name: Optional[str] = None):
        self.abbreviation = abbreviation
        self.document_id = document_id
        self.display_name = display_name

    def __repr__(self) -> str:
        return f"LawReference(abbreviation={self.abbreviation}, document_id={self.document_id})"


class ArticleReference:
    """One line of the article list, e.g. ``Art. 51 CC``."""

    def __init__(self, number: str, abbreviation: str, original_line: str):
        self.number = number
        self.abbreviation = abbreviation
        self.original_line = original_line

    def __repr__(self) -> str:
        return f"ArticleReference(number={self.number}, abbreviation={self.abbreviation})"


class ReportEntry:
    """A check result together with the input it was produced for."""

    def __init__(
        self,
        reference: ArticleReference,
        result: CheckResult,
        document_id: Optional[str] = None,
        display_name: Optional[str] = None,
    ):
        self.reference = reference
        self.result = result
        self.document_id = document_id
        self.display_name = display_name

    @property
    def status(self) -> CheckStatus:
        return self.result.status

    def __repr__(self) -> str:
        return (
            f"ReportEntry(line={self.reference.original_line}, "
            f"status={self.status.value})"
        )
