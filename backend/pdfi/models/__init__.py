from pdfi.models.document import ProcessedDocument

__all__ = [
    "ProcessedDocument",
]
