from .preview import DocumentPreview, preview_kind

__all__ = ["DocumentPreview", "preview_kind"]
