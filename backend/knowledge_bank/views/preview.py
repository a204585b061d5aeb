"""
Document preview.

The viewer is chosen once from the file extension; the preview is
dismissed by the close button, a backdrop click or the Escape key.
"""
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ..domain.entities import DocumentData
from ..domain.value_objects import PreviewKind
from ..utils.filenames import file_extension

VIDEO_EXTENSIONS = (".mp4", ".webm", ".ogv")
AUDIO_EXTENSIONS = (".mp3", ".wav", ".ogg")

DISMISS_KEY = "Escape"


def preview_kind(file_name: str) -> PreviewKind:
    """Viewer for a file name: video, audio or the generic embedded viewer."""
    extension = file_extension(file_name or "")
    if extension in VIDEO_EXTENSIONS:
        return PreviewKind.VIDEO
    if extension in AUDIO_EXTENSIONS:
        return PreviewKind.AUDIO
    return PreviewKind.DOCUMENT


@dataclass
class DocumentPreview:
    document: DocumentData
    kind: PreviewKind
    is_open: bool = True
    _on_close: List[Callable[[], None]] = field(default_factory=list, repr=False)

    @classmethod
    def open(cls, document: DocumentData, on_close: Optional[Callable[[], None]] = None) -> "DocumentPreview":
        preview = cls(document=document, kind=preview_kind(document.file_name))
        if on_close is not None:
            preview._on_close.append(on_close)
        return preview

    def close(self) -> None:
        if not self.is_open:
            return
        self.is_open = False
        for callback in self._on_close:
            callback()

    def on_backdrop_click(self) -> None:
        self.close()

    def on_key(self, key: str) -> None:
        if key == DISMISS_KEY:
            self.close()

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "title": self.document.title,
            "fileUrl": self.document.file_url,
            "fileName": self.document.file_name,
        }
