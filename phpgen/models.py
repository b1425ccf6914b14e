"""Core data models shared across phpgen components."""

from dataclasses import dataclass

from .elements import ElementKind, PhpFile


@dataclass
class FinishedArtifact:
    """A built file together with the batch key it was registered under."""

    key: str
    qualified_name: str
    kind: ElementKind
    file: PhpFile


@dataclass
class FilePreview:
    """What would be written for one artifact, without touching disk."""

    file_path: str
    content: str
    class_name: str
    namespace: str

    def as_dict(self) -> dict:
        return {
            "file_path": self.file_path,
            "content": self.content,
            "class_name": self.class_name,
            "namespace": self.namespace,
        }
