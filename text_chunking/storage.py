from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
import re

from .exceptions import StorageError
from .models import ChunkingResult

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass
class ChunkingPaths:
    document_id: str
    chunk_dir: Path
    chunk_file: Path


def safe_name(document_id: str) -> str:
    """Turn a document ID (possibly a URL) into a filesystem-safe name."""
    name = _UNSAFE_CHARS.sub("_", document_id).strip("._")
    return name or "document"


class ChunkingStorage:
    def __init__(self, data_dir: str):
        self.data_dir = Path(data_dir)

    def build_paths(self, document_id: str) -> ChunkingPaths:
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        name = safe_name(document_id)
        chunk_dir = self.data_dir / name / "chunks"
        chunk_dir.mkdir(parents=True, exist_ok=True)
        chunk_file = chunk_dir / f"{name}_{timestamp}.json"
        return ChunkingPaths(
            document_id=document_id,
            chunk_dir=chunk_dir,
            chunk_file=chunk_file,
        )

    def save(self, result: ChunkingResult) -> ChunkingPaths:
        try:
            paths = self.build_paths(result.document_id)
            result.save(str(paths.chunk_file))
        except OSError as exc:
            raise StorageError(str(self.data_dir), "Failed to save chunking result", exc) from exc
        return paths

    def load(self, path: str) -> ChunkingResult:
        try:
            return ChunkingResult.load(path)
        except (OSError, ValueError) as exc:
            raise StorageError(path, "Failed to load chunking result", exc) from exc
