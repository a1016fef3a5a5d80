'''
JSON file store for the assembled faculty documents.
The whole collection is replaced on every refresh; writes go through a temp file + rename.
'''
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class StoreReadError(RuntimeError):
    """The stored collection exists but could not be read or parsed."""


class FacultyStore:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def mtime(self) -> float:
        try:
            return os.path.getmtime(self.path)
        except OSError:
            return 0.0

    def load(self) -> List[Dict[str, Any]]:
        """Stored documents, [] when nothing has been written yet."""
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreReadError(f"Could not read {self.path}: {e}") from e
        if not isinstance(data, list):
            raise StoreReadError(f"{self.path} does not hold a JSON array")
        return data

    def replace(self, documents: List[Dict[str, Any]]) -> None:
        """Atomically swap in a new collection; readers see either the old or the new file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=".facultyData-", suffix=".json.tmp",
                                        dir=str(self.path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(documents, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    @staticmethod
    def faculty_id_of(doc: Dict[str, Any]) -> Optional[str]:
        return doc.get("facultyID") or doc.get("faculty_id")

    def ids(self) -> List[str]:
        return [self.faculty_id_of(d) for d in self.load()]

    def find(self, faculty_id: str) -> Optional[Dict[str, Any]]:
        for doc in self.load():
            if doc.get("facultyID") == faculty_id or doc.get("faculty_id") == faculty_id:
                return doc
        return None
