"""Supabase Storage-backed object store."""

from collections import deque
from dataclasses import dataclass

from supabase import Client

from derender.domain.errors import PersistenceError
from derender.services.stores import ObjectStore

_PAGE_SIZE = 1000


@dataclass
class SupabaseObjectStore(ObjectStore):
    """Object store over a public Supabase Storage bucket."""

    client: Client
    bucket: str
    public_base_url: str

    def list_objects(self, prefix: str) -> list[str]:
        """Walk folders under the prefix and return every object path."""
        paths: list[str] = []
        pending = deque([prefix.rstrip("/")])
        while pending:
            folder = pending.popleft()
            for entry in self._list_folder(folder):
                path = f"{folder}/{entry['name']}" if folder else entry["name"]
                # Storage reports folders as entries without an id.
                if entry.get("id") is None:
                    pending.append(path)
                else:
                    paths.append(path)
        return paths

    def upload(self, path: str, data: bytes, content_type: str) -> str:
        """Upload bytes and return the object's public URL."""
        try:
            self.client.storage.from_(self.bucket).upload(
                path=path,
                file=data,
                file_options={"content-type": content_type, "upsert": "true"},
            )
        except Exception as exc:
            raise PersistenceError(f"Failed to upload {path}: {exc}") from exc
        return self.public_url(path)

    def public_url(self, path: str) -> str:
        """Build https://<storage-host>/<bucket>/<object-path>."""
        return f"{self.public_base_url.rstrip('/')}/{self.bucket}/{path}"

    def _list_folder(self, folder: str) -> list[dict[str, object]]:
        entries: list[dict[str, object]] = []
        offset = 0
        while True:
            try:
                page = self.client.storage.from_(self.bucket).list(
                    folder,
                    {
                        "limit": _PAGE_SIZE,
                        "offset": offset,
                        "sortBy": {"column": "name", "order": "asc"},
                    },
                )
            except Exception as exc:
                raise PersistenceError(f"Failed to list {folder}: {exc}") from exc
            entries.extend(page)
            if len(page) < _PAGE_SIZE:
                return entries
            offset += _PAGE_SIZE
