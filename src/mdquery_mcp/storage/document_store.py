"""On-disk cache of Markdown documents fetched from remote repositories."""

import hashlib
import json
import os
import shutil
from dataclasses import dataclass, asdict, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..errors import SourceError
from ..security import is_within

# Increment this when the manifest schema changes in a backward-incompatible way.
# Manifests with a lower version are ignored and the documents re-fetched.
CURRENT_STORE_VERSION = 1


@dataclass
class RepoManifest:
    """Cached documents of one repository."""
    repo: str
    owner: str
    name: str
    fetched_at: str
    files: dict[str, str] = field(default_factory=dict)  # path -> sha256 of content
    commit_hash: str = ""
    store_version: int = CURRENT_STORE_VERSION


class DocumentStore:
    """Manages storage and retrieval of cached documents."""

    def __init__(self, base_path: Optional[str] = None):
        if base_path:
            self.base_path = Path(base_path)
        elif os.environ.get("MDQUERY_CACHE_DIR"):
            self.base_path = Path(os.environ["MDQUERY_CACHE_DIR"])
        else:
            self.base_path = Path.home() / ".mdquery-cache"
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _repo_key(self, owner: str, name: str) -> str:
        return f"{owner}-{name}"

    def _manifest_path(self, owner: str, name: str) -> Path:
        return self.base_path / f"{self._repo_key(owner, name)}.json"

    def _content_dir(self, owner: str, name: str) -> Path:
        return self.base_path / self._repo_key(owner, name)

    def save_documents(
        self,
        owner: str,
        name: str,
        documents: dict[str, str],
        commit_hash: str = "",
    ) -> RepoManifest:
        """
        Cache documents for a repository, merging with any already cached.

        Args:
            owner: Repository owner
            name: Repository name
            documents: Dict mapping file paths to Markdown content
            commit_hash: Git commit SHA at time of fetching

        Returns:
            The saved manifest
        """
        content_dir = self._content_dir(owner, name)

        targets = {}
        for file_path in documents:
            target = (content_dir / file_path).resolve()
            if not is_within(target, content_dir.resolve()):
                raise SourceError(f"Path escapes cache directory: {file_path}")
            targets[file_path] = target

        content_dir.mkdir(parents=True, exist_ok=True)

        existing = self.load_manifest(owner, name)
        files = dict(existing.files) if existing else {}

        for file_path, content in documents.items():
            normalized = content.replace('\r\n', '\n')
            target = targets[file_path]
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(normalized, encoding="utf-8", newline='')
            files[file_path] = hashlib.sha256(normalized.encode("utf-8")).hexdigest()

        manifest = RepoManifest(
            repo=f"{owner}/{name}",
            owner=owner,
            name=name,
            fetched_at=datetime.now(tz=None).isoformat(),
            files=files,
            commit_hash=commit_hash or (existing.commit_hash if existing else ""),
        )

        with open(self._manifest_path(owner, name), "w", encoding="utf-8") as f:
            json.dump(asdict(manifest), f, indent=2)

        return manifest

    def load_manifest(self, owner: str, name: str) -> Optional[RepoManifest]:
        """Load a repository manifest. Returns None if missing or outdated."""
        manifest_path = self._manifest_path(owner, name)
        if not manifest_path.exists():
            return None

        try:
            with open(manifest_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SourceError(f"Corrupt cache manifest for {owner}/{name}: {e}") from e

        if not isinstance(data, dict):
            raise SourceError(f"Corrupt cache manifest for {owner}/{name}: not a JSON object")
        if data.get("store_version", 0) < CURRENT_STORE_VERSION:
            return None

        data.setdefault("commit_hash", "")
        data.setdefault("files", {})
        try:
            return RepoManifest(**data)
        except TypeError as e:
            raise SourceError(f"Corrupt cache manifest for {owner}/{name}: {e}") from e

    def load_content(self, owner: str, name: str, file_path: str) -> Optional[str]:
        """Cached content of one file, or None if it was never fetched."""
        manifest = self.load_manifest(owner, name)
        if not manifest or file_path not in manifest.files:
            return None

        content_dir = self._content_dir(owner, name).resolve()
        content_path = (content_dir / file_path).resolve()
        if not is_within(content_path, content_dir) or not content_path.exists():
            return None
        return content_path.read_text(encoding="utf-8")

    def list_repos(self) -> list[dict]:
        """List all cached repositories."""
        repos = []
        for manifest_file in sorted(self.base_path.glob("*.json")):
            try:
                with open(manifest_file, "r", encoding="utf-8") as f:
                    data = json.load(f)
                repos.append({
                    "repo": data["repo"],
                    "fetched_at": data["fetched_at"],
                    "files": sorted(data.get("files", {})),
                    "commit_hash": data.get("commit_hash", ""),
                    "store_version": data.get("store_version", 0),
                })
            except (json.JSONDecodeError, KeyError):
                continue
        return repos

    def delete_repo(self, owner: str, name: str) -> bool:
        """Delete a repository's manifest and cached files."""
        manifest_path = self._manifest_path(owner, name)
        content_dir = self._content_dir(owner, name)

        deleted = False
        if manifest_path.exists():
            manifest_path.unlink()
            deleted = True
        if content_dir.exists():
            shutil.rmtree(content_dir)
            deleted = True

        return deleted
