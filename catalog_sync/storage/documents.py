"""Document storage.

Documents are addressed by name (usually the language code). The file store
maps a name to ``<base_dir>/<name>.json`` or ``<base_dir>/<name>.yaml``.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Union

import aiofiles
import structlog
import yaml

from catalog_sync.errors import DocumentLoadError, DocumentSaveError
from catalog_sync.localization.document import MappingNode, document_from_data

logger = structlog.get_logger(__name__)

FORMAT_EXTENSIONS = {"json": "json", "yaml": "yaml"}


class DocumentStore(ABC):
    """Loads and saves catalog documents by name."""

    @abstractmethod
    async def load(self, name: str) -> MappingNode:
        """Load a document. Raises DocumentLoadError."""
        pass

    @abstractmethod
    async def save(self, name: str, document: MappingNode) -> None:
        """Persist a document. Raises DocumentSaveError."""
        pass


class FileDocumentStore(DocumentStore):
    """Documents stored as JSON or YAML files in one directory."""

    def __init__(self, base_dir: Union[str, Path], document_format: str = "json"):
        if document_format not in FORMAT_EXTENSIONS:
            raise ValueError(f"Unsupported document format: {document_format}")
        self.base_dir = Path(base_dir)
        self.document_format = document_format

    def path_for(self, name: str) -> Path:
        return self.base_dir / f"{name}.{FORMAT_EXTENSIONS[self.document_format]}"

    async def load(self, name: str) -> MappingNode:
        path = self.path_for(name)
        if not path.is_file():
            raise DocumentLoadError(f"Document not found: {path}", name=name, path=path)

        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                content = await f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentLoadError(
                f"Cannot read document {path}: {e}", name=name, path=path, previous_error=e
            ) from e

        try:
            data = self._parse(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise DocumentLoadError(
                f"Malformed document {path}: {e}", name=name, path=path, previous_error=e
            ) from e

        if not isinstance(data, dict):
            raise DocumentLoadError(
                f"Document {path} must contain a mapping at the top level",
                name=name,
                path=path,
            )

        document = document_from_data(data)
        logger.info("Loaded document", name=name, file=str(path), keys=len(document))
        return document

    async def save(self, name: str, document: MappingNode) -> None:
        path = self.path_for(name)
        content = self._serialize(document.to_data())

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(path, "w", encoding="utf-8") as f:
                await f.write(content)
        except OSError as e:
            raise DocumentSaveError(
                f"Cannot write document {path}: {e}", name=name, path=path, previous_error=e
            ) from e

        logger.info("Saved document", name=name, file=str(path))

    def _parse(self, content: str) -> Any:
        if self.document_format == "yaml":
            return yaml.safe_load(content)
        return json.loads(content)

    def _serialize(self, data: Any) -> str:
        if self.document_format == "yaml":
            return yaml.safe_dump(data, sort_keys=False, allow_unicode=True, indent=2)
        return json.dumps(data, indent=2, ensure_ascii=False)
