"""
Config Loader

Loads the project configuration from a multi-document YAML file and
applies it to building blocks. Each document targets a block kind
(optionally a named instance) and carries a spec validated against
the block's pydantic Config model.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, ValidationError
import logging

from ..dag.node import node_kind

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = ".buildgen.yaml"


class ConfigError(ValueError):
    pass


class ConfigDocument(BaseModel):
    """Single document of the config file"""
    model_config = ConfigDict(extra="forbid")

    kind: str
    name: str = ""
    spec: Optional[Dict[str, Any]] = None


class BlockConfig(BaseModel):
    """Base class for block Config models; unknown keys are rejected"""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class ConfigProvider:
    """
    Resolves configuration for each building block.

    The provider:
    1. Parses every YAML document of the config file
    2. Validates the document envelope (kind, name, spec)
    3. On load(), validates matching specs against the block's Config
       model and applies the explicitly set fields to the block

    Example usage:
        provider = ConfigProvider.from_file(Path(".buildgen.yaml"))
        provider.load(toolchain)

    Example config:
        kind: Toolchain
        spec:
          image: golang:1.22-alpine
        ---
        kind: Binary
        name: server
        spec:
          entrypoint: cmd/server
    """

    def __init__(self, documents: Optional[List[ConfigDocument]] = None, source: str = "<memory>"):
        """
        Initialize provider with parsed documents.

        Args:
            documents: Config documents, applied in order
            source: Where the documents came from, for error messages
        """
        self.documents = documents or []
        self.source = source

    @classmethod
    def from_file(cls, path: Path) -> "ConfigProvider":
        """
        Load config documents from a YAML file.

        A missing file yields an empty provider.

        Raises:
            ConfigError: If the file is not valid YAML or a document is malformed
        """
        if not path.exists():
            logger.info(f"No config file at {path}, using defaults")
            return cls(source=str(path))

        with open(path) as f:
            return cls.from_string(f.read(), source=str(path))

    @classmethod
    def from_string(cls, text: str, source: str = "<memory>") -> "ConfigProvider":
        """Parse config documents from YAML text."""
        try:
            raw_documents = [doc for doc in yaml.safe_load_all(text) if doc is not None]
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse {source}: {e}") from e

        documents = []
        for index, raw in enumerate(raw_documents):
            if not isinstance(raw, dict):
                raise ConfigError(f"Document {index} in {source} must be a mapping")
            try:
                documents.append(ConfigDocument(**raw))
            except ValidationError as e:
                raise ConfigError(f"Invalid document {index} in {source}: {e}") from e

        logger.info(f"Loaded {len(documents)} config documents from {source}")

        return cls(documents, source=source)

    def load(self, node: Any) -> None:
        """
        Apply all matching config documents to a node.

        Documents match by kind; a named document only matches the node
        with that name. Matching documents are applied in file order.

        Args:
            node: Block to configure; blocks without a Config model are skipped

        Raises:
            ConfigError: If a document is missing its spec or fails validation
        """
        model = getattr(node, "Config", None)
        if model is None:
            return

        kind = node_kind(node)
        name = getattr(node, "name", "")

        for doc in self.documents:
            if doc.kind != kind:
                continue

            if doc.name and not name:
                raise ConfigError(
                    f"Config has name {doc.name} for kind {kind}, while block doesn't support names"
                )

            if doc.name and doc.name != name:
                continue

            if doc.spec is None:
                raise ConfigError(f"Missing spec for config block {doc.kind}/{doc.name}")

            try:
                config = model(**doc.spec)
            except ValidationError as e:
                raise ConfigError(
                    f"Error decoding config block {doc.kind}/{doc.name} into {node!r}: {e}"
                ) from e

            for field_name in config.model_fields_set:
                setattr(node, field_name, getattr(config, field_name))

            logger.debug(
                f"Applied config {doc.kind}/{doc.name or '*'} to {node!r}: "
                f"{sorted(config.model_fields_set)}"
            )
