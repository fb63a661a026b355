# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

"""Structure data sources that fetch a text payload by identifier."""

import gzip
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Union

import httpx
import platformdirs

from domview.core.logger import logger

from .errors import StructureSourceError

APP_NAME = "domview"
DEFAULT_MIRROR_DIR = Path(platformdirs.user_cache_dir(APP_NAME)) / "structures"
DEFAULT_REMOTE_URL = "https://files.rcsb.org/download/{id_lower}.cif"


class StructureSource(ABC):
    """A place structures can be fetched from.

    ``fetch`` returns the raw text payload or raises StructureSourceError; it
    never validates the payload, that is the pipeline's job.
    """

    name: str = "source"

    @abstractmethod
    async def fetch(self, identifier: str) -> str:
        pass


class LocalMirrorSource(StructureSource):
    """Reads structures from a local mirror directory.

    Both a flat layout (``1abc.cif``) and the wwPDB divided layout
    (``ab/1abc.cif.gz``) are searched, gzipped or not.
    """

    SUFFIXES = (".cif", ".cif.gz", ".pdb", ".pdb.gz", ".ent", ".ent.gz")

    def __init__(self, root: Union[str, Path] = DEFAULT_MIRROR_DIR, name: str = "local mirror"):
        self.root = Path(root)
        self.name = name

    def candidates(self, identifier: str) -> List[Path]:
        code = identifier.lower()
        stems = [code, f"pdb{code}"]
        directories = [self.root]
        if len(code) == 4:
            directories.append(self.root / code[1:3])
        return [
            directory / f"{stem}{suffix}"
            for directory in directories
            for stem in stems
            for suffix in self.SUFFIXES
        ]

    async def fetch(self, identifier: str) -> str:
        for path in self.candidates(identifier):
            if not path.is_file():
                continue
            logger.debug(f"Reading {identifier} from {path}")
            try:
                if path.suffix == ".gz":
                    with gzip.open(path, "rt") as f:
                        return f.read()
                return path.read_text()
            except (OSError, UnicodeDecodeError) as e:
                raise StructureSourceError(
                    self.name, identifier, f"cannot read {path}: {e}"
                ) from e
        raise StructureSourceError(
            self.name, identifier, f"not found under {self.root}", status_code=404
        )


class HttpStructureSource(StructureSource):
    """Fetches structures over HTTP from a URL template.

    The template may use ``{id}``, ``{id_lower}`` and ``{id_upper}``.
    """

    def __init__(
        self,
        url_template: str = DEFAULT_REMOTE_URL,
        name: str = "remote",
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url_template = url_template
        self.name = name
        self.timeout = timeout
        self.transport = transport

    def url_for(self, identifier: str) -> str:
        return self.url_template.format(
            id=identifier, id_lower=identifier.lower(), id_upper=identifier.upper()
        )

    def _client(self) -> httpx.AsyncClient:
        kwargs = {"follow_redirects": True}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        if self.transport is not None:
            kwargs["transport"] = self.transport
        return httpx.AsyncClient(**kwargs)

    async def fetch(self, identifier: str) -> str:
        url = self.url_for(identifier)
        logger.debug(f"Fetching {identifier} from {url}")
        try:
            async with self._client() as client:
                response = await client.get(url)
                response.raise_for_status()
                return response.text
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise StructureSourceError(
                self.name, identifier, f"HTTP {status} from {url}", status_code=status
            ) from e
        except httpx.HTTPError as e:
            raise StructureSourceError(
                self.name, identifier, f"request to {url} failed: {e}"
            ) from e
