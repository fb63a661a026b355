# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

"""Error classes for the domview IO module."""

from typing import Optional, Sequence

from domview.core import DomViewError


class IOError(DomViewError):
    """Base class for all IO-related errors in domview."""

    def __init__(self, message: str):
        super().__init__(f"IO error: {message}")


# Structure acquisition
class StructureSourceError(IOError):
    """A single structure source could not deliver a usable payload."""

    def __init__(
        self,
        source: str,
        identifier: str,
        reason: str,
        status_code: Optional[int] = None,
    ):
        self.source = source
        self.identifier = identifier
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"{source} could not provide {identifier}: {reason}")


class InvalidStructurePayloadError(IOError):
    """A payload was fetched but carries none of the expected format markers."""

    def __init__(self, identifier: str, details: str):
        self.identifier = identifier
        self.details = details
        super().__init__(f"Invalid structure payload for {identifier}: {details}")


class AcquisitionError(DomViewError):
    """Every structure source failed for an identifier.

    ``failures`` keeps the per-stage errors in the order the stages ran.
    """

    def __init__(self, identifier: str, failures: Sequence[StructureSourceError]):
        self.identifier = identifier
        self.failures = list(failures)
        stages = "; ".join(f"{f.source}: {f.reason}" for f in self.failures)
        message = f"Failed to load structure {identifier} from all sources: {stages}"
        suggestion = "Check the identifier and your network connection, then retry."
        super().__init__(f"{message}\n{suggestion}")


class StructureParseError(IOError):
    """gemmi could not build a model from a validated payload."""

    def __init__(self, identifier: str, details: str):
        self.identifier = identifier
        super().__init__(f"Could not parse structure {identifier}: {details}")


# Domain annotation files
class AnnotationError(IOError):
    """Base class for annotation-related errors."""

    def __init__(self, message: str):
        super().__init__(f"Annotation error: {message}")


class AnnotationFileNotFoundError(AnnotationError):
    """Exception raised when an annotation file is not found."""

    def __init__(self, file_path: str):
        self.file_path = file_path
        super().__init__(f"Annotation file not found: {file_path}")


class MalformedAnnotationError(AnnotationError):
    """Exception raised when an annotation file has an invalid format."""

    def __init__(self, context: str, details: str):
        self.context = context
        self.details = details
        super().__init__(f"Malformed annotation file: {context}\n{details}")


# Viewer configuration files
class ConfigError(IOError):
    """Base class for configuration file errors."""

    def __init__(self, message: str):
        super().__init__(f"Config error: {message}")


class ConfigFileNotFoundError(ConfigError):
    def __init__(self, file_path: str):
        self.file_path = file_path
        super().__init__(f"Config file not found: {file_path}")


class InvalidTomlError(ConfigError):
    pass


class ConfigValidationError(ConfigError):
    pass
