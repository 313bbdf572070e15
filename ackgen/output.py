"""Metadata recorded alongside generated API packages."""

from __future__ import annotations

import enum
import hashlib
import os
import platform
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

import yaml

OUTPUT_FILE_NAME = "ack-generate-metadata.yaml"

VERSION = "v0.4.0"
BUILD_DATE = ""
BUILD_HASH = ""

_CHUNK = 64 * 1024


class UpdateReason(str, enum.Enum):
    """Why an API package was modified."""

    API_GENERATION = "API generation"
    CONVERSION_FUNCTIONS_GENERATION = "Conversion functions generation"


@dataclass(frozen=True)
class BuildInfo:
    """Information about the generator build."""

    version: str
    runtime_version: str
    build_date: str
    build_hash: str

    def to_dict(self) -> dict[str, str]:
        return {
            "version": self.version,
            "runtime_version": self.runtime_version,
            "build_date": self.build_date,
            "build_hash": self.build_hash,
        }


def build_info() -> BuildInfo:
    """Return information about the running generator."""
    return BuildInfo(
        version=VERSION,
        runtime_version=platform.python_version(),
        build_date=BUILD_DATE,
        build_hash=BUILD_HASH,
    )


@dataclass(frozen=True)
class GenerationMetadata:
    """Parameters used to generate or update an API version directory."""

    api_version: str
    api_directory_checksum: str
    timestamp: str
    reason: UpdateReason
    aws_sdk_go_version: str
    generator_info: BuildInfo
    generator_file_name: str
    generator_file_checksum: str

    def to_dict(self) -> dict:
        """Return the metadata in the layout of the metadata file."""
        return {
            "api_version": self.api_version,
            "api_directory_checksum": self.api_directory_checksum,
            "last_modification": {
                "timestamp": self.timestamp,
                "reason": UpdateReason(self.reason).value,
            },
            "aws_sdk_go_version": self.aws_sdk_go_version,
            "ack_generate_info": self.generator_info.to_dict(),
            "generator_config_info": {
                "original_file_name": self.generator_file_name,
                "file_checksum": self.generator_file_checksum,
            },
        }


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S.%f +0000 UTC")


def create_generation_metadata(
    api_version: str,
    apis_path: str | os.PathLike,
    modification_reason: UpdateReason,
    aws_sdk_go_version: str,
    generator_file_name: str | os.PathLike,
) -> GenerationMetadata:
    """Checksum the generated code and write a metadata file into the API version directory."""
    files_directory = Path(apis_path) / api_version
    checksum = hash_directory_content(files_directory)
    generator_checksum = hash_file(generator_file_name)

    metadata = GenerationMetadata(
        api_version=api_version,
        api_directory_checksum=checksum,
        timestamp=_utc_timestamp(),
        reason=UpdateReason(modification_reason),
        aws_sdk_go_version=aws_sdk_go_version,
        generator_info=build_info(),
        generator_file_name=os.path.basename(os.fspath(generator_file_name)),
        generator_file_checksum=generator_checksum,
    )
    text = yaml.safe_dump(metadata.to_dict(), sort_keys=True, default_flow_style=False)
    (files_directory / OUTPUT_FILE_NAME).write_text(text, encoding="utf-8")
    return metadata


def _walk_files(directory: Path) -> Iterator[Path]:
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda e: e.name)
    for entry in entries:
        path = Path(entry.path)
        if entry.is_dir(follow_symlinks=False):
            yield from _walk_files(path)
        else:
            yield path


def _feed(h, path: Path) -> None:
    with open(path, "rb") as fh:
        for chunk in iter(lambda: fh.read(_CHUNK), b""):
            h.update(chunk)


def hash_directory_content(directory: str | os.PathLike) -> str:
    """Return the SHA-1 of the concatenated non-YAML files under a directory, in walk order."""
    root = Path(directory)
    if not root.is_dir():
        if not root.exists():
            raise FileNotFoundError(f"no such directory: {root}")
        raise NotADirectoryError(f"not a directory: {root}")
    h = hashlib.sha1()
    for path in _walk_files(root):
        if path.suffix == ".yaml":
            continue
        _feed(h, path)
    return h.hexdigest()


def hash_file(filename: str | os.PathLike) -> str:
    """Return the SHA-1 hex digest of a file's contents."""
    h = hashlib.sha1()
    _feed(h, Path(filename))
    return h.hexdigest()