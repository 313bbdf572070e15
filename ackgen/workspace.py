"""Filesystem helpers for locating the SDK checkout, API versions and output directories."""

from __future__ import annotations

import functools
import os
import re
import tempfile
from pathlib import Path
from typing import Iterator

SDK_REPO_URL = "https://github.com/aws/aws-sdk-go"
SDK_MODULE = SDK_REPO_URL.removeprefix("https://")

_KUBE_VERSION_RE = re.compile(r"^v(\d+)(?:(alpha|beta)(\d+))?$")
_VERSION_TYPE_RANK = {"alpha": 0, "beta": 1, None: 2}
_SERVICE_ID_STRIP_RE = re.compile(r'[," \t]')


def ensure_dir(path: str | os.PathLike) -> bool:
    """Make sure a directory exists and return whether it already existed.

    Raises NotADirectoryError when the path is not a directory and
    PermissionError when an existing directory cannot be written to.
    """
    target = Path(path)
    if not target.exists():
        target.mkdir(parents=True, exist_ok=True)
        return False
    if not target.is_dir():
        raise NotADirectoryError(f"expected {target} to be a directory")
    if not is_dir_writeable(target):
        raise PermissionError(f"{target} is not a writeable directory")
    return True


def is_dir_writeable(path: str | os.PathLike) -> bool:
    """Return True when a file can be created inside the directory."""
    try:
        with tempfile.NamedTemporaryFile(dir=os.fspath(path)):
            pass
    except OSError:
        return False
    return True


def ensure_semver_prefix(version: str) -> str:
    """Return the version with exactly one leading 'v'."""
    return "v" + version.lstrip("v")


def get_sdk_version(
    aws_sdk_go_version: str,
    last_generation_version: str,
    output_path: str | os.PathLike,
) -> str:
    """Return the aws-sdk-go version to use.

    An explicitly requested version wins, then the version of the last
    generation, and finally the version required by the controller's go.mod.
    """
    if aws_sdk_go_version:
        return aws_sdk_go_version
    if last_generation_version:
        return last_generation_version
    return get_sdk_version_from_go_mod(Path(output_path) / "go.mod")


def _strip_comment(line: str) -> str:
    return line.split("//", 1)[0].strip()


def _require_entries(text: str) -> Iterator[tuple[str, str]]:
    in_block = False
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = _strip_comment(raw)
        if not line:
            continue
        if in_block:
            if line == ")":
                in_block = False
                continue
            spec = line
        elif line.startswith("require"):
            rest = line[len("require"):].strip()
            if rest == "(":
                in_block = True
                continue
            if not rest:
                raise ValueError(f"go.mod:{lineno}: usage: require module/path v1.2.3")
            spec = rest
        else:
            continue
        parts = spec.split()
        if len(parts) != 2:
            raise ValueError(f"go.mod:{lineno}: usage: require module/path v1.2.3")
        yield parts[0].strip('"`'), parts[1]
    if in_block:
        raise ValueError("go.mod: unterminated require block")


def get_sdk_version_from_go_mod(go_mod_path: str | os.PathLike) -> str:
    """Return the aws-sdk-go version listed among a go.mod file's requirements."""
    text = Path(go_mod_path).read_text(encoding="utf-8")
    for module, version in _require_entries(text):
        if module == SDK_MODULE:
            return version
    raise ValueError(f"couldn't find {SDK_MODULE} in the go.mod require block")


def _parse_kube_version(version: str) -> tuple[int, int, int] | None:
    match = _KUBE_VERSION_RE.match(version)
    if match is None:
        return None
    major = int(match.group(1))
    rank = _VERSION_TYPE_RANK[match.group(2)]
    minor = int(match.group(3)) if match.group(3) else 0
    return rank, major, minor


def compare_kube_aware_versions(a: str, b: str) -> int:
    """Compare two Kubernetes-style API versions.

    Returns a negative number when ``a`` sorts before ``b``, zero when they are
    equal and a positive number otherwise. GA versions outrank beta, which
    outranks alpha; then the major and minor numbers decide. Versions that are
    not Kubernetes-style sort before those that are, in reverse lexical order.
    """
    if a == b:
        return 0
    pa = _parse_kube_version(a)
    pb = _parse_kube_version(b)
    if pa is None and pb is None:
        return (a < b) - (a > b)
    if pa is None:
        return -1
    if pb is None:
        return 1
    for x, y in zip(pa, pb):
        if x != y:
            return x - y
    return 0


def latest_api_version(output_path: str | os.PathLike) -> str:
    """Return the latest API version directory under ``<output_path>/apis``."""
    apis_path = Path(output_path) / "apis"
    versions = [entry.name for entry in apis_path.iterdir()]
    if not versions:
        raise ValueError(f"no API versions found in {apis_path}")
    versions.sort(key=functools.cmp_to_key(compare_kube_aware_versions))
    return versions[-1]


def _walk(directory: Path) -> Iterator[Path]:
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda e: e.name)
    for entry in entries:
        path = Path(entry.path)
        if entry.is_dir():
            yield from _walk(path)
        else:
            yield path


def fall_back_find_service_id(sdk_dir: str | os.PathLike, svc_alias: str) -> str:
    """Return the SDK model directory whose service ID matches the alias.

    The ``models/apis/*/*/api-2.json`` files are scanned for a ``serviceId``
    that, lower-cased and without spaces, equals the alias. When none matches,
    the alias itself is returned.
    """
    base_path = Path(sdk_dir) / "models" / "apis"
    if not base_path.exists():
        raise FileNotFoundError(f"no such directory: {base_path}")
    for path in _walk(base_path):
        if "api-2.json" not in str(path):
            continue
        with open(path, encoding="utf-8") as fh:
            for line in fh:
                if "serviceId" not in line:
                    continue
                parts = line.rstrip("\n").split(":")
                if len(parts) < 2:
                    continue
                svc_id = _SERVICE_ID_STRIP_RE.sub("", parts[1]).lower()
                if svc_id == svc_alias:
                    return path.parts[-3]
    return svc_alias