"""Version-bearing files on disk.

VersionFileStore finds the files that carry a project version under a
directory, reads the current version from them and rewrites them after a
bump. Supported files:

- pyproject.toml: `version` in `[project]` or `[tool.poetry]`
- Cargo.toml: `version` in `[package]` or `[workspace.package]`
- package.json: top-level `"version"`
- *.csproj, *.fsproj, *.vbproj, *.props: `<Version>`, `<VersionPrefix>`,
  `<PackageVersion>`, `<AssemblyVersion>`, `<FileVersion>`
- __init__.py, _version.py, __about__.py, version.py: `__version__ = "..."`

Rewrites replace only the version text, so comments and formatting
survive. The highest version found is the current one; a bump writes the
new version into every file so they end up in sync.
"""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from gv.core.result import Err, Ok, Result
from gv.platform.files import atomic_write_text, read_text
from gv.versioning.errors import VersioningError
from gv.versioning.increment import VersionIncrement
from gv.versioning.model import SearchMode
from gv.versioning.semver import SemanticVersion

__all__ = ["VersionFile", "VersionFileStore", "find_version_files"]

FileKind = Literal["pyproject", "cargo", "package_json", "msbuild", "python"]

Span = tuple[int, int]

_SKIP_DIRS = frozenset(
    {
        "node_modules",
        "__pycache__",
        "venv",
        "env",
        "build",
        "dist",
        "target",
        "bin",
        "obj",
        "site-packages",
    }
)

_PYTHON_VERSION_FILES = frozenset({"__init__.py", "_version.py", "__about__.py", "version.py"})
_MSBUILD_SUFFIXES = frozenset({".csproj", ".fsproj", ".vbproj", ".props"})

_TOML_VERSION_RE = re.compile(r"""(?m)^version\s*=\s*["']([^"'\r\n]+)["']""")
_JSON_VERSION_RE = re.compile(r'"version"\s*:\s*"([^"\r\n]*)"')
_MSBUILD_VERSION_RE = re.compile(
    r"<(Version|VersionPrefix|PackageVersion|AssemblyVersion|FileVersion)>"
    r"\s*([^<\s]+)\s*</\1>"
)
_PYTHON_VERSION_RE = re.compile(
    r"""(?m)^__version__\s*(?::\s*str\s*)?=\s*["']([^"'\r\n]+)["']"""
)
_FOUR_PART_RE = re.compile(r"^(\d+)\.(\d+)\.(\d+)\.(\d+)$")

_TOML_SECTIONS: dict[FileKind, tuple[str, ...]] = {
    "pyproject": ("project", "tool.poetry"),
    "cargo": ("package", "workspace.package"),
}

_SUPPORTED_HINT = (
    "Expected pyproject.toml, Cargo.toml, package.json, *.csproj/*.props "
    "or a __version__ assignment."
)


@dataclass(frozen=True, slots=True)
class VersionFile:
    path: Path
    kind: FileKind


@dataclass(frozen=True, slots=True)
class _ScannedFile:
    file: VersionFile
    text: str
    spans: tuple[Span, ...]

    def values(self) -> list[str]:
        return [self.text[start:end] for start, end in self.spans]


def _kind_of(path: Path) -> FileKind | None:
    name = path.name
    if name == "pyproject.toml":
        return "pyproject"
    if name == "Cargo.toml":
        return "cargo"
    if name == "package.json":
        return "package_json"
    if path.suffix in _MSBUILD_SUFFIXES:
        return "msbuild"
    if name in _PYTHON_VERSION_FILES:
        return "python"
    return None


def _skip_dir(name: str) -> bool:
    return name.startswith(".") or name in _SKIP_DIRS


def find_version_files(directory: Path, search_mode: SearchMode) -> list[VersionFile]:
    """List the recognised version files under directory, sorted by path."""
    found: list[VersionFile] = []

    if search_mode is SearchMode.TOP_LEVEL:
        for child in directory.iterdir():
            kind = _kind_of(child)
            if kind is not None and child.is_file():
                found.append(VersionFile(path=child, kind=kind))
        return sorted(found, key=lambda f: f.path)

    for root, dirs, files in os.walk(directory):
        dirs[:] = [d for d in dirs if not _skip_dir(d)]
        for name in files:
            path = Path(root) / name
            kind = _kind_of(path)
            if kind is not None:
                found.append(VersionFile(path=path, kind=kind))

    return sorted(found, key=lambda f: f.path)


def _parse_value(value: str) -> SemanticVersion | None:
    version = SemanticVersion.try_parse(value)
    if version is not None:
        return version
    m = _FOUR_PART_RE.match(value)
    if m is None:
        return None
    return SemanticVersion(int(m.group(1)), int(m.group(2)), int(m.group(3)))


def _format_like(old_value: str, version: SemanticVersion) -> str:
    """Render version in the shape of the value it replaces."""
    if _FOUR_PART_RE.match(old_value):
        return f"{version}.0"
    if old_value.startswith("v"):
        return f"v{version}"
    return str(version)


def _toml_section_spans(text: str, section: str) -> list[Span]:
    header = re.search(rf"(?m)^\[{re.escape(section)}\]\s*$", text)
    if header is None:
        return []
    start = header.end()
    next_header = re.search(r"(?m)^\[", text[start:])
    end = start + next_header.start() if next_header else len(text)
    m = _TOML_VERSION_RE.search(text, start, end)
    if m is None:
        return []
    return [m.span(1)]


def _version_spans(file: VersionFile, text: str) -> Result[list[Span], VersioningError]:
    match file.kind:
        case "pyproject" | "cargo":
            spans: list[Span] = []
            for section in _TOML_SECTIONS[file.kind]:
                spans.extend(_toml_section_spans(text, section))
            return Ok(spans)
        case "package_json":
            return _package_json_spans(file, text)
        case "msbuild":
            return Ok([m.span(2) for m in _MSBUILD_VERSION_RE.finditer(text)])
        case "python":
            m = _PYTHON_VERSION_RE.search(text)
            return Ok([m.span(1)] if m else [])


def _package_json_spans(file: VersionFile, text: str) -> Result[list[Span], VersioningError]:
    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(
            VersioningError(
                kind="invalid_version_file",
                message=f"invalid JSON in {file.path.name}: {e}",
                hint=str(file.path),
            )
        )

    if not isinstance(obj, dict) or not isinstance(obj.get("version"), str):
        return Ok([])

    # The first "version" key in document order is the top-level one in any
    # package.json that lists it before nested objects; confirm by value.
    m = _JSON_VERSION_RE.search(text)
    if m is None or m.group(1) != obj["version"]:
        return Err(
            VersioningError(
                kind="invalid_version_file",
                message=f"cannot locate the top-level version in {file.path.name}",
                hint="Move \"version\" above nested objects.",
            )
        )
    return Ok([m.span(1)])


def _scan_file(file: VersionFile) -> Result[_ScannedFile, VersioningError]:
    try:
        text = read_text(file.path)
    except (OSError, UnicodeDecodeError) as e:
        return Err(
            VersioningError(
                kind="io_failed",
                message=f"failed to read {file.path.name}: {e}",
                hint=str(file.path),
            )
        )

    spans = _version_spans(file, text)
    if isinstance(spans, Err):
        return spans

    # Values that are not versions (e.g. "$(Version)" in MSBuild) are left alone.
    usable = tuple(span for span in spans.value if _parse_value(text[span[0] : span[1]]))
    return Ok(_ScannedFile(file=file, text=text, spans=usable))


class VersionFileStore:
    """Read and bump the version files of a directory."""

    def get_latest_version(
        self, directory: Path, search_mode: SearchMode
    ) -> Result[SemanticVersion, VersioningError]:
        scanned = self._scan(directory, search_mode)
        if isinstance(scanned, Err):
            return scanned
        return Ok(_latest(scanned.value))

    def apply_increment(
        self, directory: Path, search_mode: SearchMode, increment: VersionIncrement
    ) -> Result[list[Path], VersioningError]:
        if not increment.is_actionable:
            return Ok([])

        scanned = self._scan(directory, search_mode)
        if isinstance(scanned, Err):
            return scanned

        new_version = _latest(scanned.value).bump(increment)
        changed: list[Path] = []

        for item in scanned.value:
            text = item.text
            for start, end in sorted(item.spans, reverse=True):
                text = text[:start] + _format_like(text[start:end], new_version) + text[end:]
            if text == item.text:
                continue

            try:
                atomic_write_text(item.file.path, text)
            except OSError as e:
                return Err(
                    VersioningError(
                        kind="io_failed",
                        message=f"failed to write {item.file.path.name}: {e}",
                        hint=str(item.file.path),
                    )
                )
            changed.append(item.file.path)

        return Ok(changed)

    def _scan(
        self, directory: Path, search_mode: SearchMode
    ) -> Result[list[_ScannedFile], VersioningError]:
        if not directory.is_dir():
            return Err(
                VersioningError(
                    kind="invalid_input",
                    message=f"target directory does not exist: {directory}",
                )
            )

        try:
            files = find_version_files(directory, search_mode)
        except OSError as e:
            return Err(
                VersioningError(
                    kind="io_failed",
                    message=f"failed to list {directory}: {e}",
                )
            )

        scanned: list[_ScannedFile] = []
        for file in files:
            result = _scan_file(file)
            if isinstance(result, Err):
                return result
            if result.value.spans:
                scanned.append(result.value)

        if not scanned:
            return Err(
                VersioningError(
                    kind="version_not_found",
                    message=f"no version found under {directory} ({search_mode} search)",
                    hint=_SUPPORTED_HINT,
                )
            )
        return Ok(scanned)


def _latest(scanned: list[_ScannedFile]) -> SemanticVersion:
    versions = [
        version
        for item in scanned
        for value in item.values()
        if (version := _parse_value(value)) is not None
    ]
    return max(versions)
