from __future__ import annotations

import ast
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ImportRef:
    module: str
    line: int


def gv_root() -> Path:
    return Path(__file__).resolve().parents[2]


def iter_source_files(base: Path) -> list[Path]:
    root = gv_root()
    files: list[Path] = []
    for path in sorted(base.rglob("*.py")):
        rel = path.relative_to(root)
        if rel.parts and rel.parts[0] == "test":
            continue
        if any(part == "__pycache__" or part.startswith(".") for part in rel.parts):
            continue
        files.append(path)
    return files


def read_tree(path: Path) -> ast.AST:
    return ast.parse(path.read_text(encoding="utf-8"), filename=str(path))


def parse_imports(path: Path) -> list[ImportRef]:
    imports: list[ImportRef] = []
    for node in ast.walk(read_tree(path)):
        if isinstance(node, ast.Import):
            for alias in node.names:
                imports.append(ImportRef(module=alias.name, line=node.lineno))
        elif isinstance(node, ast.ImportFrom):
            if node.level or node.module is None:
                continue
            imports.append(ImportRef(module=node.module, line=node.lineno))
    return imports


def matches_prefix(module: str, prefix: str) -> bool:
    return module == prefix or module.startswith(prefix + ".")


def _offenders(package: str, forbidden: tuple[str, ...]) -> list[str]:
    root = gv_root()
    offenders: list[str] = []
    for file_path in iter_source_files(root / package):
        rel = file_path.relative_to(root)
        for item in parse_imports(file_path):
            if any(matches_prefix(item.module, prefix) for prefix in forbidden):
                offenders.append(f"{rel}:{item.line}: forbidden import '{item.module}'")
    return offenders


def test_lower_layers_do_not_import_cli() -> None:
    for package in ("core", "platform", "git", "output", "versioning"):
        offenders = _offenders(package, ("gv.cli", "typer"))
        assert not offenders, f"{package} -> cli dependency violations:\n" + "\n".join(offenders)


def test_core_and_platform_do_not_import_domain() -> None:
    for package in ("core", "platform"):
        offenders = _offenders(package, ("gv.versioning", "gv.git", "gv.output"))
        assert not offenders, f"{package} -> domain dependency violations:\n" + "\n".join(
            offenders
        )


def test_rich_is_confined_to_console() -> None:
    root = gv_root()
    offenders: list[str] = []
    for file_path in iter_source_files(root):
        rel = file_path.relative_to(root).as_posix()
        if rel == "output/console.py":
            continue
        for item in parse_imports(file_path):
            if matches_prefix(item.module, "rich"):
                offenders.append(f"{rel}:{item.line}: import '{item.module}'")

    assert not offenders, "use gv.output.console instead of rich:\n" + "\n".join(offenders)


def test_subprocess_is_confined_to_platform_process() -> None:
    root = gv_root()
    offenders: list[str] = []
    for file_path in iter_source_files(root):
        rel = file_path.relative_to(root).as_posix()
        if rel == "platform/process.py":
            continue
        for item in parse_imports(file_path):
            if matches_prefix(item.module, "subprocess"):
                offenders.append(f"{rel}:{item.line}: import '{item.module}'")

    assert not offenders, "run commands through gv.platform.process:\n" + "\n".join(offenders)
