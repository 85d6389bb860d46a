from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from threading import Event

import pytest
import typer
from typer.testing import CliRunner

from gv import __version__
from gv.cli.app import app
from gv.cli.context import CLIContext, build_context
from gv.core.config import Config, PublishConfig
from gv.core.errors import ErrorCode
from gv.core.result import Err, Ok, Result
from gv.output.console import MockConsole
from gv.versioning.errors import VersioningError
from gv.versioning.increment import VersionIncrement
from gv.versioning.model import PublishOutcome, PublishRequest, SearchMode
from gv.versioning.semver import SemanticVersion

V = VersionIncrement

PUBLISH_DEFAULTS: dict[str, object] = {
    "remote": None,
    "branch": None,
    "target_dir": None,
    "search": None,
    "author_email": None,
    "tag_prefix": None,
    "tag_suffix": None,
    "config_path": None,
    "dry_run": False,
}


def _ctx(tmp_path: Path, publish: PublishConfig | None = None) -> CLIContext:
    return CLIContext(
        git_dir=tmp_path,
        config=Config(publish=publish or PublishConfig()),
        console=MockConsole(),
    )


@dataclass
class FakeService:
    result: Result[PublishOutcome, VersioningError] | None = None
    increment: VersionIncrement = V.NONE
    requests: list[PublishRequest] = field(default_factory=list)
    increments: list[VersionIncrement] = field(default_factory=list)
    dry_runs: list[bool] = field(default_factory=list)

    def determine_increment(self, request: PublishRequest) -> Result[VersionIncrement, VersioningError]:
        self.requests.append(request)
        return Ok(self.increment)

    def publish(
        self,
        increment: VersionIncrement,
        request: PublishRequest,
        *,
        dry_run: bool = False,
        cancel: Event | None = None,
    ) -> Result[PublishOutcome, VersioningError]:
        self.increments.append(increment)
        return self.publish_with_determined_increment(request, dry_run=dry_run)

    def publish_with_determined_increment(
        self,
        request: PublishRequest,
        *,
        dry_run: bool = False,
        cancel: Event | None = None,
    ) -> Result[PublishOutcome, VersioningError]:
        self.requests.append(request)
        self.dry_runs.append(dry_run)
        assert self.result is not None
        return self.result


def _patch(
    monkeypatch: pytest.MonkeyPatch, module: object, ctx: CLIContext, service: FakeService
) -> None:
    monkeypatch.setattr(module, "build_context", lambda git_dir, config_path=None: ctx)
    monkeypatch.setattr(module, "make_service", lambda ctx, request: service)


PUBLISHED = PublishOutcome(
    status="published",
    increment=V.MINOR,
    previous_version=SemanticVersion(1, 0, 0),
    new_version=SemanticVersion(1, 1, 0),
    tag="v1.1.0",
    commit_id="a" * 40,
)


# =============================================================================
# gv current
# =============================================================================


def test_current_prints_version(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    import gv.cli.commands.current as current_cmd

    (tmp_path / "pyproject.toml").write_text(
        '[project]\nname = "demo"\nversion = "0.3.0"\n', encoding="utf-8"
    )

    current_cmd.current(git_dir=tmp_path, target_dir=None, search=None, config_path=None)

    assert capsys.readouterr().out == "0.3.0\n"


def test_current_without_version_files(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import gv.cli.commands.current as current_cmd

    ctx = _ctx(tmp_path)
    monkeypatch.setattr(current_cmd, "build_context", lambda git_dir, config_path=None: ctx)

    with pytest.raises(typer.Exit) as exc:
        current_cmd.current(git_dir=tmp_path, target_dir=None, search=None, config_path=None)

    assert exc.value.exit_code == int(ErrorCode.ENV_ERROR)
    assert isinstance(ctx.console, MockConsole)
    assert ctx.console.has_error()


def test_current_uses_configured_target(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    import gv.cli.commands.current as current_cmd

    (tmp_path / "gv.toml").write_text(
        '[publish]\ntarget_directory = "app"\nsearch = "top-level"\n', encoding="utf-8"
    )
    (tmp_path / "app").mkdir()
    (tmp_path / "app" / "package.json").write_text('{"version": "2.1.0"}', encoding="utf-8")

    current_cmd.current(git_dir=tmp_path, target_dir=None, search=None, config_path=None)

    assert capsys.readouterr().out == "2.1.0\n"


# =============================================================================
# gv increment
# =============================================================================


def test_increment_prints_determined_increment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    import gv.cli.commands.increment as increment_cmd

    service = FakeService(increment=V.BETA_MINOR)
    _patch(monkeypatch, increment_cmd, _ctx(tmp_path, PublishConfig(tag_prefix="v")), service)

    increment_cmd.increment(
        git_dir=tmp_path,
        target_dir=None,
        search=None,
        tag_prefix=None,
        tag_suffix=None,
        config_path=None,
    )

    assert capsys.readouterr().out == "beta-minor\n"
    assert service.requests[0].tag_pattern == "v*"


# =============================================================================
# gv publish
# =============================================================================


def test_publish_merges_options_over_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    import gv.cli.commands.publish as publish_cmd

    config = PublishConfig(
        remote="upstream",
        branch="main",
        author_email="config@example.com",
        tag_prefix="v",
        search="top-level",
    )
    service = FakeService(result=Ok(PUBLISHED))
    _patch(monkeypatch, publish_cmd, _ctx(tmp_path, config), service)

    options = {**PUBLISH_DEFAULTS, "remote": "origin", "author_email": "cli@example.com"}
    publish_cmd.publish(git_dir=tmp_path, **options)  # type: ignore[arg-type]

    request = service.requests[0]
    assert request.git_directory == tmp_path
    assert request.remote_target == "origin"
    assert request.branch_name == "main"
    assert request.commit_author_email == "cli@example.com"
    assert request.tag_prefix == "v"
    assert request.search_mode is SearchMode.TOP_LEVEL
    assert request.target_directory is None
    assert service.dry_runs == [False]
    assert capsys.readouterr().out == "v1.1.0\n"


def test_publish_empty_tag_prefix_overrides_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import gv.cli.commands.publish as publish_cmd

    service = FakeService(result=Ok(PUBLISHED))
    _patch(
        monkeypatch,
        publish_cmd,
        _ctx(tmp_path, PublishConfig(branch="main", tag_prefix="v")),
        service,
    )

    publish_cmd.publish(git_dir=tmp_path, **{**PUBLISH_DEFAULTS, "tag_prefix": ""})  # type: ignore[arg-type]

    assert service.requests[0].tag_prefix == ""


def test_publish_branch_falls_back_to_checked_out_branch(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import gv.cli.commands._helpers as helpers
    import gv.cli.commands.publish as publish_cmd

    class FakeRepository:
        def __init__(self, path: Path) -> None:
            self.path = path

        def current_branch(self) -> str | None:
            return "develop"

    monkeypatch.setattr(helpers, "Repository", FakeRepository)
    service = FakeService(result=Ok(PUBLISHED))
    _patch(monkeypatch, publish_cmd, _ctx(tmp_path), service)

    publish_cmd.publish(git_dir=tmp_path, **PUBLISH_DEFAULTS)  # type: ignore[arg-type]

    assert service.requests[0].branch_name == "develop"


def test_publish_dry_run(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import gv.cli.commands.publish as publish_cmd

    outcome = PublishOutcome(status="dry-run", increment=V.PATCH, tag="1.0.1")
    service = FakeService(result=Ok(outcome))
    _patch(monkeypatch, publish_cmd, _ctx(tmp_path, PublishConfig(branch="main")), service)

    publish_cmd.publish(git_dir=tmp_path, **{**PUBLISH_DEFAULTS, "dry_run": True})  # type: ignore[arg-type]

    assert service.dry_runs == [True]


def test_publish_skipped_prints_nothing(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    import gv.cli.commands.publish as publish_cmd

    service = FakeService(result=Ok(PublishOutcome.skipped(V.UNKNOWN)))
    _patch(monkeypatch, publish_cmd, _ctx(tmp_path, PublishConfig(branch="main")), service)

    publish_cmd.publish(git_dir=tmp_path, **PUBLISH_DEFAULTS)  # type: ignore[arg-type]

    assert capsys.readouterr().out == ""


def test_publish_push_failure_exit_code(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import gv.cli.commands.publish as publish_cmd

    error = VersioningError(kind="push_failed", message="git push failed", hint="fetch first")
    ctx = _ctx(tmp_path, PublishConfig(branch="main"))
    _patch(monkeypatch, publish_cmd, ctx, FakeService(result=Err(error)))

    with pytest.raises(typer.Exit) as exc:
        publish_cmd.publish(git_dir=tmp_path, **PUBLISH_DEFAULTS)  # type: ignore[arg-type]

    assert exc.value.exit_code == int(ErrorCode.NETWORK_ERROR)
    assert isinstance(ctx.console, MockConsole)
    assert ctx.console.messages == ["error: git push failed", "hint: fetch first"]


# =============================================================================
# gv publish-by
# =============================================================================


def test_publish_by_parses_increment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import gv.cli.commands.publish as publish_cmd

    service = FakeService(result=Ok(PUBLISHED))
    _patch(monkeypatch, publish_cmd, _ctx(tmp_path, PublishConfig(branch="main")), service)

    publish_cmd.publish_by(increment="beta-major", git_dir=tmp_path, **PUBLISH_DEFAULTS)  # type: ignore[arg-type]

    assert service.increments == [V.BETA_MAJOR]


def test_publish_by_rejects_unknown_increment(tmp_path: Path) -> None:
    import gv.cli.commands.publish as publish_cmd

    with pytest.raises(typer.Exit) as exc:
        publish_cmd.publish_by(increment="huge", git_dir=tmp_path, **PUBLISH_DEFAULTS)  # type: ignore[arg-type]

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)


# =============================================================================
# Context and app
# =============================================================================


def test_build_context_defaults_without_config(tmp_path: Path) -> None:
    ctx = build_context(tmp_path)
    assert ctx.git_dir == tmp_path.resolve()
    assert ctx.config == Config()


def test_build_context_broken_config(tmp_path: Path) -> None:
    (tmp_path / "gv.toml").write_text("[publish\n", encoding="utf-8")

    with pytest.raises(typer.Exit) as exc:
        build_context(tmp_path)

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)


def test_build_context_explicit_config_must_exist(tmp_path: Path) -> None:
    with pytest.raises(typer.Exit) as exc:
        build_context(tmp_path, tmp_path / "missing.toml")

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)


def test_app_version() -> None:
    result = CliRunner().invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.output.strip() == __version__


def test_app_registers_commands() -> None:
    result = CliRunner().invoke(app, ["--help"])
    assert result.exit_code == 0
    for name in ("current", "increment", "publish", "publish-by"):
        assert name in result.output
