"""Value types shared between the release stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from pma_release.core.config import Config
from pma_release.core.result import Err, Ok, Result
from pma_release.release.errors import ReleaseError


class KitSpec(StrEnum):
    """Distribution kit, by translation scope."""

    ALL_LANGUAGES = "all-languages"
    ENGLISH = "english"


class CompressionSpec(StrEnum):
    """Archive format and the tool producing it."""

    ZIP_7Z = "zip-7z"
    ZIP = "zip"
    TBZ = "tbz"
    TXZ = "txz"
    TGZ = "tgz"
    SEVEN_Z = "7z"

    @property
    def suffix(self) -> str:
        """File name suffix of the produced archive."""
        return _SUFFIXES[self]

    @property
    def uses_tar(self) -> bool:
        return self in (CompressionSpec.TBZ, CompressionSpec.TXZ, CompressionSpec.TGZ)

    @classmethod
    def parse(cls, token: str) -> CompressionSpec | None:
        try:
            return cls(token)
        except ValueError:
            return None


_SUFFIXES: dict[CompressionSpec, str] = {
    CompressionSpec.ZIP_7Z: ".zip",
    CompressionSpec.ZIP: ".zip",
    CompressionSpec.TBZ: ".tar.bz2",
    CompressionSpec.TXZ: ".tar.xz",
    CompressionSpec.TGZ: ".tar.gz",
    CompressionSpec.SEVEN_Z: ".7z",
}

SIDECAR_SUFFIXES = (".asc", ".md5", ".sha1")


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    """What the operator asked for on the command line."""

    version: str
    branch: str
    tag: bool = False
    stable: bool = False


@dataclass(frozen=True, slots=True)
class ReleaseContext:
    """Request plus everything resolved from configuration.

    Immutable; passed to every stage.
    """

    request: ReleaseRequest
    repo_root: Path
    output_dir: Path
    product: str
    kits: tuple[KitSpec, ...]
    compressions: tuple[str, ...]
    remote: str = "origin"
    main_branch: str = "master"
    stable_branch: str = "STABLE"

    @property
    def version(self) -> str:
        return self.request.version

    @property
    def branch(self) -> str:
        return self.request.branch

    @property
    def workdir(self) -> Path:
        """Linked worktree holding the cleaned release tree."""
        return self.output_dir / f"{self.product}-{self.version}"

    def kit_name(self, kit: KitSpec) -> str:
        return f"{self.product}-{self.version}-{kit}"

    def known_compressions(self) -> tuple[CompressionSpec, ...]:
        """Requested compressions that are recognized, in request order."""
        out: list[CompressionSpec] = []
        for token in self.compressions:
            spec = CompressionSpec.parse(token)
            if spec is not None and spec not in out:
                out.append(spec)
        return tuple(out)

    def expected_outputs(self) -> list[Path]:
        """Every archive and sidecar file this run will write."""
        paths: list[Path] = []
        for kit in self.kits:
            name = self.kit_name(kit)
            for suffix in sorted({c.suffix for c in self.known_compressions()}):
                archive = self.output_dir / f"{name}{suffix}"
                paths.append(archive)
                paths.extend(archive.with_name(archive.name + s) for s in SIDECAR_SUFFIXES)
        return paths


@dataclass(frozen=True, slots=True)
class ArchiveOutput:
    kit: KitSpec
    compression: CompressionSpec
    path: Path


@dataclass(frozen=True, slots=True)
class SignedArtifact:
    archive: Path
    signature: Path
    md5: Path
    sha1: Path

    @property
    def files(self) -> tuple[Path, ...]:
        return (self.archive, self.signature, self.md5, self.sha1)


@dataclass(frozen=True, slots=True)
class ReleaseReport:
    """Outcome of a successful run."""

    archives: tuple[ArchiveOutput, ...]
    signed: tuple[SignedArtifact, ...]
    tag: str | None = None
    stable_updated: bool = False


def _archives_factory() -> list[ArchiveOutput]:
    return []


@dataclass
class WorkingTree:
    """Mutable handle on the release checkout, owned by the pipeline.

    Attributes:
        root: Linked worktree directory.
        config_lib: Path (relative to root) of the file holding PMA_VERSION.
        archives: Archives produced so far.
    """

    root: Path
    config_lib: str
    archives: list[ArchiveOutput] = field(default_factory=_archives_factory)


def resolve_context(
    request: ReleaseRequest,
    *,
    repo_root: Path,
    config: Config,
    kits: list[str] | None = None,
    compressions: list[str] | None = None,
) -> Result[ReleaseContext, ReleaseError]:
    """Combine request, config and CLI overrides into a ReleaseContext."""
    kit_tokens = tuple(kits) if kits else config.kits
    resolved: list[KitSpec] = []
    for token in kit_tokens:
        try:
            kit = KitSpec(token)
        except ValueError:
            known = ", ".join(k.value for k in KitSpec)
            return Err(
                ReleaseError(
                    kind="invalid_config",
                    message=f"Unknown kit: {token}",
                    hint=f"known kits: {known}",
                )
            )
        if kit not in resolved:
            resolved.append(kit)

    return Ok(
        ReleaseContext(
            request=request,
            repo_root=repo_root,
            output_dir=repo_root / config.output_dir,
            product=config.product,
            kits=tuple(resolved),
            compressions=tuple(compressions) if compressions else config.compressions,
            remote=config.remote,
            main_branch=config.main_branch,
            stable_branch=config.stable_branch,
        )
    )
