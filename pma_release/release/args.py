"""Positional argument parsing for `create-release`.

The historical interface is `create-release <version> <from_branch> [--tag]
[--stable]` with the flags accepted anywhere on the line. Typer hands the raw
tokens over unparsed and this module binds them.
"""

from __future__ import annotations

from collections.abc import Sequence

from pma_release.core.result import Err, Ok, Result
from pma_release.release.contracts import ReleaseRequest
from pma_release.release.errors import ReleaseError

USAGE = """\
Usages:
  create-release <version> <from_branch> [--tag] [--stable]

If --tag is specified, release tag is automatically created
(use this for all releases including pre-releases)
If --stable is specified, the STABLE branch is updated with this release

Examples:
  create-release 2.9.0-rc1 QA_2_9
  create-release 2.9.0 MAINT_2_9_0 --tag --stable"""

TAG_FLAG = "--tag"
STABLE_FLAG = "--stable"


def parse_release_args(tokens: Sequence[str]) -> Result[ReleaseRequest, ReleaseError]:
    """Bind version and branch positionally, flags in any position."""
    if len(tokens) < 2:
        return Err(ReleaseError(kind="usage", message="missing arguments", hint=USAGE))

    version = ""
    branch = ""
    tag = False
    stable = False

    for token in tokens:
        if token == TAG_FLAG:
            tag = True
        elif token == STABLE_FLAG:
            stable = True
        elif not version:
            version = token
        elif not branch:
            branch = token
        else:
            return Err(
                ReleaseError(
                    kind="invalid_arguments",
                    message=f"Unknown parameter: {token}!",
                )
            )

    if not version or not branch:
        return Err(
            ReleaseError(
                kind="invalid_arguments",
                message="Branch and version have to be specified!",
            )
        )

    return Ok(ReleaseRequest(version=version, branch=branch, tag=tag, stable=stable))
