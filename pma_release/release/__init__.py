"""Release pipeline.

Stages, in execution order:
- args: command line binding
- gate: config library lookup and operator confirmation
- worktree: isolated checkout of the release branch
- versions: version strings in the tracked files
- artifacts: generated files and developer-only files
- kits / archives: per-kit trees and their archives
- signing: signatures and checksums
- promote: release tag and stable branch
- checklist: produced files and remaining manual tasks

`pipeline.ReleaseBuilder` runs them; `tools` holds the external tool seams.
"""

from __future__ import annotations
