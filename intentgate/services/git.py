"""
Git Integration - Revision lookup for trace entries

Best effort. Outside a repository, or without git on PATH,
the revision is recorded as "HEAD".
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional


logger = logging.getLogger(__name__)

FALLBACK_REVISION = "HEAD"


class GitIntegration:
    """Read-only view of the workspace repository."""

    def __init__(self, repo_path: Optional[Path] = None):
        self.repo_path = Path(repo_path) if repo_path else Path.cwd()

    def _run_git(self, args: List[str]) -> Optional[str]:
        """Run a git command and return stdout, or None on any failure."""
        try:
            result = subprocess.run(
                ["git"] + args,
                cwd=self.repo_path,
                capture_output=True,
                text=True,
                check=True,
                timeout=5,
            )
            return result.stdout
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError) as e:
            logger.debug("git %s failed: %s", " ".join(args), e)
            return None

    def head_revision(self) -> str:
        """Current commit SHA, or 'HEAD' when it cannot be determined."""
        output = self._run_git(["rev-parse", "HEAD"])
        if output and output.strip():
            return output.strip()
        return FALLBACK_REVISION
