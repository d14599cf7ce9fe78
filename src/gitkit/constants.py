"""gitkit constants.

Single source of truth for defaults shared by config, executor and
operations.
"""

from __future__ import annotations

# =============================================================================
# Execution
# =============================================================================

#: Executable invoked for every git command
DEFAULT_GIT_BINARY: str = "git"

#: Default timeout for local git operations in seconds
DEFAULT_TIMEOUT: float = 120.0

#: Default timeout for operations that talk to a remote in seconds
DEFAULT_NETWORK_TIMEOUT: float = 600.0

#: Environment forced onto every git process. A fixed locale keeps summary
#: lines ("3 files changed, ...") parseable. Git never prompts: credential
#: failures exit instead of hanging and sequencer commands that would open an
#: editor keep the prepared message.
GIT_ENVIRONMENT: dict[str, str] = {
    "LC_ALL": "C",
    "GIT_TERMINAL_PROMPT": "0",
    "GIT_EDITOR": "true",
}

# =============================================================================
# Diff
# =============================================================================

#: Empty baseline that untracked files are compared against
EMPTY_BASELINE: str = "/dev/null"

#: Exit code git diff --no-index uses to report "inputs differ"
NO_INDEX_DIFFERS_EXIT_CODE: int = 1

# =============================================================================
# Configuration
# =============================================================================

#: Project-level configuration file, looked up in the current directory
PROJECT_CONFIG_FILENAME: str = "gitkit.yaml"
