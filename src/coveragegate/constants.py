"""Centralized constants for coveragegate.

Cross-cutting values that are referenced by multiple modules.
Values used by a single module are defined in that module.
"""

# =============================================================================
# Display
# =============================================================================

# Placeholder for values that have not been computed for a build
NOT_AVAILABLE = "n/a"

# Relative URL of the coverage details page of a build
DEFAULT_COVERAGE_URL_NAME = "coverage"


# =============================================================================
# Quality Gates
# =============================================================================

NO_QUALITY_GATES_MESSAGE = "No quality gates have been set - skipping"

DEFAULT_THRESHOLD = 0.0


# =============================================================================
# Recorder Defaults
# =============================================================================

DEFAULT_RECORDER_ID = "coverage"
DEFAULT_RECORDER_NAME = "Code Coverage"

# Maximum number of error lines kept by a FilteredLog
DEFAULT_MAX_LOG_ERRORS = 20
