"""Release decision and tagging.

- versions: pre-release classification
- namespace: repository namespace resolution
- watermark: date of the last release tag
- commits: commit range since that date
- notes: changelog rendering
- orchestrator: the end-to-end flow
"""

from .contracts import Connector, ReleaseOutcome, ReleaseRequest, TagRepository
from .errors import ReleaseError
from .orchestrator import run_release, tag_exists

__all__ = [
    "Connector",
    "ReleaseError",
    "ReleaseOutcome",
    "ReleaseRequest",
    "TagRepository",
    "run_release",
    "tag_exists",
]
