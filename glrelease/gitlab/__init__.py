"""GitLab REST API access."""

from .client import GitlabClient, commits_query, connect
from .http import HttpClient, HttpError, MockHttpClient, RealHttpClient
from .models import Commit, Project, Tag, TagCommit

__all__ = [
    "Commit",
    "GitlabClient",
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "Project",
    "RealHttpClient",
    "Tag",
    "TagCommit",
    "commits_query",
    "connect",
]
