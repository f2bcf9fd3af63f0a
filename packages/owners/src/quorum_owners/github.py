"""Load an OwnersTree from the OWNERS files of a GitHub branch."""

from __future__ import annotations

import logging
import posixpath

import yaml

from quorum_owners.models import OwnersEntry, parse_owners_file
from quorum_owners.tree import OwnersTree

logger = logging.getLogger(__name__)

DEFAULT_OWNERS_FILE = "OWNERS"


def find_owners_files(repo, branch: str, file_name: str = DEFAULT_OWNERS_FILE) -> list[str]:
    """Return the paths of every ownership file tracked on branch."""
    tree = repo.get_git_tree(branch, recursive=True)
    return sorted(
        item.path for item in tree.tree if item.type == "blob" and posixpath.basename(item.path) == file_name
    )


def load_repo_owners(repo, branch: str, file_name: str = DEFAULT_OWNERS_FILE) -> OwnersTree | None:
    """Build the ownership directory of a branch, or None when it declares no owners.

    API failures propagate as GithubException. A single malformed OWNERS
    file is skipped with a warning so the rest of the tree stays usable.
    """
    paths = find_owners_files(repo, branch, file_name)
    if not paths:
        logger.debug("No %s files on %s@%s", file_name, repo.full_name, branch)
        return None

    entries: dict[str, OwnersEntry] = {}
    for path in paths:
        content = repo.get_contents(path, ref=branch).decoded_content.decode("utf-8", errors="replace")
        try:
            entries[posixpath.dirname(path)] = parse_owners_file(content)
        except (ValueError, yaml.YAMLError) as e:
            logger.warning("Skipping malformed ownership file %s: %s", path, e)

    if not entries:
        return None
    logger.debug("Loaded %d ownership file(s) from %s@%s", len(entries), repo.full_name, branch)
    return OwnersTree(entries)
