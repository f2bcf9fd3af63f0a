"""Ownership declaration models.

An OWNERS file is a small YAML document placed in a directory:

    approvers:
      - alice
      - "@bob"
    reviewers:
      - carol
    options:
      no_parent_owners: true

Identities are normalised on parse: lower-cased, leading ``@`` stripped.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import yaml


def normalize_identity(name: str) -> str:
    return name.strip().lstrip("@").lower()


@dataclass(frozen=True)
class OwnersEntry:
    """Owners declared by a single directory."""

    approvers: frozenset[str] = field(default_factory=frozenset)
    reviewers: frozenset[str] = field(default_factory=frozenset)
    no_parent_owners: bool = False


def _identities(value) -> frozenset[str]:
    if not value:
        return frozenset()
    if isinstance(value, str):
        value = value.split()
    return frozenset(normalize_identity(str(v)) for v in value if str(v).strip())


def parse_owners_file(text: str) -> OwnersEntry:
    """Parse the YAML body of an OWNERS file.

    Raises ValueError when the document is not a mapping.
    """
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError("OWNERS file must be a YAML mapping")

    options = data.get("options") or {}
    return OwnersEntry(
        approvers=_identities(data.get("approvers")),
        reviewers=_identities(data.get("reviewers")),
        no_parent_owners=bool(options.get("no_parent_owners", False)),
    )
