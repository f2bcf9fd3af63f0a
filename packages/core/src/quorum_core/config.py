import copy
import os
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "bot_name": "quorum-bot",
    "review": {
        "number_of_approvers": 1,  # distinct approvers each touched file needs
        "total_number_of_approvers": 1,
        "total_number_of_reviewers": 2,  # approvers count toward this too
        "allow_self_approve": False,
    },
    "ci": {
        "no_ci": False,
        "label_for_ci_passed": "ci-passed",
        "labels_for_basic_ci_passed": [],
    },
    "owners": {
        "file_name": "OWNERS",
        "branches_without_owners": [],  # collaborators own these branches
    },
    "commands_endpoint": "",
    "doc": "",
    "maintainers": [],
    "need_welcome": False,
    "recommend": {
        "url": None,
        "support_community": [],
    },
}

_SECTIONS = ("review", "ci", "owners", "recommend")


def load_config(config_path: str = ".quorum.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .quorum.yml in the current directory (sections merged key by key)
      3. CLI argument overrides
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        for key, value in file_config.items():
            if key in _SECTIONS and value is None:
                continue  # empty section keeps its defaults
            if key in _SECTIONS and isinstance(value, dict):
                config[key].update(value)
            else:
                config[key] = value

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    config["github_token"] = os.environ.get("GITHUB_TOKEN")

    return config


def _is_count(value, minimum: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= minimum


def validate_config(config: dict) -> None:
    """Raise ValueError describing the first invalid setting."""
    for section in _SECTIONS:
        if not isinstance(config.get(section), dict):
            raise ValueError(f"{section} must be a mapping")

    if not config.get("commands_endpoint"):
        raise ValueError("missing commands_endpoint")

    review = config["review"]
    if not _is_count(review.get("number_of_approvers"), 1):
        raise ValueError("review.number_of_approvers must be an integer >= 1")
    if not _is_count(review.get("total_number_of_approvers"), 1):
        raise ValueError("review.total_number_of_approvers must be an integer >= 1")
    if review["total_number_of_approvers"] < review["number_of_approvers"]:
        raise ValueError("review.total_number_of_approvers must not be less than review.number_of_approvers")
    if not _is_count(review.get("total_number_of_reviewers"), 0):
        raise ValueError("review.total_number_of_reviewers must be an integer >= 0")

    ci = config["ci"]
    if not ci.get("no_ci") and not ci.get("label_for_ci_passed"):
        raise ValueError("ci.label_for_ci_passed is required unless ci.no_ci is set")

    if not config["owners"].get("file_name"):
        raise ValueError("owners.file_name must not be empty")


def recommend_url_for(config: dict, community: str) -> Optional[str]:
    """The recommendation endpoint if community has opted in, else None."""
    recommend = config.get("recommend") or {}
    if community in (recommend.get("support_community") or []):
        return recommend.get("url") or None
    return None
