from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from ..core.constants import DEFAULT_BRANCH, DEFAULT_OWNER, DEFAULT_REPO, DEFAULT_STREAM


@dataclass
class RemoteConfig:
    """Where the roster lives remotely and the credential used to reach it."""

    token: str = ""
    owner: str = DEFAULT_OWNER
    repo: str = DEFAULT_REPO
    path: str = DEFAULT_STREAM
    branch: str = DEFAULT_BRANCH

    @property
    def has_credential(self) -> bool:
        return bool(self.token and self.token.strip())

    @property
    def repo_slug(self) -> str:
        return f"{self.owner}/{self.repo}"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, defaults: "RemoteConfig | None" = None) -> "RemoteConfig":
        base = defaults or cls()
        return cls(
            token=str(data.get("token") or base.token or ""),
            owner=str(data.get("owner") or base.owner),
            repo=str(data.get("repo") or base.repo),
            path=str(data.get("path") or base.path),
            branch=str(data.get("branch") or base.branch),
        )
