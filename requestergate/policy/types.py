from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


class RequesterPolicy(BaseModel):
    """
    Policy for one privileged requester.
    `labels` is compared as a set against the PR labels.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    labels: List[str] = Field(default_factory=list)


@dataclass(frozen=True)
class RegistryLookup:
    """
    Outcome of loading the requester registry: either unavailable (with a
    reason) or a mapping keyed by exact, case-sensitive login.
    """
    available: bool
    requesters: Mapping[str, RequesterPolicy] = field(default_factory=dict)
    reason: Optional[str] = None

    @classmethod
    def of(cls, requesters: Mapping[str, RequesterPolicy]) -> "RegistryLookup":
        return cls(available=True, requesters=dict(requesters))

    @classmethod
    def unavailable(cls, reason: str) -> "RegistryLookup":
        return cls(available=False, reason=reason)

    def lookup(self, author: str) -> Optional[RequesterPolicy]:
        if not self.available:
            return None
        return self.requesters.get(author)
