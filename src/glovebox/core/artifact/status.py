"""Drift detection between profiles, generated artifacts and their digests.

Every state here is advisory: callers decide whether to regenerate, keep
the edited file or stop.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Union

from glovebox.core.artifact.digest import digest
from glovebox.core.profile.model import Profile

NOT_GENERATED = "not-generated"
UNTRACKED = "untracked"
UP_TO_DATE = "up-to-date"
MANUALLY_EDITED = "manually-edited"


@dataclass(frozen=True)
class ArtifactStatus:
    """Result of comparing an artifact file with the recorded build metadata.

    Attributes:
        state: one of ``not-generated``, ``untracked``, ``up-to-date`` or
            ``manually-edited`` (the file changed since it was generated).
        stale: the profile would now generate different text.
        base_changed: a project artifact was generated against another base.
        profile_edited: the profile's content hash no longer matches.
    """

    state: str
    stale: bool = False
    base_changed: bool = False
    profile_edited: bool = False
    current_digest: Optional[str] = None
    recorded_digest: Optional[str] = None

    @property
    def needs_regeneration(self) -> bool:
        return self.state == NOT_GENERATED or self.stale or self.base_changed

    def messages(self) -> List[str]:
        notes: List[str] = []
        if self.state == NOT_GENERATED:
            notes.append("artifact has not been generated")
        elif self.state == UNTRACKED:
            notes.append("artifact exists but no digest was recorded")
        elif self.state == MANUALLY_EDITED:
            notes.append("artifact was edited since it was generated")
        if self.stale:
            notes.append("profile changed since the artifact was generated")
        if self.base_changed:
            notes.append("base image artifact changed since this artifact was generated")
        if self.profile_edited:
            notes.append("profile file was edited outside glovebox")
        return notes

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["messages"] = self.messages()
        return data


def check_artifact(
    profile: Profile,
    current_content: Optional[Union[str, bytes]],
    expected_text: Optional[str],
    *,
    base_digest: Optional[str] = None,
) -> ArtifactStatus:
    """Compare ``current_content`` (file on disk) and ``expected_text`` (fresh emission).

    ``base_digest`` is the digest of the base artifact as it is now; it is
    compared with the one recorded when a project artifact was generated.
    """
    recorded = profile.build.artifact_digest
    current = digest(current_content) if current_content is not None else None

    if current is None:
        state = NOT_GENERATED
    elif not recorded:
        state = UNTRACKED
    elif current == recorded:
        state = UP_TO_DATE
    else:
        state = MANUALLY_EDITED

    stale = False
    if expected_text is not None:
        reference = recorded or current
        stale = reference is not None and digest(expected_text) != reference

    base_changed = bool(
        base_digest and profile.build.base_digest and base_digest != profile.build.base_digest
    )

    return ArtifactStatus(
        state=state,
        stale=stale,
        base_changed=base_changed,
        profile_edited=profile.was_manually_edited(),
        current_digest=current,
        recorded_digest=recorded,
    )


__all__ = [
    "ArtifactStatus",
    "check_artifact",
    "NOT_GENERATED",
    "UNTRACKED",
    "UP_TO_DATE",
    "MANUALLY_EDITED",
]
