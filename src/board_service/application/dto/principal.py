from __future__ import annotations

from dataclasses import dataclass, field

from board_service.domain.value_objects.enums import Role

DEFAULT_ADMIN_NAME = "Admin"


@dataclass(frozen=True, slots=True)
class Principal:
    """Verified caller identity. Anonymous viewers have no Principal at all."""

    kind: Role
    subject_id: str
    display_name: str = ""
    roles: list[str] = field(default_factory=list)

    @property
    def is_admin(self) -> bool:
        return self.kind == Role.ADMIN or "admin" in self.roles

    @property
    def author_name(self) -> str:
        """Name snapshotted onto messages this principal writes."""
        return self.display_name or DEFAULT_ADMIN_NAME
