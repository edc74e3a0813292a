"""Binary Authorization attestor models."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserOwnedDrydockNote(BaseModel):
    """Note bound to an attestor."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    note_reference: str = Field(
        default="",
        alias="noteReference",
        description="Note resource path (projects/<p>/notes/<n>)",
    )


class Attestor(BaseModel):
    """Attestor document as returned by the directory."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(..., description="projects/<p>/attestors/<a>")
    description: str = Field(default="", description="Human readable description")
    user_owned_drydock_note: Optional[UserOwnedDrydockNote] = Field(
        default=None, alias="userOwnedDrydockNote"
    )

    @property
    def note_id(self) -> str:
        """Return the bound note reference, or an empty string when unbound."""
        if self.user_owned_drydock_note is None:
            return ""
        return self.user_owned_drydock_note.note_reference
