"""User view schema shared by every hydrated payload."""

from pydantic import BaseModel, ConfigDict


class UserView(BaseModel):
    """Public view of a user: never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    role: str
