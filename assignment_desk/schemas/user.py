from pydantic import BaseModel


class ActingUser(BaseModel):
    """Identity supplied by the upstream identity provider."""

    id: str | None = None
    role: str | None = None
