from pydantic import BaseModel, ConfigDict, Field


class Owner(BaseModel):
    model_config = ConfigDict(frozen=True)

    login: str


class Repository(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    description: str | None = None
    stargazers_count: int = Field(ge=0)
    forks_count: int = Field(ge=0)
    owner: Owner
    html_url: str

    @property
    def full_name(self) -> str:
        return f"{self.owner.login}/{self.name}"
