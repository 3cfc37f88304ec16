"""
jobly.api.schemas

Request/response models.

Request bodies are validated with camelCase keys and reject unknown fields;
update bodies dump back to camelCase so they can feed the partial-update
builder directly. Response models read ORM attributes and serialize camelCase.
"""

from __future__ import annotations

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ApiInput(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, extra="forbid")

    def field_map(self) -> dict[str, object]:
        return self.model_dump(by_alias=True, exclude_unset=True)


def _reject_null(value):
    # Validators only see explicitly supplied values; omitted fields keep their default.
    if value is None:
        raise ValueError("may not be null")
    return value


class ApiOutput(BaseModel):
    model_config = ConfigDict(
        alias_generator=AliasGenerator(serialization_alias=to_camel),
        from_attributes=True,
    )


# --- auth / users -----------------------------------------------------------


class TokenRequest(ApiInput):
    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=1)


class TokenResponse(BaseModel):
    token: str


class UserRegister(ApiInput):
    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=5, max_length=64)
    first_name: str = Field(min_length=1, max_length=30)
    last_name: str = Field(min_length=1, max_length=30)
    email: str = Field(min_length=6, max_length=60, pattern=r"^[^@\s]+@[^@\s]+$")


class UserUpdate(ApiInput):
    password: str | None = Field(default=None, min_length=5, max_length=64)
    first_name: str | None = Field(default=None, min_length=1, max_length=30)
    last_name: str | None = Field(default=None, min_length=1, max_length=30)
    email: str | None = Field(default=None, min_length=6, max_length=60, pattern=r"^[^@\s]+@[^@\s]+$")

    @field_validator("password", "first_name", "last_name", "email")
    @classmethod
    def reject_null(cls, value):
        return _reject_null(value)


class UserOut(ApiOutput):
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool


class UserDetail(UserOut):
    jobs: list[int] = Field(default_factory=list)


class UserEnvelope(BaseModel):
    user: UserOut


class UserDetailEnvelope(BaseModel):
    user: UserDetail


class UsersEnvelope(BaseModel):
    users: list[UserOut]


# --- jobs -------------------------------------------------------------------


class JobCreate(ApiInput):
    title: str = Field(min_length=1)
    salary: int | None = Field(default=None, ge=0)
    equity: float | None = Field(default=None, ge=0, le=1)
    company_handle: str = Field(min_length=1, max_length=25)


class JobUpdate(ApiInput):
    title: str | None = Field(default=None, min_length=1)
    salary: int | None = Field(default=None, ge=0)
    equity: float | None = Field(default=None, ge=0, le=1)

    @field_validator("title")
    @classmethod
    def reject_null(cls, value):
        return _reject_null(value)


class JobOut(ApiOutput):
    id: int
    title: str
    salary: int | None
    equity: float | None
    company_handle: str


class JobEnvelope(BaseModel):
    job: JobOut


class JobsEnvelope(BaseModel):
    jobs: list[JobOut]


# --- companies --------------------------------------------------------------


class CompanyCreate(ApiInput):
    handle: str = Field(min_length=1, max_length=25)
    name: str = Field(min_length=1)
    description: str = ""
    num_employees: int | None = Field(default=None, ge=0)
    logo_url: str | None = None


class CompanyUpdate(ApiInput):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    num_employees: int | None = Field(default=None, ge=0)
    logo_url: str | None = None

    @field_validator("name", "description")
    @classmethod
    def reject_null(cls, value):
        return _reject_null(value)


class CompanyOut(ApiOutput):
    handle: str
    name: str
    description: str
    num_employees: int | None
    logo_url: str | None


class CompanyDetail(CompanyOut):
    jobs: list[JobOut] = Field(default_factory=list)


class CompanyEnvelope(BaseModel):
    company: CompanyOut


class CompanyDetailEnvelope(BaseModel):
    company: CompanyDetail


class CompaniesEnvelope(BaseModel):
    companies: list[CompanyOut]
