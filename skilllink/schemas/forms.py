"""Form input schemas (what the mobile screens submit).

Fields are lenient here (strings trimmed, missing values empty); the use
cases apply the business rules and raise ValidationException with the
offending field, so the UI can show one alert per problem.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Form(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")


class ProfileRegistration(_Form):
    """Registration details stored in the user's profile document."""

    name: str = ""
    email: str = ""
    role: str = "student"
    subject: str | None = Field(default=None, max_length=100)

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("role")
    @classmethod
    def _lower_role(cls, v: str) -> str:
        return v.lower()


class EventCreateForm(_Form):
    """Mentor's new-event form. Capacity arrives as typed text."""

    title: str = Field(default="", max_length=200)
    date: str = ""
    time: str = ""
    category: str = ""
    meeting_link: str = ""
    capacity: str = ""
    description: str = Field(default="", max_length=2000)

    @field_validator("capacity", mode="before")
    @classmethod
    def _capacity_text(cls, v: object) -> str:
        return "" if v is None else str(v)


class ReflectionForm(_Form):
    """Feedback reflection form. Topics are comma-separated."""

    session_date: str = ""
    topics: str = ""
    reflection: str = Field(default="", max_length=5000)
    rating: int = 0
