from typing import Annotated, Literal, Union, assert_never

from pydantic import BaseModel, ConfigDict, Field


class UserProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    email: str


class Admin(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["admin"] = "admin"
    profile: UserProfile


class Registered(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["registered"] = "registered"
    profile: UserProfile


class Unregistered(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["unregistered"] = "unregistered"


User = Annotated[Union[Admin, Registered, Unregistered], Field(discriminator="kind")]


def describe_user(user: User) -> str:
    match user:
        case Admin(profile=profile):
            return f"admin {profile.name} <{profile.email}>"
        case Registered(profile=profile):
            return f"registered {profile.name} <{profile.email}>"
        case Unregistered():
            return "unregistered"
        case _:
            assert_never(user)
