"""
Request bodies for the JSON API.

Fields are optional on purpose: presence is checked by the services so a
missing field answers 400 {"error": ...} like every other validation failure.
"""
from typing import Any, Optional, Union

from pydantic import BaseModel, Field


class Credentials(BaseModel):
    login: Optional[str] = None
    password: Optional[str] = None


class AvatarUpdate(BaseModel):
    login: Optional[str] = None
    avatar: Any = Field(None, description="Image URL; non-string values clear the avatar")


class PostCreate(BaseModel):
    author: Optional[str] = None
    text: Optional[str] = None


class FriendAdd(BaseModel):
    user: Optional[str] = None
    friend: Optional[str] = None


class MessageSend(BaseModel):
    sender: Optional[str] = Field(None, alias="from")
    to: Optional[str] = None
    text: Optional[str] = None


class CommentAdd(BaseModel):
    postId: Optional[Union[int, str]] = None
    authorLogin: Optional[str] = None
    text: Optional[str] = None
