"""Shared path parameter types."""

from typing import Annotated

from fastapi import Path

from src.constants import MAX_ROW_ID

# Ids outside the column range are rejected as validation errors (400)
# before they reach the database driver.
ChannelId = Annotated[int, Path(ge=1, le=MAX_ROW_ID)]
CommentId = Annotated[int, Path(ge=1, le=MAX_ROW_ID)]
UserId = Annotated[int, Path(ge=1, le=MAX_ROW_ID)]
VideoId = Annotated[int, Path(ge=1, le=MAX_ROW_ID)]
