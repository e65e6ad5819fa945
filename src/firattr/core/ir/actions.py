"""
Action attribute types for firattr IR.

ActionInfo is what the key parser extracts from one ``x-fir-*`` attribute.
CollectedAction pairs it with the handler resolved for it; instances live
only while one element is being compiled.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from firattr.core.actions.handlers import ActionHandler


class ActionInfo(BaseModel):
    """
    Parsed data from an ``x-fir-*`` attribute.

    Examples:
        - x-fir-append:todo="create" → action_name="append", params=["todo"]
        - x-fir-toggleClass:[a,b]="submit" → action_name="toggleClass", params=["a", "b"]
    """

    attr_name: str = Field(description="Original attribute key")
    action_name: str = Field(description="Parsed action name")
    params: list[str] = Field(default_factory=list, description="Key parameters")
    value: str = Field(default="", description="Raw attribute value")

    model_config = ConfigDict(frozen=True)


@dataclass(frozen=True)
class CollectedAction:
    """A handler resolved for one attribute of the element being compiled."""

    handler: ActionHandler
    info: ActionInfo

    @property
    def name(self) -> str:
        return self.handler.name

    @property
    def precedence(self) -> int:
        return self.handler.precedence

    def __str__(self) -> str:
        return f'{self.info.attr_name}="{self.info.value}"'
