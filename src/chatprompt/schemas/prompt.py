"""
Read/write views of prompts and their messages returned by PromptService.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict


class PromptData(BaseModel):
    prompt_id: UUID


class PromptCreated(BaseModel):
    status: int = 200
    prompt_data: PromptData


class PromptSummary(BaseModel):
    """Listing row: enough to render a conversation picker."""

    id: UUID
    name: str


class MessageView(BaseModel):
    """A message as listed for a prompt; `id` is the Message id."""

    content: str
    id: UUID


class PromptCostView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    prompt_id: UUID
    total_input_cost: int
    total_output_cost: int
