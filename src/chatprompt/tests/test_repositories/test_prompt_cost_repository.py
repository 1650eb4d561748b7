import uuid

import pytest

from chatprompt.exceptions.base import DuplicateError, MissingCostRecordError, RepositoryError


@pytest.mark.asyncio
class TestPromptCostRepository:

    async def test_create_for_prompt_starts_at_zero(self, prompt_cost_repository, create_prompt):
        prompt = await create_prompt(with_cost=False)

        record = await prompt_cost_repository.create_for_prompt(prompt.id)

        assert record.prompt_id == prompt.id
        assert record.total_input_cost == 0
        assert record.total_output_cost == 0

    async def test_second_cost_record_is_a_duplicate(self, prompt_cost_repository, created_prompt):
        """
        Behavior:
                - created_prompt already has a cost record; creating another fails.

        Importance:
                - One PromptCost per Prompt is enforced, not assumed.
        """
        with pytest.raises(DuplicateError) as exc_info:
            await prompt_cost_repository.create_for_prompt(created_prompt.id)

        assert exc_info.value.fields == ["prompt_id"]
        assert exc_info.value.http_status() == 409

    async def test_increment_accumulates(self, prompt_cost_repository, created_prompt):
        await prompt_cost_repository.increment(created_prompt.id, 10, 20)
        record = await prompt_cost_repository.increment(created_prompt.id, 5, 1)

        assert record.total_input_cost == 15
        assert record.total_output_cost == 21

        reloaded = await prompt_cost_repository.get_by_prompt(created_prompt.id)
        assert (reloaded.total_input_cost, reloaded.total_output_cost) == (15, 21)

    async def test_increment_by_zero_is_allowed(self, prompt_cost_repository, created_prompt):
        record = await prompt_cost_repository.increment(created_prompt.id, 0, 0)

        assert (record.total_input_cost, record.total_output_cost) == (0, 0)

    async def test_increment_without_record_raises(self, prompt_cost_repository, create_prompt):
        prompt = await create_prompt(with_cost=False)

        with pytest.raises(MissingCostRecordError) as exc_info:
            await prompt_cost_repository.increment(prompt.id, 1, 1)

        assert exc_info.value.prompt_id == prompt.id
        assert exc_info.value.http_status() == 500

    async def test_increment_rejects_negative_counts(self, prompt_cost_repository, created_prompt):
        with pytest.raises(RepositoryError):
            await prompt_cost_repository.increment(created_prompt.id, -1, 0)

    async def test_get_by_prompt_unknown(self, prompt_cost_repository):
        assert await prompt_cost_repository.get_by_prompt(uuid.uuid4()) is None
