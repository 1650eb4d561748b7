import uuid

import pytest


@pytest.mark.asyncio
class TestUserPromptRepository:

    async def test_is_owner_for_exact_pair_only(self, user_prompt_repository, create_prompt, user_id):
        """
        Behavior:
                - user_id owns prompt A; prompt B belongs to someone else.
                - is_owner is True only for (A, user_id).
        """
        mine = await create_prompt(owner=user_id)
        theirs = await create_prompt(owner=uuid.uuid4())

        assert await user_prompt_repository.is_owner(mine.id, user_id) is True
        assert await user_prompt_repository.is_owner(theirs.id, user_id) is False
        assert await user_prompt_repository.is_owner(mine.id, uuid.uuid4()) is False
        assert await user_prompt_repository.is_owner(uuid.uuid4(), user_id) is False

    async def test_shared_prompt_has_several_owners(self, user_prompt_repository, create_prompt, user_id):
        prompt = await create_prompt(owner=user_id)
        other = uuid.uuid4()

        await user_prompt_repository.link(user_id=other, prompt_id=prompt.id)

        assert await user_prompt_repository.is_owner(prompt.id, user_id) is True
        assert await user_prompt_repository.is_owner(prompt.id, other) is True
        assert await user_prompt_repository.count(prompt_id=prompt.id) == 2
