import uuid

from chatprompt.exceptions import (
    DuplicateError,
    InvalidFieldError,
    MissingCostRecordError,
    NotFoundError,
    ProviderError,
    RepositoryError,
    UnknownProviderError,
)


def test_repository_error_payload_leaves_out_constraint():
    err = DuplicateError("PromptCost already exists", fields=["prompt_id"], constraint="uq_prompt_costs_prompt_id")

    assert err.to_payload() == {
        "detail": "PromptCost already exists",
        "code": "duplicate",
        "fields": ["prompt_id"],
    }
    assert "constraint: uq_prompt_costs_prompt_id" in str(err)


def test_status_codes():
    prompt_id = uuid.uuid4()

    assert RepositoryError("boom").http_status() == 400
    assert NotFoundError().http_status() == 404
    assert DuplicateError("dup").http_status() == 409
    assert InvalidFieldError("bad").http_status() == 422
    assert MissingCostRecordError(prompt_id).http_status() == 500
    assert ProviderError("down").http_status() == 502
    assert UnknownProviderError("x").http_status() == 400


def test_missing_cost_record_names_the_prompt():
    prompt_id = uuid.uuid4()
    err = MissingCostRecordError(prompt_id)

    assert str(prompt_id) in err.message
    assert err.to_payload()["code"] == "missing_cost_record"


def test_provider_error_str_and_payload():
    err = ProviderError("openAI API error: 503", provider="openAI", status_code=503)

    assert str(err) == "openAI API error: 503 (provider: openAI; status: 503)"
    assert err.to_payload() == {"detail": "openAI API error: 503", "code": "provider_error", "provider": "openAI"}


def test_unknown_provider_is_a_provider_error():
    err = UnknownProviderError("mistral", available=["openAI", "anthropic"])

    assert isinstance(err, ProviderError)
    assert err.message == "Unknown AI provider 'mistral'; available: anthropic, openAI"
