"""Tests for the image classification service."""

import asyncio
import base64

import pytest

from baggage_check.domain.catalog import list_categories
from baggage_check.domain.errors import ClassificationUnavailable
from baggage_check.services.classification import (
    build_instructions,
    to_image_data_url,
)
from tests.conftest import (
    BlockingClassifierClient,
    FailingClassifierClient,
    FakeClassifierClient,
    make_classification_service,
)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 8


def test_classify_returns_normalized_analysis() -> None:
    client = FakeClassifierClient()
    service = make_classification_service(client)

    analysis = asyncio.run(service.classify(PNG_BYTES, "de"))

    assert analysis.identified is True
    assert analysis.category_id == "knife"
    assert client.calls[0]["model"] == "gpt-5.2"
    encoded = base64.b64encode(PNG_BYTES).decode("utf-8")
    assert client.calls[0]["image_data_url"] == f"data:image/png;base64,{encoded}"


def test_classify_malformed_response_is_not_an_error() -> None:
    service = make_classification_service(FakeClassifierClient(response="oops"))

    analysis = asyncio.run(service.classify("ZmFrZQ==", "en"))

    assert analysis.identified is False
    assert analysis.summary


def test_classify_wraps_client_failures() -> None:
    service = make_classification_service(FailingClassifierClient())

    with pytest.raises(ClassificationUnavailable):
        asyncio.run(service.classify("ZmFrZQ==", "de"))


def test_classify_times_out() -> None:
    service = make_classification_service(
        BlockingClassifierClient(), timeout_seconds=0.01
    )

    with pytest.raises(ClassificationUnavailable):
        asyncio.run(service.classify("ZmFrZQ==", "de"))


def test_classify_rejects_empty_image() -> None:
    service = make_classification_service()

    with pytest.raises(ValueError):
        asyncio.run(service.classify("   ", "de"))


def test_to_image_data_url_variants() -> None:
    assert to_image_data_url("ZmFrZQ==") == "data:image/jpeg;base64,ZmFrZQ=="
    assert (
        to_image_data_url(" data:image/png;base64,ZmFrZQ== ")
        == "data:image/png;base64,ZmFrZQ=="
    )
    assert to_image_data_url(b"\xff\xd8\xff\xe0").startswith("data:image/jpeg;base64,")
    with pytest.raises(ValueError):
        to_image_data_url(b"")


def test_instructions_list_every_category() -> None:
    instructions = build_instructions("en")

    for category in list_categories():
        assert f'ID: "{category.id}"' in instructions
    assert "in ENGLISH" in instructions
    assert "in GERMAN" in build_instructions("de")
