"""
Unit tests for MapperValidationClient.

The httpx.AsyncClient is patched, so no network access is needed.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from infrastructure import (
    MapperValidationClient,
    ValidationServiceError,
    ValidationServiceUnavailable,
)


def _mock_async_client(mock_client_class, post):
    mock_client = MagicMock()
    mock_client_class.return_value.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client_class.return_value.__aexit__ = AsyncMock(return_value=False)
    mock_client.post = post
    return mock_client


def _response(status_code=200, body=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.json.return_value = body
    return response


@patch("infrastructure.validation_client.httpx.AsyncClient")
class TestMapperValidationClient:
    """Tests for POST /workflow/validate."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_parses_response(self, mock_client_class, identified_workout, validation_payload):
        mock_client = _mock_async_client(
            mock_client_class, AsyncMock(return_value=_response(body=validation_payload))
        )
        client = MapperValidationClient(base_url="http://mapper:8001/", timeout=5.0)

        response = await client.validate_workout(identified_workout)

        assert [r.original_name for r in response.needs_review] == ["Squat"]
        mock_client_class.assert_called_once_with(timeout=5.0)
        url = mock_client.post.call_args.args[0]
        payload = mock_client.post.call_args.kwargs["json"]
        assert url == "http://mapper:8001/workflow/validate"
        assert payload["blocks_json"]["title"] == "Upper Body"
        assert payload["blocks_json"]["blocks"][1]["supersets"][0]["position"] == 1

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_error_status_raises(self, mock_client_class, identified_workout):
        _mock_async_client(
            mock_client_class, AsyncMock(return_value=_response(status_code=500, text="boom"))
        )
        client = MapperValidationClient(base_url="http://mapper:8001")

        with pytest.raises(ValidationServiceError) as exc_info:
            await client.validate_workout(identified_workout)
        assert exc_info.value.status_code == 500

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_invalid_body_raises(self, mock_client_class, identified_workout):
        _mock_async_client(
            mock_client_class,
            AsyncMock(return_value=_response(body={"validated_exercises": "nope"})),
        )
        client = MapperValidationClient(base_url="http://mapper:8001")

        with pytest.raises(ValidationServiceError) as exc_info:
            await client.validate_workout(identified_workout)
        assert exc_info.value.status_code == 502

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_connect_error_unavailable(self, mock_client_class, identified_workout):
        _mock_async_client(
            mock_client_class, AsyncMock(side_effect=httpx.ConnectError("refused"))
        )
        client = MapperValidationClient(base_url="http://mapper:8001")

        with pytest.raises(ValidationServiceUnavailable):
            await client.validate_workout(identified_workout)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_timeout_unavailable(self, mock_client_class, identified_workout):
        _mock_async_client(
            mock_client_class, AsyncMock(side_effect=httpx.ReadTimeout("slow"))
        )
        client = MapperValidationClient(base_url="http://mapper:8001")

        with pytest.raises(ValidationServiceUnavailable):
            await client.validate_workout(identified_workout)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_protocol_error_unavailable(self, mock_client_class, identified_workout):
        _mock_async_client(
            mock_client_class,
            AsyncMock(side_effect=httpx.RemoteProtocolError("connection dropped")),
        )
        client = MapperValidationClient(base_url="http://mapper:8001")

        with pytest.raises(ValidationServiceUnavailable):
            await client.validate_workout(identified_workout)
